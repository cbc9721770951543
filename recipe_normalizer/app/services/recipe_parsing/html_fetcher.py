"""HTML fetching for the URL pipeline."""

import ipaddress
import logging
from typing import Dict
from urllib.parse import urlparse

import httpx

from recipe_normalizer.app.core.config import Settings, get_settings
from recipe_normalizer.app.services.recipe_parsing.errors import (
    FetchError,
    FetchTimeoutError,
    InvalidInputError,
)

logger = logging.getLogger(__name__)


def is_private_host(host: str) -> bool:
    """Check if a host is private/localhost."""
    hostname = host.strip("[]")
    if hostname.count(":") == 1:
        hostname = hostname.split(":")[0]
    try:
        ip = ipaddress.ip_address(hostname)
        return ip.is_private or ip.is_loopback
    except ValueError:
        return hostname.lower() in {"localhost"}


def build_headers(settings: Settings) -> Dict[str, str]:
    headers = {
        "User-Agent": settings.scraper_user_agent,
        "Accept": settings.scraper_accept,
        "Accept-Language": settings.scraper_accept_language,
    }
    if settings.scraper_cookies:
        headers["Cookie"] = settings.scraper_cookies
    return headers


async def fetch_html(url: str) -> str:
    """Fetch a page body, following redirects up to the configured hop limit."""
    parsed_url = urlparse(url)
    if parsed_url.scheme not in {"http", "https"} or not parsed_url.netloc:
        raise InvalidInputError(f"Invalid URL: {url}")

    settings = get_settings()
    if settings.block_private_hosts and is_private_host(parsed_url.hostname or ""):
        raise InvalidInputError("URL points to a private or disallowed host")

    async def guard_host(request: httpx.Request) -> None:
        if settings.block_private_hosts and is_private_host(request.url.host):
            logger.warning("Refusing request to private host %s", request.url.host)
            raise InvalidInputError("URL points to a private or disallowed host")

    timeout = httpx.Timeout(
        settings.fetch_timeout_seconds, connect=settings.fetch_connect_timeout_seconds
    )
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            max_redirects=settings.fetch_max_redirects,
            headers=build_headers(settings),
            event_hooks={"request": [guard_host]},
        ) as client:
            response = await client.get(url)
    except httpx.TimeoutException as exc:
        logger.warning("Timed out fetching %s: %s", url, exc)
        raise FetchTimeoutError(f"Request timed out fetching {url}", url) from exc
    except httpx.TooManyRedirects as exc:
        logger.warning("Too many redirects fetching %s", url)
        raise FetchError(
            f"Exceeded {settings.fetch_max_redirects} redirects fetching {url}", url
        ) from exc
    except httpx.HTTPError as exc:
        logger.warning("Network error fetching %s: %s", url, exc)
        raise FetchError(f"Network error fetching {url}: {exc}", url) from exc

    if response.history:
        logger.info("Followed %d redirect(s) from %s to %s", len(response.history), url, response.url)

    if not response.is_success:
        logger.warning("Fetching %s returned status %s", url, response.status_code)
        raise FetchError(
            f"HTTP {response.status_code} fetching {url}", url, status_code=response.status_code
        )

    return response.text
