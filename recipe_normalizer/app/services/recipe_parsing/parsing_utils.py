"""Text cleaning and field coercion helpers shared by every pipeline."""

import html
import re
from typing import Any, List, Optional
from urllib.parse import urlparse

_TAG_RE = re.compile(r"<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")
_ENTITY_RE = re.compile(r"&(#\d+|#[xX][0-9a-fA-F]+|[A-Za-z][A-Za-z0-9]*);")
_ISO_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?", re.I)


def strip_html(markup: str) -> str:
    """Replace tags with spaces and collapse whitespace."""
    return _WHITESPACE_RE.sub(" ", _TAG_RE.sub(" ", markup or ""))


def clean_text(text: Any) -> str:
    """Decode HTML entities, drop leftover tags and normalize whitespace."""
    if text is None:
        return ""
    if not isinstance(text, str):
        text = str(text)
    decoded = _ENTITY_RE.sub(lambda m: html.unescape(m.group(0)), text)
    decoded = _TAG_RE.sub("", decoded).replace("\xa0", " ")
    return _WHITESPACE_RE.sub(" ", decoded).strip()


def clean_optional(value: Any) -> Optional[str]:
    """Clean a scalar value, returning None when nothing is left."""
    return clean_text(value) or None


def as_list(value: Any) -> List[Any]:
    """Coerce a scalar into a one-element list; None becomes empty."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def format_iso8601_duration(duration: Any) -> Optional[str]:
    """Format an ISO-8601 duration such as PT1H30M as "90 min"."""
    if not duration or not isinstance(duration, str):
        return None
    match = _ISO_DURATION_RE.search(duration)
    if not match:
        return None
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    total = hours * 60 + minutes
    return f"{total} min" if total > 0 else None


def parse_yield(value: Any) -> Optional[str]:
    """Use the first entry of a list-valued recipeYield."""
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or value == "":
        return None
    return clean_optional(value)


def extract_domain(url: Optional[str]) -> Optional[str]:
    """Return the URL hostname without a leading "www."."""
    if not url:
        return None
    hostname = urlparse(url).hostname
    if not hostname:
        return None
    return re.sub(r"^www\.", "", hostname)
