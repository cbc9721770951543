"""Entry point that routes a recipe source to exactly one extraction pipeline."""

import logging
from typing import Any, Mapping, Union

from pydantic import ValidationError

from recipe_normalizer.app.services.recipe_parsing.errors import (
    ExtractionError,
    InvalidInputError,
)
from recipe_normalizer.app.services.recipe_parsing.extractors import (
    extract_recipe_from_schema_org,
    extract_recipe_heuristic,
    normalize_recipe_object,
    parse_recipe_text,
)
from recipe_normalizer.app.services.recipe_parsing.html_fetcher import fetch_html
from recipe_normalizer.app.services.recipe_parsing.models import NormalizedRecipe, RecipeSource

logger = logging.getLogger(__name__)


async def normalize_from_url(url: str) -> NormalizedRecipe:
    html = await fetch_html(url)

    parsed = extract_recipe_from_schema_org(html, url)
    if parsed:
        logger.info("Parsed %s via schema_org_json_ld", url)
        return parsed

    parsed, title_found = extract_recipe_heuristic(html, url)
    if title_found and (parsed.ingredients or parsed.preparation_steps):
        logger.info("Parsed %s via heuristic", url)
        return parsed

    logger.warning("No recipe found at %s", url)
    raise ExtractionError(
        f"Could not extract recipe from {url}. "
        "No structured data or recognizable recipe pattern found."
    )


def _coerce_source(source: Union[RecipeSource, Mapping[str, Any], None]) -> RecipeSource:
    if isinstance(source, RecipeSource):
        return source
    if isinstance(source, Mapping):
        try:
            return RecipeSource.model_validate(dict(source))
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid recipe input: {exc}") from exc
    raise InvalidInputError("normalize_recipe requires at least one of: url, text, recipe")


async def normalize_recipe(source: Union[RecipeSource, Mapping[str, Any], None]) -> NormalizedRecipe:
    """Normalize a recipe from a URL, freeform text or a recipe-like object.

    Exactly one pipeline runs; when several inputs are given the priority is
    url, then text, then object.
    """
    request = _coerce_source(source)
    if request.url:
        return await normalize_from_url(request.url)
    if request.text:
        return parse_recipe_text(request.text)
    if request.object is not None:
        return normalize_recipe_object(request.object)
    raise InvalidInputError("normalize_recipe requires at least one of: url, text, recipe")
