"""Schema.org JSON-LD recipe extraction."""

import json
import logging
import re
from typing import Any, Iterator, List, Optional

from bs4 import BeautifulSoup

from recipe_normalizer.app.services.recipe_parsing.models import NormalizedRecipe, RawIngredient
from recipe_normalizer.app.services.recipe_parsing.parsing_utils import (
    as_list,
    clean_optional,
    clean_text,
    extract_domain,
    format_iso8601_duration,
    parse_yield,
)

logger = logging.getLogger(__name__)

_JSON_LD_TYPE = re.compile(r"^\s*application/ld\+json\s*$", re.I)


def is_recipe_typed(obj: Any) -> bool:
    """True when @type is "Recipe" or a list containing "Recipe"."""
    if not isinstance(obj, dict):
        return False
    obj_type = obj.get("@type")
    if isinstance(obj_type, list):
        return "Recipe" in obj_type
    return obj_type == "Recipe"


def find_recipe_node(data: Any) -> Optional[dict]:
    """Locate a Recipe-typed object in a parsed JSON-LD document.

    Checked in order: an ``@graph`` container, a top-level array, then the
    document itself.
    """
    if isinstance(data, dict) and isinstance(data.get("@graph"), list):
        for item in data["@graph"]:
            if is_recipe_typed(item):
                return item
    if isinstance(data, list):
        for item in data:
            if is_recipe_typed(item):
                return item
    if is_recipe_typed(data):
        return data
    return None


def iter_json_ld_blocks(html: str) -> Iterator[Any]:
    """Yield each JSON-LD block that parses; malformed blocks are skipped."""
    soup = BeautifulSoup(html, "lxml")
    scripts = soup.find_all("script", attrs={"type": _JSON_LD_TYPE})
    logger.info("Found %d JSON-LD script blocks", len(scripts))

    for idx, script in enumerate(scripts):
        raw_json = (script.string or script.get_text() or "").strip()
        if not raw_json:
            logger.debug("JSON-LD block %d is empty", idx)
            continue
        try:
            yield json.loads(raw_json)
        except (json.JSONDecodeError, RecursionError) as exc:
            logger.warning(
                "JSON-LD block %d failed to parse: %s (first 200 chars: %s)",
                idx,
                exc,
                raw_json[:200],
            )


def _step_text(item: Any) -> Optional[str]:
    if isinstance(item, str):
        return item
    if isinstance(item, dict) and item.get("text"):
        return item["text"]
    return None


def extract_instruction_steps(instructions: Any) -> List[str]:
    """Flatten recipeInstructions into an ordered list of cleaned steps.

    Accepts a newline-separated string, a list of strings, a list of HowToStep
    objects, or HowToSection objects whose ``itemListElement`` holds either.
    """
    if not instructions:
        return []
    if isinstance(instructions, str):
        return [step for step in (clean_text(s) for s in re.split(r"\n+", instructions)) if step]

    raw_steps: List[str] = []
    for item in as_list(instructions):
        text = _step_text(item)
        if text is not None:
            raw_steps.append(text)
        elif isinstance(item, dict) and isinstance(item.get("itemListElement"), list):
            for sub in item["itemListElement"]:
                sub_text = _step_text(sub)
                if sub_text is not None:
                    raw_steps.append(sub_text)
    return [step for step in (clean_text(s) for s in raw_steps) if step]


def extract_raw_ingredients(recipe_ingredient: Any) -> List[RawIngredient]:
    ingredients = []
    for entry in as_list(recipe_ingredient):
        text = clean_text(entry)
        if text:
            ingredients.append(RawIngredient(raw_ingredient=text))
    return ingredients


def map_schema_recipe(node: dict, url: Optional[str]) -> Optional[NormalizedRecipe]:
    """Map a schema.org Recipe object onto the canonical record.

    Returns None when the recipe has no usable name.
    """
    name = clean_text(node.get("name"))
    if not name:
        return None

    return NormalizedRecipe(
        name=name,
        ingredients=extract_raw_ingredients(node.get("recipeIngredient")),
        preparation_steps=extract_instruction_steps(node.get("recipeInstructions")),
        note=clean_optional(node.get("description")),
        source_name=extract_domain(url),
        source_url=url,
        prep_time=format_iso8601_duration(node.get("prepTime")),
        cook_time=format_iso8601_duration(node.get("cookTime")),
        servings=parse_yield(node.get("recipeYield")),
    )


def extract_recipe_from_schema_org(html: str, url: Optional[str]) -> Optional[NormalizedRecipe]:
    """Extract recipe from schema.org JSON-LD data embedded in HTML."""
    for idx, data in enumerate(iter_json_ld_blocks(html)):
        node = find_recipe_node(data)
        if node is None:
            logger.debug("Parsed JSON-LD block %d holds no Recipe", idx)
            continue
        parsed = map_schema_recipe(node, url)
        if parsed is None:
            logger.warning("Recipe in parsed JSON-LD block %d is missing a name", idx)
            continue
        logger.info(
            "Schema.org recipe: title=%s, ingredients=%d, steps=%d",
            parsed.name[:50],
            len(parsed.ingredients),
            len(parsed.preparation_steps),
        )
        return parsed
    return None
