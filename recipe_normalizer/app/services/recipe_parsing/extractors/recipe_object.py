"""Normalization of loosely-shaped recipe objects supplied by callers."""

import logging
from typing import Any, List, Mapping, Optional, Sequence

from pydantic import BaseModel

from recipe_normalizer.app.core.config import get_settings
from recipe_normalizer.app.services.recipe_parsing.errors import InvalidInputError
from recipe_normalizer.app.services.recipe_parsing.models import NormalizedRecipe, RawIngredient
from recipe_normalizer.app.services.recipe_parsing.parsing_utils import clean_optional, clean_text

logger = logging.getLogger(__name__)

# Alternate field names, highest priority first.
STEP_FIELDS = ("preparationSteps", "steps", "instructions")
NOTE_FIELDS = ("note", "description")
SOURCE_NAME_FIELDS = ("sourceName", "source")
SOURCE_URL_FIELDS = ("sourceUrl", "url")
PREP_TIME_FIELDS = ("prepTime",)
COOK_TIME_FIELDS = ("cookTime",)
SERVINGS_FIELDS = ("servings",)
INGREDIENT_PART_FIELDS = ("quantity", "name", "note")


def first_present(recipe: Mapping[str, Any], fields: Sequence[str]) -> Any:
    """Value of the first field that is present and not blank."""
    for field in fields:
        value = recipe.get(field)
        if value is not None and value != "":
            return value
    return None


def _ingredient_line(entry: Any) -> str:
    if isinstance(entry, str):
        return clean_text(entry)
    if isinstance(entry, Mapping):
        if entry.get("rawIngredient"):
            return clean_text(entry["rawIngredient"])
        parts = [str(entry[key]) for key in INGREDIENT_PART_FIELDS if entry.get(key)]
        return clean_text(" ".join(parts))
    return clean_text(entry)


def normalize_ingredients(entries: Any) -> List[RawIngredient]:
    if not isinstance(entries, (list, tuple)):
        return []
    lines = (_ingredient_line(entry) for entry in entries)
    return [RawIngredient(raw_ingredient=line) for line in lines if line]


def normalize_steps(entries: Any) -> List[str]:
    if not isinstance(entries, (list, tuple)):
        return []
    return [step for step in (clean_text(entry) for entry in entries) if step]


def _scalar(recipe: Mapping[str, Any], fields: Sequence[str]) -> Optional[str]:
    return clean_optional(first_present(recipe, fields))


def normalize_recipe_object(recipe: Any) -> NormalizedRecipe:
    """Coerce a recipe-like mapping (or pydantic model) into the canonical record."""
    if isinstance(recipe, BaseModel):
        recipe = recipe.model_dump(by_alias=True)
    if not isinstance(recipe, Mapping):
        raise InvalidInputError(
            f"Recipe object must be a mapping, got {type(recipe).__name__}"
        )

    steps = normalize_steps(first_present(recipe, STEP_FIELDS))
    ingredients = normalize_ingredients(recipe.get("ingredients"))
    logger.info("Normalized recipe object: ingredients=%d, steps=%d", len(ingredients), len(steps))

    return NormalizedRecipe(
        name=clean_text(recipe.get("name")) or get_settings().placeholder_name,
        ingredients=ingredients,
        preparation_steps=steps,
        note=_scalar(recipe, NOTE_FIELDS),
        source_name=_scalar(recipe, SOURCE_NAME_FIELDS),
        source_url=_scalar(recipe, SOURCE_URL_FIELDS),
        prep_time=_scalar(recipe, PREP_TIME_FIELDS),
        cook_time=_scalar(recipe, COOK_TIME_FIELDS),
        servings=_scalar(recipe, SERVINGS_FIELDS),
    )
