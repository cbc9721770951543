"""Freeform recipe text segmentation."""

import logging
import re
from typing import List, Optional

from recipe_normalizer.app.core.config import get_settings
from recipe_normalizer.app.services.recipe_parsing.errors import EmptyInputError
from recipe_normalizer.app.services.recipe_parsing.models import NormalizedRecipe, RawIngredient
from recipe_normalizer.app.services.recipe_parsing.parsing_utils import clean_text

logger = logging.getLogger(__name__)

INGREDIENT_HEADER_RE = re.compile(r"^(ingredients|ingredient list)\s*:?\s*$", re.I)
STEP_HEADER_RE = re.compile(r"^(instructions|directions|steps|method|preparation)\s*:?\s*$", re.I)
NUMBERED_LINE_RE = re.compile(r"^\d+[.)]\s")
BULLET_PREFIX_RE = re.compile(r"^[-•*]\s*")
NUMBER_PREFIX_RE = re.compile(r"^\d+[.)]\s*")

INGREDIENT_MIN_LENGTH = 1
STEP_MIN_LENGTH = 5


def _first_index(lines: List[str], pattern: re.Pattern) -> Optional[int]:
    return next((idx for idx, line in enumerate(lines) if pattern.match(line)), None)


def _section(lines: List[str], start: int, other: Optional[int]) -> List[str]:
    """Lines after the header at ``start`` up to the other header or the end."""
    end = other if other is not None and other > start else len(lines)
    return lines[start + 1 : end]


def parse_recipe_text(text: str) -> NormalizedRecipe:
    """Split freeform text into name, ingredients and steps.

    Section headers ("Ingredients", "Instructions", ...) win when present;
    otherwise the first line is the name and the first numbered line starts
    the steps.
    """
    lines = [line.strip() for line in (text or "").splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        raise EmptyInputError("Empty recipe text provided")

    name = get_settings().placeholder_name
    ingredient_lines: List[str] = []
    step_lines: List[str] = []

    ingredient_header = _first_index(lines, INGREDIENT_HEADER_RE)
    step_header = _first_index(lines, STEP_HEADER_RE)

    if ingredient_header is not None or step_header is not None:
        first_header = min(idx for idx in (ingredient_header, step_header) if idx is not None)
        if first_header > 0:
            name = lines[0]
        if ingredient_header is not None:
            ingredient_lines = _section(lines, ingredient_header, step_header)
        if step_header is not None:
            step_lines = _section(lines, step_header, ingredient_header)
    else:
        name = lines[0]
        remaining = lines[1:]
        first_numbered = _first_index(remaining, NUMBERED_LINE_RE)
        if first_numbered is not None:
            ingredient_lines = remaining[:first_numbered]
            step_lines = remaining[first_numbered:]
        else:
            ingredient_lines = remaining

    ingredients = [clean_text(BULLET_PREFIX_RE.sub("", line)) for line in ingredient_lines]
    steps = [clean_text(NUMBER_PREFIX_RE.sub("", line)) for line in step_lines]
    logger.info(
        "Segmented recipe text: ingredient_header=%s, step_header=%s, ingredients=%d, steps=%d",
        ingredient_header,
        step_header,
        len(ingredients),
        len(steps),
    )

    return NormalizedRecipe(
        name=clean_text(name) or get_settings().placeholder_name,
        ingredients=[
            RawIngredient(raw_ingredient=line)
            for line in ingredients
            if len(line) > INGREDIENT_MIN_LENGTH
        ],
        preparation_steps=[line for line in steps if len(line) > STEP_MIN_LENGTH],
    )
