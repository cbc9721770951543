"""Heuristic recipe extraction from HTML class names."""

import logging
import re
from typing import Callable, List, Optional, Sequence, Tuple

from bs4 import BeautifulSoup
from bs4.element import Tag

from recipe_normalizer.app.core.config import ClassPatternTier, get_settings
from recipe_normalizer.app.services.recipe_parsing.models import NormalizedRecipe, RawIngredient
from recipe_normalizer.app.services.recipe_parsing.parsing_utils import (
    clean_text,
    extract_domain,
    strip_html,
)

logger = logging.getLogger(__name__)

FRAGMENT_TAGS = ["li", "div", "span", "p"]
INGREDIENT_MIN_LENGTH = 2
INGREDIENT_MAX_LENGTH = 200
STEP_MIN_LENGTH = 10

_TITLE_SUFFIX_RE = re.compile(r"\s*[-|–—]\s*[^-|–—]+$")


def _class_matcher(tier: ClassPatternTier) -> Callable[[Tag], bool]:
    exact = set(tier.exact)
    contains = [fragment.lower() for fragment in tier.contains]

    def matches(tag: Tag) -> bool:
        if tag.name not in FRAGMENT_TAGS:
            return False
        for token in tag.get("class") or []:
            lowered = token.lower()
            if token in exact or any(fragment in lowered for fragment in contains):
                return True
        return False

    return matches


def _fragment_text(tag: Tag) -> str:
    return clean_text(strip_html(tag.decode_contents()))


def _is_container(tag: Tag, matches: Callable[[Tag], bool]) -> bool:
    """A match wrapping two or more block-level matches is a list wrapper, not a line."""
    nested = [child for child in tag.find_all(matches) if child.name != "span"]
    return len(nested) >= 2


def find_class_fragments(
    soup: BeautifulSoup,
    tiers: Sequence[ClassPatternTier],
    accept: Callable[[str], bool],
) -> List[str]:
    """Return text of elements matching the first tier that yields anything.

    Tiers are tried in order and never merged. Within a tier, wrappers around
    several matched lines are skipped, as is anything nested inside an
    already accepted element.
    """
    for tier_idx, tier in enumerate(tiers):
        matches = _class_matcher(tier)
        accepted_ids = set()
        fragments: List[str] = []
        for tag in soup.find_all(matches):
            if any(id(parent) in accepted_ids for parent in tag.parents):
                continue
            if _is_container(tag, matches):
                continue
            text = _fragment_text(tag)
            if text and accept(text):
                accepted_ids.add(id(tag))
                fragments.append(text)
        if fragments:
            logger.info("Class pattern tier %d matched %d fragments", tier_idx, len(fragments))
            return fragments
    return []


def extract_title(soup: BeautifulSoup, max_length: int) -> Optional[str]:
    """First <h1> when short enough, else <title> minus a trailing site name."""
    h1 = soup.find("h1")
    if h1 is not None:
        text = _fragment_text(h1)
        if text and len(text) < max_length:
            return text
    title = soup.find("title")
    if title is not None:
        text = _TITLE_SUFFIX_RE.sub("", _fragment_text(title)).strip()
        if text:
            return text
    return None


def extract_ingredient_lines(soup: BeautifulSoup, tiers: Sequence[ClassPatternTier]) -> List[str]:
    return find_class_fragments(
        soup,
        tiers,
        lambda text: INGREDIENT_MIN_LENGTH < len(text) < INGREDIENT_MAX_LENGTH,
    )


def extract_step_lines(soup: BeautifulSoup, tiers: Sequence[ClassPatternTier]) -> List[str]:
    return find_class_fragments(soup, tiers, lambda text: len(text) > STEP_MIN_LENGTH)


def extract_recipe_heuristic(html: str, url: Optional[str]) -> Tuple[NormalizedRecipe, bool]:
    """Best-effort recipe built from title and class-name heuristics.

    Always returns a record, paired with whether a real title was found so
    callers can tell it apart from the placeholder name.
    """
    settings = get_settings()
    soup = BeautifulSoup(html, "lxml")

    title = extract_title(soup, settings.title_max_length)
    ingredients = extract_ingredient_lines(soup, settings.ingredient_class_patterns)
    steps = extract_step_lines(soup, settings.step_class_patterns)
    logger.info(
        "Heuristic extraction: title=%s, ingredients=%d, steps=%d",
        title[:50] if title else "None",
        len(ingredients),
        len(steps),
    )

    recipe = NormalizedRecipe(
        name=title or settings.placeholder_name,
        ingredients=[RawIngredient(raw_ingredient=line) for line in ingredients],
        preparation_steps=steps,
        source_name=extract_domain(url),
        source_url=url,
    )
    return recipe, title is not None
