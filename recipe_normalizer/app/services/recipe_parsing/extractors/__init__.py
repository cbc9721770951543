"""Recipe extractors for different input kinds and parsing strategies."""

from recipe_normalizer.app.services.recipe_parsing.extractors.heuristic import (
    extract_recipe_heuristic,
)
from recipe_normalizer.app.services.recipe_parsing.extractors.plain_text import parse_recipe_text
from recipe_normalizer.app.services.recipe_parsing.extractors.recipe_object import (
    normalize_recipe_object,
)
from recipe_normalizer.app.services.recipe_parsing.extractors.schema_org import (
    extract_recipe_from_schema_org,
)

__all__ = [
    "extract_recipe_from_schema_org",
    "extract_recipe_heuristic",
    "normalize_recipe_object",
    "parse_recipe_text",
]
