"""Recipe parsing package.

This package extracts a canonical recipe record from a web page (schema.org
JSON-LD, then class-name heuristics), from freeform text, or from a
loosely-shaped recipe object.
"""

from recipe_normalizer.app.services.recipe_parsing.errors import (
    EmptyInputError,
    ExtractionError,
    FetchError,
    FetchTimeoutError,
    InvalidInputError,
    RecipeNormalizationError,
)
from recipe_normalizer.app.services.recipe_parsing.html_fetcher import (
    fetch_html,
    is_private_host,
)
from recipe_normalizer.app.services.recipe_parsing.models import (
    NormalizedRecipe,
    RawIngredient,
    RecipeSource,
)
from recipe_normalizer.app.services.recipe_parsing.parsing_utils import (
    as_list,
    clean_optional,
    clean_text,
    extract_domain,
    format_iso8601_duration,
    parse_yield,
    strip_html,
)

__all__ = [
    # Models
    "NormalizedRecipe",
    "RawIngredient",
    "RecipeSource",
    # Errors
    "EmptyInputError",
    "ExtractionError",
    "FetchError",
    "FetchTimeoutError",
    "InvalidInputError",
    "RecipeNormalizationError",
    # HTML fetching
    "fetch_html",
    "is_private_host",
    # Parsing utilities
    "as_list",
    "clean_optional",
    "clean_text",
    "extract_domain",
    "format_iso8601_duration",
    "parse_yield",
    "strip_html",
]
