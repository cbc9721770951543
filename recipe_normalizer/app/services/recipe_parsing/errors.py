"""Errors raised while normalizing a recipe."""

from typing import Optional


class RecipeNormalizationError(Exception):
    """Base class for every failure surfaced by the normalization pipelines."""


class InvalidInputError(RecipeNormalizationError, ValueError):
    """Raised when no usable url, text or recipe object was supplied."""


class EmptyInputError(RecipeNormalizationError, ValueError):
    """Raised when recipe text contains no non-blank lines."""


class ExtractionError(RecipeNormalizationError):
    """Raised when neither structured data nor markup heuristics found a recipe."""


class FetchError(RecipeNormalizationError):
    """Raised when a page could not be fetched."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class FetchTimeoutError(FetchError, TimeoutError):
    """Raised when fetching a page exceeded the configured timeout."""
