import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClassPatternTier(BaseModel):
    """One priority tier of markup class-name patterns.

    ``exact`` tokens must equal one of an element's class tokens; ``contains``
    fragments only need to appear inside one of them.
    """

    exact: List[str] = Field(default_factory=list)
    contains: List[str] = Field(default_factory=list)


DEFAULT_INGREDIENT_CLASS_PATTERNS = [
    ClassPatternTier(exact=["recipe-ingredient", "wprm-recipe-ingredient", "ingredient-item"]),
    ClassPatternTier(contains=["ingredient"]),
]

DEFAULT_STEP_CLASS_PATTERNS = [
    ClassPatternTier(
        exact=[
            "recipe-step",
            "wprm-recipe-instruction",
            "instruction-text",
            "direction-text",
        ]
    ),
    ClassPatternTier(contains=["instruction", "direction", "step"]),
]


class Settings(BaseSettings):
    fetch_timeout_seconds: float = Field(15.0, alias="RECIPE_FETCH_TIMEOUT_SECONDS")
    fetch_connect_timeout_seconds: float = Field(5.0, alias="RECIPE_FETCH_CONNECT_TIMEOUT_SECONDS")
    fetch_max_redirects: int = Field(5, alias="RECIPE_FETCH_MAX_REDIRECTS")
    block_private_hosts: bool = Field(True, alias="RECIPE_BLOCK_PRIVATE_HOSTS")
    scraper_user_agent: str = Field(
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
        alias="SCRAPER_USER_AGENT",
    )
    scraper_accept: str = Field(
        "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        alias="SCRAPER_ACCEPT",
    )
    scraper_accept_language: str = Field("en-US,en;q=0.9", alias="SCRAPER_ACCEPT_LANGUAGE")
    scraper_cookies: Optional[str] = Field(None, alias="SCRAPER_COOKIES")
    placeholder_name: str = Field("Untitled Recipe", alias="RECIPE_PLACEHOLDER_NAME")
    title_max_length: int = Field(200, alias="RECIPE_TITLE_MAX_LENGTH")
    ingredient_class_patterns: List[ClassPatternTier] = Field(
        default_factory=lambda: list(DEFAULT_INGREDIENT_CLASS_PATTERNS),
        alias="RECIPE_INGREDIENT_CLASS_PATTERNS",
    )
    step_class_patterns: List[ClassPatternTier] = Field(
        default_factory=lambda: list(DEFAULT_STEP_CLASS_PATTERNS),
        alias="RECIPE_STEP_CLASS_PATTERNS",
    )

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore", populate_by_name=True
    )


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
