"""Pydantic models for recipe normalization."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class RawIngredient(BaseModel):
    """A single ingredient kept as one display line."""

    raw_ingredient: str = Field(alias="rawIngredient")

    model_config = ConfigDict(populate_by_name=True)


class NormalizedRecipe(BaseModel):
    """The canonical recipe record produced by every extraction pipeline."""

    name: str
    ingredients: List[RawIngredient] = Field(default_factory=list)
    preparation_steps: List[str] = Field(default_factory=list, alias="preparationSteps")
    note: Optional[str] = None
    source_name: Optional[str] = Field(None, alias="sourceName")
    source_url: Optional[str] = Field(None, alias="sourceUrl")
    prep_time: Optional[str] = Field(None, alias="prepTime")
    cook_time: Optional[str] = Field(None, alias="cookTime")
    servings: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        """Dump with the camelCase field names the recipe-creation tool expects."""
        return self.model_dump(by_alias=True)


class RecipeSource(BaseModel):
    """Input descriptor: at most one of url, text or a recipe-like object."""

    url: Optional[str] = None
    text: Optional[str] = None
    object: Optional[Any] = Field(None, alias="recipe")

    model_config = ConfigDict(populate_by_name=True)
