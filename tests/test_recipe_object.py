import pytest

from recipe_normalizer.app.services.recipe_parsing.errors import InvalidInputError
from recipe_normalizer.app.services.recipe_parsing.extractors.recipe_object import (
    normalize_recipe_object,
)
from recipe_normalizer.app.services.recipe_parsing.models import NormalizedRecipe


def test_simple_object():
    recipe = normalize_recipe_object({"name": "X", "ingredients": ["2 eggs"], "steps": ["Whisk"]})

    assert recipe.to_payload() == {
        "name": "X",
        "ingredients": [{"rawIngredient": "2 eggs"}],
        "preparationSteps": ["Whisk"],
        "note": None,
        "sourceName": None,
        "sourceUrl": None,
        "prepTime": None,
        "cookTime": None,
        "servings": None,
    }


def test_ingredient_shapes():
    recipe = normalize_recipe_object(
        {
            "name": "Mixed",
            "ingredients": [
                "  1 cup   rice ",
                {"rawIngredient": "2 tbsp soy &amp; sesame"},
                {"quantity": 3, "name": "scallions", "note": "sliced"},
                {"name": "salt"},
                {"quantity": None, "name": ""},
                "",
            ],
        }
    )
    assert [i.raw_ingredient for i in recipe.ingredients] == [
        "1 cup rice",
        "2 tbsp soy & sesame",
        "3 scallions sliced",
        "salt",
    ]


def test_step_field_precedence():
    recipe = normalize_recipe_object(
        {"preparationSteps": ["First"], "steps": ["Second"], "instructions": ["Third"]}
    )
    assert recipe.preparation_steps == ["First"]

    recipe = normalize_recipe_object({"steps": ["Second"], "instructions": ["Third"]})
    assert recipe.preparation_steps == ["Second"]

    recipe = normalize_recipe_object({"instructions": ["Third", 4, " "]})
    assert recipe.preparation_steps == ["Third", "4"]

    recipe = normalize_recipe_object({"preparationSteps": [], "steps": ["Ignored"]})
    assert recipe.preparation_steps == []


def test_alternate_scalar_fields(settings):
    recipe = normalize_recipe_object(
        {
            "description": "Family favorite",
            "source": "Grandma",
            "url": "https://example.com/pie",
            "prepTime": "20 min",
            "cookTime": 45,
            "servings": 8,
        }
    )
    assert recipe.name == settings.placeholder_name
    assert recipe.note == "Family favorite"
    assert recipe.source_name == "Grandma"
    assert recipe.source_url == "https://example.com/pie"
    assert recipe.prep_time == "20 min"
    assert recipe.cook_time == "45"
    assert recipe.servings == "8"


def test_primary_scalar_fields_win():
    recipe = normalize_recipe_object(
        {"note": "Primary", "description": "Secondary", "sourceName": "Site", "source": "Other"}
    )
    assert recipe.note == "Primary"
    assert recipe.source_name == "Site"


def test_blank_scalars_become_null():
    recipe = normalize_recipe_object({"name": "  ", "note": "   ", "servings": ""})
    assert recipe.note is None
    assert recipe.servings is None


def test_normalizing_twice_is_stable():
    once = normalize_recipe_object(
        {
            "name": "Pie &amp; Cream",
            "ingredients": [{"quantity": "2", "name": "apples"}],
            "instructions": ["Bake <b>well</b>"],
            "description": "Sweet",
            "source": "Book",
            "prepTime": "15 min",
            "servings": 6,
        }
    )
    twice = normalize_recipe_object(once.to_payload())
    assert twice == once
    assert normalize_recipe_object(once) == once


def test_non_mapping_is_rejected():
    with pytest.raises(InvalidInputError):
        normalize_recipe_object(["not", "a", "recipe"])


def test_model_payload_uses_aliases():
    recipe = NormalizedRecipe(name="A", preparation_steps=["Do it"])
    assert recipe.to_payload()["preparationSteps"] == ["Do it"]


def test_source_url_query_string_is_preserved():
    url = "https://example.com/recipe?id=1&copy=2&times=3"
    recipe = normalize_recipe_object({"name": "X", "sourceUrl": url})

    assert recipe.source_url == url
    assert normalize_recipe_object(recipe.to_payload()) == recipe
