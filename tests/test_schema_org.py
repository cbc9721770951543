import json

from recipe_normalizer.app.services.recipe_parsing.extractors.schema_org import (
    extract_instruction_steps,
    extract_recipe_from_schema_org,
    find_recipe_node,
)


def _page(*blocks: str) -> str:
    scripts = "\n".join(f'<script type="application/ld+json">{block}</script>' for block in blocks)
    return f"<html><head>{scripts}</head><body><h1>Ignored</h1></body></html>"


def test_extract_recipe_from_schema_org():
    block = json.dumps(
        {
            "@context": "https://schema.org",
            "@type": "Recipe",
            "name": "Mac &amp; Cheese",
            "description": "Creamy &amp; quick",
            "recipeIngredient": ["1 lb macaroni", "  ", "2 cups cheddar"],
            "recipeInstructions": ["Boil pasta", "Stir in cheese"],
            "prepTime": "PT10M",
            "cookTime": "PT1H30M",
            "recipeYield": ["4 servings", "4"],
        }
    )
    parsed = extract_recipe_from_schema_org(_page(block), "https://www.example.com/mac")

    assert parsed is not None
    assert parsed.name == "Mac & Cheese"
    assert [i.raw_ingredient for i in parsed.ingredients] == ["1 lb macaroni", "2 cups cheddar"]
    assert parsed.preparation_steps == ["Boil pasta", "Stir in cheese"]
    assert parsed.note == "Creamy & quick"
    assert parsed.prep_time == "10 min"
    assert parsed.cook_time == "90 min"
    assert parsed.servings == "4 servings"
    assert parsed.source_name == "example.com"
    assert parsed.source_url == "https://www.example.com/mac"


def test_missing_optional_fields_are_null():
    block = json.dumps({"@type": "Recipe", "name": "Toast", "prepTime": "PT0H0M"})
    parsed = extract_recipe_from_schema_org(_page(block), "https://example.com/toast")

    assert parsed is not None
    assert parsed.ingredients == []
    assert parsed.preparation_steps == []
    assert parsed.note is None
    assert parsed.prep_time is None
    assert parsed.cook_time is None
    assert parsed.servings is None


def test_recipe_inside_graph_with_type_list():
    block = json.dumps(
        {
            "@context": "https://schema.org",
            "@graph": [
                {"@type": "WebPage", "name": "Page"},
                {"@type": ["Recipe", "NewsArticle"], "name": "Graph Soup", "recipeIngredient": "1 cup broth"},
            ],
        }
    )
    parsed = extract_recipe_from_schema_org(_page(block), "https://example.com/soup")

    assert parsed is not None
    assert parsed.name == "Graph Soup"
    assert [i.raw_ingredient for i in parsed.ingredients] == ["1 cup broth"]


def test_recipe_inside_top_level_array():
    block = json.dumps([{"@type": "Organization", "name": "Org"}, {"@type": "Recipe", "name": "Listed"}])
    parsed = extract_recipe_from_schema_org(_page(block), "https://example.com/list")
    assert parsed is not None
    assert parsed.name == "Listed"


def test_invalid_block_is_skipped():
    valid = json.dumps({"@type": "Recipe", "name": "Second Block", "recipeIngredient": ["1 egg"]})
    parsed = extract_recipe_from_schema_org(_page('{"@type": "Recipe", "name": ', valid), "https://example.com")

    assert parsed is not None
    assert parsed.name == "Second Block"


def test_recipe_without_name_is_rejected():
    nameless = json.dumps({"@type": "Recipe", "name": "  ", "recipeIngredient": ["1 egg"]})
    assert extract_recipe_from_schema_org(_page(nameless), "https://example.com") is None

    named = json.dumps({"@type": "Recipe", "name": "Named"})
    parsed = extract_recipe_from_schema_org(_page(nameless, named), "https://example.com")
    assert parsed is not None
    assert parsed.name == "Named"


def test_no_recipe_blocks_returns_none():
    block = json.dumps({"@type": "Article", "name": "Not food"})
    assert extract_recipe_from_schema_org(_page(block), "https://example.com") is None
    assert extract_recipe_from_schema_org("<html><body>plain</body></html>", "https://example.com") is None


def test_find_recipe_node_prefers_graph():
    graph_recipe = {"@type": "Recipe", "name": "From graph"}
    data = {"@graph": [graph_recipe], "@type": "Recipe", "name": "Outer"}
    assert find_recipe_node(data) is graph_recipe
    assert find_recipe_node({"@type": "recipe"}) is None
    assert find_recipe_node("Recipe") is None


def test_instruction_shapes_are_flattened():
    assert extract_instruction_steps("Chop onions\n\nFry &amp; serve\n") == ["Chop onions", "Fry & serve"]
    assert extract_instruction_steps({"@type": "HowToStep", "text": "Only step"}) == ["Only step"]

    sections = [
        {
            "@type": "HowToSection",
            "name": "Dough",
            "itemListElement": [
                {"@type": "HowToStep", "text": "Mix flour"},
                "Knead",
            ],
        },
        {"@type": "HowToStep", "text": "<p>Bake</p>"},
        {
            "@type": "ItemList",
            "itemListElement": [{"@type": "HowToStep", "text": "Cool"}, {"@type": "HowToStep"}],
        },
    ]
    assert extract_instruction_steps(sections) == ["Mix flour", "Knead", "Bake", "Cool"]
    assert extract_instruction_steps(None) == []


def test_deeply_nested_block_is_skipped():
    deep = "[" * 100000 + "]" * 100000
    valid = json.dumps({"@type": "Recipe", "name": "Second Block"})
    parsed = extract_recipe_from_schema_org(_page(deep, valid), "https://example.com")

    assert parsed is not None
    assert parsed.name == "Second Block"
