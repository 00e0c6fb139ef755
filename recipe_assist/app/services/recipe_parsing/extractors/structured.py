"""Structured JSON recipe extraction (fenced ```json block or inline object)."""

import json
import logging

from recipe_assist.app.services.recipe_parsing.ingredient_parser import normalize_ingredients
from recipe_assist.app.services.recipe_parsing.json_extractor import (
    extract_fenced_json,
    extract_json_object,
)
from recipe_assist.app.services.recipe_parsing.models import (
    ParsedRecipe,
    ParseFailureKind,
    RecipeParseResult,
)
from recipe_assist.app.services.recipe_parsing.recipe_json import as_string_list, as_text

logger = logging.getLogger(__name__)

STRATEGY = "structured_json"


def _malformed(reason: str) -> RecipeParseResult:
    logger.debug("Structured JSON tier rejected content: %s", reason)
    return RecipeParseResult.failed(reason, ParseFailureKind.MALFORMED_STRUCTURED_INPUT)


def try_structured_json(content: str) -> RecipeParseResult:
    json_text = extract_fenced_json(content)
    if json_text is None:
        json_text = content.strip()
        if "{" in content and "}" in content:
            json_text = extract_json_object(content) or json_text
    if not json_text:
        return _malformed("No JSON content")

    try:
        data = json.loads(json_text)
    except json.JSONDecodeError as exc:
        return _malformed(f"Invalid JSON: {exc}")
    if not isinstance(data, dict):
        return _malformed("JSON is not an object")
    title = str(data.get("title") or "").strip()
    if not title or not data.get("ingredients") or not data.get("instructions"):
        return _malformed("Missing title, ingredients or instructions")

    ingredients = normalize_ingredients(data["ingredients"])
    if not ingredients:
        return _malformed("No usable ingredients")
    instructions = as_text(data["instructions"])
    if not instructions:
        return _malformed("No usable instructions")

    recipe = ParsedRecipe(
        title=title,
        description=as_text(data.get("description")),
        ingredients=ingredients,
        instructions=instructions,
        notes=as_text(data.get("notes")),
        categories=as_string_list(data.get("categories")),
        setup=as_string_list(data.get("setup")),
    )
    return RecipeParseResult.ok(recipe, STRATEGY)
