"""Recipe text parsing package.

This package turns pasted text or chat-assistant output into a normalized
recipe using three strategies in order: structured JSON, an AI structuring
call, and a line-based heuristic fallback.
"""

from recipe_assist.app.services.recipe_parsing.ingredient_parser import (
    normalize_ingredients,
    parse_ingredient_text,
)
from recipe_assist.app.services.recipe_parsing.json_extractor import (
    extract_fenced_json,
    extract_json_object,
)
from recipe_assist.app.services.recipe_parsing.models import (
    ParsedIngredient,
    ParsedRecipe,
    ParseFailureKind,
    RecipeParseResult,
)
from recipe_assist.app.services.recipe_parsing.parser import parse_recipe
from recipe_assist.app.services.recipe_parsing.recipe_json import coerce_ai_recipe

__all__ = [
    # Models
    "ParsedIngredient",
    "ParsedRecipe",
    "ParseFailureKind",
    "RecipeParseResult",
    # Parsing
    "coerce_ai_recipe",
    "extract_fenced_json",
    "extract_json_object",
    "normalize_ingredients",
    "parse_ingredient_text",
    "parse_recipe",
]
