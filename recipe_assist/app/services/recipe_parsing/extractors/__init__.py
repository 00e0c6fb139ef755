"""Recipe extractors for the different parsing tiers."""

from recipe_assist.app.services.recipe_parsing.extractors.llm import (
    RecipeTextStructurer,
    try_ai_parsing,
)
from recipe_assist.app.services.recipe_parsing.extractors.pattern import try_pattern_parsing
from recipe_assist.app.services.recipe_parsing.extractors.structured import try_structured_json

__all__ = [
    "RecipeTextStructurer",
    "try_ai_parsing",
    "try_pattern_parsing",
    "try_structured_json",
]
