"""Tiered recipe parsing: structured JSON, then AI structuring, then line heuristics."""

import logging
from typing import Optional

from recipe_assist.app.services.recipe_parsing.extractors import (
    RecipeTextStructurer,
    try_ai_parsing,
    try_pattern_parsing,
    try_structured_json,
)
from recipe_assist.app.services.recipe_parsing.models import ParseFailureKind, RecipeParseResult

logger = logging.getLogger(__name__)

UNPARSEABLE_MESSAGE = (
    "Unable to parse recipe from the provided content. Please ensure the content "
    "contains a complete recipe with ingredients and instructions."
)


async def parse_recipe(
    content: str, text_structurer: Optional[RecipeTextStructurer] = None
) -> RecipeParseResult:
    """Parse pasted or assistant-written text into a recipe.

    Tiers run in order and the first success wins. Passing no text structurer
    disables the AI tier. Never raises: unexpected errors come back as a failed
    result.
    """
    try:
        result = try_structured_json(content)
        if result.success:
            return result

        result = await try_ai_parsing(content, text_structurer)
        if result.success:
            return result
        logger.debug("AI tier skipped or failed (%s): %s", result.error_kind, result.error)

        result = try_pattern_parsing(content)
        if result.success:
            return result

        return RecipeParseResult.failed(UNPARSEABLE_MESSAGE, ParseFailureKind.UNPARSEABLE_TEXT)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Recipe parsing failed unexpectedly")
        return RecipeParseResult.failed(f"Parsing failed: {exc}", ParseFailureKind.UNEXPECTED_ERROR)
