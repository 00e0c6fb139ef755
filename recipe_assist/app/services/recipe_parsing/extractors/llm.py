"""AI-delegated recipe extraction for conversational text."""

import logging
from typing import Any, Dict, Optional, Protocol

import httpx

from recipe_assist.app.core.errors import LLMClientError
from recipe_assist.app.services.recipe_parsing.constants import RECIPE_INDICATOR_RE
from recipe_assist.app.services.recipe_parsing.models import ParseFailureKind, RecipeParseResult
from recipe_assist.app.services.recipe_parsing.recipe_json import coerce_ai_recipe

logger = logging.getLogger(__name__)

STRATEGY = "ai_text"
REVIEW_WARNING = "Recipe parsed from conversational text. Please review for accuracy."


class RecipeTextStructurer(Protocol):
    async def structure_recipe_text(self, text: str) -> Dict[str, Any]:
        ...


def looks_like_recipe(content: str) -> bool:
    return bool(RECIPE_INDICATOR_RE.search(content or ""))


async def try_ai_parsing(
    content: str, structurer: Optional[RecipeTextStructurer]
) -> RecipeParseResult:
    if structurer is None:
        return RecipeParseResult.failed("AI parsing is not available", ParseFailureKind.AI_UNAVAILABLE)
    if not looks_like_recipe(content):
        return RecipeParseResult.failed("Content has no recipe indicators", ParseFailureKind.NOT_A_RECIPE)

    try:
        data = await structurer.structure_recipe_text(content)
        recipe = coerce_ai_recipe(data)
    except (httpx.HTTPError, LLMClientError) as exc:
        logger.warning("AI recipe structuring call failed: %s", exc)
        return RecipeParseResult.failed(str(exc), ParseFailureKind.AI_FAILED)
    except ValueError as exc:
        logger.warning("AI recipe structuring returned an unusable recipe: %s", exc)
        return RecipeParseResult.failed(str(exc), ParseFailureKind.AI_FAILED)

    return RecipeParseResult.ok(recipe, STRATEGY, warnings=[REVIEW_WARNING])
