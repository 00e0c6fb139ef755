"""Line-oriented heuristic recipe extraction, used when nothing structured is found."""

import logging
import re
from typing import List, Optional

from recipe_assist.app.services.recipe_parsing.constants import (
    COOKING_VERBS,
    DEFAULT_TITLE,
    DESCRIPTION_KEYWORDS,
    INGREDIENT_KEYWORDS,
    INSTRUCTION_KEYWORDS,
    SENSORY_ADJECTIVES,
    UNIT_HINTS,
)
from recipe_assist.app.services.recipe_parsing.models import (
    ParsedRecipe,
    ParseFailureKind,
    RecipeParseResult,
)
from recipe_assist.app.services.recipe_parsing.parsing_utils import (
    contains_any,
    is_list_item,
    strip_list_marker,
)

logger = logging.getLogger(__name__)

STRATEGY = "pattern_fallback"
FALLBACK_WARNING = "Recipe parsed using fallback method. Please review for accuracy."

SECTION_DESCRIPTION = "description"
SECTION_INGREDIENTS = "ingredients"
SECTION_INSTRUCTIONS = "instructions"

TITLE_MARKER_RE = re.compile(r"(?:recipe|title):", re.I)
TITLE_PREFIX_RE = re.compile(r"^(?:recipe|title):\s*", re.I)


def detect_section(lower_line: str) -> Optional[str]:
    """Return the section a header-like line switches to, if any."""
    if contains_any(lower_line, DESCRIPTION_KEYWORDS):
        return SECTION_DESCRIPTION
    if contains_any(lower_line, INGREDIENT_KEYWORDS):
        return SECTION_INGREDIENTS
    if contains_any(lower_line, INSTRUCTION_KEYWORDS):
        return SECTION_INSTRUCTIONS
    return None


def _title_from_line(line: str) -> Optional[str]:
    if TITLE_MARKER_RE.search(line):
        return TITLE_PREFIX_RE.sub("", line).strip() or None
    if 5 <= len(line) < 100 and ":" not in line:
        return line
    return None


def _is_description_like(line: str) -> bool:
    return (
        20 <= len(line) < 200
        and ":" not in line
        and not is_list_item(line)
        and contains_any(line.lower(), SENSORY_ADJECTIVES)
    )


def try_pattern_parsing(content: str) -> RecipeParseResult:
    lines = [line.strip() for line in (content or "").splitlines() if line.strip()]

    title = DEFAULT_TITLE
    description: List[str] = []
    ingredients: List[str] = []
    instructions: List[str] = []
    section: Optional[str] = None

    for line in lines:
        lower = line.lower()

        header = detect_section(lower)
        if header:
            section = header
            continue

        if section is None:
            if title == DEFAULT_TITLE:
                candidate = _title_from_line(line)
                if candidate:
                    title = candidate
                    continue
            if title != DEFAULT_TITLE and _is_description_like(line):
                description.append(line)
        elif section == SECTION_DESCRIPTION:
            if len(line) > 10:
                description.append(line)
        elif section == SECTION_INGREDIENTS:
            if is_list_item(line) or contains_any(lower, UNIT_HINTS):
                cleaned = strip_list_marker(line)
                if cleaned:
                    ingredients.append(cleaned)
        elif section == SECTION_INSTRUCTIONS:
            if is_list_item(line) or contains_any(lower, COOKING_VERBS):
                cleaned = strip_list_marker(line)
                if cleaned:
                    instructions.append(cleaned)

    if not ingredients or not instructions:
        logger.debug(
            "Pattern parsing found %d ingredients and %d instructions; giving up",
            len(ingredients),
            len(instructions),
        )
        return RecipeParseResult.failed(
            "No ingredient or instruction section found", ParseFailureKind.UNPARSEABLE_TEXT
        )

    recipe = ParsedRecipe(
        title=title,
        description=" ".join(description).strip(),
        ingredients=ingredients,
        instructions="\n".join(instructions),
    )
    return RecipeParseResult.ok(recipe, STRATEGY, warnings=[FALLBACK_WARNING])
