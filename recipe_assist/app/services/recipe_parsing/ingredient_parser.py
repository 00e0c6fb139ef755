"""Ingredient line normalization."""

import logging
import re
from typing import Any, List

from recipe_assist.app.services.recipe_parsing.constants import (
    COMMON_UNITS,
    FILLER_WORDS,
    FRACTION_CHARS,
    SIZE_WORDS,
)
from recipe_assist.app.services.recipe_parsing.models import ParsedIngredient
from recipe_assist.app.services.recipe_parsing.parsing_utils import clean_text

logger = logging.getLogger(__name__)


def _alternation(words) -> str:
    # Longest first so "fl oz" wins over "fl", "tbsp" over "tbs".
    ordered = sorted(words, key=len, reverse=True)
    return "|".join(re.escape(w).replace(r"\ ", r"\s+") for w in ordered)


_NUMBER = (
    rf"(?:\d+\s+\d+/\d+|\d+/\d+|\d*\s?[{FRACTION_CHARS}]|\d+(?:\.\d+)?|\.\d+)"
)
_QUANTITY = rf"{_NUMBER}(?:\s*(?:-|–|to)\s*{_NUMBER})?"
_UNIT = rf"(?:{_alternation(COMMON_UNITS)})(?:e?s)?\.?"
_SIZE = _alternation(SIZE_WORDS)

# Size may sit on either side of the unit: "1 large can", "1 can large".
LEADING_RE = re.compile(
    rf"^(?:(?P<quantity>{_QUANTITY})(?=\s|$)\s*)?"
    rf"(?:(?P<size_before>{_SIZE})(?=\s|$)\s*)?"
    rf"(?:(?P<unit>{_UNIT})(?=\s|$)\s*)?"
    rf"(?:(?P<size>{_SIZE})(?=\s|$)\s*)?",
    re.I,
)
FILLER_RE = re.compile(rf"^(?:(?:{_alternation(FILLER_WORDS)})(?=\s|$)\s*)+", re.I)
PAREN_RE = re.compile(r"\([^)]*\)")


def _strip_asides(text: str) -> str:
    cleaned = PAREN_RE.sub(" ", text or "")
    cleaned = cleaned.replace("(", " ").replace(")", " ")
    cleaned = cleaned.split(",", 1)[0]
    return clean_text(cleaned)


def _strip_filler(text: str) -> str:
    return clean_text(FILLER_RE.sub("", text))


def parse_ingredient_text(text: str) -> ParsedIngredient:
    """Split a raw ingredient line into quantity, unit, size and a bare name.

    "2 small yellow squash, diced" -> name="yellow squash", quantity="2",
    size="small". Never raises; missing parts come back as None and a line
    made only of amounts and filler gives an empty name.
    """
    original = text if isinstance(text, str) else str(text)
    cleaned = _strip_filler(_strip_asides(original))

    m = LEADING_RE.match(cleaned)
    quantity = clean_text(m.group("quantity")) if m.group("quantity") else None
    unit = m.group("unit").rstrip(".") if m.group("unit") else None
    size_word = m.group("size_before") or m.group("size")
    size = clean_text(size_word).lower() if size_word else None
    name = _strip_filler(cleaned[m.end():])

    return ParsedIngredient(
        name=name,
        quantity=quantity,
        unit=unit,
        size=size,
        original=original,
    )


def _ingredient_line(item: Any) -> str:
    if isinstance(item, str):
        return item
    if isinstance(item, dict):
        amount = clean_text(str(item.get("amount") or ""))
        name = clean_text(str(item.get("item") or item.get("name") or ""))
        prep = clean_text(str(item.get("prep") or ""))
        line = " ".join(part for part in (amount, name) if part)
        if prep:
            line = f"{line}, {prep}"
        return line
    return str(item)


def normalize_ingredients(ingredients: Any) -> List[str]:
    """Reduce a list of ingredient strings or {item, amount, prep} objects to names."""
    if not isinstance(ingredients, list):
        logger.debug("Ingredients input is not a list: %s", type(ingredients).__name__)
        return []

    names: List[str] = []
    for idx, item in enumerate(ingredients):
        parsed = parse_ingredient_text(_ingredient_line(item))
        if parsed.name:
            names.append(parsed.name)
        else:
            logger.debug("Ingredient %d dropped, nothing left after normalizing: %r", idx, parsed.original)
    return names
