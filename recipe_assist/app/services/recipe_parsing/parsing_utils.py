"""General text helpers shared by the recipe parsers."""

import re
from typing import Iterable

BULLET_RE = re.compile(r"^(?:[-*]\s+|•\s*)")
NUMBERED_RE = re.compile(r"^\d+\.\s+")


def clean_text(text: str) -> str:
    """Normalize whitespace in text."""
    return re.sub(r"\s+", " ", text or "").strip()


def is_bullet_line(line: str) -> bool:
    return bool(BULLET_RE.match(line))


def is_numbered_line(line: str) -> bool:
    return bool(NUMBERED_RE.match(line))


def is_list_item(line: str) -> bool:
    return is_bullet_line(line) or is_numbered_line(line)


def strip_list_marker(line: str) -> str:
    """Remove a leading bullet or "1." marker."""
    stripped = BULLET_RE.sub("", line, count=1)
    stripped = NUMBERED_RE.sub("", stripped, count=1)
    return stripped.strip()


def contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(needle in text for needle in needles)
