"""Locate JSON objects embedded in free text (chat replies, pasted markdown)."""

import json
import re
from typing import Optional

FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")


def extract_fenced_json(text: str) -> Optional[str]:
    """Return the body of the first ```json fenced block, if any."""
    match = FENCED_JSON_RE.search(text or "")
    if not match:
        return None
    return match.group(1).strip()


def extract_json_object(text: str) -> Optional[str]:
    """Return the first balanced {...} span that parses as JSON.

    Braces are counted without regard to string literals. Each time the depth
    returns to zero the captured span is tried; the first one that parses wins,
    so an earlier small object shadows a later larger one.
    """
    start = -1
    depth = 0
    for i, ch in enumerate(text or ""):
        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}":
            if depth == 0:
                continue
            depth -= 1
            if depth == 0 and start != -1:
                candidate = text[start : i + 1]
                try:
                    json.loads(candidate)
                    return candidate
                except json.JSONDecodeError:
                    pass
                start = -1
    return None
