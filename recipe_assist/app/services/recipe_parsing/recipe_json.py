"""Coercion of decoded recipe JSON into ParsedRecipe."""

import re
from typing import Any, Dict, List

from recipe_assist.app.services.recipe_parsing.ingredient_parser import normalize_ingredients
from recipe_assist.app.services.recipe_parsing.models import ParsedRecipe

CATEGORY_ORDER = ("main", "sauce", "toppings", "garnish")
NOTE_SECTIONS = (
    ("tips_and_tricks", "Tips & Tricks"),
    ("substitutions", "Substitutions"),
    ("pairings", "Pairings"),
)


def as_text(value: Any) -> str:
    """Render a string or list of strings as newline separated text."""
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(str(v).strip() for v in value if str(v).strip())
    return str(value).strip()


def as_string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if str(v).strip()]


def flatten_ingredients(value: Any) -> List[Any]:
    """Accept a flat list or a {category: [items]} mapping."""
    if isinstance(value, list):
        return value
    if isinstance(value, dict):
        ordered = [c for c in CATEGORY_ORDER if c in value]
        ordered += [c for c in value if c not in CATEGORY_ORDER]
        items: List[Any] = []
        for category in ordered:
            if isinstance(value[category], list):
                items.extend(value[category])
        return items
    return []


def compose_instructions(data: Dict[str, Any]) -> str:
    parts: List[str] = []
    basic = as_string_list(data.get("basic_instructions"))
    if basic:
        parts.append("**Preparation:**")
        parts.extend(f"{i}. {step}" for i, step in enumerate(basic, start=1))
        parts.append("")

    instructions = data.get("instructions")
    if isinstance(instructions, list):
        steps = [re.sub(r"^\d+\.\s*", "", s) for s in as_string_list(instructions)]
        if steps and parts:
            parts.append("**Cooking Instructions:**")
        parts.extend(steps)
    elif isinstance(instructions, str) and instructions.strip():
        if parts:
            parts.append("**Cooking Instructions:**")
        parts.append(instructions.strip())
    return "\n".join(parts).strip()


def compose_notes(data: Dict[str, Any]) -> str:
    parts: List[str] = []
    if data.get("servings"):
        parts += [f"**Servings:** {data['servings']}", ""]
    for key, heading in NOTE_SECTIONS:
        entries = as_string_list(data.get(key))
        if entries:
            parts.append(f"**{heading}:**")
            parts.extend(f"• {entry}" for entry in entries)
            parts.append("")
    notes = data.get("notes")
    if isinstance(notes, str) and notes.strip():
        if parts:
            parts.append("**Additional Notes:**")
        parts.append(notes.strip())
    return "\n".join(parts).strip()


def coerce_ai_recipe(data: Any) -> ParsedRecipe:
    """Build a ParsedRecipe from the looser JSON shapes chat models return.

    Raises ValueError when the object lacks a title, ingredients or
    instructions.
    """
    if not isinstance(data, dict):
        raise ValueError("Recipe JSON is not an object")
    if isinstance(data.get("recipe"), dict):
        data = data["recipe"]

    title = str(data.get("title") or "").strip() or str(data.get("name") or "").strip()
    if not title:
        raise ValueError("Missing required field: title or name")
    ingredients = normalize_ingredients(flatten_ingredients(data.get("ingredients")))
    if not ingredients:
        raise ValueError("Missing required field: ingredients")
    instructions = compose_instructions(data)
    if not instructions:
        raise ValueError("Missing required field: instructions")

    return ParsedRecipe(
        title=title,
        description=as_text(data.get("description")),
        ingredients=ingredients,
        instructions=instructions,
        notes=compose_notes(data),
        categories=as_string_list(data.get("categories")),
        setup=as_string_list(data.get("setup")),
    )
