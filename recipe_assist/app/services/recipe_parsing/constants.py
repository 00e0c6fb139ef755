"""Word tables used by the ingredient normalizer and the fallback parser."""

import re

FRACTION_CHARS = "¼½¾⅐⅑⅒⅓⅔⅕⅖⅗⅘⅙⅚⅛⅜⅝⅞"

# Singular forms; plurals are matched by the unit pattern.
COMMON_UNITS = (
    "teaspoon",
    "tsp",
    "tablespoon",
    "tbsp",
    "tbs",
    "cup",
    "fluid ounce",
    "fl oz",
    "ounce",
    "oz",
    "pound",
    "lb",
    "gram",
    "g",
    "kilogram",
    "kg",
    "milligram",
    "mg",
    "milliliter",
    "millilitre",
    "ml",
    "liter",
    "litre",
    "l",
    "pint",
    "pt",
    "quart",
    "qt",
    "gallon",
    "gal",
    "pinch",
    "dash",
    "clove",
    "can",
    "jar",
    "package",
    "pkg",
    "bunch",
    "head",
    "stick",
    "slice",
    "piece",
    "sprig",
    "stalk",
    "handful",
)

SIZE_WORDS = ("extra-large", "extra large", "small", "medium", "large", "jumbo")

FILLER_WORDS = ("of", "about", "approximately")

# Section header keywords for the fallback parser, checked in this order.
DESCRIPTION_KEYWORDS = ("description", "about")
INGREDIENT_KEYWORDS = ("ingredient",)
INSTRUCTION_KEYWORDS = ("instruction", "step", "method", "cooking", "directions")

SENSORY_ADJECTIVES = (
    "delicious",
    "flavor",
    "taste",
    "perfect",
    "tender",
    "crispy",
    "savory",
    "sweet",
    "spicy",
    "rich",
    "fresh",
)

# Substrings that mark a line inside the ingredient section as an ingredient.
UNIT_HINTS = ("cup", "tbsp", "tsp", "ounce", "pound", "gram")

COOKING_VERBS = ("heat", "add", "cook", "mix", "stir", "bake")

RECIPE_INDICATOR_RE = re.compile(
    r"ingredient|instruction|recipe|cook|bake|mix|add|cup|tablespoon|teaspoon", re.I
)

DEFAULT_TITLE = "Recipe from Text"
