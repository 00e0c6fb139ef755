"""Pydantic models for recipe text parsing."""

import enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class ParseFailureKind(str, enum.Enum):
    MALFORMED_STRUCTURED_INPUT = "malformed_structured_input"
    AI_UNAVAILABLE = "ai_unavailable"
    NOT_A_RECIPE = "not_a_recipe"
    AI_FAILED = "ai_failed"
    UNPARSEABLE_TEXT = "unparseable_text"
    UNEXPECTED_ERROR = "unexpected_error"


class ParsedIngredient(BaseModel):
    """An ingredient line split into name, quantity, unit and size."""

    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None
    size: Optional[str] = None
    original: str


class ParsedRecipe(BaseModel):
    """A normalized recipe, in the shape that gets persisted."""

    title: str
    description: str = ""
    ingredients: List[str] = Field(default_factory=list)
    instructions: str = ""
    notes: str = ""
    categories: List[str] = Field(default_factory=list)
    setup: List[str] = Field(default_factory=list)


class RecipeParseResult(BaseModel):
    """Result of a recipe parsing attempt.

    A successful result carries a recipe with ingredients and instructions;
    a failed one carries an error message and, when known, its kind.
    """

    success: bool
    recipe: Optional[ParsedRecipe] = None
    warnings: List[str] = Field(default_factory=list)
    error: Optional[str] = None
    error_kind: Optional[ParseFailureKind] = None
    parser_strategy: Optional[str] = None

    @model_validator(mode="after")
    def check_discriminant(self) -> "RecipeParseResult":
        if self.success:
            if self.recipe is None or self.error is not None:
                raise ValueError("A successful parse result needs a recipe and no error")
            if not self.recipe.ingredients or not self.recipe.instructions.strip():
                raise ValueError("A parsed recipe needs ingredients and instructions")
        elif self.recipe is not None or not self.error:
            raise ValueError("A failed parse result needs an error and no recipe")
        return self

    @classmethod
    def ok(
        cls,
        recipe: ParsedRecipe,
        parser_strategy: str,
        warnings: Optional[List[str]] = None,
    ) -> "RecipeParseResult":
        return cls(
            success=True,
            recipe=recipe,
            parser_strategy=parser_strategy,
            warnings=warnings or [],
        )

    @classmethod
    def failed(cls, error: str, kind: ParseFailureKind) -> "RecipeParseResult":
        return cls(success=False, error=error, error_kind=kind)
