from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recipe_assist.app.services.recipe_parsing.models import ParsedRecipe, ParseFailureKind


class RecipeBase(BaseModel):
    title: str
    description: str = ""
    ingredients: List[str]
    instructions: str
    notes: str = ""
    categories: List[str] = Field(default_factory=list)
    setup: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None


class RecipeCreate(RecipeBase):
    parser_strategy: Optional[str] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Title is required")
        return value.strip()

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, value: List[str]) -> List[str]:
        cleaned = [item.strip() for item in value if item and item.strip()]
        if not cleaned:
            raise ValueError("At least one ingredient is required")
        return cleaned

    @field_validator("instructions")
    @classmethod
    def validate_instructions(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Instructions are required")
        return value

    @classmethod
    def from_parsed(cls, recipe: ParsedRecipe, parser_strategy: Optional[str] = None) -> "RecipeCreate":
        return cls(**recipe.model_dump(), parser_strategy=parser_strategy)


class RecipeRead(RecipeBase):
    id: int
    user_id: str
    parser_strategy: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecipeUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    ingredients: Optional[List[str]] = None
    instructions: Optional[str] = None
    notes: Optional[str] = None
    categories: Optional[List[str]] = None
    setup: Optional[List[str]] = None
    image_url: Optional[str] = None

    @field_validator("ingredients")
    @classmethod
    def validate_ingredients(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        cleaned = [item.strip() for item in value if item and item.strip()]
        if not cleaned:
            raise ValueError("At least one ingredient is required")
        return cleaned

    @field_validator("title", "instructions")
    @classmethod
    def validate_not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("Value cannot be blank")
        return value


class ParseTextRequest(BaseModel):
    content: str = Field(min_length=1)
    use_ai: bool = True
    save: bool = False


class ParseTextResponse(BaseModel):
    success: bool
    recipe: Optional[ParsedRecipe] = None
    created_recipe_id: Optional[int] = None
    warnings: List[str] = Field(default_factory=list)
    parser_strategy: Optional[str] = None
    error_code: Optional[ParseFailureKind] = None
    message: Optional[str] = None


class StandardizeRequest(BaseModel):
    recipe_text: str = Field(min_length=1, alias="recipeText")

    model_config = ConfigDict(populate_by_name=True)


class StandardizeResponse(BaseModel):
    success: bool = True
    standardized_text: str
