import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from recipe_assist.app.api.deps import get_chat_client, get_current_user, get_db_session, get_optional_chat_client
from recipe_assist.app.api.errors import llm_http_error
from recipe_assist.app.core.errors import LLMClientError
from recipe_assist.app.schemas.auth import CurrentUser
from recipe_assist.app.schemas.recipe import (
    ParseTextRequest,
    ParseTextResponse,
    RecipeCreate,
    RecipeRead,
    RecipeUpdate,
    StandardizeRequest,
    StandardizeResponse,
)
from recipe_assist.app.services import recipes_service
from recipe_assist.app.services.llm_client import ChatCompletionClient
from recipe_assist.app.services.recipe_parsing import parse_recipe

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recipes", tags=["recipes"])


@router.post("/parse", response_model=ParseTextResponse)
async def parse_recipe_text(
    payload: ParseTextRequest,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
    chat_client: Optional[ChatCompletionClient] = Depends(get_optional_chat_client),
):
    structurer = chat_client if payload.use_ai else None
    result = await parse_recipe(payload.content, structurer)

    if not result.success:
        return ParseTextResponse(
            success=False,
            warnings=result.warnings,
            parser_strategy=result.parser_strategy,
            error_code=result.error_kind,
            message=result.error,
        )

    created_id = None
    if payload.save:
        created = recipes_service.create_recipe(
            db, current_user.id, RecipeCreate.from_parsed(result.recipe, result.parser_strategy)
        )
        created_id = created.id
        logger.info("Saved parsed recipe %s (strategy=%s)", created_id, result.parser_strategy)

    return ParseTextResponse(
        success=True,
        recipe=result.recipe,
        created_recipe_id=created_id,
        warnings=result.warnings,
        parser_strategy=result.parser_strategy,
    )


@router.post("/standardize", response_model=StandardizeResponse)
async def standardize_recipe_text(
    payload: StandardizeRequest,
    current_user: CurrentUser = Depends(get_current_user),
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    try:
        text = await chat_client.standardize_recipe_text(payload.recipe_text)
    except LLMClientError as exc:
        logger.error("Recipe standardization failed for user %s: %s", current_user.id, exc)
        raise llm_http_error(exc)
    return StandardizeResponse(standardized_text=text)


@router.post("", response_model=RecipeRead, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.create_recipe(db, current_user.id, payload)


@router.get("", response_model=List[RecipeRead])
def list_recipes(
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.list_recipes(db, current_user.id)


@router.get("/{recipe_id}", response_model=RecipeRead)
def get_recipe(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.get_recipe(db, current_user.id, recipe_id)


@router.patch("/{recipe_id}", response_model=RecipeRead)
def update_recipe(
    recipe_id: int,
    payload: RecipeUpdate,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    return recipes_service.update_recipe(db, current_user.id, recipe_id, payload)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_recipe(
    recipe_id: int,
    db: Session = Depends(get_db_session),
    current_user: CurrentUser = Depends(get_current_user),
):
    recipes_service.delete_recipe(db, current_user.id, recipe_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
