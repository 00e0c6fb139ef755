import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from recipe_assist.app.api.deps import get_chat_client, get_current_user, get_services
from recipe_assist.app.api.errors import llm_http_error
from recipe_assist.app.core.container import ServiceContainer
from recipe_assist.app.core.errors import LLMClientError
from recipe_assist.app.schemas.auth import CurrentUser
from recipe_assist.app.schemas.chat import ChatReply, ChatRequest, PersonaInfo, StructuredRecipeRequest
from recipe_assist.app.services import chat_service
from recipe_assist.app.services.llm_client import ChatCompletionClient
from recipe_assist.app.services.personas import PERSONAS, list_personas

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["ai"])


def _require_persona(key: str) -> None:
    if key not in PERSONAS:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Unknown persona: {key}")


@router.get("/personas", response_model=List[PersonaInfo])
def get_personas(services: ServiceContainer = Depends(get_services)):
    return list_personas(services.settings)


@router.post("/chat", response_model=ChatReply, response_model_exclude_none=True)
async def chat(
    payload: ChatRequest,
    current_user: CurrentUser = Depends(get_current_user),
    services: ServiceContainer = Depends(get_services),
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    _require_persona(payload.persona)
    try:
        return await chat_service.send_message_with_persona(
            chat_client,
            services.assistant_client,
            services.settings,
            payload.messages,
            payload.persona,
            thread_id=payload.thread_id,
            live_selections=payload.live_selections,
            temperature=payload.temperature,
            max_tokens=payload.max_tokens,
            model=payload.model,
        )
    except LLMClientError as exc:
        logger.error("Chat request failed for user %s: %s", current_user.id, exc)
        raise llm_http_error(exc)


@router.post("/recipe", response_model=ChatReply, response_model_exclude_none=True)
async def generate_recipe(
    payload: StructuredRecipeRequest,
    current_user: CurrentUser = Depends(get_current_user),
    chat_client: ChatCompletionClient = Depends(get_chat_client),
):
    _require_persona(payload.persona)
    try:
        return await chat_client.generate_structured_recipe(payload.messages, payload.persona)
    except LLMClientError as exc:
        logger.error("Structured recipe generation failed for user %s: %s", current_user.id, exc)
        raise llm_http_error(exc)
