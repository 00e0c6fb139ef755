import json
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError

from recipe_assist.app.core.config import Settings
from recipe_assist.app.core.errors import LLMClientError, LLMNotConfiguredError, LLMResponseError
from recipe_assist.app.schemas.chat import ChatCompletionResponse, ChatMessage, ChatReply, LiveSelections
from recipe_assist.app.services.http_retry import request_with_retry
from recipe_assist.app.services.personas import build_system_prompt, get_persona
from recipe_assist.app.services.recipe_parsing import (
    coerce_ai_recipe,
    extract_fenced_json,
    extract_json_object,
)

logger = logging.getLogger(__name__)

STRUCTURED_RECIPE_FORMAT = (
    'Respond with a valid JSON object containing the complete recipe in this exact format: '
    '{"title": "Recipe Name", "ingredients": ["ingredient 1", "ingredient 2"], '
    '"instructions": "Step-by-step instructions", "notes": "Additional notes"}'
)

TEXT_STRUCTURING_PROMPT = (
    "Extract the recipe from the user's text. Return ONLY valid JSON matching this schema: "
    '{"title": string, "description": string, "ingredients": [string], '
    '"instructions": string | [string], "notes": string, "categories": [string], "setup": [string]}. '
    'If the text holds no recipe, return {"error": "no_recipe"}.'
)

STANDARDIZATION_PROMPT = """You are a recipe standardization expert. Convert any recipe format into this markdown layout:

# Recipe Title

## Setup (Prep Ahead)
- Prep work such as soaking, marinating, preheating or chopping

## Ingredients
- Each ingredient with its measurement

## Instructions
1. Numbered cooking steps

## Notes
- Storage tips, substitutions and serving suggestions

Keep the original title as close to the source as possible, move all prep work to Setup,
preserve every important detail, and make minimal changes to input that is already well formatted."""


def _error_message(response: httpx.Response) -> str:
    if response.status_code == 429:
        return "Rate limit exceeded. Please wait a moment and try again."
    if response.status_code == 401:
        return "Invalid API key. Please check your OpenAI configuration."
    if response.status_code == 403:
        return "Access denied. Please check your OpenAI account permissions."
    detail = response.text[:500] if response.text else ""
    message = f"OpenAI API error: {response.status_code} {response.reason_phrase}"
    return f"{message} - {detail}" if detail else message


def _decode_json_content(content: str) -> Any:
    """Decode a JSON reply, tolerating code fences and surrounding prose."""
    try:
        return json.loads(content)
    except json.JSONDecodeError:
        snippet = extract_fenced_json(content) or extract_json_object(content)
        if snippet is None:
            raise
        return json.loads(snippet)


class ChatCompletionClient:
    """Client for an OpenAI-style chat-completions endpoint."""

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        if not settings.openai_api_key:
            raise LLMNotConfiguredError()
        self.settings = settings
        self._http = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.settings.openai_api_key}",
            "Content-Type": "application/json",
        }

    def _conversation(self, system_prompt: str, messages: List[ChatMessage]) -> List[Dict[str, str]]:
        # Only the most recent turns go out, to bound token usage.
        recent = messages[-self.settings.max_conversation_turns :]
        return [{"role": "system", "content": system_prompt}] + [
            {"role": m.role, "content": m.content} for m in recent
        ]

    async def complete(
        self,
        messages: List[Dict[str, str]],
        temperature: float,
        max_tokens: int,
        response_format: Optional[Dict[str, str]] = None,
        model: Optional[str] = None,
    ) -> ChatCompletionResponse:
        payload: Dict[str, Any] = {
            "model": model or self.settings.openai_model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
            "top_p": 1.0,
        }
        if response_format:
            payload["response_format"] = response_format

        response = await request_with_retry(
            self._http,
            "POST",
            f"{self.settings.openai_base_url}/chat/completions",
            max_retries=self.settings.openai_max_retries,
            json=payload,
            headers=self._headers(),
            timeout=self.settings.openai_timeout_seconds,
        )
        if not response.is_success:
            logger.error("Chat completion failed: status=%s body=%s", response.status_code, response.text[:500])
            raise LLMClientError(_error_message(response), status_code=response.status_code)

        try:
            completion = ChatCompletionResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Chat completion response did not match the expected shape: %s", exc)
            raise LLMResponseError("Unexpected response from OpenAI API") from exc
        if not completion.content:
            raise LLMResponseError("No response from OpenAI API")
        return completion

    async def chat_with_persona(
        self,
        messages: List[ChatMessage],
        persona_key: str,
        live_selections: Optional[LiveSelections] = None,
        temperature: float = 0.8,
        max_tokens: int = 800,
        model: Optional[str] = None,
    ) -> ChatReply:
        persona = get_persona(persona_key)
        system_prompt = build_system_prompt(persona, live_selections)
        logger.info("Chat request: persona=%s messages=%d", persona_key, len(messages))
        completion = await self.complete(
            self._conversation(system_prompt, messages),
            temperature=temperature,
            max_tokens=max_tokens,
            model=model,
        )
        return ChatReply(message=completion.content, usage=completion.usage)

    async def generate_structured_recipe(self, messages: List[ChatMessage], persona_key: str) -> ChatReply:
        """Ask the persona for a complete recipe as JSON and coerce it."""
        persona = get_persona(persona_key)
        system_prompt = f"{persona.system_prompt}\n\n{STRUCTURED_RECIPE_FORMAT}"
        conversation = self._conversation(system_prompt, messages)
        conversation.append(
            {"role": "user", "content": "Please create a complete, structured recipe based on our conversation."}
        )
        completion = await self.complete(
            conversation,
            temperature=0.7,
            max_tokens=1000,
            response_format={"type": "json_object"},
        )
        try:
            data = _decode_json_content(completion.content)
        except json.JSONDecodeError as exc:
            raise LLMResponseError("Failed to generate structured recipe. Please try again.") from exc

        try:
            recipe = coerce_ai_recipe(data)
        except ValueError:
            logger.info("Structured recipe reply lacked required fields; returning text only")
            return ChatReply(message=completion.content, usage=completion.usage)
        return ChatReply(
            message="Perfect! I've created a complete recipe for you:",
            usage=completion.usage,
            recipe=recipe,
        )

    async def structure_recipe_text(self, text: str) -> Dict[str, Any]:
        """Turn free-form recipe text into a JSON object via the model."""
        completion = await self.complete(
            [
                {"role": "system", "content": TEXT_STRUCTURING_PROMPT},
                {"role": "user", "content": text[:10000]},
            ],
            temperature=0.0,
            max_tokens=1200,
            response_format={"type": "json_object"},
        )
        data = _decode_json_content(completion.content)
        if not isinstance(data, dict):
            raise LLMResponseError("Recipe structuring reply was not a JSON object")
        if data.get("error"):
            raise LLMResponseError(f"Model returned error: {data['error']}")
        return data

    async def standardize_recipe_text(self, text: str) -> str:
        """Rewrite a recipe in any format as Setup / Ingredients / Instructions / Notes markdown."""
        completion = await self.complete(
            [
                {"role": "system", "content": STANDARDIZATION_PROMPT},
                {"role": "user", "content": f"Please standardize this recipe:\n\n{text}"},
            ],
            temperature=0.3,
            max_tokens=1500,
        )
        return completion.content
