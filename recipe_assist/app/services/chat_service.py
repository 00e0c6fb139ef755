import asyncio
import logging
from typing import List, Optional

import httpx

from recipe_assist.app.core.config import Settings
from recipe_assist.app.core.errors import LLMClientError
from recipe_assist.app.schemas.chat import ChatMessage, ChatReply, LiveSelections
from recipe_assist.app.services.assistant_client import AssistantClient
from recipe_assist.app.services.llm_client import ChatCompletionClient
from recipe_assist.app.services.personas import assistant_id_for, get_persona

logger = logging.getLogger(__name__)


async def send_message_with_persona(
    chat_client: ChatCompletionClient,
    assistant_client: AssistantClient,
    settings: Settings,
    messages: List[ChatMessage],
    persona_key: str,
    thread_id: Optional[str] = None,
    live_selections: Optional[LiveSelections] = None,
    temperature: float = 0.8,
    max_tokens: int = 800,
    model: Optional[str] = None,
) -> ChatReply:
    """Route a conversation to the persona's assistant or to chat completion.

    Assistant-powered personas get assistant_timeout_seconds to answer. The
    assistant call is shielded so a timeout does not cancel the run; the
    reply then comes from chat completion instead.
    """
    persona = get_persona(persona_key)
    assistant_id = assistant_id_for(persona, settings)

    if assistant_id:
        latest = messages[-1].content
        task = asyncio.ensure_future(assistant_client.send_message(assistant_id, latest, thread_id=thread_id))
        try:
            return await asyncio.wait_for(asyncio.shield(task), timeout=settings.assistant_timeout_seconds)
        except asyncio.TimeoutError:
            logger.warning(
                "Assistant for persona %s did not answer within %ss; falling back to chat completion",
                persona_key,
                settings.assistant_timeout_seconds,
            )
            task.add_done_callback(_log_orphaned_result)
        except (httpx.HTTPError, LLMClientError):
            logger.exception("Assistant call for persona %s failed; falling back to chat completion", persona_key)

    return await chat_client.chat_with_persona(
        messages,
        persona_key,
        live_selections=live_selections,
        temperature=temperature,
        max_tokens=max_tokens,
        model=model,
    )


def _log_orphaned_result(task: "asyncio.Future") -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.info("Timed-out assistant call later failed: %s", exc)
    else:
        logger.info("Timed-out assistant call completed after fallback")
