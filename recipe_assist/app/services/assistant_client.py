"""
Client for the OpenAI assistant thread/run API.

A conversation lives in a thread; each user message starts a run that is
polled until it reaches a terminal status.
"""

import logging
from enum import Enum
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from recipe_assist.app.core.config import Settings
from recipe_assist.app.core.errors import (
    AssistantRunError,
    AssistantTimeoutError,
    LLMClientError,
    LLMNotConfiguredError,
    LLMResponseError,
)
from recipe_assist.app.schemas.chat import (
    AssistantObject,
    AssistantRun,
    ChatReply,
    ThreadMessageList,
)
from recipe_assist.app.services import http_retry

logger = logging.getLogger(__name__)

MAX_POLL_DELAY_SECONDS = 5.0

ModelT = TypeVar("ModelT", bound=BaseModel)


class RunStatus(str, Enum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    REQUIRES_ACTION = "requires_action"


TERMINAL_FAILURES = {
    RunStatus.FAILED: "Assistant run failed",
    RunStatus.CANCELLED: "Assistant run was cancelled",
    RunStatus.EXPIRED: "Assistant run expired",
    RunStatus.REQUIRES_ACTION: "Assistant run requires action, which is not supported",
}


def _parse(model: Type[ModelT], response: httpx.Response) -> ModelT:
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as exc:
        logger.error("Assistant API reply did not match %s: %s", model.__name__, exc)
        raise LLMResponseError(f"Unexpected {model.__name__} reply from the Assistant API") from exc


class AssistantClient:
    def __init__(self, settings: Settings, http_client: httpx.AsyncClient):
        self.settings = settings
        self._http = http_client

    def _headers(self) -> Dict[str, str]:
        if not self.settings.openai_api_key:
            raise LLMNotConfiguredError()
        return {
            "Authorization": f"Bearer {self.settings.openai_api_key}",
            "Content-Type": "application/json",
            "OpenAI-Beta": "assistants=v2",
        }

    async def _request(self, model: Type[ModelT], method: str, path: str, **kwargs: Any) -> ModelT:
        response = await http_retry.request_with_retry(
            self._http,
            method,
            f"{self.settings.openai_base_url}{path}",
            max_retries=self.settings.openai_max_retries,
            headers=self._headers(),
            timeout=self.settings.openai_timeout_seconds,
            **kwargs,
        )
        if not response.is_success:
            logger.error("Assistant API %s %s failed: %s %s", method, path, response.status_code, response.text[:500])
            raise LLMClientError(
                f"Assistant API error: {response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )
        return _parse(model, response)

    async def create_thread(self) -> str:
        thread = await self._request(AssistantObject, "POST", "/threads", json={})
        return thread.id

    async def add_message(self, thread_id: str, content: str) -> str:
        message = await self._request(
            AssistantObject,
            "POST",
            f"/threads/{thread_id}/messages",
            json={"role": "user", "content": content},
        )
        return message.id

    async def create_run(self, thread_id: str, assistant_id: str) -> str:
        run = await self._request(
            AssistantObject,
            "POST",
            f"/threads/{thread_id}/runs",
            json={"assistant_id": assistant_id},
        )
        return run.id

    async def poll_run(self, thread_id: str, run_id: str, max_attempts: Optional[int] = None) -> AssistantRun:
        """Poll a run until it completes.

        Failed, cancelled, expired and requires_action runs raise
        AssistantRunError and a malformed run body raises LLMResponseError.
        Queued, in-progress and unrecognized statuses keep polling, as do
        transport errors and non-2xx responses, until max_attempts is spent
        and AssistantTimeoutError is raised.
        """
        attempts = max_attempts or self.settings.assistant_max_poll_attempts
        url = f"{self.settings.openai_base_url}/threads/{thread_id}/runs/{run_id}"
        for attempt in range(attempts):
            try:
                response = await self._http.get(
                    url, headers=self._headers(), timeout=self.settings.openai_timeout_seconds
                )
            except httpx.TransportError as exc:
                logger.warning("Polling run %s failed with %s (attempt %s/%s)", run_id, exc.__class__.__name__, attempt + 1, attempts)
                response = None

            if response is not None and response.is_success:
                run = _parse(AssistantRun, response)
                if run.status == RunStatus.COMPLETED:
                    return run
                try:
                    failure = TERMINAL_FAILURES.get(RunStatus(run.status))
                except ValueError:
                    logger.warning("Run %s reported unknown status %r; continuing to poll", run_id, run.status)
                    failure = None
                if failure:
                    message = run.last_error.message if run.last_error else None
                    raise AssistantRunError(f"{failure}: {message}" if message else failure, status=run.status)
            elif response is not None:
                logger.warning("Polling run %s returned %s (attempt %s/%s)", run_id, response.status_code, attempt + 1, attempts)

            if attempt < attempts - 1:
                await http_retry._sleep(http_retry.backoff_delay(attempt, max_delay=MAX_POLL_DELAY_SECONDS))

        raise AssistantTimeoutError(attempts)

    async def get_latest_message(self, thread_id: str) -> str:
        listing = await self._request(
            ThreadMessageList,
            "GET",
            f"/threads/{thread_id}/messages",
            params={"limit": 1, "order": "desc"},
        )
        if not listing.data:
            raise LLMResponseError("No messages found in thread")
        text = listing.data[0].text
        if text is None:
            raise LLMResponseError("Latest assistant message has no text content")
        return text

    async def send_message(self, assistant_id: str, content: str, thread_id: Optional[str] = None) -> ChatReply:
        """Post a message, run the assistant and return its reply with the thread id."""
        if not thread_id:
            thread_id = await self.create_thread()
            logger.info("Created assistant thread %s", thread_id)
        await self.add_message(thread_id, content)
        run_id = await self.create_run(thread_id, assistant_id)
        await self.poll_run(thread_id, run_id)
        message = await self.get_latest_message(thread_id)
        return ChatReply(message=message, thread_id=thread_id)
