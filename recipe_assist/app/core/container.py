"""Application-scoped collaborators, built once and closed on shutdown."""

import logging
from typing import Optional

import httpx

from recipe_assist.app.core.config import Settings
from recipe_assist.app.services.assistant_client import AssistantClient
from recipe_assist.app.services.llm_client import ChatCompletionClient

logger = logging.getLogger(__name__)


class ServiceContainer:
    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.http_client = http_client or httpx.AsyncClient(timeout=settings.openai_timeout_seconds)
        self.assistant_client = AssistantClient(settings, self.http_client)
        # None when no API key is configured; AI features then report 503.
        self.chat_client: Optional[ChatCompletionClient] = None
        if settings.openai_api_key:
            self.chat_client = ChatCompletionClient(settings, self.http_client)
        else:
            logger.warning("OPENAI_API_KEY is not set; AI chat and AI recipe parsing are disabled")

    async def aclose(self) -> None:
        await self.http_client.aclose()
