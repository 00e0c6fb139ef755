"""
Exceptions raised by the chat-completion and assistant collaborators.
"""

from typing import Optional


class LLMClientError(Exception):
    """Base error for calls to the chat-completion provider"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class LLMNotConfiguredError(LLMClientError):
    """Raised when no API key is configured for the provider"""

    def __init__(self):
        super().__init__("OpenAI API key not configured. Set OPENAI_API_KEY.")


class LLMResponseError(LLMClientError):
    """Raised when the provider answers with a body we cannot use"""


class AssistantRunError(LLMClientError):
    """Raised when an assistant run ends in a terminal non-success state"""

    def __init__(self, message: str, status: Optional[str] = None):
        self.status = status
        super().__init__(message)


class AssistantTimeoutError(AssistantRunError):
    """Raised when polling an assistant run exhausts its attempts"""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Assistant processing timed out after {attempts} attempts", status="timeout")
