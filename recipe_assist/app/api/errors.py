from fastapi import HTTPException, status

from recipe_assist.app.core.errors import LLMClientError, LLMNotConfiguredError


def llm_http_error(exc: LLMClientError) -> HTTPException:
    """Translate a provider failure into the HTTP error the caller sees."""
    if isinstance(exc, LLMNotConfiguredError):
        return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc))
    if exc.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
        return HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail=str(exc))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))
