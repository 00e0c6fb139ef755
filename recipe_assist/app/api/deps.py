from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from recipe_assist.app.core.config import get_settings
from recipe_assist.app.core.container import ServiceContainer
from recipe_assist.app.db.session import get_db
from recipe_assist.app.schemas.auth import CurrentUser
from recipe_assist.app.services.llm_client import ChatCompletionClient

security = HTTPBearer(auto_error=True)


def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(security)) -> CurrentUser:
    settings = get_settings()
    try:
        payload = jwt.decode(credentials.credentials, settings.auth_secret_key, algorithms=[settings.auth_algorithm])
        sub = payload.get("sub")
        if sub is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
        return CurrentUser(id=int(sub), email=payload.get("email"))
    except (JWTError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")


def get_db_session(db: Session = Depends(get_db)) -> Session:
    return db


def get_services(request: Request) -> ServiceContainer:
    return request.app.state.services


def get_optional_chat_client(services: ServiceContainer = Depends(get_services)) -> Optional[ChatCompletionClient]:
    return services.chat_client


def get_chat_client(client: Optional[ChatCompletionClient] = Depends(get_optional_chat_client)) -> ChatCompletionClient:
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="OpenAI API key not configured. Set OPENAI_API_KEY.",
        )
    return client
