import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field("sqlite:///./recipe_assist.db", alias="DATABASE_URL")
    auth_secret_key: str = Field("change-me", alias="AUTH_SECRET_KEY")
    auth_algorithm: str = Field("HS256", alias="AUTH_ALGORITHM")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    openai_api_key: str | None = Field(None, alias="OPENAI_API_KEY")
    openai_base_url: str = Field("https://api.openai.com/v1", alias="OPENAI_BASE_URL")
    openai_model: str = Field("gpt-4o-mini", alias="OPENAI_MODEL")
    openai_max_retries: int = Field(3, alias="OPENAI_MAX_RETRIES")
    openai_timeout_seconds: float = Field(60.0, alias="OPENAI_TIMEOUT_SECONDS")
    max_conversation_turns: int = Field(10, alias="MAX_CONVERSATION_TURNS")
    # Assistant-powered personas
    assistant_nutritionist_id: str | None = Field(None, alias="ASSISTANT_NUTRITIONIST_ID")
    assistant_timeout_seconds: float = Field(60.0, alias="ASSISTANT_TIMEOUT_SECONDS")
    assistant_max_poll_attempts: int = Field(30, alias="ASSISTANT_MAX_POLL_ATTEMPTS")

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


logger = logging.getLogger(__name__)


@lru_cache
def get_settings() -> Settings:
    try:
        settings = Settings()
    except PermissionError:
        logger.warning("Unable to read .env; continuing with environment variables only")
        settings = Settings(_env_file=None)
    return settings
