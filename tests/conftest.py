import httpx
import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from recipe_assist.app.api.deps import get_db_session, get_services
from recipe_assist.app.core.config import Settings, get_settings
from recipe_assist.app.core.container import ServiceContainer
from recipe_assist.app.db import models  # noqa: F401
from recipe_assist.app.db.base import Base
from recipe_assist.app.main import create_app
from recipe_assist.app.services import http_retry

TEST_BASE_URL = "https://llm.test/v1"


class FakeOpenAI:
    """Queue of canned provider responses served through httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.responses = []

    def queue(self, status_code=200, json=None, exc=None):
        self.responses.append(exc if exc is not None else httpx.Response(status_code, json=json))

    def reply(self, content, usage=None):
        self.queue(
            json={
                "id": "chatcmpl-test",
                "model": "gpt-4o-mini",
                "choices": [{"index": 0, "message": {"role": "assistant", "content": content}, "finish_reason": "stop"}],
                "usage": usage or {"prompt_tokens": 10, "completion_tokens": 5, "total_tokens": 15},
            }
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.responses:
            return httpx.Response(404, json={"error": {"message": "no canned response"}})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def no_backoff_sleep(monkeypatch):
    delays = []

    async def fake_sleep(seconds):
        delays.append(seconds)

    monkeypatch.setattr(http_retry, "_sleep", fake_sleep)
    return delays


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def llm_settings():
    return Settings(
        OPENAI_API_KEY="test-key",
        OPENAI_BASE_URL=TEST_BASE_URL,
        OPENAI_MAX_RETRIES=2,
        ASSISTANT_NUTRITIONIST_ID=None,
        ASSISTANT_MAX_POLL_ATTEMPTS=3,
    )


@pytest.fixture
def http_client(fake_openai):
    return httpx.AsyncClient(transport=fake_openai.transport())


@pytest.fixture
def services(llm_settings, http_client):
    return ServiceContainer(llm_settings, http_client)


@pytest.fixture(scope="session")
def engine():
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    return engine


@pytest.fixture
def db_session(engine):
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(bind=connection, autocommit=False, autoflush=False, future=True)
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        transaction.rollback()
        connection.close()


@pytest.fixture
def app(db_session, services):
    app = create_app()

    def override_db():
        yield db_session

    app.dependency_overrides[get_db_session] = override_db
    app.dependency_overrides[get_services] = lambda: services
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def auth_settings():
    return get_settings()


def make_token(user_id: int, email: str, settings) -> str:
    payload = {"sub": str(user_id), "email": email}
    return jwt.encode(payload, settings.auth_secret_key, algorithm=settings.auth_algorithm)


@pytest.fixture
def user_token(auth_settings):
    return make_token(1, "user1@example.com", auth_settings)


@pytest.fixture
def other_user_token(auth_settings):
    return make_token(2, "user2@example.com", auth_settings)


@pytest.fixture
def auth_headers(user_token):
    return {"Authorization": f"Bearer {user_token}"}
