import httpx
import pytest

from recipe_assist.app.services import http_retry


def _client(responses, calls):
    def handler(request):
        calls.append(request)
        item = responses[min(len(calls), len(responses)) - 1]
        if isinstance(item, Exception):
            raise item
        return httpx.Response(item)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_server_errors_retried_until_exhausted(no_backoff_sleep):
    calls = []
    async with _client([500], calls) as client:
        response = await http_retry.request_with_retry(client, "POST", "https://api.test/x", max_retries=3)
    assert response.status_code == 500
    assert len(calls) == 4
    assert len(no_backoff_sleep) == 3


@pytest.mark.asyncio
async def test_client_errors_not_retried(no_backoff_sleep):
    calls = []
    async with _client([404], calls) as client:
        response = await http_retry.request_with_retry(client, "GET", "https://api.test/x", max_retries=3)
    assert response.status_code == 404
    assert len(calls) == 1
    assert no_backoff_sleep == []


@pytest.mark.asyncio
async def test_rate_limit_then_success():
    calls = []
    async with _client([429, 200], calls) as client:
        response = await http_retry.request_with_retry(client, "GET", "https://api.test/x")
    assert response.status_code == 200
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_transport_error_raised_after_last_attempt():
    calls = []
    async with _client([httpx.ConnectError("down")], calls) as client:
        with pytest.raises(httpx.ConnectError):
            await http_retry.request_with_retry(client, "GET", "https://api.test/x", max_retries=2)
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_transport_error_recovers():
    calls = []
    async with _client([httpx.ReadTimeout("slow"), 200], calls) as client:
        response = await http_retry.request_with_retry(client, "GET", "https://api.test/x")
    assert response.status_code == 200


def test_backoff_delay_grows_and_caps(monkeypatch):
    monkeypatch.setattr(http_retry.random, "uniform", lambda a, b: 0.1)
    assert http_retry.backoff_delay(0) == pytest.approx(0.6)
    assert http_retry.backoff_delay(2) == pytest.approx(2.1)
    assert http_retry.backoff_delay(5, max_delay=5.0) == 5.0


def test_retryable_statuses():
    assert http_retry.is_retryable_status(429)
    assert http_retry.is_retryable_status(503)
    assert not http_retry.is_retryable_status(400)
    assert not http_retry.is_retryable_status(401)
