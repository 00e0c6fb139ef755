"""Bounded exponential backoff for calls to rate-limited HTTP APIs."""

import asyncio
import logging
import random
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

BASE_DELAY_SECONDS = 0.5
MAX_JITTER_SECONDS = 0.2


def backoff_delay(
    attempt: int,
    base_delay: float = BASE_DELAY_SECONDS,
    max_delay: Optional[float] = None,
) -> float:
    """base_delay * 2**attempt plus up to 200 ms of jitter."""
    delay = base_delay * (2**attempt) + random.uniform(0, MAX_JITTER_SECONDS)
    if max_delay is not None:
        delay = min(delay, max_delay)
    return delay


async def _sleep(seconds: float) -> None:
    await asyncio.sleep(seconds)


def is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    max_retries: int = 3,
    base_delay: float = BASE_DELAY_SECONDS,
    **request_kwargs: Any,
) -> httpx.Response:
    """Send a request, retrying 429/5xx responses and transport errors.

    Makes at most max_retries + 1 attempts. When retries run out on a
    retryable status the last response is returned for the caller to inspect;
    when they run out on a transport error that error is raised. Other 4xx
    responses are returned straight away.
    """
    for attempt in range(max_retries + 1):
        try:
            response = await client.request(method, url, **request_kwargs)
        except httpx.TransportError as exc:
            if attempt == max_retries:
                raise
            delay = backoff_delay(attempt, base_delay)
            logger.warning(
                "%s %s failed with %s; retrying in %.2fs (attempt %s/%s)",
                method,
                url,
                exc.__class__.__name__,
                delay,
                attempt + 1,
                max_retries,
            )
            await _sleep(delay)
            continue

        if response.is_success or not is_retryable_status(response.status_code):
            return response
        if attempt == max_retries:
            logger.warning("%s %s still returning %s after %s retries", method, url, response.status_code, max_retries)
            return response

        delay = backoff_delay(attempt, base_delay)
        logger.warning(
            "%s %s returned %s; retrying in %.2fs (attempt %s/%s)",
            method,
            url,
            response.status_code,
            delay,
            attempt + 1,
            max_retries,
        )
        await _sleep(delay)

    raise RuntimeError("unreachable")
