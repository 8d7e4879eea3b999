"""
Shared HTTP client utilities: configured AsyncClient and retry helper.
"""
from __future__ import annotations

import asyncio
import logging
import math
from contextlib import asynccontextmanager
from typing import Any, Dict, Iterable, Optional

import httpx

from idplatform.core.config import settings
from idplatform.core.error_handling import request_id_var

logger = logging.getLogger(__name__)


def get_async_client(
    timeout: Optional[float] = None,
    base_url: str = "",
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create a configured AsyncClient with shared limits/timeouts."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=timeout or settings.HTTP_CLIENT_TIMEOUT,
        limits=httpx.Limits(
            max_keepalive_connections=settings.HTTP_MAX_KEEPALIVE_CONNECTIONS,
            max_connections=settings.HTTP_MAX_CONNECTIONS,
        ),
        transport=transport,
    )


async def request_with_retry(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    headers: Optional[Dict[str, str]] = None,
    params: Optional[Dict[str, Any]] = None,
    json: Any = None,
    timeout: Optional[float] = None,
    retry_statuses: Iterable[int] | None = None,
    max_attempts: Optional[int] = None,
) -> httpx.Response:
    """
    Perform an HTTP request with bounded retries and exponential backoff.

    - Honors Retry-After headers for 429/503 when present.
    - Retries connection errors and configured status codes.
    - max_attempts=1 performs a single request with no retry.
    """
    attempts = max_attempts or settings.HTTP_RETRY_ATTEMPTS
    statuses = tuple(retry_statuses or settings.HTTP_RETRY_STATUSES)
    backoff_base = settings.HTTP_RETRY_BACKOFF_SECONDS
    req_id = request_id_var.get()

    for attempt in range(1, attempts + 1):
        try:
            response = await client.request(
                method,
                url,
                headers=headers,
                params=params,
                json=json,
                timeout=timeout or settings.HTTP_CLIENT_TIMEOUT,
            )

            if response.status_code not in statuses or attempt == attempts:
                return response

            delay = _get_retry_after_seconds(response) or backoff_base * math.pow(2, attempt - 1)
            logger.warning(
                f"[{req_id}] Retryable status {response.status_code} on {method} {url} "
                f"attempt {attempt}/{attempts}, sleeping {delay:.2f}s"
            )
            await asyncio.sleep(delay)

        except httpx.HTTPError as exc:
            if attempt == attempts:
                logger.error(f"[{req_id}] HTTP error on {method} {url} after {attempts} attempt(s): {exc}")
                raise
            delay = backoff_base * math.pow(2, attempt - 1)
            logger.warning(
                f"[{req_id}] HTTP error on attempt {attempt}/{attempts}: {exc}; sleeping {delay:.2f}s"
            )
            await asyncio.sleep(delay)

    raise RuntimeError("request_with_retry exhausted attempts")


def _get_retry_after_seconds(response: httpx.Response) -> Optional[float]:
    retry_after = response.headers.get("Retry-After")
    if not retry_after:
        return None
    try:
        return float(retry_after)
    except ValueError:
        return None


@asynccontextmanager
async def get_managed_client(
    persistent_client: Optional[httpx.AsyncClient] = None,
    timeout: Optional[float] = None,
    base_url: str = "",
    transport: Optional[httpx.AsyncBaseTransport] = None,
):
    """
    Context manager for HTTP client lifecycle.

    Reuses the persistent client if provided, otherwise creates a temporary
    one and closes it on exit.

    Example:
        async with get_managed_client(self._client, self.timeout) as client:
            response = await client.get(url)
    """
    should_close = persistent_client is None
    client = persistent_client or get_async_client(
        timeout=timeout, base_url=base_url, transport=transport
    )
    try:
        yield client
    finally:
        if should_close:
            await client.aclose()
