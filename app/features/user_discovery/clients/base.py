"""
Shared HTTP plumbing for the upstream service adapters.
Owns the httpx client, timeouts, retry with backoff and error conversion.
"""

import asyncio
import time
from typing import Any

import httpx

from app.config import settings
from app.features.user_discovery.ports import PortUnavailableError
from app.infrastructure.observability.logging import get_logger, log_upstream_call

logger = get_logger(__name__)

RETRY_STATUS_CODES = {429, 500, 502, 503, 504}


class ServiceClient:
    """
    Base class for JSON-over-HTTP upstream adapters.

    Every failure mode is surfaced as PortUnavailableError so callers only
    have one exception type to handle.
    """

    service_name = "upstream"

    def __init__(
        self,
        base_url: str,
        client: httpx.AsyncClient | None = None,
        config: dict | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._config = config or settings.get_http_client_config()
        self._owns_client = client is None
        self._client = client or self._create_client()

    def _create_client(self) -> httpx.AsyncClient:
        """Create async HTTP client for the upstream service."""
        timeout = httpx.Timeout(
            self._config["read_timeout"], connect=self._config["connect_timeout"]
        )
        limits = httpx.Limits(
            max_keepalive_connections=20, max_connections=self._config["max_connections"]
        )
        return httpx.AsyncClient(
            timeout=timeout,
            limits=limits,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the underlying HTTP client if this adapter created it."""
        if self._owns_client:
            await self._client.aclose()

    def _backoff(self, attempt: int) -> float:
        return min(self._config["backoff"] * (2 ** (attempt - 1)), self._config["max_backoff"])

    async def _request_with_retry(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with retry and backoff."""
        max_retries = max(1, self._config["max_retries"])
        for attempt in range(1, max_retries + 1):
            try:
                response = await self._client.request(method, url, **kwargs)
                if response.status_code in RETRY_STATUS_CODES and attempt < max_retries:
                    backoff = self._backoff(attempt)
                    logger.debug(
                        f"{self.service_name} retrying request",
                        attempt=attempt,
                        status_code=response.status_code,
                        backoff_seconds=backoff,
                    )
                    await asyncio.sleep(backoff)
                    continue
                return response
            except httpx.RequestError as e:
                if attempt >= max_retries:
                    raise
                backoff = self._backoff(attempt)
                logger.debug(
                    f"{self.service_name} request error, retrying",
                    attempt=attempt,
                    error=str(e),
                    backoff_seconds=backoff,
                )
                await asyncio.sleep(backoff)
        raise RuntimeError(f"{self.service_name} retry loop exhausted")

    async def _get_json(self, path: str, operation: str, params: dict | None = None) -> Any:
        """
        GET a JSON document from the upstream service.

        Raises:
            PortUnavailableError: on transport errors, non-2xx responses or
                bodies that are not JSON
        """
        url = f"{self.base_url}{path}"
        t0 = time.time()

        try:
            response = await self._request_with_retry("GET", url, params=params)
        except httpx.HTTPError as e:
            latency_ms = round((time.time() - t0) * 1000, 1)
            log_upstream_call(self.service_name, operation, False, latency_ms, error=str(e))
            raise PortUnavailableError(
                f"{self.service_name} unreachable: {type(e).__name__}",
                service=self.service_name,
            ) from e

        latency_ms = round((time.time() - t0) * 1000, 1)

        if not response.is_success:
            log_upstream_call(
                self.service_name,
                operation,
                False,
                latency_ms,
                status_code=response.status_code,
                error=response.text[:200] if response.text else None,
            )
            raise PortUnavailableError(
                f"{self.service_name} {operation} failed (HTTP {response.status_code})",
                service=self.service_name,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            log_upstream_call(
                self.service_name,
                operation,
                False,
                latency_ms,
                status_code=response.status_code,
                error="invalid JSON",
            )
            raise PortUnavailableError(
                f"{self.service_name} {operation} returned invalid JSON",
                service=self.service_name,
                status_code=response.status_code,
            ) from e

        log_upstream_call(
            self.service_name, operation, True, latency_ms, status_code=response.status_code
        )
        return data

    async def ping(self) -> bool:
        """Check the upstream /health endpoint without retrying."""
        try:
            response = await self._client.get(f"{self.base_url}/health")
            return response.is_success
        except httpx.HTTPError as e:
            logger.warning(f"{self.service_name} health check failed", error=str(e))
            return False
