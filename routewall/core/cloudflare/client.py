"""HTTP client for the Cloudflare v4 API."""

from __future__ import annotations

import logging
from typing import Any, Self

import httpx
from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_exponential,
)

from routewall.core.cloudflare.errors import (
    CloudflareApiError,
    CloudflareError,
    first_error,
    response_payload,
)
from routewall.models.settings import DEFAULT_API_BASE_URL, ApiSettings

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


def _is_retryable(response: httpx.Response) -> bool:
    return response.status_code in RETRYABLE_STATUS_CODES


def _last_outcome(retry_state: RetryCallState) -> Any:
    # Hand back the final response (or re-raise the final error) once attempts run out.
    if retry_state.outcome is None:
        return None
    return retry_state.outcome.result()


class CloudflareApiClient:
    """Thin wrapper around ``httpx.Client`` with auth, retries, and error mapping."""

    def __init__(
        self,
        api_token: str,
        zone_id: str,
        *,
        base_url: str = DEFAULT_API_BASE_URL,
        timeout: float = 30.0,
        retry_attempts: int = 3,
        retry_delay: int = 1000,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Create a client for one zone.

        Args:
            api_token: Cloudflare API token
            zone_id: Cloudflare zone ID
            base_url: API base URL
            timeout: Request timeout in seconds
            retry_attempts: Total attempts per request, including the first
            retry_delay: Initial delay between attempts in milliseconds
            transport: Optional transport override (used by tests)
        """
        self.zone_id = zone_id
        self.base_url = base_url.rstrip("/") + "/"
        self.retry_attempts = max(1, retry_attempts)
        self.retry_delay = max(0, retry_delay)
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={
                "Authorization": f"Bearer {api_token}",
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls,
        settings: ApiSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> Self:
        return cls(
            settings.token or "",
            settings.zone_id or "",
            base_url=settings.base_url,
            timeout=settings.timeout,
            retry_attempts=settings.retry_attempts,
            retry_delay=settings.retry_delay,
            transport=transport,
        )

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get(self, endpoint: str, params: dict[str, Any] | None = None) -> httpx.Response:
        return self._request("GET", endpoint, params=params)

    def post(self, endpoint: str, data: Any = None) -> httpx.Response:
        return self._request("POST", endpoint, json=data if data is not None else {})

    def put(self, endpoint: str, data: Any = None) -> httpx.Response:
        return self._request("PUT", endpoint, json=data if data is not None else {})

    def delete(self, endpoint: str) -> httpx.Response:
        return self._request("DELETE", endpoint)

    def zone_endpoint(self, *parts: str) -> str:
        """Build a zone-scoped endpoint, e.g. ``zones/<id>/filters``."""
        return "/".join(["zones", self.zone_id, *parts])

    @staticmethod
    def result(response: httpx.Response, default: Any = None) -> Any:
        """Return the ``result`` member of a Cloudflare response envelope."""
        payload = response_payload(response)
        if payload is None:
            return default
        value = payload.get("result")
        return default if value is None else value

    def _request(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        endpoint = endpoint.lstrip("/")
        retrying = Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_exponential(multiplier=self.retry_delay / 1000, max=30),
            retry=retry_if_exception_type(httpx.TransportError) | retry_if_result(_is_retryable),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            retry_error_callback=_last_outcome,
        )

        try:
            response: httpx.Response = retrying(
                self._client.request, method, endpoint, **kwargs
            )
        except httpx.TransportError as exc:
            raise CloudflareError(f"{method} request failed: {exc}") from exc

        logger.debug("%s %s -> %d", method, endpoint, response.status_code)
        if not response.is_success:
            self._raise_api_error(response, f"{method} request failed", endpoint, method)
        return response

    @staticmethod
    def _raise_api_error(
        response: httpx.Response,
        context: str,
        endpoint: str,
        method: str,
    ) -> None:
        if response.status_code in (401, 403):
            raise CloudflareApiError.authentication_failed(response)

        if response.status_code == 429:
            raise CloudflareApiError.rate_limit_exceeded(response)

        message = first_error(response_payload(response), "message") or ""
        if "zone" in message.lower():
            raise CloudflareApiError.zone_configuration_error(response)

        raise CloudflareApiError.from_response(response, context, endpoint, method)
