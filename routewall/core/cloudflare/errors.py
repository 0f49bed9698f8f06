"""Cloudflare error types."""

from __future__ import annotations

from typing import Any

import httpx


class CloudflareError(RuntimeError):
    """Base error for Cloudflare operations."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_response: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.error_response = error_response

    @property
    def is_authentication_error(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_rate_limit_error(self) -> bool:
        return self.status_code == 429


class CloudflareApiError(CloudflareError):
    """Raised when a Cloudflare API request fails."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        error_response: dict[str, Any] | None = None,
        endpoint: str | None = None,
        method: str | None = None,
    ) -> None:
        super().__init__(message, status_code=status_code, error_response=error_response)
        self.endpoint = endpoint
        self.method = method

    @classmethod
    def from_response(
        cls,
        response: httpx.Response,
        context: str = "API request failed",
        endpoint: str | None = None,
        method: str | None = None,
    ) -> CloudflareApiError:
        payload = response_payload(response)
        message = f"{context}: {first_error(payload, 'message') or 'Unknown error'}"
        code = first_error(payload, "code")
        if code:
            message += f" (Code: {code})"
        return cls(
            message,
            status_code=response.status_code,
            error_response=payload,
            endpoint=endpoint,
            method=method,
        )

    @classmethod
    def authentication_failed(cls, response: httpx.Response) -> CloudflareApiError:
        payload = response_payload(response)
        detail = first_error(payload, "message") or "Authentication failed"
        return cls(
            f"Cloudflare authentication error: {detail}. "
            "Please check your API token and permissions.",
            status_code=response.status_code,
            error_response=payload,
        )

    @classmethod
    def zone_configuration_error(cls, response: httpx.Response) -> CloudflareApiError:
        payload = response_payload(response)
        detail = first_error(payload, "message") or "Zone configuration error"
        return cls(
            f"Cloudflare configuration error: {detail}. Please check your Zone ID.",
            status_code=response.status_code,
            error_response=payload,
        )

    @classmethod
    def rate_limit_exceeded(cls, response: httpx.Response) -> CloudflareApiError:
        message = "Cloudflare API rate limit exceeded"
        retry_after = response.headers.get("Retry-After")
        if retry_after:
            message += f". Retry after {retry_after} seconds"
        return cls(
            message,
            status_code=429,
            error_response=response_payload(response),
        )


def response_payload(response: httpx.Response) -> dict[str, Any] | None:
    """Decode a JSON object body, or None when the body is not one."""
    try:
        payload = response.json()
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


def first_error(payload: dict[str, Any] | None, key: str) -> str | None:
    """Return ``errors[0][key]`` from a Cloudflare response envelope."""
    if not payload:
        return None
    errors = payload.get("errors")
    if not isinstance(errors, list) or not errors or not isinstance(errors[0], dict):
        return None
    value = errors[0].get(key)
    return None if value is None else str(value)
