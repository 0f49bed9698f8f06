"""Test helpers shared across routewall tests."""

from __future__ import annotations

from collections.abc import Callable

import httpx

from routewall.models.settings import ApiSettings, AppSettings, Settings

Handler = Callable[[httpx.Request], httpx.Response]

# Nested mailcoach routes mixed with unrelated entries; condenses in two passes.
MAILCOACH_PATHS = [
    "/mailcoach/5678/*",
    "/mailcoach/1234/1234",
    "/api/users",
    "/mailcoach/1234/1234/1234",
    "mailcoach/1234/*/1234/1234",
    "/mailcoach/1234",
    "/images/*",
    "/mailcoach/1234/1234/1234/1234/1234",
    "mailcoach/5678/9101",
    "blog/*",
    "/mailcoach/1234/1234/1234/1234/1234/1234",
    "/mailcoach/1234/1234/1234/*/1234/1234",
]


def make_settings(
    *,
    token: str | None = "test-token",
    zone_id: str | None = "zone123",
    app_url: str | None = "https://example.com",
) -> Settings:
    """Create Settings whose API client retries without sleeping."""
    return Settings(
        api=ApiSettings(token=token, zone_id=zone_id, retry_delay=0),
        app=AppSettings(url=app_url),
    )


def envelope(result: object, *, success: bool = True, errors: list | None = None) -> dict:
    """Wrap a result in the Cloudflare v4 response envelope."""
    return {"success": success, "errors": errors or [], "messages": [], "result": result}


def error_response(
    status: int,
    message: str,
    code: int = 1000,
    headers: dict[str, str] | None = None,
) -> httpx.Response:
    return httpx.Response(
        status,
        json=envelope(None, success=False, errors=[{"code": code, "message": message}]),
        headers=headers,
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Handler) -> None:
        self.requests: list[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)

    def calls(self) -> list[tuple[str, str]]:
        return [(request.method, request.url.path) for request in self.requests]
