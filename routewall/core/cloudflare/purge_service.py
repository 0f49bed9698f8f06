"""Cache purge requests."""

from __future__ import annotations

import re
from collections.abc import Iterable

from routewall.core.cloudflare.client import CloudflareApiClient
from routewall.core.cloudflare.errors import CloudflareError
from routewall.models.results import CachePurgeResult
from routewall.models.settings import Settings
from routewall.utils.config import ConfigValidationError, require_api_credentials

_ABSOLUTE_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def expand_purge_url(path: str, app_url: str | None) -> str:
    """Expand a relative path against the application URL.

    Examples:
        ("/blog/post", "https://example.com/") -> "https://example.com/blog/post"
        ("https://cdn.example.com/a.css", ...) -> unchanged

    Raises:
        ConfigValidationError: If the path is relative and no app URL is set
    """
    if _ABSOLUTE_URL_RE.match(path):
        return path
    if not app_url:
        raise ConfigValidationError(
            f"Cannot purge relative path '{path}': configuration 'app.url' is not set"
        )
    return app_url.rstrip("/") + "/" + path.lstrip("/")


class CachePurgeService:
    """Purge everything, or a list of URLs, from the zone's cache."""

    def __init__(self, settings: Settings, client: CloudflareApiClient | None = None) -> None:
        self.settings = settings
        if client is None:
            require_api_credentials(settings)
            client = CloudflareApiClient.from_settings(settings.api)
        self.client = client

    def purge_cache(self, paths: Iterable[str] | None = None) -> CachePurgeResult:
        """Purge the given paths, or all cached content when none are given."""
        files = [expand_purge_url(path, self.settings.app.url) for path in paths or []]
        files = list(dict.fromkeys(files))

        if files:
            payload: dict[str, object] = {"files": files}
            message = "Successfully purged specified cached content"
        else:
            payload = {"purge_everything": True}
            message = "Successfully purged all cached content"

        response = self.client.post(self.client.zone_endpoint("purge_cache"), payload)
        result = self.client.result(response, {})
        if "id" not in result:
            raise CloudflareError("Cache purge response did not include a purge id")

        return CachePurgeResult(id=str(result["id"]), message=message, files=files)
