"""Route inventory loading and cleanup.

Route lists come from three kinds of files:
- a JSON array of route objects with a ``uri`` key (and optional ``name``
  and ``method``), as printed by framework route listers;
- an OpenAPI 3.x document in JSON or YAML, whose ``paths`` keys are used;
- plain text with one path per line (blank lines and ``#`` comments skipped).
"""

from __future__ import annotations

import fnmatch
import json
import re
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from routewall.core.rules.paths import normalize_path
from routewall.models.settings import DEFAULT_IGNORABLE_PATHS

_PLACEHOLDER_RE = re.compile(r"\{[^}]+\}")
_DUPLICATE_SLASHES_RE = re.compile(r"//+")

# Catch-all routes would allow everything; they never belong in an allowlist.
_CATCH_ALL_ROUTES = {"*", "/*"}


class RouteInventoryError(ValueError):
    """Raised when a route list file cannot be read."""


@dataclass(frozen=True)
class RouteEntry:
    """A single route template from the application."""

    uri: str
    name: str | None = None
    method: str | None = None


def load_route_entries(path: Path) -> list[RouteEntry]:
    """Load route entries from a route list, OpenAPI document, or text file.

    Raises:
        RouteInventoryError: If the file is missing or has an unknown shape
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RouteInventoryError(f"Cannot read route list {path}: {exc}") from exc

    data = _parse_structured(path, content)
    if data is None:
        return [
            RouteEntry(uri=line.strip())
            for line in content.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]

    if isinstance(data, dict) and isinstance(data.get("paths"), dict):
        return [RouteEntry(uri=str(template)) for template in data["paths"]]

    if isinstance(data, list):
        return [_entry_from_item(item, path) for item in data]

    raise RouteInventoryError(
        f"Unrecognized route list format in {path}: expected a list of routes "
        "or an OpenAPI document"
    )


def _parse_structured(path: Path, content: str) -> Any | None:
    """Parse JSON/YAML content; None means treat the file as plain text."""
    if path.suffix == ".json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as exc:
            raise RouteInventoryError(f"Invalid JSON in {path}: {exc}") from exc

    if path.suffix in (".yaml", ".yml"):
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise RouteInventoryError(f"Invalid YAML in {path}: {exc}") from exc

    stripped = content.lstrip()
    if stripped.startswith(("[", "{")):
        try:
            return json.loads(content)
        except json.JSONDecodeError:
            return None
    return None


def _entry_from_item(item: Any, path: Path) -> RouteEntry:
    if isinstance(item, str):
        return RouteEntry(uri=item)
    if isinstance(item, dict) and isinstance(item.get("uri"), str):
        name = item.get("name")
        method = item.get("method")
        return RouteEntry(
            uri=item["uri"],
            name=name if isinstance(name, str) else None,
            method=method if isinstance(method, str) else None,
        )
    raise RouteInventoryError(f"Route entry without a 'uri' in {path}: {item!r}")


def rewrite_placeholders(path: str) -> str:
    """Replace route parameter placeholders with single-segment wildcards.

    Examples:
        "users/{user}/posts/{post?}" -> "users/*/posts/*"
        "files//{file}" -> "files/*"
    """
    if "{" not in path:
        return path
    return _DUPLICATE_SLASHES_RE.sub("/", _PLACEHOLDER_RE.sub("*", path))


def is_ignorable_path(path: str, patterns: Iterable[str]) -> bool:
    """Check a normalized path against ignorable glob patterns ("*" crosses "/")."""
    return any(
        fnmatch.fnmatchcase(path, normalize_path(pattern)) for pattern in patterns
    )


def collect_routes(
    uris: Iterable[str],
    public_paths: Iterable[str] = (),
    ignorable: Iterable[str] | None = None,
) -> list[str]:
    """Build the raw path inventory fed to the rule compactor.

    Route URIs and public asset paths are merged, placeholders rewritten,
    leading slashes added, catch-all routes dropped, and ignorable paths
    removed. Order is preserved and duplicates are dropped.

    Args:
        uris: Route URI templates
        public_paths: Static asset paths (directories already as "name/*")
        ignorable: Glob patterns to drop (defaults to ["/_dusk/*"])

    Returns:
        Cleaned path inventory
    """
    patterns = list(DEFAULT_IGNORABLE_PATHS if ignorable is None else ignorable)
    routes: list[str] = []

    for uri in [*uris, *public_paths]:
        if uri.strip() in _CATCH_ALL_ROUTES:
            continue
        path = normalize_path(rewrite_placeholders(uri.strip()))
        if path in _CATCH_ALL_ROUTES or is_ignorable_path(path, patterns):
            continue
        if path not in routes:
            routes.append(path)

    return routes


def resolve_named_routes(entries: Iterable[RouteEntry], names: Iterable[str]) -> list[str]:
    """Resolve route names to normalized paths; unknown names are skipped."""
    by_name = {entry.name: entry for entry in entries if entry.name}
    resolved: list[str] = []
    for name in names:
        entry = by_name.get(name)
        if entry is None:
            continue
        path = normalize_path(rewrite_placeholders(entry.uri))
        if path not in resolved:
            resolved.append(path)
    return resolved
