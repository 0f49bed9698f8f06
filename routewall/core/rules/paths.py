"""Path normalization and segment helpers shared by the rule passes."""

from __future__ import annotations

from collections.abc import Iterable

SEPARATOR = "/"
WILDCARD = "*"
TERMINAL_WILDCARD = "/*"
ROOT_PATH = "/"
ROOT_WILDCARD = "/*"


def normalize_path(path: str) -> str:
    """Ensure a path starts with the separator.

    Examples:
        "users" -> "/users"
        "/admin" -> "/admin"
    """
    return path if path.startswith(SEPARATOR) else SEPARATOR + path


def normalize_and_sort(paths: Iterable[str]) -> list[str]:
    """Normalize every path and sort by code point order.

    Duplicates are kept; removing them is the optimizer's job.
    """
    return sorted(normalize_path(path) for path in paths)


def split_segments(path: str) -> list[str]:
    """Split a normalized path into segments.

    The leading separator is dropped, so "/" yields [""] and "/a/b" yields
    ["a", "b"].
    """
    return normalize_path(path)[1:].split(SEPARATOR)


def contains_wildcard(path: str) -> bool:
    return WILDCARD in path


def ends_with_wildcard(path: str) -> bool:
    """Terminal-wildcard entry, e.g. "/blog/*"."""
    return path.endswith(TERMINAL_WILDCARD)


def before_wildcard(path: str) -> str:
    """Return the part of a path before its first "/*" (the whole path when absent)."""
    index = path.find(TERMINAL_WILDCARD)
    return path if index == -1 else path[:index]


def with_wildcard(prefix: str) -> str:
    """Append a terminal wildcard to a prefix ("/" becomes "/*")."""
    return prefix.rstrip(SEPARATOR) + TERMINAL_WILDCARD
