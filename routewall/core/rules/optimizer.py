"""Single-pass deduplication and wildcard coverage pruning."""

from __future__ import annotations

from collections.abc import Iterable

from routewall.core.rules.matcher import path_matches_wildcard
from routewall.core.rules.paths import contains_wildcard, normalize_and_sort


def optimize(paths: Iterable[str]) -> list[str]:
    """Optimize a list of paths.

    - Normalize and sort the input
    - Drop exact duplicates
    - Skip entries covered by previously accepted wildcard rules
    - Remove accepted entries made redundant when a new wildcard is accepted

    Examples:
        ["/api/users/archive", "/blog/*", "api/users/*", "api/pages"]
        -> ["/api/pages", "/api/users/*", "/blog/*"]

    Returns:
        Accepted paths in acceptance order (sorted input order with gaps)
    """
    optimized: list[str] = []

    for path in normalize_and_sort(paths):
        if path in optimized:
            continue

        if _covered_by_wildcards(optimized, path):
            continue

        if contains_wildcard(path):
            optimized = [
                existing
                for existing in optimized
                if not path_matches_wildcard(existing, path)
            ]

        optimized.append(path)

    return optimized


def _covered_by_wildcards(optimized: list[str], path: str) -> bool:
    return any(
        contains_wildcard(existing) and path_matches_wildcard(path, existing)
        for existing in optimized
    )
