"""Collapse sibling paths into shared-ancestor wildcards.

Condensing is lossy on purpose: it trades matching precision for a shorter
expression. Two passes run over the input:

1. Paths that do not end in "/*" ("/shop", "/shop/cart", "/api/*/users")
   are grouped by a likely parent made of their first one or two segments.
   A group with one distinct path keeps it; larger groups become
   ``parent/*``.
2. Paths ending in "/*" ("/admin/*", "/admin/tools/*") are grouped by their
   top-level segment and replaced by their nearest shared ancestor plus
   "/*".

A final pass drops anything a surviving terminal wildcard already covers.
The root path "/" is never treated as covered by the root wildcard "/*".

Examples:
    ["/shop/cart", "/shop/cart/items", "/blog/*", "/blog/tags/*"]
    -> ["/blog/*", "/shop/cart/*"]
    ["/api/users/*/posts/*", "/api/users/*/comments/*"] -> ["/api/users/*"]
"""

from __future__ import annotations

from collections.abc import Iterable

from routewall.core.rules.matcher import path_matches_wildcard
from routewall.core.rules.paths import (
    ROOT_PATH,
    ROOT_WILDCARD,
    SEPARATOR,
    before_wildcard,
    ends_with_wildcard,
    normalize_and_sort,
    with_wildcard,
)


def condense(paths: Iterable[str]) -> list[str]:
    """Condense paths by collapsing siblings to their nearest common ancestor.

    Args:
        paths: Paths to condense (leading "/" optional)

    Returns:
        De-duplicated, sorted condensed paths
    """
    working = normalize_and_sort(paths)
    ending = [path for path in working if ends_with_wildcard(path)]
    non_ending = [path for path in working if not ends_with_wildcard(path)]

    condensed: list[str] = []

    for prefix, group in _group_non_ending(non_ending).items():
        if any(covers(wildcard, prefix) for wildcard in ending):
            continue
        condensed.append(_condense_non_ending_group(prefix, group))

    for prefix, group in _group_ending_by_top_level(ending).items():
        condensed.append(_condense_ending_group(prefix, group))

    return sorted(_prune_covered(list(dict.fromkeys(condensed))))


def covers(wildcard: str, path: str) -> bool:
    """Return True when a terminal wildcard entry covers a path during condensing.

    The root wildcard never covers the root path; "/" survives next to "/*".
    """
    if wildcard == ROOT_WILDCARD and path == ROOT_PATH:
        return False
    return path_matches_wildcard(path, wildcard)


def group_key(path: str) -> str:
    """Return the likely parent of a non-ending path.

    The path is cut at its first "/*" and reduced to its first one or two
    segments:
        "/shop" -> "/shop"
        "/shop/cart/items" -> "/shop/cart"
        "/mailcoach/1234/*/1234" -> "/mailcoach/1234"
    """
    segments = before_wildcard(path).strip(SEPARATOR).split(SEPARATOR)
    if len(segments) == 1:
        return SEPARATOR + segments[0]
    return SEPARATOR + segments[0] + SEPARATOR + segments[1]


def top_level_key(path: str) -> str:
    """Return "/<first segment>" of a terminal-wildcard path, or "/" when it has none."""
    segments = before_wildcard(path).strip(SEPARATOR).split(SEPARATOR)
    return SEPARATOR + segments[0] if segments[0] else ROOT_PATH


def _group_non_ending(paths: list[str]) -> dict[str, list[str]]:
    groups: dict[str, list[str]] = {}
    for path in paths:
        groups.setdefault(group_key(path), []).append(path)
    return groups


def _group_ending_by_top_level(paths: list[str]) -> dict[str, list[str]]:
    groups: dict[str, list[str]] = {}
    for path in paths:
        groups.setdefault(top_level_key(path), []).append(path)
    return groups


def _condense_non_ending_group(prefix: str, group: list[str]) -> str:
    """Reduce a group to its prefix, or prefix/* when its members differ.

    A group holding a single distinct path is kept as that path.

    - prefix "/shop", group ["/shop"] -> "/shop"
    - prefix "/shop/cart", group ["/shop/cart/items"] -> "/shop/cart/items"
    - prefix "/shop/cart", group ["/shop/cart", "/shop/cart/items"] -> "/shop/cart/*"
    - prefix "/shop/cart", group ["/shop/cart/a", "/shop/cart/b"] -> "/shop/cart/*"
    """
    if len(set(group)) == 1:
        return group[0]
    return with_wildcard(prefix)


def _condense_ending_group(prefix: str, group: list[str]) -> str:
    """Reduce terminal wildcards to their longest common segment prefix plus "/*".

    - prefix "/admin", group ["/admin/*", "/admin/tools/*"] -> "/admin/*"
    - prefix "/", group ["/*", "/*/feed/*"] -> "/*"
    """
    if len(group) == 1:
        return group[0]

    segment_lists = [_wildcard_base_segments(path) for path in group]
    common: list[str] = []
    for index, segment in enumerate(segment_lists[0]):
        if not all(
            index < len(segments) and segments[index] == segment
            for segments in segment_lists
        ):
            break
        common.append(segment)

    if not common:
        return with_wildcard(prefix)
    return SEPARATOR + SEPARATOR.join(common) + "/*"


def _wildcard_base_segments(path: str) -> list[str]:
    base = before_wildcard(path).strip(SEPARATOR)
    return base.split(SEPARATOR) if base else []


def _prune_covered(paths: list[str]) -> list[str]:
    """Drop entries covered by a broader terminal wildcard in the same set.

    "/account/*" removes "/account/subscription/*" and "/account/profile".
    """
    remaining = paths
    for wildcard in [path for path in paths if ends_with_wildcard(path)]:
        remaining = [
            path
            for path in remaining
            if path == wildcard or not covers(wildcard, path)
        ]
    return remaining
