"""Wildcard coverage checks between path patterns."""

from __future__ import annotations

from routewall.core.rules.paths import WILDCARD, split_segments


def path_matches_wildcard(concrete_path: str, wildcard_rule: str) -> bool:
    """Determine whether a path is covered by a wildcard rule.

    Semantics:
    - A terminal "*" segment covers the base path itself and anything beneath
      it: "/blog/*" matches "/blog", "/blog/" and "/blog/2024/10/post".
    - An internal "*" segment matches exactly one non-empty segment:
      "/api/*/users" matches "/api/v1/users" but not "/api/users" or
      "/api/v1/admin/users".
    - Any other segment, including ones that merely contain "*" such as
      "@*", must match exactly.

    The concrete path may itself contain wildcards; they are compared like
    any other segment, so "/api/*" matches "/api/users/*/posts/*".

    Args:
        concrete_path: Path being tested (leading "/" optional)
        wildcard_rule: Rule path (leading "/" optional)

    Returns:
        True if the rule covers the path
    """
    rule_segments = split_segments(wildcard_rule)
    path_segments = split_segments(concrete_path)

    if rule_segments[-1] == WILDCARD:
        prefix = rule_segments[:-1]
        if not prefix:
            # Root wildcard covers every path, including "/".
            return True
        if len(path_segments) < len(prefix):
            return False
        return _segments_match(prefix, path_segments[: len(prefix)])

    if len(rule_segments) != len(path_segments):
        return False
    return _segments_match(rule_segments, path_segments)


def _segments_match(rule_segments: list[str], path_segments: list[str]) -> bool:
    for rule_segment, path_segment in zip(rule_segments, path_segments, strict=True):
        if rule_segment == WILDCARD:
            if not path_segment:
                return False
            continue
        if rule_segment != path_segment:
            return False
    return True
