"""Tests for path normalization helpers."""

from __future__ import annotations

from routewall.core.rules.paths import (
    before_wildcard,
    ends_with_wildcard,
    normalize_and_sort,
    normalize_path,
    split_segments,
    with_wildcard,
)


def test_normalize_path_adds_leading_separator() -> None:
    assert normalize_path("users") == "/users"
    assert normalize_path("/admin") == "/admin"
    assert normalize_path("") == "/"


def test_normalize_and_sort_keeps_duplicates_in_code_point_order() -> None:
    result = normalize_and_sort(["b", "/a/*", "/a/b", "a/*", "/B"])

    assert result == ["/B", "/a/*", "/a/*", "/a/b", "/b"]


def test_split_segments() -> None:
    assert split_segments("/") == [""]
    assert split_segments("/a/b") == ["a", "b"]
    assert split_segments("a/*") == ["a", "*"]


def test_wildcard_helpers() -> None:
    assert ends_with_wildcard("/blog/*")
    assert not ends_with_wildcard("/prefix*")
    assert before_wildcard("/api/users/*/posts/*") == "/api/users"
    assert before_wildcard("/api/users") == "/api/users"
    assert with_wildcard("/mailcoach") == "/mailcoach/*"
    assert with_wildcard("/") == "/*"
