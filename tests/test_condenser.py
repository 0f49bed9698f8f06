"""Tests for the condense pass."""

from __future__ import annotations

from routewall.core.rules.condenser import condense, covers, group_key, top_level_key
from routewall.core.rules.optimizer import optimize
from tests.helpers import MAILCOACH_PATHS


class TestCondense:
    def test_terminal_wildcards_collapse_to_common_ancestor(self) -> None:
        paths = ["/api/users/*/posts/*", "/api/users/*/comments/*"]

        assert condense(paths) == ["/api/users/*"]

    def test_two_passes_merge_branches(self) -> None:
        first = condense(optimize(MAILCOACH_PATHS))

        assert first == [
            "/api/users",
            "/blog/*",
            "/images/*",
            "/mailcoach/1234/*",
            "/mailcoach/5678/*",
        ]

        second = condense(first)

        assert second == ["/api/users", "/blog/*", "/images/*", "/mailcoach/*"]

    def test_siblings_collapse_to_parent_wildcard(self) -> None:
        paths = ["/shop/cart", "/shop/cart/items", "/blog/*", "/blog/tags/*"]

        assert condense(paths) == ["/blog/*", "/shop/cart/*"]

    def test_lone_exact_path_is_kept(self) -> None:
        assert condense(["/about", "/contact"]) == ["/about", "/contact"]

    def test_lone_nested_path_is_not_widened(self) -> None:
        assert condense(["/x/page/detail"]) == ["/x/page/detail"]
        assert condense(["/*/about"]) == ["/*/about"]

    def test_distinct_sections_do_not_grow(self) -> None:
        paths = optimize([f"/section{i}/page/detail" for i in range(40)])

        assert condense(paths) == paths

    def test_path_under_surviving_wildcard_is_dropped(self) -> None:
        assert condense(["/docs/*", "/docs/intro"]) == ["/docs/*"]

    def test_internal_wildcard_groups_on_prefix_before_it(self) -> None:
        assert condense(["/api/*/users", "/api/*/teams"]) == ["/api/*"]

    def test_broader_wildcard_prunes_condensed_entries(self) -> None:
        paths = ["/account/*", "/account/profile", "/account/subscription/*"]

        assert condense(paths) == ["/account/*"]

    def test_root_path_survives_root_wildcard(self) -> None:
        assert condense(["/", "/*"]) == ["/", "/*"]
        assert condense(["/", "/*", "/about"]) == ["/", "/*"]

    def test_output_is_sorted_and_unique(self) -> None:
        result = condense(["/b/x", "/a/y", "/b/x", "/a/y/z"])

        assert result == sorted(set(result))

    def test_empty_input(self) -> None:
        assert condense([]) == []

    def test_reaches_fixed_point(self) -> None:
        current = optimize(MAILCOACH_PATHS)
        for _ in range(10):
            condensed = condense(current)
            if condensed == current:
                break
            current = condensed

        assert condense(current) == current

    def test_is_deterministic(self) -> None:
        shuffled = list(reversed(MAILCOACH_PATHS))

        assert condense(MAILCOACH_PATHS) == condense(shuffled)


class TestHelpers:
    def test_group_key_uses_first_two_segments(self) -> None:
        assert group_key("/shop") == "/shop"
        assert group_key("/shop/cart/items") == "/shop/cart"
        assert group_key("/mailcoach/1234/*/1234") == "/mailcoach/1234"
        assert group_key("/api/*/users") == "/api"

    def test_top_level_key(self) -> None:
        assert top_level_key("/admin/tools/*") == "/admin"
        assert top_level_key("/*") == "/"

    def test_covers_exempts_root(self) -> None:
        assert not covers("/*", "/")
        assert covers("/*", "/about")
        assert covers("/blog/*", "/blog")
