"""Tests for the stateful rule builder."""

from __future__ import annotations

import pytest

from routewall.core.rules.builder import RuleBuilder, RuleStateError


def test_condense_without_paths_or_state_raises() -> None:
    with pytest.raises(RuleStateError, match="optimized previously"):
        RuleBuilder().condense()


def test_condense_uses_optimized_paths() -> None:
    builder = RuleBuilder()
    builder.optimize(["/api/users/*/posts/*", "/api/users/*/comments/*"])

    assert builder.condense() == ["/api/users/*"]
    assert builder.paths == ["/api/users/*"]


def test_expression_renders_stored_paths() -> None:
    builder = RuleBuilder()
    builder.optimize(["/@*", "/prefix*"])

    assert builder.expression() == (
        'not (http.request.uri.path wildcard "/@*" or '
        'http.request.uri.path wildcard "/prefix*")'
    )


def test_explicit_paths_take_precedence() -> None:
    builder = RuleBuilder()
    builder.optimize(["/a"])

    assert builder.condense(["/b/c/1", "/b/c/2"]) == ["/b/c/*"]
    assert builder.expression(["/x"]) == 'not (http.request.uri.path in {"/x"})'
