"""Stateful wrapper that threads a path set between rule passes."""

from __future__ import annotations

from collections.abc import Iterable

from routewall.core.rules.condenser import condense
from routewall.core.rules.expression import DEFAULT_FIELD, build_expression
from routewall.core.rules.optimizer import optimize


class RuleStateError(ValueError):
    """Raised when a pass needs a path set that was never provided."""


class RuleBuilder:
    """Keep the most recent optimized or condensed path set.

    Typical flow: ``optimize(paths)``, then ``condense()`` as many times as
    needed, then ``expression()``. Passing paths to ``condense`` or
    ``expression`` always takes precedence over the stored set.
    """

    def __init__(self, field: str = DEFAULT_FIELD) -> None:
        self.field = field
        self._paths: list[str] | None = None

    @property
    def paths(self) -> list[str]:
        return list(self._paths or [])

    def optimize(self, paths: Iterable[str]) -> list[str]:
        self._paths = optimize(paths)
        return self.paths

    def condense(self, paths: Iterable[str] | None = None) -> list[str]:
        """Condense explicit paths, or the stored set when none are given.

        Raises:
            RuleStateError: If no paths are given and nothing was optimized yet
        """
        if paths is None:
            if self._paths is None:
                raise RuleStateError(
                    "Routes have not been provided here or optimized previously"
                )
            paths = self._paths
        self._paths = condense(paths)
        return self.paths

    def expression(self, paths: Iterable[str] | None = None) -> str:
        return build_expression(self.paths if paths is None else paths, self.field)
