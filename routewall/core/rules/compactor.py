"""Size-driven compaction loop over the optimizer and condenser."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from routewall.core.rules.condenser import condense
from routewall.core.rules.expression import DEFAULT_FIELD, build_expression
from routewall.core.rules.optimizer import optimize
from routewall.models.results import CompactionResult, StopReason
from routewall.models.settings import (
    DEFAULT_BUDGET,
    DEFAULT_MAX_ITERATIONS,
    HARD_EXPRESSION_LIMIT,
)

logger = logging.getLogger(__name__)


class RuleCompactor:
    """Shrink a path inventory until its expression fits a character budget."""

    def __init__(
        self,
        budget: int = DEFAULT_BUDGET,
        max_iterations: int = DEFAULT_MAX_ITERATIONS,
        field: str = DEFAULT_FIELD,
    ) -> None:
        """Initialize the compactor.

        Args:
            budget: Maximum expression length to aim for; must stay below the
                provider's hard limit to leave a safety margin
            max_iterations: Maximum number of condense passes
            field: Request field the expression tests
        """
        if budget <= 0 or budget >= HARD_EXPRESSION_LIMIT:
            raise ValueError(
                f"budget must be between 1 and {HARD_EXPRESSION_LIMIT - 1}, got {budget}"
            )
        if max_iterations < 0:
            raise ValueError("max_iterations must not be negative")
        self.budget = budget
        self.max_iterations = max_iterations
        self.field = field

    def compact(self, paths: Iterable[str]) -> CompactionResult:
        """Optimize, then condense repeatedly until the expression fits.

        The loop stops when the expression is within budget, when a condense
        pass no longer changes the path set, or after ``max_iterations``
        passes. An over-budget result is returned rather than raised; check
        ``needs_manual_review``. It carries the shortest path set seen, since a
        condense pass can lengthen the expression.
        """
        current = optimize(paths)
        expression = build_expression(current, self.field)
        logger.debug("Optimized %d paths into %d characters", len(current), len(expression))

        if len(expression) <= self.budget:
            return self._result(current, expression, 0, StopReason.WITHIN_BUDGET)

        best_paths, best_expression = current, expression
        iterations = 0
        reason = StopReason.ITERATION_CAP
        while iterations < self.max_iterations:
            condensed = condense(current)
            iterations += 1
            unchanged = condensed == current
            current = condensed
            expression = build_expression(current, self.field)
            logger.debug(
                "Condense pass %d: %d paths, %d characters",
                iterations,
                len(current),
                len(expression),
            )

            if len(expression) < len(best_expression):
                best_paths, best_expression = current, expression

            if len(expression) <= self.budget:
                reason = StopReason.WITHIN_BUDGET
                break
            if unchanged:
                reason = StopReason.FIXED_POINT
                break

        if len(expression) > self.budget and len(best_expression) < len(expression):
            current, expression = best_paths, best_expression

        result = self._result(current, expression, iterations, reason)
        if result.needs_manual_review:
            logger.warning(
                "Expression is %d characters after %d condense passes (%s); "
                "budget is %d and it needs manual review",
                result.length,
                iterations,
                reason.value,
                self.budget,
            )
        return result

    def _result(
        self,
        paths: list[str],
        expression: str,
        iterations: int,
        reason: StopReason,
    ) -> CompactionResult:
        return CompactionResult(
            expression=expression,
            paths=paths,
            length=len(expression),
            budget=self.budget,
            iterations=iterations,
            reason=reason,
        )


def compact_paths(
    paths: Iterable[str],
    budget: int = DEFAULT_BUDGET,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    field: str = DEFAULT_FIELD,
) -> CompactionResult:
    """Compact paths with a one-off ``RuleCompactor``."""
    return RuleCompactor(budget=budget, max_iterations=max_iterations, field=field).compact(paths)
