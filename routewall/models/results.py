"""Result models for rule compaction, rule sync, and cache purges."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class StopReason(StrEnum):
    """Why the compaction loop stopped."""

    WITHIN_BUDGET = "within_budget"
    FIXED_POINT = "fixed_point"
    ITERATION_CAP = "iteration_cap"


class CompactionResult(BaseModel):
    """Outcome of compacting a path inventory into a single expression."""

    expression: str
    paths: list[str] = Field(default_factory=list)
    length: int
    budget: int
    iterations: int = 0
    reason: StopReason

    @property
    def within_budget(self) -> bool:
        return self.length <= self.budget

    @property
    def needs_manual_review(self) -> bool:
        """True when the best-effort expression is still over budget."""
        return not self.within_budget


class SyncAction(StrEnum):
    """What a rule sync did on the provider side."""

    CREATE = "create"
    UPDATE = "update"


class WafRuleResult(BaseModel):
    """Result of syncing a firewall rule."""

    action: SyncAction
    rule_id: str
    filter_id: str
    expression: str
    message: str


class CachePurgeResult(BaseModel):
    """Result of a cache purge request."""

    id: str
    message: str
    files: list[str] = Field(default_factory=list)

    @property
    def purged_everything(self) -> bool:
        return not self.files
