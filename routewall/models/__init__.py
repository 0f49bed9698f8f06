"""Pydantic data models for routewall."""

from routewall.models.results import (
    CachePurgeResult,
    CompactionResult,
    StopReason,
    SyncAction,
    WafRuleResult,
)
from routewall.models.settings import (
    HARD_EXPRESSION_LIMIT,
    ApiSettings,
    AppSettings,
    Settings,
    WafSettings,
)

__all__ = [
    "HARD_EXPRESSION_LIMIT",
    "ApiSettings",
    "AppSettings",
    "CachePurgeResult",
    "CompactionResult",
    "Settings",
    "StopReason",
    "SyncAction",
    "WafRuleResult",
    "WafSettings",
]
