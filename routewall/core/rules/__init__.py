"""Path-set optimization, condensing, and expression rendering."""

from routewall.core.rules.builder import RuleBuilder, RuleStateError
from routewall.core.rules.compactor import RuleCompactor, compact_paths
from routewall.core.rules.condenser import condense
from routewall.core.rules.expression import DEFAULT_FIELD, build_expression
from routewall.core.rules.matcher import path_matches_wildcard
from routewall.core.rules.optimizer import optimize
from routewall.core.rules.paths import normalize_and_sort, normalize_path

__all__ = [
    "DEFAULT_FIELD",
    "RuleBuilder",
    "RuleCompactor",
    "RuleStateError",
    "build_expression",
    "compact_paths",
    "condense",
    "normalize_and_sort",
    "normalize_path",
    "optimize",
    "path_matches_wildcard",
]
