"""Route and static asset inventory."""

from routewall.core.inventory.assets import public_asset_paths
from routewall.core.inventory.routes import (
    RouteEntry,
    RouteInventoryError,
    collect_routes,
    load_route_entries,
    resolve_named_routes,
    rewrite_placeholders,
)

__all__ = [
    "RouteEntry",
    "RouteInventoryError",
    "collect_routes",
    "load_route_entries",
    "public_asset_paths",
    "resolve_named_routes",
    "rewrite_placeholders",
]
