"""Purge command implementation."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import click

from routewall.cli.errors import fail, fail_with_cloudflare_error
from routewall.core.cloudflare import CachePurgeService, CloudflareApiClient, CloudflareError
from routewall.core.inventory import RouteInventoryError, load_route_entries, resolve_named_routes
from routewall.ui.console import print_success, print_warning
from routewall.utils.config import (
    ConfigValidationError,
    load_settings,
    require_api_credentials,
)

PURGE_PERMISSION = "Zone:Cache Purge:Edit"


def run_purge(
    paths: Sequence[str],
    route_names: Sequence[str],
    routes_file: Path | None,
    purge_all: bool,
    yes: bool,
    config_path: Path | None = None,
) -> None:
    """Run the purge command.

    Args:
        paths: Relative paths or full URLs to purge
        route_names: Named routes to purge, resolved through ``routes_file``
        routes_file: Route list file with route names
        purge_all: Purge all cached content for the zone
        yes: Skip the confirmation for ``purge_all``
        config_path: Explicit config file
    """
    try:
        settings = load_settings(config_path)
    except ConfigValidationError as exc:
        fail(str(exc))

    targets = list(paths)
    if route_names:
        targets.extend(_resolve_routes(route_names, routes_file))

    if purge_all and targets:
        fail("Use either --all or specific paths/routes, not both.")
    if not purge_all and not targets:
        fail("Nothing to purge.", hint="Pass paths, --route names, or --all.")

    if purge_all and not yes:
        if not click.confirm("Purge ALL cached content for this zone?", default=False):
            click.echo("Cache purge cancelled.")
            return

    try:
        require_api_credentials(settings)
        with CloudflareApiClient.from_settings(settings.api) as client:
            result = CachePurgeService(settings, client).purge_cache(targets or None)
    except ConfigValidationError as exc:
        fail(str(exc))
    except CloudflareError as exc:
        fail_with_cloudflare_error(exc, PURGE_PERMISSION)

    print_success(result.message)
    click.echo(f"Purge ID: {result.id}")
    for url in result.files:
        click.echo(f"  - {url}")


def _resolve_routes(route_names: Sequence[str], routes_file: Path | None) -> list[str]:
    if routes_file is None:
        fail("--route needs --routes to look up route names.")

    try:
        entries = load_route_entries(routes_file)
    except RouteInventoryError as exc:
        fail(str(exc))

    known = {entry.name for entry in entries if entry.name}
    for name in route_names:
        if name not in known:
            print_warning(f"Route '{name}' not found, skipping")

    return resolve_named_routes(entries, route_names)
