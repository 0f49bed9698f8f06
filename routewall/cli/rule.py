"""Rule command implementation."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import click

from routewall.cli.errors import fail, fail_with_cloudflare_error
from routewall.core.cloudflare import CloudflareError, WafApiClient, WafRuleService
from routewall.core.inventory import (
    RouteInventoryError,
    collect_routes,
    load_route_entries,
    public_asset_paths,
)
from routewall.core.rules import RuleCompactor
from routewall.models.results import CompactionResult, WafRuleResult
from routewall.models.settings import HARD_EXPRESSION_LIMIT, Settings
from routewall.ui.console import print_success, print_warning
from routewall.utils.config import (
    ConfigValidationError,
    load_settings,
    require_api_credentials,
)

FIREWALL_PERMISSION = "Zone:Firewall Services:Edit"


def run_rule(
    routes_file: Path,
    public_dir: Path | None,
    budget: int | None,
    ignore: Sequence[str],
    sync: bool,
    as_json: bool,
    config_path: Path | None = None,
) -> None:
    """Run the rule command.

    Args:
        routes_file: Route list file
        public_dir: Public web root (falls back to app.public_dir)
        budget: Expression length budget (falls back to waf.budget)
        ignore: Extra ignorable path globs, added to waf.ignorable_paths
        sync: Push the expression to Cloudflare
        as_json: Print the result as JSON instead of text
        config_path: Explicit config file
    """
    try:
        settings = load_settings(config_path)
    except ConfigValidationError as exc:
        fail(str(exc))

    try:
        entries = load_route_entries(routes_file)
    except RouteInventoryError as exc:
        fail(str(exc))

    asset_dir = public_dir or (
        Path(settings.app.public_dir) if settings.app.public_dir else None
    )
    public_paths = public_asset_paths(asset_dir) if asset_dir else []
    paths = collect_routes(
        [entry.uri for entry in entries],
        public_paths,
        ignorable=[*settings.waf.ignorable_paths, *ignore],
    )
    if not paths:
        fail(f"No routes found in {routes_file}")

    try:
        compactor = RuleCompactor(
            budget=budget if budget is not None else settings.waf.budget,
            max_iterations=settings.waf.max_iterations,
            field=settings.waf.field,
        )
    except ValueError as exc:
        fail(str(exc))

    result = compactor.compact(paths)
    if result.needs_manual_review:
        print_warning(
            f"Expression is {result.length} characters, over the {result.budget} "
            "character budget. Review the route list manually."
        )

    if as_json:
        payload = result.model_dump(mode="json")
        # The payload is printed even when the sync fails, without "sync".
        try:
            if sync:
                payload["sync"] = _sync(settings, result).model_dump(mode="json")
        finally:
            click.echo(json.dumps(payload, indent=2))
        return

    _print_result(result, len(paths))
    if sync:
        _print_sync_result(_sync(settings, result))


def _sync(settings: Settings, result: CompactionResult) -> WafRuleResult:
    if result.length > HARD_EXPRESSION_LIMIT:
        fail(
            f"Expression is {result.length} characters; Cloudflare rejects expressions "
            f"over {HARD_EXPRESSION_LIMIT}. Not syncing."
        )

    try:
        require_api_credentials(settings)
    except ConfigValidationError as exc:
        fail(str(exc))

    try:
        with WafApiClient.from_settings(settings.api) as client:
            return WafRuleService(settings, client).sync_rule(result.expression)
    except CloudflareError as exc:
        fail_with_cloudflare_error(exc, FIREWALL_PERMISSION)


def _print_result(result: CompactionResult, route_count: int) -> None:
    click.echo(result.expression)
    click.echo("")
    click.echo(f"Routes: {route_count} collected, {len(result.paths)} in rule")
    click.echo(f"Expression length: {result.length}/{result.budget} characters")
    if result.iterations:
        click.echo(f"Condense passes: {result.iterations} ({result.reason.value})")


def _print_sync_result(sync_result: WafRuleResult) -> None:
    print_success(sync_result.message)
    click.echo(f"Action: {sync_result.action.value}")
    click.echo(f"Rule ID: {sync_result.rule_id}")
    click.echo(f"Filter ID: {sync_result.filter_id}")
    click.echo(f"Expression length: {len(sync_result.expression)} characters")
