"""Main CLI entry point for routewall."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from routewall import __version__


@click.group()
@click.version_option(version=__version__, prog_name="routewall")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose output")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to a YAML config file (defaults to ./routewall.yaml when present)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config_path: Path | None) -> None:
    """Build edge-firewall allowlist rules from application routes."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["config_path"] = config_path

    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


@cli.command("rule")
@click.option(
    "--routes",
    "routes_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Route list file (JSON route list, OpenAPI document, or one path per line)",
)
@click.option(
    "--public-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Public web root whose files and directories are also allowed",
)
@click.option(
    "--budget",
    type=int,
    default=None,
    help="Maximum expression length (defaults to waf.budget, 4000)",
)
@click.option(
    "--ignore",
    multiple=True,
    help="Extra glob of paths to leave out of the rule (repeatable)",
)
@click.option("--sync", is_flag=True, help="Create or update the firewall rule on Cloudflare")
@click.option("--json", "as_json", is_flag=True, help="Print the compaction result as JSON")
@click.pass_context
def rule_cmd(
    ctx: click.Context,
    routes_file: Path,
    public_dir: Path | None,
    budget: int | None,
    ignore: tuple[str, ...],
    sync: bool,
    as_json: bool,
) -> None:
    """Generate the allowlist rule expression from the route inventory.

    \b
    Examples:
      routewall rule --routes routes.json
      routewall rule --routes routes.json --public-dir public --sync
    """
    from routewall.cli.rule import run_rule

    run_rule(
        routes_file=routes_file,
        public_dir=public_dir,
        budget=budget,
        ignore=ignore,
        sync=sync,
        as_json=as_json,
        config_path=ctx.obj.get("config_path"),
    )


@cli.command("purge")
@click.argument("paths", nargs=-1)
@click.option("--route", "route_names", multiple=True, help="Named route to purge (repeatable)")
@click.option(
    "--routes",
    "routes_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Route list file used to resolve --route names",
)
@click.option("--all", "purge_all", is_flag=True, help="Purge all cached content for the zone")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation for --all")
@click.pass_context
def purge_cmd(
    ctx: click.Context,
    paths: tuple[str, ...],
    route_names: tuple[str, ...],
    routes_file: Path | None,
    purge_all: bool,
    yes: bool,
) -> None:
    """Purge cached content for paths, named routes, or the whole zone.

    Relative PATHS are expanded against app.url; full URLs are kept as is.
    """
    from routewall.cli.purge import run_purge

    run_purge(
        paths=paths,
        route_names=route_names,
        routes_file=routes_file,
        purge_all=purge_all,
        yes=yes,
        config_path=ctx.obj.get("config_path"),
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
