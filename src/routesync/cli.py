"""Routesync CLI - Command line interface."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
import structlog
import yaml
from rich.console import Console
from rich.table import Table

from routesync.core.config import RoutesyncSettings, get_settings
from routesync.errors import ConfigNotFoundError
from routesync.ingress import (
    RouteRule,
    WorkloadSpec,
    build_routes,
    merge_rule,
    rules_from_list,
    rules_to_list,
)
from routesync.registry import default_registry

console = Console()


def _configure_logging(log_level: str) -> None:
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper())
        ),
    )


def _load_document(path: Path) -> Any:
    # JSON is valid YAML, so one loader covers both formats
    try:
        return yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise click.ClickException(f"Invalid YAML/JSON in {path}: {e}") from e


def _dump_document(path: Path, data: Any) -> None:
    if path.suffix == ".json":
        path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")


def _paths_table(rule: RouteRule) -> Table:
    table = Table(title=f"Host: {rule.host or '*'}")
    table.add_column("Path", style="cyan")
    table.add_column("Service")
    table.add_column("Port", justify="right")
    for path in rule.paths:
        table.add_row(path.path, path.service_name, str(path.service_port))
    return table


@click.group()
@click.option(
    "--config", "-c",
    "config_file",
    type=click.Path(exists=True),
    help="Path to YAML or TOML config file",
)
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Log level (default: from settings)",
)
@click.pass_context
def main(ctx: click.Context, config_file: str | None, verbose: bool, log_level: str | None):
    """Routesync - keep ingress rules in step with your workloads.

    Examples:

        routesync routes workload.yaml --host apps.example.com

        routesync routes workload.yaml --rules ingress-rules.yaml --write

        routesync registry resolve DOCKER_HUB myorg app:1.0
    """
    if config_file:
        try:
            settings = RoutesyncSettings.from_file(config_file)
        except (OSError, ValueError) as e:
            console.print(f"[red]Failed to load config: {e}[/red]")
            sys.exit(1)
    else:
        settings = get_settings()

    _configure_logging("debug" if verbose else (log_level or settings.log_level))

    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@main.command()
@click.argument("workload_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--host", default=None, help="Ingress host (default: from settings)")
@click.option(
    "--rules",
    "rules_file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Rules file to merge the workload routes into",
)
@click.option("--write", is_flag=True, help="Write the merged rules back to the rules file")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def routes(
    ctx: click.Context,
    workload_file: Path,
    host: str | None,
    rules_file: Path | None,
    write: bool,
    json_output: bool,
):
    """Show the ingress rule for a workload, optionally merging it.

    Examples:

        routesync routes workload.yaml

        routesync routes workload.yaml --rules ingress-rules.yaml --write
    """
    if write and rules_file is None:
        raise click.UsageError("--write requires --rules")

    settings: RoutesyncSettings = ctx.obj["settings"]
    if host is None:
        host = settings.ingress_host

    data = _load_document(workload_file)
    if not isinstance(data, dict):
        raise click.ClickException(f"Workload file must contain a mapping: {workload_file}")
    try:
        workload = WorkloadSpec.from_dict(data)
    except (KeyError, ValueError, TypeError) as e:
        raise click.ClickException(f"Invalid workload in {workload_file}: {e}") from e

    rule = build_routes(workload, settings.route_naming()).with_host(host)

    if rules_file is None:
        if json_output:
            click.echo(json.dumps(rule.to_dict(), indent=2))
        else:
            console.print(_paths_table(rule))
        return

    existing_data = _load_document(rules_file) if rules_file.exists() else None
    if isinstance(existing_data, dict):
        existing_data = existing_data.get("rules", [])
    try:
        existing = rules_from_list(existing_data or [])
    except (KeyError, ValueError, TypeError, AttributeError) as e:
        raise click.ClickException(f"Invalid rules in {rules_file}: {e}") from e

    merged, already_present = merge_rule(existing, rule, host)

    if write and not already_present:
        _dump_document(rules_file, {"rules": rules_to_list(merged)})

    if json_output:
        click.echo(
            json.dumps(
                {
                    "already_present": already_present,
                    "written": write and not already_present,
                    "rules": rules_to_list(merged),
                },
                indent=2,
            )
        )
        return

    console.print(_paths_table(rule))
    if already_present:
        console.print("[green]Rule already present, no change needed.[/green]")
    else:
        console.print(f"[yellow]Rule added ({len(merged)} rules total).[/yellow]")
        if write:
            console.print(f"Wrote {rules_file}", style="dim")


@main.group()
def registry():
    """Inspect registry build configurations."""


@registry.command("types")
def registry_types():
    """List registered registry types."""
    table = Table()
    table.add_column("Registry Type", style="cyan")
    for registry_type in default_registry().types():
        table.add_row(registry_type)
    console.print(table)


@registry.command("resolve")
@click.argument("registry_type", required=False)
@click.argument("repository", required=False)
@click.argument("image", required=False)
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.pass_context
def registry_resolve(
    ctx: click.Context,
    registry_type: str | None,
    repository: str | None,
    image: str | None,
    json_output: bool,
):
    """Resolve the build configuration for a registry type.

    Missing arguments fall back to the configured settings.

    Examples:

        routesync registry resolve DOCKER_HUB myorg app:1.0
    """
    settings: RoutesyncSettings = ctx.obj["settings"]
    reg = default_registry()
    selection = reg.select(
        registry_type or settings.registry_type,
        repository if repository is not None else settings.repository,
        image if image is not None else settings.image,
    )

    try:
        config = reg.resolve(selection)
    except ConfigNotFoundError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"Known types: {', '.join(reg.types())}", style="dim")
        sys.exit(1)

    if json_output:
        click.echo(json.dumps(config.to_dict(), indent=2))
        return

    console.print(f"[bold]Registry:[/bold] {selection.registry_type}")
    console.print("[bold]Args:[/bold]")
    for arg in config.args:
        console.print(f"  {arg}", markup=False)

    table = Table(title="Volumes")
    table.add_column("Name", style="cyan")
    table.add_column("Mount Path")
    table.add_column("Source")
    sources = {v.name: v for v in config.volumes}
    for mount in config.volume_mounts:
        volume = sources.get(mount.name)
        if volume is None:
            source = "-"
        elif volume.secret_name is not None:
            source = f"secret/{volume.secret_name}"
        else:
            source = f"configmap/{volume.config_map_name}"
        table.add_row(mount.name, mount.mount_path, source)
    console.print(table)


@main.command()
def version():
    """Show version information."""
    from routesync import __version__

    console.print(f"[bold]Version:[/bold] {__version__}")
    console.print(f"[bold]Python:[/bold] {sys.version}")


if __name__ == "__main__":
    main()
