"""Gemara MCP server (gemara-mcp) entry point.

Runs the MCP server by default; subcommands run the Layer 1/2/3 transforms
offline and print the same JSON the tools return.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

import click

from .. import get_version
from ..core.config import TRANSPORTS, build_cli_overrides, get_effective_config
from ..models.tool import ToolResult


def _tools(ctx: click.Context):
    from ..server.tools import GemaraTools

    return GemaraTools(ctx.obj["config"])


def _emit(result: ToolResult) -> None:
    if result.is_error:
        click.echo(f"Error: {result.text}", err=True)
        sys.exit(1)
    click.echo(result.text)


@click.group(invoke_without_command=True)
@click.pass_context
@click.option("--config", "config_path", type=click.Path(dir_okay=False), help="Path to configuration file")
@click.option("--transport", type=click.Choice(list(TRANSPORTS)), help="Transport mode (default: stdio)")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Path to log file (default: stderr)")
@click.option("--log-level", type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False))
def gemara_cli(
    ctx: click.Context,
    config_path: str | None,
    transport: str | None,
    log_file: str | None,
    log_level: str | None,
) -> None:
    """Gemara CUE MCP Server - Model Context Protocol server for Gemara with CUE support."""
    config = get_effective_config(
        Path(config_path) if config_path else None,
        cli_overrides=build_cli_overrides(transport, log_file, log_level),
    )
    ctx.ensure_object(dict)
    ctx.obj["config"] = config

    if ctx.invoked_subcommand is not None:
        return

    from ..server.app import run_server

    run_server(config)


@gemara_cli.command()
def version() -> None:
    """Print version information."""
    click.echo(f"Gemara CUE MCP Server {get_version()}")


@gemara_cli.command()
@click.pass_context
@click.argument("file_path")
@click.option("--technology", help="Technology domain (e.g. cloud-computing)")
@click.option("--sector", help="Industry sector (e.g. healthcare)")
@click.option("--jurisdiction", help="Jurisdiction (e.g. US)")
def guidelines(
    ctx: click.Context,
    file_path: str,
    technology: str | None,
    sector: str | None,
    jurisdiction: str | None,
) -> None:
    """Filter a Layer 1 guidance document by applicability.

    Example: gemara-mcp guidelines ./guidance.yaml --jurisdiction US
    """
    result = asyncio.run(
        _tools(ctx).import_guidelines_by_criteria(file_path, technology, sector, jurisdiction)
    )
    _emit(result)


@gemara_cli.command()
@click.pass_context
@click.argument("file_path")
@click.option("--label", "-l", "labels", multiple=True, required=True, help="Label to match (repeatable)")
def controls(ctx: click.Context, file_path: str, labels: tuple[str, ...]) -> None:
    """Filter a Layer 2 control catalog by labels.

    Example: gemara-mcp controls ./catalog.yaml -l tlp_clear -l tlp_green
    """
    result = asyncio.run(_tools(ctx).import_controls_by_label(file_path, list(labels)))
    _emit(result)


@gemara_cli.command()
@click.pass_context
@click.argument("guidelines_file")
@click.argument("controls_file")
@click.option("--rationale", "-r", required=True, help="Why the controls are being modified")
@click.option("--type", "-t", "modification_type", type=click.Choice(["alter", "add", "remove"]), default="alter")
def modifiers(
    ctx: click.Context,
    guidelines_file: str,
    controls_file: str,
    rationale: str,
    modification_type: str,
) -> None:
    """Create Layer 3 control modifiers from a guidance document and a catalog.

    Example: gemara-mcp modifiers ./guidance.yaml ./catalog.yaml -r "Harmonize with HIPAA"
    """
    result = asyncio.run(
        _tools(ctx).create_layer3_control_modifiers(
            guidelines_file, controls_file, rationale, modification_type
        )
    )
    _emit(result)


def main() -> None:
    gemara_cli()


if __name__ == "__main__":
    main()
