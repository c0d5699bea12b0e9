"""CLI entry point for linear-toon."""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path
from typing import Any

import click
import structlog

from linear_toon.client import LinearClient
from linear_toon.config.settings import LinearSettings
from linear_toon.exceptions import ConfigurationError, LinearToonError, UnexpectedResponseError
from linear_toon.graphql.operations import DEFAULT_OPERATIONS
from linear_toon.server import build_registry, run_stdio
from linear_toon.tools import ToolResult, default_tools
from linear_toon.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)

# Exit codes for semantic error reporting
EXIT_SUCCESS = 0
EXIT_CONFIG_ERROR = 1
EXIT_API_ERROR = 2

# Commands that load settings themselves or need none
COMMANDS_WITHOUT_SETTINGS = ("tools", "health-check")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def load_settings(config: str | None) -> LinearSettings:
    """Settings from a YAML file when given, otherwise from ``LINEAR_*`` variables.

    Raises:
        ConfigurationError: If the settings cannot be loaded or are invalid
    """
    if config is None:
        return LinearSettings.from_env()
    if not Path(config).exists():
        raise ConfigurationError(f"Configuration file not found: {config}")
    return LinearSettings.from_yaml(config)


@click.group()
@click.option(
    "--config",
    default=None,
    type=click.Path(),
    help="Path to YAML configuration file (defaults to LINEAR_* environment variables)",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Logging level (overrides configuration)",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, log_level: str | None) -> None:
    """linear-toon: Linear issue tools for MCP clients."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    configure_logging(log_level or "INFO")

    if ctx.invoked_subcommand in COMMANDS_WITHOUT_SETTINGS:
        ctx.obj["settings"] = None
        return

    try:
        settings = load_settings(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("config_error", exc_info=True)
        sys.exit(EXIT_CONFIG_ERROR)

    if log_level is None:
        configure_logging(settings.log_level)
    ctx.obj["settings"] = settings


@cli.command()
@click.pass_context
def serve(ctx: click.Context) -> None:
    """Run the MCP server over stdio."""
    settings: LinearSettings = ctx.obj["settings"]
    try:
        asyncio.run(run_stdio(settings))
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)


@cli.command("tools")
def list_tools() -> None:
    """List available tools."""
    for tool in default_tools():
        marker = "" if tool.read_only else " (writes)"
        click.echo(f"{tool.name}{marker}: {tool.description}")


@cli.command()
@click.argument("name")
@click.option("--args", "raw_args", default="{}", help="Tool arguments as a JSON object")
@click.pass_context
def call(ctx: click.Context, name: str, raw_args: str) -> None:
    """Invoke one tool and print its TOON result."""
    try:
        arguments = json.loads(raw_args)
    except json.JSONDecodeError as e:
        click.echo(f"Error: --args is not valid JSON: {e}", err=True)
        sys.exit(1)
    if not isinstance(arguments, dict):
        click.echo("Error: --args must be a JSON object", err=True)
        sys.exit(1)

    settings: LinearSettings = ctx.obj["settings"]
    try:
        result = asyncio.run(_call_tool(settings, name, arguments))
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        sys.exit(130)

    if result.is_error:
        click.echo(f"Error: {result.text}", err=True)
        sys.exit(1)
    click.echo(result.text)


async def _call_tool(settings: LinearSettings, name: str, arguments: dict[str, Any]) -> ToolResult:
    async with LinearClient(settings) as client:
        return await build_registry(client, settings).call(name, arguments)


def _print_check(name: str, status: bool, detail: str | None = None) -> None:
    """Print a check result with consistent formatting.

    Args:
        name: Name of the check
        status: True if passed, False if failed
        detail: Optional detail message
    """
    if status:
        click.echo(f"  {click.style('[OK]', fg='green')} {name}")
    else:
        click.echo(f"  {click.style('[FAIL]', fg='red')} {name}")

    if detail:
        click.echo(f"       {detail}")


@cli.command("health-check")
@click.pass_context
def health_check(ctx: click.Context) -> None:
    """Validate configuration and test connectivity.

    \b
    Checks performed:
      1. Settings load and validate
      2. The API key resolves the current user

    \b
    Exit codes:
      0 - All checks passed
      1 - Configuration error
      2 - Linear API error
    """
    click.echo("Running health checks...")
    try:
        settings = load_settings(ctx.obj["config"])
    except ConfigurationError as e:
        _print_check("Configuration", False, e.message)
        sys.exit(EXIT_CONFIG_ERROR)
    _print_check("Configuration", True, f"endpoint: {settings.endpoint}")

    try:
        viewer_id = asyncio.run(_viewer_id(settings))
    except LinearToonError as e:
        _print_check("Linear API", False, e.message)
        sys.exit(EXIT_API_ERROR)
    except Exception as e:
        # httpx connection and timeout failures
        log.debug("health_check_failed", exc_info=True)
        _print_check("Linear API", False, str(e) or type(e).__name__)
        sys.exit(EXIT_API_ERROR)

    _print_check("Linear API", True, f"viewer: {viewer_id}")
    click.echo("All checks passed")
    sys.exit(EXIT_SUCCESS)


async def _viewer_id(settings: LinearSettings) -> str:
    """Id of the user the API key belongs to.

    Raises:
        LinearAPIError: If the request fails or returns no viewer
    """
    async with LinearClient(settings) as client:
        data = await client.execute(DEFAULT_OPERATIONS.viewer)
    viewer = data.get("viewer") or {}
    if not viewer.get("id"):
        raise UnexpectedResponseError("viewer")
    return viewer["id"]


if __name__ == "__main__":
    cli()
