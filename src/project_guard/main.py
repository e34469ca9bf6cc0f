"""project-guard CLI - check what already exists before writing new code.

Usage:
    project-guard analyze [PATH]
    project-guard search modal [PATH] --term Dialog
    project-guard serve --port 8420
"""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import __version__
from .config import ConfigError, GuardConfig, load_config
from .logging import configure_logging
from .serve import start_server
from .tools import (
    ANALYZE_TOOL,
    SEARCH_TOOL,
    TOOLS,
    InvalidArgumentsError,
    UnknownToolError,
    call_tool,
)
from .usage import JsonlUsageLog, UsageLog

console = Console()


def _setup(ctx: click.Context, path: str) -> tuple[GuardConfig, UsageLog]:
    """Load config for path, configure logging, and pick the usage log."""
    opts = ctx.obj
    try:
        config = load_config(Path(path))
    except ConfigError as e:
        raise click.ClickException(str(e))

    configure_logging(
        verbose=opts["verbose"] or config.verbose,
        log_file=opts["log_file"],
    )

    if opts["no_usage_log"]:
        usage_log = UsageLog()
    elif opts["log_dir"]:
        usage_log = JsonlUsageLog(opts["log_dir"])
    else:
        usage_log = config.usage_log()
    return config, usage_log


def _call(name: str, arguments: dict, usage_log: UsageLog, config: GuardConfig) -> dict:
    try:
        return call_tool(
            name,
            arguments,
            usage_log=usage_log,
            default_category=config.default_category,
        )
    except UnknownToolError as e:
        raise click.ClickException(str(e))
    except InvalidArgumentsError as e:
        raise click.BadParameter(str(e), param_hint="--args")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.option("--no-usage-log", is_flag=True, help="Do not record tool calls")
@click.option(
    "--log-dir",
    envvar="PROJECT_GUARD_LOG_DIR",
    default=None,
    help="Directory for usage logs (overrides config)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write diagnostic logs to this file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    no_usage_log: bool,
    log_dir: str | None,
    log_file: Path | None,
):
    """project-guard - tells code generators what already exists.

    Detects a project's language and layout conventions, inventories its
    components, hooks, imports and idioms, and finds code similar to what
    you are about to write.
    """
    ctx.obj = {
        "verbose": verbose,
        "no_usage_log": no_usage_log,
        "log_dir": log_dir,
        "log_file": log_file,
    }


@cli.command()
@click.argument("path", default=".")
@click.option("--category", "-c", default=None, help="Component category for pattern guidance")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
@click.pass_context
def analyze(ctx: click.Context, path: str, category: str | None, json_only: bool):
    """Analyze a project's architecture and existing patterns.

    Examples:

        project-guard analyze .

        project-guard analyze ./web --category modal
    """
    config, usage_log = _setup(ctx, path)
    if category:
        config.default_category = category.lower()

    payload = _call(ANALYZE_TOOL, {"path": path}, usage_log, config)

    if json_only:
        click.echo(json.dumps(payload, indent=2))
        return

    _print_analysis_summary(payload["summary"])
    console.print()
    console.print(Panel(Text(payload["instructions"]), title="Rules", border_style="cyan"))
    console.print(payload["guidance"].strip("\n"), highlight=False, markup=False)


@cli.command()
@click.argument("category")
@click.argument("path", default=".")
@click.option("--term", "-t", default="", help="Free-text term to look for")
@click.option("--json-only", is_flag=True, help="Output raw JSON to stdout (for piping)")
@click.pass_context
def search(ctx: click.Context, category: str, path: str, term: str, json_only: bool):
    """Find existing code similar to CATEGORY (modal, button, form, api, ...)."""
    config, usage_log = _setup(ctx, path)
    arguments = {"path": path, "component_type": category, "search_term": term}
    payload = _call(SEARCH_TOOL, arguments, usage_log, config)

    if json_only:
        click.echo(json.dumps(payload, indent=2))
        return

    console.print(Panel.fit(
        f"[bold]{payload['exactMatches']}[/] exact, "
        f"[bold]{payload['termMatches']}[/] term matches, "
        f"[bold]{payload['patterns']}[/] patterns",
        title=Text(f"Search: {payload['componentType']}"),
        border_style="cyan",
    ))
    console.print(payload["guidance"], highlight=False, markup=False)


@cli.command()
@click.argument("name")
@click.option("--args", "args_json", default="{}", help="Tool arguments as a JSON object")
@click.option("--path", default=".", help="Project path used for config lookup")
@click.pass_context
def call(ctx: click.Context, name: str, args_json: str, path: str):
    """Call a tool by NAME and print its JSON payload."""
    config, usage_log = _setup(ctx, path)
    try:
        arguments = json.loads(args_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--args")
    if not isinstance(arguments, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--args")

    payload = _call(name, arguments, usage_log, config)
    click.echo(json.dumps(payload, indent=2))


@cli.command()
@click.argument("path", default=".")
@click.option("--host", default="127.0.0.1", help="Interface to bind")
@click.option("--port", "-p", default=8420, type=int, help="Port to serve on")
@click.pass_context
def serve(ctx: click.Context, path: str, host: str, port: int):
    """Serve the tools as a local JSON API."""
    config, usage_log = _setup(ctx, path)
    console.print(f"[cyan]project-guard[/] serving on http://{host}:{port} (Ctrl+C to stop)")
    start_server(host, port, usage_log=usage_log, default_category=config.default_category)


@cli.command()
def tools():
    """List available tools."""
    table = Table(show_header=True)
    table.add_column("Tool", style="bold")
    table.add_column("Description")
    for tool in TOOLS:
        table.add_row(tool["name"], tool["description"])
    console.print(table)


@cli.command()
def version():
    """Show version information."""
    console.print(f"project-guard v{__version__}")


def _print_analysis_summary(summary: dict) -> None:
    """Print a compact table of the analysis."""
    patterns = summary["existingPatterns"]

    table = Table(title="Project Analysis", show_header=False, border_style="dim")
    table.add_column("Key", style="bold")
    table.add_column("Value")

    table.add_row("Root", summary["root"])
    table.add_row("Language", summary["detectedLanguage"])
    table.add_row("Layers", ", ".join(summary["layers"]))
    table.add_row("Folders", ", ".join(summary["folderPattern"]))
    if summary["configFiles"]:
        table.add_row("Config files", ", ".join(summary["configFiles"]))
    table.add_row("Components", str(len(patterns["components"])))
    table.add_row("Hooks", str(len(patterns["hooks"])))
    table.add_row("Imports", str(len(patterns["imports"])))
    table.add_row("Patterns", str(len(patterns["patterns"])))

    console.print(table)


if __name__ == "__main__":
    cli()
