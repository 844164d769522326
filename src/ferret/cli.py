"""Ferret CLI application using Typer.

Searches AnswerHub, GitHub code or Slack messages from the terminal and
either prints a numbered table or opens one of the results.
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.table import Table

from ferret.config import Settings, load_settings
from ferret.dispatcher import Dispatcher
from ferret.providers import register_providers
from ferret.search.registry import ProviderRegistry

app = typer.Typer(
    name="ferret",
    help="Ferret - search AnswerHub, GitHub and Slack from the command line",
    no_args_is_help=True,
)
console = Console()


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        stream=sys.stderr,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def build_registry(settings: Settings) -> ProviderRegistry:
    """Create a registry holding every built-in provider."""
    registry = ProviderRegistry()
    register_providers(registry, settings)
    return registry


@app.command("search")
def search(
    provider: str = typer.Argument(..., help="Provider name, see `ferret providers`"),
    keyword: str = typer.Argument(..., help="Keyword to search for"),
    page: int = typer.Option(1, "--page", "-p", help="1-based page number"),
    limit: int = typer.Option(10, "--limit", "-l", help="Results per page"),
    goto: Optional[int] = typer.Option(
        None, "--goto", "-g", help="Open the given result (1-based) with FERRET_GOTO_CMD"
    ),
) -> None:
    """Search PROVIDER for KEYWORD."""
    settings = load_settings()
    _configure_logging(settings)
    options: Dict[str, Any] = {"page": page, "limit": limit}
    if goto is not None:
        options["goto"] = goto
    dispatcher = Dispatcher(
        build_registry(settings),
        goto_cmd=settings.goto_cmd,
        timeout=settings.timeout,
    )
    code = dispatcher.run(provider, keyword, options)
    if code:
        raise typer.Exit(code=code)


@app.command("providers")
def providers() -> None:
    """List the registered providers in priority order."""
    settings = load_settings()
    _configure_logging(settings)
    table = Table(box=None, show_edge=False)
    table.add_column("NAME")
    table.add_column("TITLE")
    table.add_column("ENABLED")
    for info in build_registry(settings).providers():
        table.add_row(info.name, info.title, "yes" if info.enabled else "no")
    console.print(table)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
