"""Shared CLI state and helpers.

Why a separate module:
- Avoids circular imports between `main` and the command groups.
- `build_gateway` is the single place the CLI creates an API client, so
  tests can swap it for a fake.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

import typer
from rich.console import Console
from rich.markup import escape

from adapters.json_exporter import dumps
from adapters.njalla_client import NjallaClient
from core.config import AppSettings, load_settings
from core.domain.exceptions import NjallaError
from core.domain.output_format import OutputFormat

stdout_console = Console()
stderr_console = Console(stderr=True)


@dataclass
class CliState:
    """Global options shared by every command."""

    debug: bool = False
    output: OutputFormat = field(default_factory=OutputFormat.default)
    settings: AppSettings | None = None

    @property
    def json(self) -> bool:
        return self.output is OutputFormat.JSON

    @property
    def ui(self) -> Console:
        """Console for human-facing chatter; stderr when stdout carries JSON."""

        return stderr_console if self.json else stdout_console

    def get_settings(self) -> AppSettings:
        if self.settings is None:
            self.settings = load_settings()
        return self.settings


def get_state(ctx: typer.Context) -> CliState:
    state = ctx.find_object(CliState)
    if state is None:
        state = CliState()
        ctx.obj = state
    return state


def build_gateway(state: CliState) -> NjallaClient:
    return NjallaClient.from_settings(state.get_settings(), debug=state.debug)


def emit_json(value: Any) -> None:
    typer.echo(dumps(value))


@contextmanager
def handle_errors() -> Iterator[None]:
    """Render `NjallaError` as one line on stderr and exit with code 1."""

    try:
        yield
    except NjallaError as exc:
        stderr_console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False)
        raise typer.Exit(code=1) from exc
