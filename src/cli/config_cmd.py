"""Config command: show configuration status or create a starter file."""

from __future__ import annotations

import typer
from rich.table import Table

from cli import context
from core.config import CONFIG_FILE, mask_token, token_source, write_config_template
from core.domain.exceptions import NjallaError


def _check_token(state: context.CliState) -> tuple[bool, str]:
    """Best-effort call proving the token is accepted by the API."""

    try:
        with context.build_gateway(state) as client:
            balance = client.get_balance()
        return True, f"balance {balance.balance} EUR"
    except NjallaError as exc:
        return False, str(exc)


def config_command(
    ctx: typer.Context,
    init: bool = typer.Option(False, "--init", help="Create ./config.toml if it doesn't exist."),
    check: bool = typer.Option(False, "--check", help="Verify the token with a get-balance call."),
) -> None:
    """Show or initialize configuration."""

    state = context.get_state(ctx)

    if init:
        with context.handle_errors():
            created = write_config_template(CONFIG_FILE)
        if created:
            payload = {
                "status": "created",
                "path": f"./{CONFIG_FILE}",
                "message": "Config file created. Edit to add your API token from https://njal.la/settings/api/",
            }
        else:
            payload = {"status": "exists", "path": f"./{CONFIG_FILE}", "message": "Config file already exists"}
        if state.json:
            context.emit_json(payload)
        else:
            context.stdout_console.print(f"{payload['message']} ({payload['path']})", highlight=False)
        return

    with context.handle_errors():
        settings = state.get_settings()
    token = (settings.api_token or "").strip()
    token_info: dict[str, object]
    if token:
        token_info = {"configured": True, "masked_token": mask_token(token), "source": token_source()}
    else:
        token_info = {"configured": False, "message": "Run 'njalla config --init' to create a config file"}

    check_result: tuple[bool, str] | None = None
    if check and token:
        check_result = _check_token(state)

    if state.json:
        payload = {
            "config_file": f"./{CONFIG_FILE}",
            "file_exists": CONFIG_FILE.exists(),
            "api_url": settings.api_url,
            "api_token": token_info,
        }
        if check_result is not None:
            payload["token_check"] = {"ok": check_result[0], "detail": check_result[1]}
        context.emit_json(payload)
        return

    table = Table(title="njalla configuration")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Config file", "OK" if CONFIG_FILE.exists() else "MISSING", f"./{CONFIG_FILE}")
    if token:
        table.add_row("API token", "OK", f"{token_info['masked_token']} (from {token_info['source']})")
    else:
        table.add_row("API token", "MISSING", str(token_info["message"]))
    table.add_row("API endpoint", "OK", settings.api_url)
    if check_result is not None:
        ok, detail = check_result
        table.add_row("Token check", "OK" if ok else "FAIL", detail)

    context.stdout_console.print(table)

    if not token:
        context.stdout_console.print(
            "\n[yellow]Note:[/yellow] Set NJALLA_API_TOKEN or add api_token to ./config.toml. "
            "Get a token from https://njal.la/settings/api/"
        )
