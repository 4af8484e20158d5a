"""njalla CLI (Typer).

Why Typer + Rich:
- Typed options with free `--help`, validation of ranges (years 1-10).
- Rich tables for humans; `--output json` for scripts.

Commands delegate to `adapters.njalla_client` and `core.services`; this
module only parses flags, prints and maps errors to exit codes.
"""

from __future__ import annotations

import typer

from cli import context
from cli.config_cmd import config_command
from cli.dns import app as dns_app
from cli.logging_setup import configure_logging
from cli.ui_components import (
    build_domain_status,
    build_domains_table,
    build_market_table,
    build_outcome_text,
    build_quote_panel,
    build_validation_panel,
)
from cli.wallet import app as wallet_app
from core.domain.models import TaskStatus
from core.domain.output_format import OutputFormat
from core.services.registration import (
    DEFAULT_TIMEOUT_SECONDS,
    MAX_YEARS,
    MIN_YEARS,
    RegistrationHooks,
    RegistrationOrchestrator,
    RegistrationQuote,
    RegistrationRequest,
    RegistrationStatus,
    is_affirmative,
)
from core.services.validation import validate_registration

app = typer.Typer(
    no_args_is_help=True,
    help=(
        "Privacy-first domain management CLI for Njalla.\n\n"
        "Manage your domains, DNS records, and wallet from the command line. "
        "Set NJALLA_API_TOKEN or run 'njalla config --init' and add api_token to ./config.toml."
    ),
)
app.add_typer(dns_app, name="dns")
app.add_typer(wallet_app, name="wallet")
app.command(name="config")(config_command)


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Print raw API requests/responses to stderr."),
    output: OutputFormat = typer.Option(
        OutputFormat.default(),
        "--output",
        "-o",
        case_sensitive=False,
        help="Output format.",
    ),
) -> None:
    configure_logging(debug)
    ctx.obj = context.CliState(debug=debug, output=output)


@app.command()
def domains(ctx: typer.Context) -> None:
    """List all domains in your account."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        items = client.list_domains()
    if state.json:
        context.emit_json(items)
    elif not items:
        context.stdout_console.print("No domains found")
    else:
        context.stdout_console.print(build_domains_table(items))


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Domain name or keyword to search."),
) -> None:
    """Search for available domains."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        results = client.find_domains(query)
    if state.json:
        context.emit_json(results)
    elif not results:
        context.stdout_console.print("No results found")
    else:
        context.stdout_console.print(build_market_table(results))


@app.command()
def register(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name to register (e.g., example.com)."),
    years: int = typer.Option(1, "--years", "-y", min=MIN_YEARS, max=MAX_YEARS, help="Registration period in years."),
    confirm: bool = typer.Option(False, "--confirm", help="Skip confirmation prompt."),
    wait: bool = typer.Option(False, "--wait", help="Wait for registration to complete."),
    timeout: int = typer.Option(DEFAULT_TIMEOUT_SECONDS, "--timeout", min=0, help="Timeout for --wait in seconds."),
) -> None:
    """Register a new domain.

    Requires sufficient balance in your Njalla wallet.
    """

    state = context.get_state(ctx)
    ui = state.ui

    def ask(quote: RegistrationQuote) -> bool:
        ui.print(build_quote_panel(quote))
        try:
            answer = typer.prompt(
                "Proceed with registration? [y/N]",
                default="",
                show_default=False,
                prompt_suffix=" ",
                err=state.json,
            )
        except typer.Abort:
            return False
        return is_affirmative(answer)

    def on_poll(task: TaskStatus, polls: int) -> None:
        ui.log(f"poll #{polls}: task {task.id} is {task.status}")

    hooks = RegistrationHooks(
        on_waiting=lambda task_id: ui.print("Waiting for registration to complete..."),
        on_poll=on_poll if state.debug else None,
    )

    try:
        request = RegistrationRequest(
            domain=domain,
            years=years,
            skip_confirmation=confirm,
            wait=wait,
            timeout_seconds=timeout,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    with context.handle_errors():
        with context.build_gateway(state) as client:
            orchestrator = RegistrationOrchestrator(
                client,
                confirm=ask,
                hooks=hooks,
                poll_interval=state.get_settings().poll_interval_seconds,
            )
            outcome = orchestrator.run(request)

    if state.json:
        if outcome.status is RegistrationStatus.CANCELLED:
            ui.print(build_outcome_text(outcome))
        context.emit_json(outcome.to_dict())
    else:
        context.stdout_console.print(build_outcome_text(outcome))


@app.command()
def status(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name to check."),
    dns: bool = typer.Option(False, "--dns", help="Include DNS records in output."),
) -> None:
    """Check domain status and details."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        info = client.get_domain(domain)
        records = client.list_records(domain) if dns else None
    if state.json:
        context.emit_json({"domain": info, "dns_records": records})
    else:
        context.stdout_console.print(build_domain_status(info, records))


@app.command()
def validate(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name to validate."),
) -> None:
    """Validate that a domain was properly registered (exit code 1 if not)."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        result = validate_registration(client, domain)
    if state.json:
        context.emit_json(result)
    else:
        context.stdout_console.print(build_validation_panel(result))
    if not result.valid:
        raise typer.Exit(code=1)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
