"""Wallet management commands."""

from __future__ import annotations

import typer

from adapters.njalla_client import validate_payment_amount
from cli import context
from cli.ui_components import build_balance_text, build_payment_panel, build_transactions_table
from core.domain.models import PaymentMethod

app = typer.Typer(no_args_is_help=True, help="Manage wallet and payments.")


@app.command("balance")
def balance(ctx: typer.Context) -> None:
    """Show current wallet balance."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        result = client.get_balance()
    if state.json:
        context.emit_json(result)
    else:
        context.stdout_console.print(build_balance_text(result))


def _check_amount(amount: int) -> int:
    try:
        return validate_payment_amount(amount)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("add-payment")
def add_payment(
    ctx: typer.Context,
    amount: int = typer.Option(
        ...,
        "--amount",
        "-a",
        callback=_check_amount,
        help="Amount in EUR (5 or multiple of 15, max 300).",
    ),
    via: PaymentMethod = typer.Option(..., "--via", "-v", case_sensitive=False, help="Payment method."),
) -> None:
    """Add payment to refill wallet."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        payment = client.add_payment(amount, via)
    if state.json:
        context.emit_json(payment)
    else:
        context.stdout_console.print(build_payment_panel(payment))


@app.command("get-payment")
def get_payment(
    ctx: typer.Context,
    payment_id: str = typer.Argument(..., metavar="ID", help="Payment ID."),
) -> None:
    """Get details about a payment."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        payment = client.get_payment(payment_id)
    if state.json:
        context.emit_json(payment)
    else:
        context.stdout_console.print(build_payment_panel(payment))


@app.command("transactions")
def transactions(ctx: typer.Context) -> None:
    """List transactions from the last 90 days."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        items = client.list_transactions()
    if state.json:
        context.emit_json(items)
    elif not items:
        context.stdout_console.print("No transactions in the last 90 days")
    else:
        context.stdout_console.print(build_transactions_table(items))
