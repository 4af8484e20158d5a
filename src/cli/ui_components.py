"""CLI UI components (Rich).

Why separate components:
- Keeps command logic free of presentation details.
- Lets several commands reuse the same tables/panels (records appear in
  `status --dns`, `dns list` and `validate`).
"""

from __future__ import annotations

from rich.console import Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import (
    Domain,
    MarketDomain,
    Payment,
    Record,
    Transaction,
    ValidationResult,
    WalletBalance,
)
from core.services.registration import RegistrationOutcome, RegistrationQuote

_STATUS_STYLES = {"active": "green", "pending": "yellow"}


def _status_text(status: str) -> Text:
    return Text(status, style=_STATUS_STYLES.get(status, "red"))


def _or_dash(value: object) -> str:
    return "-" if value is None else str(value)


def build_domains_table(domains: list[Domain]) -> Table:
    table = Table(title="Domains")
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Expiry", style="dim")
    for d in domains:
        expiry = d.expiry.strftime("%Y-%m-%d") if d.expiry else "-"
        table.add_row(d.name, _status_text(d.status), expiry)
    return table


def build_market_table(results: list[MarketDomain]) -> Table:
    """Search results; the caption counts the available ones."""

    available = sum(1 for d in results if d.is_available)
    table = Table(title="Search results", caption=f"{available} of {len(results)} domains available")
    table.add_column("Domain", style="cyan", no_wrap=True)
    table.add_column("Available")
    table.add_column("Price", justify="right")
    for d in results:
        mark = Text("✓ available", style="green") if d.is_available else Text(f"✗ {d.status}", style="red")
        table.add_row(d.name, mark, f"€{d.price}/yr")
    return table


def build_records_table(records: list[Record], *, title: str = "DNS Records") -> Table:
    table = Table(title=f"{title} ({len(records)})")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Content")
    table.add_column("TTL", justify="right")
    table.add_column("Prio", justify="right")
    for r in records:
        content = r.content if r.content is not None else r.target
        table.add_row(
            r.id,
            r.name,
            r.type_name,
            _or_dash(content),
            _or_dash(r.ttl),
            _or_dash(r.priority),
        )
    return table


def build_domain_status(domain: Domain, records: list[Record] | None = None) -> Group | Panel:
    body = Text()
    body.append("Domain: ", style="bold")
    body.append(domain.name + "\n", style="cyan")
    body.append("Status: ", style="bold")
    body.append_text(_status_text(domain.status))
    if domain.expiry:
        body.append("\nExpiry: ", style="bold")
        body.append(domain.expiry.strftime("%Y-%m-%d"))
    if domain.locked is not None:
        body.append("\nLocked: ", style="bold")
        body.append(str(domain.locked).lower())
    if domain.mailforwarding is not None:
        body.append("\nMail forwarding: ", style="bold")
        body.append(str(domain.mailforwarding).lower())

    panel = Panel(body, title=domain.name, border_style="cyan")
    if records is None:
        return panel
    return Group(panel, build_records_table(records))


def build_quote_panel(quote: RegistrationQuote) -> Panel:
    body = Text()
    body.append("Domain: ", style="bold")
    body.append(quote.domain + "\n", style="cyan")
    body.append(f"Price: {quote.price_per_year} EUR/year\n")
    body.append(f"Years: {quote.years}\n")
    body.append("Total: ", style="bold")
    body.append(f"{quote.total_price} EUR", style="green")
    return Panel(body, title="Registration", border_style="yellow")


def build_outcome_text(outcome: RegistrationOutcome) -> Text:
    if outcome.status.value == "completed":
        text = Text("✓ ", style="green")
        text.append("Domain ")
        text.append(outcome.domain, style="cyan")
        text.append(" registered successfully!")
        return text
    if outcome.status.value == "pending":
        text = Text("Registration started for ")
        text.append(outcome.domain, style="cyan")
        text.append("\nTask ID: ")
        text.append(outcome.task_id or "-", style="yellow")
        text.append(f"\n\nUse 'njalla status {outcome.domain}' to check progress.")
        return text
    return Text("Registration cancelled.", style="dim")


def build_validation_panel(result: ValidationResult) -> Panel:
    body = Text()
    checks = (
        ("Domain exists", result.checks.exists),
        ("Status is active", result.checks.status_active),
        ("Has expiry date", result.checks.has_expiry),
        ("DNS accessible", result.checks.dns_accessible),
    )
    for label, passed in checks:
        if passed:
            body.append("  ✓ ", style="green")
            body.append(f"{label} - passed\n")
        else:
            body.append("  ✗ ", style="red")
            body.append(f"{label} - failed\n")
    body.append("\n")
    if result.valid:
        body.append("✓ ", style="bold green")
        body.append(f"Domain {result.domain} is properly registered!")
    else:
        body.append("✗ ", style="bold red")
        body.append(f"Validation failed for {result.domain}")
        if result.error:
            body.append(f"\n  Error: {result.error}")
    return Panel(body, title="Validation Results", border_style="green" if result.valid else "red")


def build_balance_text(balance: WalletBalance) -> Text:
    text = Text("Wallet balance: ", style="bold")
    text.append(f"{balance.balance} EUR", style="green")
    return text


def build_payment_panel(payment: Payment) -> Panel:
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()
    table.add_row("ID", _or_dash(payment.id))
    table.add_row("Amount", f"{payment.amount} EUR")
    if payment.status:
        table.add_row("Status", payment.status)
    if payment.address:
        table.add_row("Address", payment.address)
    if payment.amount_btc:
        table.add_row("Amount (BTC)", payment.amount_btc)
    if payment.uri:
        table.add_row("URI", payment.uri)
    return Panel(table, title="Payment", border_style="cyan")


def build_transactions_table(transactions: list[Transaction]) -> Table:
    table = Table(title="Transactions (last 90 days)")
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Amount", justify="right")
    table.add_column("Status")
    table.add_column("Completed", style="green")
    for tx in transactions:
        table.add_row(tx.id, f"{tx.amount} EUR", tx.status, _or_dash(tx.completed))
    return table
