"""DNS record management commands."""

from __future__ import annotations

import typer
from pydantic import ValidationError

from cli import context
from cli.ui_components import build_records_table
from core.domain.records import RecordChanges, RecordType, build_record_spec

app = typer.Typer(no_args_is_help=True, help="Manage DNS records for a domain.")


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or str(exc)


@app.command("list")
def list_records(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name."),
) -> None:
    """List all DNS records for a domain."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        records = client.list_records(domain)
    if state.json:
        context.emit_json(records)
    elif not records:
        context.stdout_console.print(f"No DNS records for {domain}")
    else:
        context.stdout_console.print(build_records_table(records))


@app.command("add")
def add_record(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name."),
    record_type: RecordType = typer.Option(..., "--type", "-t", case_sensitive=False, help="Record type."),
    name: str = typer.Option(..., "--name", "-n", help="Record name (e.g., '@', 'www')."),
    content: str | None = typer.Option(None, "--content", "-c", help="Record content/value."),
    ttl: int | None = typer.Option(None, "--ttl", help="TTL in seconds."),
    priority: int | None = typer.Option(None, "--priority", "-p", help="Priority (MX, SRV, HTTPS, SVCB)."),
    weight: int | None = typer.Option(None, "--weight", "-w", help="Weight (SRV only)."),
    port: int | None = typer.Option(None, "--port", help="Port (SRV only)."),
    target: str | None = typer.Option(None, "--target", help="Target (HTTPS, SVCB only)."),
    value: str | None = typer.Option(None, "--value", help="SvcParams (HTTPS, SVCB only, e.g. 'alpn=h2,h3')."),
    ssh_algorithm: int | None = typer.Option(None, "--ssh-algorithm", help="SSHFP algorithm (1-5)."),
    ssh_type: int | None = typer.Option(None, "--ssh-type", help="SSHFP fingerprint type (1-2)."),
) -> None:
    """Add a new DNS record."""

    try:
        spec = build_record_spec(
            record_type,
            name,
            content=content,
            ttl=ttl,
            priority=priority,
            weight=weight,
            port=port,
            target=target,
            value=value,
            ssh_algorithm=ssh_algorithm,
            ssh_type=ssh_type,
        )
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid {record_type.value} record: {_validation_message(exc)}") from exc

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        record = client.add_record(domain, spec)
    if state.json:
        context.emit_json(record)
    else:
        context.stdout_console.print(build_records_table([record], title="Added record"))


@app.command("edit")
def edit_record(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name."),
    record_id: str = typer.Option(..., "--id", "-i", help="Record ID."),
    name: str | None = typer.Option(None, "--name", "-n", help="Record name."),
    content: str | None = typer.Option(None, "--content", "-c", help="Record content/value."),
    ttl: int | None = typer.Option(None, "--ttl", help="TTL in seconds."),
    priority: int | None = typer.Option(None, "--priority", "-p", help="Priority (MX, SRV, HTTPS, SVCB)."),
    weight: int | None = typer.Option(None, "--weight", "-w", help="Weight (SRV only)."),
    port: int | None = typer.Option(None, "--port", help="Port (SRV only)."),
    target: str | None = typer.Option(None, "--target", help="Target (HTTPS, SVCB only)."),
    value: str | None = typer.Option(None, "--value", help="SvcParams (HTTPS, SVCB only)."),
    ssh_algorithm: int | None = typer.Option(None, "--ssh-algorithm", help="SSHFP algorithm (1-5)."),
    ssh_type: int | None = typer.Option(None, "--ssh-type", help="SSHFP fingerprint type (1-2)."),
) -> None:
    """Edit an existing DNS record."""

    try:
        changes = RecordChanges(
            name=name,
            content=content,
            ttl=ttl,
            priority=priority,
            weight=weight,
            port=port,
            target=target,
            value=value,
            ssh_algorithm=ssh_algorithm,
            ssh_type=ssh_type,
        )
    except ValidationError as exc:
        raise typer.BadParameter(_validation_message(exc)) from exc
    if changes.is_empty():
        raise typer.BadParameter("nothing to change; pass at least one field")

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        record = client.edit_record(domain, record_id, changes)
    if state.json:
        context.emit_json(record)
    else:
        context.stdout_console.print(build_records_table([record], title="Updated record"))


@app.command("remove")
def remove_record(
    ctx: typer.Context,
    domain: str = typer.Argument(..., help="Domain name."),
    record_id: str = typer.Option(..., "--id", "-i", help="Record ID."),
) -> None:
    """Remove a DNS record."""

    state = context.get_state(ctx)
    with context.handle_errors(), context.build_gateway(state) as client:
        client.remove_record(domain, record_id)
    if state.json:
        context.emit_json({"status": "removed", "id": record_id})
    else:
        context.stdout_console.print(f"Removed record {record_id} from {domain}", highlight=False)
