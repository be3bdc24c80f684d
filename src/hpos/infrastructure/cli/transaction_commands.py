"""CLI commands for recorded transactions."""

from __future__ import annotations

import click

from hpos.application.refund_transaction import RefundTransactionHandler
from hpos.application.settle_transaction import SettleTransactionHandler
from hpos.application.show_transaction import ListTransactionsHandler, ShowTransactionHandler
from hpos.application.void_transaction import VoidTransactionHandler
from hpos.domain.exceptions import DomainException
from hpos.domain.model.transaction import TransactionStatus
from hpos.domain.service.authorization import Role
from hpos.infrastructure.bootstrap import authorization_gate, transaction_repository
from hpos.infrastructure.cli.display import display_transaction, transaction_row
from hpos.infrastructure.config import Settings


@click.command("show")
@click.option("--id", "transaction_id", required=True, help="Transaction ID.")
@click.pass_obj
def transaction_show(settings: Settings, transaction_id: str) -> None:
    """Show a transaction with its items."""
    handler = ShowTransactionHandler(transaction_repo=transaction_repository(settings))

    try:
        dto = handler.handle(transaction_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    display_transaction(dto)


@click.command("list")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in TransactionStatus], case_sensitive=False),
    help="Only show transactions in this status.",
)
@click.pass_obj
def transaction_list(settings: Settings, status: str | None) -> None:
    """List the 50 most recent transactions."""
    handler = ListTransactionsHandler(transaction_repo=transaction_repository(settings))

    try:
        history = handler.handle(status=status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not history.transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"{'ID':<12} {'Number':<20} {'Status':<10} {'Guest':<20} {'Total':>12}")
    click.echo("-" * 78)
    for dto in history.transactions:
        click.echo(transaction_row(dto))
    click.echo("-" * 78)
    click.echo(
        f"Revenue {history.completed_revenue}  |  "
        f"pending {history.pending_count}  |  voided {history.voided_count}"
    )


@click.command("settle")
@click.option("--id", "transaction_id", required=True, help="Transaction ID.")
@click.option("--method", required=True, help="Payment method, e.g. card or cash.")
@click.pass_obj
def transaction_settle(settings: Settings, transaction_id: str, method: str) -> None:
    """Record payment for a pending transaction."""
    handler = SettleTransactionHandler(transaction_repo=transaction_repository(settings))

    try:
        dto = handler.handle(transaction_id, method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Transaction {dto.transaction_number} paid ({dto.total} via {dto.payment_method}).")


@click.command("void")
@click.option("--id", "transaction_id", required=True, help="Transaction ID.")
@click.option(
    "--role",
    required=True,
    type=click.Choice([r.value for r in Role], case_sensitive=False),
    help="Role of the staff member voiding.",
)
@click.option("--code", "manager_code", default=None, help="Manager code (front desk only).")
@click.pass_obj
def transaction_void(
    settings: Settings,
    transaction_id: str,
    role: str,
    manager_code: str | None,
) -> None:
    """Void a transaction (front desk needs the manager code)."""
    actor = Role(role.lower())
    if actor is not Role.MANAGER and manager_code is None:
        manager_code = click.prompt("Manager code", hide_input=True)

    handler = VoidTransactionHandler(
        transaction_repo=transaction_repository(settings),
        gate=authorization_gate(settings),
    )

    try:
        dto = handler.handle(transaction_id, actor, manager_code)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Transaction {dto.transaction_number} voided.")


@click.command("refund")
@click.option("--id", "transaction_id", required=True, help="Transaction ID.")
@click.option("--reason", required=True, help="Why the sale is refunded (10-500 chars).")
@click.pass_obj
def transaction_refund(settings: Settings, transaction_id: str, reason: str) -> None:
    """Refund a completed transaction."""
    handler = RefundTransactionHandler(transaction_repo=transaction_repository(settings))

    try:
        dto = handler.handle(transaction_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Refund of {dto.total} processed for {dto.transaction_number}.")
