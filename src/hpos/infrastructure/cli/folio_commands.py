"""CLI commands for guest folios."""

from __future__ import annotations

import click

from hpos.application.dto import FolioDTO
from hpos.application.guest_folio import LoadFolioHandler, PaySelectedHandler
from hpos.application.settle_transaction import SettleTransactionHandler
from hpos.domain.exceptions import DomainException
from hpos.domain.model.folio import PaymentSelection
from hpos.infrastructure.bootstrap import guest_directory, transaction_repository
from hpos.infrastructure.cli.display import transaction_row
from hpos.infrastructure.config import Settings


def _display_folio(dto: FolioDTO) -> None:
    click.echo(f"Folio: {dto.guest_name} ({dto.guest_id})")
    click.echo(f"Pending: {dto.pending_total} ({len(dto.pending)})   Total paid: {dto.total_paid}")
    for title, rows in (
        ("Pending charges", dto.pending),
        ("Completed", dto.completed),
        ("Voided", dto.voided),
    ):
        if not rows:
            continue
        click.echo()
        click.echo(f"{title}:")
        for row in rows:
            click.echo(f"  {transaction_row(row)}")


@click.command("show")
@click.option("--guest", "guest_id", required=True, help="Guest ID.")
@click.pass_obj
def folio_show(settings: Settings, guest_id: str) -> None:
    """Show a guest's pending, completed and voided charges."""
    handler = LoadFolioHandler(
        transaction_repo=transaction_repository(settings),
        guest_directory=guest_directory(settings),
    )

    try:
        folio = handler.handle(guest_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_folio(FolioDTO.from_folio(folio))


@click.command("pay")
@click.option("--guest", "guest_id", required=True, help="Guest ID.")
@click.option("--ids", default=None, help="Pending transaction IDs as 'id1,id2'.")
@click.option("--all", "pay_all", is_flag=True, default=False, help="Pay every pending charge.")
@click.option("--method", required=True, help="Payment method, e.g. card or cash.")
@click.pass_obj
def folio_pay(
    settings: Settings,
    guest_id: str,
    ids: str | None,
    pay_all: bool,
    method: str,
) -> None:
    """Settle selected pending charges of a guest."""
    if not ids and not pay_all:
        raise click.ClickException("Give --ids or --all")

    repo = transaction_repository(settings)
    loader = LoadFolioHandler(transaction_repo=repo, guest_directory=guest_directory(settings))
    payer = PaySelectedHandler(settle=SettleTransactionHandler(transaction_repo=repo))

    try:
        folio = loader.handle(guest_id)
        selection = PaymentSelection(folio)
        if pay_all:
            selection.select_all()
        else:
            selection.select([i.strip() for i in ids.split(",") if i.strip()]).raise_for_failure()
        result = payer.handle(selection, method)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if result.succeeded:
        click.echo(f"Payment of {result.settled_total} processed via {result.payment_method}")
        return

    if result.settled_ids:
        click.echo(
            f"Paid {len(result.settled_ids)} charge(s) totalling {result.settled_total} "
            f"before the failure."
        )
    raise click.ClickException(f"Failed to process payment for {result.failed_id}: {result.error}")
