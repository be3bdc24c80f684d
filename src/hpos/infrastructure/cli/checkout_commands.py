"""CLI commands for checking out the session cart."""

from __future__ import annotations

import click

from hpos.application.checkout import CheckoutHandler, CheckoutMode
from hpos.domain.exceptions import DomainException
from hpos.infrastructure.bootstrap import (
    guest_directory,
    session_cart,
    transaction_repository,
)
from hpos.infrastructure.cli.display import display_receipt
from hpos.infrastructure.config import Settings


def _handler(settings: Settings) -> CheckoutHandler:
    return CheckoutHandler(
        transaction_repo=transaction_repository(settings),
        guest_directory=guest_directory(settings),
    )


@click.command("walk-in")
@click.option(
    "--method",
    required=True,
    type=click.Choice(["card", "cash"], case_sensitive=False),
    help="How the customer pays.",
)
@click.option("--tendered", default=None, help="Cash handed over (required for cash).")
@click.pass_obj
def checkout_walk_in(settings: Settings, method: str, tendered: str | None) -> None:
    """Take payment now for a walk-in sale."""
    handler = _handler(settings)

    with session_cart(settings) as cart:
        try:
            receipt = handler.handle(
                cart, CheckoutMode.WALK_IN, payment_method=method, tendered=tendered
            )
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Payment of {receipt.transaction.total} received via {method.lower()}")
    click.echo()
    display_receipt(receipt)


@click.command("guest-tab")
@click.pass_obj
def checkout_guest_tab(settings: Settings) -> None:
    """Add the cart to the selected guest's tab as a pending charge."""
    handler = _handler(settings)

    with session_cart(settings) as cart:
        try:
            receipt = handler.handle(cart, CheckoutMode.GUEST_TAB)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(
        f"Items added to {receipt.transaction.guest_name}'s tab ({receipt.transaction.total})"
    )
    click.echo()
    display_receipt(receipt)
