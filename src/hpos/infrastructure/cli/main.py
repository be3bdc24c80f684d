import click

from hpos.domain.exceptions import ConfigurationError
from hpos.infrastructure.cli.cart_commands import (
    cart_add,
    cart_change,
    cart_clear,
    cart_guest,
    cart_remove,
    cart_show,
    discount_apply,
    discount_list,
    discount_remove,
    discount_select,
    guest_list,
)
from hpos.infrastructure.cli.catalog_commands import catalog_list
from hpos.infrastructure.cli.checkout_commands import checkout_guest_tab, checkout_walk_in
from hpos.infrastructure.cli.folio_commands import folio_pay, folio_show
from hpos.infrastructure.cli.transaction_commands import (
    transaction_list,
    transaction_refund,
    transaction_settle,
    transaction_show,
    transaction_void,
)
from hpos.infrastructure.config import load_settings
from hpos.infrastructure.log import configure_logging


@click.group()
@click.option("--data-dir", default=None, help="Directory of the JSON stores.")
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR.")
@click.pass_context
def cli(ctx: click.Context, data_dir: str | None, log_level: str | None) -> None:
    """HPOS — hotel point of sale"""
    try:
        settings = load_settings(data_dir=data_dir, log_level=log_level)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level)
    ctx.obj = settings


@cli.group()
def catalog() -> None:
    """Browse products."""


@cli.group()
def cart() -> None:
    """Build the current sale."""


@cli.group()
def discount() -> None:
    """Apply discounts to walk-in sales."""


@cli.group()
def checkout() -> None:
    """Turn the cart into a transaction."""


@cli.group()
def transaction() -> None:
    """Manage recorded transactions."""


@cli.group()
def folio() -> None:
    """Guest tabs and their settlement."""


# Register subcommands
catalog.add_command(catalog_list)
cart.add_command(cart_add)
cart.add_command(cart_change)
cart.add_command(cart_remove)
cart.add_command(cart_clear)
cart.add_command(cart_show)
cart.add_command(cart_guest)
cart.add_command(guest_list)
discount.add_command(discount_list)
discount.add_command(discount_apply)
discount.add_command(discount_select)
discount.add_command(discount_remove)
checkout.add_command(checkout_walk_in)
checkout.add_command(checkout_guest_tab)
transaction.add_command(transaction_show)
transaction.add_command(transaction_list)
transaction.add_command(transaction_settle)
transaction.add_command(transaction_void)
transaction.add_command(transaction_refund)
folio.add_command(folio_show)
folio.add_command(folio_pay)
