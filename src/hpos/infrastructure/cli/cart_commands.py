"""CLI commands for the session cart, its guest and its discount."""

from __future__ import annotations

import click

from hpos.application.apply_discount import ApplyDiscountHandler
from hpos.application.dto import CartDTO
from hpos.application.edit_cart import EditCartHandler
from hpos.application.select_guest import SelectGuestHandler
from hpos.domain.exceptions import DomainException
from hpos.infrastructure.bootstrap import (
    discount_repository,
    guest_directory,
    product_repository,
    session_cart,
)
from hpos.infrastructure.cli.display import display_cart
from hpos.infrastructure.config import Settings


@click.command("add")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def cart_add(settings: Settings, product_id: str) -> None:
    """Add one unit of a product to the cart."""
    handler = EditCartHandler(product_repo=product_repository(settings))

    with session_cart(settings) as cart:
        try:
            dto = handler.add(cart, product_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("change")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--delta", required=True, type=int, help="Quantity change, e.g. 2 or -1.")
@click.pass_obj
def cart_change(settings: Settings, product_id: str, delta: int) -> None:
    """Change a line's quantity; reaching zero removes it."""
    handler = EditCartHandler(product_repo=product_repository(settings))

    with session_cart(settings) as cart:
        try:
            dto = handler.change_quantity(cart, product_id, delta)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("remove")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.pass_obj
def cart_remove(settings: Settings, product_id: str) -> None:
    """Remove a line from the cart."""
    handler = EditCartHandler(product_repo=product_repository(settings))
    with session_cart(settings) as cart:
        dto = handler.remove(cart, product_id)
    display_cart(dto)


@click.command("clear")
@click.pass_obj
def cart_clear(settings: Settings) -> None:
    """Empty the cart and drop any discount."""
    handler = EditCartHandler(product_repo=product_repository(settings))
    with session_cart(settings) as cart:
        handler.clear(cart)
    click.echo("Cart cleared.")


@click.command("show")
@click.pass_obj
def cart_show(settings: Settings) -> None:
    """Show the cart with its totals."""
    with session_cart(settings) as cart:
        dto = CartDTO.from_cart(cart)
    display_cart(dto)


@click.command("guest")
@click.option("--guest", "guest_id", default=None, help="Checked-in guest ID.")
@click.option("--clear", is_flag=True, default=False, help="Deselect the guest.")
@click.pass_obj
def cart_guest(settings: Settings, guest_id: str | None, clear: bool) -> None:
    """Charge the cart to a checked-in guest's tab (or deselect)."""
    if not clear and not guest_id:
        raise click.ClickException("Give --guest ID or --clear")

    handler = SelectGuestHandler(guest_directory=guest_directory(settings))
    with session_cart(settings) as cart:
        try:
            dto = handler.clear(cart) if clear else handler.handle(cart, guest_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    display_cart(dto)


@click.command("guests")
@click.pass_obj
def guest_list(settings: Settings) -> None:
    """List checked-in guests available for room-tab charges."""
    guests = guest_directory(settings).list_active_guests()
    if not guests:
        click.echo("No checked-in guests available.")
        return

    click.echo(f"{'Guest ID':<14} {'Name':<24} {'Room':<8} {'Type':<12}")
    click.echo("-" * 60)
    for g in guests:
        click.echo(f"{g.guest_id:<14} {g.guest_name:<24} {g.room_id:<8} {g.room_type:<12}")


# --- Discounts ----------------------------------------------------------------


@click.command("list")
@click.pass_obj
def discount_list(settings: Settings) -> None:
    """List active discounts."""
    handler = ApplyDiscountHandler(discount_repo=discount_repository(settings))
    discounts = handler.available()
    if not discounts:
        click.echo("No active discounts.")
        return

    click.echo(f"{'ID':<6} {'Code':<12} {'Offer':<14} {'Minimum':>12}  Description")
    click.echo("-" * 70)
    for d in discounts:
        minimum = str(d.min_subtotal) if d.min_subtotal else "-"
        click.echo(f"{d.id:<6} {d.code:<12} {d.label:<14} {minimum:>12}  {d.description}")


@click.command("apply")
@click.option("--code", required=True, help="Discount code, e.g. WELCOME10.")
@click.pass_obj
def discount_apply(settings: Settings, code: str) -> None:
    """Apply a discount code to the cart."""
    handler = ApplyDiscountHandler(discount_repo=discount_repository(settings))

    with session_cart(settings) as cart:
        try:
            dto = handler.apply_code(cart, code)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Discount applied: {dto.discount_code}")
    display_cart(dto)


@click.command("select")
@click.option("--id", "discount_id", required=True, help="Discount ID.")
@click.pass_obj
def discount_select(settings: Settings, discount_id: str) -> None:
    """Apply an active discount picked from the list."""
    handler = ApplyDiscountHandler(discount_repo=discount_repository(settings))

    with session_cart(settings) as cart:
        try:
            dto = handler.apply_selected(cart, discount_id)
        except DomainException as exc:
            raise click.ClickException(str(exc))

    click.echo(f"Discount applied: {dto.discount_code}")
    display_cart(dto)


@click.command("remove")
@click.pass_obj
def discount_remove(settings: Settings) -> None:
    """Remove the cart's discount."""
    handler = ApplyDiscountHandler(discount_repo=discount_repository(settings))
    with session_cart(settings) as cart:
        dto = handler.remove(cart)
    click.echo("Discount removed.")
    display_cart(dto)
