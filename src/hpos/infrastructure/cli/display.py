"""Shared formatting for CLI output."""

from __future__ import annotations

import click

from hpos.application.dto import CartDTO, ReceiptDTO, TransactionDTO


def display_cart(dto: CartDTO) -> None:
    if dto.guest_name:
        click.echo(f"Guest: {dto.guest_name} (Room {dto.room_id})")
    if dto.is_empty:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'ID':<22} {'Item':<24} {'Qty':>4} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*78}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_id:<22} {line.name:<24} {line.quantity:>4} "
            f"{line.unit_price:>12} {line.line_total:>12}"
        )
    click.echo(f"  {'-'*78}")
    click.echo(f"  {'Subtotal':<64} {dto.subtotal:>14}")
    if dto.discount_code and not dto.guest_name:
        click.echo(f"  {'Discount (' + dto.discount_code + ')':<64} {'-' + dto.discount:>14}")
    click.echo(f"  {'Tax (10%)':<64} {dto.tax:>14}")
    click.echo(f"  {'Total':<64} {dto.total:>14}")
    if dto.guest_name:
        click.echo("  Guest tabs are charged without discounts.")


def display_transaction(dto: TransactionDTO) -> None:
    click.echo(f"Transaction {dto.transaction_number}  [{dto.id}]  (status={dto.status})")
    click.echo(f"Guest:   {dto.guest_name}")
    click.echo(f"Payment: {dto.payment_method}")
    click.echo(f"Created: {dto.created_at}")
    if dto.paid_at:
        click.echo(f"Paid:    {dto.paid_at}")
    if dto.voided_at:
        click.echo(f"Voided:  {dto.voided_at}")
    click.echo()
    click.echo(f"  {'Item':<24} {'Qty':>4} {'Price':>12} {'Total':>12}")
    click.echo(f"  {'-'*55}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>4} "
            f"{item.unit_price:>12} {item.total_price:>12}"
        )
    click.echo(f"  {'-'*55}")
    click.echo(f"  {'Subtotal':<41} {dto.subtotal:>14}")
    if dto.discount != "₱0.00":
        click.echo(f"  {'Discount':<41} {'-' + dto.discount:>14}")
    click.echo(f"  {'Tax (10%)':<41} {dto.tax:>14}")
    click.echo(f"  {'Total':<41} {dto.total:>14}")


def display_receipt(dto: ReceiptDTO) -> None:
    display_transaction(dto.transaction)
    if dto.room_id:
        click.echo(f"  Room: {dto.room_id}")
    if dto.tendered:
        click.echo(f"  {'Cash':<41} {dto.tendered:>14}")
    if dto.change:
        click.echo(f"  {'Change':<41} {dto.change:>14}")


def transaction_row(dto: TransactionDTO) -> str:
    return (
        f"{dto.id:<12} {dto.transaction_number:<20} {dto.status:<10} "
        f"{dto.guest_name:<20} {dto.total:>12}"
    )
