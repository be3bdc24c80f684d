"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from hpos.application.search_catalog import SearchCatalogHandler
from hpos.domain.exceptions import DomainException
from hpos.infrastructure.bootstrap import product_repository
from hpos.infrastructure.config import Settings


@click.command("list")
@click.option("--search", default=None, help="Filter by name or description.")
@click.option("--all", "include_unavailable", is_flag=True, default=False,
              help="Include unavailable products.")
@click.pass_obj
def catalog_list(settings: Settings, search: str | None, include_unavailable: bool) -> None:
    """List sellable products."""
    handler = SearchCatalogHandler(product_repo=product_repository(settings))

    try:
        products = handler.handle(search, include_unavailable=include_unavailable)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<22} {'Name':<24} {'Price':>12}")
    click.echo("-" * 60)
    for p in products:
        marker = "" if p.available else "  (unavailable)"
        click.echo(f"{p.id:<22} {p.name:<24} {str(p.price):>12}{marker}")
