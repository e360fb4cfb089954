"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from storefront.application.set_stock import SetStockHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import product_repository


@click.command("list")
def product_list() -> None:
    """List all products with their stock levels."""
    repo = product_repository()
    products = repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<24} {'Name':<28} {'Price':>10} {'Stock':>6} {'Active':>7}")
    click.echo("-" * 79)
    for p in products:
        active = "yes" if p.is_active else "no"
        click.echo(f"{p.id:<24} {p.name:<28} {str(p.price):>10} {p.stock:>6} {active:>7}")


@click.command("set-stock")
@click.option("--id", "product_id", required=True, help="Product ID (slug).")
@click.option("--quantity", required=True, type=int, help="New stock level.")
def product_set_stock(product_id: str, quantity: int) -> None:
    """Set a product's stock level."""
    handler = SetStockHandler(product_repo=product_repository())

    try:
        handler.handle(product_id=product_id, quantity=quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{product_id}' set to {quantity}")
