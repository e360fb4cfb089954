"""CLI commands for the Cart aggregate."""

from __future__ import annotations

import click

from storefront.application.add_to_cart import AddToCartHandler
from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import CartDTO
from storefront.application.reconcile_cart import ReconcileCartHandler
from storefront.application.remove_from_cart import RemoveFromCartHandler
from storefront.application.show_cart import ShowCartHandler
from storefront.application.update_cart_item import UpdateCartItemHandler
from storefront.domain.exceptions import DomainException
from storefront.domain.model.cart import CartLineKey
from storefront.domain.model.order import MAX_QUANTITY_PER_LINE
from storefront.infrastructure.bootstrap import cart_repository, catalog_cache


def _selection_options(func):
    """Options that identify a cart line."""
    func = click.option("--lining", default=None, help="Inner fabric (lining) ID.")(func)
    func = click.option("--fabric", required=True, help="Outer fabric ID.")(func)
    func = click.option("--product", required=True, help="Product ID (slug).")(func)
    return func


@click.command("add")
@_selection_options
@click.option(
    "--quantity",
    default=1,
    show_default=True,
    type=click.IntRange(1, MAX_QUANTITY_PER_LINE),
    help="How many to add.",
)
@click.option("--notes", default=None, help="Free-text wishes for this line.")
def cart_add(
    product: str,
    fabric: str,
    lining: str | None,
    quantity: int,
    notes: str | None,
) -> None:
    """Add a product selection to the cart."""
    handler = AddToCartHandler(cart_repo=cart_repository(), catalog_cache=catalog_cache())

    try:
        line = handler.handle(
            product_id=product,
            selected_fabric=fabric,
            selected_lining=lining,
            quantity=quantity,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Cart now holds {line.quantity} x {product} ({fabric})")


@click.command("update")
@_selection_options
@click.option(
    "--quantity",
    required=True,
    type=click.IntRange(max=MAX_QUANTITY_PER_LINE),
    help="New quantity; 0 removes the line.",
)
def cart_update(product: str, fabric: str, lining: str | None, quantity: int) -> None:
    """Change the quantity of a cart line."""
    handler = UpdateCartItemHandler(cart_repo=cart_repository(), catalog_cache=catalog_cache())
    try:
        handler.handle(CartLineKey(product, fabric, lining or None), quantity)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if quantity <= 0:
        click.echo(f"Removed {product} ({fabric}) from the cart")
    else:
        click.echo(f"Quantity for {product} ({fabric}) set to {quantity}")


@click.command("remove")
@_selection_options
def cart_remove(product: str, fabric: str, lining: str | None) -> None:
    """Remove a line from the cart."""
    handler = RemoveFromCartHandler(cart_repo=cart_repository())
    handler.handle(CartLineKey(product, fabric, lining or None))
    click.echo(f"Removed {product} ({fabric}) from the cart")


@click.command("clear")
def cart_clear() -> None:
    """Empty the cart."""
    ClearCartHandler(cart_repo=cart_repository()).handle()
    click.echo("Cart cleared.")


@click.command("reconcile")
def cart_reconcile() -> None:
    """Drop cart lines that no longer match the catalog."""
    handler = ReconcileCartHandler(cart_repo=cart_repository(), catalog_cache=catalog_cache())
    removed = handler.handle()
    click.echo(f"Removed {len(removed)} invalid cart item(s).")


def _display_cart(dto: CartDTO) -> None:
    if dto.removed_lines:
        click.echo(f"({dto.removed_lines} unavailable item(s) removed)")
    if not dto.lines:
        click.echo("Cart is empty.")
        if dto.unresolved_lines:
            click.echo(f"{dto.unresolved_lines} item(s) waiting for catalog data.")
        return

    click.echo(f"  {'Product':<24} {'Fabric':<14} {'Lining':<10} {'Qty':>4} {'Total':>12}")
    click.echo(f"  {'-'*68}")
    for line in dto.lines:
        click.echo(
            f"  {line.product_name:<24} {line.fabric_name:<14} {line.lining_name or '-':<10} "
            f"{line.quantity:>4} {line.line_total:>12}"
        )
        if line.notes:
            click.echo(f"    Önskemål: {line.notes}")
    click.echo(f"  {'-'*68}")
    click.echo(f"  {'Items':<24} {dto.total_items:>44}")
    click.echo(f"  {'Total':<24} {dto.total_price:>44}")
    if dto.unresolved_lines:
        click.echo(f"{dto.unresolved_lines} item(s) waiting for catalog data.")


@click.command("show")
def cart_show() -> None:
    """Show the cart, pruned against the catalog."""
    handler = ShowCartHandler(cart_repo=cart_repository(), catalog_cache=catalog_cache())
    _display_cart(handler.handle())
