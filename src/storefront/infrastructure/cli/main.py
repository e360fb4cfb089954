import click

from storefront.infrastructure.bootstrap import settings
from storefront.infrastructure.cli.cart_commands import (
    cart_add,
    cart_clear,
    cart_reconcile,
    cart_remove,
    cart_show,
    cart_update,
)
from storefront.infrastructure.cli.catalog_commands import (
    catalog_export,
    catalog_refresh,
    catalog_show,
)
from storefront.infrastructure.cli.checkout_commands import checkout
from storefront.infrastructure.cli.order_commands import (
    order_confirm,
    order_fulfill,
    order_session,
    order_webhook,
)
from storefront.infrastructure.cli.product_commands import product_list, product_set_stock
from storefront.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """Storefront: cart, checkout and order fulfillment"""
    configure_logging(settings().log_level)


@cli.group()
def cart() -> None:
    """Manage the shopping cart."""


@cli.group()
def catalog() -> None:
    """Inspect and refresh the catalog."""


@cli.group()
def order() -> None:
    """Handle paid orders."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
cart.add_command(cart_add)
cart.add_command(cart_clear)
cart.add_command(cart_reconcile)
cart.add_command(cart_remove)
cart.add_command(cart_show)
cart.add_command(cart_update)
catalog.add_command(catalog_export)
catalog.add_command(catalog_refresh)
catalog.add_command(catalog_show)
cli.add_command(checkout)
order.add_command(order_confirm)
order.add_command(order_fulfill)
order.add_command(order_session)
order.add_command(order_webhook)
product.add_command(product_list)
product.add_command(product_set_stock)
