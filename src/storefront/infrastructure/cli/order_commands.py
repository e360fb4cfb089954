"""CLI commands for paid orders: webhook intake, session lookup, fulfillment."""

from __future__ import annotations

import json
from dataclasses import asdict

import click

from storefront.application.clear_cart import ClearCartHandler
from storefront.application.confirm_order import ConfirmOrderHandler
from storefront.application.dto import FulfillmentResultDTO
from storefront.application.fulfill_session import FulfillSessionHandler
from storefront.application.handle_webhook import HandleWebhookHandler
from storefront.application.show_session import ShowSessionHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import (
    cart_repository,
    fulfill_order_handler,
    payment_gateway,
    settings,
)
from storefront.infrastructure.cli.checkout_commands import exit_code_for


def _show_session_handler() -> ShowSessionHandler:
    return ShowSessionHandler(
        payment_gateway=payment_gateway(),
        fulfill_handler=fulfill_order_handler(),
        fulfill_on_poll=settings().poll_fulfillment_enabled,
    )


def _echo_error(exc: DomainException) -> None:
    click.echo(json.dumps({"error": exc.public_message}, ensure_ascii=False))
    raise SystemExit(exit_code_for(exc))


def _display_fulfillment(result: FulfillmentResultDTO) -> None:
    click.echo(f"Session {result.session_id}: {result.outcome}")
    for line in result.lines:
        if line.success:
            click.echo(
                f"  item {line.index}: {line.product_slug} -{line.quantity} "
                f"(stock now {line.new_stock})"
            )
        else:
            click.echo(f"  item {line.index}: {line.product_slug} FAILED ({line.error})")
    if result.skipped_lines:
        click.echo(f"  {result.skipped_lines} malformed item(s) skipped")


@click.command("webhook")
@click.option(
    "--payload",
    "payload_file",
    required=True,
    type=click.File("rb"),
    help="Raw event body exactly as received; '-' reads stdin.",
)
@click.option("--signature", default=None, help="Value of the Stripe-Signature header.")
def order_webhook(payload_file, signature: str | None) -> None:
    """Process a signed payment processor event."""
    handler = HandleWebhookHandler(
        payment_gateway=payment_gateway(),
        fulfill_handler=fulfill_order_handler(),
    )

    try:
        result = handler.handle(payload_file.read(), signature)
    except DomainException as exc:
        _echo_error(exc)

    click.echo(json.dumps({"received": result.received, "type": result.event_type}))
    if result.fulfillment is not None:
        _display_fulfillment(result.fulfillment)


@click.command("session")
@click.option("--id", "session_id", required=True, help="Checkout session ID.")
def order_session(session_id: str) -> None:
    """Describe a checkout session (fulfills it if paid and not yet processed)."""
    try:
        dto = _show_session_handler().handle(session_id)
    except DomainException as exc:
        _echo_error(exc)

    click.echo(json.dumps(asdict(dto), indent=2, ensure_ascii=False, default=str))


@click.command("confirm")
@click.option("--id", "session_id", required=True, help="Checkout session ID.")
def order_confirm(session_id: str) -> None:
    """Confirmation page flow: look the session up and empty the cart."""
    handler = ConfirmOrderHandler(
        show_session=_show_session_handler(),
        clear_cart=ClearCartHandler(cart_repo=cart_repository()),
    )

    try:
        dto = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(exc.public_message)

    click.echo(f"Order {dto.id}  (payment={dto.payment_status})")
    if dto.customer_email:
        click.echo(f"Customer: {dto.customer_name or ''} <{dto.customer_email}>")
    if dto.amount_total is not None:
        click.echo(f"Total:    {dto.amount_total / 100:.2f} {(dto.currency or '').upper()}")
    if handler.cart_cleared:
        click.echo("Cart cleared.")
    if dto.fulfillment is not None:
        _display_fulfillment(dto.fulfillment)


@click.command("fulfill")
@click.option("--id", "session_id", required=True, help="Checkout session ID.")
def order_fulfill(session_id: str) -> None:
    """Re-run stock deduction for a session (no-op if already processed)."""
    handler = FulfillSessionHandler(
        payment_gateway=payment_gateway(),
        fulfill_handler=fulfill_order_handler(),
    )

    try:
        result = handler.handle(session_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_fulfillment(result)
