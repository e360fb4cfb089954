"""CLI command for starting a checkout.

Output mirrors the HTTP endpoint: ``{"url": ...}`` on success,
``{"error": ...}`` with the public message on failure, and a non-zero
exit status carrying the error class's status code family.
"""

from __future__ import annotations

import json

import click

from storefront.application.checkout import JSON_CONTENT_TYPE, CheckoutHandler
from storefront.domain.exceptions import DomainException
from storefront.infrastructure.bootstrap import catalog_source, payment_gateway, settings


@click.command("checkout")
@click.option(
    "--file",
    "body_file",
    required=True,
    type=click.File("rb"),
    help="JSON request body ({\"items\": [...]}); '-' reads stdin.",
)
@click.option(
    "--content-type",
    default=JSON_CONTENT_TYPE,
    show_default=True,
    help="Content type the body is declared as.",
)
def checkout(body_file, content_type: str) -> None:
    """Create a hosted checkout session for a cart."""
    handler = CheckoutHandler(
        catalog_source=catalog_source(),
        payment_gateway=payment_gateway(),
        site_url=settings().site_url,
    )

    try:
        result = handler.handle(body_file.read(), content_type=content_type)
    except DomainException as exc:
        click.echo(json.dumps({"error": exc.public_message}, ensure_ascii=False))
        raise SystemExit(exit_code_for(exc))

    click.echo(json.dumps({"url": result.url}))


def exit_code_for(exc: DomainException) -> int:
    """1 for client errors (4xx), 2 for server errors (5xx)."""
    return 1 if exc.status_code < 500 else 2
