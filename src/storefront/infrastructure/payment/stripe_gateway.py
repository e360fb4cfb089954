"""Stripe implementation of the PaymentGateway port.

Prices sent to Stripe come from the Order, which was priced from the
catalog; Stripe wants them in minor units (öre). Every Stripe exception
is converted to a domain error here so nothing Stripe-specific leaks out.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping

import stripe

from storefront.domain.exceptions import (
    PaymentGatewayError,
    TooManyItemsError,
    WebhookVerificationError,
)
from storefront.domain.model.fulfillment import PaymentConfirmation
from storefront.domain.model.order import Order, ShippingOption
from storefront.domain.repository.payment_gateway import (
    CheckoutSession,
    PaymentEvent,
    PaymentGateway,
)

logger = logging.getLogger(__name__)

ALLOWED_COUNTRIES = ["SE", "NO", "DK", "FI"]
PAYMENT_METHOD_TYPES = ["card", "klarna"]
CHECKOUT_LOCALE = "sv"
# Stripe rejects metadata with more keys than this.
METADATA_KEY_LIMIT = 50


class StripePaymentGateway(PaymentGateway):

    def __init__(
        self,
        secret_key: str | None,
        webhook_secret: str | None = None,
        currency: str = "sek",
    ) -> None:
        self._secret_key = secret_key
        self._webhook_secret = webhook_secret
        self._currency = currency.lower()

    @property
    def is_configured(self) -> bool:
        return bool(self._secret_key)

    @property
    def can_verify_webhooks(self) -> bool:
        return bool(self._webhook_secret)

    # --- PaymentGateway interface ---------------------------------------------

    def create_checkout_session(
        self,
        order: Order,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        params = build_session_params(order, success_url, cancel_url, self._currency)
        if len(params["metadata"]) > METADATA_KEY_LIMIT:
            fitting = lines_within_metadata_limit(order)
            logger.warning(
                "Order metadata has %d keys (limit %d); at most %d of %d lines fit",
                len(params["metadata"]),
                METADATA_KEY_LIMIT,
                fitting,
                len(order.lines),
            )
            raise TooManyItemsError(fitting)
        try:
            session = stripe.checkout.Session.create(api_key=self._secret_key, **params)
        except stripe.StripeError as exc:
            logger.error("Checkout error: %s", exc)
            raise PaymentGatewayError(f"Stripe rejected checkout session: {exc}") from exc
        return CheckoutSession(id=session.id, url=session.url)

    def retrieve_session(self, session_id: str) -> PaymentConfirmation:
        try:
            session = stripe.checkout.Session.retrieve(
                session_id,
                api_key=self._secret_key,
                expand=["line_items", "customer", "payment_intent"],
            )
        except stripe.StripeError as exc:
            logger.error("Session retrieval error for %s: %s", session_id, exc)
            raise PaymentGatewayError(
                f"Stripe session retrieval failed: {exc}",
                public_message="Failed to retrieve session",
            ) from exc
        return confirmation_from_session(session.to_dict())

    def construct_event(self, payload: bytes, signature: str) -> PaymentEvent:
        try:
            stripe.Webhook.construct_event(payload, signature, self._webhook_secret)
        except stripe.SignatureVerificationError as exc:
            logger.error("Webhook signature verification failed: %s", exc)
            raise WebhookVerificationError(str(exc)) from exc
        except ValueError as exc:
            logger.error("Webhook payload unparseable: %s", exc)
            raise WebhookVerificationError(f"Invalid payload: {exc}") from exc

        # Verified; read the body as plain data.
        raw = json.loads(payload)
        event_type = raw.get("type", "")
        obj = (raw.get("data") or {}).get("object") or {}
        confirmation = None
        if event_type.startswith("checkout.session.") and obj.get("id"):
            confirmation = confirmation_from_session(obj)
        return PaymentEvent(
            id=raw.get("id", ""), type=event_type, confirmation=confirmation, raw=raw
        )


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------


def lines_within_metadata_limit(order: Order) -> int:
    """How many leading lines of the order fit in Stripe's metadata."""
    keys = 0
    for index, line in enumerate(order.lines):
        keys += len(line.metadata(index))
        if keys > METADATA_KEY_LIMIT:
            return index
    return len(order.lines)


def build_session_params(
    order: Order,
    success_url: str,
    cancel_url: str,
    currency: str,
) -> dict[str, Any]:
    """Keyword arguments for ``stripe.checkout.Session.create``."""
    line_items = [
        {
            "price_data": {
                "currency": currency,
                "product_data": {
                    "name": line.product.name,
                    "description": line.description,
                    "metadata": line.product_metadata(),
                },
                "unit_amount": line.unit_price.to_minor_units(),
            },
            "quantity": line.quantity.value,
        }
        for line in order.lines
    ]
    return {
        "mode": "payment",
        "payment_method_types": PAYMENT_METHOD_TYPES,
        "line_items": line_items,
        "shipping_address_collection": {"allowed_countries": ALLOWED_COUNTRIES},
        "shipping_options": [_shipping_option(o, currency) for o in order.shipping_options],
        "metadata": order.metadata(),
        "success_url": success_url,
        "cancel_url": cancel_url,
        "locale": CHECKOUT_LOCALE,
    }


def _shipping_option(option: ShippingOption, currency: str) -> dict[str, Any]:
    return {
        "shipping_rate_data": {
            "type": "fixed_amount",
            "fixed_amount": {
                "amount": option.amount.to_minor_units(),
                "currency": currency,
            },
            "display_name": option.display_name,
            "delivery_estimate": {
                "minimum": {"unit": "business_day", "value": option.min_business_days},
                "maximum": {"unit": "business_day", "value": option.max_business_days},
            },
        }
    }


def confirmation_from_session(data: Mapping[str, Any]) -> PaymentConfirmation:
    details = data.get("customer_details") or {}
    line_items = data.get("line_items") or {}
    metadata = data.get("metadata") or {}
    return PaymentConfirmation(
        session_id=data["id"],
        payment_status=data.get("payment_status") or "",
        status=data.get("status"),
        metadata={str(k): str(v) for k, v in metadata.items()},
        customer_email=details.get("email"),
        customer_name=details.get("name"),
        amount_total=data.get("amount_total"),
        currency=data.get("currency"),
        line_items=tuple(line_items.get("data") or ()),
    )
