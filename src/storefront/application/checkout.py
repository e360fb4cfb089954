"""Application service: Checkout use case.

Takes the raw checkout request a shopper's cart sends, validates it
fail-closed, prices it from the server-side catalog and asks the payment
processor for a hosted checkout session.

Order of checks:
1. Server configuration (payment credentials, site URL).
2. Request envelope: JSON object with an ``items`` list.
3. Batch size: at least one item, at most MAX_LINE_ITEMS.
4. Every item against the schema; one bad item rejects the batch.
5. Every item against the catalog (CheckoutValidationService).
6. Payment session creation.
"""

from __future__ import annotations

import logging

import pydantic

from storefront.application.dto import CheckoutResultDTO
from storefront.application.schemas import CheckoutItem, CheckoutRequest
from storefront.domain.exceptions import (
    ConfigurationError,
    EmptyCartError,
    InvalidItemError,
    MalformedRequestError,
    TooManyItemsError,
    UnsupportedMediaTypeError,
)
from storefront.domain.model.order import MAX_LINE_ITEMS, LineSelection
from storefront.domain.repository.catalog_source import CatalogSource
from storefront.domain.repository.payment_gateway import PaymentGateway
from storefront.domain.service.checkout_validation_service import (
    CheckoutValidationService,
)

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"


class CheckoutHandler:

    def __init__(
        self,
        catalog_source: CatalogSource,
        payment_gateway: PaymentGateway,
        site_url: str | None,
    ) -> None:
        self._catalog_source = catalog_source
        self._payment_gateway = payment_gateway
        self._site_url = site_url.rstrip("/") if site_url else None

    def handle(
        self,
        body: str | bytes,
        content_type: str | None = JSON_CONTENT_TYPE,
    ) -> CheckoutResultDTO:
        self._check_configuration()

        if not content_type or JSON_CONTENT_TYPE not in content_type:
            raise UnsupportedMediaTypeError()

        selections = self.parse(body)

        # Prices and availability come from the catalog, never the request.
        catalog = self._catalog_source.fetch()
        order = CheckoutValidationService(catalog).build_order(selections)

        session = self._payment_gateway.create_checkout_session(
            order,
            success_url=f"{self._site_url}/bekraftelse?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{self._site_url}/produkter",
        )
        logger.info(
            "Created checkout session %s (%d lines, subtotal %s)",
            session.id,
            len(order.lines),
            order.subtotal,
        )
        return CheckoutResultDTO(session_id=session.id, url=session.url)

    @staticmethod
    def parse(body: str | bytes) -> list[LineSelection]:
        """Parse and sanitize a request body into line selections."""
        try:
            request = CheckoutRequest.model_validate_json(body)
        except pydantic.ValidationError as exc:
            raise MalformedRequestError(f"Checkout body rejected: {exc.error_count()} errors")

        if not request.items:
            raise EmptyCartError()
        if len(request.items) > MAX_LINE_ITEMS:
            raise TooManyItemsError(MAX_LINE_ITEMS)

        selections: list[LineSelection] = []
        for index, raw in enumerate(request.items):
            try:
                item = CheckoutItem.model_validate(raw)
            except pydantic.ValidationError as exc:
                raise InvalidItemError(f"Item {index} rejected: {exc.errors()[0]['msg']}")
            selections.append(item.to_selection())
        return selections

    def _check_configuration(self) -> None:
        if not self._payment_gateway.is_configured:
            logger.error("Payment gateway credentials not configured")
            raise ConfigurationError("Payment gateway credentials not configured")
        if not self._site_url:
            logger.error("SITE_URL not set")
            raise ConfigurationError("SITE_URL not set")
