"""Application service: Fulfill Session use case (operator re-run).

Looks a checkout session up at the payment processor and pushes it
through the same ledger gate as the webhook and the confirmation poll.
A session that was already fulfilled is reported, not deducted again.
"""

from __future__ import annotations

from storefront.application.dto import FulfillmentResultDTO
from storefront.application.fulfill_order import FulfillOrderHandler
from storefront.application.show_session import MAX_SESSION_ID_LENGTH
from storefront.domain.exceptions import MalformedRequestError
from storefront.domain.model.fulfillment import FulfillmentSource
from storefront.domain.repository.payment_gateway import PaymentGateway
from storefront.domain.sanitize import sanitize_identifier


class FulfillSessionHandler:

    def __init__(
        self,
        payment_gateway: PaymentGateway,
        fulfill_handler: FulfillOrderHandler,
    ) -> None:
        self._payment_gateway = payment_gateway
        self._fulfill_handler = fulfill_handler

    def handle(self, session_id: str) -> FulfillmentResultDTO:
        cleaned = sanitize_identifier(session_id, max_length=MAX_SESSION_ID_LENGTH)
        if cleaned is None:
            raise MalformedRequestError(public_message="Session ID is required")

        confirmation = self._payment_gateway.retrieve_session(cleaned)
        return self._fulfill_handler.handle(confirmation, FulfillmentSource.MANUAL)
