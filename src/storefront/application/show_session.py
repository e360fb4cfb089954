"""Application service: Show Checkout Session use case.

Backs the order confirmation page. Besides describing the session it runs
fulfillment, so that stock is corrected even when the webhook is late or
never arrives. Both paths share the ledger gate in FulfillOrderHandler.
"""

from __future__ import annotations

from storefront.application.dto import FulfillmentResultDTO, SessionSummaryDTO
from storefront.application.fulfill_order import FulfillOrderHandler
from storefront.domain.exceptions import MalformedRequestError
from storefront.domain.model.fulfillment import FulfillmentSource, PaymentConfirmation
from storefront.domain.repository.payment_gateway import PaymentGateway
from storefront.domain.sanitize import sanitize_identifier

MAX_SESSION_ID_LENGTH = 255


class ShowSessionHandler:

    def __init__(
        self,
        payment_gateway: PaymentGateway,
        fulfill_handler: FulfillOrderHandler,
        fulfill_on_poll: bool = True,
    ) -> None:
        self._payment_gateway = payment_gateway
        self._fulfill_handler = fulfill_handler
        self._fulfill_on_poll = fulfill_on_poll

    def handle(self, session_id: str | None) -> SessionSummaryDTO:
        cleaned = sanitize_identifier(session_id, max_length=MAX_SESSION_ID_LENGTH)
        if cleaned is None:
            raise MalformedRequestError(public_message="Session ID is required")

        confirmation = self._payment_gateway.retrieve_session(cleaned)

        fulfillment = None
        if self._fulfill_on_poll:
            fulfillment = self._fulfill_handler.handle(
                confirmation, FulfillmentSource.SESSION_POLL
            )
        return self._to_dto(confirmation, fulfillment)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(
        confirmation: PaymentConfirmation,
        fulfillment: FulfillmentResultDTO | None,
    ) -> SessionSummaryDTO:
        return SessionSummaryDTO(
            id=confirmation.session_id,
            status=confirmation.status,
            payment_status=confirmation.payment_status,
            customer_email=confirmation.customer_email,
            customer_name=confirmation.customer_name,
            amount_total=confirmation.amount_total,
            currency=confirmation.currency,
            line_items=list(confirmation.line_items),
            metadata=dict(confirmation.metadata),
            fulfillment=fulfillment,
        )
