"""Application service: Handle Payment Webhook use case.

The payment processor pushes signed events; only two of them mean money
has arrived for a checkout session.
"""

from __future__ import annotations

import logging

from storefront.application.dto import WebhookResultDTO
from storefront.application.fulfill_order import FulfillOrderHandler
from storefront.domain.exceptions import ConfigurationError, WebhookVerificationError
from storefront.domain.model.fulfillment import FulfillmentSource
from storefront.domain.repository.payment_gateway import PaymentGateway

logger = logging.getLogger(__name__)

SESSION_COMPLETED = "checkout.session.completed"
ASYNC_PAYMENT_SUCCEEDED = "checkout.session.async_payment_succeeded"


class HandleWebhookHandler:

    def __init__(
        self,
        payment_gateway: PaymentGateway,
        fulfill_handler: FulfillOrderHandler,
    ) -> None:
        self._payment_gateway = payment_gateway
        self._fulfill_handler = fulfill_handler

    def handle(self, payload: bytes, signature: str | None) -> WebhookResultDTO:
        if not self._payment_gateway.is_configured:
            logger.error("Payment gateway credentials not configured")
            raise ConfigurationError("Payment gateway credentials not configured")
        if not self._payment_gateway.can_verify_webhooks:
            logger.error("Webhook signing secret not configured")
            raise ConfigurationError(
                "Webhook signing secret not configured",
                public_message="Webhook secret not configured",
            )
        if not signature:
            logger.error("Missing webhook signature header")
            raise WebhookVerificationError("Missing signature", public_message="Missing signature")

        event = self._payment_gateway.construct_event(payload, signature)

        if event.type == SESSION_COMPLETED and event.confirmation is not None:
            # Delayed payment methods complete the session unpaid; the
            # async_payment_succeeded event follows once the money arrives.
            result = self._fulfill_handler.handle(event.confirmation, FulfillmentSource.WEBHOOK)
            return WebhookResultDTO(received=True, event_type=event.type, fulfillment=result)

        if event.type == ASYNC_PAYMENT_SUCCEEDED and event.confirmation is not None:
            confirmation = event.confirmation
            if not confirmation.is_paid:
                logger.warning(
                    "Session %s reported async success with status %s",
                    confirmation.session_id,
                    confirmation.payment_status,
                )
            result = self._fulfill_handler.handle(confirmation, FulfillmentSource.WEBHOOK)
            return WebhookResultDTO(received=True, event_type=event.type, fulfillment=result)

        logger.info("Unhandled event type: %s", event.type)
        return WebhookResultDTO(received=True, event_type=event.type)
