"""Port to the external payment processor.

The processor owns checkout sessions; this package only creates them,
reads them back and verifies the events it pushes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from storefront.domain.model.fulfillment import PaymentConfirmation
from storefront.domain.model.order import Order


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


@dataclass(frozen=True)
class PaymentEvent:
    """A verified event pushed by the payment processor."""

    id: str
    type: str
    confirmation: PaymentConfirmation | None = None
    raw: dict = field(default_factory=dict)


class PaymentGateway(ABC):

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """False when the processor credentials are missing."""

    @property
    @abstractmethod
    def can_verify_webhooks(self) -> bool:
        """False when the webhook signing secret is missing."""

    @abstractmethod
    def create_checkout_session(
        self,
        order: Order,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Create a hosted checkout for *order*. Raises PaymentGatewayError."""

    @abstractmethod
    def retrieve_session(self, session_id: str) -> PaymentConfirmation:
        """Read a checkout session back. Raises PaymentGatewayError."""

    @abstractmethod
    def construct_event(self, payload: bytes, signature: str) -> PaymentEvent:
        """Verify and parse a pushed event. Raises WebhookVerificationError."""
