"""Fulfillment: turning a confirmed payment into stock deductions.

The payment processor knows nothing about products; it hands back the flat
metadata map the checkout produced. These types carry that map and the
outcome of processing it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

PAID = "paid"


class FulfillmentSource(Enum):
    WEBHOOK = "webhook"
    SESSION_POLL = "session-poll"
    MANUAL = "manual"


class FulfillmentOutcome(Enum):
    PROCESSED = "PROCESSED"
    ALREADY_PROCESSED = "ALREADY_PROCESSED"
    NOT_PAID = "NOT_PAID"


@dataclass(frozen=True)
class PaymentConfirmation:
    """What the payment processor reports about a checkout session."""

    session_id: str
    payment_status: str
    metadata: dict[str, str] = field(default_factory=dict)
    status: str | None = None
    customer_email: str | None = None
    customer_name: str | None = None
    amount_total: int | None = None  # minor units
    currency: str | None = None
    line_items: tuple[dict, ...] = ()

    @property
    def is_paid(self) -> bool:
        return self.payment_status == PAID


@dataclass(frozen=True)
class FulfillmentLine:
    """One purchased line recovered from order metadata."""

    index: int
    product_slug: str
    quantity: int
    product_name: str | None = None


@dataclass(frozen=True)
class LineResult:
    line: FulfillmentLine
    success: bool
    new_stock: int | None = None
    error: str | None = None


@dataclass
class ProcessedOrderRecord:
    """Ledger entry: the session's stock deduction has run."""

    session_id: str
    source: FulfillmentSource = FulfillmentSource.WEBHOOK
    processed_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
