"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a cart line that resolves against the catalog."""

    product_id: str
    product_name: str
    fabric_id: str
    fabric_name: str
    lining_id: str | None
    lining_name: str | None
    quantity: int
    notes: str | None
    unit_price: str  # formatted, e.g. "500 SEK"
    line_total: str


@dataclass(frozen=True)
class CartDTO:
    """Output: the cart as the shopper sees it.

    ``lines``, ``total_items`` and ``total_price`` only cover lines that
    resolve; ``unresolved_lines`` counts the rest (catalog not loaded).
    """

    lines: list[CartLineDTO]
    total_items: int
    total_price: str
    unresolved_lines: int = 0
    removed_lines: int = 0


@dataclass(frozen=True)
class CheckoutResultDTO:
    session_id: str
    url: str


@dataclass(frozen=True)
class LineResultDTO:
    index: int
    product_slug: str
    quantity: int
    success: bool
    new_stock: int | None = None
    error: str | None = None


@dataclass(frozen=True)
class FulfillmentResultDTO:
    session_id: str
    outcome: str
    lines: list[LineResultDTO] = field(default_factory=list)
    skipped_lines: int = 0

    @property
    def failed_lines(self) -> int:
        return sum(1 for line in self.lines if not line.success)


@dataclass(frozen=True)
class SessionSummaryDTO:
    """Output: what the confirmation page shows about a paid session."""

    id: str
    status: str | None
    payment_status: str
    customer_email: str | None
    customer_name: str | None
    amount_total: int | None
    currency: str | None
    line_items: list[dict]
    metadata: dict[str, str]
    fulfillment: FulfillmentResultDTO | None = None


@dataclass(frozen=True)
class WebhookResultDTO:
    received: bool
    event_type: str
    fulfillment: FulfillmentResultDTO | None = None
