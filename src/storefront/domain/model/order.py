"""Order: the priced, authoritative form of a checkout request.

An Order is derived at checkout time from shopper-asserted line items and
server-side catalog lookups. It is never persisted locally: it is handed
to the payment processor, and its ``metadata()`` is the only channel by
which fulfillment later learns what was bought.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.fabric import Fabric
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 20
MAX_QUANTITY_PER_LINE = 10
FREE_SHIPPING_THRESHOLD = Money(500)
STANDARD_SHIPPING_FEE = Money(49)
DELIVERY_DAYS = (3, 7)


@dataclass(frozen=True)
class ShippingOption:
    display_name: str
    amount: Money
    min_business_days: int = DELIVERY_DAYS[0]
    max_business_days: int = DELIVERY_DAYS[1]

    @property
    def is_free(self) -> bool:
        return self.amount.amount == 0


@dataclass(frozen=True)
class OrderLine:
    """Captures product, fabric choices and the authoritative price."""

    product: Product
    fabric: Fabric
    quantity: Quantity
    lining: Fabric | None = None
    notes: str | None = None

    @property
    def unit_price(self) -> Money:
        return self.product.price

    @property
    def amount(self) -> Money:
        return self.product.price * self.quantity.value

    @property
    def description(self) -> str:
        parts = [f"Tyg: {self.fabric.name}"]
        if self.lining is not None:
            parts.append(f"Foder: {self.lining.name}")
        if self.notes:
            parts.append(f"Önskemål: {self.notes}")
        return " | ".join(parts)

    def metadata(self, index: int) -> dict[str, str]:
        """Order-level metadata for this line, keyed ``item_<index>_<field>``."""
        prefix = f"item_{index}_"
        data = {
            f"{prefix}product": self.product.name,
            f"{prefix}productSlug": self.product.id,
            f"{prefix}fabric": self.fabric.id,
            f"{prefix}quantity": str(self.quantity.value),
        }
        if self.lining is not None:
            data[f"{prefix}lining"] = self.lining.id
        if self.notes:
            data[f"{prefix}notes"] = self.notes
        return data

    def product_metadata(self) -> dict[str, str]:
        """Per-line metadata attached to the payment line item itself."""
        return {
            "productId": self.product.id,
            "fabric": self.fabric.id,
            "fabricName": self.fabric.name,
            "lining": self.lining.id if self.lining else "",
            "liningName": self.lining.name if self.lining else "",
            "customerNotes": self.notes or "",
        }


@dataclass
class Order:
    """A priced order ready to be handed to the payment processor.

    Use ``Order.create()``; it enforces the batch rules and works out the
    shipping options.
    """

    lines: list[OrderLine]
    shipping_options: list[ShippingOption] = field(default_factory=list)

    @staticmethod
    def create(lines: list[OrderLine]) -> Order:
        if not lines:
            raise ValidationError("Order must contain at least one item")
        if len(lines) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")
        order = Order(lines=list(lines))
        order.shipping_options = shipping_options_for(order.subtotal)
        return order

    @property
    def currency(self) -> str:
        return self.lines[0].unit_price.currency

    @property
    def subtotal(self) -> Money:
        result = Money.zero(self.currency)
        for line in self.lines:
            result = result + line.amount
        return result

    def metadata(self) -> dict[str, str]:
        data: dict[str, str] = {}
        for index, line in enumerate(self.lines):
            data.update(line.metadata(index))
        return data


def shipping_options_for(subtotal: Money) -> list[ShippingOption]:
    """Standard shipping always; free shipping first once the threshold is met."""
    options = [
        ShippingOption(
            display_name="Standard frakt",
            amount=Money(STANDARD_SHIPPING_FEE.amount, subtotal.currency),
        )
    ]
    if subtotal.amount >= FREE_SHIPPING_THRESHOLD.amount:
        options.insert(
            0, ShippingOption(display_name="Fri frakt", amount=Money.zero(subtotal.currency))
        )
    return options


@dataclass(frozen=True)
class LineSelection:
    """A shopper-asserted line, already sanitized but not yet resolved."""

    product_ref: str
    fabric_ref: str
    quantity: int
    lining_ref: str | None = None
    notes: str | None = None
