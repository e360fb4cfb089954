"""Product aggregate.

Products live independently of carts and orders. They are created and
edited elsewhere; the only mutation this package performs is stock
deduction after a confirmed payment (and the operator's stock override).
"""

from __future__ import annotations

from dataclasses import dataclass, field

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``id`` is the product slug; it is unique and stable and it is what
    carts, checkout requests and order metadata refer to.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    description: str = ""
    is_active: bool = True
    available_fabrics: tuple[str, ...] = field(default_factory=tuple)
    available_inner_fabrics: tuple[str, ...] = field(default_factory=tuple)
    has_lining_option: bool = False

    def offers_fabric(self, fabric_id: str) -> bool:
        return fabric_id in self.available_fabrics

    def offers_lining(self, fabric_id: str) -> bool:
        """True if *fabric_id* may be chosen as this product's lining.

        A product that offers linings but lists no specific inner fabrics
        accepts any inner fabric.
        """
        if not self.has_lining_option:
            return False
        if not self.available_inner_fabrics:
            return True
        return fabric_id in self.available_inner_fabrics

    def deduct_stock(self, quantity: int) -> int:
        """Remove sold units from stock, never going below zero.

        Returns the new stock level.
        """
        if quantity <= 0:
            raise ValidationError("Deduction quantity must be positive")
        self.stock = max(0, self.stock - quantity)
        return self.stock

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError("Stock cannot be negative")
        self.stock = quantity
