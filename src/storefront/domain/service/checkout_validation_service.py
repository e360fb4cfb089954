"""Domain service: Checkout Validation.

Turns shopper-asserted selections into a priced Order using only the
server-side catalog. Nothing the client sends is trusted beyond the
references and quantities; prices and availability come from the catalog.

Resolution is all-or-nothing: the first selection that does not resolve
rejects the whole batch, so a shopper can never check out part of a cart.
"""

from __future__ import annotations

from storefront.domain.exceptions import (
    InvalidItemError,
    InvalidSelectionError,
    UnknownProductError,
)
from storefront.domain.model.catalog import Catalog
from storefront.domain.model.order import (
    MAX_QUANTITY_PER_LINE,
    LineSelection,
    Order,
    OrderLine,
)
from storefront.domain.model.value_objects import Quantity


class CheckoutValidationService:

    def __init__(self, catalog: Catalog) -> None:
        self._catalog = catalog

    def build_order(self, selections: list[LineSelection]) -> Order:
        lines = [self.resolve(selection) for selection in selections]
        return Order.create(lines)

    def resolve(self, selection: LineSelection) -> OrderLine:
        """Resolve one selection.

        Steps:
        1. The product must exist and be active.
        2. The fabric must be an outer fabric the product offers.
        3. A lining needs a product with the lining option and must be an
           inner fabric.
        """
        if not 1 <= selection.quantity <= MAX_QUANTITY_PER_LINE:
            raise InvalidItemError(
                f"Quantity {selection.quantity} outside 1..{MAX_QUANTITY_PER_LINE}"
            )

        product = self._catalog.product(selection.product_ref)
        if product is None:
            raise UnknownProductError(selection.product_ref)

        fabric = self._catalog.outer_fabric(selection.fabric_ref)
        if fabric is None or not product.offers_fabric(fabric.id):
            raise InvalidSelectionError(
                f"Fabric '{selection.fabric_ref}' not offered for '{product.id}'",
                public_message=f"Invalid fabric selection for {product.name}",
            )

        lining = None
        if selection.lining_ref is not None:
            if not product.has_lining_option:
                raise InvalidSelectionError(
                    public_message=f"Product {product.name} does not have lining option",
                )
            lining = self._catalog.inner_fabric(selection.lining_ref)
            if lining is None:
                raise InvalidSelectionError(
                    f"Unknown lining '{selection.lining_ref}' for '{product.id}'",
                    public_message="Invalid lining selection",
                )

        return OrderLine(
            product=product,
            fabric=fabric,
            lining=lining,
            quantity=Quantity(selection.quantity),
            notes=selection.notes,
        )
