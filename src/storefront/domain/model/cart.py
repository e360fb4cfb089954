"""Cart aggregate: what the shopper intends to buy.

A cart line is identified by its composite key (product, outer fabric,
optional lining). The cart never holds two lines with the same key.

Lines are not validated against the catalog when added: the catalog may
not be loaded yet. ``reconcile()`` prunes lines once a catalog is
available, and the derived totals only ever count lines that resolve.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.catalog import Catalog
from storefront.domain.model.fabric import Fabric
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.sanitize import sanitize_notes


@dataclass(frozen=True)
class CartLineKey:
    product_id: str
    selected_fabric: str
    selected_lining: str | None = None


@dataclass(frozen=True)
class CartLine:
    """One selection of product + fabric (+ lining) and how many of it."""

    product_id: str
    selected_fabric: str
    quantity: int
    selected_lining: str | None = None
    notes: str | None = None

    def __post_init__(self) -> None:
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValidationError("Cart quantity must be an integer")
        if self.quantity <= 0:
            raise ValidationError("Cart quantity must be positive")
        if not self.product_id or not self.selected_fabric:
            raise ValidationError("Cart line needs a product and a fabric")
        try:
            notes = sanitize_notes(self.notes)
        except ValueError as exc:
            raise ValidationError(f"Invalid notes: {exc}") from exc
        # Blank linings mean "no lining".
        object.__setattr__(self, "selected_lining", self.selected_lining or None)
        object.__setattr__(self, "notes", notes)

    @property
    def key(self) -> CartLineKey:
        return CartLineKey(self.product_id, self.selected_fabric, self.selected_lining)

    def with_quantity(self, quantity: int) -> CartLine:
        return replace(self, quantity=quantity)


@dataclass(frozen=True)
class ResolvedCartLine:
    """A cart line joined with the catalog entries it refers to."""

    line: CartLine
    product: Product
    fabric: Fabric
    lining: Fabric | None

    @property
    def line_total(self) -> Money:
        return self.product.price * self.line.quantity


@dataclass
class Cart:
    """Aggregate root for the shopping cart."""

    lines: list[CartLine] = field(default_factory=list)

    # --- Mutations ------------------------------------------------------------

    def add_item(self, line: CartLine) -> None:
        """Add a line, merging into an existing line with the same key.

        No upper bound is applied here; the edge that takes shopper input
        and checkout enforce the limits.
        """
        index = self._index_of(line.key)
        if index is None:
            self.lines.append(line)
            return
        existing = self.lines[index]
        self.lines[index] = existing.with_quantity(existing.quantity + line.quantity)

    def update_quantity(self, key: CartLineKey, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove_item(key)
            return
        index = self._index_of(key)
        if index is not None:
            self.lines[index] = self.lines[index].with_quantity(quantity)

    def remove_item(self, key: CartLineKey) -> None:
        self.lines = [line for line in self.lines if line.key != key]

    def clear(self) -> None:
        self.lines = []

    def reconcile(self, catalog: Catalog) -> list[CartLine]:
        """Drop lines that no longer resolve against *catalog*.

        Does nothing while the catalog is empty (not loaded yet, or the
        fetch failed). Returns the removed lines.
        """
        if catalog.is_empty or not self.lines:
            return []
        kept: list[CartLine] = []
        removed: list[CartLine] = []
        for line in self.lines:
            if catalog.resolves(line.product_id, line.selected_fabric, line.selected_lining):
                kept.append(line)
            else:
                removed.append(line)
        if removed:
            self.lines = kept
        return removed

    # --- Derived values -------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def find(self, key: CartLineKey) -> CartLine | None:
        index = self._index_of(key)
        return None if index is None else self.lines[index]

    def resolved_lines(self, catalog: Catalog) -> list[ResolvedCartLine]:
        """Lines that resolve against *catalog*, joined with their entries."""
        resolved: list[ResolvedCartLine] = []
        for line in self.lines:
            if not catalog.resolves(line.product_id, line.selected_fabric, line.selected_lining):
                continue
            resolved.append(
                ResolvedCartLine(
                    line=line,
                    product=catalog.product(line.product_id),  # type: ignore[arg-type]
                    fabric=catalog.outer_fabric(line.selected_fabric),  # type: ignore[arg-type]
                    lining=(
                        catalog.inner_fabric(line.selected_lining)
                        if line.selected_lining
                        else None
                    ),
                )
            )
        return resolved

    def total_items(self, catalog: Catalog) -> int:
        return sum(r.line.quantity for r in self.resolved_lines(catalog))

    def total_price(self, catalog: Catalog) -> Money:
        resolved = self.resolved_lines(catalog)
        if not resolved:
            return Money.zero()
        result = Money.zero(resolved[0].product.price.currency)
        for item in resolved:
            result = result + item.line_total
        return result

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, key: CartLineKey) -> int | None:
        for i, line in enumerate(self.lines):
            if line.key == key:
                return i
        return None
