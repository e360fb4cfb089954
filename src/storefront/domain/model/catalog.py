"""Catalog: an immutable snapshot of the products and fabrics on sale.

The catalog is what carts are reconciled against and what checkout
resolves references with. It only ever holds *active* entries; anything
inactive is treated exactly like something that does not exist.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.model.fabric import Fabric, FabricType
from storefront.domain.model.product import Product


@dataclass(frozen=True)
class Catalog:

    products: tuple[Product, ...] = ()
    outer_fabrics: tuple[Fabric, ...] = ()
    inner_fabrics: tuple[Fabric, ...] = ()

    @staticmethod
    def build(
        products: list[Product],
        fabrics: list[Fabric],
    ) -> Catalog:
        """Build a catalog from raw lists, dropping inactive entries."""
        return Catalog(
            products=tuple(p for p in products if p.is_active),
            outer_fabrics=tuple(
                f for f in fabrics if f.is_active and f.type == FabricType.OUTER
            ),
            inner_fabrics=tuple(
                f for f in fabrics if f.is_active and f.type == FabricType.INNER
            ),
        )

    @staticmethod
    def empty() -> Catalog:
        return Catalog()

    @property
    def is_empty(self) -> bool:
        return not self.products

    # --- Lookups --------------------------------------------------------------

    def product(self, ref: str) -> Product | None:
        for product in self.products:
            if product.id == ref:
                return product
        return None

    def outer_fabric(self, fabric_id: str) -> Fabric | None:
        return _find(self.outer_fabrics, fabric_id)

    def inner_fabric(self, fabric_id: str) -> Fabric | None:
        return _find(self.inner_fabrics, fabric_id)

    # --- Validity -------------------------------------------------------------

    def resolves(
        self,
        product_id: str,
        fabric_id: str,
        lining_id: str | None = None,
    ) -> bool:
        """True if the selection names things that exist and fit together.

        The outer fabric must be an active outer fabric offered by the
        product; a lining, when chosen, must be an active inner fabric the
        product accepts as lining. Role matters: an inner fabric id used as
        the outer selection does not resolve.
        """
        product = self.product(product_id)
        if product is None:
            return False
        if self.outer_fabric(fabric_id) is None or not product.offers_fabric(fabric_id):
            return False
        if lining_id is not None:
            if self.inner_fabric(lining_id) is None or not product.offers_lining(lining_id):
                return False
        return True


@dataclass(frozen=True)
class CatalogSnapshot:
    """A catalog together with the moment it was fetched."""

    catalog: Catalog
    fetched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


def _find(fabrics: tuple[Fabric, ...], fabric_id: str) -> Fabric | None:
    for fabric in fabrics:
        if fabric.id == fabric_id:
            return fabric
    return None
