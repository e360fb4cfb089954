"""Application service: Show Cart use case."""

from __future__ import annotations

from storefront.application.catalog_cache import CatalogCache
from storefront.application.dto import CartDTO, CartLineDTO
from storefront.application.reconcile_cart import ReconcileCartHandler
from storefront.domain.model.cart import Cart
from storefront.domain.model.catalog import Catalog
from storefront.domain.repository.cart_repository import CartRepository


class ShowCartHandler:

    def __init__(self, cart_repo: CartRepository, catalog_cache: CatalogCache) -> None:
        self._cart_repo = cart_repo
        self._catalog_cache = catalog_cache

    def handle(self) -> CartDTO:
        """Reconcile the cart with the catalog, then describe it.

        Totals are computed from resolving lines only, so the displayed
        total never exceeds what checkout will charge.
        """
        cart = self._cart_repo.load()
        catalog = self._catalog_cache.load()
        removed = ReconcileCartHandler(self._cart_repo, self._catalog_cache).reconcile(
            cart, catalog
        )
        return self._to_dto(cart, catalog, removed=len(removed))

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(cart: Cart, catalog: Catalog, removed: int = 0) -> CartDTO:
        resolved = cart.resolved_lines(catalog)
        return CartDTO(
            lines=[
                CartLineDTO(
                    product_id=r.product.id,
                    product_name=r.product.name,
                    fabric_id=r.fabric.id,
                    fabric_name=r.fabric.name,
                    lining_id=r.lining.id if r.lining else None,
                    lining_name=r.lining.name if r.lining else None,
                    quantity=r.line.quantity,
                    notes=r.line.notes,
                    unit_price=str(r.product.price),
                    line_total=str(r.line_total),
                )
                for r in resolved
            ],
            total_items=cart.total_items(catalog),
            total_price=str(cart.total_price(catalog)),
            unresolved_lines=len(cart.lines) - len(resolved),
            removed_lines=removed,
        )
