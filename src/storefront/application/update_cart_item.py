"""Application service: Update Cart Item quantity use case."""

from __future__ import annotations

from storefront.application.add_to_cart import check_stock
from storefront.application.catalog_cache import CatalogCache
from storefront.domain.model.cart import CartLineKey
from storefront.domain.repository.cart_repository import CartRepository


class UpdateCartItemHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog_cache: CatalogCache | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog_cache = catalog_cache

    def handle(self, key: CartLineKey, quantity: int) -> None:
        """Set the line's quantity. Zero or less removes the line."""
        if quantity > 0:
            check_stock(self._catalog_cache, key.product_id, quantity)
        cart = self._cart_repo.load()
        cart.update_quantity(key, quantity)
        self._cart_repo.save(cart)
