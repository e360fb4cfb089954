"""Application service: Add To Cart use case."""

from __future__ import annotations

from storefront.application.catalog_cache import CatalogCache
from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.model.cart import CartLine
from storefront.domain.repository.cart_repository import CartRepository


def check_stock(catalog_cache: CatalogCache | None, product_id: str, quantity: int) -> None:
    """Reject a line quantity the product's current stock cannot cover.

    Products the catalog does not know are let through; reconciliation
    prunes them. Without a cache there is nothing to check against.
    """
    if catalog_cache is None:
        return
    product = catalog_cache.load().product(product_id)
    if product is not None and quantity > product.stock:
        raise InsufficientStockError(product_id, product.stock)


class AddToCartHandler:

    def __init__(
        self,
        cart_repo: CartRepository,
        catalog_cache: CatalogCache | None = None,
    ) -> None:
        self._cart_repo = cart_repo
        self._catalog_cache = catalog_cache

    def handle(
        self,
        product_id: str,
        selected_fabric: str,
        quantity: int,
        selected_lining: str | None = None,
        notes: str | None = None,
    ) -> CartLine:
        """Add a selection, merging with an identical one already in the cart.

        The selection is not checked against the catalog here; the next
        reconciliation prunes it if it does not resolve. With a catalog
        cache, the merged quantity must fit the product's stock. Returns
        the line as it now stands in the cart.
        """
        line = CartLine(
            product_id=product_id,
            selected_fabric=selected_fabric,
            selected_lining=selected_lining,
            quantity=quantity,
            notes=notes,
        )
        cart = self._cart_repo.load()
        existing = cart.find(line.key)
        in_cart = existing.quantity if existing else 0
        check_stock(self._catalog_cache, product_id, in_cart + quantity)

        cart.add_item(line)
        self._cart_repo.save(cart)
        return cart.find(line.key)  # type: ignore[return-value]
