"""Application service: Reconcile Cart use case.

Prunes cart lines that no longer resolve against the catalog. Safe to run
any number of times: a second pass over the same cart and catalog removes
nothing.
"""

from __future__ import annotations

import logging

from storefront.application.catalog_cache import CatalogCache
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.model.catalog import Catalog
from storefront.domain.repository.cart_repository import CartRepository

logger = logging.getLogger(__name__)


class ReconcileCartHandler:

    def __init__(self, cart_repo: CartRepository, catalog_cache: CatalogCache) -> None:
        self._cart_repo = cart_repo
        self._catalog_cache = catalog_cache

    def handle(self) -> list[CartLine]:
        cart = self._cart_repo.load()
        return self.reconcile(cart, self._catalog_cache.load())

    def reconcile(self, cart: Cart, catalog: Catalog) -> list[CartLine]:
        """Prune *cart* against *catalog*, persisting only if something went."""
        removed = cart.reconcile(catalog)
        if removed:
            logger.info("Cleaned up %d invalid cart items", len(removed))
            self._cart_repo.save(cart)
        return removed
