"""Application service: Set Stock use case.

Operator tool for out-of-band stock corrections, e.g. after a fulfillment
line failed.
"""

from __future__ import annotations

import logging

from storefront.domain.exceptions import EntityNotFoundError
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class SetStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_id: str, quantity: int) -> None:
        """Set the stock level for a product."""
        product = self._product_repo.get_by_id(product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_id}'")

        previous = product.stock
        product.set_stock(quantity)
        self._product_repo.save(product)
        logger.info("Stock for %s set from %d to %d", product_id, previous, quantity)
