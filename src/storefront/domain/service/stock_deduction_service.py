"""Domain service: Stock Deduction.

Recovers purchased lines from the flat ``item_<i>_<field>`` metadata a
checkout produced and deducts each from product stock.

Unlike checkout, this is deliberately *not* all-or-nothing: the payment
has already been taken, so one malformed or failing line must not keep
the other lines' stock from being corrected. Bad lines are logged and
skipped; every valid line is attempted.
"""

from __future__ import annotations

import logging
import re

from storefront.domain.exceptions import DomainException
from storefront.domain.model.fulfillment import FulfillmentLine, LineResult
from storefront.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

_ITEM_KEY_RE = re.compile(r"^item_(\d+)_")
# Leading integer, trailing text ignored: "3.5" and "3 st" both read as 3.
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


class StockDeductionService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    @staticmethod
    def item_indices(metadata: dict[str, str]) -> list[int]:
        """Every line index mentioned by an ``item_<i>_`` key, ascending."""
        return sorted(
            {int(m.group(1)) for key in metadata if (m := _ITEM_KEY_RE.match(key))}
        )

    @staticmethod
    def parse_lines(metadata: dict[str, str]) -> list[FulfillmentLine]:
        """Recover the purchased lines, in index order.

        Indices missing a product slug or a positive integer quantity are
        skipped with a warning.
        """
        lines: list[FulfillmentLine] = []
        for i in StockDeductionService.item_indices(metadata):
            slug = metadata.get(f"item_{i}_productSlug")
            raw_quantity = metadata.get(f"item_{i}_quantity")
            name = metadata.get(f"item_{i}_product")

            if not slug:
                logger.warning("Missing productSlug for item %d (%s)", i, name)
                continue
            if not raw_quantity:
                logger.warning("Missing quantity for item %d", i)
                continue
            match = _LEADING_INT_RE.match(raw_quantity)
            quantity = int(match.group(1)) if match else 0
            if quantity <= 0:
                logger.warning("Invalid quantity for item %d: %r", i, raw_quantity)
                continue

            lines.append(
                FulfillmentLine(index=i, product_slug=slug, quantity=quantity, product_name=name)
            )
        return lines

    def deduct(self, lines: list[FulfillmentLine]) -> list[LineResult]:
        """Deduct stock for every line, recording success or failure per line."""
        return [self._deduct_line(line) for line in lines]

    def _deduct_line(self, line: FulfillmentLine) -> LineResult:
        try:
            product = self._product_repo.get_by_id(line.product_slug)
            if product is None:
                logger.error(
                    "Failed to deduct stock for %s (%s): product not found",
                    line.product_slug,
                    line.product_name,
                )
                return LineResult(line=line, success=False, error="Product not found")
            new_stock = product.deduct_stock(line.quantity)
            self._product_repo.save(product)
        except (DomainException, OSError, ValueError, KeyError) as exc:
            logger.error(
                "Failed to deduct stock for %s (%s): %s",
                line.product_slug,
                line.product_name,
                exc,
            )
            return LineResult(line=line, success=False, error=str(exc))

        logger.info(
            "Deducted %d from stock for %s (%s). New stock: %d",
            line.quantity,
            line.product_slug,
            line.product_name,
            new_stock,
        )
        return LineResult(line=line, success=True, new_stock=new_stock)
