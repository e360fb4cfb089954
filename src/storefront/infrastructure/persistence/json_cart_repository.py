"""JSON-file-backed implementation of CartRepository.

The file holds a bare list of line records in the shape carts have
always been stored in (camelCase keys, no version field). It is read as
untrusted input: whatever does not look like a cart line is dropped, and
a file that is not JSON at all is discarded.
"""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.cart import Cart, CartLine
from storefront.domain.repository.cart_repository import CartRepository
from storefront.infrastructure.persistence.json_file import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class JsonCartRepository(CartRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    # --- CartRepository interface ---------------------------------------------

    def load(self) -> Cart:
        if not self._file_path.exists():
            return Cart()
        try:
            raw = read_json(self._file_path)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.error("Failed to load cart from storage: %s", exc)
            self._file_path.unlink(missing_ok=True)
            return Cart()

        cart = Cart()
        if not isinstance(raw, list):
            logger.warning("Discarding persisted cart: expected a list")
            return cart
        for record in raw:
            line = self._to_domain(record)
            if line is None:
                logger.warning("Dropping malformed cart record")
                continue
            cart.add_item(line)
        return cart

    def save(self, cart: Cart) -> None:
        write_json_atomic(self._file_path, [self._to_raw(line) for line in cart.lines])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(raw: object) -> CartLine | None:
        if not isinstance(raw, dict):
            return None
        product_id = raw.get("productId")
        fabric = raw.get("selectedFabric")
        quantity = raw.get("quantity")
        lining = raw.get("selectedLining")
        notes = raw.get("notes")

        if not isinstance(product_id, str) or not isinstance(fabric, str):
            return None
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
            return None
        if not math.isfinite(quantity) or quantity <= 0:
            return None
        if lining is not None and not isinstance(lining, str):
            return None
        if notes is not None and not isinstance(notes, str):
            notes = None

        try:
            return CartLine(
                product_id=product_id,
                selected_fabric=fabric,
                selected_lining=lining,
                quantity=int(quantity),
                notes=notes,
            )
        except ValidationError:
            return None

    @staticmethod
    def _to_raw(line: CartLine) -> dict:
        raw: dict = {
            "productId": line.product_id,
            "quantity": line.quantity,
            "selectedFabric": line.selected_fabric,
        }
        if line.selected_lining:
            raw["selectedLining"] = line.selected_lining
        if line.notes:
            raw["notes"] = line.notes
        return raw
