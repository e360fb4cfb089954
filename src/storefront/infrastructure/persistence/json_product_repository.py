"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import DEFAULT_CURRENCY, Money
from storefront.domain.repository.product_repository import ProductRepository
from storefront.infrastructure.persistence.json_file import (
    ensure_file,
    read_json,
    write_json_atomic,
)


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        return self._load().get(product_id)

    def list_all(self) -> list[Product]:
        return list(self._load().values())

    def save(self, product: Product) -> None:
        products = self._load()
        products[product.id] = product
        self._persist(products)

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[str, Product]:
        return {item["id"]: self._to_domain(item) for item in read_json(self._file_path)}

    def _persist(self, products: dict[str, Product]) -> None:
        write_json_atomic(self._file_path, [self._to_raw(p) for p in products.values()])

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            description=raw.get("description", ""),
            price=Money.of(raw["price"], raw.get("currency", DEFAULT_CURRENCY)),
            stock=int(raw.get("stock", 0)),
            is_active=bool(raw.get("is_active", True)),
            available_fabrics=tuple(raw.get("available_fabrics", [])),
            available_inner_fabrics=tuple(raw.get("available_inner_fabrics", [])),
            has_lining_option=bool(raw.get("has_lining_option", False)),
        )

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "price": product.price.amount,
            "currency": product.price.currency,
            "stock": product.stock,
            "is_active": product.is_active,
            "available_fabrics": list(product.available_fabrics),
            "available_inner_fabrics": list(product.available_inner_fabrics),
            "has_lining_option": product.has_lining_option,
        }
