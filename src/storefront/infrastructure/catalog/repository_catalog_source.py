"""Catalog source backed by the local product and fabric repositories."""

from __future__ import annotations

from storefront.domain.exceptions import CatalogUnavailableError, ValidationError
from storefront.domain.model.catalog import Catalog
from storefront.domain.repository.catalog_source import CatalogSource
from storefront.domain.repository.fabric_repository import FabricRepository
from storefront.domain.repository.product_repository import ProductRepository


class RepositoryCatalogSource(CatalogSource):

    def __init__(
        self,
        product_repo: ProductRepository,
        fabric_repo: FabricRepository,
    ) -> None:
        self._product_repo = product_repo
        self._fabric_repo = fabric_repo

    def fetch(self) -> Catalog:
        try:
            products = self._product_repo.list_all()
            fabrics = self._fabric_repo.list_all()
        except (OSError, ValueError, KeyError, ValidationError) as exc:
            # json.JSONDecodeError is a ValueError; KeyError is a record
            # missing a required field; ValidationError a bad price or stock.
            raise CatalogUnavailableError(f"Catalog store unreadable: {exc!r}") from exc
        return Catalog.build(products, fabrics)
