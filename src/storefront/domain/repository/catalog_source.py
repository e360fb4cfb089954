"""Abstract source of fresh catalog data for the catalog cache."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.catalog import Catalog, CatalogSnapshot


class CatalogSource(ABC):

    @abstractmethod
    def fetch(self) -> Catalog:
        """Fetch the current catalog.

        Raises CatalogUnavailableError when the backing store cannot be
        reached or answers with something unusable.
        """


class CatalogSnapshotStore(ABC):
    """Where the catalog cache keeps its last snapshot between runs."""

    @abstractmethod
    def read(self) -> CatalogSnapshot | None:
        """Return the stored snapshot, or None if there is none (or it is unreadable)."""

    @abstractmethod
    def write(self, snapshot: CatalogSnapshot) -> None:
        """Replace the stored snapshot atomically."""
