"""Abstract repository for Fabric entities."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.fabric import Fabric


class FabricRepository(ABC):

    @abstractmethod
    def list_all(self) -> list[Fabric]:
        """Return every fabric, active or not, in display order."""
