"""Abstract repository for the shopper's Cart."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.cart import Cart


class CartRepository(ABC):

    @abstractmethod
    def load(self) -> Cart:
        """Return the persisted cart, or an empty one.

        Persisted state is untrusted: implementations drop records that do
        not have the expected line shape instead of failing.
        """

    @abstractmethod
    def save(self, cart: Cart) -> None:
        """Rewrite the whole persisted cart."""
