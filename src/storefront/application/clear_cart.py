"""Application service: Clear Cart use case."""

from __future__ import annotations

from storefront.domain.repository.cart_repository import CartRepository


class ClearCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self) -> None:
        cart = self._cart_repo.load()
        cart.clear()
        self._cart_repo.save(cart)
