"""Application service: Remove From Cart use case."""

from __future__ import annotations

from storefront.domain.model.cart import CartLineKey
from storefront.domain.repository.cart_repository import CartRepository


class RemoveFromCartHandler:

    def __init__(self, cart_repo: CartRepository) -> None:
        self._cart_repo = cart_repo

    def handle(self, key: CartLineKey) -> None:
        cart = self._cart_repo.load()
        cart.remove_item(key)
        self._cart_repo.save(cart)
