"""Application service: Confirm Order use case.

What the order confirmation page does once the shopper is redirected back
from the payment processor: look the session up (which also triggers
fulfillment) and empty the cart.

The cart is cleared at most once per handler instance, however many
times ``handle`` runs (a re-render polls again); a later order gets a new
handler.
"""

from __future__ import annotations

import logging

from storefront.application.clear_cart import ClearCartHandler
from storefront.application.dto import SessionSummaryDTO
from storefront.application.show_session import ShowSessionHandler

logger = logging.getLogger(__name__)


class ConfirmOrderHandler:

    def __init__(
        self,
        show_session: ShowSessionHandler,
        clear_cart: ClearCartHandler,
    ) -> None:
        self._show_session = show_session
        self._clear_cart = clear_cart
        self._cart_cleared = False

    @property
    def cart_cleared(self) -> bool:
        return self._cart_cleared

    def handle(self, session_id: str | None) -> SessionSummaryDTO:
        # Raises before the cart is touched if the session cannot be read.
        summary = self._show_session.handle(session_id)

        if not self._cart_cleared:
            self._clear_cart.handle()
            self._cart_cleared = True
            logger.info("Cart cleared after order %s", summary.id)
        return summary
