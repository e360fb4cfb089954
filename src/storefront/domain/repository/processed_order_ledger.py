"""Abstract ledger of payment sessions whose stock has been deducted."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.fulfillment import FulfillmentSource, ProcessedOrderRecord


class ProcessedOrderLedger(ABC):

    @abstractmethod
    def record_if_absent(self, session_id: str, source: FulfillmentSource) -> bool:
        """Atomically insert a record for *session_id*.

        Returns True if this call created the record, False if one already
        existed. Must be a single atomic operation (unique insert or
        compare-and-swap) so that concurrent callers cannot both win.
        """

    @abstractmethod
    def get(self, session_id: str) -> ProcessedOrderRecord | None:
        """Return the record for *session_id*, or None."""
