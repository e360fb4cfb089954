"""Application service: Fulfill Order use case.

Deducts stock for a paid checkout session exactly once, however many
times it is invoked. The webhook and the confirmation-page poll both end
up here, often for the same session at nearly the same moment.

The ledger insert is the gate: whoever inserts the session's record runs
the deduction; everyone else sees a duplicate and does nothing. The
record is written *before* the deduction loop, so a crash mid-loop leaves
the session marked processed; correcting stock for the lines it missed is
an operator task (``product set-stock``), not an automatic retry.
"""

from __future__ import annotations

import logging

from storefront.application.dto import FulfillmentResultDTO, LineResultDTO
from storefront.domain.model.fulfillment import (
    FulfillmentOutcome,
    FulfillmentSource,
    LineResult,
    PaymentConfirmation,
)
from storefront.domain.repository.processed_order_ledger import ProcessedOrderLedger
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.stock_deduction_service import StockDeductionService

logger = logging.getLogger(__name__)


class FulfillOrderHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        ledger: ProcessedOrderLedger,
    ) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(
        self,
        confirmation: PaymentConfirmation,
        source: FulfillmentSource,
    ) -> FulfillmentResultDTO:
        session_id = confirmation.session_id

        if not confirmation.is_paid:
            logger.info(
                "Session %s not paid (status=%s), nothing to fulfill",
                session_id,
                confirmation.payment_status,
            )
            return FulfillmentResultDTO(session_id, FulfillmentOutcome.NOT_PAID.value)

        if not self._ledger.record_if_absent(session_id, source):
            logger.info("Session %s already processed, skipping (%s)", session_id, source.value)
            return FulfillmentResultDTO(
                session_id, FulfillmentOutcome.ALREADY_PROCESSED.value
            )

        logger.info("Processing successful payment for session: %s", session_id)
        svc = StockDeductionService(self._product_repo)
        lines = svc.parse_lines(confirmation.metadata)
        results = svc.deduct(lines)
        logger.info(
            "Finished processing session %s (%d lines, %d failed)",
            session_id,
            len(results),
            sum(1 for r in results if not r.success),
        )

        return FulfillmentResultDTO(
            session_id=session_id,
            outcome=FulfillmentOutcome.PROCESSED.value,
            lines=[self._to_dto(r) for r in results],
            skipped_lines=len(svc.item_indices(confirmation.metadata)) - len(lines),
        )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_dto(result: LineResult) -> LineResultDTO:
        return LineResultDTO(
            index=result.line.index,
            product_slug=result.line.product_slug,
            quantity=result.line.quantity,
            success=result.success,
            new_stock=result.new_stock,
            error=result.error,
        )

