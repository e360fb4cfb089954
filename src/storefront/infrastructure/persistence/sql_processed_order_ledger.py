"""SQLAlchemy-backed implementation of ProcessedOrderLedger.

``session_id`` is the primary key, so the database itself decides which
of two concurrent inserts for the same session wins. The loser gets an
IntegrityError, which here simply means "already processed".
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from storefront.domain.exceptions import LedgerUnavailableError
from storefront.domain.model.fulfillment import FulfillmentSource, ProcessedOrderRecord
from storefront.domain.repository.processed_order_ledger import ProcessedOrderLedger


class Base(DeclarativeBase):
    pass


class ProcessedOrderTable(Base):
    __tablename__ = "processed_orders"

    session_id: Mapped[str] = mapped_column(String(255), primary_key=True)
    source: Mapped[str] = mapped_column(String(32), nullable=False)
    processed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SqlProcessedOrderLedger(ProcessedOrderLedger):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, url: str) -> SqlProcessedOrderLedger:
        return cls(create_engine(url))

    # --- ProcessedOrderLedger interface ---------------------------------------

    def record_if_absent(self, session_id: str, source: FulfillmentSource) -> bool:
        row = ProcessedOrderTable(
            session_id=session_id,
            source=source.value,
            processed_at=datetime.now(timezone.utc),
        )
        with Session(self._engine) as session:
            session.add(row)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                return False
            except SQLAlchemyError as exc:
                session.rollback()
                raise LedgerUnavailableError(
                    f"Could not record session {session_id}: {exc}"
                ) from exc
        return True

    def get(self, session_id: str) -> ProcessedOrderRecord | None:
        with Session(self._engine) as session:
            row = session.scalars(
                select(ProcessedOrderTable).where(ProcessedOrderTable.session_id == session_id)
            ).one_or_none()
            if row is None:
                return None
            return ProcessedOrderRecord(
                session_id=row.session_id,
                source=FulfillmentSource(row.source),
                processed_at=row.processed_at,
            )
