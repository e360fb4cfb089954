"""JSON-file-backed store for the catalog cache's snapshot.

File shape: ``{products, fabrics: {outer, inner}, timestamp}`` with the
timestamp in epoch milliseconds.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

import pydantic

from storefront.application.schemas import CatalogPayload, CatalogSnapshotPayload
from storefront.domain.model.catalog import CatalogSnapshot
from storefront.domain.repository.catalog_source import CatalogSnapshotStore
from storefront.infrastructure.persistence.json_file import read_json, write_json_atomic

logger = logging.getLogger(__name__)


class JsonCatalogSnapshotStore(CatalogSnapshotStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def read(self) -> CatalogSnapshot | None:
        if not self._file_path.exists():
            return None
        try:
            payload = CatalogSnapshotPayload.model_validate(read_json(self._file_path))
        except (json.JSONDecodeError, UnicodeDecodeError, pydantic.ValidationError) as exc:
            logger.warning("Ignoring unreadable catalog snapshot: %s", exc)
            return None
        return CatalogSnapshot(
            catalog=payload.to_domain(),
            fetched_at=datetime.fromtimestamp(payload.timestamp / 1000, tz=timezone.utc),
        )

    def write(self, snapshot: CatalogSnapshot) -> None:
        base = CatalogPayload.from_domain(snapshot.catalog)
        payload = CatalogSnapshotPayload(
            products=base.products,
            fabrics=base.fabrics,
            timestamp=int(snapshot.fetched_at.timestamp() * 1000),
        )
        data = payload.model_dump(by_alias=True, exclude={"success"})
        write_json_atomic(self._file_path, data)
