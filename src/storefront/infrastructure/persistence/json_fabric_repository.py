"""JSON-file-backed implementation of FabricRepository."""

from __future__ import annotations

from pathlib import Path

from storefront.domain.model.fabric import Fabric, FabricType
from storefront.domain.repository.fabric_repository import FabricRepository
from storefront.infrastructure.persistence.json_file import ensure_file, read_json


class JsonFabricRepository(FabricRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        ensure_file(self._file_path)

    def list_all(self) -> list[Fabric]:
        return [self._to_domain(raw) for raw in read_json(self._file_path)]

    @staticmethod
    def _to_domain(raw: dict) -> Fabric:
        return Fabric(
            id=raw["id"],
            name=raw["name"],
            image=raw.get("image", ""),
            type=FabricType(raw["type"]),
            is_active=bool(raw.get("is_active", True)),
        )
