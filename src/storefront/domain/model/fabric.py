"""Fabric: the material a product is sewn from.

Fabrics come in two roles: the outer shell and the inner lining. The same
slug never appears in both roles.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FabricType(Enum):
    OUTER = "outer"
    INNER = "inner"


@dataclass(frozen=True)
class Fabric:
    """A fabric in the catalog. Read-only from this package's perspective."""

    id: str
    name: str
    image: str
    type: FabricType
    is_active: bool = True
