"""Application service: Show Catalog use case.

Serves the catalog payload carts consume: every active product and the
active fabrics split by role.
"""

from __future__ import annotations

import logging

from storefront.application.schemas import CatalogPayload
from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.repository.catalog_source import CatalogSource

logger = logging.getLogger(__name__)


class ShowCatalogHandler:

    def __init__(self, catalog_source: CatalogSource) -> None:
        self._catalog_source = catalog_source

    def handle(self) -> dict:
        """Return ``{success, products, fabrics: {outer, inner}}``.

        A failing backing store yields ``success: false`` with empty lists
        rather than an exception.
        """
        try:
            catalog = self._catalog_source.fetch()
        except CatalogUnavailableError as exc:
            logger.error("Error fetching products: %s", exc)
            payload = CatalogPayload(success=False).to_wire()
            payload["error"] = exc.public_message
            return payload
        return CatalogPayload.from_domain(catalog).to_wire()
