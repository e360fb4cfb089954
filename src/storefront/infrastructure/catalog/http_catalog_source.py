"""Catalog source that fetches the catalog payload over HTTP."""

from __future__ import annotations

import logging

import pydantic
import requests

from storefront.application.schemas import CatalogPayload
from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.model.catalog import Catalog
from storefront.domain.repository.catalog_source import CatalogSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10


class HttpCatalogSource(CatalogSource):
    """GET ``{success, products, fabrics}`` from a storefront catalog endpoint."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._session = session or requests.Session()

    def fetch(self) -> Catalog:
        try:
            response = self._session.get(self.url, timeout=self.timeout_seconds)
            response.raise_for_status()
            payload = CatalogPayload.model_validate(response.json())
        except requests.Timeout as exc:
            raise CatalogUnavailableError(f"Catalog request timed out: {self.url}") from exc
        except requests.RequestException as exc:
            raise CatalogUnavailableError(f"Catalog request failed: {exc}") from exc
        except (ValueError, pydantic.ValidationError) as exc:
            raise CatalogUnavailableError(f"Catalog payload unusable: {exc}") from exc

        if not payload.success:
            raise CatalogUnavailableError("Catalog endpoint reported failure")
        logger.debug("Fetched %d products from %s", len(payload.products), self.url)
        return payload.to_domain()
