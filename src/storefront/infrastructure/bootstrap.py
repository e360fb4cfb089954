"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from storefront.application.catalog_cache import CatalogCache
from storefront.application.fulfill_order import FulfillOrderHandler
from storefront.domain.repository.catalog_source import CatalogSource
from storefront.infrastructure.catalog.http_catalog_source import HttpCatalogSource
from storefront.infrastructure.catalog.repository_catalog_source import (
    RepositoryCatalogSource,
)
from storefront.infrastructure.config import Settings
from storefront.infrastructure.payment.stripe_gateway import StripePaymentGateway
from storefront.infrastructure.persistence.json_cart_repository import (
    JsonCartRepository,
)
from storefront.infrastructure.persistence.json_catalog_snapshot_store import (
    JsonCatalogSnapshotStore,
)
from storefront.infrastructure.persistence.json_fabric_repository import (
    JsonFabricRepository,
)
from storefront.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from storefront.infrastructure.persistence.sql_processed_order_ledger import (
    SqlProcessedOrderLedger,
)


@lru_cache(maxsize=1)
def settings() -> Settings:
    return Settings.from_env()


def product_repository() -> JsonProductRepository:
    return JsonProductRepository(settings().data_dir / "products.json")


def fabric_repository() -> JsonFabricRepository:
    return JsonFabricRepository(settings().data_dir / "fabrics.json")


def cart_repository() -> JsonCartRepository:
    return JsonCartRepository(settings().data_dir / "cart.json")


def processed_order_ledger() -> SqlProcessedOrderLedger:
    return SqlProcessedOrderLedger.from_url(settings().ledger_url)


def payment_gateway() -> StripePaymentGateway:
    cfg = settings()
    return StripePaymentGateway(
        secret_key=cfg.stripe_secret_key,
        webhook_secret=cfg.stripe_webhook_secret,
        currency=cfg.currency,
    )


def catalog_source() -> CatalogSource:
    """The authoritative catalog: a remote endpoint if configured, else local files."""
    cfg = settings()
    if cfg.catalog_url:
        return HttpCatalogSource(cfg.catalog_url)
    return RepositoryCatalogSource(product_repository(), fabric_repository())


def catalog_cache() -> CatalogCache:
    cfg = settings()
    return CatalogCache(
        source=catalog_source(),
        store=JsonCatalogSnapshotStore(cfg.data_dir / "catalog_cache.json"),
        ttl=cfg.catalog_cache_ttl,
    )


def fulfill_order_handler() -> FulfillOrderHandler:
    return FulfillOrderHandler(
        product_repo=product_repository(),
        ledger=processed_order_ledger(),
    )
