"""Runtime configuration read from the environment.

Secrets (payment keys) are never given defaults; a missing secret is
reported as a configuration error by whichever use case needs it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from typing import Optional

DEFAULT_DATA_DIR = "data"
DEFAULT_CACHE_TTL_SECONDS = 300
_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:

    data_dir: Path
    stripe_secret_key: Optional[str] = None
    stripe_webhook_secret: Optional[str] = None
    site_url: Optional[str] = None
    currency: str = "sek"
    catalog_url: Optional[str] = None
    catalog_cache_ttl: timedelta = timedelta(seconds=DEFAULT_CACHE_TTL_SECONDS)
    ledger_database_url: Optional[str] = None
    poll_fulfillment_enabled: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        data_dir = Path(os.getenv("STOREFRONT_DATA_DIR", DEFAULT_DATA_DIR))

        ttl_raw = os.getenv("CATALOG_CACHE_TTL_SECONDS")
        try:
            ttl_seconds = int(ttl_raw) if ttl_raw else DEFAULT_CACHE_TTL_SECONDS
        except ValueError:
            ttl_seconds = DEFAULT_CACHE_TTL_SECONDS

        return cls(
            data_dir=data_dir,
            stripe_secret_key=os.getenv("STRIPE_SECRET_KEY") or None,
            stripe_webhook_secret=os.getenv("STRIPE_WEBHOOK_SECRET") or None,
            site_url=os.getenv("SITE_URL") or None,
            currency=os.getenv("STOREFRONT_CURRENCY", "sek").lower(),
            catalog_url=os.getenv("CATALOG_URL") or None,
            catalog_cache_ttl=timedelta(seconds=max(ttl_seconds, 0)),
            ledger_database_url=os.getenv("LEDGER_DATABASE_URL") or None,
            poll_fulfillment_enabled=_flag(os.getenv("POLL_FULFILLMENT_ENABLED"), True),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    @property
    def ledger_url(self) -> str:
        if self.ledger_database_url:
            return self.ledger_database_url
        return f"sqlite:///{(self.data_dir / 'ledger.db').resolve()}"


def _flag(value: Optional[str], default: bool) -> bool:
    if value is None or not value.strip():
        return default
    return value.strip().lower() in _TRUTHY
