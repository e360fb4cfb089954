"""Catalog cache: stale-while-revalidate access to the catalog.

The cart needs catalog data quickly and is happy with a slightly old copy,
as long as it converges on fresh data. The policy lives here; where the
snapshot is stored and where fresh data comes from are injected.

* ``get()`` reports the current snapshot and whether it is stale.
* ``refresh()`` fetches synchronously and swaps the snapshot in.
* ``refresh_in_background()`` does the same without blocking the caller.
* ``load()`` combines them: a fresh snapshot is served at once and
  revalidated behind the caller's back; otherwise the caller waits for a
  fetch.

A failed fetch never raises: the previous snapshot stays the source of
truth, and without one callers get an empty catalog.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta, timezone
from typing import Callable

from storefront.domain.exceptions import CatalogUnavailableError
from storefront.domain.model.catalog import Catalog, CatalogSnapshot
from storefront.domain.repository.catalog_source import CatalogSnapshotStore, CatalogSource

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)

Clock = Callable[[], datetime]
BackgroundRunner = Callable[[Callable[[], object]], None]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def run_in_daemon_thread(task: Callable[[], object]) -> None:
    """Fire-and-forget: nobody waits for or joins the thread."""
    threading.Thread(target=task, name="catalog-refresh", daemon=True).start()


class CatalogCache:

    def __init__(
        self,
        source: CatalogSource,
        store: CatalogSnapshotStore,
        ttl: timedelta = DEFAULT_TTL,
        clock: Clock = _utcnow,
        run_in_background: BackgroundRunner = run_in_daemon_thread,
    ) -> None:
        self._source = source
        self._store = store
        self._ttl = ttl
        self._clock = clock
        self._run_in_background = run_in_background
        self._lock = threading.Lock()
        self._snapshot: CatalogSnapshot | None = None
        self._loaded_from_store = False

    # --- Policy ---------------------------------------------------------------

    def get(self) -> tuple[Catalog | None, bool]:
        """Return ``(catalog, is_stale)``; ``(None, True)`` when nothing is cached."""
        snapshot = self._current()
        if snapshot is None:
            return None, True
        age = self._clock() - snapshot.fetched_at
        return snapshot.catalog, age >= self._ttl

    def load(self) -> Catalog:
        cached, is_stale = self.get()
        if cached is not None and not cached.is_empty and not is_stale:
            self.refresh_in_background()
            return cached

        fresh = self.refresh()
        if fresh is not None:
            return fresh
        if cached is not None:
            logger.warning("Serving stale catalog after failed refresh")
            return cached
        return Catalog.empty()

    # --- Refreshing -----------------------------------------------------------

    def refresh(self) -> Catalog | None:
        """Fetch a fresh catalog and replace the snapshot.

        Returns None (and keeps the old snapshot) if the fetch fails.
        """
        try:
            catalog = self._source.fetch()
        except CatalogUnavailableError as exc:
            logger.error("Error fetching catalog: %s", exc)
            return None

        snapshot = CatalogSnapshot(catalog=catalog, fetched_at=self._clock())
        with self._lock:
            self._snapshot = snapshot
        try:
            self._store.write(snapshot)
        except OSError as exc:
            # The in-memory snapshot is still good for this process.
            logger.warning("Could not persist catalog snapshot: %s", exc)
        return catalog

    def refresh_in_background(self) -> None:
        self._run_in_background(self.refresh)

    # --- Internal helpers -----------------------------------------------------

    def _current(self) -> CatalogSnapshot | None:
        with self._lock:
            if self._snapshot is None and not self._loaded_from_store:
                self._loaded_from_store = True
                self._snapshot = self._store.read()
            return self._snapshot
