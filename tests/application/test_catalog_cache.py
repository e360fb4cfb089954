"""Tests for the stale-while-revalidate catalog cache."""

from datetime import datetime, timedelta, timezone

from storefront.application.catalog_cache import CatalogCache
from storefront.domain.model.catalog import Catalog, CatalogSnapshot
from tests.fakes import FakeCatalogSource, FakeSnapshotStore, sample_catalog

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
TTL = timedelta(minutes=5)


class ManualRunner:
    """Collects background tasks so the test decides when they run."""

    def __init__(self) -> None:
        self.tasks = []

    def __call__(self, task) -> None:
        self.tasks.append(task)

    def run_all(self) -> None:
        while self.tasks:
            self.tasks.pop(0)()


def _cache(source=None, snapshot=None, now=NOW):
    source = source or FakeCatalogSource()
    store = FakeSnapshotStore(snapshot)
    runner = ManualRunner()
    clock = {"now": now}
    cache = CatalogCache(
        source=source,
        store=store,
        ttl=TTL,
        clock=lambda: clock["now"],
        run_in_background=runner,
    )
    return cache, source, store, runner, clock


class TestGet:

    def test_nothing_cached(self):
        cache, _, _, _, _ = _cache()
        assert cache.get() == (None, True)

    def test_fresh_snapshot(self):
        snapshot = CatalogSnapshot(sample_catalog(), fetched_at=NOW - timedelta(minutes=1))
        cache, _, _, _, _ = _cache(snapshot=snapshot)
        catalog, is_stale = cache.get()
        assert catalog == snapshot.catalog
        assert not is_stale

    def test_stale_after_ttl(self):
        snapshot = CatalogSnapshot(sample_catalog(), fetched_at=NOW - TTL)
        cache, _, _, _, _ = _cache(snapshot=snapshot)
        assert cache.get()[1] is True

    def test_store_read_once(self):
        class CountingStore(FakeSnapshotStore):
            reads = 0

            def read(self):
                CountingStore.reads += 1
                return super().read()

        cache = CatalogCache(FakeCatalogSource(), CountingStore(), ttl=TTL, clock=lambda: NOW)
        cache.get()
        cache.get()
        assert CountingStore.reads == 1


class TestLoad:

    def test_fresh_served_and_revalidated_in_background(self):
        snapshot = CatalogSnapshot(sample_catalog(), fetched_at=NOW - timedelta(minutes=1))
        cache, source, store, runner, _ = _cache(snapshot=snapshot)

        assert cache.load() == snapshot.catalog
        assert source.fetch_count == 0
        assert len(runner.tasks) == 1

        runner.run_all()
        assert source.fetch_count == 1
        assert store.snapshot.fetched_at == NOW

    def test_stale_triggers_blocking_fetch(self):
        old = CatalogSnapshot(Catalog.empty(), fetched_at=NOW - timedelta(hours=1))
        cache, source, store, runner, _ = _cache(snapshot=old)

        catalog = cache.load()

        assert catalog == source.catalog
        assert source.fetch_count == 1
        assert runner.tasks == []
        assert store.write_count == 1

    def test_nothing_cached_fetches(self):
        cache, source, _, _, _ = _cache()
        assert cache.load() == source.catalog
        assert cache.get()[1] is False

    def test_empty_fresh_snapshot_is_refetched(self):
        snapshot = CatalogSnapshot(Catalog.empty(), fetched_at=NOW)
        cache, source, _, _, _ = _cache(snapshot=snapshot)
        assert not cache.load().is_empty
        assert source.fetch_count == 1

    def test_failed_fetch_falls_back_to_stale(self):
        stale = CatalogSnapshot(sample_catalog(), fetched_at=NOW - timedelta(hours=1))
        cache, _, store, _, _ = _cache(source=FakeCatalogSource(failing=True), snapshot=stale)

        assert cache.load() == stale.catalog
        assert store.snapshot is stale

    def test_failed_fetch_without_cache_gives_empty(self):
        cache, _, _, _, _ = _cache(source=FakeCatalogSource(failing=True))
        assert cache.load().is_empty

    def test_expires_with_time(self):
        cache, source, _, runner, clock = _cache()
        cache.load()
        clock["now"] = NOW + TTL + timedelta(seconds=1)
        cache.load()
        assert source.fetch_count == 2
        assert runner.tasks == []


class TestRefresh:

    def test_refresh_replaces_snapshot(self):
        cache, source, store, _, _ = _cache()
        assert cache.refresh() == source.catalog
        assert store.snapshot.catalog == source.catalog

    def test_failed_refresh_returns_none(self):
        cache, _, store, _, _ = _cache(source=FakeCatalogSource(failing=True))
        assert cache.refresh() is None
        assert store.write_count == 0

    def test_unwritable_store_keeps_memory_snapshot(self):
        class BrokenStore(FakeSnapshotStore):
            def write(self, snapshot):
                raise OSError("read-only filesystem")

        cache = CatalogCache(
            FakeCatalogSource(), BrokenStore(), ttl=TTL, clock=lambda: NOW
        )
        assert cache.refresh() is not None
        catalog, is_stale = cache.get()
        assert not catalog.is_empty
        assert not is_stale

    def test_background_refresh_uses_runner(self):
        cache, source, _, runner, _ = _cache()
        cache.refresh_in_background()
        assert source.fetch_count == 0
        runner.run_all()
        assert source.fetch_count == 1
