import threading

import pytest

from nutriplan.core.config import Settings
from nutriplan.core.database import ConnectionPool, PoolError, create_schema, open_pool
from nutriplan.models import Ingredient, NewIngredient
from nutriplan.store import NutriplanStore


def _pragma(pool: ConnectionPool, name: str):
    with pool.engine.connect() as conn:
        return conn.exec_driver_sql(f"PRAGMA {name}").scalar()


def test_pragmas_applied_on_every_connection(pool):
    assert str(_pragma(pool, "journal_mode")).lower() == "wal"
    assert _pragma(pool, "foreign_keys") == 1
    assert _pragma(pool, "busy_timeout") == 30000


def test_pool_is_bounded(pool):
    assert pool.size == 16
    assert pool.engine.pool._max_overflow == 0


def test_open_pool_from_url(db_path):
    db_pool = open_pool(f"sqlite:///{db_path}", settings=Settings())
    try:
        assert db_pool.url.endswith("test.db")
    finally:
        db_pool.dispose()


def test_open_pool_unreachable_location_raises(tmp_path):
    with pytest.raises(PoolError):
        open_pool(str(tmp_path / "missing" / "dir" / "test.db"), settings=Settings())


def test_pool_error_is_connection_error(tmp_path):
    with pytest.raises(ConnectionError):
        open_pool(str(tmp_path / "missing" / "test.db"), settings=Settings())


def test_open_pool_rejects_other_backends():
    with pytest.raises(PoolError, match="Only SQLite"):
        open_pool("postgresql://user@localhost/nutriplan", settings=Settings())


@pytest.mark.parametrize("location", [":memory:", "sqlite://", "sqlite:///:memory:"])
def test_open_pool_rejects_in_memory_databases(location):
    with pytest.raises(PoolError, match="In-memory"):
        open_pool(location, settings=Settings())


def test_open_pool_uses_settings_location(db_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")
    db_pool = open_pool()
    try:
        assert db_pool.url.endswith("test.db")
    finally:
        db_pool.dispose()


def test_lease_returns_connection_to_pool(pool):
    before = pool.engine.pool.checkedout()
    with pool.lease():
        assert pool.engine.pool.checkedout() == before + 1
    assert pool.engine.pool.checkedout() == before


def test_lease_times_out_when_pool_is_exhausted(db_path):
    db_pool = open_pool(str(db_path), settings=Settings(pool_size=1, pool_timeout=0.1))
    try:
        with db_pool.lease():
            with pytest.raises(PoolError):
                with db_pool.lease():
                    pass
    finally:
        db_pool.dispose()


def test_concurrent_writers_each_lease_their_own_connection(pool, row_count):
    store = NutriplanStore(pool=pool)
    results = []
    lock = threading.Lock()

    def worker(n: int) -> None:
        for i in range(5):
            ok = store.ingredients.create(NewIngredient(name=f"ingredient-{n}-{i}"))
            with lock:
                results.append(ok)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 40
    assert all(results)
    with pool.lease() as session:
        assert row_count(session, Ingredient) == 40


def test_create_schema_is_idempotent(pool):
    create_schema(pool)
    create_schema(pool)
