import threading
import time

from app.db import database


class FakeCursor:
    def execute(self, sql):
        pass

    def fetchone(self):
        return (1,)

    def close(self):
        pass


class FakeConnection:
    def cursor(self):
        return FakeCursor()


class FakePool:
    created = []

    def __init__(self, **kwargs):
        # Slow connect, so a second caller arrives while the first is still building
        time.sleep(0.05)
        self.closed = False
        FakePool.created.append(self)

    def getconn(self):
        return FakeConnection()

    def putconn(self, conn):
        pass

    def closeall(self):
        self.closed = True


def _use_fake_postgres(monkeypatch):
    FakePool.created = []
    monkeypatch.setattr(database, "IS_SQLITE", False)
    monkeypatch.setattr(database, "pool", None)
    monkeypatch.setattr(database, "SimpleConnectionPool", FakePool)
    monkeypatch.setattr(database, "ensure_tables", lambda conn, dialect: None)


def test_concurrent_pings_build_a_single_pool(monkeypatch):
    _use_fake_postgres(monkeypatch)

    errors = []

    def check():
        try:
            database.ping()
        except Exception as exc:  # surfaced by the assertion below
            errors.append(exc)

    threads = [threading.Thread(target=check) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(FakePool.created) == 1
    assert database.pool is FakePool.created[0]


def test_close_pool_resets_and_allows_a_fresh_start(monkeypatch):
    _use_fake_postgres(monkeypatch)

    database.init_pool()
    first = database.pool
    database.close_pool()

    assert first.closed
    assert database.pool is None

    database.init_pool()
    assert database.pool is not first
