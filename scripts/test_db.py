"""Engine setup from DATABASE_URL."""

import threading

import pytest

from backend.config import settings
from backend.db import Profile, base, init_db


@pytest.fixture
def fresh_engine(monkeypatch):
    monkeypatch.setattr(base, "_engine", None)
    monkeypatch.setattr(base, "_SessionLocal", None)
    yield
    if base._engine is not None:
        base._engine.dispose()


def test_init_db_requires_a_database_url(fresh_engine, monkeypatch):
    monkeypatch.setattr(settings, "database_url", "")

    with pytest.raises(ValueError):
        init_db()


def test_sqlite_sessions_can_be_used_from_worker_threads(fresh_engine, monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "database_url", f"sqlite:///{tmp_path / 'directory.db'}")
    init_db()

    session = base.get_session_factory()()
    session.add(Profile(name="Threaded", skills=[]))
    session.commit()

    names = []
    worker = threading.Thread(target=lambda: names.extend(p.name for p in session.query(Profile).all()))
    worker.start()
    worker.join()
    session.close()

    assert names == ["Threaded"]
