from __future__ import annotations

from collections.abc import AsyncIterator, Iterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from mahasiswa_api.config import get_settings
from mahasiswa_api.db.models import Base
from mahasiswa_api.db.session import dispose_engine, get_engine, get_session_factory
from mahasiswa_api.main import app
from mahasiswa_api.observability.metrics import reset_metrics


@pytest.fixture(autouse=True)
def test_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    # One throwaway SQLite file per test keeps ids starting at 1.
    monkeypatch.setenv("DATABASE_URL", f"sqlite+pysqlite:///{tmp_path / 'mahasiswa.db'}")
    monkeypatch.setenv("DB_POOL_SIZE", "5")
    get_settings.cache_clear()
    dispose_engine()
    reset_metrics()

    Base.metadata.create_all(get_engine())

    yield

    dispose_engine()
    reset_metrics()
    get_settings.cache_clear()


@pytest.fixture
def db() -> Iterator[Session]:
    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
async def api_client() -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def student() -> dict[str, str]:
    return {"nim": "123", "nama": "Ann", "jurusan": "CS", "angkatan": "2024"}
