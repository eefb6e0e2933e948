"""Shared pytest fixtures for integration and unit tests.

Route test modules use ``shared_client``, which overrides get_db with an
in-memory SQLite engine, so no test ever touches the on-disk database.

Usage in new test files:
    def test_something(shared_client, create_purchase):
        data = create_purchase(shared_client, name="Sofa", cost=5000)
        ...
"""

from __future__ import annotations

import os
from typing import Callable

# Skip dev-mode table creation against ./data/budget.db during tests
os.environ.setdefault("SERVICE_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.models  # noqa: F401,E402  -- ensure models registered with Base.metadata
from app.db.base import Base  # noqa: E402
from app.db.session import get_db  # noqa: E402
from app.main import app  # noqa: E402


# ------------------------------------------------------------------
# Database fixtures (shared_ prefix to avoid collisions)
# ------------------------------------------------------------------


@pytest.fixture()
def shared_db_engine():
    """Create an in-memory SQLite engine shared across connections."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def shared_db_session(shared_db_engine):
    """Yield a SQLAlchemy session bound to the shared in-memory engine."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=shared_db_engine
    )
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture()
def shared_client(shared_db_engine):
    """TestClient with overridden DB dependency."""
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=shared_db_engine
    )

    def _override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as tc:
        yield tc
    app.dependency_overrides.clear()


# ------------------------------------------------------------------
# Helper fixtures
# ------------------------------------------------------------------


@pytest.fixture()
def create_purchase() -> Callable[..., dict]:
    """Return a helper that POSTs a purchase and returns the JSON response."""

    def _create(
        client: TestClient,
        name: str = "Sofa",
        cost: float = 5000,
        **fields,
    ) -> dict:
        payload: dict = {"name": name, "cost": cost, **fields}
        resp = client.post("/api/purchases", json=payload)
        assert resp.status_code == 201, f"Failed to create purchase: {resp.text}"
        return resp.json()

    return _create
