# Shared helpers for API endpoint tests.
# Every test client gets its own in-memory SQLite database behind the get_db dependency.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Callable

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.deps import get_db
from app.main import app
from app.models import Base

USER_A = "60601fee-2bf1-4721-ae6f-7636e79a0cba"
USER_B = "3f1d2c4b-8a7e-4b6f-9c1d-2e3f4a5b6c7d"


def build_engine() -> Engine:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return engine


def build_session_factory(
    engine: Engine | None = None, session_class: type[Session] = Session
) -> Callable[[], Session]:
    return sessionmaker(
        bind=engine or build_engine(), autocommit=False, autoflush=False, class_=session_class
    )


class CommitFailingSession(Session):
    """Real session whose reads work but whose writes never reach the database."""

    def commit(self) -> None:
        raise OperationalError("COMMIT", {}, Exception("database is locked"))


class BrokenSession:
    """Session stand-in whose every database round trip fails."""

    def _fail(self, *_: Any, **__: Any) -> Any:
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    scalar = _fail
    scalars = _fail
    commit = _fail

    def add(self, _: Any) -> None:
        return None

    def rollback(self) -> None:
        return None

    def close(self) -> None:
        return None


@contextmanager
def api_test_client(*, session_factory: Callable[[], Any] | None = None) -> Iterator[TestClient]:
    """Yield a TestClient with get_db overridden for the duration of the block."""

    factory = session_factory or build_session_factory()

    def _override_get_db() -> Iterator[Any]:
        db = factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()


def subscription_payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "service_name": "Yandex Plus",
        "price": 400,
        "user_id": USER_A,
        "start_date": "07-2025",
    }
    payload.update(overrides)
    return payload


def create_subscription(client: TestClient, **overrides: Any) -> dict[str, Any]:
    response = client.post("/api/v1/subscriptions", json=subscription_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()
