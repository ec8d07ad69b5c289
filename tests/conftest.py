"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool


# Enable foreign key constraints for SQLite
@event.listens_for(Engine, "connect")
def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign key constraints in SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture(scope="function")
def db_session(monkeypatch):
    """
    Provides an isolated in-memory SQLite database per test.

    This fixture:
    - Creates an in-memory SQLite engine shared through a single connection
    - Creates all tables
    - Points app.db.session at it, so every repository's get_session() uses it

    Usage:
        def test_something(db_session):
            client = create_client(...)
    """
    engine = create_engine(
        "sqlite://",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    import app.db.session as session_module
    from app.db.models import Base

    Base.metadata.create_all(engine)

    test_session_local = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
    monkeypatch.setattr(session_module, "_engine", engine)
    monkeypatch.setattr(session_module, "_SessionLocal", test_session_local)

    session = test_session_local()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def sample_client(db_session):
    """A stored client with a typical profile."""
    from app.clients.repository import create_client
    from app.clients.schemas import ClientCreate

    return create_client(
        ClientCreate(
            name="Ana García",
            age=34,
            weight=62,
            height=168,
            goal="muscle_gain",
            experience="intermediate",
            available_days=["Monday", "Wednesday", "Friday"],
            equipment="full_gym",
            limitations="Mild lower back pain",
        )
    )
