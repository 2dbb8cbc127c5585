"""Root conftest for all tests.

This file makes shared fixtures available across all test modules.
"""

from contextlib import contextmanager

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from swimtracker.db.models import Base


@pytest.fixture(scope="function")
def db_session(monkeypatch):
    """
    Provides a transactional in-memory SQLite DB session for tests.

    This fixture:
    - Creates an isolated in-memory SQLite database per test
    - Patches the engine getter and get_session() to use it
    - Rolls the transaction back after the test
    """
    engine = create_engine(
        "sqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(engine)

    connection = engine.connect()
    transaction = connection.begin()
    session = sessionmaker(bind=connection, autocommit=False, autoflush=False)()

    @contextmanager
    def mock_get_session():
        yield session
        session.flush()

    import swimtracker.db.session as session_module

    monkeypatch.setattr(session_module, "get_engine", lambda: engine)
    monkeypatch.setattr(session_module, "get_session", mock_get_session)

    # The CLI imports get_session directly, so patch it there too
    import cli.cli as cli_module

    monkeypatch.setattr(cli_module, "get_session", mock_get_session)

    try:
        yield session
    finally:
        session.close()
        transaction.rollback()
        connection.close()
        engine.dispose()
