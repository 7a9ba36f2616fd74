"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator
from typing import Any

# Point the application at a throwaway database before it is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_SAMPLE_WORDS", "false")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from kelime.core.database import Base, get_db, make_engine  # noqa: E402
from kelime.core.word_store import WordStore  # noqa: E402
from kelime.main import app  # noqa: E402

# In-memory SQLite shared by every session in a test
test_engine = make_engine("sqlite://")

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def store(db_session: Session) -> WordStore:
    """Word store bound to the test session."""
    return WordStore(db_session)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, Any, None]:
    """Create a test client with database session."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def hello_payload() -> dict[str, Any]:
    return {
        "english_word": "hello",
        "turkish_meanings": ["merhaba", "selam"],
        "example_sentence": "Hello, how are you?",
        "example_translation": "Merhaba, nasılsın?",
        "cefr_level": "A1",
    }
