"""Tests for the schema guard, seeding and settings."""

from collections.abc import Generator

import pytest
from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from kelime.config import Settings
from kelime.core.database import ensure_word_schema, make_engine
from kelime.core.seed import SAMPLE_WORDS, seed_initial_data
from kelime.core.word_store import WordStore

LEGACY_WORDS_TABLE = """
CREATE TABLE words (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  english_word TEXT NOT NULL UNIQUE,
  turkish_meanings TEXT NOT NULL,
  example_sentence TEXT,
  example_translation TEXT,
  cefr_level TEXT,
  created_at DATETIME DEFAULT CURRENT_TIMESTAMP
)
"""


@pytest.fixture
def legacy_engine() -> Generator[Engine, None, None]:
    engine = make_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text(LEGACY_WORDS_TABLE))
        conn.execute(
            text(
                "INSERT INTO words (english_word, turkish_meanings, cefr_level, created_at) "
                "VALUES ('hello', '[\"merhaba\",\"selam\"]', 'A1', '2024-01-15 14:30:22')"
            )
        )
    yield engine
    engine.dispose()


class TestEnsureWordSchema:
    def test_adds_missing_columns(self, legacy_engine: Engine) -> None:
        added = ensure_word_schema(legacy_engine)

        assert set(added) == {"is_deleted", "known", "updated_at"}
        cols = {col["name"] for col in inspect(legacy_engine).get_columns("words")}
        assert {"is_deleted", "known", "updated_at"} <= cols

    def test_second_run_is_a_no_op(self, legacy_engine: Engine) -> None:
        ensure_word_schema(legacy_engine)

        assert ensure_word_schema(legacy_engine) == []

    def test_existing_rows_stay_readable(self, legacy_engine: Engine) -> None:
        ensure_word_schema(legacy_engine)
        session = sessionmaker(bind=legacy_engine)()
        try:
            w = WordStore(session).get_by_word("Hello")

            assert w.turkish_meanings == ["merhaba", "selam"]
            assert w.is_deleted is False
            assert w.known is False
            assert w.updated_at == w.created_at
        finally:
            session.close()

    def test_without_table(self) -> None:
        assert ensure_word_schema(make_engine("sqlite://")) == []


class TestSeed:
    def test_seeds_empty_table_once(self, db_session: Session) -> None:
        assert seed_initial_data(db_session) == len(SAMPLE_WORDS)
        assert seed_initial_data(db_session) == 0

        words = WordStore(db_session).get_all()
        assert {w.english_word for w in words} == {"hello", "beautiful", "understand"}


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("SEED_SAMPLE_WORDS", raising=False)

        s = Settings(_env_file=None)

        assert s.database_url == "sqlite:///./kelimeler.db"
        assert s.port == 3000
        assert s.seed_sample_words is True
        assert s.cors_origins == ["*"]

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("DATABASE_URL", "sqlite:///./other.db")

        s = Settings(_env_file=None)

        assert s.port == 8080
        assert s.database_url == "sqlite:///./other.db"
