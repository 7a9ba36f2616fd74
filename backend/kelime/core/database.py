import structlog
from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from ..config import settings

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


def make_engine(database_url: str) -> Engine:
    if not database_url.startswith("sqlite"):
        return create_engine(database_url, pool_pre_ping=True)

    kwargs = {"connect_args": {"check_same_thread": False}}  # needed for SQLite
    if database_url in ("sqlite://", "sqlite:///:memory:"):
        # every session has to see the same in-memory database
        kwargs["poolclass"] = StaticPool
    sqlite_engine = create_engine(database_url, **kwargs)
    event.listen(sqlite_engine, "connect", _register_unicode_case)
    return sqlite_engine


def _fold(fn):
    def apply(value):
        return fn(value) if isinstance(value, str) else value

    return apply


def _register_unicode_case(dbapi_conn, connection_record) -> None:
    # SQLite's own lower()/upper() only fold ASCII letters
    dbapi_conn.create_function("lower", 1, _fold(str.lower), deterministic=True)
    dbapi_conn.create_function("upper", 1, _fold(str.upper), deterministic=True)


engine = make_engine(settings.database_url)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)


# FastAPI dependency
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Columns added after the first release of the words table
_WORD_COLUMNS = {
    "is_deleted": "BOOLEAN NOT NULL DEFAULT FALSE",
    "known": "BOOLEAN NOT NULL DEFAULT FALSE",
    "updated_at": "TIMESTAMP",
}


def ensure_word_schema(bind: Engine = engine) -> list[str]:
    """
    Add any missing lifecycle columns to an existing words table.
    Returns the names of the columns that were added.
    """
    if not inspect(bind).has_table("words"):
        return []

    cols = {col["name"] for col in inspect(bind).get_columns("words")}
    added = []
    with bind.begin() as conn:
        for name, ddl in _WORD_COLUMNS.items():
            if name in cols:
                continue
            conn.execute(text(f"ALTER TABLE words ADD COLUMN {name} {ddl}"))
            added.append(name)
        if "updated_at" in added:
            conn.execute(text("UPDATE words SET updated_at = created_at WHERE updated_at IS NULL"))

    if added:
        logger.info("word_schema_upgraded", added_columns=added)
    return added
