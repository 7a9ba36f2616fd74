from datetime import datetime
from typing import Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.errors import StorageUnavailable
from ..core.word_store import WordStore
from .routes_words import get_word_store

router = APIRouter(prefix="/api", tags=["status"])


class StatsResponse(BaseModel):
    total: int
    deleted: int
    known: int
    unknown: int
    by_level: Dict[str, int]


class HealthResponse(BaseModel):
    status: str
    database: str
    time: str


@router.get("/health", response_model=HealthResponse)
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        raise StorageUnavailable(f"database unreachable: {exc}") from exc
    return {"status": "ok", "database": "ok", "time": datetime.utcnow().isoformat() + "Z"}


@router.get("/stats", response_model=StatsResponse)
def stats(store: WordStore = Depends(get_word_store)):
    return store.stats()
