"""
Data access for the words table.

Every public method maps to one statement against the database (stats() is
the exception and issues one query per figure). Database failures are
translated into the errors defined in ``errors.py`` before they leave here.
"""

from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence

import structlog
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ..models import Word
from .errors import DuplicateWord, NotFound, StorageUnavailable, ValidationError

logger = structlog.get_logger(__name__)

UNKNOWN_LEVEL = "unknown"

# Range of a signed 64-bit INTEGER primary key
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1


def _now() -> datetime:
    return datetime.utcnow()


def _check_id(word_id: int) -> None:
    if not MIN_ID <= word_id <= MAX_ID:
        raise NotFound(word_id)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _clean_meanings(meanings: Sequence[str]) -> List[str]:
    if isinstance(meanings, str) or not meanings:
        raise ValidationError("turkish_meanings must be a non-empty list")
    return [str(m) for m in meanings]


class WordStore:
    """Create, query and mutate words through an injected SQLAlchemy session."""

    def __init__(self, db: Session) -> None:
        self.db = db

    @contextmanager
    def _storage_errors(self, operation: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("word_store_failed", operation=operation, error=str(exc))
            raise StorageUnavailable(f"{operation} failed: {exc}") from exc

    def _active(self):
        return self.db.query(Word).filter(Word.is_deleted == False)  # noqa: E712

    def _apply(self, operation: str, word_id: int, values: Dict[str, Any]) -> int:
        _check_id(word_id)
        values["updated_at"] = _now()
        with self._storage_errors(operation):
            try:
                changed = (
                    self.db.query(Word)
                    .filter(Word.id == word_id)
                    .update(values, synchronize_session=False)
                )
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                if "english_word" not in str(exc.orig):
                    raise
                raise DuplicateWord(values.get("english_word", "")) from exc
        if not changed:
            raise NotFound(word_id)
        return changed

    # ---------- Create ----------

    def create(
        self,
        english_word: str,
        turkish_meanings: Sequence[str],
        example_sentence: Optional[str] = None,
        example_translation: Optional[str] = None,
        cefr_level: Optional[str] = None,
    ) -> int:
        if not english_word:
            raise ValidationError("english_word is required")
        meanings = _clean_meanings(turkish_meanings)

        now = _now()
        w = Word(
            english_word=english_word,
            turkish_meanings=meanings,
            example_sentence=example_sentence,
            example_translation=example_translation,
            cefr_level=cefr_level,
            is_deleted=False,
            known=False,
            created_at=now,
            updated_at=now,
        )
        with self._storage_errors("create"):
            try:
                self.db.add(w)
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                if "english_word" not in str(exc.orig):
                    raise
                logger.info("word_duplicate_rejected", english_word=english_word)
                raise DuplicateWord(english_word) from exc

        logger.info("word_created", word_id=w.id, english_word=english_word)
        return w.id

    # ---------- Queries ----------

    def get_all(self, include_deleted: bool = False) -> List[Word]:
        q = self.db.query(Word) if include_deleted else self._active()
        with self._storage_errors("get_all"):
            return q.order_by(Word.created_at.desc(), Word.id.desc()).all()

    def get_deleted(self) -> List[Word]:
        with self._storage_errors("get_deleted"):
            return (
                self.db.query(Word)
                .filter(Word.is_deleted == True)  # noqa: E712
                .order_by(Word.updated_at.desc(), Word.id.desc())
                .all()
            )

    def get_by_id(self, word_id: int) -> Word:
        _check_id(word_id)
        with self._storage_errors("get_by_id"):
            w = self.db.query(Word).filter(Word.id == word_id).first()
        if not w:
            raise NotFound(word_id)
        return w

    def get_by_word(self, english_word: str) -> Word:
        with self._storage_errors("get_by_word"):
            w = (
                self._active()
                .filter(func.lower(Word.english_word) == english_word.lower())
                .first()
            )
        if not w:
            raise NotFound(english_word=english_word)
        return w

    def get_by_level(self, cefr_level: str) -> List[Word]:
        with self._storage_errors("get_by_level"):
            return (
                self._active()
                .filter(func.upper(Word.cefr_level) == cefr_level.upper())
                .order_by(Word.created_at.desc(), Word.id.desc())
                .all()
            )

    def get_random(self, exclude_known: bool = False) -> Word:
        q = self._active()
        if exclude_known:
            q = q.filter(Word.known == False)  # noqa: E712
        with self._storage_errors("get_random"):
            w = q.order_by(func.random()).first()
        if not w:
            raise NotFound(message="No eligible word found")
        return w

    def search(self, query: str) -> List[Word]:
        pattern = f"%{_escape_like(query.lower())}%"
        with self._storage_errors("search"):
            return (
                self._active()
                .filter(func.lower(Word.english_word).like(pattern, escape="\\"))
                .order_by(Word.created_at.desc(), Word.id.desc())
                .all()
            )

    def get_by_known_status(self, known: bool) -> List[Word]:
        with self._storage_errors("get_by_known_status"):
            return (
                self._active()
                .filter(Word.known == known)
                .order_by(Word.updated_at.desc(), Word.id.desc())
                .all()
            )

    # ---------- Mutations ----------

    def update(
        self,
        word_id: int,
        english_word: str,
        turkish_meanings: Sequence[str],
        example_sentence: Optional[str] = None,
        example_translation: Optional[str] = None,
        cefr_level: Optional[str] = None,
    ) -> int:
        if not english_word:
            raise ValidationError("english_word is required")
        values = {
            "english_word": english_word,
            "turkish_meanings": _clean_meanings(turkish_meanings),
            "example_sentence": example_sentence,
            "example_translation": example_translation,
            "cefr_level": cefr_level,
        }
        # unique constraint rejects a colliding rename
        changed = self._apply("update", word_id, values)
        logger.info("word_updated", word_id=word_id)
        return changed

    def set_known(self, word_id: int, known: bool) -> int:
        changed = self._apply("set_known", word_id, {"known": known})
        logger.info("word_known_set", word_id=word_id, known=known)
        return changed

    def soft_delete(self, word_id: int) -> int:
        # An already-deleted row still counts as found and applied
        changed = self._apply("soft_delete", word_id, {"is_deleted": True})
        logger.info("word_soft_deleted", word_id=word_id)
        return changed

    def restore(self, word_id: int) -> int:
        changed = self._apply("restore", word_id, {"is_deleted": False})
        logger.info("word_restored", word_id=word_id)
        return changed

    def permanent_delete(self, word_id: int) -> int:
        _check_id(word_id)
        with self._storage_errors("permanent_delete"):
            changed = (
                self.db.query(Word)
                .filter(Word.id == word_id)
                .delete(synchronize_session=False)
            )
            self.db.commit()
        if not changed:
            raise NotFound(word_id)
        logger.info("word_permanently_deleted", word_id=word_id)
        return changed

    # ---------- Aggregates ----------

    def stats(self) -> Dict[str, Any]:
        """
        Counts for the dashboard. The figures come from separate queries, so
        under concurrent writes they may not add up exactly.
        """
        with self._storage_errors("stats"):
            total = self._active().count()
            deleted = self.db.query(Word).filter(Word.is_deleted == True).count()  # noqa: E712
            known = self._active().filter(Word.known == True).count()  # noqa: E712
            unknown = self._active().filter(Word.known == False).count()  # noqa: E712
            upper_level = func.upper(Word.cefr_level)
            rows = (
                self.db.query(upper_level, func.count(Word.id))
                .filter(Word.is_deleted == False)  # noqa: E712
                .group_by(upper_level)
                .all()
            )

        by_level: Dict[str, int] = {}
        for level, count in rows:
            key = level or UNKNOWN_LEVEL
            by_level[key] = by_level.get(key, 0) + count

        return {
            "total": total,
            "deleted": deleted,
            "known": known,
            "unknown": unknown,
            "by_level": by_level,
        }
