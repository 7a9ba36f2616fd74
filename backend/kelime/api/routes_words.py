from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field, StrictBool
from sqlalchemy.orm import Session

from ..core.database import get_db
from ..core.word_store import WordStore

router = APIRouter(prefix="/api", tags=["words"])


def get_word_store(db: Session = Depends(get_db)) -> WordStore:
    return WordStore(db)


# ---------- Schemas ----------

class WordBase(BaseModel):
    english_word: str = Field(..., min_length=1)
    turkish_meanings: List[str] = Field(..., min_length=1)
    example_sentence: Optional[str] = None
    example_translation: Optional[str] = None
    cefr_level: Optional[str] = None  # A1, A2, B1, B2, C1, C2


class WordCreate(WordBase):
    pass


class WordUpdate(WordBase):
    pass


class KnownUpdate(BaseModel):
    known: StrictBool


class WordOut(WordBase):
    id: int
    is_deleted: bool
    known: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class WordCreated(BaseModel):
    id: int
    message: str


class MessageOut(BaseModel):
    message: str
    changes: int = 1


class KnownOut(MessageOut):
    known: bool


# ---------- Queries ----------

@router.get("/words", response_model=List[WordOut])
def list_words(include_deleted: bool = False, store: WordStore = Depends(get_word_store)):
    return store.get_all(include_deleted=include_deleted)


@router.get("/words/deleted", response_model=List[WordOut])
def list_deleted_words(store: WordStore = Depends(get_word_store)):
    return store.get_deleted()


@router.get("/words/random", response_model=WordOut)
def random_word(exclude_known: bool = False, store: WordStore = Depends(get_word_store)):
    return store.get_random(exclude_known=exclude_known)


@router.get("/words/level/{level}", response_model=List[WordOut])
def words_by_level(level: str, store: WordStore = Depends(get_word_store)):
    return store.get_by_level(level.upper())


@router.get("/words/status/{known}", response_model=List[WordOut])
def words_by_known_status(known: bool, store: WordStore = Depends(get_word_store)):
    return store.get_by_known_status(known)


@router.get("/words/id/{word_id}", response_model=WordOut)
def get_word_by_id(word_id: int, store: WordStore = Depends(get_word_store)):
    return store.get_by_id(word_id)


@router.get("/words/{word}", response_model=WordOut)
def get_word(word: str, store: WordStore = Depends(get_word_store)):
    return store.get_by_word(word)


@router.get("/search", response_model=List[WordOut])
def search_words(q: str = "", store: WordStore = Depends(get_word_store)):
    return store.search(q)


@router.get("/search/{query}", response_model=List[WordOut])
def search_words_by_path(query: str, store: WordStore = Depends(get_word_store)):
    return store.search(query)


# ---------- Mutations ----------

@router.post("/words", response_model=WordCreated, status_code=status.HTTP_201_CREATED)
def create_word(payload: WordCreate, store: WordStore = Depends(get_word_store)):
    word_id = store.create(
        english_word=payload.english_word,
        turkish_meanings=payload.turkish_meanings,
        example_sentence=payload.example_sentence,
        example_translation=payload.example_translation,
        cefr_level=payload.cefr_level,
    )
    return {"id": word_id, "message": "Word added successfully"}


@router.put("/words/{word_id}", response_model=MessageOut)
def update_word(word_id: int, payload: WordUpdate, store: WordStore = Depends(get_word_store)):
    changes = store.update(
        word_id,
        english_word=payload.english_word,
        turkish_meanings=payload.turkish_meanings,
        example_sentence=payload.example_sentence,
        example_translation=payload.example_translation,
        cefr_level=payload.cefr_level,
    )
    return {"message": "Word updated successfully", "changes": changes}


@router.patch("/words/{word_id}/known", response_model=KnownOut)
def set_word_known(word_id: int, payload: KnownUpdate, store: WordStore = Depends(get_word_store)):
    changes = store.set_known(word_id, payload.known)
    label = "known" if payload.known else "unknown"
    return {"message": f"Word marked as {label}", "changes": changes, "known": payload.known}


@router.delete("/words/{word_id}", response_model=MessageOut)
def delete_word(word_id: int, store: WordStore = Depends(get_word_store)):
    changes = store.soft_delete(word_id)
    return {"message": "Word moved to trash", "changes": changes}


@router.post("/words/{word_id}/restore", response_model=MessageOut)
def restore_word(word_id: int, store: WordStore = Depends(get_word_store)):
    changes = store.restore(word_id)
    return {"message": "Word restored", "changes": changes}


@router.delete("/words/{word_id}/permanent", response_model=MessageOut)
def delete_word_permanently(word_id: int, store: WordStore = Depends(get_word_store)):
    changes = store.permanent_delete(word_id)
    return {"message": "Word permanently deleted", "changes": changes}
