from datetime import datetime
from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String

from ..core.database import Base


class Word(Base):
    __tablename__ = "words"

    id = Column(Integer, primary_key=True, index=True)
    english_word = Column(String, unique=True, nullable=False)

    # Ordered list of meanings, kept as JSON
    turkish_meanings = Column(JSON, nullable=False)

    example_sentence = Column(String, nullable=True)
    example_translation = Column(String, nullable=True)

    # A1..C2, not checked here
    cefr_level = Column(String, nullable=True)

    is_deleted = Column(Boolean, nullable=False, default=False)
    known = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow)
