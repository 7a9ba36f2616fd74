from sqlalchemy.orm import Session

from ..models import Word
from .word_store import WordStore


SAMPLE_WORDS = [
    {
        "english_word": "hello",
        "turkish_meanings": ["merhaba", "selam"],
        "example_sentence": "Hello, how are you?",
        "example_translation": "Merhaba, nasılsın?",
        "cefr_level": "A1",
    },
    {
        "english_word": "beautiful",
        "turkish_meanings": ["güzel", "hoş"],
        "example_sentence": "She has a beautiful smile.",
        "example_translation": "Onun güzel bir gülümsemesi var.",
        "cefr_level": "A2",
    },
    {
        "english_word": "understand",
        "turkish_meanings": ["anlamak", "kavramak"],
        "example_sentence": "I understand your problem.",
        "example_translation": "Problemini anlıyorum.",
        "cefr_level": "B1",
    },
]


def seed_initial_data(db: Session) -> int:
    """Seed the sample words if the table is empty. Returns how many were added."""
    if db.query(Word).count() > 0:
        return 0

    store = WordStore(db)
    for sample in SAMPLE_WORDS:
        store.create(**sample)
    return len(SAMPLE_WORDS)
