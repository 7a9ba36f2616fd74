"""Error taxonomy shared by the word store and the HTTP layer."""

from typing import Optional


class KelimeError(Exception):
    """Base exception for all Kelime errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ValidationError(KelimeError):
    """A required field is missing or has the wrong type."""

    status_code = 400


class DuplicateWord(KelimeError):
    """english_word collides with a stored row, deleted or not."""

    status_code = 400

    def __init__(self, english_word: str) -> None:
        self.english_word = english_word
        super().__init__(f"Word '{english_word}' already exists")


class NotFound(KelimeError):
    """No word with the given id, or no active word with the given text."""

    status_code = 404

    def __init__(
        self,
        word_id: Optional[int] = None,
        *,
        english_word: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        self.word_id = word_id
        self.english_word = english_word
        if message:
            super().__init__(message)
        elif word_id is not None:
            super().__init__(f"Word with id {word_id} not found")
        elif english_word is not None:
            super().__init__(f"Word '{english_word}' not found")
        else:
            super().__init__("Word not found")


class StorageUnavailable(KelimeError):
    """The database could not be reached or the statement failed."""

    status_code = 500
