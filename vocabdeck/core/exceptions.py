"""VocabDeck exceptions.

Every error the core can surface to a caller derives from ``VocabDeckError``. Each class carries the HTTP status the
service answers with and a default human-readable message; the core itself never deals with HTTP.
"""


class VocabDeckError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = 500
    default_message: str = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidInput(VocabDeckError):
    """A required field is missing or empty after trimming."""

    status_code = 400
    default_message = "Invalid input"


class UsernameTaken(VocabDeckError):
    """An account with the same username (compared case-insensitively) already exists."""

    status_code = 400
    default_message = "Username already exists"


class NothingToUpdate(VocabDeckError):
    """An update request supplied none of the updatable fields."""

    status_code = 400
    default_message = "nothing to update"


class InvalidCredentials(VocabDeckError):
    """Unknown username or wrong password. The two cases are intentionally indistinguishable."""

    status_code = 401
    default_message = "Invalid credentials"


class MissingToken(VocabDeckError):
    """The request carried no bearer token."""

    status_code = 401
    default_message = "Missing token"


class InvalidOrExpiredToken(VocabDeckError):
    """The bearer token failed signature verification, is malformed, or has expired."""

    status_code = 401
    default_message = "Invalid token"


class NotFound(VocabDeckError):
    """A category or card does not exist in the caller's document."""

    status_code = 404
    default_message = "Not found"


class CategoryNotFound(NotFound):
    """The category a card was to be created under does not exist."""

    default_message = "Category not found"


class CorruptDocumentError(VocabDeckError):
    """A persisted document exists but cannot be parsed or validated."""

    status_code = 500
    default_message = "Stored document is unreadable"


class IntegrityViolation(VocabDeckError):
    """A card references a category that is not present in the same document."""

    status_code = 500
    default_message = "Document integrity violated"
