"""Abstract base class for per-account document backends.

A backend persists exactly one ``AccountDocument`` per account id and knows nothing about the document's contents
beyond its shape. The canonical contract:

1. ``load`` of an account that was never saved returns an empty document, not an error.
2. ``save`` replaces the whole document; there are no partial updates.
3. A document that exists but cannot be read raises ``CorruptDocumentError``.

Backends do no locking of their own; coordination is the job of ``DocumentStore``.
"""

from abc import abstractmethod

from vocabdeck.core import VocabDeckABC
from vocabdeck.store.types import AccountDocument


class DocumentBackend(VocabDeckABC):  # pragma: no cover
    """Abstract base class for document backends."""

    @abstractmethod
    def load(self, account_id: str) -> AccountDocument:
        """Return the stored document for ``account_id``, or an empty one if none exists."""
        pass

    @abstractmethod
    def save(self, account_id: str, document: AccountDocument) -> None:
        """Overwrite the stored document for ``account_id``."""
        pass

    @abstractmethod
    def exists(self, account_id: str) -> bool:
        """Whether a document has ever been saved for ``account_id``."""
        pass
