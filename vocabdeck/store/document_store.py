"""Per-account document access with serialized read-modify-write."""

from contextlib import contextmanager
from typing import Iterator

from vocabdeck.core import VocabDeck
from vocabdeck.store.backends.document_backend import DocumentBackend
from vocabdeck.store.locks import KeyedLock
from vocabdeck.store.seed import seeded_document
from vocabdeck.store.types import AccountDocument


class DocumentStore(VocabDeck):
    """Loads and saves whole account documents through a ``DocumentBackend``.

    Every mutation should go through ``transaction``, which holds the account's lock for the entire load, mutate and
    save sequence. Two transactions on the same account therefore never interleave, while transactions on different
    accounts run concurrently.

    ``load`` and ``save`` stay public for read-only access and for callers that coordinate on their own. Used
    together without ``transaction`` they race: two callers that load the same state and both save will lose the
    first caller's update.

    Example:
        .. code-block:: python

            store = DocumentStore(LocalDocumentBackend("~/.cache/vocabdeck/store/data"))
            with store.transaction(account_id) as document:
                document.create_category("Verbs")
    """

    def __init__(self, backend: DocumentBackend, **kwargs):
        super().__init__(**kwargs)
        self.backend = backend
        self._locks = KeyedLock()

    def load(self, account_id: str) -> AccountDocument:
        return self.backend.load(account_id)

    def save(self, account_id: str, document: AccountDocument) -> None:
        """Persist ``document`` after checking that no card references a missing category."""
        document.check_integrity()
        self.backend.save(account_id, document)

    @contextmanager
    def transaction(self, account_id: str) -> Iterator[AccountDocument]:
        """Yield the account's document and save it when the block exits cleanly.

        If the block raises, nothing is written and the exception propagates.
        """
        with self._locks.hold(account_id):
            document = self.load(account_id)
            yield document
            self.save(account_id, document)

    def seed(self, account_id: str) -> AccountDocument:
        """Replace the account's document with the starter vocabulary."""
        document = seeded_document()
        with self._locks.hold(account_id):
            self.save(account_id, document)
        self.logger.info(
            f"Seeded document for account {account_id} with {len(document.categories)} categories "
            f"and {len(document.cards)} cards."
        )
        return document
