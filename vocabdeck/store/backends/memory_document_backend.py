"""In-memory document backend, for tests and ephemeral servers."""

import threading
from typing import Dict

from vocabdeck.store.backends.document_backend import DocumentBackend
from vocabdeck.store.types import AccountDocument


class InMemoryDocumentBackend(DocumentBackend):
    """Keeps serialized documents in a dict.

    Documents are stored as JSON-ready dicts rather than live models, so callers can never mutate stored state without
    going through ``save``.
    """

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._documents: Dict[str, dict] = {}
        self._lock = threading.Lock()

    def exists(self, account_id: str) -> bool:
        with self._lock:
            return account_id in self._documents

    def load(self, account_id: str) -> AccountDocument:
        with self._lock:
            raw = self._documents.get(account_id)
        if raw is None:
            return AccountDocument()
        return AccountDocument.model_validate(raw)

    def save(self, account_id: str, document: AccountDocument) -> None:
        data = document.to_json_dict()
        with self._lock:
            self._documents[account_id] = data
