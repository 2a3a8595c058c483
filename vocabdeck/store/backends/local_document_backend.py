"""Local filesystem-based document backend.

Each account's document is stored as ``<account_id>.json`` under a configurable base directory.
"""

import json
from pathlib import Path

from pydantic import ValidationError

from vocabdeck.core.exceptions import CorruptDocumentError
from vocabdeck.core.utils import read_json, write_json_atomic
from vocabdeck.store.backends.document_backend import DocumentBackend
from vocabdeck.store.types import AccountDocument


class LocalDocumentBackend(DocumentBackend):
    """A simple local filesystem-based document backend.

    Documents are pretty-printed UTF-8 JSON and are replaced atomically on save, so a reader never observes a
    half-written file.
    """

    def __init__(self, uri: str | Path, **kwargs):
        """Initialize the LocalDocumentBackend.

        Args:
            uri (str | Path): The directory holding one JSON file per account. Supports the "file://" URI scheme,
                which will be automatically stripped.
            **kwargs: Additional keyword arguments for the DocumentBackend.
        """
        if isinstance(uri, str) and uri.startswith("file://"):
            uri = uri[len("file://") :]
        super().__init__(**kwargs)
        self._uri = Path(uri).expanduser().resolve()
        self._uri.mkdir(parents=True, exist_ok=True)
        self.logger.debug(f"Initializing LocalDocumentBackend with uri: {self._uri}")

    @property
    def uri(self) -> Path:
        """The resolved base directory path for the backend."""
        return self._uri

    def document_path(self, account_id: str) -> Path:
        """The file holding ``account_id``'s document.

        Raises:
            ValueError: If the account id could escape the base directory.
        """
        if not account_id or Path(account_id).name != account_id or account_id in {".", ".."}:
            raise ValueError(f"Invalid account id: {account_id!r}")
        return self.uri / f"{account_id}.json"

    def exists(self, account_id: str) -> bool:
        return self.document_path(account_id).exists()

    def load(self, account_id: str) -> AccountDocument:
        path = self.document_path(account_id)
        try:
            raw = read_json(path)
            if raw is None:
                return AccountDocument()
            return AccountDocument.model_validate(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            self.logger.error(f"Document for account {account_id} at {path} is unreadable: {e}")
            raise CorruptDocumentError() from e

    def save(self, account_id: str, document: AccountDocument) -> None:
        path = self.document_path(account_id)
        write_json_atomic(path, document.to_json_dict())
        self.logger.debug(
            f"Saved document for account {account_id}: {len(document.categories)} categories, "
            f"{len(document.cards)} cards."
        )
