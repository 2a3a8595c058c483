"""Registered accounts, kept in one shared JSON identity document."""

import json
import threading
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from vocabdeck.core import CorruptDocumentError, InvalidCredentials, InvalidInput, UsernameTaken, VocabDeck
from vocabdeck.core.utils import hash_password, read_json, verify_password, write_json_atomic
from vocabdeck.accounts.types import Account, IdentityDocument
from vocabdeck.store.document_store import DocumentStore


class IdentityStore(VocabDeck):
    """Registers and authenticates accounts.

    All accounts live in a single identity document (``{"users": [...]}``). Registrations hold a process-wide lock
    across the read-modify-write of that document, so two concurrent registrations of the same username cannot both
    succeed within one server process.

    Args:
        path: Location of the identity document. Created on first registration.
        documents: When given, every new account gets a seeded document in this store.
        bcrypt_rounds: bcrypt cost for new password hashes. Defaults to ``VOCABDECK_AUTH.BCRYPT_ROUNDS``.
    """

    def __init__(
        self,
        path: str | Path,
        documents: Optional[DocumentStore] = None,
        *,
        bcrypt_rounds: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.path = Path(path).expanduser()
        self.documents = documents
        self.bcrypt_rounds = bcrypt_rounds or self.settings.VOCABDECK_AUTH.BCRYPT_ROUNDS
        self._lock = threading.Lock()
        # Verified against when the username is unknown, so both failure paths cost one hash check.
        self._dummy_hash = hash_password("vocabdeck-dummy-password", rounds=self.bcrypt_rounds)

    def _read(self) -> IdentityDocument:
        try:
            raw = read_json(self.path)
            if raw is None:
                return IdentityDocument()
            return IdentityDocument.model_validate(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            self.logger.error(f"Identity document at {self.path} is unreadable: {e}")
            raise CorruptDocumentError() from e

    def _write(self, document: IdentityDocument) -> None:
        write_json_atomic(self.path, document.to_json_dict())

    def ensure_exists(self) -> None:
        """Create an empty identity document if none exists yet."""
        with self._lock:
            if not self.path.exists():
                self._write(IdentityDocument())

    def find_by_username(self, username: str) -> Optional[Account]:
        """Case-insensitive lookup."""
        wanted = username.strip().casefold()
        for account in self._read().users:
            if account.username.casefold() == wanted:
                return account
        return None

    def get(self, account_id: str) -> Optional[Account]:
        for account in self._read().users:
            if account.id == account_id:
                return account
        return None

    def register(self, username: Optional[str], password: Optional[str]) -> Account:
        """Create an account and seed its document.

        Raises:
            InvalidInput: If the username or password is missing or empty.
            UsernameTaken: If an account with the same username, ignoring case, exists.
        """
        username = username.strip() if isinstance(username, str) else ""
        if not username or not isinstance(password, str) or not password:
            raise InvalidInput("username and password required")

        with self._lock:
            identities = self._read()
            wanted = username.casefold()
            if any(account.username.casefold() == wanted for account in identities.users):
                self.logger.info(f"Registration rejected, username {username!r} is taken.")
                raise UsernameTaken()
            account = Account(username=username, password_hash=hash_password(password, rounds=self.bcrypt_rounds))
            identities.users.append(account)
            self._write(identities)

        self.logger.info(f"Registered account {account.id} ({account.username}).")
        if self.documents is not None:
            self.documents.seed(account.id)
        return account

    def authenticate(self, username: Optional[str], password: Optional[str]) -> Account:
        """Return the account matching the credentials.

        Raises:
            InvalidCredentials: Whether the username is unknown or the password is wrong.
        """
        account = self.find_by_username(username) if isinstance(username, str) else None
        password = password if isinstance(password, str) else ""
        if account is None:
            verify_password(password, self._dummy_hash)
            self.logger.info("Login failed: invalid credentials.")
            raise InvalidCredentials()
        if not verify_password(password, account.password_hash):
            self.logger.info("Login failed: invalid credentials.")
            raise InvalidCredentials()
        return account
