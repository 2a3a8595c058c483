import json
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from vocabdeck.accounts import IdentityStore
from vocabdeck.core import CorruptDocumentError, InvalidCredentials, InvalidInput, UsernameTaken
from vocabdeck.store import DocumentStore, InMemoryDocumentBackend


@pytest.fixture
def documents(settings) -> DocumentStore:
    return DocumentStore(InMemoryDocumentBackend(settings=settings), settings=settings)


@pytest.fixture
def identities(settings, documents) -> IdentityStore:
    return IdentityStore(settings.users_path, documents, settings=settings)


class TestRegister:
    def test_register_persists_account(self, identities, settings):
        account = identities.register("  alice ", "secret")

        assert account.username == "alice"
        stored = json.loads(settings.users_path.read_text(encoding="utf-8"))
        assert [u["username"] for u in stored["users"]] == ["alice"]
        assert stored["users"][0]["id"] == account.id
        assert set(stored["users"][0]) == {"id", "username", "passwordHash", "createdAt"}

    def test_password_is_stored_as_bcrypt_hash(self, identities, settings):
        identities.register("alice", "secret")
        stored = json.loads(settings.users_path.read_text(encoding="utf-8"))
        password_hash = stored["users"][0]["passwordHash"]

        assert password_hash.startswith("$2b$10$")
        assert "secret" not in password_hash

    def test_register_seeds_document(self, identities, documents):
        account = identities.register("alice", "secret")
        document = documents.load(account.id)
        assert len(document.categories) == 4
        assert len(document.cards) == 24

    def test_register_without_document_store(self, settings):
        identities = IdentityStore(settings.users_path, settings=settings)
        account = identities.register("alice", "secret")
        assert identities.get(account.id) == account

    @pytest.mark.parametrize("username", ["alice", "ALICE", "  Alice  "])
    def test_username_taken_ignores_case(self, identities, username):
        identities.register("Alice", "secret")
        with pytest.raises(UsernameTaken, match="Username already exists"):
            identities.register(username, "other")
        assert len(identities._read().users) == 1

    @pytest.mark.parametrize(
        ("username", "password"),
        [("", "secret"), ("   ", "secret"), (None, "secret"), ("alice", ""), ("alice", None), (3, "secret")],
    )
    def test_register_requires_username_and_password(self, identities, username, password):
        with pytest.raises(InvalidInput, match="username and password required"):
            identities.register(username, password)
        assert identities._read().users == []

    def test_accounts_get_distinct_ids(self, identities):
        first = identities.register("alice", "secret")
        second = identities.register("bob", "secret")
        assert first.id != second.id

    def test_public_identity_hides_hash(self, identities):
        account = identities.register("alice", "secret")
        assert account.public().model_dump() == {"id": account.id, "username": "alice"}


class TestAuthenticate:
    def test_authenticate(self, identities):
        account = identities.register("alice", "secret")
        assert identities.authenticate("alice", "secret") == account

    def test_authenticate_ignores_username_case(self, identities):
        account = identities.register("Alice", "secret")
        assert identities.authenticate("aLiCe", "secret").id == account.id

    def test_password_is_case_sensitive(self, identities):
        identities.register("alice", "secret")
        with pytest.raises(InvalidCredentials):
            identities.authenticate("alice", "SECRET")

    def test_unknown_user_and_wrong_password_are_indistinguishable(self, identities):
        identities.register("alice", "secret")

        with pytest.raises(InvalidCredentials) as unknown:
            identities.authenticate("mallory", "secret")
        with pytest.raises(InvalidCredentials) as wrong:
            identities.authenticate("alice", "wrong")

        assert unknown.value.message == wrong.value.message == "Invalid credentials"
        assert unknown.value.status_code == wrong.value.status_code == 401

    @pytest.mark.parametrize(("username", "password"), [(None, "secret"), ("alice", None), ("", "")])
    def test_missing_credentials_are_invalid(self, identities, username, password):
        identities.register("alice", "secret")
        with pytest.raises(InvalidCredentials):
            identities.authenticate(username, password)


class TestStorage:
    def test_ensure_exists_creates_empty_document(self, identities, settings):
        assert not settings.users_path.exists()
        identities.ensure_exists()
        assert json.loads(settings.users_path.read_text(encoding="utf-8")) == {"users": []}

    def test_ensure_exists_keeps_existing_accounts(self, identities):
        identities.register("alice", "secret")
        identities.ensure_exists()
        assert identities.find_by_username("alice") is not None

    def test_lookup_on_missing_file(self, identities):
        assert identities.find_by_username("alice") is None
        assert identities.get("missing") is None

    def test_corrupt_identity_document(self, identities, settings):
        settings.users_path.parent.mkdir(parents=True, exist_ok=True)
        settings.users_path.write_text("{oops", encoding="utf-8")
        with pytest.raises(CorruptDocumentError):
            identities.register("alice", "secret")

    def test_accounts_survive_a_new_store_instance(self, identities, settings):
        account = identities.register("alice", "secret")
        reopened = IdentityStore(settings.users_path, settings=settings)
        assert reopened.authenticate("alice", "secret").id == account.id


class TestConcurrency:
    @pytest.mark.slow
    def test_concurrent_registrations_of_one_name_admit_exactly_one(self, identities, documents, settings):
        workers = 6
        barrier = threading.Barrier(workers)
        names = ["Alice" if i % 2 else "alice" for i in range(workers)]

        def attempt(name: str):
            barrier.wait()
            try:
                return identities.register(name, "secret")
            except UsernameTaken as e:
                return e

        with ThreadPoolExecutor(max_workers=workers) as pool:
            outcomes = list(pool.map(attempt, names))

        accounts = [o for o in outcomes if not isinstance(o, UsernameTaken)]
        assert len(accounts) == 1
        assert sum(isinstance(o, UsernameTaken) for o in outcomes) == workers - 1

        stored = json.loads(settings.users_path.read_text(encoding="utf-8"))
        assert [u["id"] for u in stored["users"]] == [accounts[0].id]
        assert len(documents.load(accounts[0].id).categories) == 4

    @pytest.mark.slow
    def test_concurrent_registrations_of_distinct_names_all_persist(self, identities, settings):
        workers = 6
        barrier = threading.Barrier(workers)

        def attempt(i: int):
            barrier.wait()
            return identities.register(f"user{i}", "secret")

        with ThreadPoolExecutor(max_workers=workers) as pool:
            accounts = list(pool.map(attempt, range(workers)))

        stored = json.loads(settings.users_path.read_text(encoding="utf-8"))
        assert sorted(u["username"] for u in stored["users"]) == sorted(a.username for a in accounts)
