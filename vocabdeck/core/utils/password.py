"""Password hashing for stored accounts.

New hashes are bcrypt (``$2b$<cost>$...``). Verification also accepts Argon2 hashes, so the primary algorithm can be
changed later without invalidating existing accounts.
"""

from functools import lru_cache

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError
from pwdlib.hashers.argon2 import Argon2Hasher
from pwdlib.hashers.bcrypt import BcryptHasher

MIN_BCRYPT_ROUNDS = 10

# bcrypt only reads this many bytes of input; longer passwords are cut to it before hashing and verifying.
BCRYPT_MAX_PASSWORD_BYTES = 72


def _bcrypt_input(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


@lru_cache(maxsize=None)
def _get_password_hasher(rounds: int) -> PasswordHash:
    if rounds < MIN_BCRYPT_ROUNDS:
        raise ValueError(f"bcrypt cost must be at least {MIN_BCRYPT_ROUNDS}, got {rounds}")
    return PasswordHash((BcryptHasher(rounds=rounds), Argon2Hasher()))


def get_password_hasher(rounds: int = MIN_BCRYPT_ROUNDS) -> PasswordHash:
    """The shared ``PasswordHash`` producing bcrypt hashes of the given cost.

    One instance is cached per cost. Use it directly for pwdlib features beyond hash and verify, e.g. upgrading the
    cost of an existing hash::

        valid, new_hash = get_password_hasher(rounds=12).verify_and_update(password, account.password_hash)

    Raises:
        ValueError: If ``rounds`` is below ``MIN_BCRYPT_ROUNDS``.
    """
    return _get_password_hasher(rounds)


def hash_password(password: str, rounds: int = MIN_BCRYPT_ROUNDS) -> str:
    """Hash ``password`` with bcrypt at cost ``rounds`` and a fresh random salt.

    Only the first 72 UTF-8 bytes of the password take part in the hash.
    """
    return _get_password_hasher(rounds).hash(_bcrypt_input(password))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Whether ``plain_password`` matches ``hashed_password``.

    Works for bcrypt hashes of any cost and for Argon2 hashes. A string that is not a recognised hash never matches.
    """
    try:
        if BcryptHasher.identify(hashed_password):
            return _get_password_hasher(MIN_BCRYPT_ROUNDS).verify(_bcrypt_input(plain_password), hashed_password)
        return _get_password_hasher(MIN_BCRYPT_ROUNDS).verify(plain_password, hashed_password)
    except UnknownHashError:
        return False


__all__ = [
    "BCRYPT_MAX_PASSWORD_BYTES",
    "MIN_BCRYPT_ROUNDS",
    "get_password_hasher",
    "hash_password",
    "verify_password",
]
