from vocabdeck.core.utils.checks import first_not_none, ifnone
from vocabdeck.core.utils.json_files import read_json, write_json_atomic
from vocabdeck.core.utils.password import get_password_hasher, hash_password, verify_password

__all__ = [
    "first_not_none",
    "get_password_hasher",
    "hash_password",
    "ifnone",
    "read_json",
    "verify_password",
    "write_json_atomic",
]
