from vocabdeck.accounts.types import Account, AccountIdentity, IdentityDocument
from vocabdeck.accounts.identity_store import IdentityStore
from vocabdeck.accounts.tokens import TokenService

__all__ = ["Account", "AccountIdentity", "IdentityDocument", "IdentityStore", "TokenService"]
