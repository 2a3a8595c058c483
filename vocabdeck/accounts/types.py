from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from vocabdeck.store.types import CamelModel, new_id, utcnow


class Account(CamelModel):
    """A registered user. Never modified after registration."""

    id: str = Field(default_factory=new_id)
    username: str
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow)

    def public(self) -> "AccountIdentity":
        return AccountIdentity(id=self.id, username=self.username)


class AccountIdentity(BaseModel):
    """The part of an account that is safe to hand out, and that a bearer token carries."""

    id: str
    username: str


class IdentityDocument(CamelModel):
    """The shared document listing every account."""

    users: List[Account] = Field(default_factory=list)
