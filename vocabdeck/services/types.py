from typing import Literal, Optional

from pydantic import BaseModel

from vocabdeck.accounts.types import AccountIdentity


class CredentialsPayload(BaseModel):
    username: Optional[str] = None
    password: Optional[str] = None


class CategoryPayload(BaseModel):
    name: Optional[str] = None


class CardCreatePayload(BaseModel):
    word: Optional[str] = None
    translation: Optional[str] = None


class CardUpdatePayload(BaseModel):
    word: Optional[str] = None
    translation: Optional[str] = None


class AuthResponse(BaseModel):
    token: str
    user: AccountIdentity


class OkResponse(BaseModel):
    ok: Literal[True] = True


class ErrorResponse(BaseModel):
    message: str
