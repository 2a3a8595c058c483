from vocabdeck.services.auth import bearer_scheme, make_token_dependency
from vocabdeck.services.errors import register_exception_handlers
from vocabdeck.services.middleware import RequestLoggingMiddleware
from vocabdeck.services.service import VocabDeckService
from vocabdeck.services.types import (
    AuthResponse,
    CardCreatePayload,
    CardUpdatePayload,
    CategoryPayload,
    CredentialsPayload,
    ErrorResponse,
    OkResponse,
)

__all__ = [
    "AuthResponse",
    "bearer_scheme",
    "CardCreatePayload",
    "CardUpdatePayload",
    "CategoryPayload",
    "CredentialsPayload",
    "ErrorResponse",
    "make_token_dependency",
    "OkResponse",
    "register_exception_handlers",
    "RequestLoggingMiddleware",
    "VocabDeckService",
]
