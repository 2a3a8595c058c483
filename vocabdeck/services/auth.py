"""Authentication module for the VocabDeck service.

Provides stateless Bearer token authentication backed by a ``TokenService``.
"""

from typing import Callable, Optional

from fastapi import Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vocabdeck.accounts.tokens import TokenService
from vocabdeck.accounts.types import AccountIdentity
from vocabdeck.core import MissingToken

bearer_scheme = HTTPBearer(
    auto_error=False,
    scheme_name="Bearer",
    description="JWT Bearer token authentication. Format: Bearer <token>",
)


def make_token_dependency(tokens: TokenService) -> Callable[..., AccountIdentity]:
    """Build a FastAPI dependency resolving the caller's identity from the Authorization header.

    The dependency raises ``MissingToken`` when no ``Bearer`` credential is present and lets ``TokenService.verify``
    raise ``InvalidOrExpiredToken`` for anything it rejects; the service's exception handlers turn both into 401s.

    Example:
        .. code-block:: python

            current_user = make_token_dependency(TokenService())

            @app.get("/me")
            def me(user: Annotated[AccountIdentity, Depends(current_user)]):
                return user
    """

    def verify_token(
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
    ) -> AccountIdentity:
        if credentials is None or not credentials.credentials:
            raise MissingToken()
        return tokens.verify(credentials.credentials)

    return verify_token

