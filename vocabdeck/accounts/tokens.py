"""Signed, time-limited bearer tokens binding a request to an account."""

from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional

import jwt

from vocabdeck.core import InvalidOrExpiredToken, MissingToken, VocabDeck
from vocabdeck.accounts.types import Account, AccountIdentity


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService(VocabDeck):
    """Issues and verifies HS256 JWTs carrying an account's ``id`` and ``username``.

    Verification is stateless: a token stays valid for its whole window, there is no revocation.

    Args:
        secret: Signing secret. Defaults to ``VOCABDECK_AUTH.JWT_SECRET``.
        algorithm: JWT algorithm. Defaults to ``VOCABDECK_AUTH.JWT_ALGORITHM``.
        ttl: Validity window. Defaults to ``VOCABDECK_AUTH.TOKEN_TTL_DAYS`` days.
        clock: Returns the current time; both ``issue`` and ``verify`` use it.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        *,
        algorithm: Optional[str] = None,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
        **kwargs,
    ):
        super().__init__(**kwargs)
        auth = self.settings.VOCABDECK_AUTH
        self._secret = secret or auth.JWT_SECRET.get_secret_value()
        self.algorithm = algorithm or auth.JWT_ALGORITHM
        self.ttl = ttl or timedelta(days=auth.TOKEN_TTL_DAYS)
        self.clock = clock

    def issue(self, account: Account | AccountIdentity) -> str:
        now = self.clock()
        payload: Dict[str, Any] = {
            "id": account.id,
            "username": account.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self.ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> AccountIdentity:
        """Return the identity a token was issued for.

        Raises:
            MissingToken: If ``token`` is empty or None.
            InvalidOrExpiredToken: If the signature does not match, the token is malformed, a claim is missing, or
                the token has expired according to ``clock``.
        """
        if not token:
            raise MissingToken()
        try:
            # Expiry is checked below against the injected clock rather than the wall clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp", "id", "username"]},
            )
        except jwt.InvalidTokenError as e:
            self.logger.debug(f"Rejected token: {e}")
            raise InvalidOrExpiredToken() from e

        exp = payload["exp"]
        if not isinstance(exp, (int, float)) or exp <= self.clock().timestamp():
            self.logger.debug("Rejected token: expired.")
            raise InvalidOrExpiredToken()
        if not isinstance(payload["id"], str) or not isinstance(payload["username"], str):
            raise InvalidOrExpiredToken()
        return AccountIdentity(id=payload["id"], username=payload["username"])
