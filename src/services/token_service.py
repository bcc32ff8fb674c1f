"""Bearer token issuing and verification.

Tokens are stateless HS256 JWTs. Validity is recomputed on every check from the
signature and the `exp` claim; nothing is stored server side.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from jose import JWTError, jwt

from domain.model.access import AccessToken
from domain.model.errors import InvalidTokenError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN = 3600


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenService:
    def __init__(
        self,
        secret_key: str,
        algorithm: str = DEFAULT_ALGORITHM,
        expires_in: int = DEFAULT_EXPIRES_IN,
        clock: Callable[[], datetime] = _utcnow,
    ):
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.expires_in = expires_in
        self._clock = clock

    def issue(self, subject: str, role: str | None = None) -> tuple[str, int]:
        """Create a signed token for `subject`. Returns (token, expires_in seconds)."""
        issued_at = self._clock()
        payload = {
            "sub": subject,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + timedelta(seconds=self.expires_in)).timestamp()),
        }
        if role is not None:
            payload["role"] = role
        token = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token, self.expires_in

    def decode(self, token: str) -> AccessToken:
        """Verify signature and expiry, return the claims.

        Raises:
            InvalidTokenError: bad signature, malformed token, missing subject, or expired
        """
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Token signature or structure is invalid") from e

        subject = payload.get("sub")
        expires_at = payload.get("exp")
        issued_at = payload.get("iat")
        if not subject or not isinstance(expires_at, (int, float)) or not isinstance(issued_at, (int, float)):
            raise InvalidTokenError("Token is missing required claims")

        if self._clock().timestamp() >= expires_at:
            raise InvalidTokenError("Token has expired")

        return AccessToken(
            subject=subject,
            issued_at=datetime.fromtimestamp(issued_at, tz=timezone.utc),
            expires_in=int(expires_at - issued_at),
            role=payload.get("role"),
        )

    def verify(self, token: str) -> str:
        """Return the token subject or raise InvalidTokenError."""
        return self.decode(token).subject
