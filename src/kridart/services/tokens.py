"""Issue and verify signed, time-bounded identity tokens."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from jose import JWTError, jwt

from kridart.db.time import utcnow

__all__ = ["InvalidToken", "TokenService"]


class InvalidToken(Exception):
    """Raised when a token cannot be accepted for any reason."""


class TokenService:
    """Stateless JWT issuer/verifier bound to one signing key.

    The key is fixed for the lifetime of the instance; rotating it means
    building a new service (in practice, restarting the process).
    """

    def __init__(
        self,
        secret_key: str,
        *,
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = lifetime
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def _now(self) -> int:
        return int(self._clock().timestamp())

    def issue(self, subject: str) -> str:
        """Return a token whose subject is ``subject``, valid for one lifetime."""
        issued_at = self._now()
        claims: dict[str, object] = {
            "sub": subject,
            "iat": issued_at,
            "exp": issued_at + int(self._lifetime.total_seconds()),
        }
        encoded: str = jwt.encode(claims, self._secret_key, algorithm=self._algorithm)
        return encoded

    def verify(self, token: str) -> str:
        """Return the subject embedded in ``token``.

        Raises:
            InvalidToken: If the signature does not match, the claims are
                malformed, or the current time is at or past ``exp``.
        """
        try:
            # Expiry is checked below against this service's clock.
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as err:
            raise InvalidToken("signature or encoding rejected") from err

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            raise InvalidToken("missing subject")

        expires_at = payload.get("exp")
        if isinstance(expires_at, bool) or not isinstance(expires_at, int):
            raise InvalidToken("missing expiry")
        if self._now() >= expires_at:
            raise InvalidToken("expired")
        return subject
