"""Signed, time-limited admin session tokens."""

from __future__ import annotations

import hmac
import logging
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from pubhost.core.errors import Unauthorized

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"


class AuthorizationGate:
    """Issues and checks admin session tokens.

    The secret and expiry are passed in explicitly; the gate never reads
    process-wide configuration on its own.
    """

    def __init__(self, secret: str, expire_minutes: int = 1440, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("Session secret must not be empty")
        self._secret = secret
        self._expire = timedelta(minutes=expire_minutes)
        self._algorithm = algorithm

    @property
    def max_age_seconds(self) -> int:
        return int(self._expire.total_seconds())

    def issue_token(self, now: datetime | None = None) -> str:
        now = now or datetime.now(timezone.utc)
        claims = {
            "sub": ADMIN_SUBJECT,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expire).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def is_authorized(self, token: str | None) -> bool:
        """True if ``token`` carries a valid, unexpired admin session."""
        if not token:
            return False
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            logger.debug("Rejected session token: %s", exc)
            return False
        return payload.get("sub") == ADMIN_SUBJECT

    def require(self, token: str | None) -> None:
        """Raise :class:`Unauthorized` unless ``token`` is valid."""
        if not self.is_authorized(token):
            raise Unauthorized()


def verify_password(candidate: str | None, expected: str) -> bool:
    """Constant-time admin password check. An unset password never matches."""
    if not expected or candidate is None:
        return False
    return hmac.compare_digest(candidate.encode(), expected.encode())
