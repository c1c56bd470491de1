"""In-memory admin token store.

Tokens are opaque, expire after a fixed TTL, and vanish on restart.
"""

import hmac
import logging
import secrets
import time
from threading import Lock

logger = logging.getLogger(__name__)


class AdminTokenStore:
    """Issues and verifies admin bearer tokens."""

    def __init__(self, password: str | None, ttl_seconds: int = 8 * 60 * 60) -> None:
        """Initialize the store.

        Args:
            password: Admin password; None disables login entirely
            ttl_seconds: Lifetime of each issued token
        """
        self._password = password
        self.ttl_seconds = ttl_seconds
        self._tokens: dict[str, float] = {}
        self._lock = Lock()

    @property
    def enabled(self) -> bool:
        return bool(self._password)

    def check_password(self, password: str) -> bool:
        if not self._password:
            return False
        return hmac.compare_digest(password.encode("utf-8"), self._password.encode("utf-8"))

    def issue(self) -> str:
        token = secrets.token_urlsafe(32)
        with self._lock:
            self._prune()
            self._tokens[token] = time.monotonic() + self.ttl_seconds
        logger.info("Issued admin token")
        return token

    def verify(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            expires_at = self._tokens.get(token)
            if expires_at is None:
                return False
            if expires_at <= time.monotonic():
                del self._tokens[token]
                return False
            return True

    def revoke(self, token: str | None) -> None:
        if not token:
            return
        with self._lock:
            self._tokens.pop(token, None)

    def _prune(self) -> None:
        now = time.monotonic()
        for token in [t for t, expires_at in self._tokens.items() if expires_at <= now]:
            del self._tokens[token]
