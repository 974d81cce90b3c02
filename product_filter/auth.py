"""Bearer token issuance and verification for the API."""
from __future__ import annotations

import logging
import secrets
import threading
import time
from typing import Callable, Dict

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


class AuthenticationError(PermissionError):
    """Raised when credentials or a token are rejected."""


class TokenStore:
    """Opaque tokens issued for the single configured account."""

    def __init__(self, config: Settings, clock: Callable[[], float] = time.monotonic) -> None:
        self.settings = config
        self._clock = clock
        self._tokens: Dict[str, float] = {}
        self._lock = threading.Lock()

    def login(self, username: str, password: str) -> str:
        valid_user = secrets.compare_digest(username.encode(), self.settings.auth_username.encode())
        valid_password = secrets.compare_digest(password.encode(), self.settings.auth_password.encode())
        if not (valid_user and valid_password):
            logger.warning("Rejected login for user %r", username)
            raise AuthenticationError("Invalid username or password")

        token = secrets.token_urlsafe(32)
        now = self._clock()
        with self._lock:
            self._purge_expired(now)
            self._tokens[token] = now + self.settings.token_ttl_seconds
        logger.info("Issued token for %s", username)
        return token

    def _purge_expired(self, now: float) -> None:
        expired = [token for token, expires_at in self._tokens.items() if expires_at <= now]
        for token in expired:
            del self._tokens[token]

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)

    def verify(self, token: str | None) -> bool:
        if not token:
            return False
        with self._lock:
            expires_at = self._tokens.get(token)
            if expires_at is None:
                return False
            if expires_at <= self._clock():
                self._tokens.pop(token, None)
                return False
            return True


def require_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> None:
    config: Settings = request.app.state.settings
    if not config.auth_enabled:
        return
    tokens: TokenStore = request.app.state.tokens
    if credentials is None or not tokens.verify(credentials.credentials):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
