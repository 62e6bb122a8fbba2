from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from qrdine.application.ports.services import InvalidTokenError, TokenService

JWT_ALGORITHM = "HS256"
ACCESS_TOKEN_TTL = timedelta(hours=24)


def _jwt_secret() -> str:
    secret = os.getenv("JWT_SECRET")
    if not secret:
        raise RuntimeError("JWT_SECRET is not set")
    return secret


class JoseTokenService(TokenService):
    def __init__(self, secret: str | None = None, ttl: timedelta = ACCESS_TOKEN_TTL) -> None:
        self._secret = secret or _jwt_secret()
        self._ttl = ttl

    def issue(self, claims: dict[str, Any]) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            **claims,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[JWT_ALGORITHM])
        except JWTError as exc:
            raise InvalidTokenError("invalid or expired token") from exc
