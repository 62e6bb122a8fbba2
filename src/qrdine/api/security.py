"""Bearer token checks for staff and admin routes.

The token is read from the ``Authorization`` header first and falls back to
the ``Authorization`` cookie set at login.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Request

from qrdine.application.ports.services import InvalidTokenError, TokenService
from qrdine.domain.common.ids import UserId
from qrdine.domain.user.entities import UserRole
from qrdine.infrastructure.auth.tokens import JoseTokenService

AUTH_COOKIE_NAME = "Authorization"
BEARER_PREFIX = "Bearer "


class AuthenticationRequiredError(Exception):
    pass


class PermissionDeniedError(Exception):
    pass


@dataclass(frozen=True)
class Principal:
    user_id: UserId
    email: str
    role: UserRole


def _token_service() -> TokenService:
    return JoseTokenService()


def _strip_bearer(value: str | None) -> str | None:
    if not value:
        return None
    value = value.strip().strip('"')
    if not value.startswith(BEARER_PREFIX):
        return None
    return value[len(BEARER_PREFIX) :].strip() or None


def bearer_token(request: Request) -> str | None:
    return _strip_bearer(request.headers.get("Authorization")) or _strip_bearer(
        request.cookies.get(AUTH_COOKIE_NAME)
    )


def current_principal(request: Request) -> Principal:
    token = bearer_token(request)
    if token is None:
        raise AuthenticationRequiredError("authentication required")
    try:
        claims = _token_service().decode(token)
        return Principal(
            user_id=UserId(str(claims["sub"])),
            email=str(claims.get("email", "")),
            role=UserRole(claims.get("role")),
        )
    except (InvalidTokenError, KeyError, ValueError) as exc:
        raise AuthenticationRequiredError("invalid or expired token") from exc


def require_roles(*roles: UserRole) -> Callable[..., Principal]:
    allowed = frozenset(roles)

    def dependency(principal: Principal = Depends(current_principal)) -> Principal:
        if principal.role not in allowed:
            raise PermissionDeniedError(
                f"role {principal.role.value} is not allowed to perform this action"
            )
        return principal

    return dependency


require_admin = require_roles(UserRole.ADMIN)
require_staff = require_roles(UserRole.ADMIN, UserRole.STAFF)
