from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from qrdine.api.security import AUTH_COOKIE_NAME, BEARER_PREFIX, Principal, current_principal
from qrdine.application.dto.requests import LoginRequest
from qrdine.application.dto.responses import LoginResponse, MessageResponse, ProfileResponse
from qrdine.application.use_cases.manage_users import GetProfile, Login
from qrdine.infrastructure.auth.passwords import BcryptPasswordHasher
from qrdine.infrastructure.auth.tokens import ACCESS_TOKEN_TTL, JoseTokenService
from qrdine.infrastructure.db.repositories.user_repo import SqlAlchemyUserRepository

router = APIRouter(tags=["auth"])


def _login_use_case() -> Login:
    return Login(
        repository=SqlAlchemyUserRepository(),
        hasher=BcryptPasswordHasher(),
        tokens=JoseTokenService(),
    )


def _get_profile_use_case() -> GetProfile:
    return GetProfile(repository=SqlAlchemyUserRepository())


@router.post("/v1/auth/login", response_model=LoginResponse)
def login(request_dto: LoginRequest, response: Response) -> LoginResponse:
    result = _login_use_case().execute(request_dto)
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=f"{BEARER_PREFIX}{result.accessToken}",
        max_age=int(ACCESS_TOKEN_TTL.total_seconds()),
        httponly=True,
        samesite="lax",
    )
    return result


@router.post("/v1/auth/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    response.delete_cookie(key=AUTH_COOKIE_NAME)
    return MessageResponse(message="logged out")


@router.get("/v1/profile", response_model=ProfileResponse)
def profile(principal: Principal = Depends(current_principal)) -> ProfileResponse:
    return _get_profile_use_case().execute(user_id=principal.user_id)
