from __future__ import annotations

from fastapi import APIRouter, Depends, status

from qrdine.api.security import require_admin
from qrdine.application.dto.requests import CreateUserRequest, UpdateUserRequest
from qrdine.application.dto.responses import MessageResponse, UserResponse, UsersResponse
from qrdine.application.use_cases.manage_users import (
    CreateUser,
    DeleteUser,
    GetUser,
    ListUsers,
    UpdateUser,
)
from qrdine.domain.common.ids import UserId
from qrdine.infrastructure.auth.passwords import BcryptPasswordHasher
from qrdine.infrastructure.db.repositories.user_repo import SqlAlchemyUserRepository

router = APIRouter(tags=["users"], dependencies=[Depends(require_admin)])


def _create_user_use_case() -> CreateUser:
    return CreateUser(repository=SqlAlchemyUserRepository(), hasher=BcryptPasswordHasher())


def _list_users_use_case() -> ListUsers:
    return ListUsers(repository=SqlAlchemyUserRepository())


def _get_user_use_case() -> GetUser:
    return GetUser(repository=SqlAlchemyUserRepository())


def _update_user_use_case() -> UpdateUser:
    return UpdateUser(repository=SqlAlchemyUserRepository(), hasher=BcryptPasswordHasher())


def _delete_user_use_case() -> DeleteUser:
    return DeleteUser(repository=SqlAlchemyUserRepository())


@router.get("/v1/users", response_model=UsersResponse)
def list_users() -> UsersResponse:
    return _list_users_use_case().execute()


@router.post(
    "/v1/users",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_user(request_dto: CreateUserRequest) -> UserResponse:
    return _create_user_use_case().execute(request_dto)


@router.get("/v1/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str) -> UserResponse:
    return _get_user_use_case().execute(user_id=UserId(user_id))


@router.put("/v1/users/{user_id}", response_model=UserResponse)
def update_user(user_id: str, request_dto: UpdateUserRequest) -> UserResponse:
    return _update_user_use_case().execute(user_id=UserId(user_id), request_dto=request_dto)


@router.delete("/v1/users/{user_id}", response_model=MessageResponse)
def delete_user(user_id: str) -> MessageResponse:
    return _delete_user_use_case().execute(user_id=UserId(user_id))
