from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from uuid import uuid4

from qrdine.application.dto.requests import CreateUserRequest, LoginRequest, UpdateUserRequest
from qrdine.application.dto.responses import (
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    UserResponse,
    UsersResponse,
)
from qrdine.application.mappers.user_mapper import to_user_response
from qrdine.application.ports.repositories import UserRepository
from qrdine.application.ports.services import PasswordHasher, TokenService
from qrdine.application.use_cases.validation import rejecting_invalid_input
from qrdine.domain.common.ids import UserId
from qrdine.domain.user.entities import User, UserRole

logger = logging.getLogger(__name__)


class UserNotFoundError(Exception):
    pass


class DuplicateUserError(Exception):
    pass


class InvalidCredentialsError(Exception):
    pass


def _load_user(repository: UserRepository, user_id: UserId) -> User:
    user = repository.get(user_id)
    if user is None:
        raise UserNotFoundError(f"user {user_id} not found")
    return user


class CreateUser:
    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self._repository = repository
        self._hasher = hasher

    def execute(self, request_dto: CreateUserRequest) -> UserResponse:
        email = request_dto.email.strip().lower()
        username = request_dto.username.strip()
        if self._repository.exists(email=email, username=username):
            raise DuplicateUserError("user with this email or username already exists")

        password_hash = self._hasher.hash(request_dto.password)
        with rejecting_invalid_input():
            user = User(
                user_id=UserId(f"usr_{uuid4().hex[:12]}"),
                username=username,
                email=email,
                password_hash=password_hash,
                role=UserRole(request_dto.role),
                created_at=datetime.now(timezone.utc),
            )
        self._repository.add(user)
        logger.info("user_created", extra={"user_id": str(user.user_id), "role": user.role.value})
        return to_user_response(user)


class ListUsers:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def execute(self) -> UsersResponse:
        users = sorted(self._repository.list_all(), key=lambda user: user.created_at)
        return UsersResponse(users=[to_user_response(user) for user in users])


class GetUser:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def execute(self, user_id: UserId) -> UserResponse:
        return to_user_response(_load_user(self._repository, user_id))


class UpdateUser:
    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self._repository = repository
        self._hasher = hasher

    def execute(self, user_id: UserId, request_dto: UpdateUserRequest) -> UserResponse:
        user = _load_user(self._repository, user_id)
        email = request_dto.email.strip().lower() if request_dto.email else user.email
        username = request_dto.username.strip() if request_dto.username else user.username

        if email != user.email and self._repository.find_by_email(email) is not None:
            raise DuplicateUserError("user with this email already exists")
        if username != user.username and self._repository.find_by_username(username) is not None:
            raise DuplicateUserError("user with this username already exists")

        password_hash = (
            self._hasher.hash(request_dto.password) if request_dto.password else user.password_hash
        )
        with rejecting_invalid_input():
            updated = replace(
                user,
                email=email,
                username=username,
                role=UserRole(request_dto.role) if request_dto.role else user.role,
                password_hash=password_hash,
            )
        self._repository.update(updated)
        return to_user_response(updated)


class DeleteUser:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def execute(self, user_id: UserId) -> MessageResponse:
        if not self._repository.delete(user_id):
            raise UserNotFoundError(f"user {user_id} not found")
        return MessageResponse(message=f"user {user_id} deleted")


class Login:
    def __init__(
        self,
        repository: UserRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        self._repository = repository
        self._hasher = hasher
        self._tokens = tokens

    def execute(self, request_dto: LoginRequest) -> LoginResponse:
        user = self._repository.find_by_email(request_dto.email.strip().lower())
        if user is None or not self._hasher.verify(request_dto.password, user.password_hash):
            logger.info("login_rejected")
            raise InvalidCredentialsError("invalid email or password")

        token = self._tokens.issue(
            {"sub": str(user.user_id), "email": user.email, "role": user.role.value}
        )
        return LoginResponse(accessToken=token)


class GetProfile:
    def __init__(self, repository: UserRepository) -> None:
        self._repository = repository

    def execute(self, user_id: UserId) -> ProfileResponse:
        return ProfileResponse(user=to_user_response(_load_user(self._repository, user_id)))
