from __future__ import annotations

from qrdine.application.dto.responses import UserResponse
from qrdine.domain.user.entities import User


def to_user_response(user: User) -> UserResponse:
    return UserResponse(
        userId=str(user.user_id),
        username=user.username,
        email=user.email,
        role=user.role.value,
    )
