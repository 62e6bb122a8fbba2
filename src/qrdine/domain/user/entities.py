from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from qrdine.domain.common.errors import DomainValidationError
from qrdine.domain.common.ids import UserId


class UserRole(str, Enum):
    ADMIN = "admin"
    STAFF = "staff"


@dataclass(frozen=True)
class User:
    user_id: UserId
    username: str
    email: str
    password_hash: str
    role: UserRole
    created_at: datetime

    def __post_init__(self) -> None:
        if len(self.username.strip()) < 2:
            raise DomainValidationError("username must be at least 2 characters long")
        if "@" not in self.email:
            raise DomainValidationError("email must be a valid address")
