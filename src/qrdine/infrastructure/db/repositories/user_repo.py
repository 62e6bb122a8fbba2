from __future__ import annotations

from sqlalchemy import Engine, Select, func, or_, select
from sqlalchemy.orm import Session

from qrdine.application.ports.repositories import UserRepository
from qrdine.domain.common.ids import UserId
from qrdine.domain.user.entities import User, UserRole
from qrdine.infrastructure.db.models.user import UserModel
from qrdine.infrastructure.db.repositories.utc import as_utc
from qrdine.infrastructure.db.session import get_engine


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine or get_engine()

    def get(self, user_id: UserId) -> User | None:
        with Session(self._engine) as session:
            model = session.get(UserModel, str(user_id))
            return self._to_domain(model) if model is not None else None

    def find_by_email(self, email: str) -> User | None:
        statement = select(UserModel).where(func.lower(UserModel.email) == email.lower())
        return self._first(statement)

    def find_by_username(self, username: str) -> User | None:
        statement = select(UserModel).where(UserModel.username == username)
        return self._first(statement)

    def exists(self, email: str, username: str) -> bool:
        statement = select(UserModel.id).where(
            or_(func.lower(UserModel.email) == email.lower(), UserModel.username == username)
        )
        with Session(self._engine) as session:
            return session.execute(statement.limit(1)).scalar_one_or_none() is not None

    def list_all(self) -> list[User]:
        statement = select(UserModel).order_by(UserModel.created_at)
        with Session(self._engine) as session:
            return [self._to_domain(model) for model in session.execute(statement).scalars()]

    def add(self, user: User) -> None:
        with Session(self._engine) as session:
            session.add(self._to_model(user))
            session.commit()

    def update(self, user: User) -> None:
        with Session(self._engine) as session:
            session.merge(self._to_model(user))
            session.commit()

    def delete(self, user_id: UserId) -> bool:
        with Session(self._engine) as session:
            model = session.get(UserModel, str(user_id))
            if model is None:
                return False
            session.delete(model)
            session.commit()
        return True

    def _first(self, statement: Select[tuple[UserModel]]) -> User | None:
        with Session(self._engine) as session:
            model = session.execute(statement.limit(1)).scalar_one_or_none()
            return self._to_domain(model) if model is not None else None

    def _to_model(self, user: User) -> UserModel:
        return UserModel(
            id=str(user.user_id),
            username=user.username,
            email=user.email,
            password_hash=user.password_hash,
            role=user.role.value,
            created_at=user.created_at,
        )

    def _to_domain(self, model: UserModel) -> User:
        return User(
            user_id=UserId(model.id),
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            role=UserRole(model.role),
            created_at=as_utc(model.created_at),
        )
