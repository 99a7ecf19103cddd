# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from todo_api.domain.users.entities import NewUser
from todo_api.domain.users.entities import User as DomainUser
from todo_api.domain.users.exceptions import DuplicateUserError
from todo_api.domain.users.repositories import UserRepository
from todo_api.infrastructure.db import SessionFactory
from todo_api.infrastructure.db.models import User
from todo_api.infrastructure.unit_of_work import unit_of_work_scope
from todo_api.shared.errors import StoreError


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: SessionFactory) -> None:
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.query(User).filter(User.email == email).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StoreError("users.find_by_email") from exc

    def add(self, user: NewUser) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(name=user.name, email=user.email, password_hash=user.password_hash)
                session.add(row)
                session.flush()
                return _to_domain(row)
        except IntegrityError as exc:
            # The unique email index lost a race with a concurrent registration.
            raise DuplicateUserError() from exc
        except SQLAlchemyError as exc:
            raise StoreError("users.add") from exc
