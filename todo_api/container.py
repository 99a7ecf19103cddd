"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from sqlalchemy.engine import Engine

from todo_api.application.services.password_hashing import WerkzeugPasswordHasher
from todo_api.application.services.todo_service import TodoService
from todo_api.application.services.tokens import JwtTokenService
from todo_api.application.use_cases.users.login_user import LoginUserUseCase
from todo_api.application.use_cases.users.register_user import RegisterUserUseCase
from todo_api.domain.todos.repositories import TodoRepository
from todo_api.domain.users.repositories import PasswordHasher, TokenService, UserRepository
from todo_api.infrastructure.auth import BearerAuthGate
from todo_api.infrastructure.db import SessionFactory, build_engine, build_session_factory, init_db
from todo_api.infrastructure.repositories import (
    InMemoryTodoRepository,
    InMemoryUserRepository,
    SqlAlchemyTodoRepository,
    SqlAlchemyUserRepository,
)
from todo_api.interfaces.http.controllers.auth_controller import AuthController
from todo_api.interfaces.http.controllers.misc_controller import MiscController
from todo_api.interfaces.http.controllers.todos_controller import TodosController
from todo_api.shared.clock import Clock, utc_now
from todo_api.shared.config import AppConfig


class Container:
    def __init__(
        self,
        config: AppConfig,
        *,
        clock: Clock = utc_now,
        password_hasher: PasswordHasher | None = None,
    ) -> None:
        self.config = config
        self._clock = clock
        self._password_hasher_override = password_hasher

    @property
    def uses_memory_store(self) -> bool:
        return self.config.database.backend == "memory"

    @cached_property
    def engine(self) -> Engine | None:
        if self.uses_memory_store:
            return None
        return build_engine(self.config.database)

    @cached_property
    def session_factory(self) -> SessionFactory:
        if self.engine is None:
            raise RuntimeError("in-memory store has no session factory")
        return build_session_factory(self.engine)

    def init_storage(self) -> None:
        if self.engine is not None:
            init_db(self.engine)

    @cached_property
    def user_repository(self) -> UserRepository:
        if self.uses_memory_store:
            return InMemoryUserRepository()
        return SqlAlchemyUserRepository(self.session_factory)

    @cached_property
    def todo_repository(self) -> TodoRepository:
        if self.uses_memory_store:
            return InMemoryTodoRepository()
        return SqlAlchemyTodoRepository(self.session_factory)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return self._password_hasher_override or WerkzeugPasswordHasher()

    @cached_property
    def token_service(self) -> TokenService:
        return JwtTokenService(
            self.config.tokens.secret,
            ttl=timedelta(hours=self.config.tokens.ttl_hours),
            clock=self._clock,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def todo_service(self) -> TodoService:
        return TodoService(
            todos=self.todo_repository,
            clock=self._clock,
            max_page_size=self.config.max_page_size,
        )

    @cached_property
    def auth_gate(self) -> BearerAuthGate:
        return BearerAuthGate(self.token_service)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
        )

    @cached_property
    def todos_controller(self) -> TodosController:
        return TodosController(service=self.todo_service, auth_gate=self.auth_gate)

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
