# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from orange_forum.api.v1.dependencies import create_access_token  # noqa: E402
from orange_forum.db.session import Base  # noqa: E402
from orange_forum.db.session import get_db as app_get_session  # noqa: E402
from orange_forum.main import app as fastapi_app  # noqa: E402
from orange_forum.models import Group, Topic, User  # noqa: E402
from orange_forum.services import (  # noqa: E402
    config_service,
    group_service,
    topic_service,
    user_service,
)

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse"


@pytest.fixture()
def engine() -> Generator[Engine, None, None]:
    engine = create_engine(
        TEST_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    TestingSession = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def seeded_db(engine: Engine, db_session: Session) -> Session:
    """Session over a store with default forum settings written."""
    config_service.migrate(engine)
    return db_session


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    app.state.forum_config = None
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        app.state.forum_config = None


@pytest.fixture()
def client(app: FastAPI, seeded_db: Session) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        # Startup loads settings from the process database; use the test store instead.
        app.state.forum_config = None
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    def _make_user(username: str, email: str = "", superadmin: bool = False) -> User:
        if superadmin:
            return user_service.create_super_user(db_session, username, TEST_PASSWORD)
        return user_service.create_user(db_session, username, TEST_PASSWORD, email)

    return _make_user


@pytest.fixture()
def test_user(make_user: Callable[..., User]) -> User:
    return make_user("alice", email="alice@example.com")


@pytest.fixture()
def other_user(make_user: Callable[..., User]) -> User:
    return make_user("bob", email="bob@example.com")


@pytest.fixture()
def super_user(make_user: Callable[..., User]) -> User:
    return make_user("root", superadmin=True)


@pytest.fixture()
def group(db_session: Session) -> Group:
    return group_service.create_group(db_session, "python", "All things Python", "Be nice")


@pytest.fixture()
def topic(db_session: Session, test_user: User, group: Group) -> Topic:
    return topic_service.create_topic(
        db_session, test_user.id, group.id, "First topic", "Hello world"
    )


def bearer(user: User) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture()
def auth_headers(test_user: User) -> dict[str, str]:
    return bearer(test_user)


@pytest.fixture()
def other_headers(other_user: User) -> dict[str, str]:
    return bearer(other_user)


@pytest.fixture()
def super_headers(super_user: User) -> dict[str, str]:
    return bearer(super_user)
