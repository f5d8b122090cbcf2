# tests/conftest.py
from __future__ import annotations

import os
import tempfile
from collections.abc import Callable, Generator, Iterator

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Settings are read once at import time, so the environment is fixed first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="kridart-uploads-")

import kridart.models  # noqa: E402,F401
from kridart.core.settings import Settings, settings  # noqa: E402
from kridart.db.session import Base  # noqa: E402
from kridart.db.session import get_db as app_get_session  # noqa: E402
from kridart.main import app as fastapi_app  # noqa: E402
from kridart.repositories.message_repo import SqlMessageStore  # noqa: E402
from kridart.services.chat import ChatHub  # noqa: E402
from kridart.services.rate_limit import FixedWindowRateLimiter  # noqa: E402
from kridart.services.storage import LocalBlobStorage  # noqa: E402

TEST_DB_URL = "sqlite://"


@pytest.fixture(scope="session")
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
def session_factory(engine: Engine) -> Iterator[sessionmaker[Session]]:
    factory = sessionmaker(
        bind=engine,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    try:
        yield factory
    finally:
        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture()
def db_session(session_factory: sessionmaker[Session]) -> Iterator[Session]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_app_services(
    app: FastAPI,
    session_factory: sessionmaker[Session],
    tmp_path,
) -> Iterator[None]:
    """Point every process-scoped service at per-test state."""

    def _get_session_override() -> Generator[Session, None, None]:
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    originals = {
        name: getattr(app.state, name)
        for name in ("chat_hub", "rate_limiter", "blob_storage")
    }
    # The hub's lock and queues belong to the event loop of one TestClient.
    app.state.chat_hub = ChatHub(SqlMessageStore(session_factory))
    app.state.rate_limiter = FixedWindowRateLimiter(
        settings.rate_limit_max_requests,
        settings.rate_limit_window_seconds,
    )
    app.state.blob_storage = LocalBlobStorage(tmp_path / "uploads")
    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)
        for name, service in originals.items():
            setattr(app.state, name, service)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Provide the Settings instance the application was built with."""
    return settings


@pytest.fixture()
def register_user(client: TestClient) -> Callable[[str, str], None]:
    def _register(username: str, password: str) -> None:
        response = client.post(
            "/api/register",
            json={"username": username, "password": password},
        )
        assert response.status_code == status.HTTP_201_CREATED, response.text

    return _register


@pytest.fixture()
def login_token(
    client: TestClient,
    register_user: Callable[[str, str], None],
) -> Callable[[str, str], str]:
    """Register ``username`` and return a bearer token for it."""

    def _login(username: str, password: str = "s3cret-pass") -> str:
        register_user(username, password)
        response = client.post(
            "/api/login",
            json={"username": username, "password": password},
        )
        assert response.status_code == status.HTTP_200_OK, response.text
        return response.json()["token"]

    return _login


@pytest.fixture()
def auth_headers(login_token: Callable[..., str]) -> Callable[..., dict[str, str]]:
    def _headers(username: str, password: str = "s3cret-pass") -> dict[str, str]:
        return {"Authorization": f"Bearer {login_token(username, password)}"}

    return _headers
