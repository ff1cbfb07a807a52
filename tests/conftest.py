"""
Shared fixtures for the HTTP-level tests.

Settings are read at import time, so the environment is prepared before any
``hms`` module is imported.
"""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RATE_LIMIT_PER_MINUTE", "100000")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from hms.database import get_session
from hms.db import models  # noqa: F401
from hms.dependencies import get_password_hasher
from hms.infrastructure.persistence.sqlalchemy.repositories.accounts_repository_sql import SqlAccountsRepository
from hms.main import app


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def client(engine):
    def _session_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _session_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def make_account(engine):
    """Insert an account directly and return its id."""
    hasher = get_password_hasher()

    def _make(kind: str, email: str, password: str = "password123", **fields) -> str:
        with Session(engine) as session:
            account = SqlAccountsRepository(session).create(kind, {
                "name": fields.pop("name", kind.capitalize()),
                "surname": fields.pop("surname", "Tester"),
                "email": email,
                "hashed_password": hasher.hash(password),
                "role": kind,
                **fields,
            })
            return account.id

    return _make


@pytest.fixture
def login(client):
    """Sign in and return bearer headers."""
    def _login(email: str, password: str = "password123") -> dict:
        res = client.post("/auth/login", json={"email": email, "password": password})
        assert res.status_code == 200, res.text
        return {"Authorization": f"Bearer {res.json()['access_token']}"}

    return _login
