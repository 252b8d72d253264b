"""
Shared fixtures: an in-memory SQLite database behind the app's process-wide
engine, a TestClient running the app lifespan, and JWT helpers.
"""

import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from config import settings
from main import app
from models.db import init_engine, dispose_engine

SCHEMA = [
    """
    CREATE TABLE interests (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL UNIQUE
    )
    """,
    """
    CREATE TABLE users (
        id TEXT PRIMARY KEY,
        username TEXT NOT NULL,
        email TEXT NOT NULL DEFAULT '',
        onboarded BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
    """
    CREATE TABLE user_interests (
        uid TEXT NOT NULL REFERENCES users (id),
        interest_id TEXT NOT NULL REFERENCES interests (id),
        PRIMARY KEY (uid, interest_id)
    )
    """,
]

INTERESTS = [
    {"id": "int_music", "name": "Music"},
    {"id": "int_art", "name": "Art"},
    {"id": "int_yoga", "name": "Yoga"},
    {"id": "int_coding", "name": "Coding"},
]

PRINCIPAL = "user_2f9XkQpLmN4rT7"


def make_token(sub=PRINCIPAL, **claims) -> str:
    payload = {"aud": settings.jwt_audience, **claims}
    if sub is not None:
        payload["sub"] = sub
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def engine():
    dispose_engine()
    engine = init_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    with engine.begin() as conn:
        for stmt in SCHEMA:
            conn.execute(text(stmt))
    yield engine
    dispose_engine()


@pytest.fixture
def client(engine):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded(engine):
    with engine.begin() as conn:
        conn.execute(text("INSERT INTO interests (id, name) VALUES (:id, :name)"), INTERESTS)
    return INTERESTS


@pytest.fixture
def auth_headers():
    return bearer(make_token())


@pytest.fixture
def query(engine):
    """Run a read-only query against the test database and return all rows."""
    def _query(sql: str, **params):
        with engine.connect() as conn:
            return conn.execute(text(sql), params).mappings().all()
    return _query
