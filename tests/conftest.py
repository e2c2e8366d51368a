"""Shared fixtures.

The app reads DATABASE_URL at import time, so the in-memory SQLite URL is
set before anything under ``app`` is imported. Every test gets a freshly
created and seeded schema (question ids 1..14).
"""
from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["SEED_QUESTIONS_ON_STARTUP"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select

from app.main import app
from app.db.base import Base
from app.db.seed import seed_questions
from app.db.session import SessionLocal, engine
from app.models.response import Response
from app.models.user import User


@pytest.fixture(autouse=True)
def fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as db:
        seed_questions(db)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _make_user(email: str) -> int:
    with SessionLocal() as s:
        user = User(email=email, hashed_password="x")
        s.add(user)
        s.commit()
        return user.id


@pytest.fixture
def user_id() -> int:
    return _make_user("alice@survey.io")


@pytest.fixture
def other_user_id() -> int:
    return _make_user("bob@survey.io")


def _stored(user_id: int) -> dict[int, str]:
    with SessionLocal() as s:
        rows = s.execute(select(Response).where(Response.user_id == user_id)).scalars().all()
        return {r.question_id: r.answer for r in rows}


def _seed_answers(user_id: int, answers: dict[int, str]) -> None:
    with SessionLocal() as s:
        for qid, answer in answers.items():
            s.add(Response(user_id=user_id, question_id=qid, answer=answer))
        s.commit()


@pytest.fixture
def stored():
    """Reads a user's stored answers through a separate session."""
    return _stored


@pytest.fixture
def seed_answers():
    return _seed_answers


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_client(client):
    resp = client.post("/api/auth/register", json={"email": "carol@survey.io", "password": "s3cret"})
    assert resp.status_code == 201
    return client
