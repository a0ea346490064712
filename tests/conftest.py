import os
import tempfile
from pathlib import Path

# Settings and the engine are built at import time; point them at SQLite first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("DB_INIT_MODE", "create_all")
os.environ.setdefault("LOG_FILE", str(Path(tempfile.gettempdir()) / "codemaster-tests.log"))

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from codemaster.core.database import Base, get_db
from codemaster.models.user import User
from codemaster.models.problem import Problem
from codemaster.services.rate_limiter import rate_limiter


@pytest.fixture
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from fastapi.testclient import TestClient
    from codemaster.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    rate_limiter.reset()
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
        rate_limiter.reset()


def make_user(db, username, points=0, role="user", **extra):
    user = User(
        username=username,
        email=f"{username}@example.com",
        password_hash="hash",
        role=role,
        points=points,
        is_active=True,
        **extra,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_problem(db, title="Two Sum", difficulty="Easy"):
    problem = Problem(title=title, description=f"{title} description", difficulty=difficulty)
    db.add(problem)
    db.commit()
    db.refresh(problem)
    return problem
