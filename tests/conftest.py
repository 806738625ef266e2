"""
Configuration partagée pour tous les tests.

- `client` : client HTTP avec la BDD mockée (aucune connexion réelle).
- `db` : session sur une base SQLite en mémoire créée depuis Base.metadata,
  pour tester les règles du moteur alumni de bout en bout.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import yearbook.models  # noqa: E402,F401
from yearbook.database import Base, get_db  # noqa: E402
from yearbook.main import app  # noqa: E402
from yearbook.models.school import School  # noqa: E402
from yearbook.models.user import User  # noqa: E402


@pytest.fixture
def client():
    """Client HTTP de test avec la BDD mockée."""
    mock_db = MagicMock()
    app.dependency_overrides[get_db] = lambda: mock_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    """Session SQLite en mémoire, schéma recréé à chaque test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db_client(db):
    """Client HTTP branché sur la base SQLite de test."""
    app.dependency_overrides[get_db] = lambda: db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def make_school(db):
    """Fabrique d'écoles persistées."""
    def _make(name="School A", year_founded=1985):
        school = School(name=name, year_founded=year_founded, city="Lagos", country="Nigeria",
                        approval_status="approved")
        db.add(school)
        db.commit()
        db.refresh(school)
        return school
    return _make


@pytest.fixture
def make_user(db):
    """Fabrique d'utilisateurs persistés."""
    counter = {"n": 0}

    def _make(full_name="Ada Obi", user_type="viewer"):
        counter["n"] += 1
        user = User(username=f"user{counter['n']}", full_name=full_name, user_type=user_type)
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make


@pytest.fixture
def viewer(make_user):
    return make_user(full_name="Ada Obi")


@pytest.fixture
def admin(make_user):
    return make_user(full_name="Principal Eze", user_type="school")


@pytest.fixture
def school_a(make_school):
    return make_school(name="School A")


@pytest.fixture
def school_b(make_school):
    return make_school(name="School B")
