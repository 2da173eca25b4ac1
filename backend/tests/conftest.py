import os
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

# The app refuses to start without a connection string; tests use in-memory SQLite.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from classroom_api import models  # noqa: E402
from classroom_api.database import Database  # noqa: E402
from classroom_api.main import create_app  # noqa: E402


@pytest.fixture
def db():
    """A fresh in-memory database per test."""
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.dispose()


@pytest.fixture
def app(db):
    return create_app(database=db)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def seeded(db):
    """Two departments, five subjects (one orphaned), created on distinct days."""
    with db.session() as session:
        cs = models.Department(code="CS", name="Computer Science", description="Computing")
        math = models.Department(code="MATH", name="Mathematics")
        session.add(cs)
        session.add(math)
        session.commit()
        session.refresh(cs)
        session.refresh(math)
        rows = [
            ("CS101", "Introduction to Programming", cs.id, datetime(2024, 1, 1, tzinfo=timezone.utc)),
            ("CS201", "Data Structures", cs.id, datetime(2024, 1, 2, tzinfo=timezone.utc)),
            ("CS301", "Functional Programming", cs.id, datetime(2024, 1, 3, tzinfo=timezone.utc)),
            ("MATH150", "Programming for Mathematicians", math.id, datetime(2024, 1, 4, tzinfo=timezone.utc)),
            ("MATH101", "Calculus I", math.id, datetime(2024, 1, 5, tzinfo=timezone.utc)),
        ]
        for code, name, dept_id, created in rows:
            session.add(models.Subject(
                code=code, name=name, department_id=dept_id,
                created_at=created, updated_at=created,
            ))
        # SQLite does not enforce foreign keys unless asked to, which lets
        # us store a subject whose department row is missing.
        session.add(models.Subject(
            code="LOST1", name="Orphaned Seminar", department_id=999,
            created_at=datetime(2024, 1, 6, tzinfo=timezone.utc), updated_at=datetime(2024, 1, 6, tzinfo=timezone.utc),
        ))
        session.commit()
    return db
