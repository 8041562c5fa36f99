"""Shared fixtures: in-memory database and API client."""

from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, get_db
from app.main import app
from app.schemas.result import ExamResultCreate


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # pysqlite defers BEGIN on its own, which breaks SAVEPOINT; let SQLAlchemy emit it
    @event.listens_for(engine, "connect")
    def _no_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Generator[Session, None, None]:
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory) -> Generator[TestClient, None, None]:
    def override_get_db():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def result_payload(**overrides) -> dict:
    """JSON body for a manual result entry."""
    payload = {
        "student_name": "Asha Verma",
        "roll_no": "100234",
        "class": "Class 5",
        "class_code": "C5A",
        "exam_type": "Quarterly",
        "result_status": "Pass",
        "grade": "A",
        "subjects": [
            {"name": "Mathematics", "marks": 88, "max_marks": 100},
            {"name": "English", "marks": 72, "max_marks": 100},
        ],
    }
    payload.update(overrides)
    return payload


def make_create(**overrides) -> ExamResultCreate:
    return ExamResultCreate.model_validate(result_payload(**overrides))
