import os

# Must be set before booktrack.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from booktrack.main import app
from booktrack.db.session import get_db
from booktrack.models.base import Base
from booktrack.models.book import Book

# One shared in-memory connection so the app and the tests see the same data
test_engine = create_engine(
    "sqlite+pysqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
    future=True,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False, future=True)


def override_get_db():
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def setup_test_database():
    """Create the tables for each test and drop them afterwards."""
    Base.metadata.create_all(bind=test_engine)
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.pop(get_db, None)
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def db_session():
    """Create a fresh database session for each test."""
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


@pytest.fixture
def test_client():
    """Create a test client for FastAPI app."""
    return TestClient(app)


def _make_book(db_session, **overrides) -> Book:
    fields = {
        "title": "Existing Book",
        "author": "Existing Author",
        "isbn": "156881111X",
        "genre": "Fiction",
        "available_copies": 5,
    }
    fields.update(overrides)
    book = Book(**fields)
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def sample_book(db_session) -> Book:
    """A stored book with a cover image."""
    return _make_book(db_session, title="Old Title", image="b2xkLWltYWdl")


@pytest.fixture
def other_book(db_session) -> Book:
    """A second stored book whose title others may collide with."""
    return _make_book(db_session, title="Duplicate Title", isbn="9780306406157")


@pytest.fixture
def update_payload():
    """Valid form fields for an update request."""
    return {
        "title": "New Title",
        "author": "New Author",
        "isbn": "123456789",
        "genre": "Fiction",
        "availableCopies": "10",
    }
