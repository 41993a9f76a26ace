"""
DoubtDesk - Test Configuration and Fixtures
"""
import os
from datetime import datetime, timedelta
from typing import Generator

import pytest

# Set testing environment before the app reads its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["RESOLVE_POLICY"] = "any"
os.environ["LOCK_RESOLVED_DELETE"] = "false"
os.environ.pop("OPENAI_API_KEY", None)

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from doubtdesk.main import app
from doubtdesk.core.dependencies import get_suggestion_service
from doubtdesk.core.security import create_user_token, get_password_hash
from doubtdesk.db.base import Base
from doubtdesk.db.sessions import get_db
from doubtdesk.domain.identity import Role
from doubtdesk.domain.lifecycle import DoubtStatus
from doubtdesk.models import Answer, Doubt, User

# Test database setup
test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)

PASSWORD = "Passw0rdOK"
BASE_TIME = datetime(2026, 1, 1, 9, 0, 0)


@pytest.fixture(scope="session")
def password_hash() -> str:
    return get_password_hash(PASSWORD)


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def _make_user(db: Session, name: str, email: str, role: Role, password_hash: str) -> User:
    user = User(name=name, email=email, password_hash=password_hash, role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def student(db_session: Session, password_hash: str) -> User:
    return _make_user(db_session, "Alice Student", "alice@doubtdesk.io", Role.STUDENT, password_hash)


@pytest.fixture
def other_student(db_session: Session, password_hash: str) -> User:
    return _make_user(db_session, "Bob Student", "bob@doubtdesk.io", Role.STUDENT, password_hash)


@pytest.fixture
def instructor(db_session: Session, password_hash: str) -> User:
    return _make_user(db_session, "Carol Instructor", "carol@doubtdesk.io", Role.INSTRUCTOR, password_hash)


def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {create_user_token(user)}"}


@pytest.fixture
def student_headers(student: User) -> dict:
    return auth_headers_for(student)


@pytest.fixture
def other_student_headers(other_student: User) -> dict:
    return auth_headers_for(other_student)


@pytest.fixture
def instructor_headers(instructor: User) -> dict:
    return auth_headers_for(instructor)


@pytest.fixture
def make_doubt(db_session: Session):
    """Insert a doubt directly, with an explicit creation time for ordering."""
    counter = {"n": 0}

    def _make(
        author: User,
        title: str = "How do closures work",
        content: str = "Please explain closures in Python with an example.",
        status: DoubtStatus = DoubtStatus.OPEN,
        minutes: int | None = None,
    ) -> Doubt:
        counter["n"] += 1
        offset = counter["n"] if minutes is None else minutes
        doubt = Doubt(
            title=title,
            content=content,
            status=status,
            author_id=author.id,
            created_at=BASE_TIME + timedelta(minutes=offset),
        )
        db_session.add(doubt)
        db_session.commit()
        db_session.refresh(doubt)
        return doubt

    return _make


@pytest.fixture
def make_answer(db_session: Session):
    def _make(doubt: Doubt, author: User, content: str, minutes: int) -> Answer:
        answer = Answer(
            doubt_id=doubt.id,
            author_id=author.id,
            content=content,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        db_session.add(answer)
        db_session.commit()
        db_session.refresh(answer)
        return answer

    return _make


class FakeSuggestionService:
    def __init__(self, text: str = "Rayleigh scattering favours short wavelengths."):
        self.text = text
        self.calls = []

    def suggest(self, title: str, content: str) -> str:
        self.calls.append((title, content))
        return self.text


@pytest.fixture
def fake_suggestions() -> Generator[FakeSuggestionService, None, None]:
    fake = FakeSuggestionService()
    app.dependency_overrides[get_suggestion_service] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_suggestion_service, None)
