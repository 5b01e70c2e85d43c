import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_DATA", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("ADMIN_API_KEY", "test-admin-key")

import pytest
from fastapi.testclient import TestClient
from httpx import Client
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import create_access_token
from app.db.base import Base
from app.db.session import get_db
from app.main import app
from app.models import Cohort, CohortMember, Course, User

RUN_INTEGRATION = os.getenv("RUN_INTEGRATION") == "1"
BASE_URL = os.getenv("BASE_URL", "http://localhost:4000")
ADMIN_API_KEY = os.environ["ADMIN_API_KEY"]


@pytest.fixture(scope="session")
def base_url() -> str:
    return BASE_URL


@pytest.fixture(scope="session")
def live_client(base_url: str):
    with Client(base_url=base_url, timeout=20.0) as c:
        yield c


@pytest.fixture(scope="session")
def integration_enabled() -> bool:
    return RUN_INTEGRATION


@pytest.fixture()
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def db(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_API_KEY}


@pytest.fixture()
def make_user(db):
    def _make(email: str = "learner@example.com", full_name: str = "Learner", status: str = "active") -> User:
        user = User(email=email, full_name=full_name, status=status)
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture()
def make_course(db):
    def _make(course_name: str = "Intro To Python", slug: str | None = None, price_cents: int = 0, **kwargs) -> Course:
        course = Course(
            course_name=course_name,
            slug=slug or course_name.lower().replace(" ", "-"),
            price_cents=price_cents,
            **kwargs,
        )
        db.add(course)
        db.commit()
        return course

    return _make


@pytest.fixture()
def make_cohort(db):
    def _make(course: Course, name: str = "Batch 1", is_active: bool = True) -> Cohort:
        cohort = Cohort(course_id=course.id, name=name, is_active=is_active)
        db.add(cohort)
        db.commit()
        return cohort

    return _make


@pytest.fixture()
def add_member(db):
    def _add(cohort: Cohort, email: str | None = None, user: User | None = None, status: str = "active") -> CohortMember:
        member = CohortMember(cohort_id=cohort.id, email=email, user_id=user.id if user else None, status=status)
        db.add(member)
        db.commit()
        return member

    return _add


@pytest.fixture()
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(str(user.id))}"}

    return _headers
