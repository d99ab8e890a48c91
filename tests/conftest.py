import os
import tempfile

# Settings are read once at import time, so the environment has to be ready first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_ENV"] = "test"
os.environ["SEED_DATA"] = "false"
os.environ["JWT_SECRET"] = "test-secret"
os.environ["UPLOADS_DIR"] = tempfile.mkdtemp(prefix="lms-uploads-")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from lms_backend.core.security import create_access_token, hash_password
from lms_backend.db.base import Base
from lms_backend.db.session import get_db
from lms_backend.main import app
from lms_backend.models import AccessKey, Course, User


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    yield factory
    Base.metadata.drop_all(engine)
    engine.dispose()


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
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers():
    def _headers(user: User) -> dict[str, str]:
        token = create_access_token(user.id, email=user.email, role=user.role, name=user.name)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture()
def make_user(db):
    counter = {"n": 0}

    def _make(role: str = "student", *, email: str | None = None, password: str = "secret123", **fields) -> User:
        counter["n"] += 1
        user = User(
            email=email or f"{role}{counter['n']}@example.com",
            password_hash=hash_password(password),
            name=fields.pop("name", f"{role.title()} {counter['n']}"),
            role=role,
            cart=fields.pop("cart", []),
            enrolled_courses=fields.pop("enrolled_courses", []),
            **fields,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture()
def student(make_user) -> User:
    return make_user("student", name="Stu Dent")


@pytest.fixture()
def instructor(make_user) -> User:
    return make_user("instructor", name="Ina Structor")


@pytest.fixture()
def admin(make_user) -> User:
    return make_user("admin", name="Ada Min")


@pytest.fixture()
def make_course(db):
    def _make(title: str = "Python Programming", **fields) -> Course:
        course = Course(
            title=title,
            description=fields.pop("description", "A thorough introduction to the subject."),
            instructor=fields.pop("instructor", "David Lee"),
            duration=fields.pop("duration", "10 weeks"),
            level=fields.pop("level", "Beginner"),
            price=fields.pop("price", "$89"),
            **fields,
        )
        db.add(course)
        db.commit()
        return course

    return _make


@pytest.fixture()
def course(make_course) -> Course:
    return make_course()


@pytest.fixture()
def make_key(db):
    def _make(course_id: str, key: str = "PYTHON-2024-M3N4", **fields) -> AccessKey:
        access_key = AccessKey(
            key=key,
            course_id=course_id,
            max_uses=fields.pop("max_uses", 100),
            current_uses=fields.pop("current_uses", 0),
            is_active=fields.pop("is_active", True),
            **fields,
        )
        db.add(access_key)
        db.commit()
        return access_key

    return _make
