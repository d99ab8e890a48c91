from sqlalchemy import func, select

from lms_backend.db.seed import seed_if_needed
from lms_backend.models import AccessKey, Course, CourseContent, Notice, User
from lms_backend.scripts import create_user, sync_access_keys


def _count(db, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def test_seed_populates_empty_database_once(db):
    seed_if_needed(db)
    seed_if_needed(db)

    assert _count(db, User) == 3
    assert _count(db, Course) == 3
    assert _count(db, AccessKey) == 3
    assert _count(db, CourseContent) == 3
    assert _count(db, Notice) == 3


def test_seeded_key_enrolls_seeded_student(client, db):
    seed_if_needed(db)
    john = db.execute(select(User).where(User.email == "john@example.com")).scalars().one()
    web_design = db.execute(select(Course).where(Course.title == "Web Design Basic to advance")).scalars().one()

    login = client.post("/api/auth/login", json={"email": "john@example.com", "password": "student123"})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}

    resp = client.post(
        "/api/access-keys/validate",
        json={"key": "WEBDESIGN-2024-A1B2", "courseId": web_design.id, "userId": john.id},
    )
    assert resp.status_code == 200, resp.text

    profile = client.get("/api/auth/profile", headers=headers).json()["data"]["user"]
    assert profile["enrolledCourses"] == [web_design.id]

    content = client.get(f"/api/course-content/course/{web_design.id}", headers=headers)
    assert content.status_code == 200
    assert content.json()["data"]["sections"][0]["sectionTitle"] == "Introduction to Web Design"


def test_create_user_script_creates_and_enrolls(db, session_factory, course, monkeypatch):
    monkeypatch.setattr(create_user, "SessionLocal", session_factory)

    code = create_user.main(
        ["--email", "Coach@Example.com", "--password", "secret123", "--role", "instructor", "--course-id", course.id]
    )
    assert code == 0

    db.expire_all()
    user = db.execute(select(User).where(User.email == "coach@example.com")).scalars().one()
    assert user.role == "instructor"
    assert user.name == "coach"
    assert user.enrolled_courses == [course.id]


def test_create_user_script_rejects_unknown_course(db, session_factory, monkeypatch):
    monkeypatch.setattr(create_user, "SessionLocal", session_factory)

    code = create_user.main(["--email", "x@example.com", "--password", "secret123", "--course-id", "missing"])
    assert code == 3
    assert _count(db, User) == 0


def test_sync_access_keys_dry_run_then_write(db, session_factory, make_course, make_key, monkeypatch):
    monkeypatch.setattr(sync_access_keys, "SessionLocal", session_factory)
    web = make_course("Web Design Basic to advance")
    python = make_course("Python Programming")
    make_key(python.id, key="PYTHON-2024-M3N4", current_uses=42)

    assert sync_access_keys.main(["--dry-run"]) == 0
    assert _count(db, AccessKey) == 1

    assert sync_access_keys.main(["--max-uses", "50"]) == 0
    db.expire_all()
    keys = {k.key: k for k in db.execute(select(AccessKey)).scalars().all()}
    assert set(keys) == {"WEBDESIGN-2024-A1B2", "PYTHON-2024-M3N4"}
    assert keys["WEBDESIGN-2024-A1B2"].course_id == web.id
    assert keys["PYTHON-2024-M3N4"].current_uses == 0
    assert keys["PYTHON-2024-M3N4"].max_uses == 50
