import pytest
from sqlalchemy import func, select

from lms_backend.models import CourseContent

SECTIONS = [
    {
        "sectionTitle": "Python Basics",
        "lessons": [
            {"title": "Installing Python", "type": "video", "duration": "10 min", "url": "https://example.com/v1"},
            {"title": "Cheat Sheet", "type": "download", "url": "https://example.com/f1"},
        ],
    }
]


@pytest.fixture()
def content(db, course):
    row = CourseContent(course_id=course.id, title=course.title, sections=SECTIONS)
    db.add(row)
    db.commit()
    return row


def test_instructor_creates_content(client, instructor, course, auth_headers):
    resp = client.post(
        "/api/course-content",
        headers=auth_headers(instructor),
        json={"courseId": course.id, "title": "Python Programming", "sections": SECTIONS},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    assert data["courseId"] == course.id
    assert data["sections"][0]["sectionTitle"] == "Python Basics"
    assert data["sections"][0]["lessons"][1]["type"] == "download"


def test_second_content_for_course_conflicts(client, admin, course, content, auth_headers):
    resp = client.post(
        "/api/course-content",
        headers=auth_headers(admin),
        json={"courseId": course.id, "title": "Again", "sections": []},
    )
    assert resp.status_code == 409
    assert resp.json()["code"] == "COURSE_CONTENT_EXISTS"


def test_lesson_type_is_validated(client, admin, course, auth_headers):
    sections = [{"sectionTitle": "S", "lessons": [{"title": "L", "type": "podcast"}]}]
    resp = client.post(
        "/api/course-content",
        headers=auth_headers(admin),
        json={"courseId": course.id, "title": "T", "sections": sections},
    )
    assert resp.status_code == 400


def test_unenrolled_student_is_denied(client, student, course, content, auth_headers):
    resp = client.get(f"/api/course-content/course/{course.id}", headers=auth_headers(student))
    assert resp.status_code == 403
    assert resp.json()["code"] == "COURSE_ACCESS_DENIED"


def test_enrolled_student_reads_content(client, make_user, course, content, auth_headers):
    learner = make_user("student", enrolled_courses=[course.id])
    resp = client.get(f"/api/course-content/course/{course.id}", headers=auth_headers(learner))
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["id"] == content.id


def test_redeemed_key_unlocks_content(client, student, course, content, make_key, auth_headers):
    make_key(course.id)
    headers = auth_headers(student)
    assert client.get(f"/api/course-content/course/{course.id}", headers=headers).status_code == 403

    resp = client.post(
        "/api/access-keys/validate",
        json={"key": "PYTHON-2024-M3N4", "courseId": course.id, "userId": student.id},
    )
    assert resp.status_code == 200

    assert client.get(f"/api/course-content/course/{course.id}", headers=headers).status_code == 200


def test_staff_read_without_enrollment(client, instructor, course, content, auth_headers):
    resp = client.get(f"/api/course-content/course/{course.id}", headers=auth_headers(instructor))
    assert resp.status_code == 200


def test_missing_content_is_not_found(client, instructor, course, auth_headers):
    resp = client.get(f"/api/course-content/course/{course.id}", headers=auth_headers(instructor))
    assert resp.status_code == 404
    assert resp.json()["code"] == "COURSE_CONTENT_NOT_FOUND"


def test_update_content(client, instructor, content, auth_headers):
    resp = client.put(
        f"/api/course-content/{content.id}",
        headers=auth_headers(instructor),
        json={"title": "Python Programming (2nd ed.)"},
    )
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert data["title"] == "Python Programming (2nd ed.)"
    assert len(data["sections"]) == 1


def test_only_admin_deletes_content(client, instructor, admin, content, auth_headers):
    assert client.delete(f"/api/course-content/{content.id}", headers=auth_headers(instructor)).status_code == 403

    resp = client.delete(f"/api/course-content/{content.id}", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert client.get(f"/api/course-content/{content.id}", headers=auth_headers(admin)).status_code == 404


def test_blank_course_id_is_rejected(client, db, admin, auth_headers):
    resp = client.post(
        "/api/course-content",
        headers=auth_headers(admin),
        json={"courseId": "   ", "title": "Python Programming", "sections": SECTIONS},
    )
    assert resp.status_code == 400
    assert "courseId" in {err["field"] for err in resp.json()["errors"]}
    assert db.execute(select(func.count()).select_from(CourseContent)).scalar_one() == 0


def test_blank_title_update_is_rejected(client, instructor, content, auth_headers):
    resp = client.put(f"/api/course-content/{content.id}", headers=auth_headers(instructor), json={"title": "  "})
    assert resp.status_code == 400
