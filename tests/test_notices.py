from datetime import timedelta

import pytest

from lms_backend.core.security import now_utc
from lms_backend.models import Notice


@pytest.fixture()
def notices(db):
    base = now_utc() - timedelta(hours=1)
    rows = [
        Notice(title="Old low", content="c", priority=1, created_at=base),
        Notice(title="New low", content="c", priority=1, created_at=base + timedelta(minutes=10)),
        Notice(title="High", content="c", priority=3, created_at=base + timedelta(minutes=5)),
        Notice(title="Hidden", content="c", priority=9, is_active=False, created_at=base + timedelta(minutes=20)),
    ]
    db.add_all(rows)
    db.commit()
    return rows


def test_public_list_orders_by_priority_then_recency(client, notices):
    resp = client.get("/api/notices")
    assert resp.status_code == 200
    body = resp.json()
    assert body["results"] == 3
    assert [n["title"] for n in body["data"]["notices"]] == ["High", "New low", "Old low"]


def test_admin_list_includes_inactive_newest_first(client, admin, notices, auth_headers):
    resp = client.get("/api/notices/admin/all", headers=auth_headers(admin))
    assert resp.status_code == 200
    assert [n["title"] for n in resp.json()["data"]["notices"]] == ["Hidden", "New low", "High", "Old low"]


def test_admin_list_is_admin_only(client, instructor, auth_headers):
    assert client.get("/api/notices/admin/all", headers=auth_headers(instructor)).status_code == 403


def test_create_notice_records_author(client, admin, auth_headers):
    resp = client.post(
        "/api/notices",
        headers=auth_headers(admin),
        json={"title": "Maintenance", "content": "Down for an hour on Sunday", "type": "warning", "priority": 2},
    )
    assert resp.status_code == 201, resp.text
    notice = resp.json()["data"]["notice"]
    assert notice["type"] == "warning"
    assert notice["isActive"] is True
    assert notice["createdBy"] == admin.id
    assert notice["createdByName"] == "Ada Min"


def test_create_notice_rejects_unknown_type(client, admin, auth_headers):
    resp = client.post(
        "/api/notices",
        headers=auth_headers(admin),
        json={"title": "Odd", "content": "x", "type": "shout"},
    )
    assert resp.status_code == 400


def test_students_cannot_post_notices(client, student, auth_headers):
    resp = client.post("/api/notices", headers=auth_headers(student), json={"title": "Hi", "content": "x"})
    assert resp.status_code == 403


def test_update_and_delete_notice(client, admin, notices, auth_headers):
    headers = auth_headers(admin)
    target = notices[0]

    resp = client.put(f"/api/notices/{target.id}", headers=headers, json={"priority": 10, "isActive": False})
    assert resp.status_code == 200, resp.text
    notice = resp.json()["data"]["notice"]
    assert notice["priority"] == 10
    assert notice["isActive"] is False
    assert notice["updatedBy"] == admin.id
    assert notice["updatedByName"] == "Ada Min"

    resp = client.delete(f"/api/notices/{target.id}", headers=headers)
    assert resp.status_code == 200

    resp = client.get(f"/api/notices/{target.id}")
    assert resp.status_code == 404
    assert resp.json()["code"] == "NOTICE_NOT_FOUND"
