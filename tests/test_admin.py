from lms_backend.models import UserCourseAccess


def test_dashboard_stats(client, db, admin, make_user, make_course, make_key, auth_headers):
    make_user("student")
    make_user("student")
    make_user("instructor")
    first = make_course("Python Programming", students=10)
    make_course("Web Design Basic to advance", students=5)
    key = make_key(first.id)
    db.add(UserCourseAccess(user_id=admin.id, course_id=first.id, access_key_id=key.id, key=key.key))
    db.commit()

    resp = client.get("/api/admin/dashboard/stats", headers=auth_headers(admin))
    assert resp.status_code == 200, resp.text
    assert resp.json()["data"]["stats"] == {
        "totalUsers": 4,
        "students": 2,
        "instructors": 1,
        "admins": 1,
        "totalCourses": 2,
        "totalEnrollments": 15,
        "totalAccessKeys": 1,
        "totalRedemptions": 1,
    }


def test_dashboard_is_admin_only(client, instructor, auth_headers):
    resp = client.get("/api/admin/dashboard/stats", headers=auth_headers(instructor))
    assert resp.status_code == 403
    assert resp.json()["message"] == "Access denied. Admin privileges required."

    assert client.get("/api/admin/dashboard/stats").status_code == 401


def test_recent_activities_honours_limit(client, admin, make_user, make_course, auth_headers):
    make_user("student")
    make_course("Python Programming")
    make_course("Web Design Basic to advance")

    resp = client.get("/api/admin/dashboard/activities", headers=auth_headers(admin), params={"limit": 1})
    assert resp.status_code == 200, resp.text
    data = resp.json()["data"]
    assert len(data["recentUsers"]) == 1
    assert len(data["recentCourses"]) == 1
    assert data["recentCourses"][0]["title"] == "Web Design Basic to advance"


def test_recent_activities_limit_is_bounded(client, admin, auth_headers):
    resp = client.get("/api/admin/dashboard/activities", headers=auth_headers(admin), params={"limit": 0})
    assert resp.status_code == 400
