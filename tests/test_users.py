def test_admin_lists_users_by_role(client, admin, student, instructor, auth_headers):
    headers = auth_headers(admin)

    resp = client.get("/api/users", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["results"] == 3

    resp = client.get("/api/users", headers=headers, params={"role": "student"})
    users = resp.json()["data"]["users"]
    assert [u["id"] for u in users] == [student.id]


def test_non_admin_cannot_list_users(client, instructor, auth_headers):
    assert client.get("/api/users", headers=auth_headers(instructor)).status_code == 403


def test_user_reads_self_but_not_others(client, make_user, auth_headers):
    alice = make_user("student")
    bob = make_user("student")

    assert client.get(f"/api/users/{alice.id}", headers=auth_headers(alice)).status_code == 200
    assert client.get(f"/api/users/{bob.id}", headers=auth_headers(alice)).status_code == 403


def test_student_cannot_promote_self(client, db, student, auth_headers):
    resp = client.put(f"/api/users/{student.id}", headers=auth_headers(student), json={"role": "admin", "bio": "x"})
    assert resp.status_code == 403

    db.expire_all()
    assert student.role == "student"
    assert student.bio == ""


def test_admin_changes_role_and_email(client, admin, student, auth_headers):
    resp = client.put(
        f"/api/users/{student.id}",
        headers=auth_headers(admin),
        json={"role": "instructor", "email": "New.Address@example.com"},
    )
    assert resp.status_code == 200, resp.text
    user = resp.json()["data"]["user"]
    assert user["role"] == "instructor"
    assert user["email"] == "new.address@example.com"


def test_email_change_conflicts_with_existing_account(client, make_user, auth_headers):
    alice = make_user("student", email="alice@example.com")
    make_user("student", email="bob@example.com")

    resp = client.put(f"/api/users/{alice.id}", headers=auth_headers(alice), json={"email": "bob@example.com"})
    assert resp.status_code == 409
    assert resp.json()["code"] == "EMAIL_ALREADY_REGISTERED"


def test_password_change_allows_new_login(client, student, auth_headers):
    resp = client.put(f"/api/users/{student.id}", headers=auth_headers(student), json={"password": "brandnew1"})
    assert resp.status_code == 200

    resp = client.post("/api/auth/login", json={"email": student.email, "password": "brandnew1"})
    assert resp.status_code == 200


def test_admin_cannot_delete_self(client, admin, auth_headers):
    resp = client.delete(f"/api/users/{admin.id}", headers=auth_headers(admin))
    assert resp.status_code == 400
    assert resp.json()["code"] == "CANNOT_DELETE_SELF"


def test_admin_deletes_user(client, admin, student, auth_headers):
    headers = auth_headers(admin)
    resp = client.delete(f"/api/users/{student.id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["message"] == "User deleted successfully"

    resp = client.get(f"/api/users/{student.id}", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["code"] == "USER_NOT_FOUND"
