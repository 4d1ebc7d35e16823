NEW_USER = {
    "email": "nuevo@optica.test",
    "password": "Nuevo12345",
    "first_name": "Nuevo",
    "last_name": "Empleado",
    "role": "warehouse",
}


def test_only_admin_reaches_users(api, auth_headers):
    _, reception = auth_headers("reception")
    _, admin = auth_headers("admin")

    assert api.get("/api/users/", headers=reception).status_code == 403
    assert api.get("/api/users/", headers=admin).status_code == 200


def test_create_user_hashes_password_and_can_login(api, auth_headers):
    _, headers = auth_headers("admin")

    created = api.post("/api/users/", json=NEW_USER, headers=headers)

    assert created.status_code == 201
    body = created.json()
    assert "password" not in body and "password_hash" not in body
    assert body["role_label"] == "Almacén"
    assert body["role_color"] == "green"

    login = api.post(
        "/api/auth/login",
        data={"username": NEW_USER["email"], "password": NEW_USER["password"]},
    )
    assert login.status_code == 200


def test_duplicate_email_conflicts(api, auth_headers):
    _, headers = auth_headers("admin")
    api.post("/api/users/", json=NEW_USER, headers=headers)
    assert api.post("/api/users/", json=NEW_USER, headers=headers).status_code == 409


def test_role_filter(api, auth_headers, make_user):
    _, headers = auth_headers("admin")
    make_user("reception")
    make_user("warehouse")

    body = api.get("/api/users/", params={"role": "reception"}, headers=headers).json()

    assert [r["role"] for r in body["rows"]] == ["reception"]


def test_admin_cannot_deactivate_self(api, auth_headers):
    admin, headers = auth_headers("admin")

    assert api.delete(f"/api/users/{admin.id}", headers=headers).status_code == 400
    assert api.post(f"/api/users/{admin.id}/toggle", headers=headers).status_code == 400
    response = api.put(f"/api/users/{admin.id}", json={"is_active": False}, headers=headers)
    assert response.status_code == 400


def test_soft_delete_and_toggle_other_user(api, auth_headers, make_user):
    _, headers = auth_headers("admin")
    other = make_user("reception")

    assert api.delete(f"/api/users/{other.id}", headers=headers).status_code == 200
    detail = api.get(f"/api/users/{other.id}", headers=headers).json()
    assert detail["is_active"] is False

    toggled = api.post(f"/api/users/{other.id}/toggle", headers=headers).json()
    assert toggled["is_active"] is True


def test_update_password(api, auth_headers, make_user):
    _, headers = auth_headers("admin")
    other = make_user("reception", email="cambio@optica.test")

    api.put(f"/api/users/{other.id}", json={"password": "Cambiada123"}, headers=headers)

    login = api.post(
        "/api/auth/login", data={"username": "cambio@optica.test", "password": "Cambiada123"}
    )
    assert login.status_code == 200
