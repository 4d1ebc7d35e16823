import time

from app.utils.security import is_revoked, revoke_token


def test_login_returns_token_and_updates_last_login(api, db, make_user):
    user = make_user("reception", email="recepcion@optica.test", password="Recepcion123!")

    response = api.post(
        "/api/auth/login",
        data={"username": "recepcion@optica.test", "password": "Recepcion123!"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["access_token"]

    db.expire_all()
    assert db.get(type(user), user.id).last_login is not None


def test_login_with_wrong_password(api, make_user):
    make_user("admin", email="jefe@optica.test", password="Correcta123!")

    response = api.post(
        "/api/auth/login", data={"username": "jefe@optica.test", "password": "otra"}
    )

    assert response.status_code == 401


def test_inactive_user_cannot_login(api, make_user):
    make_user("admin", email="baja@optica.test", password="Secreto123!", is_active=False)

    response = api.post(
        "/api/auth/login", data={"username": "baja@optica.test", "password": "Secreto123!"}
    )

    assert response.status_code == 401


def test_me_returns_session_user(api, auth_headers):
    user, headers = auth_headers("warehouse")

    response = api.get("/api/auth/me", headers=headers)

    assert response.status_code == 200
    assert response.json()["id"] == user.id
    assert response.json()["role"] == "warehouse"


def test_missing_or_invalid_token(api, db):
    assert api.get("/api/auth/me").status_code == 401
    bad = {"Authorization": "Bearer not-a-token"}
    assert api.get("/api/auth/me", headers=bad).status_code == 401


def test_logout_revokes_token(api, auth_headers):
    _, headers = auth_headers("admin")

    response = api.post("/api/auth/logout", headers=headers)

    assert response.status_code == 200
    assert api.get("/api/auth/me", headers=headers).status_code == 401


def test_refresh_issues_a_working_token(api, auth_headers):
    _, headers = auth_headers("reception")

    response = api.post("/api/auth/refresh", headers=headers)

    assert response.status_code == 200
    new_headers = {"Authorization": f"Bearer {response.json()['access_token']}"}
    assert api.get("/api/auth/me", headers=new_headers).status_code == 200


def test_health(api):
    assert api.get("/api/health").json()["status"] == "ok"


def test_expired_revocations_are_forgotten():
    now = time.time()
    revoke_token({"jti": "caducado", "exp": now - 60})
    revoke_token({"jti": "vigente", "exp": now + 600})

    assert not is_revoked("caducado")
    assert is_revoked("vigente")
