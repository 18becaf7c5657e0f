import hashlib

from portfolio.extensions import store
from portfolio.utils.auth import hash_password, verify_password


def _legacy_hash(password, salt="abcdef0123456789"):
    derived = hashlib.scrypt(password.encode(), salt=salt.encode(), n=16384, r=8, p=1, dklen=64)
    return f"{salt}:{derived.hex()}"


def test_verify_password_formats():
    assert verify_password("s3cret-pass", hash_password("s3cret-pass"))
    assert not verify_password("wrong", hash_password("s3cret-pass"))
    assert verify_password("legacy-pass", _legacy_hash("legacy-pass"))
    assert not verify_password("nope", _legacy_hash("legacy-pass"))
    assert verify_password("plain", "plain")
    assert not verify_password("plain", None)
    assert not verify_password(None, "plain")


def test_login_returns_token(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin12345"})
    assert response.status_code == 200
    token = response.get_json()["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json() == {"role": "admin"}


def test_login_rejects_wrong_credentials(client):
    response = client.post("/api/auth/login", json={"username": "admin", "password": "wrong-password"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid credentials"

    response = client.post("/api/auth/login", json={"username": "someone", "password": "admin12345"})
    assert response.status_code == 401


def test_login_validates_body(client):
    response = client.post("/api/auth/login", json={"username": "ad"})
    assert response.status_code == 400
    body = response.get_json()
    assert body["message"] == "Validation error"
    assert {error["field"] for error in body["errors"]} == {"username", "password"}


def test_configured_password_resets_stored_hash(client, read_meta):
    with store.mutation() as data:
        data["adminPasswordHash"] = hash_password("forgotten-password")

    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin12345"})

    assert response.status_code == 200
    assert verify_password("admin12345", read_meta()["adminPasswordHash"])


def test_protected_routes_require_token(client):
    assert client.get("/api/auth/me").status_code == 401
    response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid or expired token"


def test_change_password(client, auth_headers, read_meta):
    response = client.put(
        "/api/auth/password",
        json={"currentPassword": "admin12345", "newPassword": "brand-new-pass"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert verify_password("brand-new-pass", read_meta()["adminPasswordHash"])

    login = client.post("/api/auth/login", json={"username": "admin", "password": "brand-new-pass"})
    assert login.status_code == 200


def test_change_password_rejects_bad_current_password(client, auth_headers):
    response = client.put(
        "/api/auth/password",
        json={"currentPassword": "not-it", "newPassword": "brand-new-pass"},
        headers=auth_headers,
    )
    assert response.status_code == 401
    assert response.get_json()["message"] == "Current password is incorrect"


def test_change_password_rejects_same_password(client, auth_headers):
    response = client.put(
        "/api/auth/password",
        json={"currentPassword": "admin12345", "newPassword": "admin12345"},
        headers=auth_headers,
    )
    assert response.status_code == 400


def test_login_rate_limit(app, client):
    app.config["RATELIMIT_ENABLED"] = True
    payload = {"username": "admin", "password": "wrong-password"}
    statuses = [client.post("/api/auth/login", json=payload).status_code for _ in range(6)]

    assert statuses[:5] == [401] * 5
    assert statuses[5] == 429
    assert client.post("/api/auth/login", json=payload).get_json()["message"] == \
        "Too many login attempts, please try again later"


def test_login_with_current_hash_does_not_write(client, monkeypatch):
    def _fail():
        raise OSError("disk full")

    monkeypatch.setattr(store, "save_data", _fail)

    response = client.post("/api/auth/login", json={"username": "admin", "password": "admin12345"})

    assert response.status_code == 200
    assert response.get_json()["token"]
