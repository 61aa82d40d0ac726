# File: tests/test_users_api.py

from app.models.user import User


def test_users_routes_require_auth(client):
    assert client.get("/api/v1/users/").status_code == 401
    assert client.get("/api/v1/users/me").status_code == 401
    assert client.delete("/api/v1/users/1").status_code == 401


def test_invalid_token_is_rejected(client):
    resp = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_list_and_read_users(client, make_user, auth_headers):
    ada = make_user()
    grace = make_user(name="Grace Hopper", email="grace@example.com")
    headers = auth_headers()

    resp = client.get("/api/v1/users/", headers=headers)
    assert resp.status_code == 200
    assert [u["email"] for u in resp.json()] == ["ada@example.com", "grace@example.com"]

    resp = client.get("/api/v1/users/me", headers=headers)
    assert resp.json()["customer_id"] == ada.customer_id

    resp = client.get(f"/api/v1/users/{grace.customer_id}", headers=headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "Grace Hopper"

    assert client.get("/api/v1/users/unknown-id", headers=headers).status_code == 404


def test_update_profile_with_avatar(client, make_user, auth_headers, image_bytes, uploads):
    make_user()
    headers = auth_headers()

    resp = client.put(
        "/api/v1/users/me/profile",
        data={"name": "Ada King", "email": "ada@example.com", "phone": "555-0100"},
        files={"avatar": ("me.png", image_bytes(), "image/png")},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["name"] == "Ada King"
    assert body["phone"] == "555-0100"
    assert body["avatar"].startswith("uploads/images/avatars/")
    assert uploads.file_exists(body["avatar"])


def test_update_profile_duplicate_email(client, make_user, auth_headers, db):
    ada = make_user()
    make_user(name="Grace Hopper", email="grace@example.com")
    headers = auth_headers()

    resp = client.put(
        "/api/v1/users/me/profile",
        data={"name": "Ada King", "email": "grace@example.com"},
        headers=headers,
    )
    assert resp.status_code == 422
    assert resp.json()["detail"][0]["loc"] == ["email"]

    db.expire_all()
    stored = db.get(User, ada.id)
    assert stored.name == "Ada Lovelace"


def test_update_profile_rejects_bad_image(client, make_user, auth_headers):
    make_user()
    resp = client.put(
        "/api/v1/users/me/profile",
        data={"name": "Ada", "email": "ada@example.com"},
        files={"avatar": ("me.png", b"not an image", "image/png")},
        headers=auth_headers(),
    )
    assert resp.status_code == 422
    assert resp.json()["detail"][0]["loc"] == ["avatar"]


def test_update_profile_invalid_email(client, make_user, auth_headers):
    make_user()
    resp = client.put(
        "/api/v1/users/me/profile",
        data={"name": "Ada", "email": "not-an-email"},
        headers=auth_headers(),
    )
    assert resp.status_code == 422


def test_change_password(client, make_user, auth_headers, default_password):
    make_user()
    headers = auth_headers()

    resp = client.put(
        "/api/v1/users/me/password",
        json={
            "current_password": "wrong-password",
            "new_password": "brand-new-secret",
            "confirm_password": "brand-new-secret",
        },
        headers=headers,
    )
    assert resp.status_code == 422
    assert "Current password is incorrect" in resp.json()["detail"]

    resp = client.put(
        "/api/v1/users/me/password",
        json={
            "current_password": default_password,
            "new_password": "brand-new-secret",
            "confirm_password": "something-else",
        },
        headers=headers,
    )
    assert resp.status_code == 422
    assert "do not match" in resp.json()["detail"]

    resp = client.put(
        "/api/v1/users/me/password",
        json={
            "current_password": default_password,
            "new_password": "brand-new-secret",
            "confirm_password": "brand-new-secret",
        },
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.json() == {"updated": True}

    auth_headers(password="brand-new-secret")


def test_update_profile_without_phone_keeps_phone(client, make_user, auth_headers):
    make_user(phone="555-0100")
    resp = client.put(
        "/api/v1/users/me/profile",
        data={"name": "Ada King", "email": "ada@example.com"},
        headers=auth_headers(),
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["name"] == "Ada King"
    assert resp.json()["phone"] == "555-0100"


def test_delete_own_account(client, make_user, auth_headers):
    ada = make_user()
    headers = auth_headers()

    assert client.delete(f"/api/v1/users/{ada.id}", headers=headers).status_code == 204
    # the token now points at a deleted user
    assert client.get("/api/v1/users/me", headers=headers).status_code == 401


def test_cannot_delete_other_users(client, make_user, auth_headers, db):
    make_user()
    grace = make_user(name="Grace Hopper", email="grace@example.com")
    headers = auth_headers()

    resp = client.delete(f"/api/v1/users/{grace.id}", headers=headers)
    assert resp.status_code == 403

    db.expire_all()
    assert db.get(User, grace.id) is not None
    assert client.delete("/api/v1/users/9999", headers=headers).status_code == 403
