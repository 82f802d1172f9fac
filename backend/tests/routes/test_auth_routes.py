# backend/tests/routes/test_auth_routes.py
API = "/api/v1/auth"

REGISTRATION = {
    "email": "route.client@example.com",
    "password": "Secret123",
    "full_name": "Route Client",
    "phone": "3157654321",
    "document_type": "CC",
    "document_number": "5050505050",
    "vehicle_plate": "GHI321",
    "vehicle_type": "pickup",
}


def test_register_login_refresh_logout(client):
    response = client.post(f"{API}/register", json=REGISTRATION)
    assert response.status_code == 201
    body = response.json()
    assert body["profile_completed"] is True

    response = client.post(
        f"{API}/login", json={"email": REGISTRATION["email"], "password": REGISTRATION["password"]}
    )
    assert response.status_code == 200
    tokens = response.json()

    me = client.get(f"{API}/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == REGISTRATION["email"]
    assert "hashed_password" not in me.json()

    refreshed = client.post(f"{API}/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert refreshed.status_code == 200
    assert refreshed.json()["access_token"]

    assert client.post(f"{API}/logout", json={"refresh_token": tokens["refresh_token"]}).status_code == 200
    again = client.post(f"{API}/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert again.status_code == 401


def test_register_duplicate_email_conflict(client, test_user):
    response = client.post(f"{API}/register", json={**REGISTRATION, "email": test_user.email})
    assert response.status_code == 409
    assert response.json()["detail"]["code"] == "EMAIL_TAKEN"


def test_register_invalid_plate(client):
    response = client.post(f"{API}/register", json={**REGISTRATION, "vehicle_plate": "1234"})
    assert response.status_code == 400


def test_register_rejects_unknown_fields(client):
    response = client.post(f"{API}/register", json={**REGISTRATION, "is_admin": True})
    assert response.status_code == 422


def test_register_initial(client):
    response = client.post(
        f"{API}/register/initial", json={"email": "first.step@example.com", "password": "Secret123"}
    )
    assert response.status_code == 201
    assert response.json()["profile_completed"] is False


def test_login_error_statuses(client, test_user, test_password):
    assert client.post(f"{API}/login", json={"email": "ghost@example.com", "password": "x" * 8}).status_code == 404

    wrong = client.post(f"{API}/login", json={"email": test_user.email, "password": "WrongPass1"})
    assert wrong.status_code == 401
    assert wrong.headers["www-authenticate"] == "Bearer"


def test_me_requires_token(client):
    response = client.get(f"{API}/me")
    assert response.status_code == 401


def test_me_with_bad_token(client):
    response = client.get(f"{API}/me", headers={"Authorization": "Bearer garbage"})
    assert response.status_code == 401


def test_inactive_user_is_forbidden(client, db, test_user, auth_headers):
    test_user.is_active = False
    db.commit()
    assert client.get(f"{API}/me", headers=auth_headers).status_code == 403
