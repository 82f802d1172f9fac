# backend/tests/routes/test_user_routes.py
API = "/api/v1/users"


def test_get_profile(client, test_user, auth_headers):
    response = client.get(f"{API}/profile", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == test_user.id


def test_update_profile(client, auth_headers):
    response = client.put(f"{API}/profile", headers=auth_headers, json={"vehicle_color": "Blue"})
    assert response.status_code == 200
    assert response.json()["vehicle_color"] == "Blue"


def test_complete_profile_after_initial_registration(client):
    tokens = client.post(
        "/api/v1/auth/register/initial", json={"email": "later@example.com", "password": "Secret123"}
    ).json()
    headers = {"Authorization": f"Bearer {tokens['access_token']}"}

    response = client.post(
        f"{API}/profile/complete",
        headers=headers,
        json={
            "full_name": "Later Client",
            "phone": "3201112233",
            "document_type": "PASSPORT",
            "document_number": "PA12345",
            "vehicle_plate": "MNO654",
            "vehicle_type": "car",
        },
    )
    assert response.status_code == 200
    assert response.json()["profile_completed"] is True


def test_profile_requires_auth(client):
    assert client.get(f"{API}/profile").status_code == 401
