# backend/tests/routes/test_rating_routes.py
from tests.helpers import make_reservation

API = "/api/v1/ratings"


def test_rate_and_read_back(client, db, auth_headers, test_user, test_service, test_worker):
    reservation = make_reservation(db, test_user, test_service, worker=test_worker)

    response = client.post(
        API,
        headers=auth_headers,
        json={"reservation_id": reservation.id, "service_score": 5, "worker_score": 4},
    )
    assert response.status_code == 201
    rating = response.json()

    assert client.get(f"{API}/{rating['id']}", headers=auth_headers).json()["worker_score"] == 4
    assert client.get(API, headers=auth_headers).json()["total"] == 1
    assert client.get(f"/api/v1/workers/{test_worker.id}").json()["average_rating"] == 4.0

    again = client.post(
        API, headers=auth_headers, json={"reservation_id": reservation.id, "service_score": 3}
    )
    assert again.status_code == 422
    assert again.json()["detail"]["code"] == "ALREADY_RATED"


def test_update_rating(client, db, auth_headers, test_user, test_service):
    reservation = make_reservation(db, test_user, test_service)
    rating = client.post(
        API, headers=auth_headers, json={"reservation_id": reservation.id, "service_score": 2}
    ).json()

    response = client.put(
        f"{API}/{rating['id']}", headers=auth_headers, json={"service_comment": "Better on second look"}
    )
    assert response.status_code == 200
    assert response.json()["service_comment"] == "Better on second look"


def test_invalid_score(client, db, auth_headers, test_user, test_service):
    reservation = make_reservation(db, test_user, test_service)
    response = client.post(
        API, headers=auth_headers, json={"reservation_id": reservation.id, "service_score": 9}
    )
    assert response.status_code == 400


def test_other_user_rating_is_forbidden(client, db, auth_headers, other_auth_headers, test_user, test_service):
    reservation = make_reservation(db, test_user, test_service)
    response = client.post(
        API, headers=other_auth_headers, json={"reservation_id": reservation.id, "service_score": 4}
    )
    assert response.status_code == 403


def test_service_stats(client, db, auth_headers, test_user, test_service):
    reservation = make_reservation(db, test_user, test_service)
    client.post(API, headers=auth_headers, json={"reservation_id": reservation.id, "service_score": 4})

    stats = client.get(f"{API}/services/{test_service.id}/stats").json()
    assert stats["total"] == 1
    assert stats["distribution"]["4"] == 1
