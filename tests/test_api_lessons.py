import time

import pytest

from surfshop.db import models

from .conftest import auth_headers, create_account


def lesson_payload(**overrides):
    payload = {"package_id": 1, "date": "2024-06-01", "time": "09:00"}
    payload.update(overrides)
    return payload


@pytest.fixture()
def riders(api_client):
    client, SessionLocal = api_client
    with SessionLocal() as session:
        first = create_account(session, "a@example.com", "Rider A")
        second = create_account(session, "b@example.com", "Rider B")
        admin = create_account(session, "admin@example.com", "Admin", is_admin=True)
    return client, SessionLocal, first, second, admin


def test_slot_is_freed_by_cancellation(riders):
    client, SessionLocal, first, second, _ = riders

    created = client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(first))
    assert created.status_code == 201
    body = created.json()
    assert body["status"] == "pending"
    assert body["date"] == "2024-06-01"
    assert body["price"] == 75
    assert body["hours"] == 1

    taken = client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(second))
    assert taken.status_code == 409
    assert taken.json() == {"error": "This time slot is already booked"}

    cancelled = client.post(f"/api/v1/lessons/{body['id']}/cancel", headers=auth_headers(first))
    assert cancelled.status_code == 200
    assert cancelled.json()["status"] == "cancelled"

    rebooked = client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(second))
    assert rebooked.status_code == 201

    with SessionLocal() as session:
        statuses = sorted(lesson.status.value for lesson in session.query(models.Lesson).all())
    assert statuses == ["cancelled", "pending"]


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"date": "2024-06-03"}, "Saturdays or Sundays"),
        ({"time": "07:00"}, "between 8am and 4pm"),
        ({"time": "15:30"}, "between 8am and 4pm"),
        ({"date": "06/01/2024"}, "YYYY-MM-DD"),
        ({"price": 10}, "Price does not match"),
        ({"package_id": 99}, "Unknown lesson package"),
    ],
)
def test_rejects_invalid_requests(riders, overrides, message):
    client, SessionLocal, first, *_ = riders

    response = client.post("/api/v1/lessons", json=lesson_payload(**overrides), headers=auth_headers(first))

    assert response.status_code == 400
    assert message in response.json()["error"]
    with SessionLocal() as session:
        assert session.query(models.Lesson).count() == 0


def test_missing_field_is_reported(riders):
    client, _, first, *_ = riders

    response = client.post(
        "/api/v1/lessons", json={"package_id": 1, "date": "2024-06-01"}, headers=auth_headers(first)
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required field: time"}


def test_authentication_and_admin_gate(riders):
    client, _, first, _, admin = riders

    anonymous = client.post("/api/v1/lessons", json=lesson_payload())
    assert anonymous.status_code == 401
    assert anonymous.json() == {"error": "Not authorized, no token"}

    bad_token = client.get("/api/v1/lessons/my", headers={"Authorization": "Bearer nope"})
    assert bad_token.status_code == 401

    assert client.get("/api/v1/lessons/all", headers=auth_headers(first)).status_code == 403
    assert client.get("/api/v1/lessons/all", headers=auth_headers(admin)).status_code == 200


def test_public_availability_shows_owner_names(riders):
    client, _, first, second, _ = riders
    client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(first))
    client.post(
        "/api/v1/lessons", json=lesson_payload(date="2024-06-02", time="15:00"), headers=auth_headers(second)
    )

    response = client.get("/api/v1/lessons", params={"start_date": "2024-06-01", "end_date": "2024-06-02"})

    assert response.status_code == 200
    assert [(item["slot_key"], item["owner_name"]) for item in response.json()] == [
        ("2024-06-01_09:00", "Rider A"),
        ("2024-06-02_15:00", "Rider B"),
    ]

    missing = client.get("/api/v1/lessons", params={"start_date": "2024-06-01"})
    assert missing.status_code == 400
    assert missing.json()["error"] == "Missing required field: end_date"


def test_calendar_and_packages(riders):
    client, _, first, *_ = riders
    client.post("/api/v1/lessons", json=lesson_payload(time="08:00"), headers=auth_headers(first))

    calendar = client.get(
        "/api/v1/lessons/calendar", params={"start_date": "2024-06-01", "end_date": "2024-06-02"}
    ).json()
    assert [day["weekday"] for day in calendar] == ["Saturday", "Sunday"]
    assert calendar[0]["slots"][0] == {
        "time": "08:00",
        "slot_key": "2024-06-01_08:00",
        "available": False,
        "booked_by": "Rider A",
    }

    packages = client.get("/api/v1/lessons/packages").json()
    assert packages[0]["id"] == 1
    assert packages[0]["price"] == 75


def test_batch_booking_reports_partial_failure(riders):
    client, _, first, second, _ = riders
    client.post("/api/v1/lessons", json=lesson_payload(time="10:00"), headers=auth_headers(first))

    response = client.post(
        "/api/v1/lessons/batch",
        json={
            "package_id": 1,
            "slots": [
                {"date": "2024-06-01", "time": "09:00"},
                {"date": "2024-06-01", "time": "10:00"},
            ],
        },
        headers=auth_headers(second),
    )

    assert response.status_code == 200
    outcomes = response.json()
    assert [item["status"] for item in outcomes] == ["booked", "conflict"]
    assert outcomes[0]["lesson"]["owner_id"] == second.id
    assert outcomes[1]["lesson"] is None

    empty = client.post(
        "/api/v1/lessons/batch", json={"package_id": 1, "slots": []}, headers=auth_headers(second)
    )
    assert empty.status_code == 400


def test_owner_lists_and_reschedules(riders):
    client, _, first, second, admin = riders
    lesson = client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(first)).json()
    client.post("/api/v1/lessons", json=lesson_payload(time="11:00"), headers=auth_headers(second))

    mine = client.get("/api/v1/lessons/my", headers=auth_headers(first)).json()
    assert [item["id"] for item in mine] == [lesson["id"]]

    forbidden = client.put(
        f"/api/v1/lessons/{lesson['id']}", json={"time": "10:00"}, headers=auth_headers(admin)
    )
    assert forbidden.status_code == 403

    conflict = client.put(
        f"/api/v1/lessons/{lesson['id']}", json={"time": "11:00"}, headers=auth_headers(first)
    )
    assert conflict.status_code == 409

    moved = client.put(
        f"/api/v1/lessons/{lesson['id']}",
        json={"date": "2024-06-02", "time": "10:00"},
        headers=auth_headers(first),
    )
    assert moved.status_code == 200
    assert (moved.json()["date"], moved.json()["time"]) == ("2024-06-02", "10:00")

    missing = client.put("/api/v1/lessons/999", json={"time": "10:00"}, headers=auth_headers(first))
    assert missing.status_code == 404


def test_admin_cancels_but_cannot_delete(riders):
    client, _, first, second, admin = riders
    lesson = client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(first)).json()

    stranger = client.post(f"/api/v1/lessons/{lesson['id']}/cancel", headers=auth_headers(second))
    assert stranger.status_code == 403

    assert client.delete(f"/api/v1/lessons/{lesson['id']}", headers=auth_headers(admin)).status_code == 403

    cancelled = client.post(f"/api/v1/lessons/{lesson['id']}/cancel", headers=auth_headers(admin))
    assert cancelled.status_code == 200

    all_lessons = client.get("/api/v1/lessons/all", headers=auth_headers(admin)).json()
    assert all_lessons[0]["owner"]["name"] == "Rider A"

    deleted = client.delete(f"/api/v1/lessons/{lesson['id']}", headers=auth_headers(first))
    assert deleted.status_code == 204
    assert client.get("/api/v1/lessons/my", headers=auth_headers(first)).json() == []


@pytest.mark.parametrize("zone", ["America/Los_Angeles", "Pacific/Kiritimati", "UTC"])
def test_dates_do_not_shift_with_server_timezone(riders, monkeypatch, zone):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    client, _, first, *_ = riders
    monkeypatch.setenv("TZ", zone)
    time.tzset()
    try:
        created = client.post(
            "/api/v1/lessons", json=lesson_payload(date="2024-06-02"), headers=auth_headers(first)
        )
        listed = client.get(
            "/api/v1/lessons", params={"start_date": "2024-06-02", "end_date": "2024-06-02"}
        ).json()
    finally:
        monkeypatch.undo()
        time.tzset()

    assert created.status_code == 201
    assert created.json()["date"] == "2024-06-02"
    assert [item["slot_key"] for item in listed] == ["2024-06-02_09:00"]


def test_stranger_update_is_refused_before_terms_check(riders):
    client, _, first, second, _ = riders
    lesson = client.post("/api/v1/lessons", json=lesson_payload(), headers=auth_headers(first)).json()

    response = client.put(
        f"/api/v1/lessons/{lesson['id']}", json={"price": 1}, headers=auth_headers(second)
    )

    assert response.status_code == 403
    assert response.json() == {"error": "Not authorized to update this lesson"}

    own = client.put(f"/api/v1/lessons/{lesson['id']}", json={"price": 1}, headers=auth_headers(first))
    assert own.status_code == 400
