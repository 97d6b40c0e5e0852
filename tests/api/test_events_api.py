from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from eventhost.crud import crud_dashboard
from eventhost.models.registration import Registration
from tests.utils.auth import HOST_ID, get_user_authentication_headers
from tests.utils.event import create_random_event, create_registration


def event_payload(**overrides) -> dict:
    start = datetime.now(timezone.utc) + timedelta(days=7)
    data = {
        "title": "PyData Meetup",
        "description": "Talks and networking",
        "start_date": start.isoformat(),
        "end_date": (start + timedelta(hours=2)).isoformat(),
        "location": "Berlin",
        "agenda": ["Doors open", "  ", "Lightning talks"],
        "custom_questions": ["T-shirt size", ""],
        "price": 15,
    }
    data.update(overrides)
    return data


def test_create_event(client: TestClient) -> None:
    response = client.post("/api/v1/events", json=event_payload())

    assert response.status_code == 201
    content = response.json()
    assert content["id"].startswith("evt_")
    assert content["host_id"] == HOST_ID
    assert content["theme"] == "modern"
    assert content["agenda"] == ["Doors open", "Lightning talks"]
    assert content["custom_questions"] == ["T-shirt size"]
    assert content["price"] == 15


def test_create_event_requires_an_agenda_item(client: TestClient) -> None:
    response = client.post("/api/v1/events", json=event_payload(agenda=["", " "]))
    assert response.status_code == 422


def test_create_event_rejects_unknown_theme(client: TestClient) -> None:
    response = client.post("/api/v1/events", json=event_payload(theme="neon"))
    assert response.status_code == 422


def test_create_event_rejects_end_before_start(client: TestClient) -> None:
    start = datetime.now(timezone.utc) + timedelta(days=7)
    response = client.post(
        "/api/v1/events",
        json=event_payload(
            start_date=start.isoformat(),
            end_date=(start - timedelta(hours=1)).isoformat(),
        ),
    )
    assert response.status_code == 422


def test_create_event_rejects_negative_price(client: TestClient) -> None:
    response = client.post("/api/v1/events", json=event_payload(price=-1))
    assert response.status_code == 422


def test_list_events_with_registration_counts(client: TestClient, db: Session) -> None:
    event = create_random_event(db, host_id=HOST_ID, title="Counted")
    create_random_event(db, host_id="someone_else", title="Not mine")
    create_registration(db, event, email="one@example.com")
    create_registration(db, event, email="two@example.com")

    response = client.get("/api/v1/events")

    assert response.status_code == 200
    content = response.json()
    assert [e["title"] for e in content] == ["Counted"]
    assert content[0]["registrations_count"] == 2


def test_get_event_of_another_host_is_not_found(client: TestClient, db: Session) -> None:
    event = create_random_event(db, host_id="someone_else")

    response = client.get(f"/api/v1/events/{event.id}")

    assert response.status_code == 404


def test_update_event(client: TestClient, db: Session) -> None:
    event = create_random_event(db, host_id=HOST_ID)

    response = client.patch(
        f"/api/v1/events/{event.id}",
        json={"title": "Renamed", "theme": "vibrant", "price": None},
    )

    assert response.status_code == 200
    content = response.json()
    assert content["title"] == "Renamed"
    assert content["theme"] == "vibrant"
    assert content["price"] is None
    assert content["location"] == "Berlin"


def test_update_event_end_before_existing_start(client: TestClient, db: Session) -> None:
    event = create_random_event(db, host_id=HOST_ID)
    too_early = datetime.now(timezone.utc) + timedelta(days=1)

    response = client.patch(
        f"/api/v1/events/{event.id}", json={"end_date": too_early.isoformat()}
    )

    assert response.status_code == 422
    assert response.json()["field"] == "end_date"


def test_delete_event_removes_registrations(client: TestClient, db: Session) -> None:
    event = create_random_event(db, host_id=HOST_ID)
    create_registration(db, event)

    response = client.delete(f"/api/v1/events/{event.id}")

    assert response.status_code == 204
    assert client.get(f"/api/v1/events/{event.id}").status_code == 404
    assert db.query(Registration).count() == 0


def test_events_require_a_valid_token(anonymous_client: TestClient) -> None:
    assert anonymous_client.get("/api/v1/events").status_code == 401

    bad = anonymous_client.get(
        "/api/v1/events", headers={"Authorization": "Bearer not-a-jwt"}
    )
    assert bad.status_code == 401


def test_events_accept_a_signed_token(anonymous_client: TestClient, db: Session) -> None:
    create_random_event(db, host_id="host_test", title="Token event")

    response = anonymous_client.get(
        "/api/v1/events", headers=get_user_authentication_headers()
    )

    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Token event"]


def parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def test_create_event_stores_times_in_utc(client: TestClient, db: Session) -> None:
    now = datetime.now(timezone.utc)
    berlin_summer = timezone(timedelta(hours=2))
    start = (now + timedelta(minutes=90)).astimezone(berlin_summer)

    response = client.post(
        "/api/v1/events",
        json=event_payload(
            start_date=start.isoformat(),
            end_date=(start + timedelta(hours=1)).isoformat(),
        ),
    )

    assert response.status_code == 201
    event_id = response.json()["id"]
    stored = parse_datetime(client.get(f"/api/v1/events/{event_id}").json()["start_date"])
    assert stored == start
    assert stored.utcoffset() == timedelta(0)

    dashboard = crud_dashboard.dashboard.get_host_dashboard(
        db, host_id=HOST_ID, now=now + timedelta(hours=2)
    )
    assert dashboard.metrics.upcomingEvents == 0


def test_create_event_with_naive_and_aware_dates(client: TestClient) -> None:
    response = client.post(
        "/api/v1/events",
        json=event_payload(
            start_date="2030-01-01T10:00:00+00:00", end_date="2030-01-01T12:00:00"
        ),
    )
    assert response.status_code == 201
    assert parse_datetime(response.json()["end_date"]) == datetime(
        2030, 1, 1, 12, 0, tzinfo=timezone.utc
    )

    # 10:00 at +02:00 is 08:00 UTC; a naive 07:00 end is read as 07:00 UTC
    response = client.post(
        "/api/v1/events",
        json=event_payload(
            start_date="2030-01-01T10:00:00+02:00", end_date="2030-01-01T07:00:00"
        ),
    )
    assert response.status_code == 422


def test_update_event_rejects_null_for_required_fields(
    client: TestClient, db: Session
) -> None:
    event = create_random_event(db, host_id=HOST_ID, title="Keep me")

    for field in ("title", "agenda", "start_date", "theme", "custom_questions"):
        response = client.patch(f"/api/v1/events/{event.id}", json={field: None})
        assert response.status_code == 422, field

    response = client.get(f"/api/v1/events/{event.id}")
    assert response.status_code == 200
    assert response.json()["title"] == "Keep me"
    assert response.json()["agenda"] == ["Welcome", "Talks"]


def test_update_event_time_with_offset(client: TestClient, db: Session) -> None:
    event = create_random_event(db, host_id=HOST_ID, start_in=timedelta(days=10))
    new_end = datetime(2099, 6, 1, 20, 0, tzinfo=timezone(timedelta(hours=-5)))

    response = client.patch(
        f"/api/v1/events/{event.id}", json={"end_date": new_end.isoformat()}
    )

    assert response.status_code == 200
    assert parse_datetime(response.json()["end_date"]) == datetime(
        2099, 6, 2, 1, 0, tzinfo=timezone.utc
    )
