from tests.helpers import API, STUDENT_EMAIL, auth_header, login_as, register_user


def test_list_events_status_filter(client):
    r = client.get(f"{API}/events")
    assert r.status_code == 200
    assert r.json()["pagination"]["totalItems"] == 5

    upcoming = client.get(f"{API}/events", params={"status": "upcoming"}).json()["data"]
    assert {e["_id"] for e in upcoming} == {"event1", "event2", "event3", "event4"}

    completed = client.get(f"{API}/events", params={"status": "completed"}).json()["data"]
    assert [e["_id"] for e in completed] == ["event5"]

    bad = client.get(f"{API}/events", params={"status": "someday"})
    assert bad.status_code == 400


def test_get_event(client):
    r = client.get(f"{API}/events/event2")
    data = r.json()["data"]
    assert data["clubId"] == {"_id": "club2", "name": "Photography Club"}
    assert data["organizer"]["_id"] == "user2"
    assert set(data["attendees"]) == {"user1", "user3"}
    assert data["attendeeCount"] == 2

    assert client.get(f"{API}/events/nope").status_code == 404


def test_create_event(client):
    user = register_user(client)
    r = client.post(
        f"{API}/events",
        json={
            "title": "Hack Night",
            "clubId": "club1",
            "dateTime": "2030-01-10T18:00:00Z",
            "endDateTime": "2030-01-10T22:00:00Z",
            "location": "Lab C",
            "maxAttendees": 2,
        },
        headers=auth_header(user["token"]),
    )
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["status"] == "upcoming"
    assert data["organizer"]["_id"] == user["id"]
    assert data["attendees"] == []


def test_create_event_validation(client):
    r = client.post(f"{API}/events", json={"title": "No club"})
    assert r.status_code == 400
    assert r.json()["missing"] == {"title": False, "clubId": True}

    r = client.post(f"{API}/events", json={"title": "Ghost", "clubId": "nope"})
    assert r.status_code == 404

    r = client.post(
        f"{API}/events",
        json={
            "title": "Backwards",
            "clubId": "club1",
            "dateTime": "2030-01-10T18:00:00Z",
            "endDateTime": "2030-01-10T17:00:00Z",
        },
    )
    assert r.status_code == 400


def test_join_and_leave_event_idempotent(client):
    user = register_user(client)
    headers = auth_header(user["token"])

    r = client.post(f"{API}/events/event1/join", headers=headers)
    assert r.status_code == 200, r.text
    assert user["id"] in r.json()["data"]["attendees"]

    again = client.post(f"{API}/events/event1/join", headers=headers)
    assert again.status_code == 200
    assert again.json()["data"]["attendees"].count(user["id"]) == 1

    left = client.delete(f"{API}/events/event1/leave", headers=headers)
    assert user["id"] not in left.json()["data"]["attendees"]

    # POST 로도 탈퇴 가능, 멱등
    assert client.post(f"{API}/events/event1/leave", headers=headers).status_code == 200


def test_join_completed_event_conflicts(client):
    user = register_user(client)
    r = client.post(f"{API}/events/event5/join", headers=auth_header(user["token"]))
    assert r.status_code == 400


def test_join_full_event_conflicts(client):
    owner = register_user(client)
    event = client.post(
        f"{API}/events",
        json={"title": "Tiny", "clubId": "club1", "maxAttendees": 1},
        headers=auth_header(owner["token"]),
    ).json()["data"]

    first = register_user(client)
    assert client.post(f"{API}/events/{event['_id']}/join", headers=auth_header(first["token"])).status_code == 200

    second = register_user(client)
    r = client.post(f"{API}/events/{event['_id']}/join", headers=auth_header(second["token"]))
    assert r.status_code == 400
    assert r.json()["message"] == "Event is full"


def test_my_events(client):
    token = login_as(client, STUDENT_EMAIL)
    headers = auth_header(token)

    attending = client.get(f"{API}/events/user/attending", headers=headers).json()["data"]
    assert {e["_id"] for e in attending} == {"event2", "event4", "event5"}

    upcoming = client.get(
        f"{API}/events/user/my-events", params={"type": "attending", "status": "upcoming"}, headers=headers
    ).json()["data"]
    assert {e["_id"] for e in upcoming} == {"event2", "event4"}

    organizing = client.get(f"{API}/events/user/my-events", params={"type": "organizing"}, headers=headers)
    assert organizing.json()["data"] == []


def test_my_events_defaults_to_seeded_student(client):
    r = client.get(f"{API}/events/user/attending")
    assert {e["_id"] for e in r.json()["data"]} == {"event2", "event4", "event5"}


def test_club_events(client):
    r = client.get(f"{API}/events/club/club1")
    assert [e["_id"] for e in r.json()["data"]] == ["event1"]

    r = client.get(f"{API}/events/club/club1", params={"status": "all"})
    assert {e["_id"] for e in r.json()["data"]} == {"event1", "event5"}

    r = client.get(f"{API}/events/club/club1", params={"status": "all", "limit": 1})
    assert len(r.json()["data"]) == 1
