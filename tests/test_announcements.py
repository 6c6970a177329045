from tests.helpers import API, CLUB_HEAD_EMAIL, STUDENT_EMAIL, auth_header, login_as


def test_list_newest_first(client):
    r = client.get(f"{API}/announcements")
    assert r.status_code == 200
    ids = [a["_id"] for a in r.json()["data"]]
    assert ids == ["ann5", "ann4", "ann3", "ann2", "ann1"]

    club1 = client.get(f"{API}/announcements", params={"clubId": "club1"}).json()["data"]
    assert [a["_id"] for a in club1] == ["ann5", "ann1"]


def test_recent(client):
    r = client.get(f"{API}/announcements/recent")
    assert len(r.json()["data"]) == 5
    assert r.json()["data"][0]["_id"] == "ann5"


def test_create_announcement(client):
    token = login_as(client, CLUB_HEAD_EMAIL)
    r = client.post(
        f"{API}/announcements",
        json={"title": "Hello", "content": "World", "clubId": "club2"},
        headers=auth_header(token),
    )
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    assert data["author"]["_id"] == "user2"

    recent = client.get(f"{API}/announcements/recent").json()["data"]
    assert recent[0]["_id"] == data["_id"]


def test_create_announcement_validation(client):
    r = client.post(f"{API}/announcements", json={"title": "Only title"})
    assert r.status_code == 400
    assert r.json()["missing"] == {"title": False, "content": True, "clubId": True}

    r = client.post(f"{API}/announcements", json={"title": "t", "content": "c", "clubId": "nope"})
    assert r.status_code == 404


def test_club_scoped_announcement(client):
    head = login_as(client, CLUB_HEAD_EMAIL)
    r = client.post(
        f"{API}/clubs/club4/announcements",
        json={"title": "Meeting moved", "content": "Now on Thursday"},
        headers=auth_header(head),
    )
    assert r.status_code == 201, r.text

    listing = client.get(f"{API}/clubs/club4/announcements").json()["data"]
    assert listing[0]["title"] == "Meeting moved"


def test_club_scoped_announcement_permissions(client):
    payload = {"title": "x", "content": "y"}
    assert client.post(f"{API}/clubs/club4/announcements", json=payload).status_code == 401

    student = login_as(client, STUDENT_EMAIL)
    r = client.post(f"{API}/clubs/club4/announcements", json=payload, headers=auth_header(student))
    assert r.status_code == 403
