"""
전체 관리자 API 통합 테스트.
- 권한(401 / 403), 사용자 / 동아리 목록, 권한 변경과 동아리 회장 재배치,
  사용자 삭제(기록만), 동아리 삭제, 행위 로그 조회까지 검증한다.
"""

from tests.helpers import (
    API,
    CLUB_HEAD_EMAIL,
    STUDENT_EMAIL,
    SUPER_ADMIN_EMAIL,
    auth_header,
    create_club,
    login_as,
    register_user,
)


def _admin(client) -> dict:
    return auth_header(login_as(client, SUPER_ADMIN_EMAIL))


def test_admin_requires_super_admin(client):
    assert client.get(f"{API}/admin/users").status_code == 401

    head = login_as(client, CLUB_HEAD_EMAIL)
    r = client.get(f"{API}/admin/users", headers=auth_header(head))
    assert r.status_code == 403
    assert r.json()["message"] == "Access denied. Super admin required."


def test_list_users_paginated(client):
    register_user(client)
    r = client.get(f"{API}/admin/users", params={"limit": 2}, headers=_admin(client))
    body = r.json()
    assert [u["_id"] for u in body["data"]] == ["user1", "user2"]
    assert body["pagination"]["totalItems"] == 4
    assert body["pagination"]["totalPages"] == 2
    assert body["pagination"]["hasNext"] is True


def test_list_clubs_and_dashboard(client):
    headers = _admin(client)

    clubs = client.get(f"{API}/admin/clubs", headers=headers).json()["data"]
    assert len(clubs) == 4
    assert all(c["isActive"] for c in clubs)
    assert {c["_id"]: c["clubHead"]["_id"] for c in clubs}["club2"] == "user2"

    dash = client.get(f"{API}/admin/dashboard", headers=headers).json()["data"]
    assert dash["totalUsers"] == 3
    assert dash["totalClubs"] == 4
    assert dash["activeEvents"] == 4


def test_promote_to_club_head_reorders_admins(client):
    headers = _admin(client)
    user = register_user(client)

    r = client.put(
        f"{API}/admin/users/{user['id']}/role",
        json={"role": "club_head", "clubId": "club1"},
        headers=headers,
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"] == {"userId": user["id"], "newRole": "club_head", "clubId": "club1"}

    club = client.get(f"{API}/clubs/club1").json()["data"]
    assert club["admins"][0] == user["id"]
    assert club["clubHead"]["_id"] == user["id"]

    # 새 회장은 동아리 관리 가능
    pending = client.get(f"{API}/clubs/club1/membership-requests", headers=auth_header(user["token"]))
    assert pending.status_code == 200


def test_demote_to_student_strips_admin_rights(client):
    headers = _admin(client)

    r = client.put(f"{API}/admin/users/user2/role", json={"role": "student"}, headers=headers)
    assert r.status_code == 200, r.text

    assert client.get(f"{API}/clubs/club2").json()["data"]["admins"] == []

    no_head = client.get(f"{API}/admin/clubs/no-head", headers=headers).json()["data"]
    assert {c["_id"] for c in no_head} == {"club2", "club4"}

    jane = login_as(client, CLUB_HEAD_EMAIL)
    assert client.get(f"{API}/clubs/club2/membership-requests", headers=auth_header(jane)).status_code == 403


def test_set_role_unknown_user(client):
    r = client.put(f"{API}/admin/users/ghost/role", json={"role": "student"}, headers=_admin(client))
    assert r.status_code == 404


def test_promote_club_head_endpoint(client):
    r = client.put(
        f"{API}/admin/promote-club-head",
        json={"userId": "user3", "clubId": "club4"},
        headers=_admin(client),
    )
    assert r.status_code == 200, r.text
    assert client.get(f"{API}/clubs/club4").json()["data"]["clubHead"]["_id"] == "user3"


def test_assign_head(client):
    headers = _admin(client)
    r = client.put(f"{API}/admin/clubs/club2/assign-head", json={"userId": "user3"}, headers=headers)
    assert r.status_code == 200, r.text
    assert r.json()["data"]["admins"] == ["user3", "user2"]

    alice = login_as(client, STUDENT_EMAIL)
    me = client.get(f"{API}/auth/me", headers=auth_header(alice)).json()["data"]
    assert me["role"] == "club_head"


def test_delete_user_is_not_applied(client):
    headers = _admin(client)
    r = client.delete(f"{API}/admin/users/user3", headers=headers)
    assert r.status_code == 200
    assert r.json()["message"] == "User deleted successfully"

    users = client.get(f"{API}/admin/users", headers=headers).json()["data"]
    assert "user3" in {u["_id"] for u in users}


def test_admin_delete_club(client):
    headers = _admin(client)
    owner = register_user(client)
    club = create_club(client, owner["token"])

    seeded = client.delete(f"{API}/admin/clubs/club3", headers=headers)
    assert seeded.status_code == 200
    assert client.get(f"{API}/clubs/club3").status_code == 200

    created = client.delete(f"{API}/admin/clubs/{club['_id']}", headers=headers)
    assert created.status_code == 200
    assert client.get(f"{API}/clubs/{club['_id']}").status_code == 404

    assert client.delete(f"{API}/admin/clubs/nope", headers=headers).status_code == 404


def test_member_clubs(client):
    r = client.get(f"{API}/admin/users/user1/member-clubs", headers=_admin(client))
    assert {c["_id"] for c in r.json()["data"]} == {"club1", "club3"}


def test_logs_record_actions(client):
    headers = _admin(client)
    client.put(f"{API}/clubs/club3/membership-requests/req-sample-2/reject", json={"reason": "full"}, headers=headers)
    client.put(f"{API}/admin/users/user3/role", json={"role": "club_head", "clubId": "club4"}, headers=headers)

    logs = client.get(f"{API}/admin/logs", headers=headers).json()
    assert logs["meta"]["count"] == 2
    actions = [entry["action"] for entry in logs["data"]]
    assert set(actions) == {"REJECT_REQUEST", "SET_ROLE"}
    assert all(entry["actor"]["_id"] == "user1" for entry in logs["data"])
