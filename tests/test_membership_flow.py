"""
동아리 가입 플로우 통합 테스트.
- 승인 불필요 동아리 즉시 가입, 승인 필요 동아리 요청 → 승인 / 거절 → 재신청,
  가입 상태 조회, 권한(401 / 403), 회원 수 실시간 계산을 검증한다.
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


def _member_count(client, club_id: str) -> int:
    clubs = client.get(f"{API}/clubs", params={"limit": 100}).json()["data"]
    return next(c["memberCount"] for c in clubs if c["_id"] == club_id)


def _status(client, club_id: str, token: str) -> dict:
    r = client.get(f"{API}/clubs/{club_id}/membership-status", headers=auth_header(token))
    assert r.status_code == 200, r.text
    return r.json()["data"]


def test_direct_join_without_approval(client):
    user = register_user(client)

    r = client.post(f"{API}/clubs/club1/join", headers=auth_header(user["token"]))
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["requiresApproval"] is False
    assert "requestId" not in body

    members = client.get(f"{API}/clubs/club1").json()["data"]["members"]
    assert user["id"] in {m["_id"] for m in members}

    # 요청 기록은 남지 않음
    admin = login_as(client, SUPER_ADMIN_EMAIL)
    history = client.get(f"{API}/clubs/club1/all-membership-requests", headers=auth_header(admin)).json()
    assert history["total"] == 0


def test_join_twice_conflicts(client):
    user = register_user(client)
    client.post(f"{API}/clubs/club4/join", headers=auth_header(user["token"]))

    r = client.post(f"{API}/clubs/club4/join", headers=auth_header(user["token"]))
    assert r.status_code == 400
    assert r.json()["message"] == "You are already a member of this club"


def test_approval_flow_and_repeat_approve(client):
    user = register_user(client)
    before = _member_count(client, "club2")

    r = client.post(
        f"{API}/clubs/club2/join",
        json={"message": "I love photos"},
        headers=auth_header(user["token"]),
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["requiresApproval"] is True
    request_id = body["requestId"]

    # 승인 전에는 회원 집합 변화 없음
    assert _member_count(client, "club2") == before
    assert _status(client, "club2", user["token"])["hasPendingRequest"] is True

    dup = client.post(f"{API}/clubs/club2/join", headers=auth_header(user["token"]))
    assert dup.status_code == 400

    head = login_as(client, CLUB_HEAD_EMAIL)
    pending = client.get(f"{API}/clubs/club2/membership-requests", headers=auth_header(head)).json()["data"]
    mine = [p for p in pending if p["_id"] == request_id]
    assert len(mine) == 1
    assert mine[0]["message"] == "I love photos"
    assert mine[0]["user"]["email"] == user["email"]

    ok = client.put(f"{API}/clubs/club2/membership-requests/{request_id}/accept", headers=auth_header(head))
    assert ok.status_code == 200, ok.text
    assert ok.json()["data"]["status"] == "approved"
    assert ok.json()["data"]["approvedBy"] == "user2"

    assert _member_count(client, "club2") == before + 1
    status = _status(client, "club2", user["token"])
    assert status["isMember"] is True
    assert status["canApply"] is False

    again = client.put(f"{API}/clubs/club2/membership-requests/{request_id}/accept", headers=auth_header(head))
    assert again.status_code == 400
    assert again.json()["message"] == "This request has already been processed"


def test_reject_then_reapply_keeps_history(client):
    user = register_user(client)
    head = login_as(client, CLUB_HEAD_EMAIL)

    first = client.post(f"{API}/clubs/club2/join", headers=auth_header(user["token"])).json()["requestId"]
    r = client.put(
        f"{API}/clubs/club2/membership-requests/{first}/reject",
        json={"reason": "Club is full this semester"},
        headers=auth_header(head),
    )
    assert r.status_code == 200, r.text
    assert r.json()["data"]["rejectionReason"] == "Club is full this semester"

    status = _status(client, "club2", user["token"])
    assert status["wasRejected"] is True
    assert status["canApply"] is True
    assert status["state"] == "rejected"

    second = client.post(f"{API}/clubs/club2/join", headers=auth_header(user["token"])).json()["requestId"]
    assert second != first
    assert _status(client, "club2", user["token"])["state"] == "pending"

    history = client.get(
        f"{API}/clubs/club2/all-membership-requests", headers=auth_header(head)
    ).json()
    ids = [h["_id"] for h in history["data"]]
    assert first in ids and second in ids

    rejected = client.get(
        f"{API}/clubs/club2/all-membership-requests",
        params={"status": "rejected"},
        headers=auth_header(head),
    ).json()
    assert [h["_id"] for h in rejected["data"]] == [first]
    assert rejected["total"] == 1


def test_join_closed_club_forbidden(client):
    head = login_as(client, CLUB_HEAD_EMAIL)
    client.put(f"{API}/clubs/club4/settings", json={"allowJoining": False}, headers=auth_header(head))

    user = register_user(client)
    r = client.post(f"{API}/clubs/club4/join", headers=auth_header(user["token"]))
    assert r.status_code == 403
    assert r.json()["message"] == "This club is not currently accepting new members"


def test_members_requires_auth(client):
    r = client.get(f"{API}/clubs/club1/members")
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_non_admin_cannot_decide(client):
    student = login_as(client, STUDENT_EMAIL)

    accept = client.put(f"{API}/clubs/club3/membership-requests/req-sample-2/accept", headers=auth_header(student))
    assert accept.status_code == 403

    reject = client.put(f"{API}/clubs/club3/membership-requests/req-sample-2/reject", headers=auth_header(student))
    assert reject.status_code == 403

    listing = client.get(f"{API}/clubs/club3/membership-requests", headers=auth_header(student))
    assert listing.status_code == 403


def test_unknown_request_not_found(client):
    admin = login_as(client, SUPER_ADMIN_EMAIL)
    r = client.put(f"{API}/clubs/club2/membership-requests/req-missing/accept", headers=auth_header(admin))
    assert r.status_code == 404

    # 다른 동아리의 요청 id 는 찾을 수 없음
    r = client.put(f"{API}/clubs/club2/membership-requests/req-sample-2/accept", headers=auth_header(admin))
    assert r.status_code == 404


def test_seeded_pending_request(client):
    admin = login_as(client, SUPER_ADMIN_EMAIL)
    pending = client.get(f"{API}/clubs/club3/membership-requests", headers=auth_header(admin)).json()["data"]
    assert [p["_id"] for p in pending] == ["req-sample-2"]
    assert pending[0]["user"]["_id"] == "user2"


def test_leave_and_remove_member_update_count(client):
    user = register_user(client)
    client.post(f"{API}/clubs/club1/join", headers=auth_header(user["token"]))
    assert _member_count(client, "club1") == 4

    r = client.delete(f"{API}/clubs/club1/leave", headers=auth_header(user["token"]))
    assert r.status_code == 200
    assert _member_count(client, "club1") == 3

    # 멱등
    assert client.delete(f"{API}/clubs/club1/leave", headers=auth_header(user["token"])).status_code == 200
    assert _member_count(client, "club1") == 3

    admin = login_as(client, SUPER_ADMIN_EMAIL)
    r = client.delete(f"{API}/clubs/club1/members/user2", headers=auth_header(admin))
    assert r.status_code == 200
    assert _member_count(client, "club1") == 2

    members = client.get(f"{API}/clubs/club1/members", headers=auth_header(admin)).json()
    assert {m["_id"] for m in members["data"]} == {"user1", "user3"}


def test_member_count_follows_created_club(client):
    owner = register_user(client)
    club = create_club(client, owner["token"], requireApproval=True)

    joiner = register_user(client)
    request_id = client.post(
        f"{API}/clubs/{club['_id']}/join", headers=auth_header(joiner["token"])
    ).json()["requestId"]
    assert _member_count(client, club["_id"]) == 1

    client.put(
        f"{API}/clubs/{club['_id']}/membership-requests/{request_id}/accept",
        headers=auth_header(owner["token"]),
    )
    assert _member_count(client, club["_id"]) == 2


def test_remove_member_requires_manager(client):
    student = login_as(client, STUDENT_EMAIL)
    r = client.delete(f"{API}/clubs/club1/members/user2", headers=auth_header(student))
    assert r.status_code == 403
