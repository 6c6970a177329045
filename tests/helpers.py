# tests/helpers.py
import uuid

API = "/api"

SUPER_ADMIN_EMAIL = "john@college.edu"
CLUB_HEAD_EMAIL = "jane@college.edu"
STUDENT_EMAIL = "alice@college.edu"


def auth_header(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def login_as(client, email: str, password: str = "anything") -> str:
    """로그인 후 토큰 반환 (시드 사용자는 비밀번호 검사 없음)"""
    r = client.post(f"{API}/auth/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.text
    return r.json()["data"]["token"]


def register_user(client, *, role: str | None = None, password: str = "Passw0rd!") -> dict:
    """새 사용자 가입 → {id, email, password, token}"""
    email = f"user_{uuid.uuid4().hex[:6]}@test.com"
    payload = {"firstName": "Test", "lastName": "User", "email": email, "password": password}
    if role:
        payload["role"] = role

    r = client.post(f"{API}/auth/register", json=payload)
    assert r.status_code == 201, r.text
    data = r.json()["data"]
    return {"id": data["user"]["_id"], "email": email, "password": password, "token": data["token"]}


def create_club(client, token: str, **fields) -> dict:
    payload = {"name": f"Club {uuid.uuid4().hex[:6]}", "description": "test club", "category": "cat1"}
    payload.update(fields)
    r = client.post(f"{API}/clubs", json=payload, headers=auth_header(token))
    assert r.status_code == 201, r.text
    return r.json()["data"]
