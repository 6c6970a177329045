"""
인증 기본 플로우 통합 테스트.
- 회원가입 → 토큰으로 /auth/me, 필수 값 누락 시 누락 필드 맵,
  같은 이메일 재가입 덮어쓰기, 시드 사용자 이메일 로그인까지 검증한다.
"""

from tests.helpers import API, STUDENT_EMAIL, auth_header, login_as, register_user


def test_register_then_me(client):
    user = register_user(client)

    me = client.get(f"{API}/auth/me", headers=auth_header(user["token"]))
    assert me.status_code == 200, me.text
    data = me.json()["data"]
    assert data["email"] == user["email"]
    assert data["role"] == "student"
    assert "password" not in data and "password_hash" not in data


def test_register_missing_fields(client):
    r = client.post(f"{API}/auth/register", json={"firstName": "A", "email": "a@test.com"})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["message"] == "All fields are required"
    assert body["missing"] == {"firstName": False, "lastName": True, "email": False, "password": True}


def test_register_with_role(client):
    user = register_user(client, role="club_head")
    me = client.get(f"{API}/auth/me", headers=auth_header(user["token"]))
    assert me.json()["data"]["role"] == "club_head"


def test_reregister_overwrites_previous_registration(client):
    first = register_user(client, password="first-pass")

    r = client.post(
        f"{API}/auth/register",
        json={"firstName": "New", "lastName": "Name", "email": first["email"], "password": "second-pass"},
    )
    assert r.status_code == 201, r.text
    assert r.json()["data"]["user"]["_id"] == first["id"]
    assert r.json()["data"]["user"]["firstName"] == "New"

    old = client.post(f"{API}/auth/login", json={"email": first["email"], "password": "first-pass"})
    assert old.status_code == 401
    assert old.json()["message"] == "Invalid password"

    new = client.post(f"{API}/auth/login", json={"email": first["email"], "password": "second-pass"})
    assert new.status_code == 200, new.text


def test_login_wrong_password(client):
    user = register_user(client)
    r = client.post(f"{API}/auth/login", json={"email": user["email"], "password": "nope"})
    assert r.status_code == 401
    assert r.headers.get("www-authenticate") == "Bearer"


def test_login_unknown_email(client):
    r = client.post(f"{API}/auth/login", json={"email": "ghost@test.com", "password": "x"})
    assert r.status_code == 401
    assert r.json()["success"] is False


def test_login_missing_fields(client):
    r = client.post(f"{API}/auth/login", json={"email": "alice@college.edu"})
    assert r.status_code == 400
    assert r.json()["message"] == "Email and password are required"


def test_seeded_login_by_email(client):
    token = login_as(client, STUDENT_EMAIL)
    me = client.get(f"{API}/auth/me", headers=auth_header(token))
    assert me.json()["data"]["_id"] == "user3"


def test_me_requires_token(client):
    assert client.get(f"{API}/auth/me").status_code == 401
    r = client.get(f"{API}/auth/me", headers=auth_header("demo-token-unknown"))
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid token"
