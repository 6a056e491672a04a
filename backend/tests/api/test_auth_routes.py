"""Auth routes — signup, login, bearer parsing, logout and refresh rotation.

Invariants:
    - Signup returns 201 with user, session and password strength hint
    - Credential failures are 401 with a message that never reveals which part was wrong
    - A revoked session's access token stops working; a rotated refresh token stops working
"""

from tests.api.helpers import PASSWORD, signup


async def test_signup_returns_user_session_and_strength(client):
    res = await client.post(
        "/api/auth/signup",
        json={"email": "  New.User@Example.com ", "password": "sixteen-chars-ok"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    data = body["data"]
    assert data["user"]["email"] == "new.user@example.com"
    assert data["user"]["created_at"]
    assert set(data["session"]) == {"access_token", "refresh_token", "expires_at"}
    assert data["password_strength"] == "Excellent! Your password is very secure."


async def test_signup_creates_profile(client, alice):
    res = await client.get("/api/profile", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json()["data"]["email"] == "alice@example.com"
    assert res.json()["data"]["id"] == alice["user"]["id"]


async def test_duplicate_email_is_conflict(client, alice):
    res = await client.post(
        "/api/auth/signup", json={"email": "ALICE@example.com", "password": PASSWORD},
    )
    assert res.status_code == 409
    body = res.json()
    assert body["success"] is False
    assert body["error"]["code"] == "CONFLICT"
    assert body["error"]["message"] == "Email already registered"


async def test_signup_validation_error_envelope(client):
    res = await client.post(
        "/api/auth/signup", json={"email": "bad-email", "password": "short"},
    )
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert "email:" in error["message"]
    assert "password:" in error["message"]
    assert {d["field"] for d in error["details"]} == {"email", "password"}


async def test_login(client, alice):
    res = await client.post(
        "/api/auth/login", json={"email": "Alice@Example.com", "password": PASSWORD},
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["user"] == {"id": alice["user"]["id"], "email": "alice@example.com"}
    assert data["session"]["access_token"]
    assert "password_strength" not in data


async def test_login_wrong_password_or_unknown_email(client, alice):
    for payload in (
        {"email": "alice@example.com", "password": "not-the-password"},
        {"email": "nobody@example.com", "password": PASSWORD},
    ):
        res = await client.post("/api/auth/login", json=payload)
        assert res.status_code == 401
        assert res.json()["error"]["message"] == "Invalid email or password"


async def test_me(client, alice):
    res = await client.get("/api/auth/me", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json()["data"] == {
        "id": alice["user"]["id"],
        "email": "alice@example.com",
        "role": "authenticated",
    }


async def test_bearer_parsing_messages(client):
    cases = [
        ({}, "Missing authorization token"),
        ({"Authorization": "Token abc.def.ghi"}, "Invalid authorization format"),
        ({"Authorization": "Bearer not-a-jwt"}, "Invalid authorization format"),
        ({"Authorization": "Bearer aaa.bbb.ccc"}, "Invalid or expired token"),
    ]
    for headers, message in cases:
        res = await client.get("/api/auth/me", headers=headers)
        assert res.status_code == 401
        assert res.json()["error"]["message"] == message


async def test_logout_revokes_session(client, alice):
    res = await client.post("/api/auth/logout", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json()["data"] == {"message": "Successfully logged out"}

    res = await client.get("/api/auth/me", headers=alice["headers"])
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "Invalid or expired token"


async def test_logout_leaves_other_sessions_alone(client, alice):
    login = await client.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": PASSWORD},
    )
    other = {"Authorization": f"Bearer {login.json()['data']['session']['access_token']}"}

    await client.post("/api/auth/logout", headers=alice["headers"])

    assert (await client.get("/api/auth/me", headers=other)).status_code == 200


async def test_refresh_rotates_token(client, alice):
    old_refresh = alice["session"]["refresh_token"]
    res = await client.post("/api/auth/refresh", json={"refreshToken": old_refresh})
    assert res.status_code == 200
    new_session = res.json()["data"]["session"]
    assert new_session["refresh_token"] != old_refresh

    new_headers = {"Authorization": f"Bearer {new_session['access_token']}"}
    assert (await client.get("/api/auth/me", headers=new_headers)).status_code == 200

    reused = await client.post("/api/auth/refresh", json={"refreshToken": old_refresh})
    assert reused.status_code == 401
    assert reused.json()["error"]["message"] == "Invalid or expired refresh token"


async def test_refresh_rejects_access_token_and_garbage(client, alice):
    for token in (alice["session"]["access_token"], "garbage"):
        res = await client.post("/api/auth/refresh", json={"refreshToken": token})
        assert res.status_code == 401


async def test_refresh_after_logout_fails(client, alice):
    await client.post("/api/auth/logout", headers=alice["headers"])
    res = await client.post(
        "/api/auth/refresh", json={"refreshToken": alice["session"]["refresh_token"]},
    )
    assert res.status_code == 401


async def test_refresh_requires_token_field(client):
    res = await client.post("/api/auth/refresh", json={})
    assert res.status_code == 400


async def test_responses_carry_request_id(client):
    res = await client.get("/api/auth/me")
    assert res.headers["X-Request-ID"].startswith("req-")


async def test_second_signup_gets_distinct_user(client, alice):
    other = await signup(client, "carol@example.com")
    assert other["user"]["id"] != alice["user"]["id"]
