"""
End-to-end email-OTP login

initiate -> code C1 expires -> verify(C1) fails -> resend -> C2 != C1
-> verify(C2) succeeds with cookie and role -> verify(C2) again is 404
-> /session/me sees the user -> logout
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient

from config import ApplicationConfig
from tests.utils.http_helpers import parse_set_cookie

COOKIE = ApplicationConfig.SESSION_COOKIE_NAME


@pytest.mark.asyncio
async def test_full_login_flow_with_resend(
    client: AsyncClient, create_user, email_sender, age_login_session, load_login_session
):
    user_id, email, role = await create_user("client")

    # Initiate: six-digit code, 10 minute code window
    response = await client.post("/login/initiate", json={"email": email})
    assert response.status_code == 200
    session_id = response.json()["sessionId"]
    c1 = email_sender.last_code()
    assert len(c1) == 6 and c1.isdigit()

    login_session = await load_login_session(session_id)
    assert login_session.code_expires - login_session.created_at == timedelta(minutes=10)

    # Wait past code_expires (but not past expires_at)
    await age_login_session(session_id, timedelta(minutes=10, seconds=30))

    response = await client.post("/login/verify", json={"sessionId": session_id, "code": c1})
    assert response.status_code == 401
    assert response.json()["error"] == "code expired"

    # Resend: same session id, new code
    response = await client.post("/login/resend", json={"sessionId": session_id})
    assert response.status_code == 200
    c2 = email_sender.last_code()
    assert c2 != c1

    # The old code no longer works
    response = await client.post("/login/verify", json={"sessionId": session_id, "code": c1})
    assert response.status_code == 401

    # The new one does
    response = await client.post("/login/verify", json={"sessionId": session_id, "code": c2})
    assert response.status_code == 200
    assert response.json() == {"ok": True, "role": role, "redirectTo": "/dashboard"}
    token = parse_set_cookie(response.headers["set-cookie"])[COOKIE]

    # Single use
    response = await client.post("/login/verify", json={"sessionId": session_id, "code": c2})
    assert response.status_code == 404

    # Session cookie identifies the user
    client.cookies.clear()
    response = await client.get("/session/me", headers={"Cookie": f"{COOKIE}={token}"})
    assert response.json()["user"]["id"] == str(user_id)

    # Logout drops the cookie
    response = await client.post("/logout")
    assert parse_set_cookie(response.headers["set-cookie"])["max-age"] == "0"
