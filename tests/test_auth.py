from __future__ import annotations

import pytest
from sqlalchemy import select

from app.core.security import create_access_token, decode_access_token
from app.core.settings import Settings
from app.db.models.instructor_code import InstructorCode
from app.db.models.user import User, UserRole


def _signup_body(email: str, *, role: str, code: str | None = None) -> dict:
    body = {
        "firstName": "Ana",
        "lastName": "Gomez",
        "email": email,
        "password": "password-1234",
        "role": role,
    }
    if code is not None:
        body["code"] = code
    return body


@pytest.mark.asyncio
async def test_login_success_returns_valid_jwt(client, make_user, test_settings):
    user = await make_user("alice@example.com")

    res = await client.post("/auth/login", json={"email": "alice@example.com", "password": "password-1234"})

    assert res.status_code == 200
    body = res.json()
    assert body["tokenType"] == "bearer"
    assert body["role"] == "INSTRUCTOR"

    token_data = decode_access_token(test_settings, body["accessToken"])
    assert token_data.user_id == user.id
    assert token_data.role == "INSTRUCTOR"


@pytest.mark.asyncio
async def test_login_invalid_password_401(client, make_user):
    await make_user("bob@example.com")

    res = await client.post("/auth/login", json={"email": "bob@example.com", "password": "wrong-password"})

    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_unknown_user_401(client):
    res = await client.post("/auth/login", json={"email": "nobody@example.com", "password": "does-not-matter"})

    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_login_validation_error_missing_password_422(client):
    res = await client.post("/auth/login", json={"email": "alice@example.com"})
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_signup_instructor_provisions_code(client, db_session):
    res = await client.post("/auth/signup", json=_signup_body("coach@example.com", role="INSTRUCTOR"))

    assert res.status_code == 201
    body = res.json()
    assert body["role"] == "INSTRUCTOR"
    assert body["firstName"] == "Ana"
    assert "password" not in body and "passwordHash" not in body

    result = await db_session.execute(select(InstructorCode).where(InstructorCode.instructor_id == body["id"]))
    assert len(result.scalar_one().code) == 6


@pytest.mark.asyncio
async def test_signup_student_links_to_code_owner(client, make_user, db_session):
    coach = await make_user("coach@example.com", code="ABCD23")

    res = await client.post("/auth/signup", json=_signup_body("kid@example.com", role="STUDENT", code="abcd23"))

    assert res.status_code == 201
    student = await db_session.get(User, res.json()["id"])
    assert student.role == UserRole.STUDENT
    assert student.instructor_id == coach.id


@pytest.mark.asyncio
async def test_signup_student_without_code_422(client):
    res = await client.post("/auth/signup", json=_signup_body("kid@example.com", role="STUDENT"))
    assert res.status_code == 422


@pytest.mark.asyncio
async def test_signup_student_with_unknown_code_422(client):
    res = await client.post("/auth/signup", json=_signup_body("kid@example.com", role="STUDENT", code="ZZZZ99"))

    assert res.status_code == 422
    assert res.json()["detail"] == "Invalid instructor code"


@pytest.mark.asyncio
async def test_signup_duplicate_email_409(client, make_user):
    await make_user("taken@example.com")

    res = await client.post("/auth/signup", json=_signup_body("Taken@example.com", role="INSTRUCTOR"))

    assert res.status_code == 409


@pytest.mark.asyncio
async def test_protected_route_requires_token(client):
    res = await client.get("/instructor/routines")
    assert res.status_code == 401


@pytest.mark.asyncio
async def test_expired_token_rejected(client, make_user, test_settings):
    user = await make_user("late@example.com")
    expired_settings = Settings(
        database_url=test_settings.database_url,
        jwt_secret=test_settings.jwt_secret,
        jwt_access_ttl_seconds=-10,
    )
    token = create_access_token(expired_settings, user_id=user.id, role="INSTRUCTOR")

    res = await client.get("/instructor/routines", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401
    assert res.json()["detail"] == "Invalid token"


@pytest.mark.asyncio
async def test_token_with_wrong_signature_rejected(client, make_user, test_settings):
    user = await make_user("forged@example.com")
    forged_settings = Settings(database_url=test_settings.database_url, jwt_secret="some-other-secret")
    token = create_access_token(forged_settings, user_id=user.id, role="INSTRUCTOR")

    res = await client.get("/instructor/routines", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401


@pytest.mark.asyncio
async def test_token_role_must_match_stored_role(client, make_user, test_settings):
    student = await make_user("kid@example.com", role=UserRole.STUDENT)
    token = create_access_token(test_settings, user_id=student.id, role="INSTRUCTOR")

    res = await client.get("/instructor/routines", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401


@pytest.mark.asyncio
async def test_wrong_role_is_403(client, make_user, login):
    await make_user("kid@example.com", role=UserRole.STUDENT)
    headers = await login("kid@example.com")

    res = await client.get("/instructor/routines", headers=headers)

    assert res.status_code == 403


@pytest.mark.asyncio
async def test_signup_password_over_72_bytes_422(client):
    # 40 characters, 80 bytes in UTF-8.
    body = _signup_body("accent@example.com", role="INSTRUCTOR")
    body["password"] = "é" * 40

    res = await client.post("/auth/signup", json=body)

    assert res.status_code == 422


@pytest.mark.asyncio
async def test_signup_blank_name_422(client, db_session):
    body = _signup_body("blank@example.com", role="INSTRUCTOR")
    body["lastName"] = "   "

    res = await client.post("/auth/signup", json=body)

    assert res.status_code == 422
    assert res.json()["detail"] == "Last name must not be empty"
    result = await db_session.execute(select(User).where(User.email == "blank@example.com"))
    assert result.scalar_one_or_none() is None
