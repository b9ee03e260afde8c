"""
Registration, login and role routing tests
"""
import pytest
from fastapi import HTTPException
from httpx import AsyncClient

from achievehub.core.security import (
    RequestContext,
    create_access_token,
    create_refresh_token,
    decode_token,
    landing_page_for,
)
from achievehub.utils.constants import Role
from conftest import TEST_PASSWORD, auth_headers_for, create_profile


@pytest.fixture
def registration(institution):
    return {
        "email": "new.student@utech.edu",
        "password": "secret1",
        "confirm_password": "secret1",
        "full_name": "New Student",
        "role": "student",
        "institution_id": str(institution.id),
    }


@pytest.mark.asyncio
async def test_register_student(client: AsyncClient, registration, institution):
    response = await client.post("/api/v1/auth/register", json=registration)

    assert response.status_code == 201
    data = response.json()
    assert data["token_type"] == "bearer"
    assert data["redirect_to"] == "/dashboard"
    assert data["user"]["role"] == "student"
    assert data["user"]["institution_id"] == str(institution.id)
    assert data["user"]["institution_name"] == "University of Technology"


@pytest.mark.asyncio
async def test_register_admin_links_institution(client: AsyncClient, registration, institution):
    registration.update(email="dean@utech.edu", role="admin")

    response = await client.post("/api/v1/auth/register", json=registration)

    assert response.status_code == 201
    user = response.json()["user"]
    assert response.json()["redirect_to"] == "/admin"
    assert user["institution_id"] is None
    assert [i["name"] for i in user["institutions"]] == ["University of Technology"]


@pytest.mark.asyncio
async def test_register_recruiter_without_institution(client: AsyncClient, registration):
    registration.update(email="hr@corp.com", role="recruiter", institution_id=None)

    response = await client.post("/api/v1/auth/register", json=registration)

    assert response.status_code == 201
    assert response.json()["redirect_to"] == "/recruiter"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "changes, message",
    [
        ({"password": "12345", "confirm_password": "12345"}, "at least 6 characters"),
        ({"confirm_password": "different"}, "Passwords do not match"),
        ({"institution_id": None}, "Please select your institution"),
        ({"role": "super_admin"}, "cannot be chosen at registration"),
        ({"email": "not-an-email"}, "email"),
    ],
)
async def test_register_validation(client: AsyncClient, registration, changes, message):
    registration.update(changes)

    response = await client.post("/api/v1/auth/register", json=registration)

    assert response.status_code == 422
    assert message in str(response.json()["detail"])


@pytest.mark.asyncio
async def test_register_duplicate_email(client: AsyncClient, registration):
    await client.post("/api/v1/auth/register", json=registration)

    response = await client.post("/api/v1/auth/register", json=registration)

    assert response.status_code == 409


@pytest.mark.asyncio
async def test_register_unknown_institution(client: AsyncClient, registration):
    registration["institution_id"] = "00000000-0000-0000-0000-000000000000"

    response = await client.post("/api/v1/auth/register", json=registration)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, admin):
    response = await client.post("/api/v1/auth/login", json={"email": admin.email, "password": TEST_PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert "access_token" in data
    assert "refresh_token" in data
    assert data["redirect_to"] == "/admin"


@pytest.mark.asyncio
async def test_login_invalid_credentials(client: AsyncClient, student):
    response = await client.post("/api/v1/auth/login", json={"email": student.email, "password": "wrongpassword"})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_login_inactive(client: AsyncClient, db_session, student):
    student.is_active = False
    await db_session.commit()

    response = await client.post("/api/v1/auth/login", json={"email": student.email, "password": TEST_PASSWORD})

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_refresh_issues_new_tokens(client: AsyncClient, student):
    refresh_token = create_refresh_token({"sub": str(student.id)})

    response = await client.post("/api/v1/auth/refresh", json={"refresh_token": refresh_token})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == str(student.id)


@pytest.mark.asyncio
async def test_access_token_cannot_refresh(client: AsyncClient, student):
    access_token = create_access_token({"sub": str(student.id)})

    response = await client.post("/api/v1/auth/refresh", json={"refresh_token": access_token})

    assert response.status_code == 401


@pytest.mark.asyncio
async def test_me(client: AsyncClient, student, student_headers):
    response = await client.get("/api/v1/auth/me", headers=student_headers)

    assert response.status_code == 200
    assert response.json()["email"] == student.email
    assert "password_hash" not in response.json()


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "role, landing",
    [
        (Role.STUDENT, "/dashboard"),
        (Role.ADMIN, "/admin"),
        (Role.SUPER_ADMIN, "/super-admin"),
        (Role.RECRUITER, "/recruiter"),
    ],
)
async def test_landing_per_role(client: AsyncClient, db_session, role, landing):
    profile = await create_profile(db_session, role)

    response = await client.get("/api/v1/auth/landing", headers=auth_headers_for(profile))

    assert response.status_code == 200
    assert response.json() == {"role": role.value, "redirect_to": landing}


def test_every_role_has_a_landing_page():
    for role in Role:
        assert landing_page_for(role).startswith("/")


def test_token_type_is_checked():
    token = create_refresh_token({"sub": "abc"})

    assert decode_token(token, expected_type="refresh")["sub"] == "abc"
    with pytest.raises(HTTPException):
        decode_token(token)


def test_request_context_roles():
    ctx = RequestContext(profile_id=None, role=Role.ADMIN, email="a@b.edu", full_name="A")

    assert ctx.landing_page == "/admin"
    assert ctx.has_role(Role.ADMIN, Role.SUPER_ADMIN)
    assert not ctx.has_role(Role.STUDENT)
