"""
Achievement submission and review tests
"""
import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from achievehub.config import settings
from achievehub.models import Achievement
from achievehub.utils.constants import Role, VerificationStatus
from conftest import auth_headers_for, create_achievement, create_profile

SUBMIT_FORM = {
    "title": "Dean's List",
    "category": "Academic Excellence",
    "date_achieved": "2024-05-01",
    "description": "Fall semester",
}


async def _count_achievements(db_session) -> int:
    return (await db_session.execute(select(func.count(Achievement.id)))).scalar_one()


@pytest.mark.asyncio
async def test_submit_starts_pending(client: AsyncClient, student, student_headers):
    """A fresh submission is pending with no reviewer fields"""
    response = await client.post("/api/v1/achievements", data=SUBMIT_FORM, headers=student_headers)

    assert response.status_code == 201
    data = response.json()
    assert data["verification_status"] == "pending"
    assert data["verified_by"] is None
    assert data["verified_at"] is None
    assert data["rejection_reason"] is None
    assert data["student_id"] == str(student.id)
    assert data["student"]["institution_name"] == "University of Technology"
    assert data["can_review"] is True
    assert data["can_raise_query"] is False


@pytest.mark.asyncio
async def test_submit_with_document_is_stored_and_served(client: AsyncClient, student, student_headers, storage):
    """The document lands under the student's folder and can be downloaded"""
    content = b"%PDF-1.4 certificate"
    response = await client.post(
        "/api/v1/achievements",
        data=SUBMIT_FORM,
        files={"document": ("certificate.PDF", content, "application/pdf")},
        headers=student_headers,
    )

    assert response.status_code == 201
    url = response.json()["document_url"]
    assert url.startswith(f"/api/v1/documents/{student.id}/")
    assert url.endswith(".pdf")

    download = await client.get(url)
    assert download.status_code == 200
    assert download.content == content
    assert download.headers["content-type"] == "application/pdf"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"title": "   "}, "Title is required"),
        ({"category": "Cooking"}, "Category must be one of"),
        ({"date_achieved": None}, "Date achieved is required"),
    ],
)
async def test_submit_rejects_invalid_fields(client: AsyncClient, db_session, student_headers, overrides, message):
    form = {k: v for k, v in {**SUBMIT_FORM, **overrides}.items() if v is not None}

    response = await client.post("/api/v1/achievements", data=form, headers=student_headers)

    assert response.status_code == 422
    assert message in response.json()["detail"]
    assert await _count_achievements(db_session) == 0


@pytest.mark.asyncio
async def test_submit_rejects_unsupported_document(client: AsyncClient, db_session, student_headers, storage):
    response = await client.post(
        "/api/v1/achievements",
        data=SUBMIT_FORM,
        files={"document": ("payload.exe", b"MZ", "application/octet-stream")},
        headers=student_headers,
    )

    assert response.status_code == 422
    assert "Unsupported file type" in response.json()["detail"]
    assert await _count_achievements(db_session) == 0
    assert not storage.root.exists()


@pytest.mark.asyncio
async def test_submit_rejects_oversized_document(client: AsyncClient, db_session, student_headers, storage, monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_SIZE", 1024)

    response = await client.post(
        "/api/v1/achievements",
        data=SUBMIT_FORM,
        files={"document": ("scan.png", b"x" * 2048, "image/png")},
        headers=student_headers,
    )

    assert response.status_code == 422
    assert "File size" in response.json()["detail"]
    assert await _count_achievements(db_session) == 0
    assert not storage.root.exists()


@pytest.mark.asyncio
async def test_only_students_submit(client: AsyncClient, recruiter_headers):
    """Other roles get 403 with their own landing page"""
    response = await client.post("/api/v1/achievements", data=SUBMIT_FORM, headers=recruiter_headers)

    assert response.status_code == 403
    assert response.json()["redirect_to"] == "/recruiter"


@pytest.mark.asyncio
async def test_verify_sets_reviewer_fields(client: AsyncClient, db_session, student, admin, admin_headers):
    achievement = await create_achievement(db_session, student)

    response = await client.post(
        f"/api/v1/achievements/{achievement.id}/review",
        json={"decision": "verify", "rejection_reason": "ignored"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["verification_status"] == "verified"
    assert data["verified_by"] == str(admin.id)
    assert data["verified_at"] is not None
    assert data["rejection_reason"] is None
    assert data["can_review"] is False


@pytest.mark.asyncio
async def test_reject_requires_reason(client: AsyncClient, db_session, student, admin_headers):
    """Blank reason fails and the achievement stays pending"""
    achievement = await create_achievement(db_session, student)

    response = await client.post(
        f"/api/v1/achievements/{achievement.id}/review",
        json={"decision": "reject", "rejection_reason": "   "},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Rejection reason is required"

    current = await client.get(f"/api/v1/achievements/{achievement.id}", headers=admin_headers)
    assert current.json()["verification_status"] == "pending"
    assert current.json()["can_review"] is True


@pytest.mark.asyncio
async def test_second_review_is_refused(client: AsyncClient, db_session, student, admin_headers, super_admin_headers):
    achievement = await create_achievement(db_session, student)
    url = f"/api/v1/achievements/{achievement.id}/review"

    first = await client.post(url, json={"decision": "verify"}, headers=admin_headers)
    assert first.status_code == 200

    second = await client.post(
        url,
        json={"decision": "reject", "rejection_reason": "Changed my mind"},
        headers=super_admin_headers,
    )
    assert second.status_code == 409
    assert second.json()["detail"] == "Achievement has already been verified"

    current = await client.get(f"/api/v1/achievements/{achievement.id}", headers=admin_headers)
    assert current.json()["verification_status"] == "verified"
    assert current.json()["rejection_reason"] is None


@pytest.mark.asyncio
async def test_review_unknown_achievement(client: AsyncClient, admin_headers):
    response = await client.post(
        "/api/v1/achievements/00000000-0000-0000-0000-000000000000/review",
        json={"decision": "verify"},
        headers=admin_headers,
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_student_cannot_review(client: AsyncClient, db_session, student, student_headers):
    achievement = await create_achievement(db_session, student)

    response = await client.post(
        f"/api/v1/achievements/{achievement.id}/review",
        json={"decision": "verify"},
        headers=student_headers,
    )

    assert response.status_code == 403
    assert response.json()["redirect_to"] == "/dashboard"


@pytest.mark.asyncio
async def test_student_lists_only_own(client: AsyncClient, db_session, student, student_headers, institution):
    other = await create_profile(db_session, Role.STUDENT, institution)
    await create_achievement(db_session, student, title="Mine")
    await create_achievement(db_session, other, title="Theirs")

    response = await client.get("/api/v1/achievements/mine", headers=student_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["achievements"][0]["title"] == "Mine"


@pytest.mark.asyncio
async def test_get_hides_other_students_achievement(client: AsyncClient, db_session, student, institution):
    other = await create_profile(db_session, Role.STUDENT, institution)
    achievement = await create_achievement(db_session, other)

    response = await client.get(f"/api/v1/achievements/{achievement.id}", headers=auth_headers_for(student))

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_review_queue_filters(client: AsyncClient, db_session, student, admin_headers, institution):
    other = await create_profile(db_session, Role.STUDENT, institution, full_name="Bob Builder")
    await create_achievement(db_session, student, title="Dean's List")
    await create_achievement(
        db_session,
        other,
        title="Chess Open",
        category="Competitions & Awards",
        status=VerificationStatus.VERIFIED,
    )

    everything = await client.get("/api/v1/achievements", headers=admin_headers)
    assert everything.json()["total"] == 2

    by_name = await client.get("/api/v1/achievements", params={"search": "bob"}, headers=admin_headers)
    assert [a["title"] for a in by_name.json()["achievements"]] == ["Chess Open"]

    pending = await client.get("/api/v1/achievements", params={"status": "pending"}, headers=admin_headers)
    assert [a["title"] for a in pending.json()["achievements"]] == ["Dean's List"]

    by_category = await client.get(
        "/api/v1/achievements",
        params={"category": "Competitions & Awards", "status": "all"},
        headers=admin_headers,
    )
    assert by_category.json()["total"] == 1
    assert by_category.json()["achievements"][0]["can_review"] is False


@pytest.mark.asyncio
async def test_categories(client: AsyncClient):
    response = await client.get("/api/v1/achievements/categories")

    assert response.status_code == 200
    categories = response.json()["categories"]
    assert len(categories) == 10
    assert "Academic Excellence" in categories
