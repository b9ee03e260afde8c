"""
Dashboard statistics tests
"""
import pytest
from httpx import AsyncClient

from achievehub.models import AchievementQuery
from achievehub.services.stats_service import percentage
from achievehub.utils.constants import QueryStatus, Role, VerificationStatus
from conftest import create_achievement, create_profile


def test_percentage():
    assert percentage(0, 0) == 0
    assert percentage(1, 3) == 33
    assert percentage(2, 3) == 67
    assert percentage(5, 5) == 100


@pytest.fixture
async def seeded(db_session, student, institution):
    other = await create_profile(db_session, Role.STUDENT, institution)
    await create_achievement(db_session, student, status=VerificationStatus.VERIFIED)
    await create_achievement(db_session, student, status=VerificationStatus.PENDING)
    rejected = await create_achievement(db_session, student, status=VerificationStatus.REJECTED)
    await create_achievement(
        db_session, other, category="Sports & Athletics", status=VerificationStatus.VERIFIED
    )
    db_session.add_all(
        [
            AchievementQuery(
                achievement_id=rejected.id,
                student_id=student.id,
                query_text="Why?",
                status=QueryStatus.OPEN.value,
            ),
            AchievementQuery(
                achievement_id=rejected.id,
                student_id=student.id,
                query_text="Again?",
                status=QueryStatus.RESOLVED.value,
                admin_response="Answered",
            ),
        ]
    )
    await db_session.commit()


@pytest.mark.asyncio
async def test_student_stats(client: AsyncClient, seeded, student_headers):
    response = await client.get("/api/v1/stats/student", headers=student_headers)

    assert response.status_code == 200
    assert response.json() == {"total": 3, "verified": 1, "pending": 1, "rejected": 1}


@pytest.mark.asyncio
async def test_admin_and_system_stats(client: AsyncClient, seeded, admin_headers):
    admin_stats = await client.get("/api/v1/stats/admin", headers=admin_headers)
    system = await client.get("/api/v1/stats/system", headers=admin_headers)

    assert admin_stats.json() == {"pending": 1, "verified": 2, "rejected": 1, "open_queries": 1}
    data = system.json()
    assert data["total_achievements"] == 4
    assert data["verification_rate"] == 50
    assert data["resolution_rate"] == 50
    assert data["resolved_queries"] == 1


@pytest.mark.asyncio
async def test_system_stats_empty(client: AsyncClient, admin_headers):
    response = await client.get("/api/v1/stats/system", headers=admin_headers)

    assert response.json()["verification_rate"] == 0
    assert response.json()["resolution_rate"] == 0


@pytest.mark.asyncio
async def test_recruiter_stats(client: AsyncClient, seeded, recruiter_headers):
    response = await client.get("/api/v1/stats/recruiter", headers=recruiter_headers)

    assert response.json() == {
        "total_achievements": 2,
        "unique_students": 2,
        "categories": {"Academic Excellence": 1, "Sports & Athletics": 1},
    }


@pytest.mark.asyncio
async def test_super_admin_stats(client: AsyncClient, seeded, admin, recruiter, super_admin_headers):
    response = await client.get("/api/v1/stats/super-admin", headers=super_admin_headers)

    assert response.json() == {
        "total_institutions": 1,
        "total_users": 5,
        "total_students": 2,
        "total_admins": 1,
        "total_recruiters": 1,
    }


@pytest.mark.asyncio
async def test_student_cannot_see_system_stats(client: AsyncClient, student_headers):
    response = await client.get("/api/v1/stats/system", headers=student_headers)

    assert response.status_code == 403
    assert response.json()["redirect_to"] == "/dashboard"
