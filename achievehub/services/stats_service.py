"""
Dashboard counters per role.
"""

from typing import Dict
from uuid import UUID

from sqlalchemy import distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.models.achievement import Achievement
from achievehub.models.institution import Institution
from achievehub.models.profile import Profile
from achievehub.models.query import AchievementQuery
from achievehub.utils.constants import QueryStatus, Role, VerificationStatus


def percentage(part: int, whole: int) -> int:
    """Rounded integer percentage, 0 when there is nothing to divide by."""
    if not whole:
        return 0
    return int(round(part * 100.0 / whole))


class StatsService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _status_counts(self, student_id: UUID = None) -> Dict[str, int]:
        query = select(Achievement.verification_status, func.count(Achievement.id)).group_by(
            Achievement.verification_status
        )
        if student_id is not None:
            query = query.where(Achievement.student_id == student_id)
        rows = (await self.db.execute(query)).all()
        counts = {s.value: 0 for s in VerificationStatus}
        counts.update({status: count for status, count in rows})
        return counts

    async def _query_counts(self) -> Dict[str, int]:
        rows = (
            await self.db.execute(
                select(AchievementQuery.status, func.count(AchievementQuery.id)).group_by(
                    AchievementQuery.status
                )
            )
        ).all()
        counts = {s.value: 0 for s in QueryStatus}
        counts.update({status: count for status, count in rows})
        return counts

    async def student(self, student_id: UUID) -> dict:
        counts = await self._status_counts(student_id)
        return {
            "total": sum(counts.values()),
            "verified": counts[VerificationStatus.VERIFIED.value],
            "pending": counts[VerificationStatus.PENDING.value],
            "rejected": counts[VerificationStatus.REJECTED.value],
        }

    async def admin(self) -> dict:
        counts = await self._status_counts()
        queries = await self._query_counts()
        return {
            "pending": counts[VerificationStatus.PENDING.value],
            "verified": counts[VerificationStatus.VERIFIED.value],
            "rejected": counts[VerificationStatus.REJECTED.value],
            "open_queries": queries[QueryStatus.OPEN.value],
        }

    async def system(self) -> dict:
        counts = await self._status_counts()
        queries = await self._query_counts()
        total = sum(counts.values())
        verified = counts[VerificationStatus.VERIFIED.value]
        resolved = queries[QueryStatus.RESOLVED.value]
        return {
            "total_achievements": total,
            "pending_verifications": counts[VerificationStatus.PENDING.value],
            "verified_achievements": verified,
            "rejected_achievements": counts[VerificationStatus.REJECTED.value],
            "open_queries": queries[QueryStatus.OPEN.value],
            "resolved_queries": resolved,
            "verification_rate": percentage(verified, total),
            "resolution_rate": percentage(resolved, sum(queries.values())),
        }

    async def super_admin(self) -> dict:
        institutions = (await self.db.execute(select(func.count(Institution.id)))).scalar_one()
        rows = (
            await self.db.execute(select(Profile.role, func.count(Profile.id)).group_by(Profile.role))
        ).all()
        by_role = {role: count for role, count in rows}
        return {
            "total_institutions": institutions,
            "total_users": sum(by_role.values()),
            "total_students": by_role.get(Role.STUDENT.value, 0),
            "total_admins": by_role.get(Role.ADMIN.value, 0),
            "total_recruiters": by_role.get(Role.RECRUITER.value, 0),
        }

    async def recruiter(self) -> dict:
        verified = Achievement.verification_status == VerificationStatus.VERIFIED.value
        total, students = (
            await self.db.execute(
                select(func.count(Achievement.id), func.count(distinct(Achievement.student_id))).where(
                    verified
                )
            )
        ).one()
        rows = (
            await self.db.execute(
                select(Achievement.category, func.count(Achievement.id))
                .where(verified)
                .group_by(Achievement.category)
                .order_by(func.count(Achievement.id).desc(), Achievement.category)
            )
        ).all()
        return {
            "total_achievements": total,
            "unique_students": students,
            "categories": {category: count for category, count in rows},
        }
