"""
Recruiter features: saved candidates, student portfolios, contact drafts
"""

from collections import OrderedDict
from typing import Dict, List, Optional
from urllib.parse import quote
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.core.exceptions import Conflict, NotFound
from achievehub.core.security import RequestContext
from achievehub.models.achievement import Achievement
from achievehub.models.profile import Profile
from achievehub.models.saved_candidate import SavedCandidate
from achievehub.utils.constants import Role

logger = structlog.get_logger(__name__)


def build_contact_draft(student_name: str, student_email: str, recruiter_name: str) -> Dict[str, str]:
    """Subject, body and mailto link for a first message to a student."""
    subject = f"Opportunity from {recruiter_name}"
    body = (
        f"Dear {student_name},\n\n"
        f"I hope this message finds you well. I am {recruiter_name}, and I came across "
        "your impressive achievements through the student verification platform.\n\n"
        "I would like to discuss potential opportunities that might align with your "
        "skills and accomplishments. Would you be available for a brief conversation?\n\n"
        f"Best regards,\n{recruiter_name}"
    )
    mailto = f"mailto:{student_email}?subject={quote(subject)}&body={quote(body)}"
    return {"to": student_email, "subject": subject, "body": body, "mailto": mailto}


def group_by_category(achievements: List[Achievement]) -> "OrderedDict[str, List[Achievement]]":
    """Group keeping the incoming order inside and across categories."""
    grouped: "OrderedDict[str, List[Achievement]]" = OrderedDict()
    for achievement in achievements:
        grouped.setdefault(achievement.category, []).append(achievement)
    return grouped


class RecruiterService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_student(self, student_id: UUID) -> Profile:
        result = await self.db.execute(
            select(Profile).where(
                Profile.id == student_id,
                Profile.role == Role.STUDENT.value,
            )
        )
        student = result.scalar_one_or_none()
        if student is None:
            raise NotFound("Student not found")
        return student

    async def save_candidate(
        self,
        ctx: RequestContext,
        student_id: UUID,
        notes: Optional[str] = None,
    ) -> SavedCandidate:
        await self.get_student(student_id)

        result = await self.db.execute(
            select(SavedCandidate).where(
                SavedCandidate.recruiter_id == ctx.profile_id,
                SavedCandidate.student_id == student_id,
            )
        )
        if result.scalar_one_or_none() is not None:
            raise Conflict("Candidate already saved")

        saved = SavedCandidate(
            recruiter_id=ctx.profile_id,
            student_id=student_id,
            notes=notes,
        )
        self.db.add(saved)
        try:
            await self.db.commit()
        except IntegrityError:
            # Lost a race with an identical save
            await self.db.rollback()
            raise Conflict("Candidate already saved")

        logger.info("candidate_saved", recruiter_id=str(ctx.profile_id), student_id=str(student_id))
        return await self._get_own(ctx, saved.id)

    async def list_saved(self, ctx: RequestContext) -> List[SavedCandidate]:
        result = await self.db.execute(
            select(SavedCandidate)
            .where(SavedCandidate.recruiter_id == ctx.profile_id)
            .order_by(SavedCandidate.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def is_saved(self, ctx: RequestContext, student_id: UUID) -> Optional[SavedCandidate]:
        result = await self.db.execute(
            select(SavedCandidate).where(
                SavedCandidate.recruiter_id == ctx.profile_id,
                SavedCandidate.student_id == student_id,
            )
        )
        return result.scalar_one_or_none()

    async def update_notes(
        self,
        ctx: RequestContext,
        saved_id: UUID,
        notes: Optional[str],
    ) -> SavedCandidate:
        saved = await self._get_own(ctx, saved_id)
        saved.notes = notes
        await self.db.commit()
        return await self._get_own(ctx, saved_id)

    async def remove_saved(self, ctx: RequestContext, saved_id: UUID) -> None:
        saved = await self._get_own(ctx, saved_id)
        await self.db.delete(saved)
        await self.db.commit()
        logger.info("candidate_removed", recruiter_id=str(ctx.profile_id), saved_id=str(saved_id))

    async def _get_own(self, ctx: RequestContext, saved_id: UUID) -> SavedCandidate:
        result = await self.db.execute(
            select(SavedCandidate)
            .where(
                SavedCandidate.id == saved_id,
                SavedCandidate.recruiter_id == ctx.profile_id,
            )
            .execution_options(populate_existing=True)
        )
        saved = result.scalar_one_or_none()
        if saved is None:
            raise NotFound("Saved candidate not found")
        return saved

    async def contact_draft(self, ctx: RequestContext, student_id: UUID) -> Dict[str, str]:
        student = await self.get_student(student_id)
        return build_contact_draft(student.full_name, student.email, ctx.full_name)
