"""
Achievement verification lifecycle.

pending -> verified | rejected, decided once by an admin. Reviews are written
with a conditional UPDATE on ``verification_status = 'pending'`` so two admins
racing on the same achievement cannot overwrite each other: the second one
gets a Conflict.
"""

import time
from dataclasses import dataclass
from datetime import date
from typing import List, Optional
from uuid import UUID

import structlog
from fastapi.concurrency import run_in_threadpool
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.config import settings
from achievehub.core.exceptions import Conflict, NotFound, ValidationFailed
from achievehub.core.security import RequestContext
from achievehub.db.base import utcnow
from achievehub.models.achievement import Achievement
from achievehub.services import search_service
from achievehub.services.storage_service import CONTENT_TYPES, document_path
from achievehub.utils.constants import RecencyWindow, ReviewDecision, VerificationStatus
from achievehub.utils.validators import (
    require_text,
    validate_category,
    validate_document,
)

logger = structlog.get_logger(__name__)


@dataclass
class UploadedDocument:
    """Supporting document as received from the client."""

    filename: Optional[str]
    content: bytes
    content_type: Optional[str] = None


class AchievementService:
    """Submission, review and read projections for achievements."""

    def __init__(self, db: AsyncSession, storage=None):
        self.db = db
        self.storage = storage

    async def get(self, achievement_id: UUID) -> Achievement:
        achievement = await self._find(achievement_id)
        if achievement is None:
            raise NotFound("Achievement not found")
        return achievement

    async def _find(self, achievement_id: UUID) -> Optional[Achievement]:
        result = await self.db.execute(
            select(Achievement)
            .where(Achievement.id == achievement_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def submit(
        self,
        ctx: RequestContext,
        title: Optional[str],
        category: Optional[str],
        date_achieved: Optional[date],
        description: Optional[str] = None,
        document: Optional[UploadedDocument] = None,
    ) -> Achievement:
        """Create a pending achievement owned by the caller.

        Every check runs before the document is stored or a row is written.
        """
        title = require_text(title, "Title")
        category = validate_category(category)
        if date_achieved is None:
            raise ValidationFailed("Date achieved is required")

        extension = None
        if document is not None:
            extension = validate_document(
                document.filename,
                len(document.content),
                settings.MAX_UPLOAD_SIZE,
                settings.ALLOWED_DOCUMENT_EXTENSIONS,
            )

        path = None
        document_url = None
        if document is not None:
            path = document_path(ctx.profile_id, int(time.time() * 1000), extension)
            document_url = await run_in_threadpool(
                self.storage.put, path, document.content, CONTENT_TYPES.get(extension)
            )

        achievement = Achievement(
            student_id=ctx.profile_id,
            title=title,
            description=(description or "").strip() or None,
            category=category,
            date_achieved=date_achieved,
            document_url=document_url,
            verification_status=VerificationStatus.PENDING.value,
        )
        self.db.add(achievement)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            if path is not None:
                await run_in_threadpool(self.storage.delete, path)
            raise

        logger.info(
            "achievement_submitted",
            achievement_id=str(achievement.id),
            student_id=str(ctx.profile_id),
            category=category,
            has_document=document_url is not None,
        )
        return await self.get(achievement.id)

    async def review(
        self,
        ctx: RequestContext,
        achievement_id: UUID,
        decision: ReviewDecision,
        rejection_reason: Optional[str] = None,
    ) -> Achievement:
        """Verify or reject a pending achievement."""
        reason = None
        if decision == ReviewDecision.REJECT:
            reason = require_text(rejection_reason, "Rejection reason")
            new_status = VerificationStatus.REJECTED
        else:
            new_status = VerificationStatus.VERIFIED

        now = utcnow()
        result = await self.db.execute(
            update(Achievement)
            .where(
                Achievement.id == achievement_id,
                Achievement.verification_status == VerificationStatus.PENDING.value,
            )
            .values(
                verification_status=new_status.value,
                rejection_reason=reason,
                verified_by=ctx.profile_id,
                verified_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            existing = await self._find(achievement_id)
            if existing is None:
                raise NotFound("Achievement not found")
            raise Conflict(f"Achievement has already been {existing.verification_status}")

        await self.db.commit()
        logger.info(
            "achievement_reviewed",
            achievement_id=str(achievement_id),
            admin_id=str(ctx.profile_id),
            status=new_status.value,
        )
        return await self.get(achievement_id)

    async def list_for_student(self, ctx: RequestContext) -> List[Achievement]:
        """The caller's own achievements, newest first."""
        result = await self.db.execute(
            select(Achievement)
            .where(Achievement.student_id == ctx.profile_id)
            .order_by(Achievement.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def review_queue(
        self,
        search: Optional[str] = None,
        status: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[Achievement]:
        """All achievements regardless of owner, newest first, filtered."""
        result = await self.db.execute(
            select(Achievement)
            .order_by(Achievement.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return search_service.filter_review_queue(
            result.scalars().all(), search=search, status=status, category=category
        )

    async def discover(
        self,
        today: date,
        search: Optional[str] = None,
        category: Optional[str] = None,
        institution: Optional[str] = None,
        window: RecencyWindow = RecencyWindow.ALL,
    ) -> List[Achievement]:
        """Verified achievements for recruiters, most recently achieved first."""
        result = await self.db.execute(
            select(Achievement)
            .where(Achievement.verification_status == VerificationStatus.VERIFIED.value)
            .order_by(Achievement.date_achieved.desc(), Achievement.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return search_service.filter_discovery(
            result.scalars().all(),
            today=today,
            search=search,
            category=category,
            institution=institution,
            window=window,
        )

    async def verified_for_student(self, student_id: UUID) -> List[Achievement]:
        result = await self.db.execute(
            select(Achievement)
            .where(
                Achievement.student_id == student_id,
                Achievement.verification_status == VerificationStatus.VERIFIED.value,
            )
            .order_by(Achievement.date_achieved.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())
