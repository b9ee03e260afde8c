"""
Query sub-flow for rejected achievements.

A student challenges a rejection, an admin answers once. Answering never
changes the achievement's own status.
"""

from typing import List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.core.exceptions import Conflict, NotFound
from achievehub.core.security import RequestContext
from achievehub.db.base import utcnow
from achievehub.models.achievement import Achievement
from achievehub.models.query import AchievementQuery
from achievehub.utils.constants import QueryStatus, VerificationStatus
from achievehub.utils.validators import require_text

logger = structlog.get_logger(__name__)


class QueryService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, query_id: UUID) -> AchievementQuery:
        query = await self._find(query_id)
        if query is None:
            raise NotFound("Query not found")
        return query

    async def _find(self, query_id: UUID) -> Optional[AchievementQuery]:
        result = await self.db.execute(
            select(AchievementQuery)
            .where(AchievementQuery.id == query_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def raise_query(
        self,
        ctx: RequestContext,
        achievement_id: UUID,
        query_text: Optional[str],
    ) -> AchievementQuery:
        """Open a query on one of the caller's rejected achievements."""
        text = require_text(query_text, "Query text")

        result = await self.db.execute(
            select(Achievement)
            .where(
                Achievement.id == achievement_id,
                Achievement.student_id == ctx.profile_id,
            )
            .execution_options(populate_existing=True)
        )
        achievement = result.scalar_one_or_none()
        # Someone else's achievement looks the same as a missing one
        if achievement is None:
            raise NotFound("Achievement not found")
        if achievement.verification_status != VerificationStatus.REJECTED.value:
            raise Conflict("Queries can only be raised for rejected achievements")

        query = AchievementQuery(
            achievement=achievement,
            student_id=ctx.profile_id,
            query_text=text,
            status=QueryStatus.OPEN.value,
        )
        self.db.add(query)
        await self.db.commit()

        logger.info(
            "query_raised",
            query_id=str(query.id),
            achievement_id=str(achievement_id),
            student_id=str(ctx.profile_id),
        )
        return await self.get(query.id)

    async def respond(
        self,
        ctx: RequestContext,
        query_id: UUID,
        response_text: Optional[str],
    ) -> AchievementQuery:
        """Answer and resolve a query. One-shot: resolved queries are final."""
        response = require_text(response_text, "Response")

        now = utcnow()
        result = await self.db.execute(
            update(AchievementQuery)
            .where(
                AchievementQuery.id == query_id,
                AchievementQuery.status != QueryStatus.RESOLVED.value,
            )
            .values(
                status=QueryStatus.RESOLVED.value,
                admin_response=response,
                responded_by=ctx.profile_id,
                responded_at=now,
                updated_at=now,
            )
            .execution_options(synchronize_session=False)
        )

        if result.rowcount == 0:
            if await self._find(query_id) is None:
                raise NotFound("Query not found")
            raise Conflict("Query has already been resolved")

        await self.db.commit()
        logger.info("query_resolved", query_id=str(query_id), admin_id=str(ctx.profile_id))
        return await self.get(query_id)

    async def list_for_student(self, ctx: RequestContext) -> List[AchievementQuery]:
        result = await self.db.execute(
            select(AchievementQuery)
            .where(AchievementQuery.student_id == ctx.profile_id)
            .order_by(AchievementQuery.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def list_all(self, status: Optional[QueryStatus] = None) -> List[AchievementQuery]:
        """Admin view of every query, newest first."""
        query = (
            select(AchievementQuery)
            .order_by(AchievementQuery.created_at.desc())
            .execution_options(populate_existing=True)
        )
        if status is not None:
            query = query.where(AchievementQuery.status == status.value)
        result = await self.db.execute(query)
        return list(result.scalars().all())
