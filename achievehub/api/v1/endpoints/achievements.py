"""
Achievements API
Students submit, admins review, everyone sees only what their role allows
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import (
    get_db,
    get_request_context,
    require_reviewer,
    require_student,
)
from achievehub.config import settings
from achievehub.core.exceptions import NotFound
from achievehub.core.security import RequestContext
from achievehub.schemas.achievement import (
    AchievementListResponse,
    AchievementResponse,
    CategoriesResponse,
    ReviewRequest,
)
from achievehub.schemas.query import QueryCreate, QueryResponse
from achievehub.services.achievement_service import AchievementService, UploadedDocument
from achievehub.services.query_service import QueryService
from achievehub.services.storage_service import get_document_storage
from achievehub.utils.constants import (
    ACHIEVEMENT_CATEGORIES,
    REVIEWER_ROLES,
    Role,
    VerificationStatus,
)

router = APIRouter()


def _as_list(achievements) -> AchievementListResponse:
    return AchievementListResponse(
        total=len(achievements),
        achievements=[AchievementResponse.model_validate(a) for a in achievements],
    )


@router.get("/categories", response_model=CategoriesResponse)
async def list_categories():
    """Fixed list of achievement categories."""
    return CategoriesResponse(categories=ACHIEVEMENT_CATEGORIES)


@router.post("", response_model=AchievementResponse, status_code=status.HTTP_201_CREATED)
async def submit_achievement(
    title: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    date_achieved: Optional[date] = Form(None),
    description: Optional[str] = Form(None),
    document: Optional[UploadFile] = File(None),
    ctx: RequestContext = Depends(require_student),
    db: AsyncSession = Depends(get_db),
    storage=Depends(get_document_storage),
):
    """
    Submit an achievement for verification

    **Auth**: Student (JWT required)

    Multipart form. `document` is optional (PDF, JPG, PNG; max 10MB).
    The achievement starts as `pending`.
    """
    uploaded = None
    if document is not None and document.filename:
        # One byte over the limit is enough to reject
        content = await document.read(settings.MAX_UPLOAD_SIZE + 1)
        uploaded = UploadedDocument(
            filename=document.filename,
            content=content,
            content_type=document.content_type,
        )

    achievement = await AchievementService(db, storage).submit(
        ctx,
        title=title,
        category=category,
        date_achieved=date_achieved,
        description=description,
        document=uploaded,
    )
    return achievement


@router.get("/mine", response_model=AchievementListResponse)
async def list_my_achievements(
    ctx: RequestContext = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    """
    The student's own achievements, newest first

    Each item carries `can_raise_query` and its queries.
    """
    achievements = await AchievementService(db).list_for_student(ctx)
    return _as_list(achievements)


@router.get("", response_model=AchievementListResponse)
async def review_queue(
    search: Optional[str] = Query(None, description="Title, student name or e-mail"),
    status_filter: Optional[str] = Query(None, alias="status"),
    category: Optional[str] = Query(None),
    ctx: RequestContext = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    """
    Review queue: all achievements, newest first

    **Auth**: Admin or Super Admin

    **Query Parameters**:
    - `search`: case-insensitive match on title, student name, student e-mail
    - `status`: `pending` / `verified` / `rejected` / `all`
    - `category`: exact category or `all`
    """
    achievements = await AchievementService(db).review_queue(
        search=search, status=status_filter, category=category
    )
    return _as_list(achievements)


@router.get("/{achievement_id}", response_model=AchievementResponse)
async def get_achievement(
    achievement_id: UUID,
    ctx: RequestContext = Depends(get_request_context),
    db: AsyncSession = Depends(get_db),
):
    """
    One achievement.

    Reviewers see any, students only their own, recruiters only verified ones.
    Anything else answers 404.
    """
    achievement = await AchievementService(db).get(achievement_id)
    if ctx.role in REVIEWER_ROLES:
        return achievement
    if ctx.role == Role.STUDENT and achievement.student_id == ctx.profile_id:
        return achievement
    if (
        ctx.role == Role.RECRUITER
        and achievement.verification_status == VerificationStatus.VERIFIED.value
    ):
        return achievement
    raise NotFound("Achievement not found")


@router.post("/{achievement_id}/review", response_model=AchievementResponse)
async def review_achievement(
    achievement_id: UUID,
    review: ReviewRequest,
    ctx: RequestContext = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    """
    Verify or reject a pending achievement

    **Auth**: Admin or Super Admin

    Rejecting requires `rejection_reason`. An achievement that has already
    been decided answers 409.
    """
    return await AchievementService(db).review(
        ctx, achievement_id, review.decision, review.rejection_reason
    )


@router.post(
    "/{achievement_id}/queries",
    response_model=QueryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def raise_query(
    achievement_id: UUID,
    query_in: QueryCreate,
    ctx: RequestContext = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    """
    Challenge a rejection

    **Auth**: Student owning the achievement. Only rejected achievements accept queries.
    """
    query = await QueryService(db).raise_query(ctx, achievement_id, query_in.query_text)
    return QueryResponse.from_query(query)
