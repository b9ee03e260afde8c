"""
Recruiter API
Discovery of verified achievements, student portfolios and saved candidates
"""

from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import get_db, require_recruiter
from achievehub.core.security import RequestContext
from achievehub.schemas.achievement import (
    AchievementListResponse,
    AchievementResponse,
    StudentPortfolioResponse,
    StudentSummary,
)
from achievehub.schemas.saved_candidate import (
    ContactDraftResponse,
    SavedCandidateCreate,
    SavedCandidateResponse,
    SavedCandidatesResponse,
    SavedCandidateUpdate,
    SavedCheckResponse,
)
from achievehub.services.achievement_service import AchievementService
from achievehub.services.recruiter_service import RecruiterService, group_by_category
from achievehub.utils.constants import RecencyWindow

router = APIRouter()


def get_today() -> date:
    """Reference date for recency windows (overridable in tests)."""
    return date.today()


@router.get("/achievements", response_model=AchievementListResponse)
async def discover_achievements(
    search: Optional[str] = Query(None, description="Title, description, student name or category"),
    category: Optional[str] = Query(None),
    institution: Optional[str] = Query(None, description="Institution name"),
    window: RecencyWindow = Query(RecencyWindow.ALL, description="all / recent / last_two_years"),
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
    today: date = Depends(get_today),
):
    """
    Verified achievements, most recently achieved first

    **Auth**: Recruiter

    Pending and rejected achievements are never returned.
    """
    achievements = await AchievementService(db).discover(
        today=today,
        search=search,
        category=category,
        institution=institution,
        window=window,
    )
    return AchievementListResponse(
        total=len(achievements),
        achievements=[AchievementResponse.model_validate(a) for a in achievements],
    )


@router.get("/students/{student_id}", response_model=StudentPortfolioResponse)
async def student_portfolio(
    student_id: UUID,
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """A student's verified achievements grouped by category."""
    student = await RecruiterService(db).get_student(student_id)
    achievements = await AchievementService(db).verified_for_student(student_id)

    grouped = group_by_category(achievements)
    return StudentPortfolioResponse(
        student=StudentSummary.model_validate(student),
        total_verified=len(achievements),
        with_documents=sum(1 for a in achievements if a.document_url),
        achievements_by_category={
            category: [AchievementResponse.model_validate(a) for a in items]
            for category, items in grouped.items()
        },
    )


@router.get("/students/{student_id}/contact", response_model=ContactDraftResponse)
async def contact_student(
    student_id: UUID,
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """Pre-filled e-mail draft and mailto link for a student."""
    return await RecruiterService(db).contact_draft(ctx, student_id)


@router.get("/saved-candidates", response_model=SavedCandidatesResponse)
async def list_saved_candidates(
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """The recruiter's saved candidates, newest first."""
    saved = await RecruiterService(db).list_saved(ctx)
    return SavedCandidatesResponse(
        total=len(saved),
        saved_candidates=[SavedCandidateResponse.model_validate(s) for s in saved],
    )


@router.post(
    "/saved-candidates",
    response_model=SavedCandidateResponse,
    status_code=status.HTTP_201_CREATED,
)
async def save_candidate(
    saved_in: SavedCandidateCreate,
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """
    Save a student

    Saving the same student twice answers 409.
    """
    return await RecruiterService(db).save_candidate(ctx, saved_in.student_id, saved_in.notes)


@router.get("/saved-candidates/check/{student_id}", response_model=SavedCheckResponse)
async def check_saved(
    student_id: UUID,
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    saved = await RecruiterService(db).is_saved(ctx, student_id)
    return SavedCheckResponse(
        saved=saved is not None,
        saved_candidate=SavedCandidateResponse.model_validate(saved) if saved else None,
    )


@router.patch("/saved-candidates/{saved_id}", response_model=SavedCandidateResponse)
async def update_saved_candidate(
    saved_id: UUID,
    update_in: SavedCandidateUpdate,
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """Replace the notes on a saved candidate."""
    return await RecruiterService(db).update_notes(ctx, saved_id, update_in.notes)


@router.delete("/saved-candidates/{saved_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_saved_candidate(
    saved_id: UUID,
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """Remove a saved candidate. Other recruiters' rows answer 404."""
    await RecruiterService(db).remove_saved(ctx, saved_id)
