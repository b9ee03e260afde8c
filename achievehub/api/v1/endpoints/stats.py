"""
Dashboard statistics API
One counter set per role
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import (
    get_db,
    require_recruiter,
    require_reviewer,
    require_student,
    require_super_admin,
)
from achievehub.core.security import RequestContext
from achievehub.schemas.stats import (
    AdminStats,
    RecruiterStats,
    StudentStats,
    SuperAdminStats,
    SystemStats,
)
from achievehub.services.stats_service import StatsService

router = APIRouter()


@router.get("/student", response_model=StudentStats)
async def student_stats(
    ctx: RequestContext = Depends(require_student),
    db: AsyncSession = Depends(get_db),
):
    """Counts of the student's own achievements per status."""
    return await StatsService(db).student(ctx.profile_id)


@router.get("/admin", response_model=AdminStats)
async def admin_stats(
    ctx: RequestContext = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    return await StatsService(db).admin()


@router.get("/system", response_model=SystemStats)
async def system_stats(
    ctx: RequestContext = Depends(require_reviewer),
    db: AsyncSession = Depends(get_db),
):
    """Totals plus verification and query resolution rates (whole percent)."""
    return await StatsService(db).system()


@router.get("/super-admin", response_model=SuperAdminStats)
async def super_admin_stats(
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    return await StatsService(db).super_admin()


@router.get("/recruiter", response_model=RecruiterStats)
async def recruiter_stats(
    ctx: RequestContext = Depends(require_recruiter),
    db: AsyncSession = Depends(get_db),
):
    """Verified achievements, distinct students and per-category counts."""
    return await StatsService(db).recruiter()
