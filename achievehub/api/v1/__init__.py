"""API v1 routes."""

from fastapi import APIRouter

from achievehub.api.v1 import auth
from achievehub.api.v1.endpoints import (
    achievements,
    documents,
    institutions,
    queries,
    recruiter,
    stats,
    users,
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(achievements.router, prefix="/achievements", tags=["Achievements"])
api_router.include_router(queries.router, prefix="/queries", tags=["Queries"])
api_router.include_router(recruiter.router, prefix="/recruiter", tags=["Recruiter"])
api_router.include_router(stats.router, prefix="/stats", tags=["Statistics"])
api_router.include_router(documents.router, prefix="/documents", tags=["Documents"])

# Super admin management
api_router.include_router(institutions.router, prefix="/institutions", tags=["Institutions"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
