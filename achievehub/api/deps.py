"""
API Dependencies
Authentication, request context and role checks for endpoints
"""

from typing import AsyncGenerator
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.core.exceptions import PermissionDenied
from achievehub.core.security import RequestContext, decode_token
from achievehub.db.session import get_db as get_db_session
from achievehub.models.profile import Profile
from achievehub.utils.constants import Role

# HTTPBearer for simple token authentication in Swagger (just paste the access token)
security = HTTPBearer()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    async for session in get_db_session():
        yield session


async def get_current_profile(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> Profile:
    """Get current authenticated profile from Bearer token."""
    payload = decode_token(credentials.credentials)

    profile_id = payload.get("sub")
    if profile_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    result = await db.execute(select(Profile).where(Profile.id == parse_subject(profile_id)))
    profile = result.scalar_one_or_none()

    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    if not profile.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Inactive user",
        )

    return profile


async def get_request_context(
    profile: Profile = Depends(get_current_profile),
) -> RequestContext:
    """Resolve the caller's identity and role once per request."""
    return RequestContext(
        profile_id=profile.id,
        role=profile.role_enum,
        email=profile.email,
        full_name=profile.full_name,
    )


def require_roles(*allowed_roles: Role):
    """Dependency that admits only the given roles.

    Other roles get a 403 carrying their own landing page, mirroring the
    redirect a browser would follow.
    """

    async def role_checker(ctx: RequestContext = Depends(get_request_context)) -> RequestContext:
        if not ctx.has_role(*allowed_roles):
            raise PermissionDenied(
                f"Access denied. Required role: {', '.join(r.value for r in allowed_roles)}",
                redirect_to=ctx.landing_page,
            )
        return ctx

    return role_checker


require_student = require_roles(Role.STUDENT)
require_reviewer = require_roles(Role.ADMIN, Role.SUPER_ADMIN)
require_recruiter = require_roles(Role.RECRUITER)
require_super_admin = require_roles(Role.SUPER_ADMIN)


def parse_subject(value):
    try:
        return UUID(str(value))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
