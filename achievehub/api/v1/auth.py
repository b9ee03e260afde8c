"""Authentication endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import get_current_profile, get_db, get_request_context, parse_subject
from achievehub.core.security import (
    RequestContext,
    create_access_token,
    create_refresh_token,
    decode_token,
    landing_page_for,
    verify_password,
)
from achievehub.models.profile import Profile
from achievehub.schemas.auth import (
    LandingResponse,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
)
from achievehub.schemas.profile import ProfileResponse
from achievehub.services.user_service import UserService
from achievehub.utils.constants import Role

logger = structlog.get_logger(__name__)

router = APIRouter()


def _token_response(profile: Profile) -> TokenResponse:
    claims = {"sub": str(profile.id), "role": profile.role}
    return TokenResponse(
        access_token=create_access_token(claims),
        refresh_token=create_refresh_token(claims),
        token_type="bearer",
        redirect_to=landing_page_for(Role(profile.role)),
        user=ProfileResponse.from_profile(profile),
    )


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """
    Register a new account.

    Students and admins pick their institution; an admin's choice becomes
    their first managed institution. super_admin accounts are only created
    by another super_admin.
    """
    institution_ids = [request.institution_id] if request.role == Role.ADMIN else []
    profile = await UserService(db).create(
        email=request.email,
        password=request.password,
        full_name=request.full_name,
        role=request.role,
        institution_id=request.institution_id,
        institution_ids=institution_ids,
    )
    logger.info("user_registered", profile_id=str(profile.id), role=profile.role)
    return _token_response(profile)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: AsyncSession = Depends(get_db)):
    """Login with email and password."""
    result = await db.execute(select(Profile).where(Profile.email == request.email.lower()))
    profile = result.scalar_one_or_none()

    if not profile or not verify_password(request.password, profile.password_hash):
        logger.info("login_failed", email=request.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    if not profile.is_active:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User account is inactive",
        )

    logger.info("login_succeeded", profile_id=str(profile.id), role=profile.role)
    return _token_response(profile)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(request: RefreshRequest, db: AsyncSession = Depends(get_db)):
    """Exchange a refresh token for a new token pair."""
    payload = decode_token(request.refresh_token, expected_type="refresh")
    profile = await db.get(Profile, parse_subject(payload.get("sub")))

    if profile is None or not profile.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )
    return _token_response(profile)


@router.get("/me", response_model=ProfileResponse)
async def me(profile: Profile = Depends(get_current_profile)):
    """Current profile."""
    return ProfileResponse.from_profile(profile)


@router.get("/landing", response_model=LandingResponse)
async def landing(ctx: RequestContext = Depends(get_request_context)):
    """Where the client should route the caller after sign-in."""
    return LandingResponse(role=ctx.role, redirect_to=ctx.landing_page)
