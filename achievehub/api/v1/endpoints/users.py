"""
User management API
Super admins list, create, edit and delete accounts
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import get_db, require_super_admin
from achievehub.core.security import RequestContext
from achievehub.schemas.profile import ProfileResponse, UserCreate, UsersResponse, UserUpdate
from achievehub.services.user_service import UserService

router = APIRouter()


@router.get("", response_model=UsersResponse)
async def list_users(
    search: Optional[str] = Query(None, description="Name or e-mail"),
    role: Optional[str] = Query(None),
    institution_id: Optional[str] = Query(None, description="Institution id or 'no_institution'"),
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """
    All profiles, newest first

    **Auth**: Super Admin

    **Query Parameters**:
    - `search`: case-insensitive match on full name or e-mail
    - `role`: `student` / `admin` / `recruiter` / `super_admin` / `all`
    - `institution_id`: institution UUID, `no_institution` or `all`
    """
    users = await UserService(db).list_users(search=search, role=role, institution_id=institution_id)
    return UsersResponse(total=len(users), users=[ProfileResponse.from_profile(u) for u in users])


@router.post("", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    user_in: UserCreate,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create an account. Admins need at least one institution."""
    profile = await UserService(db).create(
        email=user_in.email,
        password=user_in.password,
        full_name=user_in.full_name,
        role=user_in.role,
        institution_id=user_in.institution_id,
        institution_ids=user_in.institution_ids,
    )
    return ProfileResponse.from_profile(profile)


@router.get("/{profile_id}", response_model=ProfileResponse)
async def get_user(
    profile_id: UUID,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    return ProfileResponse.from_profile(await UserService(db).get(profile_id))


@router.patch("/{profile_id}", response_model=ProfileResponse)
async def update_user(
    profile_id: UUID,
    user_in: UserUpdate,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    profile = await UserService(db).update(profile_id, **user_in.model_dump(exclude_unset=True))
    return ProfileResponse.from_profile(profile)


@router.delete("/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    profile_id: UUID,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete an account with its achievements, queries and saved rows."""
    await UserService(db).delete(ctx, profile_id)
