"""
Account management: registration and super-admin user CRUD.

Institution linkage is derived from the role:
- student: at most one institution (``institution_id``)
- admin: one or more institutions through ``admin_institutions``
- recruiter / super_admin: none
"""

from typing import Iterable, List, Optional
from uuid import UUID

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.core.exceptions import Conflict, NotFound, ValidationFailed
from achievehub.core.security import RequestContext, get_password_hash
from achievehub.models.institution import Institution
from achievehub.models.profile import Profile
from achievehub.services import search_service
from achievehub.utils.constants import NO_INSTITUTION, Role
from achievehub.utils.validators import require_text

logger = structlog.get_logger(__name__)


class UserService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, profile_id: UUID) -> Profile:
        result = await self.db.execute(
            select(Profile)
            .where(Profile.id == profile_id)
            .execution_options(populate_existing=True)
        )
        profile = result.scalar_one_or_none()
        if profile is None:
            raise NotFound("User not found")
        return profile

    async def get_by_email(self, email: str) -> Optional[Profile]:
        result = await self.db.execute(select(Profile).where(Profile.email == email.lower()))
        return result.scalar_one_or_none()

    async def create(
        self,
        email: str,
        password: str,
        full_name: str,
        role: Role,
        institution_id: Optional[UUID] = None,
        institution_ids: Iterable[UUID] = (),
    ) -> Profile:
        """Create an account with its institution linkage."""
        if await self.get_by_email(email) is not None:
            raise Conflict("User with this email already exists")

        profile = Profile(
            email=email.lower(),
            password_hash=get_password_hash(password),
            full_name=require_text(full_name, "Full name"),
            role=role.value,
            is_active=True,
        )
        institution_ids = list(institution_ids)
        if role == Role.ADMIN and not institution_ids and institution_id is not None:
            institution_ids = [institution_id]
        await self._apply_linkage(profile, role, institution_id, institution_ids)

        self.db.add(profile)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("User with this email already exists")

        logger.info("user_created", profile_id=str(profile.id), role=role.value)
        return await self.get(profile.id)

    async def update(self, profile_id: UUID, **changes) -> Profile:
        """Apply only the fields present in ``changes``.

        An explicit ``institution_id=None`` clears a student's link, while an
        absent key keeps the current one.
        """
        profile = await self.get(profile_id)

        if changes.get("full_name") is not None:
            profile.full_name = require_text(changes["full_name"], "Full name")
        if changes.get("is_active") is not None:
            profile.is_active = changes["is_active"]

        new_role = changes.get("role") or profile.role_enum
        linkage_given = "institution_id" in changes or "institution_ids" in changes
        if new_role != profile.role_enum or linkage_given:
            institution_id = changes.get("institution_id", profile.institution_id)
            institution_ids = changes.get("institution_ids")
            if institution_ids is None:
                if new_role == Role.ADMIN and changes.get("institution_id") is not None:
                    institution_ids = [changes["institution_id"]]
                else:
                    institution_ids = [inst.id for inst in profile.admin_institutions]
            await self._apply_linkage(profile, new_role, institution_id, institution_ids)
            profile.role = new_role.value

        await self.db.commit()
        logger.info("user_updated", profile_id=str(profile_id), role=profile.role)
        return await self.get(profile_id)

    async def delete(self, ctx: RequestContext, profile_id: UUID) -> None:
        if profile_id == ctx.profile_id:
            raise Conflict("You cannot delete your own account")
        profile = await self.get(profile_id)
        await self.db.delete(profile)
        await self.db.commit()
        logger.info("user_deleted", profile_id=str(profile_id), deleted_by=str(ctx.profile_id))

    async def list_users(
        self,
        search: Optional[str] = None,
        role: Optional[str] = None,
        institution_id: Optional[str] = None,
    ) -> List[Profile]:
        result = await self.db.execute(
            select(Profile)
            .order_by(Profile.created_at.desc())
            .execution_options(populate_existing=True)
        )
        return search_service.filter_profiles(
            result.scalars().all(),
            search=search,
            role=role,
            institution_id=institution_id,
            no_institution_value=NO_INSTITUTION,
        )

    async def _apply_linkage(
        self,
        profile: Profile,
        role: Role,
        institution_id: Optional[UUID],
        institution_ids: List[UUID],
    ) -> None:
        if role == Role.ADMIN:
            # Keep first-seen order, drop duplicates
            ids = list(dict.fromkeys(institution_ids))
            if not ids:
                raise ValidationFailed("Admins must be assigned at least one institution")
            profile.admin_institutions = await self._load_institutions(ids)
            profile.institution_id = None
        elif role == Role.STUDENT:
            if institution_id is not None:
                await self._load_institutions([institution_id])
            profile.institution_id = institution_id
            profile.admin_institutions = []
        else:
            profile.institution_id = None
            profile.admin_institutions = []

    async def _load_institutions(self, ids: List[UUID]) -> List[Institution]:
        result = await self.db.execute(select(Institution).where(Institution.id.in_(ids)))
        found = {inst.id: inst for inst in result.scalars().all()}
        missing = [str(i) for i in ids if i not in found]
        if missing:
            raise NotFound(f"Institution not found: {', '.join(missing)}")
        return [found[i] for i in ids]
