"""Institution CRUD for super admins."""

from typing import Dict, List, Tuple
from uuid import UUID

import structlog
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.core.exceptions import Conflict, NotFound
from achievehub.models.institution import Institution
from achievehub.models.profile import Profile, admin_institutions
from achievehub.utils.constants import Role

logger = structlog.get_logger(__name__)


class InstitutionService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> List[Institution]:
        result = await self.db.execute(select(Institution).order_by(Institution.name))
        return list(result.scalars().all())

    async def list_with_counts(self) -> List[Tuple[Institution, int, int]]:
        """Institutions newest first with (students, admins) counts."""
        result = await self.db.execute(select(Institution).order_by(Institution.created_at.desc()))
        institutions = list(result.scalars().all())

        student_counts: Dict[UUID, int] = dict(
            (
                await self.db.execute(
                    select(Profile.institution_id, func.count(Profile.id))
                    .where(Profile.role == Role.STUDENT.value, Profile.institution_id.isnot(None))
                    .group_by(Profile.institution_id)
                )
            ).all()
        )
        admin_counts: Dict[UUID, int] = dict(
            (
                await self.db.execute(
                    select(admin_institutions.c.institution_id, func.count(admin_institutions.c.profile_id))
                    .group_by(admin_institutions.c.institution_id)
                )
            ).all()
        )

        return [
            (inst, student_counts.get(inst.id, 0), admin_counts.get(inst.id, 0))
            for inst in institutions
        ]

    async def get(self, institution_id: UUID) -> Institution:
        institution = await self.db.get(Institution, institution_id)
        if institution is None:
            raise NotFound("Institution not found")
        return institution

    async def create(self, name: str, email_domain: str) -> Institution:
        await self._ensure_name_free(name)
        institution = Institution(name=name.strip(), email_domain=email_domain)
        self.db.add(institution)
        await self._commit()
        logger.info("institution_created", institution_id=str(institution.id), name=institution.name)
        return institution

    async def update(self, institution_id: UUID, **changes) -> Institution:
        institution = await self.get(institution_id)
        name = changes.get("name")
        if name is not None and name.strip() != institution.name:
            await self._ensure_name_free(name)
            institution.name = name.strip()
        if changes.get("email_domain") is not None:
            institution.email_domain = changes["email_domain"]
        await self._commit()
        await self.db.refresh(institution)
        return institution

    async def delete(self, institution_id: UUID) -> None:
        institution = await self.get(institution_id)
        await self.db.delete(institution)
        await self.db.commit()
        logger.info("institution_deleted", institution_id=str(institution_id))

    async def _ensure_name_free(self, name: str) -> None:
        result = await self.db.execute(select(Institution.id).where(Institution.name == name.strip()))
        if result.first() is not None:
            raise Conflict("An institution with this name already exists")

    async def _commit(self) -> None:
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise Conflict("An institution with this name already exists")
