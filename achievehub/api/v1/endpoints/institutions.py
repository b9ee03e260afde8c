"""
Institutions API
Public list for registration forms, CRUD for super admins
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from achievehub.api.deps import get_db, require_super_admin
from achievehub.core.security import RequestContext
from achievehub.schemas.institution import (
    InstitutionCreate,
    InstitutionResponse,
    InstitutionUpdate,
    InstitutionWithCounts,
)
from achievehub.services.institution_service import InstitutionService

router = APIRouter()


@router.get("", response_model=List[InstitutionResponse])
async def list_institutions(db: AsyncSession = Depends(get_db)):
    """All institutions ordered by name (no auth, used by the sign-up form)."""
    return await InstitutionService(db).list_all()


@router.get("/overview", response_model=List[InstitutionWithCounts])
async def institutions_overview(
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Institutions newest first with student and admin counts."""
    rows = await InstitutionService(db).list_with_counts()
    return [
        InstitutionWithCounts(
            id=inst.id,
            name=inst.name,
            email_domain=inst.email_domain,
            created_at=inst.created_at,
            student_count=students,
            admin_count=admins,
        )
        for inst, students, admins in rows
    ]


@router.post("", response_model=InstitutionResponse, status_code=status.HTTP_201_CREATED)
async def create_institution(
    institution_in: InstitutionCreate,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    return await InstitutionService(db).create(institution_in.name, institution_in.email_domain)


@router.patch("/{institution_id}", response_model=InstitutionResponse)
async def update_institution(
    institution_id: UUID,
    institution_in: InstitutionUpdate,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    return await InstitutionService(db).update(
        institution_id, **institution_in.model_dump(exclude_unset=True)
    )


@router.delete("/{institution_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_institution(
    institution_id: UUID,
    ctx: RequestContext = Depends(require_super_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete an institution. Students keep their accounts, unlinked."""
    await InstitutionService(db).delete(institution_id)
