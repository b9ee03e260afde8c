"""Saved candidate and recruiter contact schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from achievehub.schemas.achievement import StudentSummary


class SavedCandidateCreate(BaseModel):
    student_id: UUID
    notes: Optional[str] = Field(None, max_length=5000)


class SavedCandidateUpdate(BaseModel):
    notes: Optional[str] = Field(None, max_length=5000)


class SavedCandidateResponse(BaseModel):
    id: UUID
    student_id: UUID
    notes: Optional[str] = None
    created_at: datetime
    student: Optional[StudentSummary] = None

    class Config:
        from_attributes = True


class SavedCandidatesResponse(BaseModel):
    total: int
    saved_candidates: List[SavedCandidateResponse]


class ContactDraftResponse(BaseModel):
    """Pre-filled e-mail a recruiter can send to a student."""

    to: str
    subject: str
    body: str
    mailto: str


class SavedCheckResponse(BaseModel):
    saved: bool
    saved_candidate: Optional[SavedCandidateResponse] = None
