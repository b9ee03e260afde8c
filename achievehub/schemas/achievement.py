"""
Pydantic schemas for achievement APIs
Request/Response models for submission, review and the read projections
"""

from datetime import date, datetime
from typing import Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, computed_field

from achievehub.utils.constants import QueryStatus, ReviewDecision, VerificationStatus


class StudentSummary(BaseModel):
    """Owning student as shown next to an achievement."""

    id: UUID
    full_name: str
    email: str
    institution_name: Optional[str] = None

    class Config:
        from_attributes = True


class QueryBrief(BaseModel):
    """Query attached to an achievement in the student's own view."""

    id: UUID
    query_text: str
    status: QueryStatus
    admin_response: Optional[str] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    class Config:
        from_attributes = True


class AchievementResponse(BaseModel):
    id: UUID
    student_id: UUID
    title: str
    description: Optional[str] = None
    category: str
    date_achieved: date
    document_url: Optional[str] = None
    verification_status: VerificationStatus
    rejection_reason: Optional[str] = None
    verified_by: Optional[UUID] = None
    verified_at: Optional[datetime] = None
    created_at: datetime
    student: Optional[StudentSummary] = None
    queries: List[QueryBrief] = []

    class Config:
        from_attributes = True

    @computed_field
    @property
    def can_review(self) -> bool:
        """Review is offered only while the decision is outstanding."""
        return self.verification_status == VerificationStatus.PENDING

    @computed_field
    @property
    def can_raise_query(self) -> bool:
        return self.verification_status == VerificationStatus.REJECTED


class AchievementListResponse(BaseModel):
    total: int
    achievements: List[AchievementResponse]


class ReviewRequest(BaseModel):
    """Admin decision on a pending achievement."""

    decision: ReviewDecision
    rejection_reason: Optional[str] = Field(None, max_length=2000)


class CategoriesResponse(BaseModel):
    categories: List[str]


class StudentPortfolioResponse(BaseModel):
    """Recruiter view of one student: verified work grouped by category."""

    student: StudentSummary
    total_verified: int
    with_documents: int
    achievements_by_category: Dict[str, List[AchievementResponse]]
