"""Query (rejection challenge) schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from achievehub.utils.constants import QueryStatus


class QueryCreate(BaseModel):
    query_text: str = Field(..., max_length=5000)


class QueryRespond(BaseModel):
    response: str = Field(..., max_length=5000)


class QueryResponse(BaseModel):
    id: UUID
    achievement_id: UUID
    student_id: UUID
    query_text: str
    status: QueryStatus
    admin_response: Optional[str] = None
    responded_by: Optional[UUID] = None
    responded_at: Optional[datetime] = None
    created_at: datetime

    # Joined for display
    achievement_title: Optional[str] = None
    rejection_reason: Optional[str] = None
    student_name: Optional[str] = None
    student_email: Optional[str] = None

    @classmethod
    def from_query(cls, query) -> "QueryResponse":
        achievement = query.achievement
        student = query.student
        return cls(
            id=query.id,
            achievement_id=query.achievement_id,
            student_id=query.student_id,
            query_text=query.query_text,
            status=QueryStatus(query.status),
            admin_response=query.admin_response,
            responded_by=query.responded_by,
            responded_at=query.responded_at,
            created_at=query.created_at,
            achievement_title=achievement.title if achievement else None,
            rejection_reason=achievement.rejection_reason if achievement else None,
            student_name=student.full_name if student else None,
            student_email=student.email if student else None,
        )


class QueriesResponse(BaseModel):
    total: int
    queries: List[QueryResponse]
