"""
Recruiter bookmarks
One row per (recruiter, student) pair
"""

from sqlalchemy import Column, ForeignKey, Index, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from achievehub.db.base import Base


class SavedCandidate(Base):
    """Student saved by a recruiter, with private notes."""

    __tablename__ = "saved_candidates"

    recruiter_id = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    notes = Column(Text, nullable=True)  # Recruiter's private notes

    # Relationships
    recruiter = relationship(
        "Profile",
        back_populates="saved_candidates",
        foreign_keys=[recruiter_id],
    )
    student = relationship("Profile", foreign_keys=[student_id], lazy="selectin")

    __table_args__ = (
        Index("idx_saved_candidates_recruiter", "recruiter_id"),
        Index("idx_saved_candidates_recruiter_student", "recruiter_id", "student_id", unique=True),
    )

    def __repr__(self):
        return f"<SavedCandidate(recruiter_id={self.recruiter_id}, student_id={self.student_id})>"
