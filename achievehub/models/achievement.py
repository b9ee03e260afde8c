"""Achievement model."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from achievehub.db.base import Base
from achievehub.utils.constants import VerificationStatus


class Achievement(Base):
    """
    Student-submitted accomplishment awaiting or holding a verification decision.

    ``verification_status`` moves pending -> verified | rejected exactly once.
    ``verified_by``/``verified_at`` are written by that transition only and
    ``rejection_reason`` only when the decision is a rejection.
    """

    __tablename__ = "achievements"

    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    category = Column(String(100), nullable=False)
    date_achieved = Column(Date, nullable=False)
    document_url = Column(String(500), nullable=True)

    # Verification
    verification_status = Column(
        String(20), nullable=False, default=VerificationStatus.PENDING.value
    )
    rejection_reason = Column(Text, nullable=True)
    verified_by = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    verified_at = Column(DateTime, nullable=True)

    # Relationships
    student = relationship(
        "Profile",
        back_populates="achievements",
        foreign_keys=[student_id],
        lazy="selectin",
    )
    queries = relationship(
        "AchievementQuery",
        back_populates="achievement",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="AchievementQuery.created_at.desc()",
    )

    __table_args__ = (
        Index("idx_achievements_student", "student_id"),
        Index("idx_achievements_status", "verification_status"),
        Index("idx_achievements_status_date", "verification_status", "date_achieved"),
        Index("idx_achievements_category", "category"),
    )

    def __repr__(self):
        return f"<Achievement {self.title!r} ({self.verification_status})>"
