"""Query model: a student's challenge to a rejected achievement."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from achievehub.db.base import Base
from achievehub.utils.constants import QueryStatus


class AchievementQuery(Base):
    """
    Raised by the achievement owner, answered once by an admin.
    Stored in the ``queries`` table.
    """

    __tablename__ = "queries"

    achievement_id = Column(
        UUID(as_uuid=True),
        ForeignKey("achievements.id", ondelete="CASCADE"),
        nullable=False,
    )
    student_id = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
    )
    query_text = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=QueryStatus.OPEN.value)

    # Admin response
    admin_response = Column(Text, nullable=True)
    responded_by = Column(
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )
    responded_at = Column(DateTime, nullable=True)

    # Relationships
    achievement = relationship("Achievement", back_populates="queries", lazy="selectin")
    student = relationship(
        "Profile",
        back_populates="queries",
        foreign_keys=[student_id],
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_queries_achievement", "achievement_id"),
        Index("idx_queries_student", "student_id"),
        Index("idx_queries_status", "status"),
    )

    def __repr__(self):
        return f"<AchievementQuery achievement_id={self.achievement_id} ({self.status})>"
