"""Profile model: one row per authenticated account."""

from sqlalchemy import Boolean, Column, ForeignKey, String, Table
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from achievehub.db.base import Base
from achievehub.utils.constants import Role

# Admin-to-institution scope (an admin may manage several institutions)
admin_institutions = Table(
    "admin_institutions",
    Base.metadata,
    Column(
        "profile_id",
        UUID(as_uuid=True),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "institution_id",
        UUID(as_uuid=True),
        ForeignKey("institutions.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Profile(Base):
    """Account, role and institution linkage."""

    __tablename__ = "profiles"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=Role.STUDENT.value)
    is_active = Column(Boolean, default=True, nullable=False)

    # Students belong to at most one institution
    institution_id = Column(
        UUID(as_uuid=True),
        ForeignKey("institutions.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Relationships
    institution = relationship("Institution", back_populates="students", lazy="selectin")
    admin_institutions = relationship(
        "Institution",
        secondary=admin_institutions,
        back_populates="admins",
        lazy="selectin",
        order_by="Institution.name",
    )
    achievements = relationship(
        "Achievement",
        back_populates="student",
        foreign_keys="Achievement.student_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    queries = relationship(
        "AchievementQuery",
        back_populates="student",
        foreign_keys="AchievementQuery.student_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    saved_candidates = relationship(
        "SavedCandidate",
        back_populates="recruiter",
        foreign_keys="SavedCandidate.recruiter_id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def role_enum(self) -> Role:
        return Role(self.role)

    @property
    def institution_name(self):
        return self.institution.name if self.institution else None

    def __repr__(self):
        return f"<Profile {self.email} ({self.role})>"
