"""Institution model."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from achievehub.db.base import Base


class Institution(Base):
    """Organisation that students and admins belong to."""

    __tablename__ = "institutions"

    name = Column(String(255), unique=True, nullable=False)
    email_domain = Column(String(255), nullable=False)  # e.g. "utech.edu"

    # Relationships
    students = relationship("Profile", back_populates="institution", passive_deletes=True)
    admins = relationship(
        "Profile",
        secondary="admin_institutions",
        back_populates="admin_institutions",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Institution {self.name} ({self.email_domain})>"
