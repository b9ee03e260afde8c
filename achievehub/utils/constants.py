"""Common constants."""

from enum import Enum


class Role(str, Enum):
    """User roles."""

    STUDENT = "student"
    ADMIN = "admin"
    RECRUITER = "recruiter"
    SUPER_ADMIN = "super_admin"


class VerificationStatus(str, Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class ReviewDecision(str, Enum):
    VERIFY = "verify"
    REJECT = "reject"


class QueryStatus(str, Enum):
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"


class RecencyWindow(str, Enum):
    """Recruiter discovery date filter."""

    ALL = "all"
    RECENT = "recent"  # last 1 year
    LAST_TWO_YEARS = "last_two_years"


# Achievement categories
ACHIEVEMENT_CATEGORIES = [
    "Academic Excellence",
    "Research & Publications",
    "Leadership & Service",
    "Sports & Athletics",
    "Arts & Culture",
    "Technical Skills",
    "Internships & Work Experience",
    "Competitions & Awards",
    "Community Service",
    "Other",
]

# Landing page per role
ROLE_LANDING_PAGES = {
    Role.STUDENT: "/dashboard",
    Role.ADMIN: "/admin",
    Role.SUPER_ADMIN: "/super-admin",
    Role.RECRUITER: "/recruiter",
}

# Roles allowed to review achievements and answer queries
REVIEWER_ROLES = (Role.ADMIN, Role.SUPER_ADMIN)

# Roles a visitor may pick at registration
SELF_REGISTER_ROLES = (Role.STUDENT, Role.ADMIN, Role.RECRUITER)

# Roles that must be linked to an institution
INSTITUTION_ROLES = (Role.STUDENT, Role.ADMIN)

# Filter value meaning "profiles without an institution"
NO_INSTITUTION = "no_institution"
