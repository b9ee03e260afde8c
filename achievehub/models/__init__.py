"""Database models."""

# Import all models in dependency order to ensure proper relationship initialization

# Base models (no foreign keys)
from achievehub.models.institution import Institution

# Models with foreign keys to base models
from achievehub.models.profile import Profile, admin_institutions

# Models with foreign keys to other models
from achievehub.models.achievement import Achievement
from achievehub.models.query import AchievementQuery
from achievehub.models.saved_candidate import SavedCandidate

# Export all models
__all__ = [
    "Institution",
    "Profile",
    "admin_institutions",
    "Achievement",
    "AchievementQuery",
    "SavedCandidate",
]
