"""Validators."""

import re
from typing import List, Optional

from achievehub.core.exceptions import ValidationFailed
from achievehub.utils.constants import ACHIEVEMENT_CATEGORIES


def validate_email_domain(domain: str) -> bool:
    """Validate a bare e-mail domain such as ``utech.edu``."""
    pattern = r'^(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}$'
    return bool(re.match(pattern, domain))


def file_extension(filename: Optional[str]) -> str:
    """Lower-cased extension without the dot, or an empty string."""
    if not filename or "." not in filename:
        return ""
    return filename.rsplit('.', 1)[-1].lower()


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> bool:
    """Validate file extension."""
    if not filename:
        return False

    return file_extension(filename) in [ext.lower() for ext in allowed_extensions]


def require_text(value: Optional[str], field: str) -> str:
    """Return the stripped value or raise when it is missing or blank."""
    if value is None or not value.strip():
        raise ValidationFailed(f"{field} is required")
    return value.strip()


def validate_category(category: Optional[str]) -> str:
    category = require_text(category, "Category")
    if category not in ACHIEVEMENT_CATEGORIES:
        raise ValidationFailed(
            f"Category must be one of: {', '.join(ACHIEVEMENT_CATEGORIES)}"
        )
    return category


def validate_document(
    filename: Optional[str],
    size: int,
    max_size: int,
    allowed_extensions: List[str],
) -> str:
    """Check an uploaded document and return its extension."""
    if size > max_size:
        raise ValidationFailed(
            f"File size must be less than {max_size // (1024 * 1024)}MB"
        )
    if not validate_file_extension(filename, allowed_extensions):
        allowed = ", ".join(ext.upper() for ext in allowed_extensions)
        raise ValidationFailed(f"Unsupported file type. Allowed: {allowed}")
    return file_extension(filename)
