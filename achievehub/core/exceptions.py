"""Domain errors raised by services and mapped to HTTP responses in main."""

from typing import Optional


class AchievementHubError(Exception):
    """Base class for application errors."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(AchievementHubError):
    """Input rejected before any store or storage call."""

    status_code = 422


class NotFound(AchievementHubError):
    status_code = 404


class Conflict(AchievementHubError):
    """State transition not allowed or duplicate row."""

    status_code = 409


class PermissionDenied(AchievementHubError):
    """Caller's role may not use this endpoint; carries the caller's landing page."""

    status_code = 403

    def __init__(self, detail: str, redirect_to: Optional[str] = None):
        super().__init__(detail)
        self.redirect_to = redirect_to


class StorageError(AchievementHubError):
    """Object store failure."""

    status_code = 502
