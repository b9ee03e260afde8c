"""
Filters over already-fetched achievement lists.

Pure functions: no database access, so the admin queue and recruiter
discovery rules can be checked directly against in-memory rows.
"""

from datetime import date
from typing import Iterable, List, Optional

from achievehub.utils.constants import RecencyWindow, VerificationStatus


def _contains(haystack: Optional[str], needle: str) -> bool:
    return bool(haystack) and needle in haystack.lower()


def _student_attr(achievement, attr: str) -> Optional[str]:
    student = getattr(achievement, "student", None)
    return getattr(student, attr, None) if student is not None else None


def _is_all(value: Optional[str]) -> bool:
    return value is None or value == "" or value == "all"


def years_before(today: date, years: int) -> date:
    """Same calendar day ``years`` earlier; Feb 29 falls back to Feb 28."""
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


def recency_cutoff(window: RecencyWindow, today: date) -> Optional[date]:
    """Earliest ``date_achieved`` admitted by a window, None for all-time."""
    if window == RecencyWindow.RECENT:
        return years_before(today, 1)
    if window == RecencyWindow.LAST_TWO_YEARS:
        return years_before(today, 2)
    return None


def matches_recency(date_achieved: date, window: RecencyWindow, today: date) -> bool:
    cutoff = recency_cutoff(window, today)
    return cutoff is None or date_achieved >= cutoff


def filter_review_queue(
    achievements: Iterable,
    search: Optional[str] = None,
    status: Optional[str] = None,
    category: Optional[str] = None,
) -> List:
    """Admin queue filter: title / student name / student email, status, category."""
    term = (search or "").strip().lower()
    results = []
    for achievement in achievements:
        if term and not (
            _contains(achievement.title, term)
            or _contains(_student_attr(achievement, "full_name"), term)
            or _contains(_student_attr(achievement, "email"), term)
        ):
            continue
        if not _is_all(status) and achievement.verification_status != status:
            continue
        if not _is_all(category) and achievement.category != category:
            continue
        results.append(achievement)
    return results


def filter_discovery(
    achievements: Iterable,
    today: date,
    search: Optional[str] = None,
    category: Optional[str] = None,
    institution: Optional[str] = None,
    window: RecencyWindow = RecencyWindow.ALL,
) -> List:
    """
    Recruiter discovery filter.

    Only verified achievements ever pass, whatever the other arguments are.
    ``institution`` is matched against the student's institution name.
    """
    term = (search or "").strip().lower()
    results = []
    for achievement in achievements:
        if achievement.verification_status != VerificationStatus.VERIFIED.value:
            continue
        if term and not (
            _contains(achievement.title, term)
            or _contains(achievement.description, term)
            or _contains(_student_attr(achievement, "full_name"), term)
            or _contains(achievement.category, term)
        ):
            continue
        if not _is_all(category) and achievement.category != category:
            continue
        if not _is_all(institution) and _student_attr(achievement, "institution_name") != institution:
            continue
        if not matches_recency(achievement.date_achieved, window, today):
            continue
        results.append(achievement)
    return results


def filter_profiles(
    profiles: Iterable,
    search: Optional[str] = None,
    role: Optional[str] = None,
    institution_id: Optional[str] = None,
    no_institution_value: str = "no_institution",
) -> List:
    """Super-admin user list filter: name/email text, role, institution."""
    term = (search or "").strip().lower()
    results = []
    for profile in profiles:
        if term and not (_contains(profile.full_name, term) or _contains(profile.email, term)):
            continue
        if not _is_all(role) and profile.role != role:
            continue
        if not _is_all(institution_id):
            linked = _linked_institution_ids(profile)
            if institution_id == no_institution_value:
                if linked:
                    continue
            elif institution_id not in linked:
                continue
        results.append(profile)
    return results


def _linked_institution_ids(profile) -> List[str]:
    ids = [str(inst.id) for inst in (getattr(profile, "admin_institutions", None) or [])]
    if profile.institution_id is not None:
        ids.append(str(profile.institution_id))
    return ids
