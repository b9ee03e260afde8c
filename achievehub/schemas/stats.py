"""Dashboard statistics schemas."""

from typing import Dict

from pydantic import BaseModel


class StudentStats(BaseModel):
    total: int
    verified: int
    pending: int
    rejected: int


class AdminStats(BaseModel):
    pending: int
    verified: int
    rejected: int
    open_queries: int


class SystemStats(BaseModel):
    total_achievements: int
    pending_verifications: int
    verified_achievements: int
    rejected_achievements: int
    open_queries: int
    resolved_queries: int
    verification_rate: int  # percent
    resolution_rate: int  # percent


class SuperAdminStats(BaseModel):
    total_institutions: int
    total_users: int
    total_students: int
    total_admins: int
    total_recruiters: int


class RecruiterStats(BaseModel):
    total_achievements: int
    unique_students: int
    categories: Dict[str, int]
