"""
Hosted backend collaborators.

Payment confirmation, plan readiness checks and plan persistence.
"""
from .base import PlanBackend
from .supabase import SupabaseBackend

__all__ = ["PlanBackend", "SupabaseBackend"]
