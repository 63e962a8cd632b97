"""Query layer for database operations using SQLAlchemy Core."""

from .entitlements import (
    get_active_entitlements,
    grant_entitlement,
    revoke_entitlement,
)
from .progress import get_last_lesson, record_last_lesson

__all__ = [
    # Entitlements
    "get_active_entitlements",
    "grant_entitlement",
    "revoke_entitlement",
    # Progress
    "record_last_lesson",
    "get_last_lesson",
]
