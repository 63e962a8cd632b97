"""SQLAlchemy enum definitions for the database schema."""

import enum

from sqlalchemy import Enum as SQLEnum


class EntitlementScope(str, enum.Enum):
    site = "site"
    track = "track"


class EntitlementStatus(str, enum.Enum):
    active = "active"
    revoked = "revoked"
    expired = "expired"


entitlement_scope_enum = SQLEnum(
    EntitlementScope,
    name="entitlement_scope",
    create_type=True,
)

entitlement_status_enum = SQLEnum(
    EntitlementStatus,
    name="entitlement_status",
    create_type=True,
)
