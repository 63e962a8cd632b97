"""SQLAlchemy Core table definitions for the database schema."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
    func,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

from .enums import entitlement_scope_enum, entitlement_status_enum

# Naming convention for constraints (helps Alembic generate better names)
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}
metadata = MetaData(naming_convention=convention)


# =====================================================
# 1. ENTITLEMENTS
# =====================================================
# user_id is the auth provider's user id (JWT "sub"), not a local FK.
entitlements = Table(
    "entitlements",
    metadata,
    Column("entitlement_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Text, nullable=False),
    Column("scope", entitlement_scope_enum, nullable=False),
    Column("track_slug", Text),
    Column(
        "status",
        entitlement_status_enum,
        nullable=False,
        server_default=text("'active'"),
    ),
    Column("created_at", TIMESTAMP(timezone=True), server_default=func.now()),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
    CheckConstraint(
        "scope = 'site' OR track_slug IS NOT NULL",
        name="track_scope_requires_slug",
    ),
    Index("idx_entitlements_user_id_status", "user_id", "status"),
)


# =====================================================
# 2. TRACK PROGRESS
# =====================================================
track_progress = Table(
    "track_progress",
    metadata,
    Column("progress_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Text, nullable=False),
    Column("track_slug", Text, nullable=False),
    Column("last_lesson_slug", Text, nullable=False),
    Column("updated_at", TIMESTAMP(timezone=True), server_default=func.now()),
    UniqueConstraint("user_id", "track_slug", name="uq_track_progress_user_track"),
)
