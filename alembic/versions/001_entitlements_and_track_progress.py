"""entitlements_and_track_progress

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


entitlement_scope = postgresql.ENUM("site", "track", name="entitlement_scope")
entitlement_status = postgresql.ENUM(
    "active", "revoked", "expired", name="entitlement_status"
)


def upgrade() -> None:
    entitlement_scope.create(op.get_bind(), checkfirst=True)
    entitlement_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "entitlements",
        sa.Column("entitlement_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column(
            "scope",
            postgresql.ENUM(name="entitlement_scope", create_type=False),
            nullable=False,
        ),
        sa.Column("track_slug", sa.Text(), nullable=True),
        sa.Column(
            "status",
            postgresql.ENUM(name="entitlement_status", create_type=False),
            server_default=sa.text("'active'"),
            nullable=False,
        ),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.CheckConstraint(
            "scope = 'site' OR track_slug IS NOT NULL",
            name=op.f("ck_entitlements_track_scope_requires_slug"),
        ),
        sa.PrimaryKeyConstraint("entitlement_id", name=op.f("pk_entitlements")),
    )
    op.create_index(
        "idx_entitlements_user_id_status",
        "entitlements",
        ["user_id", "status"],
        unique=False,
    )

    op.create_table(
        "track_progress",
        sa.Column("progress_id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("track_slug", sa.Text(), nullable=False),
        sa.Column("last_lesson_slug", sa.Text(), nullable=False),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            server_default=sa.text("now()"),
            nullable=True,
        ),
        sa.PrimaryKeyConstraint("progress_id", name=op.f("pk_track_progress")),
        sa.UniqueConstraint(
            "user_id", "track_slug", name="uq_track_progress_user_track"
        ),
    )


def downgrade() -> None:
    op.drop_table("track_progress")
    op.drop_index("idx_entitlements_user_id_status", table_name="entitlements")
    op.drop_table("entitlements")
    entitlement_status.drop(op.get_bind(), checkfirst=True)
    entitlement_scope.drop(op.get_bind(), checkfirst=True)
