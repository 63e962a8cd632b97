"""Entitlement ledger queries using SQLAlchemy Core."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.ext.asyncio import AsyncConnection

from ..enums import EntitlementScope, EntitlementStatus
from ..tables import entitlements


async def get_active_entitlements(
    conn: AsyncConnection,
    user_id: str,
) -> list[dict[str, Any]]:
    """Get a user's active grants as dicts with scope and track_slug."""
    result = await conn.execute(
        select(
            entitlements.c.entitlement_id,
            entitlements.c.scope,
            entitlements.c.track_slug,
        )
        .where(entitlements.c.user_id == user_id)
        .where(entitlements.c.status == EntitlementStatus.active)
        .order_by(entitlements.c.entitlement_id)
    )
    return [dict(row) for row in result.mappings()]


async def grant_entitlement(
    conn: AsyncConnection,
    *,
    user_id: str,
    scope: EntitlementScope,
    track_slug: str | None = None,
) -> dict[str, Any]:
    """Record a new active grant and return it.

    Raises:
        ValueError: If a track-scoped grant has no track_slug
    """
    scope = EntitlementScope(scope)
    if scope is EntitlementScope.track and not track_slug:
        raise ValueError("track_slug is required for track-scoped entitlements")

    values = {"user_id": user_id, "scope": scope}
    if scope is EntitlementScope.track:
        values["track_slug"] = track_slug

    result = await conn.execute(
        insert(entitlements).values(**values).returning(entitlements)
    )
    return dict(result.mappings().first())


async def revoke_entitlement(
    conn: AsyncConnection,
    entitlement_id: int,
) -> dict[str, Any] | None:
    """Mark a grant revoked. Returns the updated row, or None if missing."""
    result = await conn.execute(
        update(entitlements)
        .where(entitlements.c.entitlement_id == entitlement_id)
        .values(
            status=EntitlementStatus.revoked,
            updated_at=datetime.now(timezone.utc),
        )
        .returning(entitlements)
    )
    row = result.mappings().first()
    return dict(row) if row else None
