"""Queries for the last lesson a user opened in each track."""

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncConnection

from ..tables import track_progress


async def record_last_lesson(
    conn: AsyncConnection,
    *,
    user_id: str,
    track_slug: str,
    lesson_slug: str,
) -> dict:
    """Upsert the user's last-opened lesson for a track.

    Uses INSERT ... ON CONFLICT so concurrent pings for the same
    user/track collapse into one row.
    """
    stmt = pg_insert(track_progress).values(
        user_id=user_id,
        track_slug=track_slug,
        last_lesson_slug=lesson_slug,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["user_id", "track_slug"],
        set_={
            "last_lesson_slug": stmt.excluded.last_lesson_slug,
            "updated_at": func.now(),
        },
    ).returning(track_progress)

    result = await conn.execute(stmt)
    row = result.fetchone()
    # No explicit commit - let the caller's transaction context handle it
    return dict(row._mapping)


async def get_last_lesson(
    conn: AsyncConnection,
    *,
    user_id: str,
    track_slug: str,
) -> str | None:
    """Get the slug of the last lesson the user opened in a track."""
    result = await conn.execute(
        select(track_progress.c.last_lesson_slug).where(
            track_progress.c.user_id == user_id,
            track_progress.c.track_slug == track_slug,
        )
    )
    row = result.first()
    return row.last_lesson_slug if row else None
