"""Reading progress API routes.

Endpoints:
- POST /api/progress/last - Remember the last lesson opened in a track
- GET /api/progress/{track_slug} - Get the last lesson opened in a track
"""

import asyncio

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from courseware.database import get_connection, get_transaction, is_configured
from courseware.queries.progress import get_last_lesson, record_last_lesson
from courseware.tracks.loader import TrackNotFoundError, get_syllabus, load_track
from courseware.tracks.sequence import LessonSequence
from web_api.auth import get_current_user

router = APIRouter(prefix="/api/progress", tags=["progress"])


class LastLessonRequest(BaseModel):
    trackSlug: str
    lessonSlug: str


def _track_lessons(track_slug: str) -> LessonSequence:
    """Flattened lesson sequence of a live track (reads the content store)."""
    return LessonSequence.from_sections(get_syllabus(load_track(track_slug)))


def _require_database() -> None:
    if not is_configured():
        raise HTTPException(status_code=503, detail="Progress storage unavailable")


@router.post("/last")
async def post_last_lesson(
    body: LastLessonRequest,
    user: dict = Depends(get_current_user),
):
    """Record the lesson the viewer just opened.

    The lesson must be part of the track's syllabus so stale or
    hand-crafted pings can't store links to lessons the track doesn't serve.
    """
    try:
        lessons = await asyncio.to_thread(_track_lessons, body.trackSlug)
    except TrackNotFoundError:
        raise HTTPException(
            status_code=404, detail=f"Track not found: {body.trackSlug}"
        )

    if body.lessonSlug not in lessons:
        raise HTTPException(
            status_code=404,
            detail=f"Lesson not in track syllabus: {body.lessonSlug}",
        )

    _require_database()
    async with get_transaction() as conn:
        await record_last_lesson(
            conn,
            user_id=user["sub"],
            track_slug=body.trackSlug,
            lesson_slug=body.lessonSlug,
        )

    return {"ok": True}


@router.get("/{track_slug}")
async def get_track_progress(
    track_slug: str,
    user: dict = Depends(get_current_user),
):
    """Get the last lesson the viewer opened in a track (null if none)."""
    _require_database()
    async with get_connection() as conn:
        lesson_slug = await get_last_lesson(
            conn, user_id=user["sub"], track_slug=track_slug
        )

    return {"trackSlug": track_slug, "lastLessonSlug": lesson_slug}
