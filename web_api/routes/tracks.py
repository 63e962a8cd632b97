# web_api/routes/tracks.py
"""Track API routes.

Endpoints:
- GET /api/tracks - List live tracks
- GET /api/tracks/{track_slug} - Track metadata and annotated syllabus
- GET /api/tracks/{track_slug}/lessons/{lesson_slug} - Lesson for the viewer
"""

import asyncio

from fastapi import APIRouter, HTTPException, Request

from courseware.tracks.entitlements import load_entitlements
from courseware.tracks.loader import TrackNotFoundError, list_tracks
from courseware.tracks.resolver import (
    LessonDocumentMissingError,
    LessonNotInSyllabusError,
    build_track_overview,
    resolve_lesson,
    serialize_item,
)
from courseware.tracks.types import LessonView, TrackMeta
from web_api.auth import get_viewer_id

router = APIRouter(prefix="/api/tracks", tags=["tracks"])


def serialize_track_meta(meta: TrackMeta) -> dict:
    """Serialize track metadata for the API response."""
    return {
        "slug": meta.slug,
        "title": meta.title,
        "access": meta.access.value,
        "live": meta.live,
        "price": meta.price,
        "duration": meta.duration,
        "level": meta.level,
        "description": meta.description,
        "lessonCount": meta.lesson_count,
        "tags": meta.tags,
    }


def serialize_lesson_view(view: LessonView) -> dict:
    """Serialize a resolved lesson for the rendering layer."""
    data = {
        "trackSlug": view.track_id,
        "lessonSlug": view.lesson_id,
        "title": view.title,
        "description": view.description,
        "body": view.content if not view.gated else None,
        "position": view.position,
        "total": view.total,
        "previousId": view.previous_id,
        "nextId": view.next_id,
        "access": view.access.value,
        "gated": view.gated,
    }
    if view.gated:
        data["preview"] = view.preview
        data["purchaseUrl"] = view.purchase_url
    return data


@router.get("")
async def get_tracks():
    """List all live tracks."""
    metas = await asyncio.to_thread(list_tracks)
    return {"tracks": [serialize_track_meta(meta) for meta in metas]}


@router.get("/{track_slug}")
async def get_track(track_slug: str):
    """Get a track's metadata and syllabus with effective access per lesson."""
    try:
        overview = await asyncio.to_thread(build_track_overview, track_slug)
    except TrackNotFoundError:
        raise HTTPException(status_code=404, detail=f"Track not found: {track_slug}")

    return {
        "meta": serialize_track_meta(overview.track.meta),
        "sections": [
            {
                "title": section.title,
                "items": [serialize_item(item) for item in section.items],
            }
            for section in overview.sections
        ],
        "totalLessons": overview.total_lessons,
        "firstFreeLesson": overview.first_free_lesson,
    }


@router.get("/{track_slug}/lessons/{lesson_slug}")
async def get_track_lesson(track_slug: str, lesson_slug: str, request: Request):
    """Get a lesson within a track.

    Gated lessons come back with 200, `gated: true`, a preview and a
    purchase URL instead of the body; the frontend decides whether to show
    the preview or redirect.
    """
    viewer_id = await get_viewer_id(request)
    entitlements = await load_entitlements(viewer_id)

    try:
        view = await asyncio.to_thread(
            resolve_lesson, track_slug, lesson_slug, entitlements
        )
    except TrackNotFoundError:
        raise HTTPException(status_code=404, detail=f"Track not found: {track_slug}")
    except LessonNotInSyllabusError:
        raise HTTPException(
            status_code=404,
            detail=f"Lesson not in track syllabus: {lesson_slug}",
        )
    except LessonDocumentMissingError:
        raise HTTPException(
            status_code=404, detail=f"Lesson content not found: {lesson_slug}"
        )

    return serialize_lesson_view(view)
