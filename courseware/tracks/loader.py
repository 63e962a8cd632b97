# courseware/tracks/loader.py
"""Load tracks and lesson documents from the document store."""

import logging
import math
import re
from typing import Any

from courseware.config import is_syllabus_cache_enabled
from courseware.content.cache import get_syllabus_cache
from courseware.content.store import DocumentLookup, get_document_store

from .access import normalize_access
from .syllabus_parser import parse_syllabus
from .types import AccessTier, Document, LessonDocument, SyllabusTree, Track, TrackMeta

logger = logging.getLogger(__name__)

TRACKS_CATEGORY = "tracks"
LESSONS_CATEGORY = "learn"


class TrackNotFoundError(Exception):
    """Raised when a track has no document or isn't live."""

    pass


# -----------------------------------------------------------------------------
# Front-matter coercion
# -----------------------------------------------------------------------------


def parse_price(raw: Any) -> float | None:
    """Parse a price like 1999, "1999" or "₹1,999" into a number."""
    if raw is None or raw == "" or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw if math.isfinite(raw) else None

    digits = re.sub(r"[^\d.]", "", str(raw).strip())
    if not digits:
        return None
    try:
        value = float(digits)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value) if value.is_integer() else value


def parse_live(raw: Any) -> bool:
    """Tracks are live unless explicitly switched off."""
    if isinstance(raw, bool):
        return raw
    return raw not in (0, "0", "false")


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _optional_int(value: Any) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def _tags(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(tag) for tag in value]


def track_meta_from_document(document: Document) -> TrackMeta:
    """Build TrackMeta from a track document's front matter."""
    data = document.attributes
    slug = str(data.get("slug") or document.identifier)
    return TrackMeta(
        slug=slug,
        title=str(data.get("title") or slug),
        access=normalize_access(data.get("access")) or AccessTier.free,
        live=parse_live(data.get("live", True)),
        price=parse_price(data.get("price")),
        duration=_optional_str(data.get("duration")),
        level=_optional_str(data.get("level")),
        description=_optional_str(data.get("description")),
        lesson_count=_optional_int(data.get("lessonCount")),
        tags=_tags(data.get("tags")),
        attributes=dict(data),
    )


def lesson_from_document(lesson_slug: str, document: Document) -> LessonDocument:
    """Build a LessonDocument from a lesson document's front matter."""
    data = document.attributes
    return LessonDocument(
        slug=lesson_slug,
        identifier=document.identifier,
        title=str(data.get("title") or lesson_slug),
        body=document.body,
        access=normalize_access(data.get("access")) or AccessTier.free,
        description=_optional_str(data.get("description")),
        date=_optional_str(data.get("date")),
        tags=_tags(data.get("tags")),
    )


# -----------------------------------------------------------------------------
# Tracks
# -----------------------------------------------------------------------------


def load_track(
    track_id: str,
    store: DocumentLookup | None = None,
    *,
    include_unpublished: bool = False,
) -> Track:
    """
    Load a track by identifier.

    Args:
        track_id: Track slug (document identifier under "tracks")
        store: Document store, defaults to the process-wide store
        include_unpublished: Return tracks with `live: false` too

    Raises:
        TrackNotFoundError: If there is no document, or the track isn't live
    """
    store = store or get_document_store()
    document = store.fetch(TRACKS_CATEGORY, track_id)
    if document is None:
        logger.warning(f"Track not found: {track_id}")
        raise TrackNotFoundError(f"Track not found: {track_id}")

    meta = track_meta_from_document(document)
    if not meta.live and not include_unpublished:
        logger.info(f"Track is not live: {track_id}")
        raise TrackNotFoundError(f"Track not found: {track_id}")

    return Track(
        id=track_id, meta=meta, body=document.body, revision=document.revision
    )


def list_tracks(store: DocumentLookup | None = None) -> list[TrackMeta]:
    """Get metadata for all live top-level tracks, sorted by slug."""
    store = store or get_document_store()
    metas = []
    for identifier in store.list_identifiers(TRACKS_CATEGORY):
        if "/" in identifier:
            continue
        document = store.fetch(TRACKS_CATEGORY, identifier)
        if document is None:
            continue
        meta = track_meta_from_document(document)
        if meta.live:
            metas.append(meta)
    return sorted(metas, key=lambda meta: meta.slug)


def get_syllabus(track: Track) -> SyllabusTree:
    """Parse a track's syllabus, through the cache when enabled."""
    if not is_syllabus_cache_enabled() or not track.revision:
        return parse_syllabus(track.body)
    return get_syllabus_cache().get_or_parse(
        track.id, track.revision, track.body, parse_syllabus
    )


# -----------------------------------------------------------------------------
# Lessons
# -----------------------------------------------------------------------------


def lesson_identifier_candidates(track_id: str, lesson_slug: str) -> list[str]:
    """Identifiers to try for a lesson, most specific first."""
    return [f"{track_id}/{lesson_slug}", lesson_slug]


def find_lesson_document(
    track_id: str,
    lesson_slug: str,
    store: DocumentLookup | None = None,
) -> LessonDocument | None:
    """Look a lesson up under the track folder, then the legacy flat path."""
    store = store or get_document_store()
    for identifier in lesson_identifier_candidates(track_id, lesson_slug):
        document = store.fetch(LESSONS_CATEGORY, identifier)
        if document is not None:
            return lesson_from_document(lesson_slug, document)
    return None
