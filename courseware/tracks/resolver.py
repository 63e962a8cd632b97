# courseware/tracks/resolver.py
"""Resolve a (track, lesson) request into a renderable lesson view.

Order of checks:
1. the track document exists and is live
2. the lesson is wired into the track's syllabus
3. the lesson document exists (track folder first, then flat legacy path)
4. the lesson's effective tier is free, or the viewer is entitled
"""

import logging
import re
from dataclasses import dataclass
from urllib.parse import quote

from courseware.config import get_preview_chars
from courseware.content.store import DocumentLookup

from .access import effective_access, is_gated
from .entitlements import Entitlements, can_access_track
from .loader import find_lesson_document, get_syllabus, load_track
from .sequence import LessonSequence, find_lesson, iter_lessons
from .types import AccessTier, LessonView, Section, SyllabusItem, SyllabusModule, Track

logger = logging.getLogger(__name__)


class LessonResolutionError(Exception):
    """Base class for lesson lookups that should surface as not-found."""

    pass


class LessonNotInSyllabusError(LessonResolutionError):
    """Raised when a lesson slug isn't part of the track's syllabus."""

    pass


class LessonDocumentMissingError(LessonResolutionError):
    """Raised when the syllabus lists a lesson with no backing document."""

    pass


def purchase_url(track_id: str) -> str:
    """Where gated viewers are sent to buy the track."""
    return f"/pricing?track={quote(track_id, safe='')}"


def build_preview(body: str, max_chars: int) -> str:
    """Leading paragraphs of a lesson body, at most max_chars long.

    Whole paragraphs are kept; if even the first paragraph is too long it
    is cut at a word boundary and marked with an ellipsis.
    """
    paragraphs = [p.strip() for p in re.split(r"\n\s*\n", body.strip()) if p.strip()]
    if not paragraphs:
        return ""

    kept: list[str] = []
    length = 0
    for paragraph in paragraphs:
        added = len(paragraph) + (2 if kept else 0)
        if length + added > max_chars:
            break
        kept.append(paragraph)
        length += added

    if kept:
        return "\n\n".join(kept)

    cut = paragraphs[0][:max_chars]
    if " " in cut:
        cut = cut.rsplit(" ", 1)[0]
    return cut.rstrip() + "…"


def resolve_lesson(
    track_id: str,
    lesson_id: str,
    entitlements: Entitlements | None = None,
    store: DocumentLookup | None = None,
    *,
    preview_chars: int | None = None,
) -> LessonView:
    """
    Resolve a lesson within a track for a viewer.

    Args:
        track_id: Track slug
        lesson_id: Lesson slug
        entitlements: Viewer's grants; None means anonymous
        store: Document store, defaults to the process-wide store
        preview_chars: Preview length for gated lessons (PREVIEW_CHARS if None)

    Returns:
        LessonView; gated views carry a preview instead of content

    Raises:
        TrackNotFoundError: No live track document
        LessonNotInSyllabusError: Lesson not listed in the track syllabus
        LessonDocumentMissingError: Lesson listed but no document found
    """
    entitlements = entitlements or Entitlements.none()

    track = load_track(track_id, store)
    sections = get_syllabus(track)
    sequence = LessonSequence.from_sections(sections)

    if lesson_id not in sequence:
        logger.warning(f"Lesson {lesson_id!r} is not in the syllabus of {track_id!r}")
        raise LessonNotInSyllabusError(
            f"Lesson not in syllabus: {track_id}/{lesson_id}"
        )

    lesson = find_lesson_document(track_id, lesson_id, store)
    if lesson is None:
        logger.warning(f"No document for lesson {track_id}/{lesson_id}")
        raise LessonDocumentMissingError(
            f"Lesson document missing: {track_id}/{lesson_id}"
        )

    node, parent = find_lesson(sections, lesson_id)
    access = effective_access(node, parent)
    gated = is_gated(access) and not can_access_track(entitlements, track_id)

    view = LessonView(
        track_id=track_id,
        lesson_id=lesson_id,
        title=lesson.title,
        description=lesson.description,
        position=sequence.position_of(lesson_id),
        total=len(sequence),
        previous_id=sequence.previous_of(lesson_id),
        next_id=sequence.next_of(lesson_id),
        access=access,
        gated=gated,
        source_identifier=lesson.identifier,
    )

    if gated:
        limit = preview_chars if preview_chars is not None else get_preview_chars()
        view.preview = build_preview(lesson.body, limit)
        view.purchase_url = purchase_url(track_id)
    else:
        view.content = lesson.body

    return view


# -----------------------------------------------------------------------------
# Track overview
# -----------------------------------------------------------------------------


@dataclass
class TrackOverview:
    """A track with its syllabus annotated for display."""

    track: Track
    sections: tuple[Section, ...]
    total_lessons: int
    first_free_lesson: str | None


def first_free_lesson(sections: tuple[Section, ...]) -> str | None:
    """Slug of the first lesson in sequence order whose tier is free."""
    for node, parent in iter_lessons(sections):
        if not is_gated(effective_access(node, parent)):
            return node.slug
    return None


def build_track_overview(
    track_id: str, store: DocumentLookup | None = None
) -> TrackOverview:
    """Load a track and summarise its syllabus.

    Raises:
        TrackNotFoundError: No live track document
    """
    track = load_track(track_id, store)
    sections = get_syllabus(track)
    return TrackOverview(
        track=track,
        sections=sections,
        total_lessons=len(LessonSequence.from_sections(sections)),
        first_free_lesson=first_free_lesson(sections),
    )


def serialize_item(item: SyllabusItem) -> dict:
    """Serialize a syllabus item with effective tiers for the API response."""
    if isinstance(item, SyllabusModule):
        return {
            "type": "module",
            "title": item.title,
            "access": item.access.value,
            "children": [
                _serialize_lesson(child.title, child.slug, effective_access(child, item))
                for child in item.children
            ],
        }
    return _serialize_lesson(item.title, item.slug, effective_access(item))


def _serialize_lesson(title: str, slug: str, access: AccessTier) -> dict:
    return {
        "type": "lesson",
        "title": title,
        "slug": slug,
        "access": access.value,
        "locked": is_gated(access),
    }

