"""Track syllabus parsing, access resolution and lesson navigation.

Only the pure pieces are re-exported here. Import loader, resolver and
entitlements from their modules; they depend on the content store and
the database layer.
"""

from .types import (
    AccessTier,
    Section,
    SyllabusLesson,
    SyllabusModule,
    SyllabusItem,
    SyllabusTree,
    Track,
    TrackMeta,
    LessonDocument,
    LessonView,
)
from .access import effective_access, is_gated, normalize_access
from .syllabus_parser import parse_syllabus
from .sequence import (
    LessonSequence,
    flatten_lesson_slugs,
    iter_lessons,
    find_lesson,
)

__all__ = [
    # Types
    "AccessTier",
    "Section",
    "SyllabusLesson",
    "SyllabusModule",
    "SyllabusItem",
    "SyllabusTree",
    "Track",
    "TrackMeta",
    "LessonDocument",
    "LessonView",
    # Access
    "effective_access",
    "is_gated",
    "normalize_access",
    # Parsing
    "parse_syllabus",
    # Navigation
    "LessonSequence",
    "flatten_lesson_slugs",
    "iter_lessons",
    "find_lesson",
]
