# courseware/tracks/types.py
"""
Type definitions for track syllabi.

A track document embeds its syllabus as JSON records in markdown bullets.
Parsing produces an immutable tree:

    Section -> (SyllabusLesson | SyllabusModule -> SyllabusLesson...)

Tuples are used for every collection so a parsed tree can be shared
through the syllabus cache without copying.
"""

import enum
from dataclasses import dataclass, field
from typing import Any


class AccessTier(str, enum.Enum):
    free = "free"
    premium = "premium"
    paid = "paid"


@dataclass(frozen=True)
class SyllabusLesson:
    """A leaf syllabus entry pointing at a lesson document."""

    title: str
    slug: str
    access: AccessTier | None = None  # None means "not set on the record"


@dataclass(frozen=True)
class SyllabusModule:
    """A group of lessons sharing a default access tier."""

    title: str
    access: AccessTier = AccessTier.free
    children: tuple[SyllabusLesson, ...] = ()


SyllabusItem = SyllabusLesson | SyllabusModule


@dataclass(frozen=True)
class Section:
    """A titled heading in the track document and the items under it."""

    title: str
    items: tuple[SyllabusItem, ...] = ()


SyllabusTree = tuple[Section, ...]


@dataclass(frozen=True)
class Document:
    """A document returned by a DocumentLookup."""

    category: str
    identifier: str
    attributes: dict[str, Any]
    body: str
    revision: str = ""  # Content hash, used as the syllabus cache key


@dataclass
class TrackMeta:
    """Front-matter metadata of a track."""

    slug: str
    title: str
    access: AccessTier = AccessTier.free
    live: bool = True
    price: float | None = None
    duration: str | None = None
    level: str | None = None
    description: str | None = None
    lesson_count: int | None = None
    tags: list[str] = field(default_factory=list)
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass
class Track:
    """A loaded track: its metadata plus the raw body the syllabus lives in."""

    id: str
    meta: TrackMeta
    body: str
    revision: str = ""


@dataclass
class LessonDocument:
    """A lesson document resolved from the content store."""

    slug: str
    identifier: str  # The identifier it was actually found under
    title: str
    body: str
    access: AccessTier = AccessTier.free
    description: str | None = None
    date: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass
class LessonView:
    """Everything a renderer needs to show one lesson inside a track."""

    track_id: str
    lesson_id: str
    title: str
    position: int  # 1-based
    total: int
    previous_id: str | None
    next_id: str | None
    access: AccessTier
    gated: bool
    content: str | None = None  # None when gated
    preview: str | None = None  # Set only when gated
    description: str | None = None
    purchase_url: str | None = None
    source_identifier: str | None = None
