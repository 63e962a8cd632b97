# courseware/tracks/sequence.py
"""Flatten a syllabus tree into the ordered lesson sequence used for navigation."""

from typing import Iterator, Sequence

from .types import Section, SyllabusLesson, SyllabusModule


def iter_lessons(
    sections: Sequence[Section],
) -> Iterator[tuple[SyllabusLesson, SyllabusModule | None]]:
    """Yield (lesson, parent module or None) in document order.

    Duplicates are yielded as they appear; see LessonSequence for dedupe.
    """
    for section in sections:
        for item in section.items:
            if isinstance(item, SyllabusModule):
                for child in item.children:
                    yield child, item
            elif isinstance(item, SyllabusLesson):
                yield item, None


def flatten_lesson_slugs(sections: Sequence[Section]) -> list[str]:
    """Get lesson slugs in document order, keeping only first occurrences."""
    seen: set[str] = set()
    slugs = []
    for lesson, _ in iter_lessons(sections):
        if lesson.slug and lesson.slug not in seen:
            seen.add(lesson.slug)
            slugs.append(lesson.slug)
    return slugs


def find_lesson(
    sections: Sequence[Section], lesson_slug: str
) -> tuple[SyllabusLesson, SyllabusModule | None] | None:
    """Find the first syllabus entry for a slug, with its parent module."""
    for lesson, parent in iter_lessons(sections):
        if lesson.slug == lesson_slug:
            return lesson, parent
    return None


class LessonSequence:
    """Ordered, de-duplicated lesson slugs with index and neighbour lookups."""

    def __init__(self, slugs: Sequence[str]):
        self._slugs = tuple(slugs)
        self._index = {slug: i for i, slug in enumerate(self._slugs)}

    @classmethod
    def from_sections(cls, sections: Sequence[Section]) -> "LessonSequence":
        return cls(flatten_lesson_slugs(sections))

    @property
    def slugs(self) -> tuple[str, ...]:
        return self._slugs

    def __len__(self) -> int:
        return len(self._slugs)

    def __contains__(self, lesson_slug: object) -> bool:
        return lesson_slug in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._slugs)

    def index_of(self, lesson_slug: str) -> int:
        """0-based index of a lesson, or -1 if it isn't in the sequence."""
        return self._index.get(lesson_slug, -1)

    def position_of(self, lesson_slug: str) -> int | None:
        """1-based position for display, or None if absent."""
        index = self.index_of(lesson_slug)
        return index + 1 if index >= 0 else None

    def previous_of(self, lesson_slug: str) -> str | None:
        index = self.index_of(lesson_slug)
        if index <= 0:
            return None
        return self._slugs[index - 1]

    def next_of(self, lesson_slug: str) -> str | None:
        index = self.index_of(lesson_slug)
        if index < 0 or index >= len(self._slugs) - 1:
            return None
        return self._slugs[index + 1]
