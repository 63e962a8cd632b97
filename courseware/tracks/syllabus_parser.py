# courseware/tracks/syllabus_parser.py
"""
Extract the syllabus tree from a track document body.

Format:

    ## Basics
    - {"title": "Intro", "slug": "intro", "access": "free"}
    - {"title": "Group", "access": "premium", "children": [
        {"title": "X", "slug": "x"}
      ]}

- `##` / `###` headings open a section; a heading reading "Syllabus"
  (any case) is a label and opens nothing.
- A bullet starting with `{` begins a JSON record which may span lines.
  The record ends when the count of `{` minus `}` drops to zero (or
  below, for a stray closing brace).
- Records with `children` are modules, records with `slug` are lessons,
  anything else (or anything that isn't valid JSON) is dropped.
"""

import enum
import json
import logging
import re
from dataclasses import replace
from typing import Any

from .access import effective_access, normalize_access
from .types import (
    AccessTier,
    Section,
    SyllabusItem,
    SyllabusLesson,
    SyllabusModule,
    SyllabusTree,
)

logger = logging.getLogger(__name__)

_HEADING_PATTERN = re.compile(r"^#{2,3}\s+(.*?)\s*$")
_RECORD_BULLET_PATTERN = re.compile(r"^-\s+(\{.*)$")
_TRAILING_RULE_PATTERN = re.compile(r"\n---\s*$")

SYLLABUS_LABEL = "syllabus"


# -----------------------------------------------------------------------------
# Record interpretation
# -----------------------------------------------------------------------------


def _count_braces(text: str) -> int:
    """Open braces minus close braces in text."""
    return text.count("{") - text.count("}")


def _clean_record_text(raw: str) -> str:
    """Drop carriage returns and a `---` rule captured after the record."""
    return _TRAILING_RULE_PATTERN.sub("", raw.replace("\r", "")).strip()


def _coerce_slug(value: Any) -> str | None:
    """Return a non-empty slug string, or None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int)):
        slug = str(value).strip()
        return slug or None
    return None


def _coerce_title(value: Any, fallback: str) -> str:
    if value is None:
        return fallback
    title = str(value).strip()
    return title or fallback


def _build_child(data: Any, parent: SyllabusModule) -> SyllabusLesson | None:
    """Build a module child, resolving its tier against the parent."""
    if not isinstance(data, dict):
        return None
    if "children" in data:
        # Only one level of modules is modelled
        logger.debug(f"Ignoring nested module record: {data.get('title')!r}")
        return None

    slug = _coerce_slug(data.get("slug"))
    if slug is None:
        return None

    lesson = SyllabusLesson(
        title=_coerce_title(data.get("title"), slug),
        slug=slug,
        access=normalize_access(data.get("access")),
    )
    return replace(lesson, access=effective_access(lesson, parent))


def parse_record(data: Any) -> SyllabusItem | None:
    """Interpret a decoded JSON record as a module or lesson.

    Returns None for records that are neither.
    """
    if not isinstance(data, dict):
        return None

    children = data.get("children")
    if isinstance(children, list):
        module = SyllabusModule(
            title=_coerce_title(data.get("title"), "Untitled"),
            access=normalize_access(data.get("access")) or AccessTier.free,
        )
        built = [_build_child(child, module) for child in children]
        return SyllabusModule(
            title=module.title,
            access=module.access,
            children=tuple(child for child in built if child is not None),
        )

    slug = _coerce_slug(data.get("slug"))
    if slug is not None:
        lesson = SyllabusLesson(
            title=_coerce_title(data.get("title"), slug),
            slug=slug,
            access=normalize_access(data.get("access")),
        )
        return replace(lesson, access=effective_access(lesson))

    return None


# -----------------------------------------------------------------------------
# Line scanner
# -----------------------------------------------------------------------------


class _State(enum.Enum):
    SCANNING_FOR_SECTION = "scanning_for_section"
    AWAITING_BLOCK = "awaiting_block"
    COLLECTING_BLOCK = "collecting_block"


class _SyllabusScanner:
    """Line-by-line state machine building the section list."""

    def __init__(self) -> None:
        self.state = _State.SCANNING_FOR_SECTION
        self.sections: list[tuple[str, list[SyllabusItem]]] = []
        self.buffer: list[str] = []
        self.balance = 0

    @property
    def _current_items(self) -> list[SyllabusItem] | None:
        if not self.sections:
            return None
        return self.sections[-1][1]

    def feed(self, line: str) -> None:
        stripped = line.strip()

        heading = _HEADING_PATTERN.match(stripped)
        if heading:
            self._on_heading(heading.group(1).strip())
            return

        if self.state is _State.COLLECTING_BLOCK:
            self._on_block_line(line, stripped)
            return

        bullet = _RECORD_BULLET_PATTERN.match(stripped)
        if bullet and self.state is _State.AWAITING_BLOCK:
            self._start_block(bullet.group(1))

    def finish(self) -> SyllabusTree:
        if self.state is _State.COLLECTING_BLOCK:
            logger.debug("Syllabus record left open at end of document")
            self._flush()
        return tuple(
            Section(title=title, items=tuple(items)) for title, items in self.sections
        )

    def _on_heading(self, title: str) -> None:
        if title.lower() == SYLLABUS_LABEL:
            return
        if self.state is _State.COLLECTING_BLOCK:
            self._flush()
        self.sections.append((title, []))
        self.state = _State.AWAITING_BLOCK

    def _start_block(self, first: str) -> None:
        self.state = _State.COLLECTING_BLOCK
        self.buffer = [first]
        self.balance = _count_braces(first)
        if self.balance <= 0:
            self._flush()

    def _on_block_line(self, line: str, stripped: str) -> None:
        if stripped == "---" and self.balance == 0:
            self._flush()
            return
        self.buffer.append(line.rstrip("\r"))
        self.balance += _count_braces(line)
        if self.balance <= 0:
            self._flush()

    def _flush(self) -> None:
        raw = _clean_record_text("\n".join(self.buffer))
        self.buffer = []
        self.balance = 0
        self.state = _State.AWAITING_BLOCK

        items = self._current_items
        if items is None:
            return

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.debug(f"Skipping malformed syllabus record: {e}")
            return

        item = parse_record(data)
        if item is None:
            logger.debug("Skipping syllabus record with neither children nor slug")
            return
        items.append(item)


# -----------------------------------------------------------------------------
# Public API
# -----------------------------------------------------------------------------


def parse_syllabus(body: str) -> SyllabusTree:
    """
    Parse a track document body into its syllabus tree.

    Never raises on malformed input; bad records are skipped. A body with
    no headings or records gives an empty tuple.

    Args:
        body: Markdown body of the track (front matter already removed)

    Returns:
        Tuple of Sections in document order
    """
    scanner = _SyllabusScanner()
    for line in body.splitlines():
        scanner.feed(line)
    return scanner.finish()
