"""Read-through cache of parsed syllabus trees.

Parsing is a pure function of the track body, so entries are keyed by
(track_id, revision) and never need explicit invalidation: a new revision
simply misses, and older revisions of the same track are evicted.
"""

import logging
from typing import Callable

from courseware.tracks.types import SyllabusTree

logger = logging.getLogger(__name__)


class SyllabusCache:
    """Memoizes syllabus trees per track revision."""

    def __init__(self) -> None:
        self._entries: dict[tuple[str, str], SyllabusTree] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, track_id: str, revision: str) -> SyllabusTree | None:
        return self._entries.get((track_id, revision))

    def get_or_parse(
        self,
        track_id: str,
        revision: str,
        body: str,
        parse: Callable[[str], SyllabusTree],
    ) -> SyllabusTree:
        """Return the cached tree for this revision, parsing on a miss."""
        key = (track_id, revision)
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug(f"Syllabus cache hit: {track_id}@{revision[:8]}")
            return cached

        tree = parse(body)
        stale = [k for k in self._entries if k[0] == track_id]
        for k in stale:
            del self._entries[k]
        self._entries[key] = tree
        logger.info(
            f"Parsed syllabus for {track_id}@{revision[:8]} "
            f"({len(tree)} sections, evicted {len(stale)})"
        )
        return tree

    def clear(self) -> None:
        self._entries.clear()


# Global cache singleton
_cache: SyllabusCache | None = None


def get_syllabus_cache() -> SyllabusCache:
    """Get the syllabus cache, creating it on first use."""
    global _cache
    if _cache is None:
        _cache = SyllabusCache()
    return _cache


def clear_syllabus_cache() -> None:
    """Drop all cached trees (used by tests and content refreshes)."""
    global _cache
    _cache = None
