# courseware/content/tests/test_syllabus_cache.py
"""Tests for the parsed syllabus cache."""

from unittest.mock import Mock

from courseware.content.cache import (
    SyllabusCache,
    clear_syllabus_cache,
    get_syllabus_cache,
)
from courseware.tracks.types import Section


class TestSyllabusCache:
    def test_parses_on_miss_and_reuses_on_hit(self):
        cache = SyllabusCache()
        parse = Mock(return_value=(Section(title="Basics"),))

        first = cache.get_or_parse("t", "rev1", "body", parse)
        second = cache.get_or_parse("t", "rev1", "body", parse)

        assert first is second
        parse.assert_called_once_with("body")
        assert cache.get("t", "rev1") is first

    def test_empty_tree_is_cached(self):
        cache = SyllabusCache()
        parse = Mock(return_value=())

        cache.get_or_parse("t", "rev1", "", parse)
        cache.get_or_parse("t", "rev1", "", parse)

        parse.assert_called_once()

    def test_new_revision_evicts_old(self):
        cache = SyllabusCache()
        cache.get_or_parse("t", "rev1", "one", lambda body: ())
        cache.get_or_parse("other", "rev1", "x", lambda body: ())
        cache.get_or_parse("t", "rev2", "two", lambda body: (Section(title="Two"),))

        assert cache.get("t", "rev1") is None
        assert cache.get("t", "rev2") == (Section(title="Two"),)
        assert cache.get("other", "rev1") == ()
        assert len(cache) == 2

    def test_clear(self):
        cache = SyllabusCache()
        cache.get_or_parse("t", "rev1", "one", lambda body: ())
        cache.clear()
        assert len(cache) == 0


class TestSyllabusCacheSingleton:
    def setup_method(self):
        clear_syllabus_cache()

    def test_get_returns_same_instance(self):
        assert get_syllabus_cache() is get_syllabus_cache()

    def test_clear_drops_instance(self):
        cache = get_syllabus_cache()
        clear_syllabus_cache()
        assert get_syllabus_cache() is not cache
