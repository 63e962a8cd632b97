# courseware/tracks/tests/test_resolver.py
"""Tests for resolving lessons inside a track."""

from unittest.mock import patch

import pytest

from courseware.tracks.entitlements import Entitlements
from courseware.tracks.loader import TrackNotFoundError
from courseware.tracks.resolver import (
    LessonDocumentMissingError,
    LessonNotInSyllabusError,
    LessonResolutionError,
    build_preview,
    build_track_overview,
    first_free_lesson,
    purchase_url,
    resolve_lesson,
    serialize_item,
)
from courseware.tracks.syllabus_parser import parse_syllabus
from courseware.tracks.types import AccessTier, SyllabusLesson, SyllabusModule


class TestResolveLesson:
    def test_free_lesson_in_track_folder(self, scenario_store):
        view = resolve_lesson("t", "intro", store=scenario_store)

        assert view.title == "Introduction"
        assert view.access == AccessTier.free
        assert view.gated is False
        assert "Welcome to the track." in view.content
        assert view.preview is None
        assert view.purchase_url is None
        assert view.source_identifier == "t/intro"

    def test_navigation(self, scenario_store):
        view = resolve_lesson("t", "adv", store=scenario_store)

        assert view.position == 2
        assert view.total == 3
        assert view.previous_id == "intro"
        assert view.next_id == "x"

    def test_legacy_flat_path_fallback(self, scenario_store):
        """A lesson missing from the track folder is found at learn/<slug>."""
        view = resolve_lesson("t", "adv", store=scenario_store)

        assert view.source_identifier == "adv"
        assert view.title == "Advanced Topics"
        assert "Legacy flat-path lesson." in view.content

    def test_lesson_not_in_syllabus(self, scenario_store):
        """Documents that exist but aren't listed in the syllabus aren't served."""
        scenario_store.add("learn", "t/secret", "---\ntitle: Secret\n---\nHidden.")

        with pytest.raises(LessonNotInSyllabusError):
            resolve_lesson("t", "secret", store=scenario_store)

    def test_unknown_lesson(self, scenario_store):
        with pytest.raises(LessonResolutionError):
            resolve_lesson("t", "missing", store=scenario_store)

    def test_listed_lesson_without_document(self, scenario_store):
        scenario_store.add(
            "tracks", "ghosts", '## Basics\n- {"title": "Ghost", "slug": "ghost"}\n'
        )

        with pytest.raises(LessonDocumentMissingError):
            resolve_lesson("ghosts", "ghost", store=scenario_store)

    def test_unknown_track(self, scenario_store):
        with pytest.raises(TrackNotFoundError):
            resolve_lesson("nope", "intro", store=scenario_store)


class TestGating:
    def test_anonymous_viewer_gets_preview(self, scenario_store):
        view = resolve_lesson("t", "x", store=scenario_store)

        assert view.access == AccessTier.premium
        assert view.gated is True
        assert view.content is None
        assert view.preview == "First paragraph of X.\n\nSecond paragraph of X."
        assert view.purchase_url == "/pricing?track=t"
        assert view.description == "The premium one."
        assert view.position == 3
        assert view.next_id is None

    def test_track_entitlement_unlocks(self, scenario_store):
        entitlements = Entitlements(track_access=frozenset({"t"}))
        view = resolve_lesson("t", "x", entitlements, store=scenario_store)

        assert view.gated is False
        assert "Second paragraph of X." in view.content
        assert view.preview is None

    def test_site_entitlement_unlocks(self, scenario_store):
        view = resolve_lesson(
            "t", "x", Entitlements(site_access=True), store=scenario_store
        )
        assert view.gated is False

    def test_other_track_entitlement_does_not_unlock(self, scenario_store):
        entitlements = Entitlements(track_access=frozenset({"other"}))
        view = resolve_lesson("t", "x", entitlements, store=scenario_store)
        assert view.gated is True

    def test_gating_uses_syllabus_tier_not_lesson_front_matter(self, scenario_store):
        """A free syllabus entry is open even if its document says premium."""
        scenario_store.add(
            "learn", "t/intro", "---\ntitle: Intro\naccess: premium\n---\nOpen.\n"
        )

        view = resolve_lesson("t", "intro", store=scenario_store)
        assert view.gated is False
        assert view.access == AccessTier.free

    def test_fixture_preview_stops_at_paragraph(self, fixture_store):
        view = resolve_lesson(
            "modern-cpp", "raii", store=fixture_store, preview_chars=100
        )
        assert view.gated is True
        assert view.preview == (
            "RAII ties the lifetime of a resource to the lifetime of an object."
        )

    def test_preview_length_from_config(self, scenario_store):
        with patch.dict("os.environ", {"PREVIEW_CHARS": "25"}):
            view = resolve_lesson("t", "x", store=scenario_store)
        assert view.preview == "First paragraph of X."


class TestBuildPreview:
    def test_keeps_whole_paragraphs(self):
        body = "One two.\n\nThree four.\n\nFive six."
        assert build_preview(body, 22) == "One two.\n\nThree four."

    def test_cuts_long_first_paragraph_at_word(self):
        assert build_preview("First paragraph of X.", 10) == "First…"

    def test_empty_body(self):
        assert build_preview("", 100) == ""
        assert build_preview("\n\n  \n", 100) == ""

    def test_whole_body_when_short(self):
        assert build_preview("\nShort.\n", 100) == "Short."


class TestPurchaseUrl:
    def test_encodes_track_id(self):
        assert purchase_url("modern-cpp") == "/pricing?track=modern-cpp"
        assert purchase_url("a b/c") == "/pricing?track=a%20b%2Fc"


class TestTrackOverview:
    def test_fixture_track(self, fixture_store):
        overview = build_track_overview("modern-cpp", fixture_store)

        assert overview.track.meta.title == "Modern C++"
        assert len(overview.sections) == 3
        assert overview.total_lessons == 9
        assert overview.first_free_lesson == "welcome"

    def test_first_free_skips_gated(self):
        sections = parse_syllabus(
            """## A
- {"title": "Locked", "slug": "locked", "access": "paid"}
- {"title": "Group", "access": "premium", "children": [
    {"title": "Open", "slug": "open", "access": "free"}
  ]}
"""
        )
        assert first_free_lesson(sections) == "open"

    def test_first_free_none_when_all_gated(self):
        sections = parse_syllabus(
            '## A\n- {"title": "Locked", "slug": "locked", "access": "paid"}\n'
        )
        assert first_free_lesson(sections) is None

    def test_missing_track(self, fixture_store):
        with pytest.raises(TrackNotFoundError):
            build_track_overview("draft-track", fixture_store)


class TestSerializeItem:
    def test_lesson(self):
        lesson = SyllabusLesson(title="Intro", slug="intro", access=AccessTier.free)
        assert serialize_item(lesson) == {
            "type": "lesson",
            "title": "Intro",
            "slug": "intro",
            "access": "free",
            "locked": False,
        }

    def test_module_children_carry_effective_access(self):
        module = SyllabusModule(
            title="Group",
            access=AccessTier.premium,
            children=(SyllabusLesson(title="X", slug="x"),),
        )
        data = serialize_item(module)

        assert data["type"] == "module"
        assert data["access"] == "premium"
        assert data["children"] == [
            {
                "type": "lesson",
                "title": "X",
                "slug": "x",
                "access": "premium",
                "locked": True,
            }
        ]
