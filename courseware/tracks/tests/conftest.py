"""Pytest fixtures for track tests."""

from pathlib import Path

import pytest

from courseware.content.cache import clear_syllabus_cache
from courseware.content.store import (
    FilesystemDocumentStore,
    InMemoryDocumentStore,
    clear_document_store,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def reset_content_state():
    """Drop cached syllabi and the process-wide store around each test."""
    clear_syllabus_cache()
    clear_document_store()
    yield
    clear_syllabus_cache()
    clear_document_store()


@pytest.fixture
def fixture_store():
    """Store reading the on-disk fixture tracks and lessons."""
    return FilesystemDocumentStore(FIXTURES_DIR)


@pytest.fixture
def scenario_store():
    """Small in-memory track with a free section and a premium module."""
    return InMemoryDocumentStore(
        {
            "tracks/t": """---
title: Example Track
---

## Basics
- {"title":"Intro","slug":"intro","access":"free"}
- {"title":"Adv","slug":"adv"}

## Advanced
- {"title":"Group","access":"premium","children":[{"title":"X","slug":"x"}]}
""",
            "learn/t/intro": """---
title: Introduction
---

Welcome to the track.
""",
            "learn/adv": """---
title: Advanced Topics
---

Legacy flat-path lesson.
""",
            "learn/t/x": """---
title: Lesson X
description: The premium one.
---

First paragraph of X.

Second paragraph of X.
""",
        }
    )
