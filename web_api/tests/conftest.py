# web_api/tests/conftest.py
"""Pytest fixtures for web API tests.

Sets up an in-memory document store with a realistic track so that API
tests can run without content files or a database.
"""

import pytest

from courseware.content import (
    InMemoryDocumentStore,
    clear_document_store,
    clear_syllabus_cache,
    set_document_store,
)

TEST_JWT_SECRET = "test-secret-for-api-tests"


@pytest.fixture(autouse=True)
def api_test_store():
    """Install a test store with a 'systems' track for API tests.

    This fixture runs automatically for all tests in web_api/tests/.
    The track mixes free lessons, a premium module, a legacy flat-path
    lesson and a listed lesson with no document.
    """
    store = InMemoryDocumentStore(
        {
            "tracks/systems": """---
title: Systems Programming
access: premium
price: 2499
level: Advanced
description: Memory, ownership and concurrency.
tags: [c, rust]
---

## Syllabus

## Getting Started
- {"title": "Welcome", "slug": "welcome", "access": "free"}
- {"title": "Memory Layout", "slug": "memory-layout"}

## Ownership
- {"title": "Deep Dive", "access": "premium", "children": [
    {"title": "Borrowing", "slug": "borrowing"},
    {"title": "Lifetimes", "slug": "lifetimes"}
  ]}
- {"title": "Coming Soon", "slug": "coming-soon", "access": "free"}
""",
            "tracks/archived": """---
title: Archived Track
live: false
---

## Basics
- {"title": "Old", "slug": "old"}
""",
            "learn/systems/welcome": """---
title: Welcome to Systems
description: Start here.
---

This track covers how programs use memory.
""",
            "learn/memory-layout": """---
title: Memory Layout
---

Stack, heap and static storage.
""",
            "learn/systems/borrowing": """---
title: Borrowing
---

A borrow is a temporary reference.

Shared borrows allow many readers.
""",
            "learn/systems/lifetimes": """---
title: Lifetimes
---

Lifetimes name how long a borrow is valid.
""",
            "learn/systems/unlisted": """---
title: Unlisted
---

Not part of the syllabus.
""",
        }
    )
    clear_syllabus_cache()
    set_document_store(store)

    yield store

    clear_document_store()
    clear_syllabus_cache()


@pytest.fixture
def jwt_secret(monkeypatch):
    """Sign and verify session tokens with a fixed secret."""
    monkeypatch.setattr("web_api.auth.JWT_SECRET", TEST_JWT_SECRET)
    return TEST_JWT_SECRET
