"""Root pytest configuration for the courseware service."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)

# Local overrides of these would change parsing and preview results
CONTENT_TUNING_VARS = ("PREVIEW_CHARS", "SYLLABUS_CACHE", "CONTENT_DIR")


@pytest.fixture(autouse=True)
def default_content_settings(monkeypatch):
    """Run every test with default content settings, whatever .env says."""
    for name in CONTENT_TUNING_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(scope="session")
def event_loop_policy():
    """Use default event loop policy for all async tests."""
    import asyncio

    return asyncio.DefaultEventLoopPolicy()
