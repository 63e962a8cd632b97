# courseware/tracks/access.py
"""Access-tier resolution for syllabus entries.

Every place that needs a lesson's tier goes through effective_access():
an explicit tier on the lesson wins, else the parent module's tier,
else free. Sections never carry access.
"""

import logging
from typing import Any

from .types import AccessTier, SyllabusLesson, SyllabusModule

logger = logging.getLogger(__name__)


def normalize_access(value: Any) -> AccessTier | None:
    """Coerce a raw front-matter/JSON value to an AccessTier.

    Returns None for missing or unrecognised values, which then resolve
    like an unset tier: a module child inherits its module's tier, and a
    standalone lesson is free. Unrecognised values are logged so author
    typos like "premuim" show up.
    """
    if isinstance(value, AccessTier):
        return value
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return AccessTier(value.strip().lower())
        except ValueError:
            pass
    logger.warning(f"Unknown access tier {value!r}, treating as unset")
    return None


def effective_access(
    node: SyllabusLesson, parent: SyllabusModule | None = None
) -> AccessTier:
    """Resolve the tier that applies to a lesson."""
    if node.access is not None:
        return node.access
    if parent is not None and parent.access is not None:
        return parent.access
    return AccessTier.free


def is_gated(tier: AccessTier) -> bool:
    """Anything other than free needs an entitlement."""
    return tier != AccessTier.free
