# courseware/tracks/entitlements.py
"""Viewer entitlements: site-wide or per-track grants that unlock gated lessons."""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import sentry_sdk

from courseware.database import get_connection, is_configured
from courseware.enums import EntitlementScope
from courseware.queries.entitlements import get_active_entitlements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Entitlements:
    """Active grants for one viewer."""

    site_access: bool = False
    track_access: frozenset[str] = field(default_factory=frozenset)

    @classmethod
    def none(cls) -> "Entitlements":
        """No grants (anonymous viewer, or the ledger is unavailable)."""
        return cls()

    def has_access(self, scope: EntitlementScope | str, track_id: str | None = None) -> bool:
        """Check a single grant.

        scope "site" asks for a site-wide grant; scope "track" asks for a
        grant on track_id specifically.
        """
        scope = EntitlementScope(scope)
        if scope is EntitlementScope.site:
            return self.site_access
        return track_id is not None and track_id in self.track_access


def can_access_track(entitlements: Entitlements, track_id: str) -> bool:
    """A site-wide grant or a grant on this track unlocks its gated lessons."""
    return entitlements.has_access(EntitlementScope.site) or entitlements.has_access(
        EntitlementScope.track, track_id
    )


def entitlements_from_rows(rows: Iterable[dict[str, Any]]) -> Entitlements:
    """Fold active entitlement rows into an Entitlements value."""
    site_access = False
    tracks = set()
    for row in rows:
        scope = row.get("scope")
        if scope == EntitlementScope.site:
            site_access = True
        elif scope == EntitlementScope.track and row.get("track_slug"):
            tracks.add(row["track_slug"])
    return Entitlements(site_access=site_access, track_access=frozenset(tracks))


async def load_entitlements(viewer_id: str | None) -> Entitlements:
    """
    Load a viewer's active entitlements from the ledger.

    Anonymous viewers and ledger failures both get no grants, so gated
    lessons stay gated rather than opening up on an error.
    """
    if not viewer_id:
        return Entitlements.none()

    if not is_configured():
        logger.warning("DATABASE_URL not set, treating viewer as unentitled")
        return Entitlements.none()

    try:
        async with get_connection() as conn:
            rows = await get_active_entitlements(conn, viewer_id)
    except Exception as e:
        logger.warning(f"Failed to load entitlements for {viewer_id}: {e}")
        sentry_sdk.capture_exception(e)
        return Entitlements.none()

    return entitlements_from_rows(rows)
