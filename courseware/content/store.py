# courseware/content/store.py
"""Document lookup over markdown content with YAML front matter.

Documents live at `<root>/<category>/<identifier>.mdx` (or `.md`), where the
identifier may contain slashes, e.g. `learn/cpp-track/move-semantics.mdx`.
"""

import hashlib
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from courseware.config import get_content_dir
from courseware.tracks.types import Document

logger = logging.getLogger(__name__)

DOCUMENT_EXTENSIONS = (".mdx", ".md")

_FRONTMATTER_PATTERN = re.compile(r"^---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|$)", re.DOTALL)


def parse_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Split a document into (attributes, body).

    Invalid or non-mapping YAML yields empty attributes; the body is
    everything after the closing fence either way.
    """
    match = _FRONTMATTER_PATTERN.match(text)
    if not match:
        return {}, text

    body = text[match.end() :]
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Invalid front matter, ignoring attributes: {e}")
        return {}, body

    if not isinstance(data, dict):
        return {}, body
    return {str(key): value for key, value in data.items()}, body


def compute_revision(text: str) -> str:
    """Content hash identifying one version of a document."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def is_safe_identifier(identifier: str) -> bool:
    """Reject identifiers that could escape the category directory."""
    if not identifier or "\\" in identifier or "\x00" in identifier:
        return False
    path = PurePosixPath(identifier)
    if path.is_absolute():
        return False
    return all(part not in ("", ".", "..") for part in identifier.split("/"))


def build_document(category: str, identifier: str, raw: str) -> Document:
    attributes, body = parse_frontmatter(raw)
    return Document(
        category=category,
        identifier=identifier,
        attributes=attributes,
        body=body,
        revision=compute_revision(raw),
    )


class DocumentLookup(ABC):
    """Abstract interface for fetching documents by category and identifier."""

    @abstractmethod
    def fetch(self, category: str, identifier: str) -> Document | None:
        """Get a document, or None if it doesn't exist."""
        pass

    @abstractmethod
    def list_identifiers(self, category: str) -> list[str]:
        """All identifiers in a category, sorted, including nested ones."""
        pass


class FilesystemDocumentStore(DocumentLookup):
    """Documents read from a content directory on disk."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _find_path(self, category: str, identifier: str) -> Path | None:
        base = self.root / category
        for ext in DOCUMENT_EXTENSIONS:
            path = base / f"{identifier}{ext}"
            if path.is_file():
                return path
        return None

    def fetch(self, category: str, identifier: str) -> Document | None:
        if not is_safe_identifier(category) or not is_safe_identifier(identifier):
            return None

        path = self._find_path(category, identifier)
        if path is None:
            logger.debug(f"No document at {category}/{identifier}")
            return None

        try:
            raw = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Unreadable document {category}/{identifier}: {e}")
            return None
        return build_document(category, identifier, raw)

    def list_identifiers(self, category: str) -> list[str]:
        base = self.root / category
        if not is_safe_identifier(category) or not base.is_dir():
            return []

        identifiers = set()
        for path in base.rglob("*"):
            if path.is_file() and path.suffix in DOCUMENT_EXTENSIONS:
                relative = path.relative_to(base).with_suffix("")
                identifiers.add(relative.as_posix())
        return sorted(identifiers)


class InMemoryDocumentStore(DocumentLookup):
    """Documents held in memory, keyed by "<category>/<identifier>".

    Values are raw file text including front matter.
    """

    def __init__(self, files: dict[str, str] | None = None):
        self.files: dict[str, str] = dict(files or {})

    def add(self, category: str, identifier: str, raw: str) -> None:
        self.files[f"{category}/{identifier}"] = raw

    def fetch(self, category: str, identifier: str) -> Document | None:
        if not is_safe_identifier(identifier):
            return None
        raw = self.files.get(f"{category}/{identifier}")
        if raw is None:
            return None
        return build_document(category, identifier, raw)

    def list_identifiers(self, category: str) -> list[str]:
        prefix = f"{category}/"
        return sorted(key[len(prefix) :] for key in self.files if key.startswith(prefix))


# Process-wide store
_store: DocumentLookup | None = None


def get_document_store() -> DocumentLookup:
    """Get the document store, defaulting to the filesystem at CONTENT_DIR."""
    global _store
    if _store is None:
        _store = FilesystemDocumentStore(get_content_dir())
    return _store


def set_document_store(store: DocumentLookup) -> None:
    """Set the document store (used at startup and by tests)."""
    global _store
    _store = store


def clear_document_store() -> None:
    """Forget the current store so the next access rebuilds the default."""
    global _store
    _store = None
