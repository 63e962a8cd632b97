"""Document lookup and syllabus caching."""

from .store import (
    DocumentLookup,
    FilesystemDocumentStore,
    InMemoryDocumentStore,
    parse_frontmatter,
    get_document_store,
    set_document_store,
    clear_document_store,
)
from .cache import (
    SyllabusCache,
    get_syllabus_cache,
    clear_syllabus_cache,
)

__all__ = [
    "DocumentLookup",
    "FilesystemDocumentStore",
    "InMemoryDocumentStore",
    "parse_frontmatter",
    "get_document_store",
    "set_document_store",
    "clear_document_store",
    "SyllabusCache",
    "get_syllabus_cache",
    "clear_syllabus_cache",
]
