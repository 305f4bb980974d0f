"""
Process-wide metadata cache.

Reflection is the expensive part of mapping a record, so each record type
is inspected once and its :class:`TableMetadata` kept for the life of the
process.

Manifesto:
    - **Build once:** concurrent first lookups of one type get the same
      instance; the reader runs a single time
    - **Cheap hits:** a cached lookup takes no lock
    - **Injectable:** engines accept their own ``MetadataCache``; tests use a
      fresh one instead of clearing the global

Architecture:
    ::

        get(Student)
          ├── hit  ──────────────────────────→ TableMetadata
          └── miss → lock → re-check → read_metadata() → store → unlock

Examples:
    >>> cache = MetadataCache()
    >>> cache.get(Student) is cache.get(Student)
    True
    >>> Student in cache
    True

Guardrails:
    ❌ DON'T: Mutate a record type's declaration after its first lookup
    ✅ DO: Call ``clear()`` (tests only) if a type must be re-read

Tags:
    cache, metadata, thread-safe, orm, rowspine
"""

from __future__ import annotations

import threading

from rowspine.core.logging import get_logger
from rowspine.orm.metadata import TableMetadata, read_metadata

logger = get_logger(__name__)


class MetadataCache:
    """Thread-safe map from record type to its table metadata."""

    def __init__(self) -> None:
        self._entries: dict[type, TableMetadata] = {}
        self._lock = threading.Lock()

    def get(self, record_type: type) -> TableMetadata:
        """Metadata for ``record_type``, built on first use."""
        metadata = self._entries.get(record_type)
        if metadata is not None:
            return metadata

        with self._lock:
            metadata = self._entries.get(record_type)
            if metadata is None:
                metadata = read_metadata(record_type)
                self._entries[record_type] = metadata
                logger.debug("table_metadata_cached", record_type=metadata.record_name, size=len(self._entries))
        return metadata

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._entries

    def __len__(self) -> int:
        return len(self._entries)


default_cache = MetadataCache()


def metadata_for(record_type: type) -> TableMetadata:
    """Metadata for ``record_type`` from the process-wide cache."""
    return default_cache.get(record_type)


__all__ = ["MetadataCache", "default_cache", "metadata_for"]
