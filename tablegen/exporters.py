# File: tablegen/exporters.py
"""
TableGen - Archive Exporter
============================
Sequential archive writers.  Each artifact becomes exactly one entry: the
generator calls ``write_entry`` once per template, in selection order, and
never overlaps two entries.

``ZipArchiveSink`` refuses entries with no name and duplicate names rather
than silently producing an ambiguous archive.  I/O errors propagate to the
caller unchanged.
"""

from __future__ import annotations

import logging
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Optional, Protocol, Set, Union, runtime_checkable

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.exporters")


@runtime_checkable
class ArchiveSink(Protocol):
    """Anything that accepts one (name, bytes) entry at a time."""

    def write_entry(self, name: Optional[str], data: bytes) -> None:
        ...


@dataclass(frozen=True, slots=True)
class EntryRecord:
    """Immutable record of a written archive entry."""

    name: str
    size_bytes: int


class ZipArchiveSink:
    """
    Write archive entries into a zip file.

    Usage::

        with ZipArchiveSink(Path("code.zip")) as sink:
            generator.generate(config, table, columns, sink=sink)
    """

    def __init__(
        self,
        target: Union[str, Path, IO[bytes]],
        compression: int = zipfile.ZIP_DEFLATED,
    ) -> None:
        self._zip: zipfile.ZipFile = zipfile.ZipFile(target, "w", compression)
        self._names: Set[str] = set()
        self._records: List[EntryRecord] = []

    def write_entry(self, name: Optional[str], data: bytes) -> None:
        """
        Add one entry.

        Raises:
            ValueError: If *name* is empty or already written.
        """
        if not name:
            raise ValueError("Archive entry name is required.")
        if name in self._names:
            raise ValueError(f"Duplicate archive entry: {name}")

        with self._zip.open(name, "w") as entry:
            entry.write(data)

        self._names.add(name)
        self._records.append(EntryRecord(name=name, size_bytes=len(data)))
        logger.debug("Archived %s (%d bytes)", name, len(data))

    @property
    def records(self) -> List[EntryRecord]:
        return list(self._records)

    def close(self) -> None:
        self._zip.close()
        logger.info(
            "Archive closed: %d entries, %d bytes.",
            len(self._records),
            sum(r.size_bytes for r in self._records),
        )

    def __enter__(self) -> "ZipArchiveSink":
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.close()


__all__: List[str] = [
    "ArchiveSink",
    "EntryRecord",
    "ZipArchiveSink",
]
