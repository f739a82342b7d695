"""
Chunk and ChunkStore types shared by the scanner and the expander.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import NamedTuple

from ..core.errors import ChunkNotFound


class Chunk(NamedTuple):
    """A named chunk with the concatenated body of all its occurrences."""

    name: str
    raw_body: str
    occurrences: int = 1
    first_line: int = 0

    @property
    def is_file(self) -> bool:
        return is_file_like(self.name)


def is_file_like(name: str) -> bool:
    """Chunks named like a path (containing '.' or '/') are tangled to disk."""
    return "." in name or "/" in name


class ChunkStore(Mapping[str, Chunk]):
    """Read-only mapping of chunk name to Chunk, in first-appearance order."""

    def __init__(self, chunks: Mapping[str, Chunk] | None = None):
        self._chunks = MappingProxyType(dict(chunks or {}))

    def __getitem__(self, name: str) -> Chunk:
        try:
            return self._chunks[name]
        except KeyError:
            raise ChunkNotFound(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)

    def __repr__(self) -> str:
        return f"ChunkStore({list(self._chunks)!r})"

    def file_names(self) -> list[str]:
        """Names of file-like chunks, in store order."""
        return [name for name in self._chunks if is_file_like(name)]
