"""
litweb chunking package

Chunk store construction from document lines and recursive chunk expansion
with indentation propagation.
"""

from .expander import expand, references
from .scanner import ScanResult, build_store
from .store import Chunk, ChunkStore, is_file_like

__all__ = [
    "build_store",
    "expand",
    "references",
    "is_file_like",
    "Chunk",
    "ChunkStore",
    "ScanResult",
]
