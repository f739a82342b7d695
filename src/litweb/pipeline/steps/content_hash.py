"""Content hashing utilities for tangled output."""

import hashlib
from pathlib import Path


def compute_content_sha256(content: str, encoding: str = "utf-8") -> str:
    """SHA256 hex digest of text as it would be written to disk."""
    return hashlib.sha256(content.encode(encoding)).hexdigest()


def file_sha256(path: Path) -> str | None:
    """SHA256 hex digest of an existing file, or None if it is not a file."""
    if not path.is_file():
        return None
    return hashlib.sha256(path.read_bytes()).hexdigest()
