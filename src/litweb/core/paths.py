"""Output path resolution.

Tangled files go under the target directory: the ``--target`` option, then
``LITWEB_TARGET_DIR``, then the directory containing the document.
Woven markup goes next to the document unless an explicit path is given.
"""

from pathlib import Path, PurePosixPath
from typing import Optional

from .config import Settings, get_settings
from .errors import WriteFailure


def target_dir(document: Path, override: Optional[str] = None, settings: Optional[Settings] = None) -> Path:
    """Directory tangled files are written under."""
    settings = settings or get_settings()
    if override:
        return Path(override)
    if settings.TARGET_DIR:
        return Path(settings.TARGET_DIR)
    return document.parent


def chunk_output_path(target: Path, name: str) -> Path:
    """Path a file-like chunk is tangled to.

    Raises WriteFailure for names that would land outside ``target``.
    """
    relative = PurePosixPath(name)
    if relative.is_absolute() or ".." in relative.parts:
        raise WriteFailure(target / name, "chunk name points outside the target directory")
    return target.joinpath(*relative.parts)


def weave_output_path(document: Path, override: Optional[str] = None, settings: Optional[Settings] = None) -> Path:
    """Path the woven markup is written to (default: document with WEAVE_SUFFIX)."""
    settings = settings or get_settings()
    if override:
        return Path(override)
    return document.with_suffix(settings.WEAVE_SUFFIX)
