"""Reading literate source documents."""

from pathlib import Path

from ...chunking.scanner import split_lines
from ...core.errors import DocumentDecodeError, DocumentNotFound
from ...core.logging import log


def read_document(path: Path, encoding: str = "utf-8") -> list[str]:
    """Read a document as lines with their original terminators.

    Raises:
        DocumentNotFound: path does not exist or is not a regular file.
        DocumentDecodeError: content is not valid in ``encoding``.
    """
    if not path.is_file():
        raise DocumentNotFound(path)

    # newline="" keeps CRLF terminators intact
    try:
        with open(path, encoding=encoding, newline="") as f:
            text = f.read()
    except UnicodeDecodeError as e:
        raise DocumentDecodeError(path, encoding, e.start) from e

    lines = split_lines(text)
    log.debug("ingest.document.read", path=str(path), lines=len(lines), chars=len(text))
    return lines
