"""
Tangle step: expand every file-like chunk and write it under the target
directory.
"""

from pathlib import Path

from ...chunking.expander import expand_all
from ...chunking.store import ChunkStore
from ...core.errors import WriteFailure
from ...core.logging import log
from ...core.models import FileResult, TangleReport
from ...core.paths import chunk_output_path
from .content_hash import compute_content_sha256, file_sha256


def write_text(path: Path, content: str, encoding: str = "utf-8") -> None:
    """Write content exactly as given, creating parent directories."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise WriteFailure(path.parent, f"failed to create folder ({e.strerror or e})") from e

    try:
        with open(path, "w", encoding=encoding, newline="") as f:
            f.write(content)
    except OSError as e:
        raise WriteFailure(path, e.strerror or str(e)) from e


def tangle(
    store: ChunkStore,
    target: Path,
    document: Path,
    encoding: str = "utf-8",
    skip_unchanged: bool = True,
) -> TangleReport:
    """Write all file-like chunks of ``store`` under ``target``.

    Every file is expanded before the first one is written, so a missing or
    cyclic chunk leaves the target directory untouched.
    """
    names = store.file_names()
    log.info("tangle.start", document=str(document), target=str(target), files=len(names))

    outputs = [
        (name, chunk_output_path(target, name), content)
        for name, content in expand_all(store, names)
    ]

    report = TangleReport(document=document, target_dir=target)
    for name, path, content in outputs:
        digest = compute_content_sha256(content, encoding)
        size = len(content.encode(encoding))

        if skip_unchanged and file_sha256(path) == digest:
            log.debug("tangle.file.unchanged", chunk=name, path=str(path))
            report.files.append(FileResult(chunk=name, path=path, sha256=digest, bytes=size, written=False))
            continue

        write_text(path, content, encoding)
        log.info("tangle.file.written", chunk=name, path=str(path), bytes=size)
        report.files.append(FileResult(chunk=name, path=path, sha256=digest, bytes=size))

    log.info(
        "tangle.done",
        document=str(document),
        written=len(report.written),
        unchanged=len(report.unchanged),
    )
    return report
