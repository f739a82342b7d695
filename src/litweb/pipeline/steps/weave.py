"""Weave step: persist the annotated document markup."""

from pathlib import Path

from ...core.errors import WriteFailure
from ...core.logging import log
from ...core.models import WeaveReport
from .content_hash import compute_content_sha256
from .tangle import write_text


def weave(markup: str, document: Path, output: Path, chunks: int, encoding: str = "utf-8") -> WeaveReport:
    """Write ``markup`` to ``output``; refuses to overwrite the document itself."""
    if output.resolve() == document.resolve():
        raise WriteFailure(output, "weave output would overwrite the source document")

    write_text(output, markup, encoding)
    report = WeaveReport(
        document=document,
        path=output,
        sha256=compute_content_sha256(markup, encoding),
        bytes=len(markup.encode(encoding)),
        chunks=chunks,
    )
    log.info("weave.written", document=str(document), path=str(output), bytes=report.bytes)
    return report
