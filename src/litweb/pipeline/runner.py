from pathlib import Path
from typing import Callable, List, Optional, Union, TYPE_CHECKING, cast

import typer

from ..chunking.scanner import ScanResult, build_store
from ..core.logging import log
from ..core.models import TangleReport, WeaveReport
from ..core.paths import target_dir, weave_output_path
from .commands import Command
from .steps.ingest import read_document
from .steps.listing import list_files
from .steps.tangle import tangle
from .steps.weave import weave

if TYPE_CHECKING:
    from ..core.config import Settings

RunResult = Union[List[str], TangleReport, WeaveReport]


def scan(document: Path, settings: "Settings", weave_mode: bool = False) -> ScanResult:
    """Read ``document`` and build its chunk store."""
    lines = read_document(document, settings.SOURCE_ENCODING)
    result = build_store(lines, weave=weave_mode, strict=settings.STRICT_CHUNKS)
    log.info(
        "scan.done",
        document=str(document),
        chunks=len(result.store),
        files=len(result.store.file_names()),
    )
    return result


def run(
    command: Command,
    document: Path,
    settings: Optional["Settings"] = None,
    target: Optional[str] = None,
    output: Optional[str] = None,
    echo: Callable[[str], None] = typer.echo,
) -> RunResult:
    """Run one command against one document.

    Errors from scanning, expansion or writing propagate to the caller.
    """
    if settings is None:
        from ..core.config import get_settings

        settings = get_settings()

    log.info("run.start", command=command.value, document=str(document))
    result = scan(document, settings, weave_mode=command is Command.WEAVE)

    outcome: RunResult
    if command is Command.LIST:
        outcome = list_files(result.store, echo=echo)
    elif command is Command.TANGLE:
        outcome = tangle(
            result.store,
            target_dir(document, target, settings),
            document,
            encoding=settings.SOURCE_ENCODING,
            skip_unchanged=settings.SKIP_UNCHANGED,
        )
    elif command is Command.WEAVE:
        outcome = weave(
            cast(str, result.markup),
            document,
            weave_output_path(document, output, settings),
            chunks=len(result.store),
            encoding=settings.SOURCE_ENCODING,
        )
    else:
        raise ValueError(f"Unknown command: {command}")

    log.info("run.end", command=command.value, document=str(document))
    return outcome
