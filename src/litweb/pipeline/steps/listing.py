"""List step: names of the chunks that would be tangled."""

from typing import Callable

import typer

from ...chunking.store import ChunkStore


def list_files(store: ChunkStore, echo: Callable[[str], None] = typer.echo) -> list[str]:
    """Print each file-like chunk name on its own line, in store order."""
    names = store.file_names()
    for name in names:
        echo(name)
    return names
