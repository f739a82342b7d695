"""
Single-pass chunk store construction.

Each line goes through ``transition`` which maps (state, line) to the next
state and the role the line plays. ``build_store`` folds that over the
document, accumulating chunk bodies and, in weave mode, the document markup.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple, Union, cast

from ..core.errors import UnterminatedChunk
from ..core.logging import log
from .markup import WeaveMarkup
from .store import Chunk, ChunkStore

CHUNK_START_RE = re.compile(r"<<([^>]+)>>=")
CHUNK_END = "@"


@dataclass(frozen=True)
class Outside:
    """Not inside any chunk."""


@dataclass(frozen=True)
class Inside:
    """Accumulating into chunk ``name``, opened on line ``line_no``."""

    name: str
    line_no: int


ScanState = Union[Outside, Inside]


class LineKind(str, Enum):
    TEXT = "text"
    START = "start"
    END = "end"
    BODY = "body"


class ScanResult(NamedTuple):
    store: ChunkStore
    markup: Optional[str] = None
    unterminated: Optional[str] = None


def strip_line_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def split_lines(text: str) -> List[str]:
    """Split text into lines, keeping each line's terminator."""
    pieces = text.split("\n")
    lines = [piece + "\n" for piece in pieces[:-1]]
    if pieces[-1]:
        lines.append(pieces[-1])
    return lines


def transition(state: ScanState, line: str, line_no: int) -> Tuple[ScanState, LineKind]:
    """Classify one line and return the state that follows it."""
    bare = strip_line_terminator(line)

    match = CHUNK_START_RE.fullmatch(bare)
    if match:
        return Inside(match.group(1), line_no), LineKind.START

    if isinstance(state, Outside):
        return state, LineKind.TEXT

    if bare == CHUNK_END:
        return Outside(), LineKind.END

    return state, LineKind.BODY


def build_store(
    lines: Iterable[str],
    weave: bool = False,
    strict: bool = False,
) -> ScanResult:
    """Partition document lines into a ChunkStore.

    Args:
        lines: Document lines including their terminators.
        weave: Also build the HTML-annotated document markup.
        strict: Raise UnterminatedChunk when the document ends inside a chunk
            instead of treating end of document as the terminator.
    """
    bodies: Dict[str, List[str]] = {}
    occurrences: Dict[str, int] = {}
    first_lines: Dict[str, int] = {}
    markup = WeaveMarkup() if weave else None

    state: ScanState = Outside()
    line_count = 0
    for line_no, line in enumerate(lines, start=1):
        line_count = line_no
        state, kind = transition(state, line, line_no)

        if kind is LineKind.START:
            name = cast(Inside, state).name
            if name not in bodies:
                bodies[name] = []
                first_lines[name] = line_no
            occurrences[name] = occurrences.get(name, 0) + 1
            if markup is not None:
                markup.open_chunk(name)
        elif kind is LineKind.BODY:
            bodies[cast(Inside, state).name].append(line)
            if markup is not None:
                markup.body(line)
        elif kind is LineKind.END:
            if markup is not None:
                markup.close_chunk()
        elif markup is not None:
            markup.text(line)

    unterminated = None
    if isinstance(state, Inside):
        if strict:
            raise UnterminatedChunk(state.name, state.line_no)
        unterminated = state.name
        log.warning("scan.chunk.unterminated", chunk=state.name, line=state.line_no)

    store = ChunkStore(
        {
            name: Chunk(name, "".join(body), occurrences[name], first_lines[name])
            for name, body in bodies.items()
        }
    )
    log.debug("scan.store.built", lines=line_count, chunks=len(store), files=len(store.file_names()))

    return ScanResult(
        store=store,
        markup=markup.getvalue() if markup is not None else None,
        unterminated=unterminated,
    )
