"""
Recursive chunk expansion with caller-driven indentation.
"""

from __future__ import annotations

import re
from typing import FrozenSet, List, Mapping, Tuple

from ..core.errors import ChunkNotFound, CyclicInclusion, InclusionTooDeep
from .store import Chunk

CHUNK_INCLUDE_RE = re.compile(r"(\s*)<<([^>]+)>>")
LINE_SPLIT_RE = re.compile(r"\r?\n")


def split_reference_whitespace(body: str, start: int, whitespace: str) -> Tuple[str, str, bool]:
    """Split the whitespace captured before a reference.

    Returns ``(kept, indent, newline)``: ``kept`` is copied to the output as
    is, ``indent`` is handed to the nested expansion and ``newline`` says
    whether the expansion must be moved onto a line of its own.
    """
    last_newline = whitespace.rfind("\n")
    if last_newline != -1:
        return whitespace[: last_newline + 1], whitespace[last_newline + 1 :], False
    if start == 0 or body[start - 1] == "\n":
        return "", whitespace, False
    # Reference follows other text on the same line
    return "", whitespace[1:], True


def references(body: str) -> List[str]:
    """Names of the chunks referenced in ``body``, in order of appearance."""
    return [match.group(2) for match in CHUNK_INCLUDE_RE.finditer(body)]


def expand(store: Mapping[str, Chunk], name: str, indent: str = "") -> str:
    """Return the text of chunk ``name`` with every inclusion expanded.

    Every line of the result, including the first, is prefixed with
    ``indent``. Trailing spaces, tabs and newlines are trimmed from the end.

    Raises:
        ChunkNotFound: ``name`` or a chunk it includes is not in the store.
        CyclicInclusion: a chunk includes itself, directly or transitively.
        InclusionTooDeep: the inclusion chain exceeds the interpreter's
            recursion limit.
    """
    try:
        return _expand(store, name, indent, frozenset(), ())
    except RecursionError as e:
        raise InclusionTooDeep(name) from e


def _expand(
    store: Mapping[str, Chunk],
    name: str,
    indent: str,
    in_progress: FrozenSet[str],
    chain: Tuple[str, ...],
) -> str:
    if name in in_progress:
        raise CyclicInclusion([*chain, name])

    try:
        body = store[name].raw_body
    except KeyError:
        raise ChunkNotFound(name, chain[-1] if chain else None) from None

    nested_in_progress = in_progress | {name}
    nested_chain = (*chain, name)

    def substitute(match: re.Match) -> str:
        kept, nested_indent, newline = split_reference_whitespace(body, match.start(), match.group(1))
        expansion = _expand(store, match.group(2), nested_indent, nested_in_progress, nested_chain)
        return ("\n" if newline else "") + kept + expansion

    content = CHUNK_INCLUDE_RE.sub(substitute, body)

    indented = "".join(f"{indent}{line}\n" for line in LINE_SPLIT_RE.split(content))
    return indented.rstrip(" \t\n")


def expand_all(store: Mapping[str, Chunk], names: List[str]) -> List[Tuple[str, str]]:
    """Expand several top-level chunks; the first failure aborts the batch."""
    return [(name, expand(store, name)) for name in names]
