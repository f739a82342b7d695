"""Error taxonomy for litweb.

The chunking core and the output steps raise these; only the CLI turns them
into messages and exit codes.
"""

from pathlib import Path


class LitwebError(Exception):
    """Base class for every failure litweb reports to the operator."""

    exit_code = 1


class DocumentNotFound(LitwebError):
    exit_code = 2

    def __init__(self, path: Path | str):
        self.path = Path(path)
        super().__init__(f"File {self.path} not found")


class ChunkNotFound(LitwebError, KeyError):
    exit_code = 3

    def __init__(self, name: str, referenced_from: str | None = None):
        self.name = name
        self.referenced_from = referenced_from
        super().__init__(name)

    def __str__(self) -> str:
        if self.referenced_from is not None:
            return f"Chunk <<{self.name}>> referenced from <<{self.referenced_from}>> is not defined"
        return f"Chunk <<{self.name}>> is not defined"


class CyclicInclusion(LitwebError):
    exit_code = 3

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__("Cyclic chunk inclusion: " + " -> ".join(f"<<{n}>>" for n in self.chain))


class UnterminatedChunk(LitwebError):
    exit_code = 3

    def __init__(self, name: str, line_no: int):
        self.name = name
        self.line_no = line_no
        super().__init__(f"Chunk <<{name}>> opened on line {line_no} is never closed with '@'")


class WriteFailure(LitwebError):
    exit_code = 4

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write to {self.path}: {reason}")


class DocumentDecodeError(LitwebError):
    exit_code = 2

    def __init__(self, path: Path | str, encoding: str, offset: int):
        self.path = Path(path)
        self.encoding = encoding
        self.offset = offset
        super().__init__(f"File {self.path} is not valid {encoding} (byte offset {offset})")


class InclusionTooDeep(LitwebError):
    exit_code = 3

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Chunk <<{name}>> nests inclusions too deeply to expand")
