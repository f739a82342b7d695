from pathlib import Path

from pydantic import BaseModel


class FileResult(BaseModel):
    chunk: str
    path: Path
    sha256: str
    bytes: int
    written: bool = True  # False when an identical file was already present


class TangleReport(BaseModel):
    document: Path
    target_dir: Path
    files: list[FileResult] = []

    @property
    def written(self) -> list[FileResult]:
        return [f for f in self.files if f.written]

    @property
    def unchanged(self) -> list[FileResult]:
        return [f for f in self.files if not f.written]


class WeaveReport(BaseModel):
    document: Path
    path: Path
    sha256: str
    bytes: int
    chunks: int
