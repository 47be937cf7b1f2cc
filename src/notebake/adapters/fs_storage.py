import asyncio
import sys
from pathlib import Path
from typing import Iterable

from ..core.model import Document
from ..core.ports import ContentReader, PathService, StorageStrategy


class FsStorage(StorageStrategy):
    def __init__(self, root: Path):
        self.root = root

    def _path(self, path: str) -> Path:
        return self.root / path

    def read_raw(self, path: str) -> str | None:
        p = self._path(path)
        return p.read_text(encoding="utf-8") if p.is_file() else None

    def write_raw(self, path: str, contents: str) -> None:
        p = self._path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(contents, encoding="utf-8")

    def exists(self, path: str) -> bool:
        return self._path(path).is_file()

    def list_all_paths(self) -> Iterable[str]:
        if not self.root.exists():
            return []
        for p in sorted(self.root.rglob("*")):
            rel = p.relative_to(self.root)
            # Skip dot folders such as .obsidian or .git
            if any(part.startswith(".") for part in rel.parts):
                continue
            if p.is_file():
                yield rel.as_posix()


class VaultReader(ContentReader):
    def __init__(self, storage: FsStorage):
        self.storage = storage

    async def read(self, doc: Document) -> str:
        raw = await asyncio.to_thread(self.storage.read_raw, doc.path)
        if raw is None:
            raise FileNotFoundError(f"Note {doc.path} not found")
        return raw


class FsPathService(PathService):
    def __init__(self, storage: FsStorage, is_windows: bool | None = None):
        self.storage = storage
        self.is_windows = sys.platform.startswith("win") if is_windows is None else is_windows

    def full_path(self, doc: Document) -> str | None:
        if not self.storage.exists(doc.path):
            return None
        return str(self.storage._path(doc.path).resolve())
