"""Shared fixtures: an in-memory vault wired into a BakeContext."""

import asyncio

import pytest

from notebake.adapters.markdown_parser import MarkdownParser
from notebake.adapters.resolver_index import MarkdownIndex, VaultResolver
from notebake.config import BakeSettings
from notebake.core.baker import BakeContext, bake
from notebake.core.model import Document


class MemoryStorage:
    def __init__(self, files: dict[str, str]):
        self.files = dict(files)

    def read_raw(self, path: str) -> str | None:
        return self.files.get(path)

    def write_raw(self, path: str, contents: str) -> None:
        self.files[path] = contents

    def exists(self, path: str) -> bool:
        return path in self.files

    def list_all_paths(self) -> list[str]:
        return sorted(self.files)


class MemoryReader:
    def __init__(self, storage: MemoryStorage, fail: set[str] | None = None):
        self.storage = storage
        self.fail = fail or set()
        self.reads: list[str] = []

    async def read(self, doc: Document) -> str:
        raw = self.storage.read_raw(doc.path)
        if raw is None or doc.path in self.fail:
            raise FileNotFoundError(f"Note {doc.path} not found")
        self.reads.append(doc.path)
        return raw


class StaticPaths:
    def __init__(self, root: str = "/vault", is_windows: bool = False, supported: bool = True):
        self.root = root
        self.is_windows = is_windows
        self.supported = supported

    def full_path(self, doc: Document) -> str | None:
        if not self.supported:
            return None
        return f"{self.root}/{doc.path}"


@pytest.fixture
def make_ctx():
    """Build a BakeContext over an in-memory set of files."""

    def _make(files: dict[str, str], fail: set[str] | None = None, **path_opts) -> BakeContext:
        storage = MemoryStorage(files)
        return BakeContext(
            reader=MemoryReader(storage, fail),
            index=MarkdownIndex(storage, MarkdownParser()),
            resolver=VaultResolver(storage),
            paths=StaticPaths(**path_opts),
        )

    return _make


@pytest.fixture
def bake_note(make_ctx):
    """Bake one note of an in-memory vault and return the text."""

    def _bake(files: dict[str, str], path: str, subpath: str | None = None, **settings) -> str:
        ctx = make_ctx(files)
        return asyncio.run(bake(ctx, Document(path), subpath, frozenset(), BakeSettings(**settings)))

    return _bake
