import posixpath
from pathlib import PurePosixPath

from ..core.model import Document, NoteBody
from ..core.ports import LinkResolver, ParserStrategy, StorageStrategy, StructuralIndex


class VaultResolver(LinkResolver):
    """
    Resolve link paths the way a note vault does: exact vault path first,
    then relative to the linking note, then by file name anywhere in the
    vault (shortest path wins).
    """

    def __init__(self, storage: StorageStrategy):
        self.storage = storage
        self._paths: list[str] | None = None

    def _all_paths(self) -> list[str]:
        if self._paths is None:
            self._paths = sorted(self.storage.list_all_paths(), key=lambda p: (len(p), p))
        return self._paths

    def resolve(self, path: str, source: str) -> Document | None:
        if not path:
            return Document(source) if self.storage.exists(source) else None

        path = path.lstrip("/")
        candidates = [path]
        if not PurePosixPath(path).suffix:
            candidates.append(path + ".md")

        for candidate in candidates:
            if self.storage.exists(candidate):
                return Document(candidate)

        parent = posixpath.dirname(source)
        if parent:
            for candidate in candidates:
                relative = posixpath.normpath(posixpath.join(parent, candidate))
                if not relative.startswith("..") and self.storage.exists(relative):
                    return Document(relative)

        wanted = [c.lower() for c in candidates]
        for known in self._all_paths():
            lowered = known.lower()
            if any(lowered == w or lowered.endswith("/" + w) for w in wanted):
                return Document(known)
        return None


class MarkdownIndex(StructuralIndex):
    """
    Parsed structure per Markdown document, re-parsed when its text changes.
    """

    def __init__(self, storage: StorageStrategy, parser: ParserStrategy):
        self.storage = storage
        self.parser = parser
        self._cache: dict[Document, tuple[str, NoteBody]] = {}

    def get(self, doc: Document) -> NoteBody | None:
        if not doc.is_markdown:
            return None
        raw = self.storage.read_raw(doc.path)
        if raw is None:
            return None
        cached = self._cache.get(doc)
        if cached and cached[0] == raw:
            return cached[1]
        body = self.parser.parse(raw, doc.path)
        self._cache[doc] = (raw, body)
        return body

    def clear(self) -> None:
        self._cache.clear()
