from typing import Iterable, Protocol
from .model import Document, NoteBody, NoteId


class StorageStrategy(Protocol):
    """
    Vault store: one root directory, documents addressed by relative path.
    """

    def read_raw(self, path: str) -> str | None:
        pass

    def write_raw(self, path: str, contents: str) -> None:
        pass

    def exists(self, path: str) -> bool:
        pass

    def list_all_paths(self) -> Iterable[str]:
        pass


class ParserStrategy(Protocol):
    """
    Parse Markdown into blocks/links/embeds with offsets into the raw text.
    """

    def parse(self, text: str, id: NoteId) -> NoteBody:
        pass


class ContentReader(Protocol):
    """
    Fetch the current text of a document. Failing to read is fatal for
    that document and must raise.
    """

    async def read(self, doc: Document) -> str:
        pass


class StructuralIndex(Protocol):
    """
    Cached structure of a document; ``None`` means it cannot be parsed.
    """

    def get(self, doc: Document) -> NoteBody | None:
        pass


class LinkResolver(Protocol):
    """
    Map the path part of a link to a concrete document, relative to the
    document the link lives in.
    """

    def resolve(self, path: str, source: str) -> Document | None:
        pass


class PathService(Protocol):
    """
    Platform full-path lookup, used only for non-Markdown targets.
    """

    is_windows: bool

    def full_path(self, doc: Document) -> str | None:
        pass
