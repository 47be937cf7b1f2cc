from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import PurePosixPath

NoteId = str


@dataclass(frozen=True)
class Document:
    path: str  # vault-relative POSIX path, e.g. "notes/Note.md"

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

    @property
    def stem(self) -> str:
        return PurePosixPath(self.path).stem

    @property
    def extension(self) -> str:
        return PurePosixPath(self.path).suffix[1:].lower()

    @property
    def parent(self) -> str:
        parent = str(PurePosixPath(self.path).parent)
        return "" if parent == "." else parent

    @property
    def is_markdown(self) -> bool:
        return self.extension == "md"


@dataclass(frozen=True)
class BlockLabel:
    name: str  # e.g. "riemann" for "^riemann"


@dataclass(frozen=True)
class Range:
    start: int  # character offsets in the raw text
    end: int

    def contains(self, other: Range) -> bool:
        return self.start <= other.start and other.end <= self.end

    def shift(self, delta: int) -> Range:
        return Range(self.start + delta, self.end + delta)


@dataclass(frozen=True)
class HiddenRegion:
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start


@dataclass
class Block:
    kind: str  # "heading" | "fence" | "paragraph" | "list_item"
    range: Range
    label: BlockLabel | None = None
    heading_text: str | None = None
    heading_level: int | None = None
    heading_slug: str | None = None
    fence_info: str | None = None
    indent: int = 0  # leading columns of a list item


@dataclass(frozen=True)
class Reference:
    kind: str  # "link" or "embed"
    range: Range
    link: str  # path plus optional "#subpath", without the alias
    display_text: str | None = None


@dataclass
class NoteBody:
    raw: str
    blocks: list[Block] = field(default_factory=list)
    links: list[Reference] = field(default_factory=list)
    embeds: list[Reference] = field(default_factory=list)
