"""Classify where a reference sits on its line and reshape baked content."""

import re
from dataclasses import dataclass

from .utils import strip_frontmatter

BARE_LINE = "bare-line"
LIST_ITEM_START = "list-item-start"
INLINE = "inline"

LINE_START_RE = re.compile(r"(?:\A|\n) *\Z")
LIST_LINE_START_RE = re.compile(r"(?:\A|\n)([ \t]*)((?:[-*+]|[0-9]+[.)]) +)\Z")
LINE_END_RE = re.compile(r"\A *(?:\r?\n|\Z)")
BULLET_RE = re.compile(r"\A[ \t]*(?:[-*+]|[0-9]+[.)]) +")


@dataclass(frozen=True)
class Shape:
    kind: str
    indent: str = ""  # continuation indent for list items

    @property
    def is_inline(self) -> bool:
        return self.kind == INLINE


def classify(before: str, after: str, bake_in_list: bool) -> Shape:
    """
    Decide how a reference between ``before`` and ``after`` is laid out.

    - bare-line: first thing on its line, only spaces after it
    - list-item-start: right after a bullet or number marker (needs
      ``bake_in_list``), only spaces after it
    - inline: anything else
    """
    list_match = LIST_LINE_START_RE.search(before) if bake_in_list else None
    line_start = list_match is not None or LINE_START_RE.search(before) is not None
    if not line_start or not LINE_END_RE.match(after):
        return Shape(INLINE)
    if list_match:
        leading, marker = list_match.group(1), list_match.group(2)
        return Shape(LIST_ITEM_START, leading + " " * len(marker))
    return Shape(BARE_LINE)


def strip_first_bullet(text: str) -> str:
    """Remove the list marker at the very start of ``text``."""
    return BULLET_RE.sub("", text, count=1)


def apply_indent(text: str, indent: str) -> str:
    """
    Indent every line after the first by ``indent``.

    The first line continues the bullet it replaces, so it stays as is.
    Blank lines are left empty.
    """
    if not indent:
        return text
    first, *rest = text.split("\n")
    return "\n".join([first] + [indent + line if line.strip() else line for line in rest])


def sanitize_baked_content(text: str) -> str:
    """Prepare baked content for splicing into its parent."""
    return strip_frontmatter(text).lstrip("\r\n").rstrip()
