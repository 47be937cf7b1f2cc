"""Resolve link subpaths (``#Heading``, ``#A#B``, ``#^label``) to text ranges."""

from .model import Block, NoteBody, Range
from .utils import slugify


def parse_linktext(link: str) -> tuple[str, str | None]:
    """
    Split raw link text into its path and subpath.

    The subpath keeps its leading ``#``:
        >>> parse_linktext("Note#Heading")
        ('Note', '#Heading')
        >>> parse_linktext("Note")
        ('Note', None)
    """
    path, sep, rest = link.partition("#")
    return path.strip(), (sep + rest.strip() if sep else None)


def find_label(body: NoteBody, label: str) -> Block | None:
    """Find a block with the given label."""
    for block in body.blocks:
        if block.label and block.label.name == label:
            return block
    return None


def _heading_matches(block: Block, text: str) -> bool:
    text = text.strip()
    if block.heading_slug and block.heading_slug == slugify(text):
        return True
    return (block.heading_text or "").strip().lower() == text.lower()


def find_heading(body: NoteBody, text: str, after: int = -1, before: int | None = None) -> Block | None:
    """
    Find the first heading matching ``text`` (by slug or by heading text)
    that starts strictly after ``after`` and before ``before``.
    """
    for block in body.blocks:
        if block.kind != "heading" or block.range.start <= after:
            continue
        if before is not None and block.range.start >= before:
            break
        if _heading_matches(block, text):
            return block
    return None


def slice_heading(body: NoteBody, heading_block: Block) -> Range:
    """
    Get the range for a heading slice.

    Returns from heading start to next heading of same/higher level (or EOF).
    """
    if heading_block.kind != "heading" or heading_block.heading_level is None:
        return heading_block.range

    start = heading_block.range.start
    level = heading_block.heading_level

    for block in body.blocks:
        if block.range.start <= start:
            continue
        if block.kind == "heading" and block.heading_level is not None:
            if block.heading_level <= level:
                return Range(start, block.range.start)

    return Range(start, len(body.raw))


def slice_list_item(body: NoteBody, item: Block) -> Range:
    """
    Get the range of a list item together with its nested items.
    """
    end = item.range.end
    following = [b for b in body.blocks if b.range.start >= item.range.end]
    for block in sorted(following, key=lambda b: b.range.start):
        if block.kind != "list_item" or block.indent <= item.indent:
            break
        if body.raw[end:block.range.start].strip():
            break
        end = block.range.end
    return Range(item.range.start, end)


def slice_block(body: NoteBody, block: Block) -> Range:
    """
    Get the range for a block slice.

    - heading: heading slice rules
    - list item: the item and its children
    - anything else: the exact block range
    """
    if block.kind == "heading":
        return slice_heading(body, block)
    if block.kind == "list_item":
        return slice_list_item(body, block)
    return block.range


def resolve_subpath(body: NoteBody, subpath: str) -> Range | None:
    """
    Resolve a subpath against a parsed body.

    - ``#^label``: the labelled block
    - ``#Heading`` or ``#Outer#Inner``: each heading is searched inside
      the section of the previous one

    Returns None when the anchor does not exist.
    """
    parts = [p for p in subpath.split("#") if p.strip()]
    if not parts:
        return None

    if parts[0].startswith("^"):
        block = find_label(body, parts[0][1:].strip())
        return slice_block(body, block) if block else None

    section = Range(-1, len(body.raw))
    for part in parts:
        heading = find_heading(body, part, after=section.start, before=section.end)
        if heading is None:
            return None
        section = slice_heading(body, heading)
    return section


def extract_subpath(text: str, span: Range) -> str:
    """Cut the resolved subpath out of ``text``."""
    return text[span.start : span.end]
