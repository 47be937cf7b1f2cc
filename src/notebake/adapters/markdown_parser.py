import re
from urllib.parse import unquote

from ..core.model import Block, BlockLabel, NoteBody, Range, Reference
from ..core.ports import ParserStrategy
from ..core.utils import FRONTMATTER_RE, slugify

WIKI_RE = re.compile(r"(!?)\[\[([^\[\]\n]+?)\]\]")
MD_LINK_RE = re.compile(r"(!?)\[([^\[\]\n]*)\]\(([^()\s\[\]]+)(?:\s+\"[^\"\n]*\")?\)")
CODE_SPAN_RE = re.compile(r"`[^`\n]*`")
HEADING_RE = re.compile(r"^(#{1,6})\s+(.+)$")
FENCE_RE = re.compile(r"^\s*(```|~~~)(.*)$")
LIST_RE = re.compile(r"^([ \t]*)(?:[-*+]|[0-9]+[.)])\s+")
LABEL_RE = re.compile(r"\s\^([\w-]+)\s*$")
SCHEME_RE = re.compile(r"^[a-zA-Z][\w+.-]*:")


def _label(line: str) -> BlockLabel | None:
    m = LABEL_RE.search(line)
    return BlockLabel(name=m.group(1)) if m else None


def _indent_width(leading: str) -> int:
    return len(leading.expandtabs(4))


class MarkdownParser(ParserStrategy):
    """
    Line-based Markdown structure: headings, fences, list items and
    paragraphs, plus wiki/Markdown links and embeds with offsets into
    the raw text (frontmatter included).
    """

    def parse(self, text: str, id: str) -> NoteBody:
        body = NoteBody(raw=text)

        fm = FRONTMATTER_RE.match(text)
        body_start = fm.end() if fm else 0

        skipped: list[Range] = [Range(0, body_start)] if body_start else []
        self._parse_blocks(text, body_start, body, skipped)
        self._parse_references(text, body, skipped)
        return body

    def _parse_blocks(self, text: str, offset: int, body: NoteBody, skipped: list[Range]) -> None:
        lines = text[offset:].splitlines(keepends=True)
        fence: tuple[int, str, str] | None = None  # start, marker, info
        para_start: int | None = None
        para_end = 0
        para_last = ""

        def close_paragraph() -> None:
            nonlocal para_start
            if para_start is not None:
                body.blocks.append(
                    Block(
                        kind="paragraph",
                        range=Range(para_start, para_end),
                        label=_label(para_last),
                    )
                )
                para_start = None

        for ln in lines:
            line = ln.rstrip("\r\n")
            line_end = offset + len(ln)
            fence_match = FENCE_RE.match(line)

            if fence is not None:
                if fence_match and fence_match.group(1) == fence[1] and not fence_match.group(2).strip():
                    start, _marker, info = fence
                    label = None
                    for part in info.split():
                        if part.startswith("^") and len(part) > 1:
                            label = BlockLabel(name=part[1:])
                            break
                    body.blocks.append(
                        Block(kind="fence", range=Range(start, line_end), fence_info=info, label=label)
                    )
                    skipped.append(Range(start, line_end))
                    fence = None
            elif fence_match:
                close_paragraph()
                fence = (offset, fence_match.group(1), fence_match.group(2).strip())
            elif not line.strip():
                close_paragraph()
            elif heading_match := HEADING_RE.match(line):
                close_paragraph()
                heading_text = heading_match.group(2).strip()
                label = _label(heading_text)
                if label:
                    heading_text = LABEL_RE.sub("", heading_text).strip()
                body.blocks.append(
                    Block(
                        kind="heading",
                        range=Range(offset, line_end),
                        label=label,
                        heading_text=heading_text,
                        heading_level=len(heading_match.group(1)),
                        heading_slug=slugify(heading_text),
                    )
                )
            elif LIST_RE.match(line):
                close_paragraph()
                body.blocks.append(
                    Block(
                        kind="list_item",
                        range=Range(offset, line_end),
                        label=_label(line),
                        indent=_indent_width(LIST_RE.match(line).group(1)),
                    )
                )
            else:
                if para_start is None:
                    para_start = offset
                para_end = line_end
                para_last = line

            offset = line_end

        close_paragraph()
        if fence is not None:
            # Unclosed fence runs to the end of the text
            skipped.append(Range(fence[0], len(text)))

    def _parse_references(self, text: str, body: NoteBody, skipped: list[Range]) -> None:
        for m in CODE_SPAN_RE.finditer(text):
            skipped.append(Range(m.start(), m.end()))

        def is_skipped(start: int) -> bool:
            return any(r.start <= start < r.end for r in skipped)

        for m in WIKI_RE.finditer(text):
            if is_skipped(m.start()):
                continue
            target, _, alias = m.group(2).partition("|")
            ref = Reference(
                kind="embed" if m.group(1) else "link",
                range=Range(m.start(), m.end()),
                link=target.strip(),
                display_text=alias.strip() or None,
            )
            (body.embeds if m.group(1) else body.links).append(ref)

        for m in MD_LINK_RE.finditer(text):
            if is_skipped(m.start()):
                continue
            dest = m.group(3)
            if SCHEME_RE.match(dest) or dest.startswith("#"):
                continue
            ref = Reference(
                kind="embed" if m.group(1) else "link",
                range=Range(m.start(), m.end()),
                link=unquote(dest),
                display_text=m.group(2).strip() or None,
            )
            (body.embeds if m.group(1) else body.links).append(ref)

        body.links.sort(key=lambda r: r.range.start)
        body.embeds.sort(key=lambda r: r.range.start)
