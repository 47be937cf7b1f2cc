"""Recursive baking: inline the content of linked notes into a note."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from urllib.parse import quote

from ..config import BakeSettings
from .hidden import clip_regions, filter_hidden, is_hidden, remap_range, remove_regions
from .model import Document, Reference
from .ports import ContentReader, LinkResolver, PathService, StructuralIndex
from .shape import LIST_ITEM_START, apply_indent, classify, sanitize_baked_content, strip_first_bullet
from .slicer import extract_subpath, parse_linktext, resolve_subpath

logger = logging.getLogger(__name__)

# Characters JavaScript's encodeURI leaves alone
_URI_SAFE = ";,/?:@&=+$-_.!~*'()#"


@dataclass
class BakeContext:
    """The collaborators a bake needs from its environment."""
    reader: ContentReader
    index: StructuralIndex
    resolver: LinkResolver
    paths: PathService


def file_url(full_path: str, is_windows: bool) -> str:
    """Build a ``file://`` URL for a platform path."""
    if is_windows:
        return "file:///" + quote(full_path.replace("\\", "/"), safe=_URI_SAFE)
    return "file://" + quote(full_path, safe=_URI_SAFE)


def _collect_references(body, settings: BakeSettings) -> list[Reference]:
    links = body.links if settings.bake_links else []
    embeds = body.embeds if settings.bake_embeds else []
    return sorted([*links, *embeds], key=lambda ref: ref.range.start)


async def bake(
    ctx: BakeContext,
    document: Document,
    subpath: str | None = None,
    ancestors: frozenset[Document] = frozenset(),
    settings: BakeSettings | None = None,
) -> str:
    """
    Bake ``document`` (or the part of it named by ``subpath``).

    Links and embeds are replaced, left to right, by the baked content
    of their targets, by their display text, or by a file URL for
    non-Markdown targets. ``ancestors`` holds the notes currently being
    expanded above this one; a reference back to any of them is
    flattened to text instead of recursing.

    Raises whatever ``ctx.reader`` raises when ``document`` is unreadable.
    Every other failure leaves the reference markup as it was.
    """
    if settings is None:
        settings = BakeSettings()

    raw = await ctx.reader.read(document)
    text, regions = filter_hidden(raw, settings.bake_hidden)

    body = ctx.index.get(document)
    if body is None:
        logger.debug("No structure for %s, returning it as is", document.path)
        return text

    refs = _collect_references(body, settings)

    span = resolve_subpath(body, subpath) if subpath else None
    if span is not None:
        regions = clip_regions(regions, span)
        text = remove_regions(extract_subpath(raw, span), regions)
        refs = [
            Reference(ref.kind, ref.range.shift(-span.start), ref.link, ref.display_text)
            for ref in refs
            if span.contains(ref.range)
        ]
    elif subpath:
        logger.debug("Subpath %s not found in %s", subpath, document.path)

    if not refs:
        return text

    new_ancestors = ancestors | {document}

    # Length delta of the replacements made so far
    pos_offset = 0
    for ref in refs:
        if is_hidden(ref.range, regions):
            continue
        adjusted = remap_range(ref.range, regions)

        start = adjusted.start + pos_offset
        end = adjusted.end + pos_offset
        before = text[:start]
        after = text[end:]

        path, ref_subpath = parse_linktext(ref.link)
        target = ctx.resolver.resolve(path, document.path)
        if target is None:
            logger.debug("Unresolved link %r in %s", ref.link, document.path)
            continue

        shape = classify(before, after, settings.bake_in_list)

        if not target.is_markdown:
            if not settings.convert_file_links:
                continue
            full_path = ctx.paths.full_path(target)
            if full_path is None:
                logger.debug("No full path for %s", target.path)
                continue
            replacement = f"![]({file_url(full_path, ctx.paths.is_windows)})"
        elif target in new_ancestors or shape.is_inline:
            replacement = ref.display_text or path or ref.link
        else:
            baked = sanitize_baked_content(
                await bake(ctx, target, ref_subpath, new_ancestors, settings)
            )
            if shape.kind == LIST_ITEM_START:
                baked = apply_indent(strip_first_bullet(baked), shape.indent)
            replacement = baked

        text = before + replacement + after
        pos_offset += len(replacement) - (end - start)

    return text


def bake_sync(
    ctx: BakeContext,
    document: Document,
    subpath: str | None = None,
    settings: BakeSettings | None = None,
) -> str:
    """Run a top-level bake from synchronous code."""
    return asyncio.run(bake(ctx, document, subpath, frozenset(), settings))
