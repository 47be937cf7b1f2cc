"""Hidden regions: author-marked spans that are dropped from baked output."""

from .model import HiddenRegion, Range

HIDDEN_START = "%%hidden%%"
HIDDEN_END = "%%/hidden%%"


def find_hidden_regions(text: str) -> list[HiddenRegion]:
    """
    Find all ``%%hidden%% ... %%/hidden%%`` spans in ``text``.

    Each region starts at the first start marker after the previous
    region's end and closes at the next end marker. A start marker with
    no end marker after it stays in the text.

    Returns regions in original-text coordinates, sorted ascending.
    """
    regions: list[HiddenRegion] = []
    pos = 0
    while True:
        start = text.find(HIDDEN_START, pos)
        if start == -1:
            break
        end = text.find(HIDDEN_END, start + len(HIDDEN_START))
        if end == -1:
            # Nothing after this can be closed either
            break
        end += len(HIDDEN_END)
        regions.append(HiddenRegion(start, end))
        pos = end
    return regions


def remove_regions(text: str, regions: list[HiddenRegion]) -> str:
    """Cut ``regions`` out of ``text``, last region first."""
    for region in reversed(regions):
        text = text[: region.start] + text[region.end :]
    return text


def filter_hidden(text: str, bake_hidden: bool) -> tuple[str, list[HiddenRegion]]:
    """
    Strip hidden regions unless ``bake_hidden`` is set.

    Returns the filtered text and the regions removed, in original
    coordinates, for remapping reference offsets later.
    """
    if bake_hidden:
        return text, []
    regions = find_hidden_regions(text)
    return remove_regions(text, regions), regions


def clip_regions(regions: list[HiddenRegion], bounds: Range) -> list[HiddenRegion]:
    """
    Restrict ``regions`` to ``bounds`` and rebase them on ``bounds.start``.
    """
    clipped = []
    for region in regions:
        start = max(region.start, bounds.start)
        end = min(region.end, bounds.end)
        if start < end:
            clipped.append(HiddenRegion(start - bounds.start, end - bounds.start))
    return clipped


def is_hidden(span: Range, regions: list[HiddenRegion]) -> bool:
    """True if ``span`` (original offsets) lies entirely inside a region."""
    return any(
        span.start >= region.start and span.end <= region.end for region in regions
    )


def remap_range(span: Range, regions: list[HiddenRegion]) -> Range:
    """
    Translate an original-text span into filtered-text coordinates.

    Only regions starting before the span shift it; ``regions`` must be
    sorted by start.
    """
    offset = 0
    for region in regions:
        if region.start < span.start:
            offset += region.length
        else:
            break
    return span.shift(-offset)
