"""Utility functions for notebake."""

import re
import unicodedata

FRONTMATTER_RE = re.compile(r"^\s*---\s*\n(.*?)\n---\s*(?:\n|$)", re.DOTALL)


def slugify(text: str) -> str:
    """
    Convert heading text to a URL-safe slug.

    - Lowercase
    - Unicode normalize (NFKD), drop combining marks
    - Remove punctuation except spaces and hyphens
    - Convert whitespace to single `-`

    Examples:
        >>> slugify("Parallel transport")
        'parallel-transport'
        >>> slugify("Riemann–Christoffel symbols")
        'riemann-christoffel-symbols'
    """
    text = text.lower()

    # En dash, em dash and minus sign count as hyphens
    text = text.replace('–', '-').replace('—', '-').replace('−', '-')

    text = unicodedata.normalize('NFKD', text)
    text = ''.join(c for c in text if not unicodedata.combining(c))

    text = re.sub(r'[^\w\s-]', '', text)
    text = re.sub(r'\s+', '-', text)
    text = re.sub(r'-+', '-', text)

    return text.strip('-')


def strip_frontmatter(text: str) -> str:
    """Drop a leading ``---`` delimited frontmatter block, if any."""
    m = FRONTMATTER_RE.match(text)
    return text[m.end():] if m else text
