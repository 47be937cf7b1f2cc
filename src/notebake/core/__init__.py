"""Baking core: hidden regions, text shapes, subpaths and the baker."""

from .baker import BakeContext, bake, bake_sync
from .model import Document, Reference

__all__ = [
    "BakeContext",
    "Document",
    "Reference",
    "bake",
    "bake_sync",
]
