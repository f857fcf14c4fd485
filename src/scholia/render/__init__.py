"""Rendering of commentary blocks."""

from .block import BlockRenderer, toggle_all
from .document import render_document
from .splice import flatten_footnote, splice_commentary

__all__ = [
    "BlockRenderer",
    "toggle_all",
    "render_document",
    "flatten_footnote",
    "splice_commentary",
]
