"""Parsing, footnote resolution and block bounds."""

from .bounds import locate, next_number
from .footnotes import classify, resolve
from .sections import sectionize
from .session import RegisteredBlock, RenderSession

__all__ = [
    "locate",
    "next_number",
    "classify",
    "resolve",
    "sectionize",
    "RegisteredBlock",
    "RenderSession",
]
