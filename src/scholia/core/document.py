"""Enumerate commentary blocks in a whole document."""

from dataclasses import dataclass

from .bounds import CLOSE_FENCE, OPEN_FENCE, bounds_from_start
from .model import BlockBounds
from .sections import split_lines


@dataclass(frozen=True)
class BlockSource:
    bounds: BlockBounds
    source: str  # text between the fences


def find_blocks(
    text: str, open_fence: str = OPEN_FENCE, close_fence: str = CLOSE_FENCE
) -> list[BlockSource]:
    lines = split_lines(text)
    found: list[BlockSource] = []
    i = 0
    while i < len(lines):
        if lines[i].startswith(open_fence):
            bounds = bounds_from_start(lines, i, close_fence)
            source = "\n".join(lines[i + 1 : bounds.end_line])
            found.append(BlockSource(bounds, source))
            i = bounds.end_line
            # An unterminated block stops at the next open fence, which
            # starts the following block rather than closing this one.
            if i < len(lines) and not lines[i].startswith(open_fence):
                i += 1
        elif lines[i].startswith(close_fence):
            # Skip over unrelated fenced regions.
            j = i + 1
            while j < len(lines) and not lines[j].startswith(close_fence):
                j += 1
            i = j + 1
        else:
            i += 1
    return found
