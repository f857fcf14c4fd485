"""Per-document render session.

Block ids are drawn from a counter owned by the session, so independent
documents in one process never collide. Parsed blocks stay registered
for post-render actions (export, statistics, copy reference) until the
session is closed.
"""

import itertools
from collections.abc import Iterator
from dataclasses import dataclass

from .footnotes import resolve
from .model import Block, BlockId, Resolution
from .sections import sectionize

BLOCK_ID_PREFIX = "commentary-block"


@dataclass
class RegisteredBlock:
    id: BlockId
    block: Block
    resolution: Resolution


class RenderSession:
    def __init__(self, prefix: str = BLOCK_ID_PREFIX):
        self.prefix = prefix
        self._counter = itertools.count()
        self._registry: dict[BlockId, RegisteredBlock] = {}

    def next_block_id(self) -> BlockId:
        return f"{self.prefix}-{next(self._counter)}"

    def parse(self, raw: str) -> RegisteredBlock:
        """Sectionize and resolve a raw block, registering it under a fresh id."""
        block = sectionize(raw)
        resolution = resolve(block.commentary_raw, block.footnote_definitions_raw)
        entry = RegisteredBlock(self.next_block_id(), block, resolution)
        self._registry[entry.id] = entry
        return entry

    def get(self, block_id: BlockId) -> RegisteredBlock | None:
        return self._registry.get(block_id)

    def reference(self, block_id: BlockId) -> str | None:
        """Wiki-style link to a registered block, e.g. ``[[#commentary-block-0]]``."""
        if block_id not in self._registry:
            return None
        return f"[[#{block_id}]]"

    def __iter__(self) -> Iterator[RegisteredBlock]:
        return iter(list(self._registry.values()))

    def __len__(self) -> int:
        return len(self._registry)

    def close(self) -> None:
        self._registry.clear()

    def __enter__(self) -> "RenderSession":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
