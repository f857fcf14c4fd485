"""Markdown export of a registered commentary block."""

from pathlib import Path
from typing import Any

from ..adapters.yaml_codec import YamlFrontmatter
from ..core.footnotes import placeholder
from ..core.session import RegisteredBlock


def export_filename(entry: RegisteredBlock) -> str:
    return f"{entry.id}.md"


def export_block(entry: RegisteredBlock, fm: YamlFrontmatter | None = None) -> str:
    """
    Render a block as a standalone Markdown document.

    Frontmatter carries the block id and metadata (the id wins over a
    metadata `block` key); footnotes are listed in display order with
    references rewritten to their display numbers.
    """
    fm = fm or YamlFrontmatter()
    block, resolution = entry.block, entry.resolution

    meta: dict[str, Any] = {"block": entry.id}
    meta.update(block.metadata)
    meta["block"] = entry.id

    commentary = resolution.placeholder_text
    for fn in resolution.footnotes:
        commentary = commentary.replace(placeholder(fn.display_index), f"[^{fn.display_index}]")

    parts = [
        fm.encode(meta),
        "# Commentary Block Export\n\n",
        f"## Original Text\n{block.original_text.rstrip()}\n\n",
        f"## Commentary\n{commentary.rstrip()}\n",
    ]
    if resolution.footnotes:
        parts.append("\n## Footnotes\n")
        for fn in resolution.footnotes:
            prefix = "" if fn.type == "note" else f"**{fn.type}:** "
            body = fn.content.replace("\n", "\n    ")
            parts.append(f"[^{fn.display_index}]: {prefix}{body}\n")
    return "".join(parts)


def write_export(entry: RegisteredBlock, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / export_filename(entry)
    path.write_text(export_block(entry), encoding="utf-8")
    return path
