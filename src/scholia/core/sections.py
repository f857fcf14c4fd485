"""Section scanning shared by block parsing and editor bounds.

A commentary block is split into named sections by delimiter lines::

    ---metadata---
    ---text---
    ---commentary---
    ---footnote---

The same scanner feeds both `sectionize` (render path) and
`scholia.core.bounds.locate` (editing path) so the two never disagree
about where a section starts or ends.
"""

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from .model import Block

SECTION_DELIMITERS: dict[str, str] = {
    "metadata": "---metadata---",
    "text": "---text---",
    "commentary": "---commentary---",
    "footnote": "---footnote---",
}

META_RE = re.compile(r"^(\w+):\s*(.+)$")


@dataclass(frozen=True)
class SectionRun:
    """One delimiter occurrence and the lines it governs."""
    name: str
    delimiter: int  # line index of the delimiter
    end: int  # exclusive


def split_lines(text: str) -> list[str]:
    """
    Split text into lines at newline characters only.

    Parsing and editing share this line model, so other Unicode line
    boundaries (form feed, U+2028) stay inside their line.
    """
    return text.split("\n")


def delimiter_name(line: str) -> str | None:
    """Return the section a delimiter line opens, or None for ordinary lines."""
    for name, delimiter in SECTION_DELIMITERS.items():
        if line.startswith(delimiter):
            return name
    return None


def scan_sections(
    lines: Sequence[str], start: int = 0, end: int | None = None
) -> Iterator[SectionRun]:
    """
    Yield section runs over ``lines[start:end]`` in source order.

    Each run closes at the next delimiter or at ``end``. Lines before the
    first delimiter belong to no run.
    """
    if end is None:
        end = len(lines)
    current: str | None = None
    opened = start
    for i in range(start, end):
        name = delimiter_name(lines[i])
        if name is None:
            continue
        if current is not None:
            yield SectionRun(current, opened, i)
        current = name
        opened = i
    if current is not None:
        yield SectionRun(current, opened, end)


def parse_metadata(lines: Sequence[str]) -> dict[str, str | list[str]]:
    meta: dict[str, str | list[str]] = {}
    for line in lines:
        m = META_RE.match(line)
        if not m:
            continue
        key, value = m.group(1), m.group(2)
        if key == "tags":
            meta[key] = [t.strip() for t in value.split(",") if t.strip()]
        else:
            meta[key] = value.strip()
    return meta


def sectionize(raw: str) -> Block:
    """
    Split raw block text into its sections.

    Delimiter lines are dropped; every other line is appended, with a
    trailing newline, to the active section. A repeated delimiter keeps
    appending to the same section. Missing sections stay empty.
    """
    lines = split_lines(raw)
    if lines and lines[-1] == "":
        lines.pop()
    bodies: dict[str, list[str]] = {name: [] for name in SECTION_DELIMITERS}
    for run in scan_sections(lines):
        bodies[run.name].extend(lines[run.delimiter + 1 : run.end])

    return Block(
        metadata=parse_metadata(bodies["metadata"]),
        original_text="".join(f"{ln}\n" for ln in bodies["text"]),
        commentary_raw="".join(f"{ln}\n" for ln in bodies["commentary"]),
        footnote_definitions_raw="".join(f"{ln}\n" for ln in bodies["footnote"]),
    )


def join_sections(block: Block) -> str:
    """Rebuild raw block text from a parsed block (metadata order preserved)."""
    out: list[str] = []
    if block.metadata:
        out.append(SECTION_DELIMITERS["metadata"] + "\n")
        for key, value in block.metadata.items():
            if isinstance(value, list):
                value = ", ".join(value)
            out.append(f"{key}: {value}\n")
    for name, body in (
        ("text", block.original_text),
        ("commentary", block.commentary_raw),
        ("footnote", block.footnote_definitions_raw),
    ):
        if body:
            out.append(SECTION_DELIMITERS[name] + "\n")
            out.append(body)
    return "".join(out)
