"""Footnote resolution for commentary text.

References are written ``$[N]`` anywhere in commentary; definitions are
``$[N]: body`` lines in the footnote section, continuing until the next
definition. Resolution numbers footnotes by first reference, not by the
author's numbers, and rewrites each reference to a ``{{fnref:i}}``
placeholder that survives markdown rendering.
"""

import re

from ..utils.logger import get_logger
from .model import (
    DEFAULT_FOOTNOTE_TYPE,
    FOOTNOTE_TYPES,
    FootnoteDefinition,
    FootnoteReference,
    Resolution,
    ResolvedFootnote,
)
from .sections import split_lines

logger = get_logger(__name__)

REF_RE = re.compile(r"\$\[(\d+)\]")
DEF_RE = re.compile(r"^\$\[(\d+)\]:[ \t]?(.*)$")
PLACEHOLDER_RE = re.compile(r"\{\{fnref:(\d+)\}\}")
TYPE_RE = re.compile(r"^(\w+):(.*)$", re.DOTALL)


def placeholder(display_index: int) -> str:
    return f"{{{{fnref:{display_index}}}}}"


def missing_definition(number: int) -> str:
    return f"missing footnote definition for {number}"


def parse_definitions(footnote_defs: str) -> list[FootnoteDefinition]:
    """Parse every definition in source order, duplicates included."""
    found: list[FootnoteDefinition] = []
    current: tuple[int, int, list[str]] | None = None

    def close() -> None:
        if current is not None:
            number, line, body = current
            found.append(FootnoteDefinition(number, "\n".join(body).strip(), line))

    for i, line in enumerate(split_lines(footnote_defs)):
        m = DEF_RE.match(line)
        if m:
            close()
            current = (int(m.group(1)), i, [m.group(2)])
        elif current is not None:
            current[2].append(line)
    close()
    return found


def definition_map(definitions: list[FootnoteDefinition]) -> dict[int, str]:
    """Map number -> body; the first definition of a number wins."""
    out: dict[int, str] = {}
    for d in definitions:
        if d.number in out:
            logger.debug("Duplicate definition for $[%d] ignored", d.number)
            continue
        out[d.number] = d.body_text
    return out


def find_references(text: str) -> list[FootnoteReference]:
    return [
        FootnoteReference(int(m.group(1)), m.start(), m.end() - m.start())
        for m in REF_RE.finditer(text)
    ]


def classify(body: str) -> tuple[str, str]:
    """
    Split a footnote body into (type, content).

    A known type prefix ("warning: ...") is stripped and the rest trimmed;
    anything else is a plain note with the body unchanged.

    Examples:
        >>> classify("warning: check this")
        ('warning', 'check this')
        >>> classify("see: elsewhere")
        ('note', 'see: elsewhere')
    """
    m = TYPE_RE.match(body)
    if m and m.group(1) in FOOTNOTE_TYPES:
        return m.group(1), m.group(2).strip()
    return DEFAULT_FOOTNOTE_TYPE, body


def resolve(commentary: str, footnote_defs: str) -> Resolution:
    """
    Resolve references in commentary against the footnote definitions.

    Returns the placeholder-substituted commentary and one ResolvedFootnote
    per distinct referenced number, ordered by first occurrence. A number
    with no definition still gets a slot with synthetic content.
    Definitions that nothing references are dropped from the output.
    """
    definitions = parse_definitions(footnote_defs)
    bodies = definition_map(definitions)
    references = find_references(commentary)

    assigned: dict[int, int] = {}
    footnotes: list[ResolvedFootnote] = []
    for ref in references:
        if ref.number in assigned:
            continue
        index = len(assigned) + 1
        assigned[ref.number] = index
        body = bodies.get(ref.number)
        if body is None:
            logger.debug("No definition for $[%d]", ref.number)
            footnotes.append(
                ResolvedFootnote(
                    display_index=index,
                    number=ref.number,
                    type=DEFAULT_FOOTNOTE_TYPE,
                    content=missing_definition(ref.number),
                    missing=True,
                )
            )
            continue
        type_, content = classify(body)
        footnotes.append(ResolvedFootnote(index, ref.number, type_, content))

    # Single left-to-right rewrite; delta tracks how far earlier
    # replacements have shifted the original offsets.
    text = commentary
    delta = 0
    for ref in references:
        token = placeholder(assigned[ref.number])
        start = ref.source_offset + delta
        text = text[:start] + token + text[start + ref.length :]
        delta += len(token) - ref.length

    return Resolution(
        placeholder_text=text,
        footnotes=footnotes,
        references=references,
        definitions=definitions,
    )
