"""Block bounds for editor operations.

All footnote numbering, navigation and insertion is scoped to the
commentary block around the cursor. Bounds are always derived from the
live document lines and never cached.
"""

from collections.abc import Sequence

from ..utils.logger import get_logger
from .footnotes import DEF_RE, REF_RE
from .model import BlockBounds, Position, SectionSpan
from .sections import SECTION_DELIMITERS, SectionRun, scan_sections

logger = get_logger(__name__)

OPEN_FENCE = '"""commentary'
CLOSE_FENCE = '"""'


def find_block_start(
    lines: Sequence[str], cursor_line: int, open_fence: str = OPEN_FENCE, close_fence: str = CLOSE_FENCE
) -> int | None:
    """Scan backwards for the open fence; any other fence seen first means we're outside."""
    if not lines:
        return None
    for i in range(min(cursor_line, len(lines) - 1), -1, -1):
        line = lines[i]
        if line.startswith(open_fence):
            return i
        if line.startswith(close_fence) and i < cursor_line:
            return None
    return None


def find_block_end(lines: Sequence[str], start: int, close_fence: str = CLOSE_FENCE) -> int:
    for i in range(start + 1, len(lines)):
        if lines[i].startswith(close_fence):
            return i
    logger.debug("Unterminated block at line %d clipped at document end", start)
    return len(lines)


def bounds_from_start(
    lines: Sequence[str], start: int, close_fence: str = CLOSE_FENCE
) -> BlockBounds:
    """
    Bounds of the block opened at ``start``.

    A repeated delimiter widens its section from the first delimiter to the
    end of the last run, so spans may overlap (commentary, footnote,
    commentary). Navigation and insertion work on the individual runs
    from `section_runs`.
    """
    end = find_block_end(lines, start, close_fence)
    spans: dict[str, SectionSpan] = {}
    for run in scan_sections(lines, start + 1, end):
        prior = spans.get(run.name)
        first = prior.start if prior is not None else run.delimiter
        spans[run.name] = SectionSpan(first, run.end)
    return BlockBounds(start_line=start, end_line=end, **spans)


def section_runs(lines: Sequence[str], bounds: BlockBounds, name: str) -> list[SectionRun]:
    """Every run of section ``name`` in the block, in source order."""
    return [
        run
        for run in scan_sections(lines, bounds.start_line + 1, bounds.end_line)
        if run.name == name
    ]


def section_at(lines: Sequence[str], bounds: BlockBounds, line: int) -> str | None:
    """Name of the section whose content holds ``line``; None on delimiters and fences."""
    for run in scan_sections(lines, bounds.start_line + 1, bounds.end_line):
        if run.delimiter < line < run.end:
            return run.name
    return None


def locate(
    lines: Sequence[str],
    cursor_line: int,
    open_fence: str = OPEN_FENCE,
    close_fence: str = CLOSE_FENCE,
) -> BlockBounds | None:
    """
    Return the bounds of the commentary block containing ``cursor_line``.

    None when the cursor is not inside a commentary block or not on a line
    of the document.
    """
    if not 0 <= cursor_line < len(lines):
        return None
    start = find_block_start(lines, cursor_line, open_fence, close_fence)
    if start is None:
        return None
    bounds = bounds_from_start(lines, start, close_fence)
    if not bounds.contains(cursor_line):
        return None
    return bounds


def next_number(lines: Sequence[str], bounds: BlockBounds) -> int:
    """One more than the largest reference number in the block (gaps are not reused)."""
    highest = 0
    for i in range(bounds.start_line, min(bounds.end_line, len(lines))):
        for m in REF_RE.finditer(lines[i]):
            highest = max(highest, int(m.group(1)))
    return highest + 1


def find_reference(
    lines: Sequence[str], bounds: BlockBounds, number: int
) -> Position | None:
    """First ``$[number]`` in the block's commentary runs."""
    for run in section_runs(lines, bounds, "commentary"):
        for i in range(run.delimiter + 1, run.end):
            for m in REF_RE.finditer(lines[i]):
                if int(m.group(1)) == number:
                    return Position(i, m.start())
    return None


def find_definition(
    lines: Sequence[str], bounds: BlockBounds, number: int
) -> Position | None:
    """The ``$[number]:`` line in the block's footnote runs."""
    for run in section_runs(lines, bounds, "footnote"):
        for i in range(run.delimiter + 1, run.end):
            m = DEF_RE.match(lines[i])
            if m and int(m.group(1)) == number:
                return Position(i, 0)
    return None


def reference_at(line: str, ch: int) -> int | None:
    """Number of the ``$[N]`` marker touching column ``ch``, if any."""
    for m in REF_RE.finditer(line):
        if m.start() <= ch <= m.end():
            return int(m.group(1))
    return None


def insert_definition(
    lines: Sequence[str], bounds: BlockBounds, definition: str
) -> tuple[list[str], Position]:
    """
    Insert a definition line into the block's footnote section.

    Returns the new document lines and the position at the end of the
    inserted definition. Without a footnote section, a blank line and a
    fresh delimiter are added at the block end first.
    """
    out = list(lines)
    if bounds.footnote is not None:
        at = bounds.footnote.end
        out.insert(at, definition)
    else:
        at = bounds.end_line
        out[at:at] = ["", SECTION_DELIMITERS["footnote"], definition]
        at += 2
    return out, Position(at, len(definition))
