"""Editor commands for commentary blocks.

Every command re-derives block bounds from the live editor text, and
every mutation is a single whole-document ``set_value``. A failed
precondition is reported through ``CommandResult`` and leaves the
document untouched.
"""

from dataclasses import dataclass

from .config import FenceConfig
from .core.bounds import (
    find_definition,
    find_reference,
    insert_definition,
    locate,
    next_number,
    reference_at,
    section_at,
)
from .core.footnotes import DEF_RE
from .core.model import DEFAULT_FOOTNOTE_TYPE, Block, BlockBounds, Position
from .core.ports import Editor
from .core.sections import join_sections, split_lines

OUTSIDE_BLOCK = "Place cursor inside a commentary block to insert a footnote"
OUTSIDE_COMMENTARY = "Place cursor in the commentary section to insert a footnote"


@dataclass
class CommandResult:
    ok: bool
    message: str
    position: Position | None = None
    number: int | None = None


def _lines(editor: Editor) -> list[str]:
    return split_lines(editor.get_value())


def _cursor(editor: Editor, lines: list[str]) -> Position:
    cursor = editor.get_cursor()
    line = max(0, min(cursor.line, len(lines) - 1))
    return Position(line, max(0, min(cursor.ch, len(lines[line]))))


def _bounds(editor: Editor, lines: list[str], fences: FenceConfig) -> BlockBounds | None:
    return locate(lines, _cursor(editor, lines).line, fences.open, fences.close)


def block_template(footnote_type: str = DEFAULT_FOOTNOTE_TYPE, fences: FenceConfig | None = None) -> str:
    fences = fences or FenceConfig()
    template = Block(
        metadata={"title": "Commentary on [Topic]", "tags": ["analysis", "notes"]},
        original_text="[Insert the original text to comment on here]\n\n",
        commentary_raw="Your commentary goes here.$[1]\n\n",
        footnote_definitions_raw=f"$[1]: {footnote_type}: Your footnote text here\n",
    )
    return f"{fences.open}\n{join_sections(template)}{fences.close}"


def insert_commentary_block(
    editor: Editor,
    footnote_type: str = DEFAULT_FOOTNOTE_TYPE,
    fences: FenceConfig | None = None,
) -> CommandResult:
    """Insert a template block on its own lines at the cursor."""
    fences = fences or FenceConfig()
    lines = _lines(editor)
    cursor = _cursor(editor, lines)
    new_lines = split_lines(block_template(footnote_type, fences))

    at = cursor.line
    if lines[at].strip():
        at += 1
        lines[at:at] = new_lines
    else:
        lines[at : at + 1] = new_lines

    editor.set_value("\n".join(lines))
    pos = Position(at, 0)
    editor.set_cursor(pos)
    editor.scroll_into_view(pos)
    return CommandResult(True, "Inserted commentary block", pos)


def insert_footnote(
    editor: Editor,
    footnote_type: str = DEFAULT_FOOTNOTE_TYPE,
    fences: FenceConfig | None = None,
) -> CommandResult:
    """
    Insert the next ``$[n]`` at the cursor and its definition line.

    The cursor ends up at the end of the new definition, ready for typing.
    """
    fences = fences or FenceConfig()
    lines = _lines(editor)
    cursor = _cursor(editor, lines)
    bounds = _bounds(editor, lines, fences)
    if bounds is None:
        return CommandResult(False, OUTSIDE_BLOCK)
    if section_at(lines, bounds, cursor.line) != "commentary":
        return CommandResult(False, OUTSIDE_COMMENTARY)

    n = next_number(lines, bounds)
    line, ch = lines[cursor.line], cursor.ch
    lines[cursor.line] = f"{line[:ch]}$[{n}]{line[ch:]}"

    lines, pos = insert_definition(lines, bounds, f"$[{n}]: {footnote_type}: ")
    editor.set_value("\n".join(lines))
    editor.set_cursor(pos)
    editor.scroll_into_view(pos)
    return CommandResult(True, f"Inserted footnote $[{n}]", pos, n)


def goto_definition(
    editor: Editor, number: int | None = None, fences: FenceConfig | None = None
) -> CommandResult:
    """Select the definition of ``number`` (or of the reference under the cursor)."""
    fences = fences or FenceConfig()
    lines = _lines(editor)
    bounds = _bounds(editor, lines, fences)
    if bounds is None:
        return CommandResult(False, "Place cursor inside a commentary block")
    if number is None:
        cursor = _cursor(editor, lines)
        number = reference_at(lines[cursor.line], cursor.ch)
        if number is None:
            return CommandResult(False, "No footnote reference at cursor")

    pos = find_definition(lines, bounds, number)
    if pos is None:
        return CommandResult(False, f"Definition for $[{number}] not found in this block", number=number)
    marker_end = Position(pos.line, len(f"$[{number}]:"))
    editor.set_selection(pos, marker_end)
    editor.scroll_into_view(pos)
    return CommandResult(True, f"Definition $[{number}]", pos, number)


def goto_reference(
    editor: Editor, number: int | None = None, fences: FenceConfig | None = None
) -> CommandResult:
    """Select the first reference to ``number`` (or to the definition under the cursor)."""
    fences = fences or FenceConfig()
    lines = _lines(editor)
    bounds = _bounds(editor, lines, fences)
    if bounds is None:
        return CommandResult(False, "Place cursor inside a commentary block")
    if number is None:
        cursor = _cursor(editor, lines)
        m = DEF_RE.match(lines[cursor.line])
        number = int(m.group(1)) if m else reference_at(lines[cursor.line], cursor.ch)
        if number is None:
            return CommandResult(False, "No footnote at cursor")

    pos = find_reference(lines, bounds, number)
    if pos is None:
        return CommandResult(False, f"Reference $[{number}] not found in this block", number=number)
    editor.set_selection(pos, Position(pos.line, pos.ch + len(f"$[{number}]")))
    editor.scroll_into_view(pos)
    return CommandResult(True, f"Reference $[{number}]", pos, number)
