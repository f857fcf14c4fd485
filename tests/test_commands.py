"""Tests for editor commands on commentary blocks."""

from scholia.adapters.text_editor import TextEditor
from scholia.commands import (
    OUTSIDE_BLOCK,
    OUTSIDE_COMMENTARY,
    block_template,
    goto_definition,
    goto_reference,
    insert_commentary_block,
    insert_footnote,
)
from scholia.config import FenceConfig
from scholia.core.model import Position
from scholia.core.sections import sectionize

DOC = '''Intro.
"""commentary
---commentary---
First claim $[1]. Second claim.
---footnote---
$[1]: note: first
"""
After.'''


def test_insert_footnote_next_number():
    """Test inserting a reference and its definition line."""
    editor = TextEditor(DOC, Position(3, 30))
    result = insert_footnote(editor)

    assert result.ok
    assert result.number == 2
    assert result.position == Position(6, 12)
    lines = editor.get_value().split("\n")
    assert lines[3] == "First claim $[1]. Second claim$[2]."
    assert lines[5] == "$[1]: note: first"
    assert lines[6] == "$[2]: note: "
    assert lines[7] == '"""'
    assert editor.get_cursor() == Position(6, 12)
    assert editor.scrolled_to == Position(6, 12)


def test_insert_footnote_creates_footnote_section():
    """Test that a block without definitions gains a footnote section."""
    doc = '"""commentary\n---commentary---\nClaim.\n"""'
    editor = TextEditor(doc, Position(2, 5))
    result = insert_footnote(editor, "idea")

    assert result.ok
    assert result.position == Position(5, 12)
    assert editor.get_value().split("\n") == [
        '"""commentary',
        "---commentary---",
        "Claim$[1].",
        "",
        "---footnote---",
        "$[1]: idea: ",
        '"""',
    ]


def test_insert_footnote_outside_block():
    """Test that nothing changes when the cursor is outside any block."""
    for line in (0, 7):
        editor = TextEditor(DOC, Position(line, 0))
        result = insert_footnote(editor)

        assert not result.ok
        assert result.message == OUTSIDE_BLOCK
        assert editor.get_value() == DOC


def test_insert_footnote_outside_commentary_section():
    """Test that the footnote section is not a valid insertion point."""
    editor = TextEditor(DOC, Position(5, 0))
    result = insert_footnote(editor)

    assert not result.ok
    assert result.message == OUTSIDE_COMMENTARY
    assert editor.get_value() == DOC


def test_insert_footnote_custom_fences():
    """Test insertion inside a block with configured fences."""
    doc = ":::commentary\n---commentary---\nHi.\n:::"
    fences = FenceConfig(open=":::commentary", close=":::")
    editor = TextEditor(doc, Position(2, 2))

    assert insert_footnote(editor, fences=fences).ok
    assert "Hi$[1]." in editor.get_value()


def test_goto_definition_from_reference():
    """Test jumping from the marker under the cursor to its definition."""
    editor = TextEditor(DOC, Position(3, 13))
    result = goto_definition(editor)

    assert result.ok
    assert result.number == 1
    assert result.position == Position(5, 0)
    assert editor.selection == (Position(5, 0), Position(5, 5))


def test_goto_definition_missing():
    """Test that an undefined number is reported, not selected."""
    editor = TextEditor(DOC, Position(3, 0))
    result = goto_definition(editor, number=9)

    assert not result.ok
    assert editor.selection is None


def test_goto_definition_no_marker_at_cursor():
    """Test that a cursor away from any marker is reported."""
    editor = TextEditor(DOC, Position(3, 0))
    assert not goto_definition(editor).ok


def test_goto_reference_from_definition():
    """Test jumping from a definition line back to the first reference."""
    editor = TextEditor(DOC, Position(5, 0))
    result = goto_reference(editor)

    assert result.ok
    assert result.position == Position(3, 12)
    assert editor.selection == (Position(3, 12), Position(3, 16))


def test_insert_commentary_block_empty_document():
    """Test inserting a template into an empty editor."""
    editor = TextEditor("")
    result = insert_commentary_block(editor)

    assert result.ok
    assert result.position == Position(0, 0)
    assert editor.get_value() == block_template()


def test_insert_commentary_block_after_text():
    """Test that a template never splits a non-blank line."""
    editor = TextEditor("Intro.\nMore.", Position(0, 3))
    insert_commentary_block(editor)

    lines = editor.get_value().split("\n")
    assert lines[0] == "Intro."
    assert lines[1] == '"""commentary'
    assert lines[-1] == "More."


def test_block_template_parses():
    """Test that the template is itself a valid block."""
    template = block_template("warning")
    inner = "\n".join(template.split("\n")[1:-1])
    block = sectionize(inner)

    assert block.title == "Commentary on [Topic]"
    assert block.tags == ["analysis", "notes"]
    assert "$[1]" in block.commentary_raw
    assert block.footnote_definitions_raw == "$[1]: warning: Your footnote text here\n"


def test_cursor_past_document_end_is_clipped():
    """Test that a cursor beyond the last line lands on it instead of failing."""
    editor = TextEditor("one\ntwo", Position(9, 4))
    assert editor.get_cursor() == Position(1, 3)

    result = insert_commentary_block(editor)

    assert result.ok
    lines = editor.get_value().split("\n")
    assert lines[:3] == ["one", "two", '"""commentary']


def test_goto_definition_cursor_past_end():
    """Test navigation from an out-of-range cursor in an unterminated block."""
    editor = TextEditor('"""commentary\n---commentary---\nx $[1]\n', Position(4, 0))
    result = goto_definition(editor)

    assert not result.ok
    assert result.message == "No footnote reference at cursor"


class _LooseEditor(TextEditor):
    """Editor whose cursor is not kept inside the document."""

    def __init__(self, value: str, cursor: Position):
        super().__init__(value)
        self.cursor = cursor


def test_commands_clamp_foreign_cursor():
    """Test that commands clamp a cursor reported past the document end."""
    editor = _LooseEditor(DOC, Position(40, 0))

    assert insert_footnote(editor).message == OUTSIDE_BLOCK
    assert not goto_reference(editor).ok
    assert editor.get_value() == DOC


def test_insert_footnote_between_repeated_commentary_runs():
    """Test that a footnote run inside a widened commentary span is refused."""
    doc = (
        '"""commentary\n---commentary---\nOpening.\n---footnote---\n'
        '$[1]: early\n---commentary---\nLater $[1].\n"""'
    )
    editor = TextEditor(doc, Position(4, 3))
    assert insert_footnote(editor).message == OUTSIDE_COMMENTARY

    editor = TextEditor(doc, Position(6, 5))
    result = insert_footnote(editor)

    assert result.ok
    lines = editor.get_value().split("\n")
    assert result.position == Position(5, 12)
    assert lines[5] == "$[2]: note: "
    assert lines[6] == "---commentary---"
    assert lines[7] == "Later$[2] $[1]."
