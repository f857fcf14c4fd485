"""Tests for finding commentary blocks in a whole document."""

from scholia.core.document import find_blocks


def test_find_blocks_in_order():
    """Test that every block is found with the text between its fences."""
    doc = (
        'Intro.\n"""commentary\n---commentary---\na $[1]\n"""\n'
        'Middle.\n"""commentary\n---commentary---\nb $[2]\n"""\n'
    )
    blocks = find_blocks(doc)

    assert [b.source for b in blocks] == ["---commentary---\na $[1]", "---commentary---\nb $[2]"]
    assert [(b.bounds.start_line, b.bounds.end_line) for b in blocks] == [(1, 4), (6, 9)]


def test_find_blocks_skips_other_fences():
    """Test that other fenced regions are stepped over."""
    doc = '"""python\nprint(1)\n"""\n"""commentary\n---commentary---\nreal\n"""'
    blocks = find_blocks(doc)

    assert len(blocks) == 1
    assert blocks[0].source == "---commentary---\nreal"


def test_unterminated_block_keeps_next_block():
    """Test that an unclosed block ends where the next block opens."""
    doc = (
        '"""commentary\n---commentary---\na $[1]\n'
        '"""commentary\n---commentary---\nb $[2]\n"""\ntrailing\n'
    )
    blocks = find_blocks(doc)

    assert [b.source for b in blocks] == ["---commentary---\na $[1]", "---commentary---\nb $[2]"]
    assert blocks[0].bounds.end_line == 3
    assert blocks[1].bounds.start_line == 3
    assert blocks[1].bounds.end_line == 6


def test_unterminated_last_block_runs_to_end():
    """Test that a final unclosed block takes the rest of the document."""
    blocks = find_blocks('text\n"""commentary\n---commentary---\nopen ended')

    assert len(blocks) == 1
    assert blocks[0].source == "---commentary---\nopen ended"
    assert blocks[0].bounds.end_line == 4
