"""Tests for footnote resolution and classification."""

from scholia.core.footnotes import (
    classify,
    definition_map,
    find_references,
    parse_definitions,
    resolve,
)


def test_resolve_first_occurrence_order():
    """Test that display order follows first reference, not author numbers."""
    result = resolve("See $[2] and $[1]. Also $[2].", "$[1]: first\n$[2]: second\n")

    assert result.placeholder_text == "See {{fnref:1}} and {{fnref:2}}. Also {{fnref:1}}."
    assert [(f.display_index, f.number, f.content) for f in result.footnotes] == [
        (1, 2, "second"),
        (2, 1, "first"),
    ]


def test_resolve_duplicate_reference_reuses_index():
    """Test that $[a], $[b], $[a] gives two footnotes."""
    result = resolve("x $[7] y $[3] z $[7]", "$[3]: three\n$[7]: seven\n")

    assert len(result.footnotes) == 2
    assert result.display_index_for(7) == 1
    assert result.display_index_for(3) == 2
    assert result.placeholder_text == "x {{fnref:1}} y {{fnref:2}} z {{fnref:1}}"
    assert len(result.references) == 3


def test_resolve_missing_definition():
    """Test that an undefined reference still gets a visible slot."""
    result = resolve("Claim $[5].", "")

    assert len(result.footnotes) == 1
    fn = result.footnotes[0]
    assert fn.display_index == 1
    assert fn.content == "missing footnote definition for 5"
    assert fn.missing is True
    assert fn.type == "note"


def test_resolve_excludes_unreferenced_definitions():
    """Test that definitions nobody cites are parsed but not output."""
    result = resolve("Only $[1].", "$[1]: used\n$[2]: unused\n")

    assert [f.content for f in result.footnotes] == ["used"]
    assert [d.number for d in result.definitions] == [1, 2]


def test_resolve_length_changes_keep_offsets():
    """Test substitution when placeholders and markers differ in length."""
    result = resolve("$[100]$[2]$[100] end", "")
    assert result.placeholder_text == "{{fnref:1}}{{fnref:2}}{{fnref:1}} end"


def test_resolve_no_references():
    """Test commentary without references passes through unchanged."""
    result = resolve("Plain text with [brackets] and $5.\n", "$[1]: orphan\n")
    assert result.placeholder_text == "Plain text with [brackets] and $5.\n"
    assert result.footnotes == []


def test_resolve_classifies_type():
    """Test that a type prefix in a definition sets the footnote type."""
    result = resolve("a $[1] b $[2]", "$[1]: warning: careful\n$[2]: idea:try this\n")
    assert [(f.type, f.content) for f in result.footnotes] == [
        ("warning", "careful"),
        ("idea", "try this"),
    ]


def test_parse_multiline_definitions():
    """Test that a definition runs until the next definition line."""
    defs = parse_definitions(
        "ignored preamble\n$[1]: first line\ncontinued here\n\nsecond para\n$[2]: next\n"
    )

    assert [(d.number, d.line) for d in defs] == [(1, 1), (2, 5)]
    assert defs[0].body_text == "first line\ncontinued here\n\nsecond para"
    assert defs[1].body_text == "next"


def test_duplicate_definition_first_wins():
    """Test that the first definition of a number is the one used."""
    defs = parse_definitions("$[1]: original\n$[1]: replacement\n")
    assert definition_map(defs) == {1: "original"}

    result = resolve("x $[1]", "$[1]: original\n$[1]: replacement\n")
    assert result.footnotes[0].content == "original"


def test_find_references_offsets():
    """Test reference offsets and marker lengths."""
    refs = find_references("ab $[1] cd $[12]")
    assert [(r.number, r.source_offset, r.length) for r in refs] == [(1, 3, 4), (12, 11, 5)]


def test_classify_known_types():
    """Test that every recognized prefix is stripped."""
    for name in ("note", "warning", "info", "reference", "idea", "question"):
        assert classify(f"{name}:  body text ") == (name, "body text")


def test_classify_unknown_prefix_kept():
    """Test that an unknown prefix falls back to note with the body intact."""
    assert classify("todo: later") == ("note", "todo: later")
    assert classify("https://example.com") == ("note", "https://example.com")
    assert classify("no prefix at all") == ("note", "no prefix at all")


def test_classify_multiline_remainder():
    """Test that the remainder may span lines."""
    assert classify("info: line one\nline two\n") == ("info", "line one\nline two")
