"""Tests for error kinds and the positions they report."""

import pytest

from easyaml import (
    DuplicateMappingKey,
    InvalidEscapeSequence,
    Mark,
    ParseError,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnterminatedScalar,
    YamlIndentationError,
    parse,
)


def error_at(text, kind):
    with pytest.raises(kind) as exc:
        parse(text)
    return exc.value.line, exc.value.column


# ---------------------------------------------------------------------------
# Error objects
# ---------------------------------------------------------------------------

def test_str_includes_position():
    err = UnexpectedCharacter("bad thing", Mark(2, 5))
    assert str(err) == "bad thing (line 2, column 5)"

def test_kinds():
    assert UnexpectedCharacter.kind == "UnexpectedCharacter"
    assert UnterminatedScalar.kind == "UnterminatedScalar"
    assert YamlIndentationError.kind == "IndentationError"
    assert DuplicateMappingKey.kind == "DuplicateMappingKey"
    assert InvalidEscapeSequence.kind == "InvalidEscapeSequence"
    assert UnexpectedEndOfInput.kind == "UnexpectedEndOfInput"

def test_all_errors_share_base():
    for cls in (UnexpectedCharacter, UnterminatedScalar, YamlIndentationError,
                DuplicateMappingKey, InvalidEscapeSequence, UnexpectedEndOfInput):
        assert issubclass(cls, ParseError)

def test_indentation_error_not_builtin():
    assert not issubclass(YamlIndentationError, IndentationError)

def test_error_carries_mark():
    with pytest.raises(ParseError) as exc:
        parse("a: 1\na: 2")
    assert exc.value.mark == Mark(2, 1)
    assert str(exc.value).endswith("(line 2, column 1)")


# ---------------------------------------------------------------------------
# DuplicateMappingKey
# ---------------------------------------------------------------------------

def test_duplicate_key():
    assert error_at("a: 1\na: 2", DuplicateMappingKey) == (2, 1)

def test_duplicate_key_quoted_and_plain():
    """'a' and a are the same key."""
    assert error_at("a: 1\n'a': 2", DuplicateMappingKey) == (2, 1)

def test_duplicate_nested_key():
    assert error_at("x:\n  a: 1\n  a: 2\n", DuplicateMappingKey) == (3, 3)

def test_duplicate_explicit_mapping_keys_in_any_order():
    text = "? a: 1\n  b: 2\n: x\n? b: 2\n  a: 1\n: y\n"
    assert error_at(text, DuplicateMappingKey) == (4, 1)

def test_same_key_in_different_mappings_is_fine():
    parse("- a: 1\n- a: 2\n")


# ---------------------------------------------------------------------------
# UnterminatedScalar
# ---------------------------------------------------------------------------

def test_unterminated_double_quote():
    assert error_at('"abc', UnterminatedScalar) == (1, 1)

def test_unterminated_single_quote_in_mapping():
    assert error_at("k: 'abc\n  def", UnterminatedScalar) == (1, 4)

def test_document_marker_inside_quoted_scalar():
    assert error_at("'abc\n---\n'", UnterminatedScalar) == (1, 1)


# ---------------------------------------------------------------------------
# InvalidEscapeSequence
# ---------------------------------------------------------------------------

def test_unknown_escape():
    assert error_at('"a\\qb"', InvalidEscapeSequence) == (1, 3)

def test_short_hex_escape():
    assert error_at('"\\x4"', InvalidEscapeSequence) == (1, 2)

def test_code_point_out_of_range():
    assert error_at('"\\UFFFFFFFF"', InvalidEscapeSequence) == (1, 2)


# ---------------------------------------------------------------------------
# YamlIndentationError
# ---------------------------------------------------------------------------

def test_sequence_entry_over_indented():
    assert error_at('- "a"\n  - b', YamlIndentationError) == (2, 3)

def test_tab_indentation():
    assert error_at("a:\n\tb: c", YamlIndentationError) == (2, 2)

def test_quoted_continuation_dedented():
    assert error_at("a:\n  - 'x\n y'", YamlIndentationError) == (3, 2)


# ---------------------------------------------------------------------------
# UnexpectedCharacter
# ---------------------------------------------------------------------------

def test_content_after_root_collection():
    assert error_at("- a\nb", UnexpectedCharacter) == (2, 1)

def test_inline_mapping_value_not_allowed():
    assert error_at("a: b: c", UnexpectedCharacter) == (1, 5)

def test_mapping_key_without_colon():
    assert error_at("a: 1\nb\n", UnexpectedCharacter) == (2, 2)

def test_multiline_plain_key():
    assert error_at("a\nb: c", UnexpectedCharacter) == (2, 2)

def test_multiline_quoted_key():
    assert error_at('"a\n b": c', UnexpectedCharacter) == (2, 4)

def test_sequence_entry_where_key_expected():
    assert error_at("a: 1\n- b", UnexpectedCharacter) == (2, 1)

def test_junk_after_quoted_scalar():
    assert error_at('"a" x', UnexpectedCharacter) == (1, 5)

def test_explicit_key_without_value_indicator():
    assert error_at("? a\nb: c", UnexpectedCharacter) == (2, 1)

def test_content_after_document_end_marker():
    assert error_at("a\n... x", UnexpectedCharacter) == (2, 5)

@pytest.mark.parametrize("text, position", [
    ("[1, 2]", (1, 1)),
    ("{a: 1}", (1, 1)),
    ("&anchor x", (1, 1)),
    ("key: *ref", (1, 6)),
    ("!tag x", (1, 1)),
    ("@x", (1, 1)),
    (": a", (1, 1)),
])
def test_unsupported_indicators(text, position):
    assert error_at(text, UnexpectedCharacter) == position


# ---------------------------------------------------------------------------
# UnexpectedEndOfInput
# ---------------------------------------------------------------------------

def test_explicit_key_at_end_of_input():
    assert error_at("? a", UnexpectedEndOfInput) == (1, 4)

def test_explicit_key_before_document_marker():
    assert error_at("? a\n---\nb", UnexpectedEndOfInput) == (2, 1)


# ---------------------------------------------------------------------------
# Root-level indentation
# ---------------------------------------------------------------------------

def test_root_sequence_followed_by_dedented_entry():
    assert error_at("  - a\n- b", YamlIndentationError) == (2, 1)

def test_root_mapping_followed_by_dedented_key():
    assert error_at("  a: 1\nb: 2", YamlIndentationError) == (2, 1)

def test_dedent_after_document_start_marker():
    assert error_at("---\n  a: 1\nb: 2", YamlIndentationError) == (3, 1)

def test_root_block_scalar_followed_by_dedented_line():
    assert error_at("  |\n  x\ny", YamlIndentationError) == (3, 1)

def test_content_after_inline_document_is_unexpected():
    assert error_at('--- "a"\nb', UnexpectedCharacter) == (2, 1)
