"""Scalar states: quoted, block (literal / folded) and plain scalars.

Each state here runs to completion within a single ``step`` and hands a
:class:`~easyaml.values.Scalar` to the state beneath it.  Quoted and plain
scalars may instead turn out to be a mapping key; what happens then is
decided by their :class:`KeyMode`.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from .errors import (
    InvalidEscapeSequence,
    UnexpectedCharacter,
    UnterminatedScalar,
    YamlIndentationError,
)
from .reader import Mark, is_blank_or_end, is_space
from .values import Scalar

if TYPE_CHECKING:
    from .parser import Parser


ESCAPE_REPLACEMENTS: dict[str, str] = {
    "0": "\0",
    "a": "\x07",
    "b": "\x08",
    "t": "\x09",
    "\t": "\x09",
    "n": "\x0A",
    "v": "\x0B",
    "f": "\x0C",
    "r": "\x0D",
    "e": "\x1B",
    " ": "\x20",
    '"': '"',
    "/": "/",
    "\\": "\\",
    "N": "\x85",
    "_": "\xA0",
    "L": "\u2028",
    "P": "\u2029",
}

# Escape letter -> number of hex digits that follow
ESCAPE_CODES: dict[str, int] = {
    "x": 2,
    "u": 4,
    "U": 8,
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")

# Indicators that cannot start a plain scalar in block context
_FLOW_INDICATORS = frozenset("[]{},")
_NODE_PROPERTIES = frozenset("&*!")
_RESERVED = frozenset("%@`")


class KeyMode(Enum):
    NONE = auto()      # a following ": " is an error
    MAYBE = auto()     # a following ": " opens a new mapping
    REQUIRED = auto()  # the scalar is a mapping key and must be followed by ":"


# ---------------------------------------------------------------------------
# Dispatch helpers
# ---------------------------------------------------------------------------

def check_plain_start(parser: "Parser") -> None:
    """Raise UnexpectedCharacter if the next character cannot start a plain scalar."""
    reader = parser.reader
    ch = reader.peek()
    if ch in _FLOW_INDICATORS:
        raise UnexpectedCharacter(f"flow collections are not supported (found {ch!r})", reader.position())
    if ch in _NODE_PROPERTIES:
        raise UnexpectedCharacter(
            f"anchors, aliases and tags are not supported (found {ch!r})", reader.position()
        )
    if ch in _RESERVED:
        raise UnexpectedCharacter(f"{ch!r} cannot start a plain scalar", reader.position())
    if ch == ":" and is_blank_or_end(reader.peek(1)):
        raise UnexpectedCharacter("mapping value without a key", reader.position())


def _at_value_indicator(parser: "Parser") -> bool:
    reader = parser.reader
    return reader.peek() == ":" and is_blank_or_end(reader.peek(1))


def _finish_key(parser: "Parser", text: str, key_mode: KeyMode, column: int, start: Mark) -> None:
    """Consume the ':' after a single-line scalar and hand it on as a key."""
    reader = parser.reader
    if key_mode is KeyMode.NONE:
        raise UnexpectedCharacter("mapping values are not allowed here", reader.position())
    reader.advance()
    if key_mode is KeyMode.MAYBE:
        parser.open_mapping(column, Scalar(text), start)
    else:
        parser.finish(Scalar(text))


def _missing_value_indicator(parser: "Parser") -> UnexpectedCharacter:
    return UnexpectedCharacter("expected ':' after mapping key", parser.reader.position())


# ---------------------------------------------------------------------------
# Quoted scalars
# ---------------------------------------------------------------------------

class StringScalar:
    """Single- or double-quoted scalar."""

    def __init__(self, quote: str, parent_indent: int, key_mode: KeyMode, column: int) -> None:
        self.quote = quote
        self.parent_indent = parent_indent
        self.key_mode = key_mode
        self.column = column

    def __repr__(self) -> str:
        return f"StringScalar({self.quote!r})"

    def step(self, parser: "Parser") -> None:
        reader = parser.reader
        start = reader.position()
        reader.advance()
        chunks: list[str] = []
        multiline = False

        while True:
            ch = reader.peek()
            if ch is None:
                raise UnterminatedScalar("end of input inside a quoted scalar", start)
            if ch == self.quote:
                if self.quote == "'" and reader.peek(1) == "'":
                    reader.forward(2)
                    chunks.append("'")
                    continue
                reader.advance()
                break
            if ch == "\\" and self.quote == '"':
                if reader.peek(1) == "\n":
                    reader.forward(2)
                    multiline = True
                    chunks.extend(self._line_breaks(parser, start))
                    continue
                chunks.append(self._escape(parser))
                continue
            if is_space(ch):
                whitespace = []
                while is_space(reader.peek()):
                    whitespace.append(reader.advance())
                # Trailing whitespace before a line break is folded away
                if reader.peek() != "\n":
                    chunks.extend(whitespace)
                continue
            if ch == "\n":
                reader.advance()
                multiline = True
                breaks = self._line_breaks(parser, start)
                chunks.append("".join(breaks) if breaks else " ")
                continue
            chunks.append(reader.advance())

        text = "".join(chunks)
        spaced = reader.skip_spaces()
        if _at_value_indicator(parser):
            if multiline:
                raise UnexpectedCharacter(
                    "a multi-line scalar cannot be a mapping key", reader.position()
                )
            _finish_key(parser, text, self.key_mode, self.column, start)
            return
        if self.key_mode is KeyMode.REQUIRED:
            raise _missing_value_indicator(parser)
        ch = reader.peek()
        if not (ch is None or ch == "\n" or (ch == "#" and spaced)):
            raise UnexpectedCharacter(f"unexpected {ch!r} after quoted scalar", reader.position())
        parser.finish(Scalar(text))

    def _line_breaks(self, parser: "Parser", start: Mark) -> list[str]:
        """Skip the indentation of continuation lines, collecting empty lines."""
        reader = parser.reader
        breaks: list[str] = []
        while True:
            reader.skip_spaces()
            if reader.peek() != "\n":
                break
            breaks.append("\n")
            reader.advance()
        if parser.at_document_marker():
            raise UnterminatedScalar("document marker inside a quoted scalar", start)
        if reader.peek() is not None and reader.column < self.parent_indent:
            raise YamlIndentationError(
                "continuation line of a quoted scalar is not indented enough", reader.position()
            )
        return breaks

    def _escape(self, parser: "Parser") -> str:
        reader = parser.reader
        mark = reader.position()
        letter = reader.peek(1)
        if letter in ESCAPE_REPLACEMENTS:
            reader.forward(2)
            return ESCAPE_REPLACEMENTS[letter]
        if letter in ESCAPE_CODES:
            reader.forward(2)
            digits = []
            for _ in range(ESCAPE_CODES[letter]):
                ch = reader.peek()
                if ch not in _HEX_DIGITS:
                    raise InvalidEscapeSequence(
                        f"expected {ESCAPE_CODES[letter]} hex digits after '\\{letter}'", mark
                    )
                digits.append(reader.advance())
            code = int("".join(digits), 16)
            if code > 0x10FFFF:
                raise InvalidEscapeSequence(f"code point U+{code:X} is out of range", mark)
            return chr(code)
        if letter is None:
            raise UnterminatedScalar("end of input inside an escape sequence", mark)
        raise InvalidEscapeSequence(f"unknown escape sequence '\\{letter}'", mark)


# ---------------------------------------------------------------------------
# Block scalars
# ---------------------------------------------------------------------------

class BlockScalar:
    """Literal (``|``) or folded (``>``) block scalar.

    The header may carry a chomping indicator (``-`` strip, ``+`` keep,
    absent = clip) and an explicit indentation digit, in either order.
    Parsing happens in two steps so that a header comment goes through
    :class:`~easyaml.states.CommentState` like any other comment.
    """

    def __init__(self, folded: bool, parent_indent: int) -> None:
        self.folded = folded
        self.parent_indent = parent_indent
        self.chomping: bool | None = None
        self.increment: int | None = None
        self._header_done = False

    def __repr__(self) -> str:
        return "FoldedScalar" if self.folded else "LiteralScalar"

    def step(self, parser: "Parser") -> None:
        if not self._header_done:
            self._read_header(parser)
            self._header_done = True
            if parser.reader.peek() == "#":
                parser.push_comment()
                return
        self._read_body(parser)

    def _read_header(self, parser: "Parser") -> None:
        reader = parser.reader
        reader.advance()
        for _ in range(2):
            ch = reader.peek()
            if ch in ("+", "-") and self.chomping is None:
                self.chomping = ch == "+"
                reader.advance()
            elif ch is not None and ch in "0123456789" and self.increment is None:
                if ch == "0":
                    raise UnexpectedCharacter(
                        "indentation indicator must be between 1 and 9", reader.position()
                    )
                self.increment = int(ch)
                reader.advance()
        spaced = reader.skip_spaces()
        ch = reader.peek()
        if ch is None or ch == "\n" or (ch == "#" and spaced):
            return
        raise UnexpectedCharacter(f"unexpected {ch!r} in block scalar header", reader.position())

    def _read_body(self, parser: "Parser") -> None:
        reader = parser.reader
        reader.advance()  # header line break, if any

        if self.increment is not None:
            base = self.parent_indent if self.parent_indent >= 0 else 0
            indent = base + self.increment
            breaks = self._breaks(parser, indent)
        else:
            breaks, indent = self._detect_indentation(parser)

        chunks: list[str] = []
        line_break = ""
        while self._in_block(parser, indent):
            chunks.extend(breaks)
            leading_non_space = not is_space(reader.peek())
            line = []
            while reader.peek() not in (None, "\n"):
                line.append(reader.advance())
            chunks.append("".join(line))
            line_break = reader.advance() or ""
            breaks = self._breaks(parser, indent)
            if not self._in_block(parser, indent):
                break
            if (
                self.folded
                and line_break == "\n"
                and leading_non_space
                and not is_space(reader.peek())
            ):
                if not breaks:
                    chunks.append(" ")
            else:
                chunks.append(line_break)

        if self.chomping is not False:
            chunks.append(line_break)
        if self.chomping is True:
            chunks.extend(breaks)
        parser.finish(Scalar("".join(chunks)))

    @staticmethod
    def _in_block(parser: "Parser", indent: int) -> bool:
        reader = parser.reader
        return (
            reader.column == indent
            and reader.peek() is not None
            and not parser.at_document_marker()
        )

    @staticmethod
    def _breaks(parser: "Parser", indent: int) -> list[str]:
        """Consume empty lines, stopping at *indent* on the next content line."""
        reader = parser.reader
        breaks: list[str] = []
        while reader.column < indent and reader.peek() == " ":
            reader.advance()
        while reader.peek() == "\n":
            breaks.append(reader.advance())
            while reader.column < indent and reader.peek() == " ":
                reader.advance()
        return breaks

    def _detect_indentation(self, parser: "Parser") -> tuple[list[str], int]:
        reader = parser.reader
        breaks: list[str] = []
        longest_blank = 0
        while True:
            while reader.peek() == " ":
                reader.advance()
            if reader.peek() != "\n":
                break
            longest_blank = max(longest_blank, reader.column)
            breaks.append(reader.advance())
        indent = max(reader.column, self.parent_indent + 1)
        has_content = reader.peek() is not None and reader.column > self.parent_indent
        if has_content and longest_blank > indent:
            raise YamlIndentationError(
                "leading empty line is indented more than the block scalar content",
                reader.position(),
            )
        return breaks, indent


# ---------------------------------------------------------------------------
# Plain scalars
# ---------------------------------------------------------------------------

class PlainScalar:
    """Unquoted scalar, possibly spanning several lines.

    Line breaks fold like a folded block scalar: a single break becomes a
    space and each additional empty line a newline.
    """

    def __init__(self, parent_indent: int, key_mode: KeyMode, column: int) -> None:
        self.parent_indent = parent_indent
        self.key_mode = key_mode
        self.column = column

    def __repr__(self) -> str:
        return f"PlainScalar({self.key_mode.name})"

    def step(self, parser: "Parser") -> None:
        reader = parser.reader
        start = reader.position()
        text = self._read_line(parser)
        if _at_value_indicator(parser):
            _finish_key(parser, text, self.key_mode, self.column, start)
            return
        if self.key_mode is KeyMode.REQUIRED:
            raise _missing_value_indicator(parser)

        while reader.peek() == "\n":
            reader.advance()
            breaks = 0
            while True:
                reader.skip_spaces()
                if reader.peek() != "\n":
                    break
                reader.advance()
                breaks += 1
            ch = reader.peek()
            if (
                ch is None
                or ch == "#"
                or reader.column <= self.parent_indent
                or parser.at_document_marker()
            ):
                break
            text += "\n" * breaks if breaks else " "
            text += self._read_line(parser)
            if _at_value_indicator(parser):
                raise UnexpectedCharacter(
                    "mapping values are not allowed in a multi-line scalar", reader.position()
                )
        parser.finish(Scalar(text))

    @staticmethod
    def _read_line(parser: "Parser") -> str:
        """Read up to a line break, ': ' or ' #', dropping trailing whitespace."""
        reader = parser.reader
        chars: list[str] = []
        while True:
            ch = reader.peek()
            if ch is None or ch == "\n":
                break
            if ch == ":" and is_blank_or_end(reader.peek(1)):
                break
            if is_space(ch) and reader.peek(1) == "#":
                break
            chars.append(reader.advance())
        return "".join(chars).rstrip(" \t")
