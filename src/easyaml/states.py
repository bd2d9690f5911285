"""Structural states of the parser: value dispatch, collections and comments.

Every state is one grammar production in progress.  ``step`` consumes input
and either pushes a child state, replaces itself with a more specific one, or
finishes with a value; states that wait on children get those values back
through ``receive``.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import TYPE_CHECKING

from .errors import (
    DuplicateMappingKey,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    YamlIndentationError,
)
from .reader import Mark, is_blank_or_end
from .scalars import BlockScalar, KeyMode, PlainScalar, StringScalar, check_plain_start
from .values import Mapping, Null, Sequence, Value

if TYPE_CHECKING:
    from .parser import Parser


class Phase(Enum):
    START = auto()
    KEY = auto()             # expecting a key (or "?" entry) at the mapping column
    VALUE = auto()           # key read, value not started
    AWAITING_KEY = auto()
    AWAITING_VALUE = auto()
    AWAITING_PAIR = auto()   # a ComplexMappingState entry is in progress
    COLON = auto()           # explicit key read, expecting ":"
    DONE = auto()


def _at_indicator(parser: "Parser", indicator: str) -> bool:
    """True at a one-character indicator followed by whitespace or end of input."""
    reader = parser.reader
    return reader.peek() == indicator and is_blank_or_end(reader.peek(1))


# ---------------------------------------------------------------------------
# Initial
# ---------------------------------------------------------------------------

class Initial:
    """Start of any value: picks the production from the lookahead window.

    ``parent_indent`` is the column of the enclosing collection (-1 at the
    document root); content on a later line must be indented past it.
    ``inline_key`` and ``inline_seq`` say whether content on the current line
    may open a compact mapping or sequence, and ``seq_at_parent`` allows a
    block sequence at the parent's own column (``key:\\n- item``).
    """

    def __init__(
        self,
        parent_indent: int,
        inline_key: bool = False,
        inline_seq: bool = False,
        seq_at_parent: bool = False,
    ) -> None:
        self.parent_indent = parent_indent
        self.inline_key = inline_key
        self.inline_seq = inline_seq
        self.seq_at_parent = seq_at_parent

    def __repr__(self) -> str:
        return f"Initial({self.parent_indent})"

    def step(self, parser: "Parser") -> None:
        if not parser.seek_content():
            return
        reader = parser.reader
        if reader.eof or parser.at_document_marker():
            parser.finish(Null)
            return

        column = reader.column
        if self.parent_indent < 0 and reader.at_indentation:
            parser.root_column = column
        if reader.at_indentation:
            if column <= self.parent_indent and not (
                self.seq_at_parent and column == self.parent_indent and _at_indicator(parser, "-")
            ):
                parser.finish(Null)
                return
            key_mode = KeyMode.MAYBE
            seq_allowed = True
        else:
            key_mode = KeyMode.MAYBE if self.inline_key else KeyMode.NONE
            seq_allowed = self.inline_seq

        ch = reader.peek()
        if _at_indicator(parser, "-"):
            if not seq_allowed:
                raise UnexpectedCharacter(
                    "block sequence entries are not allowed here", reader.position()
                )
            parser.replace(SequenceState(column))
        elif _at_indicator(parser, "?"):
            if key_mode is KeyMode.NONE:
                raise UnexpectedCharacter("explicit keys are not allowed here", reader.position())
            parser.replace(MappingState(column))
        elif ch in ("'", '"'):
            parser.replace(StringScalar(ch, self.parent_indent, key_mode, column))
        elif ch in ("|", ">"):
            parser.replace(BlockScalar(ch == ">", self.parent_indent))
        else:
            check_plain_start(parser)
            parser.replace(PlainScalar(self.parent_indent, key_mode, column))


# ---------------------------------------------------------------------------
# Comment
# ---------------------------------------------------------------------------

class CommentState:
    def __repr__(self) -> str:
        return "Comment"

    def step(self, parser: "Parser") -> None:
        reader = parser.reader
        while reader.peek() not in (None, "\n"):
            reader.advance()
        parser.discard()


# ---------------------------------------------------------------------------
# Sequence
# ---------------------------------------------------------------------------

class SequenceState:
    """Block sequence whose ``-`` markers sit at ``indent``."""

    def __init__(self, indent: int) -> None:
        self.indent = indent
        self.items: list[Value] = []

    def __repr__(self) -> str:
        return f"Sequence({self.indent})"

    def step(self, parser: "Parser") -> None:
        if not parser.seek_content():
            return
        reader = parser.reader
        if reader.eof or parser.at_document_marker() or reader.column < self.indent:
            parser.finish(Sequence(tuple(self.items)))
            return
        if reader.column > self.indent:
            raise YamlIndentationError(
                f"expected a sequence entry at column {self.indent + 1}", reader.position()
            )
        if not _at_indicator(parser, "-"):
            # Same column, different content: belongs to an enclosing mapping
            parser.finish(Sequence(tuple(self.items)))
            return
        reader.advance()
        parser.push(Initial(self.indent, inline_key=True, inline_seq=True))

    def receive(self, parser: "Parser", value: Value) -> None:
        self.items.append(value)


# ---------------------------------------------------------------------------
# Mapping
# ---------------------------------------------------------------------------

class MappingState:
    """Block mapping whose keys start at ``indent``.

    A mapping is either opened by a plain or quoted scalar that turned out
    to be a key (``first_key``), or by a ``?`` explicit entry.
    """

    def __init__(self, indent: int, first_key: Value | None = None, key_mark: Mark | None = None) -> None:
        self.indent = indent
        self.pairs: list[tuple[Value, Value]] = []
        self._keys: set[Value] = set()
        self._key: Value | None = None
        self._key_mark = key_mark
        self._phase = Phase.KEY
        if first_key is not None:
            self._add_key(first_key)

    def __repr__(self) -> str:
        return f"Mapping({self.indent})"

    def step(self, parser: "Parser") -> None:
        if self._phase is Phase.VALUE:
            self._phase = Phase.AWAITING_VALUE
            parser.push(Initial(self.indent, seq_at_parent=True))
            return

        if not parser.seek_content():
            return
        reader = parser.reader
        if reader.eof or parser.at_document_marker() or reader.column < self.indent:
            parser.finish(Mapping(tuple(self.pairs)))
            return
        if reader.column > self.indent:
            raise YamlIndentationError(
                f"expected a mapping key at column {self.indent + 1}", reader.position()
            )

        self._key_mark = reader.position()
        ch = reader.peek()
        if _at_indicator(parser, "?"):
            self._phase = Phase.AWAITING_PAIR
            parser.push(ComplexMappingState(self.indent))
        elif _at_indicator(parser, "-"):
            raise UnexpectedCharacter(
                "block sequence entry where a mapping key was expected", reader.position()
            )
        elif ch in ("'", '"'):
            self._phase = Phase.AWAITING_KEY
            parser.push(StringScalar(ch, self.indent, KeyMode.REQUIRED, reader.column))
        elif ch in ("|", ">"):
            raise UnexpectedCharacter("a block scalar cannot be an implicit key", reader.position())
        else:
            check_plain_start(parser)
            self._phase = Phase.AWAITING_KEY
            parser.push(PlainScalar(self.indent, KeyMode.REQUIRED, reader.column))

    def receive(self, parser: "Parser", value: Value | tuple[Value, Value]) -> None:
        if self._phase is Phase.AWAITING_KEY:
            self._add_key(value)
        elif self._phase is Phase.AWAITING_VALUE:
            self.pairs.append((self._key, value))
            self._phase = Phase.KEY
        elif self._phase is Phase.AWAITING_PAIR:
            key, item = value
            self._add_key(key)
            self.pairs.append((key, item))
            self._phase = Phase.KEY

    def _add_key(self, key: Value) -> None:
        if key in self._keys:
            raise DuplicateMappingKey(f"duplicate mapping key {key!r}", self._key_mark)
        self._keys.add(key)
        self._key = key
        self._phase = Phase.VALUE


class ComplexMappingState:
    """One ``? key`` / ``: value`` entry, handed to the enclosing mapping as a pair."""

    def __init__(self, indent: int) -> None:
        self.indent = indent
        self._key: Value | None = None
        self._value: Value | None = None
        self._phase = Phase.START

    def __repr__(self) -> str:
        return f"ComplexMapping({self.indent})"

    def step(self, parser: "Parser") -> None:
        reader = parser.reader
        if self._phase is Phase.DONE:
            parser.finish((self._key, self._value))
            return
        if self._phase is Phase.START:
            reader.advance()
            self._phase = Phase.AWAITING_KEY
            parser.push(Initial(self.indent, inline_key=True, inline_seq=True, seq_at_parent=True))
            return

        if not parser.seek_content():
            return
        if reader.eof or parser.at_document_marker():
            raise UnexpectedEndOfInput("expected ':' and a value for the explicit key", reader.position())
        if reader.column != self.indent or not _at_indicator(parser, ":"):
            raise UnexpectedCharacter(
                f"expected ':' at column {self.indent + 1} for the explicit key", reader.position()
            )
        reader.advance()
        self._phase = Phase.AWAITING_VALUE
        parser.push(Initial(self.indent, inline_key=True, inline_seq=True, seq_at_parent=True))

    def receive(self, parser: "Parser", value: Value) -> None:
        if self._phase is Phase.AWAITING_KEY:
            self._key = value
            self._phase = Phase.COLON
        else:
            self._value = value
            self._phase = Phase.DONE
