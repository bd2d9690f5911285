"""Parser: the pushdown automaton that turns YAML text into a Document."""

from __future__ import annotations

import logging

from .document import Document
from .errors import UnexpectedCharacter, YamlIndentationError
from .reader import Mark, Reader, is_blank_or_end
from .states import CommentState, Initial, MappingState
from .values import Value

LOG = logging.getLogger(__name__)

DOCUMENT_START = "---"
DOCUMENT_END = "..."

# Document root sits left of column 0
ROOT_INDENT = -1


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def parse(text: str) -> Document:
    """Parse *text* into a :class:`Document`.

    Raises a :class:`~easyaml.errors.ParseError` subclass on the first error.
    """
    if not isinstance(text, str):
        raise TypeError(f"expected str, got {type(text).__name__}")
    return Parser(text).run()


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class Parser:
    """State stack plus the document list for a single parse.

    The top state decides how the next characters are read.  A finished
    state is popped and its value handed to the state beneath it; with an
    empty stack the value is a complete document and the parser looks for a
    ``---``/``...`` boundary before starting the next one.
    """

    def __init__(self, text: str) -> None:
        self.reader = Reader(text)
        self.stack: list = []
        self.documents: list[Value] = []
        self._after_document = False
        # Column where the current root value starts; set by the root Initial
        self.root_column = 0

    def run(self) -> Document:
        LOG.debug("Parsing %d characters", len(self.reader))
        while True:
            if self.stack:
                self.stack[-1].step(self)
            elif not self._next_document():
                break
        LOG.debug("Parsed %d document(s)", len(self.documents))
        return Document.from_values(self.documents)

    # -- Stack operations -----------------------------------------------

    def push(self, state) -> None:
        self.stack.append(state)

    def push_comment(self) -> None:
        self.stack.append(CommentState())

    def replace(self, state) -> None:
        self.stack[-1] = state

    def discard(self) -> None:
        """Pop the top state without producing a value."""
        self.stack.pop()

    def finish(self, value) -> None:
        """Pop the top state and hand *value* to its consumer."""
        self.stack.pop()
        if self.stack:
            self.stack[-1].receive(self, value)
            return
        self.documents.append(value)
        self._after_document = True
        LOG.debug("Document %d complete (%s)", len(self.documents), type(value).__name__)

    def open_mapping(self, column: int, key: Value, key_mark: Mark) -> None:
        """Replace the top state with a mapping whose first key is *key*."""
        self.replace(MappingState(column, first_key=key, key_mark=key_mark))

    # -- Shared lookahead -----------------------------------------------

    def seek_content(self) -> bool:
        """Skip whitespace and line breaks up to the next content character.

        Returns False after pushing a comment state; the caller returns and
        is stepped again once the comment has been consumed.
        """
        reader = self.reader
        tabbed = False
        while True:
            ch = reader.peek()
            if ch == " ":
                reader.advance()
            elif ch == "\t":
                tabbed = tabbed or reader.at_indentation
                reader.advance()
            elif ch == "\n":
                tabbed = False
                reader.advance()
            elif ch == "#":
                self.push_comment()
                return False
            else:
                if tabbed and ch is not None and reader.at_indentation:
                    raise YamlIndentationError(
                        "tab characters must not be used for indentation", reader.position()
                    )
                return True

    def at_document_marker(self, marker: str | None = None) -> bool:
        """True at a ``---`` or ``...`` line start (or the given one only)."""
        reader = self.reader
        if reader.column != 0:
            return False
        markers = (marker,) if marker else (DOCUMENT_START, DOCUMENT_END)
        return any(reader.startswith(m) for m in markers) and is_blank_or_end(reader.peek(3))

    # -- Document boundaries --------------------------------------------

    def _next_document(self) -> bool:
        """Handle stream-level content; return False once input is exhausted."""
        if not self.seek_content():
            return True
        reader = self.reader
        if reader.eof:
            return False
        if self.at_document_marker(DOCUMENT_END):
            reader.forward(len(DOCUMENT_END))
            spaced = reader.skip_spaces()
            ch = reader.peek()
            if not (ch is None or ch == "\n" or (ch == "#" and spaced)):
                raise UnexpectedCharacter("unexpected content after document end marker", reader.position())
            self._after_document = False
            return True
        if self.at_document_marker(DOCUMENT_START):
            reader.forward(len(DOCUMENT_START))
            self._after_document = False
            self.root_column = 0
            self.push(Initial(ROOT_INDENT))
            return True
        if self._after_document:
            if reader.column < self.root_column:
                raise YamlIndentationError(
                    f"expected content at column {self.root_column + 1}", reader.position()
                )
            raise UnexpectedCharacter(
                "expected a document marker or end of input", reader.position()
            )
        self.root_column = 0
        self.push(Initial(ROOT_INDENT))
        return True
