"""Reader layer: bounded-lookahead character access over YAML source text."""

from __future__ import annotations

from dataclasses import dataclass

# Characters visible beyond the cursor.
LOOKAHEAD = 3


class LookaheadError(IndexError):
    """Raised when a caller peeks outside the fixed lookahead window."""


@dataclass(frozen=True)
class Mark:
    """1-based source position used in error reports."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


# ---------------------------------------------------------------------------
# Character classes
# ---------------------------------------------------------------------------

def is_space(ch: str | None) -> bool:
    return ch == " " or ch == "\t"


def is_blank_or_end(ch: str | None) -> bool:
    """True for a space, tab, line break or end of input."""
    return ch is None or ch in (" ", "\t", "\n")


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

class Reader:
    """Forward-only cursor over the input text.

    ``peek(0)`` is the next unconsumed character and ``peek(LOOKAHEAD)`` the
    furthest one a caller may inspect.  Line breaks are normalised to ``\\n``
    up front, so every consumer deals with a single break character.
    """

    def __init__(self, text: str) -> None:
        text = text.replace("\r\n", "\n").replace("\r", "\n")
        if text.startswith("\ufeff"):
            text = text[1:]
        self._text = text
        self._pos = 0
        self.line = 0
        self.column = 0
        # Only whitespace consumed on the current line so far
        self.at_indentation = True

    def __len__(self) -> int:
        return len(self._text)

    @property
    def eof(self) -> bool:
        return self._pos >= len(self._text)

    def peek(self, k: int = 0) -> str | None:
        if not 0 <= k <= LOOKAHEAD:
            raise LookaheadError(f"peek({k}) is outside the {LOOKAHEAD}-character window")
        index = self._pos + k
        if index < len(self._text):
            return self._text[index]
        return None

    def startswith(self, prefix: str) -> bool:
        """True if the upcoming characters spell *prefix* (within the window)."""
        return all(self.peek(i) == ch for i, ch in enumerate(prefix))

    def advance(self) -> str | None:
        if self._pos >= len(self._text):
            return None
        ch = self._text[self._pos]
        self._pos += 1
        if ch == "\n":
            self.line += 1
            self.column = 0
            self.at_indentation = True
        else:
            self.column += 1
            if ch not in (" ", "\t"):
                self.at_indentation = False
        return ch

    def forward(self, n: int) -> None:
        for _ in range(n):
            self.advance()

    def skip_spaces(self) -> bool:
        """Consume spaces and tabs; return True if any were consumed."""
        skipped = False
        while is_space(self.peek()):
            self.advance()
            skipped = True
        return skipped

    def position(self) -> Mark:
        return Mark(self.line + 1, self.column + 1)
