"""Parse errors, each tagged with the source position where parsing stopped."""

from __future__ import annotations

from .reader import Mark


class ParseError(Exception):
    """Base class for every error reported by :func:`easyaml.parse`."""

    kind = "ParseError"

    def __init__(self, message: str, mark: Mark) -> None:
        super().__init__(message, mark)
        self.message = message
        self.mark = mark

    @property
    def line(self) -> int:
        return self.mark.line

    @property
    def column(self) -> int:
        return self.mark.column

    def __str__(self) -> str:
        return f"{self.message} ({self.mark})"


class UnexpectedCharacter(ParseError):
    kind = "UnexpectedCharacter"


class UnterminatedScalar(ParseError):
    kind = "UnterminatedScalar"


class YamlIndentationError(ParseError):
    kind = "IndentationError"


class DuplicateMappingKey(ParseError):
    kind = "DuplicateMappingKey"


class InvalidEscapeSequence(ParseError):
    kind = "InvalidEscapeSequence"


class UnexpectedEndOfInput(ParseError):
    kind = "UnexpectedEndOfInput"
