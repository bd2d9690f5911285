"""easyaml: a single-pass, stack-based parser for block-style YAML."""

from .document import Document, Multiple, Single
from .errors import (
    DuplicateMappingKey,
    InvalidEscapeSequence,
    ParseError,
    UnexpectedCharacter,
    UnexpectedEndOfInput,
    UnterminatedScalar,
    YamlIndentationError,
)
from .parser import Parser, parse
from .reader import Mark
from .values import Mapping, Null, Scalar, Sequence, Value

__all__ = [
    "parse",
    "Parser",
    "Document",
    "Single",
    "Multiple",
    "Null",
    "Scalar",
    "Sequence",
    "Mapping",
    "Value",
    "Mark",
    "ParseError",
    "UnexpectedCharacter",
    "UnterminatedScalar",
    "YamlIndentationError",
    "DuplicateMappingKey",
    "InvalidEscapeSequence",
    "UnexpectedEndOfInput",
]
