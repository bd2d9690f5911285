"""Document: the final output of a parse, one or several YAML documents."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterable, Iterator

from .values import Null, Value


class Document(ABC):
    """A parsed YAML stream.

    ``Single`` holds the value of a stream with one document and ``Multiple``
    the values of a ``---`` separated stream, in order.  Both iterate over
    their values, so consumers never need to care which one they got.
    """

    @classmethod
    def from_values(cls, values: Iterable[Value]) -> "Document":
        values = tuple(values)
        if not values:
            return Single(Null)
        if len(values) == 1:
            return Single(values[0])
        return Multiple(values)

    @property
    @abstractmethod
    def values(self) -> tuple[Value, ...]:
        """The document values, in stream order."""

    def __iter__(self) -> Iterator[Value]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    @abstractmethod
    def to_python(self) -> Any:
        """Plain-Python form of the document."""


@dataclass(frozen=True)
class Single(Document):
    value: Value = Null

    @property
    def values(self) -> tuple[Value, ...]:
        return (self.value,)

    def to_python(self) -> Any:
        return self.value.to_python()


@dataclass(frozen=True)
class Multiple(Document):
    items: tuple[Value, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    @property
    def values(self) -> tuple[Value, ...]:
        return self.items

    def to_python(self) -> list[Any]:
        return [value.to_python() for value in self.items]
