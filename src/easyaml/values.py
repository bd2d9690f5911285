"""Value types for parsed YAML."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


class _Null:
    """Singleton for absent content (empty document, empty value)."""

    _instance: "_Null | None" = None

    def __new__(cls) -> "_Null":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Null"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> str:
        return "Null"

    def to_python(self) -> None:
        return None


Null = _Null()


@dataclass(frozen=True)
class Scalar:
    text: str

    def __str__(self) -> str:
        return self.text

    def to_python(self) -> str:
        return self.text


@dataclass(frozen=True)
class Sequence:
    items: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True, eq=False)
class Mapping:
    """Ordered key/value pairs with keys of any shape.

    Iteration follows insertion order; equality does not, so two mappings
    holding the same pairs are equal whatever order they were written in.
    Key lookup goes through the same ``__eq__``/``__hash__`` used to reject
    duplicates, so an equal key always finds its entry.
    """

    pairs: tuple[tuple["Value", "Value"], ...] = ()
    _index: dict["Value", int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        pairs = tuple((key, value) for key, value in self.pairs)
        index: dict[Value, int] = {}
        for position, (key, _) in enumerate(pairs):
            if key in index:
                raise ValueError(f"duplicate mapping key: {key!r}")
            index[key] = position
        object.__setattr__(self, "pairs", pairs)
        object.__setattr__(self, "_index", index)

    # -- Equality -------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        if len(self.pairs) != len(other.pairs):
            return False
        return all(key in other and other[key] == value for key, value in self.pairs)

    def __hash__(self) -> int:
        return hash(frozenset(self.pairs))

    # -- Read access ----------------------------------------------------

    def __contains__(self, key: object) -> bool:
        try:
            return key in self._index
        except TypeError:
            return False

    def __getitem__(self, key: "Value") -> "Value":
        return self.pairs[self._index[key]][1]

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.pairs)

    def get(self, key: "Value", default: Any = None) -> Any:
        if key in self:
            return self[key]
        return default

    def keys(self) -> list["Value"]:
        return [key for key, _ in self.pairs]

    def values(self) -> list["Value"]:
        return [value for _, value in self.pairs]

    def items(self) -> list[tuple["Value", "Value"]]:
        return list(self.pairs)

    def to_python(self) -> dict[Any, Any]:
        return {_hashable(key): value.to_python() for key, value in self.pairs}


Value = Union[Scalar, Sequence, Mapping, _Null]


def _hashable(value: Value) -> Any:
    """Plain-Python form of a mapping key; collections become tuples."""
    if isinstance(value, Sequence):
        return tuple(_hashable(item) for item in value.items)
    if isinstance(value, Mapping):
        return tuple((_hashable(k), _hashable(v)) for k, v in value.pairs)
    return value.to_python()
