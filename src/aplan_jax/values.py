"""Value model and introspection helpers for Array Notation data."""

from __future__ import annotations

import math
import numbers
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Union

from .lexer import is_valid_name


@dataclass(frozen=True)
class Number:
    """Real scalar. May hold NaN or infinity, which never serialize."""

    value: float

    def __post_init__(self) -> None:
        if not isinstance(self.value, numbers.Real):
            raise TypeError(f"Number requires a real value, got {type(self.value).__name__}")
        object.__setattr__(self, "value", float(self.value))


@dataclass(frozen=True)
class Complex:
    re: float
    im: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "re", float(self.re))
        object.__setattr__(self, "im", float(self.im))

    @classmethod
    def from_complex(cls, value: complex) -> "Complex":
        return cls(value.real, value.imag)

    def to_complex(self) -> complex:
        return complex(self.re, self.im)


@dataclass(frozen=True)
class Text:
    """Character data; character scalars and character vectors share this type."""

    value: str


@dataclass(frozen=True)
class Zilde:
    """The empty numeric vector. Equal to any empty Vector, but rendered as its own glyph."""


ZILDE = Zilde()


@dataclass(frozen=True)
class Vector:
    items: tuple["Value", ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)


@dataclass(frozen=True)
class Matrix:
    """Rectangular array stored as a shape plus row-major cells."""

    shape: tuple[int, ...]
    cells: tuple["Value", ...]

    def __post_init__(self) -> None:
        shape = tuple(int(d) for d in self.shape)
        cells = tuple(self.cells)
        if not shape:
            raise ValueError("Matrix rank must be at least 1")
        if any(d < 0 for d in shape):
            raise ValueError(f"Matrix dimensions must be non-negative, got {shape}")
        if len(cells) != math.prod(shape):
            raise ValueError(f"Matrix of shape {shape} needs {math.prod(shape)} cells, got {len(cells)}")
        object.__setattr__(self, "shape", shape)
        object.__setattr__(self, "cells", cells)

    @property
    def rank(self) -> int:
        return len(self.shape)

    def rows(self) -> list[tuple["Value", ...]]:
        """Major cells as contiguous slices of the ravel."""
        size = math.prod(self.shape[1:])
        return [self.cells[i * size : (i + 1) * size] for i in range(self.shape[0])]


@dataclass(frozen=True)
class Namespace:
    """Ordered name/value pairs with unique identifier keys."""

    entries: tuple[tuple[str, "Value"], ...] = ()

    def __post_init__(self) -> None:
        entries = tuple((name, value) for name, value in self.entries)
        seen: set[str] = set()
        for name, _ in entries:
            if not isinstance(name, str) or not is_valid_name(name):
                raise ValueError(f"Invalid namespace name {name!r}")
            if name in seen:
                raise ValueError(f"Duplicate namespace name {name!r}")
            seen.add(name)
        object.__setattr__(self, "entries", entries)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, "Value"]) -> "Namespace":
        return cls(tuple(mapping.items()))

    def keys(self) -> list[str]:
        return [name for name, _ in self.entries]

    def as_dict(self) -> dict[str, "Value"]:
        return dict(self.entries)

    def __getitem__(self, name: str) -> "Value":
        for key, value in self.entries:
            if key == name:
                return value
        raise KeyError(name)

    def __contains__(self, name: object) -> bool:
        return any(key == name for key, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


Value = Union[Number, Complex, Text, Vector, Matrix, Namespace, Zilde]

_VALUE_TYPES = (Number, Complex, Text, Vector, Matrix, Namespace, Zilde)
_SCALAR_TYPES = (Number, Complex, Text)


class ValueKind(str, Enum):
    NUMBER = "number"
    COMPLEX = "complex"
    TEXT = "text"
    VECTOR = "vector"
    MATRIX = "matrix"
    NAMESPACE = "namespace"
    ZILDE = "zilde"


@dataclass(frozen=True)
class ValueInfo:
    kind: ValueKind
    shape: tuple[int, ...]
    rank: int
    depth: int


_KINDS = {
    Number: ValueKind.NUMBER,
    Complex: ValueKind.COMPLEX,
    Text: ValueKind.TEXT,
    Vector: ValueKind.VECTOR,
    Matrix: ValueKind.MATRIX,
    Namespace: ValueKind.NAMESPACE,
    Zilde: ValueKind.ZILDE,
}


def is_value(value: object) -> bool:
    return isinstance(value, _VALUE_TYPES)


def is_scalar(value: object) -> bool:
    return isinstance(value, _SCALAR_TYPES)


def kind_of(value: object) -> ValueKind:
    kind = _KINDS.get(type(value))
    if kind is None:
        raise TypeError(f"Unsupported value type {type(value).__name__}")
    return kind


def shape_of(value: object) -> tuple[int, ...]:
    if isinstance(value, Zilde):
        return (0,)
    if isinstance(value, Vector):
        return (len(value.items),)
    if isinstance(value, Matrix):
        return value.shape
    kind_of(value)
    return ()


def depth_of(value: object) -> int:
    if isinstance(value, Zilde):
        return 1
    if isinstance(value, Vector):
        if not value.items:
            return 1
        return 1 + max(depth_of(item) for item in value.items)
    if isinstance(value, Matrix):
        if not value.cells:
            return 1
        return 1 + max(depth_of(cell) for cell in value.cells)
    kind_of(value)
    return 0


def value_info(value: object) -> ValueInfo:
    kind = kind_of(value)
    shape = shape_of(value)
    return ValueInfo(kind=kind, shape=shape, rank=len(shape), depth=depth_of(value))


def validate_value(value: object, *, where: str = "value") -> None:
    if isinstance(value, Vector):
        for idx, item in enumerate(value.items):
            validate_value(item, where=f"{where}[{idx}]")
        return
    if isinstance(value, Matrix):
        for idx, cell in enumerate(value.cells):
            validate_value(cell, where=f"{where}.cells[{idx}]")
        return
    if isinstance(value, Namespace):
        for name, item in value.entries:
            validate_value(item, where=f"{where}.{name}")
        return
    if is_value(value):
        return
    raise TypeError(f"{where} has unsupported type {type(value).__name__}")


def item_at(value: Value, index: int | Sequence[int]) -> Value:
    """Select an element by position.

    A matrix takes exactly one index per axis. Vectors are walked one index per
    nesting level, so ``item_at(v, (1, 0))`` reads the first item of the second item.
    """
    indices = (index,) if isinstance(index, int) else tuple(index)

    if isinstance(value, Zilde):
        raise IndexError("Cannot index into zilde (empty array)")

    if isinstance(value, Matrix):
        if len(indices) != value.rank:
            raise IndexError(f"Index rank {len(indices)} does not match array rank {value.rank}")
        offset = 0
        for axis, (i, dim) in enumerate(zip(indices, value.shape)):
            if i < 0 or i >= dim:
                raise IndexError(f"Index {i} out of bounds for axis {axis} with size {dim}")
            offset = offset * dim + i
        return value.cells[offset]

    if isinstance(value, Vector):
        current: Value = value
        for depth, i in enumerate(indices):
            if not isinstance(current, Vector):
                raise IndexError(f"Cannot index deeper: reached {kind_of(current).value} at depth {depth}")
            if i < 0 or i >= len(current.items):
                raise IndexError(f"Index {i} out of bounds for vector of length {len(current.items)}")
            current = current.items[i]
        return current

    raise TypeError(f"Cannot index into {kind_of(value).value} value")
