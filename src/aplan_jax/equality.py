"""Structural equality used to check parse/serialize round trips."""

from __future__ import annotations

import math

from .values import Complex, Matrix, Namespace, Number, Text, Value, Vector, Zilde


def _same_float(a: float, b: float) -> bool:
    if math.isnan(a) and math.isnan(b):
        return True
    return a == b


def _is_empty_vector(value: Value) -> bool:
    return isinstance(value, Zilde) or (isinstance(value, Vector) and not value.items)


def equal(a: Value, b: Value) -> bool:
    """Deep comparison of two value trees.

    Zilde matches any empty vector, NaN matches NaN, and namespaces compare
    as unordered mappings.
    """
    if isinstance(a, (Zilde, Vector)) and isinstance(b, (Zilde, Vector)):
        if _is_empty_vector(a) or _is_empty_vector(b):
            return _is_empty_vector(a) and _is_empty_vector(b)
        assert isinstance(a, Vector) and isinstance(b, Vector)
        if len(a.items) != len(b.items):
            return False
        return all(equal(x, y) for x, y in zip(a.items, b.items))

    if type(a) is not type(b):
        return False

    if isinstance(a, Number):
        return _same_float(a.value, b.value)

    if isinstance(a, Complex):
        return _same_float(a.re, b.re) and _same_float(a.im, b.im)

    if isinstance(a, Text):
        return a.value == b.value

    if isinstance(a, Matrix):
        if a.shape != b.shape:
            return False
        return all(equal(x, y) for x, y in zip(a.cells, b.cells))

    if isinstance(a, Namespace):
        left = a.as_dict()
        right = b.as_dict()
        if left.keys() != right.keys():
            return False
        return all(equal(value, right[name]) for name, value in left.items())

    return False
