"""Translation between Array Notation values and JSON documents.

Tagged objects keep the mapping invertible:

- ``{"_ns": true, ...}`` is a namespace (any untagged object also reads as one),
- ``{"_matrix": rows, "_shape": [...]}`` is a matrix,
- ``{"_complex": [re, im]}`` is a complex scalar,
- ``[]`` is zilde.

The namespace tag is checked first, so ``_complex`` and ``_matrix`` stay usable as
namespace names. ``_ns`` itself is reserved and cannot be a name on export.
"""

from __future__ import annotations

import json
import math
from typing import Any

from .errors import SerializeError
from .parser import parse
from .serializer import SerializeOptions, serialize
from .values import ZILDE, Complex, Matrix, Namespace, Number, Text, Value, Vector, Zilde

NAMESPACE_TAG = "_ns"
MATRIX_TAG = "_matrix"
SHAPE_TAG = "_shape"
COMPLEX_TAG = "_complex"


def _number_to_json(value: float) -> int | float:
    if not math.isfinite(value):
        raise SerializeError(f"Cannot represent non-finite number in JSON: {value!r}")
    if value.is_integer():
        return int(value)
    return value


def _nest(cells: list[Any], shape: tuple[int, ...]) -> list[Any]:
    if len(shape) == 1:
        return cells
    size = math.prod(shape[1:])
    return [_nest(cells[i * size : (i + 1) * size], shape[1:]) for i in range(shape[0])]


def to_json_data(value: Value) -> Any:
    if isinstance(value, Number):
        return _number_to_json(value.value)
    if isinstance(value, Complex):
        return {COMPLEX_TAG: [_number_to_json(value.re), _number_to_json(value.im)]}
    if isinstance(value, Text):
        return value.value
    if isinstance(value, Zilde):
        return []
    if isinstance(value, Vector):
        return [to_json_data(item) for item in value.items]
    if isinstance(value, Matrix):
        cells = [to_json_data(cell) for cell in value.cells]
        return {MATRIX_TAG: _nest(cells, value.shape), SHAPE_TAG: list(value.shape)}
    if isinstance(value, Namespace):
        out: dict[str, Any] = {NAMESPACE_TAG: True}
        for name, item in value.entries:
            if name == NAMESPACE_TAG:
                raise SerializeError(f"Namespace name {name!r} is reserved for the JSON namespace tag")
            out[name] = to_json_data(item)
        return out
    raise SerializeError(f"Cannot convert value of type {type(value).__name__} to JSON")


def _infer_shape(rows: list[Any]) -> tuple[int, ...]:
    n_cols = len(rows[0]) if rows and isinstance(rows[0], list) else 1
    return (len(rows), n_cols)


def _ravel_rows(rows: Any, depth: int) -> list[Any]:
    if depth == 0:
        return [rows]
    if not isinstance(rows, list):
        # scalar row in a rank-2 matrix
        return [rows]
    out: list[Any] = []
    for row in rows:
        out.extend(_ravel_rows(row, depth - 1))
    return out


def _matrix_from_json(data: dict[str, Any]) -> Matrix:
    rows = data[MATRIX_TAG]
    if not isinstance(rows, list):
        raise ValueError(f"{MATRIX_TAG!r} must hold a list of rows")
    if SHAPE_TAG in data:
        shape = tuple(int(d) for d in data[SHAPE_TAG])
    else:
        shape = _infer_shape(rows)
    cells = [from_json_data(cell) for cell in _ravel_rows(rows, len(shape))]
    return Matrix(shape, tuple(cells))


def _complex_from_json(payload: Any) -> Complex:
    if (
        not isinstance(payload, list)
        or len(payload) != 2
        or not all(isinstance(part, (int, float)) and not isinstance(part, bool) for part in payload)
    ):
        raise ValueError(f"{COMPLEX_TAG!r} must hold [re, im], got {payload!r}")
    return Complex(payload[0], payload[1])


def _namespace_from_json(data: dict[str, Any], *, tagged: bool) -> Namespace:
    entries = tuple(
        (name, from_json_data(item)) for name, item in data.items() if not (tagged and name == NAMESPACE_TAG)
    )
    return Namespace(entries)


def from_json_data(data: Any) -> Value:
    if data is None:
        return ZILDE
    if isinstance(data, (bool, int, float)):
        try:
            return Number(data)
        except OverflowError as exc:
            raise ValueError(f"JSON number is too large for a float: {str(data)[:20]}...") from exc
    if isinstance(data, str):
        return Text(data)
    if isinstance(data, list):
        if not data:
            return ZILDE
        return Vector(tuple(from_json_data(item) for item in data))
    if isinstance(data, dict):
        # the namespace tag wins, so names like "_complex" stay plain entries
        if data.get(NAMESPACE_TAG) is True:
            return _namespace_from_json(data, tagged=True)
        if COMPLEX_TAG in data:
            return _complex_from_json(data[COMPLEX_TAG])
        if MATRIX_TAG in data:
            return _matrix_from_json(data)
        return _namespace_from_json(data, tagged=False)
    raise TypeError(f"Unsupported JSON value of type {type(data).__name__}")


def aplan_to_json(source: str, *, indent: int | None = 2) -> str:
    return json.dumps(to_json_data(parse(source)), indent=indent, ensure_ascii=False)


def json_to_aplan(source: str, options: SerializeOptions | None = None) -> str:
    opts = options if options is not None else SerializeOptions(use_separator_glyph=True)
    try:
        return serialize(from_json_data(json.loads(source)), opts)
    except RecursionError as exc:
        raise ValueError("JSON document is nested too deeply") from exc
