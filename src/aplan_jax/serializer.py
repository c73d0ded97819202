"""Canonical Array Notation rendering for value trees."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .errors import SerializeError
from .lexer import DIAMOND, HIGH_MINUS, ZILDE_GLYPH
from .values import Complex, Matrix, Namespace, Number, Text, Value, Vector, Zilde, is_scalar, is_value, kind_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SerializeOptions:
    """Layout policy for `serialize`.

    - `use_separator_glyph`: join elements with ``⋄`` on one line instead of
      one element per indented line.
    - `indent_width`: spaces before each element in the multi-line layout.
    """

    use_separator_glyph: bool = False
    indent_width: int = 1

    def __post_init__(self) -> None:
        if self.indent_width < 0:
            raise ValueError(f"indent_width must be non-negative, got {self.indent_width}")


def format_number(value: float) -> str:
    if not math.isfinite(value):
        raise SerializeError(f"Cannot serialize non-finite number: {value!r}")
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e16:
        text = str(int(value))
    else:
        text = repr(value)
        if "e" in text:
            mantissa, exponent = text.split("e")
            text = f"{mantissa}E{int(exponent)}"
    return text.replace("-", HIGH_MINUS)


def format_complex(value: Complex) -> str:
    return f"{format_number(value.re)}J{format_number(value.im)}"


def format_text(value: str) -> str:
    escaped = value.replace("'", "''")
    return f"'{escaped}'"


class _Serializer:
    def __init__(self, options: SerializeOptions) -> None:
        self.options = options

    def render(self, value: Value) -> str:
        if isinstance(value, Number):
            return format_number(value.value)
        if isinstance(value, Complex):
            return format_complex(value)
        if isinstance(value, Text):
            return format_text(value.value)
        if isinstance(value, Zilde):
            return ZILDE_GLYPH
        if isinstance(value, Vector):
            return self._render_vector(value)
        if isinstance(value, Matrix):
            return self._render_matrix(value)
        if isinstance(value, Namespace):
            return self._render_namespace(value)
        raise SerializeError(f"Cannot serialize value of type {type(value).__name__}")

    def _wrap(self, items: list[str], opener: str, closer: str, *, is_vector: bool = False) -> str:
        if self.options.use_separator_glyph or any("\n" in item for item in items):
            body = f" {DIAMOND} ".join(items)
            if is_vector and len(items) == 1:
                # "(x)" would read back as grouping
                body += f" {DIAMOND}"
            return f"{opener}{body}{closer}"
        indent = " " * self.options.indent_width
        lines = "\n".join(indent + item for item in items)
        return f"{opener}\n{lines}\n{closer}"

    def _render_vector(self, value: Vector) -> str:
        items = value.items
        if not items:
            return ZILDE_GLYPH
        if len(items) > 1 and all(isinstance(item, Number) for item in items):
            return " ".join(format_number(item.value) for item in items)
        return self._wrap([self.render(item) for item in items], "(", ")", is_vector=True)

    def _render_row(self, cells: tuple[Value, ...], cell_shape: tuple[int, ...]) -> str:
        if len(cell_shape) >= 2:
            return self.render(Matrix(cell_shape, cells))
        if not cells:
            return ZILDE_GLYPH
        if all(isinstance(cell, Number) for cell in cells):
            return " ".join(format_number(cell.value) for cell in cells)
        if all(is_scalar(cell) for cell in cells):
            return " ".join(self.render(cell) for cell in cells)
        return self._render_vector(Vector(cells))

    def _render_matrix(self, value: Matrix) -> str:
        if value.shape[0] == 0:
            return "[]"
        cell_shape = value.shape[1:]
        rows = [self._render_row(row, cell_shape) for row in value.rows()]
        return self._wrap(rows, "[", "]")

    def _render_namespace(self, value: Namespace) -> str:
        if not value.entries:
            return "()"
        items = [f"{name}: {self.render(item)}" for name, item in value.entries]
        return self._wrap(items, "(", ")")


def serialize(value: Value, options: SerializeOptions | None = None) -> str:
    opts = options if options is not None else SerializeOptions()
    if is_value(value):
        logger.debug(
            "Serializing %s value (separator glyph: %s, indent: %d)",
            kind_of(value).value,
            opts.use_separator_glyph,
            opts.indent_width,
        )
    return _Serializer(opts).render(value)
