"""aplan-jax public API."""

from .equality import equal
from .errors import AplanError, LexError, ParseError, SerializeError
from .json_interop import aplan_to_json, from_json_data, json_to_aplan, to_json_data
from .lexer import Token, tokenize
from .parser import DEFAULT_MAX_DEPTH, parse, parse_tokens, rows_to_matrix
from .serializer import SerializeOptions, format_number, serialize
from .values import (
    ZILDE,
    Complex,
    Matrix,
    Namespace,
    Number,
    Text,
    Value,
    ValueInfo,
    ValueKind,
    Vector,
    Zilde,
    item_at,
    value_info,
)

try:
    from .arrays import from_jax_array, to_jax_array
except ModuleNotFoundError as exc:
    if exc.name and exc.name.startswith("jax"):
        _jax_import_error = exc

        def to_jax_array(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for to_jax_array(). Install runtime deps first."
            ) from _jax_import_error

        def from_jax_array(*_args, **_kwargs):
            raise ModuleNotFoundError(
                "jax is required for from_jax_array(). Install runtime deps first."
            ) from _jax_import_error

    else:
        raise

__all__ = [
    "parse",
    "parse_tokens",
    "serialize",
    "equal",
    "tokenize",
    "Token",
    "rows_to_matrix",
    "format_number",
    "SerializeOptions",
    "DEFAULT_MAX_DEPTH",
    "Value",
    "Number",
    "Complex",
    "Text",
    "Vector",
    "Matrix",
    "Namespace",
    "Zilde",
    "ZILDE",
    "ValueKind",
    "ValueInfo",
    "value_info",
    "item_at",
    "to_json_data",
    "from_json_data",
    "aplan_to_json",
    "json_to_aplan",
    "to_jax_array",
    "from_jax_array",
    "AplanError",
    "LexError",
    "ParseError",
    "SerializeError",
]
