"""Recursive-descent parser for APL Array Notation."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from .errors import ParseError
from .lexer import Token, tokenize
from .values import ZILDE, Complex, Matrix, Namespace, Number, Text, Value, Vector, Zilde, shape_of

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 200

_VALUE_START = ("NUMBER", "STRING", "ZILDE", "LPAREN", "LBRACK")
_STRAND_KINDS = {"NUMBER", "STRING"}


@dataclass
class _Parser:
    tokens: list[Token]
    max_depth: int = DEFAULT_MAX_DEPTH
    index: int = 0
    depth: int = 0

    def parse_document(self) -> Value:
        value = self._parse_value()
        tok = self._peek()
        if tok.kind != "EOF":
            self._error(tok, message="Unexpected token after value", expected=("EOF",))
        return value

    def _peek(self) -> Token:
        return self.tokens[self.index]

    def _peek_next(self) -> Token:
        if self.index + 1 < len(self.tokens):
            return self.tokens[self.index + 1]
        return self.tokens[-1]

    def _advance(self) -> Token:
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def _expect(self, kind: str, *, message: str | None = None) -> Token:
        tok = self._peek()
        if tok.kind != kind:
            self._error(tok, message=message, expected=(kind,))
        return self._advance()

    def _match(self, kind: str) -> bool:
        if self._peek().kind == kind:
            self._advance()
            return True
        return False

    def _error(self, tok: Token | None = None, *, message: str | None = None, expected: tuple[str, ...] = ()) -> None:
        token = tok if tok is not None else self._peek()
        detail = message if message is not None else "Unexpected token"
        normalized_expected = tuple(dict.fromkeys(expected))
        if token.kind == "EOF":
            found = "EOF"
        elif token.text:
            found = f"{token.kind}({token.text})"
        else:
            found = token.kind
        raise ParseError(detail, token.pos, token.end, expected=normalized_expected, found=found)

    def _consume_separators(self) -> bool:
        consumed = False
        while self._peek().kind == "SEP":
            self._advance()
            consumed = True
        return consumed

    def _enter(self, tok: Token) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            self._error(tok, message=f"Nesting depth exceeds limit of {self.max_depth}")

    def _leave(self) -> None:
        self.depth -= 1

    def _parse_value(self) -> Value:
        self._consume_separators()
        tok = self._peek()

        if tok.kind in _STRAND_KINDS:
            return self._parse_strand()

        if tok.kind == "ZILDE":
            self._advance()
            return ZILDE

        if tok.kind == "LPAREN":
            return self._parse_parenthesized()

        if tok.kind == "LBRACK":
            return self._parse_bracketed()

        self._error(tok, message="Value expected", expected=_VALUE_START)
        raise AssertionError("unreachable")

    def _parse_strand(self) -> Value:
        items: list[Value] = []
        while self._peek().kind in _STRAND_KINDS:
            items.append(_scalar_from_token(self._advance()))
        if len(items) == 1:
            return items[0]
        return Vector(tuple(items))

    def _parse_parenthesized(self) -> Value:
        open_tok = self._expect("LPAREN")
        self._enter(open_tok)

        saw_separator = self._consume_separators()
        if self._match("RPAREN"):
            result: Value = Namespace()
        elif self._peek().kind == "NAME" and self._peek_next().kind == "COLON":
            result = self._parse_namespace_body()
        else:
            result = self._parse_vector_body(saw_separator)

        self._leave()
        return result

    def _parse_namespace_body(self) -> Namespace:
        entries: dict[str, Value] = {}
        while True:
            self._consume_separators()
            if self._match("RPAREN"):
                break
            name_tok = self._peek()
            if name_tok.kind != "NAME":
                self._error(name_tok, message="Name expected in namespace", expected=("NAME", "RPAREN"))
            self._advance()
            self._expect("COLON", message=f"Colon expected after name {name_tok.text!r}")
            value = self._parse_value()
            if name_tok.text in entries:
                logger.debug("Duplicate namespace name %r at index %d; keeping the later value", name_tok.text, name_tok.pos)
            entries[name_tok.text] = value
        return Namespace(tuple(entries.items()))

    def _parse_vector_body(self, saw_separator: bool) -> Value:
        items: list[Value] = []
        while self._peek().kind not in {"RPAREN", "EOF"}:
            items.append(self._parse_value())
            if self._consume_separators():
                saw_separator = True
        self._expect("RPAREN", message="Missing closing parenthesis")

        # A lone value without any separator is plain grouping.
        if not saw_separator and len(items) == 1:
            return items[0]
        return Vector(tuple(items))

    def _parse_bracketed(self) -> Matrix:
        open_tok = self._expect("LBRACK")
        self._enter(open_tok)

        rows: list[Value] = []
        self._consume_separators()
        while self._peek().kind not in {"RBRACK", "EOF"}:
            rows.append(self._parse_value())
            self._consume_separators()
        self._expect("RBRACK", message="Missing closing bracket")

        self._leave()
        return rows_to_matrix(rows)


def _scalar_from_token(tok: Token) -> Value:
    if tok.kind == "STRING":
        assert isinstance(tok.value, str)
        return Text(tok.value)
    if isinstance(tok.value, complex):
        return Complex.from_complex(tok.value)
    assert isinstance(tok.value, float)
    return Number(tok.value)


def _ravel(value: Value) -> list[Value]:
    if isinstance(value, Zilde):
        return []
    if isinstance(value, Vector):
        return list(value.items)
    if isinstance(value, Matrix):
        return list(value.cells)
    return [value]


def rows_to_matrix(rows: list[Value]) -> Matrix:
    """Unify major cells into one matrix, zero-padding short rows.

    Scalars count as one-element vectors. Each axis takes the largest extent
    found among the rows; axes a row lacks count as extent 1. Rows are padded at
    the end of their ravel with the number 0 regardless of their content.
    """
    if not rows:
        return Matrix((0,), ())

    row_shapes = [shape_of(row) for row in rows]
    max_rank = max(1, max(len(shape) for shape in row_shapes))
    cell_shape: list[int] = []
    for axis in range(max_rank):
        cell_shape.append(max(shape[axis] if axis < len(shape) else 1 for shape in row_shapes))

    cell_size = math.prod(cell_shape)
    cells: list[Value] = []
    for row in rows:
        flat = _ravel(row)
        flat.extend(Number(0.0) for _ in range(cell_size - len(flat)))
        cells.extend(flat)

    return Matrix((len(rows), *cell_shape), tuple(cells))


def parse_tokens(tokens: list[Token], *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    parser = _Parser(tokens=tokens, max_depth=max_depth)
    return parser.parse_document()


def parse(source: str, *, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    tokens = tokenize(source)
    logger.debug("Tokenized %d characters into %d tokens", len(source), len(tokens))
    return parse_tokens(tokens, max_depth=max_depth)
