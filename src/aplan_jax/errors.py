"""Structured error types for lexing, parsing and serialization."""

from __future__ import annotations


class AplanError(Exception):
    """Base class for structured aplan-jax errors."""


class LexError(AplanError, SyntaxError):
    """Raised when the source text contains a character or literal that cannot be tokenized."""

    def __init__(self, message: str, pos: int, char: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.pos = pos
        self.char = char

    def __str__(self) -> str:
        return f"{self.message} at index {self.pos}"


class ParseError(AplanError, SyntaxError):
    def __init__(
        self,
        message: str,
        start: int,
        end: int,
        expected: tuple[str, ...] = (),
        found: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.start = start
        self.end = end
        self.expected = expected
        self.found = found

    def __str__(self) -> str:
        expected_text = ""
        if self.expected:
            expected_text = f"; expected {', '.join(self.expected)}"
        found_text = ""
        if self.found is not None:
            found_text = f"; found {self.found}"
        return f"{self.message} at span [{self.start}, {self.end}){expected_text}{found_text}"


class SerializeError(AplanError, ValueError):
    """Value cannot be rendered as Array Notation (non-finite number, foreign object)."""
