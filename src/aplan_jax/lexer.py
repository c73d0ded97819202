"""Tokenization for APL Array Notation."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import LexError

HIGH_MINUS = "¯"
DIAMOND = "⋄"
ZILDE_GLYPH = "⍬"


@dataclass(frozen=True)
class Token:
    kind: str
    text: str
    pos: int
    end: int
    value: float | complex | str | None = None


_SINGLE_TOKENS = {
    "(": "LPAREN",
    ")": "RPAREN",
    "[": "LBRACK",
    "]": "RBRACK",
    ":": "COLON",
    ZILDE_GLYPH: "ZILDE",
}

_SEPARATORS = {DIAMOND, "\n", "\r", "\x85"}
_BLANKS = {" ", "\t"}
_DIGITS = set("0123456789")
_NAME_GLYPHS = set("_∆⍙")


def is_name_start(ch: str) -> bool:
    if ("A" <= ch <= "Z") or ("a" <= ch <= "z") or ch in _NAME_GLYPHS:
        return True
    # circled capitals and the Latin-1 letter block
    return ("Ⓐ" <= ch <= "Ⓩ") or ("À" <= ch <= "ü")


def is_name_continue(ch: str) -> bool:
    return ch in _DIGITS or is_name_start(ch)


def is_valid_name(name: str) -> bool:
    return bool(name) and is_name_start(name[0]) and all(is_name_continue(ch) for ch in name[1:])


def _scan_digits(source: str, start: int) -> int:
    i = start
    while i < len(source) and source[i] in _DIGITS:
        i += 1
    return i


def _scan_real_component(source: str, start: int, *, allow_sign: bool) -> int:
    i = start
    if allow_sign and i < len(source) and source[i] == HIGH_MINUS:
        i += 1

    int_start = i
    i = _scan_digits(source, i)
    if i == int_start:
        raise LexError(f"Invalid numeric literal {source[start:i + 1]!r}", start)

    if i + 1 < len(source) and source[i] == "." and source[i + 1] in _DIGITS:
        i = _scan_digits(source, i + 1)

    if i < len(source) and source[i] in {"e", "E"}:
        i += 1
        if i < len(source) and source[i] in {HIGH_MINUS, "-", "+"}:
            i += 1
        exp_start = i
        i = _scan_digits(source, i)
        if i == exp_start:
            raise LexError(f"Invalid numeric literal {source[start:i]!r}", start)

    return i


def _real_from_text(text: str) -> float:
    return float(text.replace(HIGH_MINUS, "-"))


def _scan_number(source: str, start: int) -> tuple[float | complex, int]:
    i = _scan_real_component(source, start, allow_sign=True)
    real = _real_from_text(source[start:i])

    if i < len(source) and source[i] in {"J", "j"}:
        imag_start = i + 1
        i = _scan_real_component(source, imag_start, allow_sign=True)
        return complex(real, _real_from_text(source[imag_start:i])), i

    return real, i


def _scan_string(source: str, start: int) -> tuple[str, int]:
    assert source[start] == "'"
    i = start + 1
    out: list[str] = []
    while i < len(source):
        ch = source[i]
        if ch == "'":
            if i + 1 < len(source) and source[i + 1] == "'":
                out.append("'")
                i += 2
                continue
            return "".join(out), i + 1
        out.append(ch)
        i += 1
    raise LexError("Unterminated string literal", start, "'")


def tokenize(source: str) -> list[Token]:
    tokens: list[Token] = []
    i = 0

    while i < len(source):
        ch = source[i]

        if ch in _BLANKS:
            i += 1
            continue

        if ch in _SEPARATORS:
            start = i
            while i < len(source) and (source[i] in _SEPARATORS or source[i] in _BLANKS):
                i += 1
            tokens.append(Token("SEP", DIAMOND, start, i))
            continue

        if ch == "'":
            value, end = _scan_string(source, i)
            tokens.append(Token("STRING", source[i:end], i, end, value))
            i = end
            continue

        if ch in _DIGITS or (ch == HIGH_MINUS and i + 1 < len(source) and source[i + 1] in _DIGITS):
            number, end = _scan_number(source, i)
            tokens.append(Token("NUMBER", source[i:end], i, end, number))
            i = end
            continue

        if ch in _SINGLE_TOKENS:
            tokens.append(Token(_SINGLE_TOKENS[ch], ch, i, i + 1))
            i += 1
            continue

        if is_name_start(ch):
            start = i
            i += 1
            while i < len(source) and is_name_continue(source[i]):
                i += 1
            tokens.append(Token("NAME", source[start:i], start, i))
            continue

        raise LexError(f"Unexpected character {ch!r} (U+{ord(ch):04X})", i, ch)

    tokens.append(Token("EOF", "", len(source), len(source)))
    return tokens
