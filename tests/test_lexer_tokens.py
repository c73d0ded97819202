from __future__ import annotations

import unittest

from aplan_jax.errors import AplanError, LexError
from aplan_jax.lexer import is_valid_name, tokenize


class LexerTokenTests(unittest.TestCase):
    def _tokens(self, source: str, *, with_spans: bool = False):
        if with_spans:
            return [(tok.kind, tok.text, tok.pos, tok.end) for tok in tokenize(source) if tok.kind != "EOF"]
        return [(tok.kind, tok.text) for tok in tokenize(source) if tok.kind != "EOF"]

    def test_token_golden_namespace_with_spans(self) -> None:
        tokens = self._tokens("(x: ¯1.5E3 ⋄ y: 'a''b')", with_spans=True)
        self.assertEqual(
            tokens,
            [
                ("LPAREN", "(", 0, 1),
                ("NAME", "x", 1, 2),
                ("COLON", ":", 2, 3),
                ("NUMBER", "¯1.5E3", 4, 10),
                ("SEP", "⋄", 11, 13),
                ("NAME", "y", 13, 14),
                ("COLON", ":", 14, 15),
                ("STRING", "'a''b'", 16, 22),
                ("RPAREN", ")", 22, 23),
            ],
        )

    def test_eof_token_closes_every_stream(self) -> None:
        tokens = tokenize("")
        self.assertEqual([(tok.kind, tok.pos, tok.end) for tok in tokens], [("EOF", 0, 0)])
        self.assertEqual(tokenize("1 2")[-1].kind, "EOF")

    def test_brackets_zilde_and_blanks(self) -> None:
        self.assertEqual(
            self._tokens("\t[ ⍬ ]\t"),
            [("LBRACK", "["), ("ZILDE", "⍬"), ("RBRACK", "]")],
        )

    def test_separator_runs_collapse_to_one_token(self) -> None:
        cases = ("1\n2", "1⋄2", "1\r\n2", "1\x852", "1 \n\n ⋄ \t\r\n 2", "1⋄⋄⋄2")
        for source in cases:
            with self.subTest(source=source):
                kinds = [kind for kind, _ in self._tokens(source)]
                self.assertEqual(kinds, ["NUMBER", "SEP", "NUMBER"])

    def test_blanks_never_produce_tokens(self) -> None:
        self.assertEqual(self._tokens("   \t  "), [])
        self.assertEqual([kind for kind, _ in self._tokens("1 \t 2")], ["NUMBER", "NUMBER"])

    def test_numeric_literal_payloads(self) -> None:
        cases = {
            "42": 42.0,
            "0": 0.0,
            "¯5": -5.0,
            "3.14": 3.14,
            "1E5": 100000.0,
            "2.5E¯3": 0.0025,
            "1e-2": 0.01,
            "1E+2": 100.0,
            "3J4": complex(3, 4),
            "¯2J¯3": complex(-2, -3),
            "1.5j2E1": complex(1.5, 20.0),
            "0J1e¯1": complex(0, 0.1),
        }
        for literal, expected in cases.items():
            with self.subTest(literal=literal):
                tokens = tokenize(literal)
                self.assertEqual(len(tokens), 2)
                self.assertEqual(tokens[0].kind, "NUMBER")
                self.assertEqual(tokens[0].text, literal)
                self.assertEqual(tokens[0].value, expected)
                self.assertIs(type(tokens[0].value), type(expected))

    def test_strand_of_numbers_is_separate_tokens(self) -> None:
        tokens = tokenize("1 ¯2 3.5")
        self.assertEqual([tok.value for tok in tokens[:-1]], [1.0, -2.0, 3.5])

    def test_string_literals_decode_doubled_quotes(self) -> None:
        cases = {
            "'hello'": "hello",
            "''": "",
            "'it''s'": "it's",
            "'say ''hi'''": "say 'hi'",
            "'⋄ ⍬ (x: 1)'": "⋄ ⍬ (x: 1)",
            "'line\nbreak'": "line\nbreak",
        }
        for literal, expected in cases.items():
            with self.subTest(literal=literal):
                tok = tokenize(literal)[0]
                self.assertEqual(tok.kind, "STRING")
                self.assertEqual(tok.value, expected)

    def test_names_cover_apl_and_latin_letters(self) -> None:
        tokens = self._tokens("abc _x ∆delta ⍙q Ⓐb café Zz9")
        self.assertEqual(
            tokens,
            [
                ("NAME", "abc"),
                ("NAME", "_x"),
                ("NAME", "∆delta"),
                ("NAME", "⍙q"),
                ("NAME", "Ⓐb"),
                ("NAME", "café"),
                ("NAME", "Zz9"),
            ],
        )

    def test_is_valid_name(self) -> None:
        for name in ("x", "_", "∆1", "Ünter", "a1b2"):
            with self.subTest(name=name):
                self.assertTrue(is_valid_name(name))
        for name in ("", "1x", "a b", "x-y", "⋄"):
            with self.subTest(name=name):
                self.assertFalse(is_valid_name(name))

    def test_unterminated_string_is_lex_error(self) -> None:
        with self.assertRaises(LexError) as cm:
            tokenize("1 'abc")
        err = cm.exception
        self.assertEqual(err.pos, 2)
        self.assertIn("Unterminated string literal", str(err))

    def test_unexpected_character_reports_char_and_offset(self) -> None:
        with self.assertRaises(LexError) as cm:
            tokenize("1 + 2")
        err = cm.exception
        self.assertEqual(err.char, "+")
        self.assertEqual(err.pos, 2)
        self.assertIn("U+002B", str(err))

    def test_malformed_numbers_are_lex_errors(self) -> None:
        for source in ("1E", "1E¯", "3J", "3J¯", "1.", "-1", ".5", "¯"):
            with self.subTest(source=source):
                with self.assertRaises(LexError):
                    tokenize(source)

    def test_lex_error_is_syntax_error_and_aplan_error(self) -> None:
        with self.assertRaises(SyntaxError):
            tokenize("{")
        with self.assertRaises(AplanError):
            tokenize("{")


if __name__ == "__main__":
    unittest.main()
