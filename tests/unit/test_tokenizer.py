"""
Tests for the tokenizer in MathEngine.

Covers:
1. Number literals (decimals, leading dot, exponents)
2. Identifiers including the symbol characters
3. Operators, parentheses, commas and unknown characters
4. Positions and END behaviour
"""

import pytest

from CalcCore import MathEngine
from CalcCore import state as S
from CalcCore.MathEngine import TokenKind


def tokenize(text):
    ctx = MathEngine.ParseContext(text, S.create_state(), max_depth=100)
    tokens = []
    while True:
        token = MathEngine.get_next_token(ctx)
        if token.kind == TokenKind.END:
            return tokens
        tokens.append(token)


def kinds(text):
    return [token.kind for token in tokenize(text)]


class TestNumbers:
    """Number literal scanning"""

    @pytest.mark.parametrize("text,expected", [
        ("42", 42.0),
        ("3.14", 3.14),
        (".5", 0.5),
        ("7.", 7.0),
        ("1e3", 1000.0),
        ("2.5E-2", 0.025),
        ("6e+2", 600.0),
    ])
    def test_literal_value(self, text, expected) -> None:
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.NUMBER
        assert tokens[0].number_value == pytest.approx(expected)
        assert tokens[0].text == text

    def test_exponent_without_digits_is_not_consumed(self) -> None:
        tokens = tokenize("1e")
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.IDENTIFIER]
        assert tokens[0].number_value == 1.0
        assert tokens[1].text == "e"

    def test_second_dot_starts_new_number(self) -> None:
        tokens = tokenize("1.2.3")
        assert [t.text for t in tokens] == ["1.2", ".3"]

    def test_lone_dot_is_unknown(self) -> None:
        assert kinds(".") == [TokenKind.UNKNOWN]

    def test_superscript_digit_is_not_a_number(self) -> None:
        assert kinds("2²") == [TokenKind.NUMBER, TokenKind.UNKNOWN]


class TestIdentifiers:
    """Identifier scanning"""

    @pytest.mark.parametrize("text", ["sin", "log10", "_x1", "π", "φ", "√2", "ans"])
    def test_single_identifier(self, text) -> None:
        tokens = tokenize(text)
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.IDENTIFIER
        assert tokens[0].text == text

    def test_function_call_shape(self) -> None:
        assert kinds("atan2(1, 2)") == [
            TokenKind.IDENTIFIER, TokenKind.LEFT_PAREN, TokenKind.NUMBER,
            TokenKind.COMMA, TokenKind.NUMBER, TokenKind.RIGHT_PAREN,
        ]


class TestPunctuation:
    """Operators and single-character tokens"""

    def test_operators(self) -> None:
        tokens = tokenize("+-*/^%")
        assert all(t.kind == TokenKind.OPERATOR for t in tokens)
        assert [t.text for t in tokens] == ["+", "-", "*", "/", "^", "%"]

    def test_unknown_character(self) -> None:
        tokens = tokenize("2 $ 3")
        assert tokens[1].kind == TokenKind.UNKNOWN
        assert tokens[1].text == "$"
        assert tokens[1].position == 2


class TestPositions:
    """Token positions and END"""

    def test_positions_skip_whitespace(self) -> None:
        tokens = tokenize("  12 +  ans")
        assert [t.position for t in tokens] == [2, 5, 8]

    def test_end_is_returned_repeatedly(self) -> None:
        ctx = MathEngine.ParseContext("1", S.create_state(), max_depth=100)
        MathEngine.get_next_token(ctx)
        for _ in range(3):
            token = MathEngine.get_next_token(ctx)
            assert token.kind == TokenKind.END
            assert token.position == 1

    def test_empty_and_blank_input(self) -> None:
        assert tokenize("") == []
        assert tokenize("   \t ") == []
