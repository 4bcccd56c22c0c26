"""
Tests for error kinds, messages and the arithmetic-to-parse mapping.
"""

import pytest

from CalcCore import error as E
from CalcCore.error import ErrorKind, ParseErrorKind


class TestErrorString:
    """error_string"""

    def test_success(self) -> None:
        assert E.error_string(None) == "Success"

    @pytest.mark.parametrize("kind", list(ErrorKind) + list(ParseErrorKind))
    def test_every_kind_has_a_message(self, kind) -> None:
        message = E.error_string(kind)
        assert message
        assert message != "Unknown error"

    def test_code_prefixes(self) -> None:
        assert all(kind.value.startswith("2") for kind in ErrorKind)
        assert all(kind.value.startswith("3") for kind in ParseErrorKind)


class TestParseKindFor:
    """Mapping of library errors onto the evaluator's error kinds"""

    @pytest.mark.parametrize("kind,expected", [
        (ErrorKind.DIVISION_BY_ZERO, ParseErrorKind.DIVISION_BY_ZERO),
        (ErrorKind.DOMAIN_ERROR, ParseErrorKind.DOMAIN_ERROR),
        (ErrorKind.OVERFLOW, ParseErrorKind.DOMAIN_ERROR),
        (ErrorKind.UNDERFLOW, ParseErrorKind.DOMAIN_ERROR),
        (ErrorKind.INVALID_INPUT, ParseErrorKind.INVALID_FUNCTION),
        (ErrorKind.MEMORY_ERROR, ParseErrorKind.INVALID_FUNCTION),
    ])
    def test_mapping(self, kind, expected) -> None:
        assert E.parse_kind_for(kind) == expected


class TestExceptions:
    """ParseError / CalculationError"""

    def test_parse_error(self) -> None:
        err = E.ParseError(ParseErrorKind.MISMATCHED_PARENTHESES, position=4)
        assert isinstance(err, E.MathError)
        assert err.kind == ParseErrorKind.MISMATCHED_PARENTHESES
        assert err.code == "3002"
        assert err.position == 4
        assert err.message == "Mismatched parentheses"

    def test_detail_overrides_message(self) -> None:
        err = E.CalculationError(ErrorKind.OVERFLOW, detail="too big")
        assert err.message == "too big"
        assert err.code == "2004"
