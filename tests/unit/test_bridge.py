"""
Tests for the session facade (bridge.CalculatorBridge) and result formatting.
"""

import json

import pytest

from CalcCore import bridge
from CalcCore import config_manager
from CalcCore.bridge import CalculatorBridge, format_result


class TestFormatResult:
    """Display formatting rules"""

    @pytest.mark.parametrize("value,expected", [
        (0.0, "0"),
        (-0.0, "0"),
        (42.0, "42"),
        (-17.0, "-17"),
        (0.5, "0.5"),
        (1 / 3, "0.3333333333"),
        (123456.789, "123456.789"),
        (1.5e20, "1.5000000000e+20"),
        (1e15, "1.0000000000e+15"),
        (0.00001234, "1.2340000000e-05"),
    ])
    def test_default_precision(self, value, expected) -> None:
        assert format_result(value) == expected

    def test_custom_precision(self) -> None:
        assert format_result(1 / 3, precision=4) == "0.3333"


class TestEvaluateExpression:
    """Evaluation through a bridge session"""

    def test_success(self) -> None:
        session = CalculatorBridge()
        assert session.evaluate_expression("2 + 2") == "4"
        assert session.last_error() == "No error"

    def test_errors_are_prefixed(self) -> None:
        session = CalculatorBridge()
        assert session.evaluate_expression("1 / 0") == "ERROR: Division by zero"
        assert session.last_error() == "Division by zero"
        assert session.evaluate_expression("sqrt(-1)") == "ERROR: Domain error"

    def test_degree_mode_argument(self) -> None:
        session = CalculatorBridge()
        assert session.evaluate_expression("sin(90)", True) == "1"
        assert session.evaluate_expression("sin(pi / 2)", False) == "1"
        assert session.state.angle_in_degrees is False

    def test_degree_mode_on_construction(self) -> None:
        session = CalculatorBridge(degree_mode=False)
        assert session.state.angle_in_degrees is False

    def test_debug_output(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr(bridge, "debug", True)
        CalculatorBridge().evaluate_expression("1 + 1")
        assert "Calculation result" in capsys.readouterr().out


class TestSessionMemory:
    """Memory operations and lifecycle"""

    def test_memory_round_trip(self) -> None:
        session = CalculatorBridge()
        session.store_memory(5)
        session.add_memory(3)
        session.subtract_memory(1)
        assert session.recall_memory() == 7.0
        assert session.has_memory()
        assert session.evaluate_expression("M * 2") == "14"

        session.clear_memory()
        assert not session.has_memory()

    def test_sessions_do_not_share_memory(self) -> None:
        first = CalculatorBridge()
        second = CalculatorBridge()
        first.store_memory(9)
        assert second.recall_memory() == 0.0

    def test_reset(self) -> None:
        session = CalculatorBridge()
        session.store_memory(9)
        session.evaluate_expression("1 / 0")
        session.reset()
        assert session.recall_memory() == 0.0
        assert session.last_error() == "No error"

    def test_closed_session(self) -> None:
        session = CalculatorBridge()
        session.close()
        assert session.state is None
        assert session.evaluate_expression("1 + 1") == "ERROR: Calculator closed"
        assert session.recall_memory() == 0.0


class TestSessionSettings:
    """Settings are read once per session"""

    def test_evaluation_does_not_read_config(self, monkeypatch) -> None:
        session = CalculatorBridge()

        def fail(key_value):
            raise AssertionError("config.json read during evaluation")

        monkeypatch.setattr(config_manager, "load_setting_value", fail)
        assert session.evaluate_expression("6 * 7") == "42"
        assert session.evaluate_expression("1 / 0") == "ERROR: Division by zero"

    def test_session_limits_apply(self) -> None:
        session = CalculatorBridge()
        session.settings["max_expression_length"] = 3
        session.evaluate_expression("100 + 1")
        assert session.state.last_expression == "100"

    def test_reload_settings(self, tmp_path, monkeypatch) -> None:
        session = CalculatorBridge()
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"precision": 4, "max_nesting_depth": 2}), encoding="utf-8")
        monkeypatch.setattr(config_manager, "config_json", path)

        session.reload_settings()

        assert session.state.precision == 4
        assert session.evaluate_expression("1 / 3") == "0.3333"
        assert session.evaluate_expression("((1))").startswith("ERROR: ")
