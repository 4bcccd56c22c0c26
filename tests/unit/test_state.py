"""
Tests for CalculatorState lifecycle and the memory register.
"""

from CalcCore import state as S


class TestLifecycle:
    """create / reset / destroy"""

    def test_defaults(self) -> None:
        state = S.create_state()
        assert state.memory == 0.0
        assert state.last_result == 0.0
        assert state.angle_in_degrees is True
        assert state.precision == S.DEFAULT_PRECISION
        assert state.last_expression == ""

    def test_reset_is_idempotent(self) -> None:
        state = S.create_state()
        state.memory = 3.0
        state.last_result = 7.0
        state.angle_in_degrees = False
        state.precision = 4
        state.last_expression = "3 + 4"

        S.reset_state(state)
        first = repr(state)
        S.reset_state(state)

        assert repr(state) == first
        assert repr(state) == repr(S.create_state())

    def test_destroy_clears_fields(self) -> None:
        state = S.create_state()
        S.memory_store(state, 9)
        S.destroy_state(state)
        assert state.memory == 0.0

    def test_none_is_tolerated(self) -> None:
        S.reset_state(None)
        S.destroy_state(None)

    def test_sessions_are_independent(self) -> None:
        first = S.create_state()
        second = S.create_state()
        S.memory_store(first, 1)
        assert S.memory_recall(second) == 0.0


class TestMemory:
    """Memory register operations"""

    def test_store_add_subtract(self) -> None:
        state = S.create_state()
        S.memory_store(state, 10)
        S.memory_add(state, 5)
        S.memory_subtract(state, 3)
        assert S.memory_recall(state) == 12.0

    def test_clear(self) -> None:
        state = S.create_state()
        S.memory_store(state, 10)
        S.memory_clear(state)
        assert S.memory_recall(state) == 0.0

    def test_memory_ops_on_none(self) -> None:
        S.memory_store(None, 1)
        S.memory_add(None, 1)
        S.memory_subtract(None, 1)
        S.memory_clear(None)
        assert S.memory_recall(None) == 0.0


class TestTruncate:
    """truncate_expression"""

    def test_truncation(self) -> None:
        assert S.truncate_expression("abcdef", 3) == "abc"
        assert S.truncate_expression("abc", 10) == "abc"
        assert S.truncate_expression("abc", None) == "abc"
