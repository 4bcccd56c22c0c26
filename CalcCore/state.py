# state.py
"""""
Calculator session state.

One CalculatorState per session, created explicitly and passed by reference
into every evaluation. Memory helpers accept None and then do nothing
(recall returns 0.0).
"""""

DEFAULT_PRECISION = 10


class CalculatorState:
    def __init__(self):
        reset_state(self)

    def __repr__(self):
        return (f"CalculatorState(memory={self.memory!r}, last_result={self.last_result!r}, "
                f"angle_in_degrees={self.angle_in_degrees!r}, precision={self.precision!r}, "
                f"last_expression={self.last_expression!r})")


def create_state():
    return CalculatorState()


def destroy_state(state):
    """Release a session. Kept for symmetry with create_state; clears the fields."""
    if state is not None:
        reset_state(state)


def reset_state(state):
    """Restore the documented defaults in place."""
    if state is None:
        return
    state.memory = 0.0
    state.last_result = 0.0
    state.angle_in_degrees = True
    state.precision = DEFAULT_PRECISION
    state.last_expression = ""


def truncate_expression(text, max_length):
    # last_expression is capped for display, never rejected
    if max_length is None or max_length < 0:
        return text
    return text[:max_length]


# -----------------------------
# Memory register
# -----------------------------

def memory_store(state, value):
    if state is not None:
        state.memory = float(value)


def memory_add(state, value):
    if state is not None:
        state.memory += value


def memory_subtract(state, value):
    if state is not None:
        state.memory -= value


def memory_recall(state):
    return state.memory if state is not None else 0.0


def memory_clear(state):
    if state is not None:
        state.memory = 0.0
