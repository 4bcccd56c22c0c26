# bridge.py
"""""
Session facade used by the UI (or any other host).

A CalculatorBridge owns exactly one CalculatorState for its lifetime and
turns evaluation outcomes into display strings. Several bridges can coexist;
there is no module-level session.
"""""

import math

from . import config_manager as config_manager
from . import MathEngine as MathEngine
from . import state as S

# Debug toggle for optional prints in this module
debug = bool(config_manager.load_setting_value("debug"))

INTEGER_DISPLAY_LIMIT = 1e15
SCIENTIFIC_UPPER = 1e10
SCIENTIFIC_LOWER = 1e-4


def format_result(value, precision=10):
    """Render a numeric result for display.

    - integral and |value| < 1e15      -> plain integer ("42")
    - |value| >= 1e10 or 0 < |value| < 1e-4 -> scientific ("1.2345000000e+20")
    - anything else                    -> up to `precision` significant digits
    """
    if value == 0:
        return "0"
    if value == math.floor(value) and abs(value) < INTEGER_DISPLAY_LIMIT:
        return f"{value:.0f}"
    if abs(value) >= SCIENTIFIC_UPPER or abs(value) < SCIENTIFIC_LOWER:
        return f"{value:.{precision}e}"
    return f"{value:.{precision}g}"


class CalculatorBridge:
    def __init__(self, degree_mode=None):
        self.settings = config_manager.load_setting_value("all")
        self.state = S.create_state()
        self.state.angle_in_degrees = self.settings["degree_mode"] if degree_mode is None else degree_mode
        self.state.precision = self.settings["precision"]
        self.last_outcome = None

    def evaluate_expression(self, expression, degree_mode=None):
        """Evaluate and return either the formatted value or 'ERROR: <message>'."""
        if self.state is None:
            return "ERROR: Calculator closed"
        if degree_mode is not None:
            self.state.angle_in_degrees = degree_mode

        outcome = MathEngine.evaluate(expression, self.state, self.settings)
        self.last_outcome = outcome

        if outcome.has_error:
            if debug == True:
                print(f"Calculation error: {outcome.message} at {outcome.error_position}")
            return f"ERROR: {outcome.message}"

        result_str = format_result(outcome.value, self.state.precision)
        if debug == True:
            print(f"Calculation result: {expression} = {result_str}")
        return result_str

    def reload_settings(self):
        """Re-read config.json, e.g. after the settings dialog saved it."""
        self.settings = config_manager.load_setting_value("all")
        if self.state is not None:
            self.state.precision = self.settings["precision"]

    def last_error(self):
        if self.last_outcome is None or not self.last_outcome.has_error:
            return "No error"
        return self.last_outcome.message

    # --- Memory operations ---

    def store_memory(self, value):
        S.memory_store(self.state, value)
        if debug == True:
            print(f"Memory stored: {value}")

    def add_memory(self, value):
        S.memory_add(self.state, value)
        if debug == True:
            print(f"Memory added: {value}")

    def subtract_memory(self, value):
        S.memory_subtract(self.state, value)
        if debug == True:
            print(f"Memory subtracted: {value}")

    def recall_memory(self):
        return S.memory_recall(self.state)

    def clear_memory(self):
        S.memory_clear(self.state)
        if debug == True:
            print("Memory cleared")

    def has_memory(self):
        return self.recall_memory() != 0.0

    def reset(self):
        S.reset_state(self.state)
        self.last_outcome = None

    def close(self):
        S.destroy_state(self.state)
        self.state = None
