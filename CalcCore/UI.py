# UI.py
""""PySide6 user interface for the scientific calculator.

Structure
---------
- Calculator UI: main window with display, angle-mode toggle, memory row and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Keep one CalculatorBridge (and with it one CalculatorState) for the whole session
- Dispatch the expression to the bridge in a worker thread, one at a time
- Render results and show errors as dialogs
- Memory buttons (MS, M+, M-, MR, MC) and clipboard integration


Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject). Only one calculation may
be active at once (thread_active), which also serialises access to the
session state. Results are emitted via a Qt signal and handled back in the UI.
"""""

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QObject, Signal
import sys
from pathlib import Path
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E  # Imports error.py as a module
from . import config_manager as config_manager  # Imports config_manager.py as a module
from . import bridge as bridge  # Imports bridge.py as a module

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent.parent


# Keys that stand for a button other than their own character
KEY_INPUTS = {
    Qt.Key.Key_Return: '⏎',
    Qt.Key.Key_Enter: '⏎',
    Qt.Key.Key_Equal: '⏎',
    Qt.Key.Key_Escape: 'C',
    Qt.Key.Key_Delete: 'C',
    Qt.Key.Key_Backspace: '<',
}

TYPED_CHARACTERS = "0123456789.+-*/^%(),_√πφ"


def key_to_input(key, text):
    """Translate a key press into the value handle_button_press expects, or None."""
    if key in KEY_INPUTS:
        return KEY_INPUTS[key]
    if len(text) == 1 and (text in TYPED_CHARACTERS or text.isalpha()):
        return text
    return None


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" setting.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs a single evaluation in a separate thread and emits the display string
    (or a MathError) back to the Calculator UI.

    """""

    job_finished = Signal(object, str)

    def __init__(self, session, problem, degree_mode):
        super().__init__()
        self.session = session
        self.data = problem
        self.degree_mode = degree_mode

    def run_Calc(self):

        try:
            result = self.session.evaluate_expression(self.data, self.degree_mode)
            self.job_finished.emit(result, self.data)

        except Exception as e:
            # Unexpected crash we didn't plan for (e.g., a bug in the code)
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Every setting is either a checkbox (bool) or an input field (int);
    descriptions come from ui_strings.json.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(320, 240)

        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(description + ":")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():

            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()
                if new_value_str == "":
                    continue  # blank keeps the old value

                try:
                    new_value_int = int(new_value_str)
                    if new_value_int < 1:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is 1.")
                except ValueError as e:
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return  # Stop saving!

                setting_value_list[key_value] = new_value_int

        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error", f"Error 5001: {E.ERROR_MESSAGES['5001']}")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Session / instance state ---
        self.session = bridge.CalculatorBridge()
        self.degree_mode = self.session.state.angle_in_degrees
        self.display_text = "0"
        self.result_displayed = False  # Was the last text an answer?
        self.thread_active = False  # Is a calculation running?

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.button_objects = {}
        self.setWindowTitle("Scientific Calculator")
        self.resize(420, 620)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.memory_indicator = QtWidgets.QLabel("")
        main_v_layout.addWidget(self.memory_indicator)

        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        font = self.display.font()
        font.setPointSize(28)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 4)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        # (text, row, column)
        self.buttons = [
            ('⚙', 0, 0), ('📋', 0, 1), ('DEG', 0, 2), ('C', 0, 3), ('<', 0, 4),
            ('MS', 1, 0), ('M+', 1, 1), ('M-', 1, 2), ('MR', 1, 3), ('MC', 1, 4),
            ('sin(', 2, 0), ('cos(', 2, 1), ('tan(', 2, 2), ('ln(', 2, 3), ('log10(', 2, 4),
            ('π', 3, 0), ('e', 3, 1), ('√(', 3, 2), ('^', 3, 3), ('/', 3, 4),
            ('(', 4, 0), ('7', 4, 1), ('8', 4, 2), ('9', 4, 3), ('*', 4, 4),
            (')', 5, 0), ('4', 5, 1), ('5', 5, 2), ('6', 5, 3), ('-', 5, 4),
            (',', 6, 0), ('1', 6, 1), ('2', 6, 2), ('3', 6, 3), ('+', 6, 4),
            ('ans', 7, 0), ('0', 7, 1), ('.', 7, 2), ('%', 7, 3), ('⏎', 7, 4)
        ]

        for i in range(8):
            button_grid.setRowStretch(i, 1)
        for j in range(5):
            button_grid.setColumnStretch(j, 1)

        for text, row, col in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)

            if text == '⚙':
                button.clicked.connect(self.open_settings)
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col)
            self.button_objects[text] = button

        self.update_angle_button()
        self.update_darkmode()
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def keyPressEvent(self, event):
        value = key_to_input(event.key(), event.text())
        if value is None:
            super().keyPressEvent(event)
            return
        self.handle_button_press(value)

    # --- Button handling ---
    def handle_button_press(self, value):
        if value == '⏎':
            self.start_calculation()
            return

        if value in ('MS', 'M+', 'M-', 'MR', 'MC'):
            self.handle_memory(value)
            return

        if value == 'DEG':
            self.degree_mode = not self.degree_mode
            self.update_angle_button()
            return

        if value == '📋':
            self.handle_clipboard()
            return

        if value == 'C':
            self.display_text = "0"

        elif value == '<':
            self.display_text = self.display_text[:-1] or "0"

        else:
            # Typing after a result starts a new expression unless an operator continues it
            if self.result_displayed and value not in ('+', '-', '*', '/', '^', '%'):
                self.display_text = "0"
            if self.display_text == "0" or self.display_text.startswith("ERROR"):
                self.display_text = ""
            self.display_text += value

        self.result_displayed = False
        self.display.setText(self.display_text)

    def handle_memory(self, value):
        if self.thread_active:
            return

        if value == 'MR':
            self.result_displayed = False
            self.display_text = bridge.format_result(self.session.recall_memory(), self.session.state.precision)
            self.display.setText(self.display_text)
        elif value == 'MC':
            self.session.clear_memory()
        else:
            try:
                number = float(self.display.text())
            except ValueError:
                self.show_error(E.MathError(E.ERROR_MESSAGES["4003"], code="4003", equation=self.display.text()))
                return
            if value == 'MS':
                self.session.store_memory(number)
            elif value == 'M+':
                self.session.add_memory(number)
            elif value == 'M-':
                self.session.subtract_memory(number)

        self.memory_indicator.setText("M" if self.session.has_memory() else "")

    def handle_clipboard(self):
        # Shift+click copies the display; a plain click pastes (unless shift_to_copy is off)
        if is_shift_pressed() or not self.setting_value_list["shift_to_copy"]:
            pyperclip.copy(self.display.text())
            return

        clipboard_text = pyperclip.paste().strip()
        if clipboard_text:
            if self.display_text == "0" or self.result_displayed:
                self.display_text = ""
            self.display_text += clipboard_text
            self.result_displayed = False
            self.display.setText(self.display_text)

    def start_calculation(self):
        if self.thread_active:
            print(f"ERROR: {E.ERROR_MESSAGES['4002']}")
            return

        self.thread_active = True
        self.update_return_button()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()

        worker_instance = Worker(self.session, self.display_text, self.degree_mode)
        worker_instance.job_finished.connect(self.Calc_result)
        my_thread = threading.Thread(target=worker_instance.run_Calc)
        my_thread.start()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.MathError):
            self.show_error(result)
            self.display.setText(equation)
            return

        if result.startswith("ERROR:"):
            outcome = self.session.last_outcome
            known = outcome is not None and outcome.has_error
            self.show_error(E.MathError(result[len("ERROR:"):].strip(),
                                        code=outcome.error_kind.value if known else "9999",
                                        equation=equation,
                                        position=outcome.error_position if known else 0))
            self.display.setText(equation)
            return

        self.display_text = result
        self.result_displayed = True
        self.display.setText(result)

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle("Calculation error")
        error_box.setText(f"Error {error_obj.code}: {error_obj.message}")
        error_box.setInformativeText(f"Equation: {error_obj.equation}\nPosition: {error_obj.position}")
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    # --- Visual state ---
    def update_angle_button(self):
        self.button_objects['DEG'].setText("DEG" if self.degree_mode else "RAD")

    def update_return_button(self):
        return_button = self.button_objects.get('⏎')
        if not return_button:
            return

        # Red "X" while busy, blue when idle
        if self.thread_active == True:
            return_button.setStyleSheet("background-color: #FF0000; color: white; font-weight: bold;")
            return_button.setText("X")
        else:
            return_button.setStyleSheet("background-color: #007bff; color: white; font-weight: bold;")
            return_button.setText("⏎")
        return_button.update()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.setStyleSheet("background-color: #121212;")
            self.display.setStyleSheet("background-color: #121212; color: white; font-weight: bold;")
            self.memory_indicator.setStyleSheet("color: white;")
        else:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
            self.memory_indicator.setStyleSheet("")
        self.update_return_button()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()  # modal

        # Reload settings after the dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.session.reload_settings()
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox { background-color: #121212; color: white; }
                QLabel { color: white; }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        return ""

    def closeEvent(self, event):
        self.session.close()
        super().closeEvent(event)


def main():
    app = QtWidgets.QApplication()
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
