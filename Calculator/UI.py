# UI.py
"""PySide6 user interface for the BEDMAS Calculator.

Structure
---------
- Calculator UI: main window with display and button grid
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Build window, display, layout and buttons
- Accept button clicks and typed keys, maintain undo/redo
- Dispatch the equation to Evaluator in a worker thread
- Render results and show Evaluator errors as dialogs (code, details, position)
- Clipboard integration and optional auto-evaluate after paste

Responsibilities (Settings)
---------------------------
- Load Current Settings and Settings Descriptions via config_manager
- Save and apply theme changes immediately

Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject).
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""

from PySide6 import QtWidgets, QtGui
from PySide6.QtCore import Qt, QObject, Signal, QTimer
import sys
from pathlib import Path
import threading
from pynput.keyboard import Controller
import pyperclip
from . import error as E
from . import config_manager as config_manager
from . import Evaluator as Evaluator

# Resolve project root depending on run mode (Script or .exe)
if getattr(sys, 'frozen', False):
    PROJECT_ROOT = Path(sys._MEIPASS)
else:
    PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Characters that can be typed straight into the display
TYPEABLE = set("0123456789.()^+-*/×÷√πrotsqpi")


def is_shift_pressed():
    """Whether shift is held according to pynput. Used for the copy/paste toggle."""
    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


def remove_last_input(text):
    """Backspace on the display text. 'Ans' goes as one piece, an empty display shows '0'."""
    if text.endswith("Ans"):
        text = text[:-3]
    else:
        text = text[:-1]
    return text or "0"


class Worker(QObject):
    """

    Runs in a separate thread, hands the equation to Evaluator.py and emits a Signal
    with the result (or the error) back to the Calculator UI.

    """

    job_finished = Signal(object, str)

    def __init__(self, problem):
        super().__init__()
        self.data = problem

    def run_Calc(self):

        try:
            result = Evaluator.evaluate(self.data)
            self.job_finished.emit(result, self.data)

        except E.MathError as e:
            # Known, handled error (e.g. "Division by zero")
            self.job_finished.emit(e, self.data)

        except Exception as e:
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """

    Settings window: one checkbox per boolean setting, saved through config_manager on OK.

    """

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        # --- 1. Window Setup ---
        self.setWindowTitle("Calculator Settings")
        self.resize(300, 200)
        self.setMinimumSize(300, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        # --- 2. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        # --- 3. Build Checkboxes ---
        for key_value, value in self.setting_value_list.items():
            if not isinstance(value, bool):
                continue
            description = self.setting_description_list.get(key_value, key_value)
            checkbox = QtWidgets.QCheckBox(description)
            checkbox.setChecked(value)
            main_layout.addWidget(checkbox)
            self.widgets[key_value] = checkbox

        # --- 4. OK / Cancel Buttons ---
        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(lambda: self.save_settings(self.setting_value_list))
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self, setting_value_list):
        for key_value, widget in self.widgets.items():
            setting_value_list[key_value] = widget.isChecked()

        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.settings_saved.emit()
            self.accept()
            self.update_darkmode()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}{config_manager.config_json}")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorPrototype(QtWidgets.QWidget):
    # --- Class-level attributes for button hold logic ---
    shift_is_held = False
    initial_delay = 500
    repeat_interval = 100
    was_held = False
    held_button_value = None

    def __init__(self):
        super().__init__()

        # --- 1. Load Settings ---
        self.setting_value_list = config_manager.load_setting_value("all")

        # --- 2. Instance State Variables ---
        self.calculator_result = ""  # Last result, used by 'Ans'
        self.equation = ""  # Last equation that was sent to the Evaluator
        self.thread_active = False
        self.undo = ["0"]
        self.redo = []
        self.hold_timer = QTimer(self)
        self.hold_timer.timeout.connect(self.handle_hold_tick)
        self.display_text = "0"
        self.showing_result = False

        # --- 3. Window Setup ---
        icon_path = PROJECT_ROOT / "icons" / "icon.png"
        if icon_path.exists():
            self.setWindowIcon(QtGui.QIcon(str(icon_path)))
        self.button_objects = {}
        self.setWindowTitle("Calculator")
        self.resize(400, 540)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        expanding_policy = QtWidgets.QSizePolicy(
            QtWidgets.QSizePolicy.Policy.Expanding,
            QtWidgets.QSizePolicy.Policy.Expanding
        )

        # --- 4. Display Setup ---
        self.display = QtWidgets.QLineEdit("0")
        self.display.setAlignment(Qt.AlignmentFlag.AlignRight)
        self.display.setReadOnly(True)
        self.display.setFocusPolicy(Qt.FocusPolicy.NoFocus)
        font = self.display.font()
        font.setPointSize(32)
        self.display.setFont(font)
        self.display.setSizePolicy(expanding_policy)
        main_v_layout.addWidget(self.display, 1)

        # --- 5. Button Grid Setup ---
        button_container = QtWidgets.QWidget()
        main_v_layout.addWidget(button_container, 3)
        button_grid = QtWidgets.QGridLayout(button_container)
        button_grid.setSpacing(0)
        button_grid.setContentsMargins(0, 0, 0, 0)

        for i in range(6):
            button_grid.setRowStretch(i, 1)
        for j in range(5):
            button_grid.setColumnStretch(j, 1)

        # (text, row, column, column span)
        self.buttons = [
            ('⚙️', 0, 0, 1), ('📋', 0, 1, 1), ('↷', 0, 2, 1), ('↶', 0, 3, 1), ('<', 0, 4, 1),
            ('π', 1, 0, 1), ('√(', 1, 1, 1), ('(', 1, 2, 1), (')', 1, 3, 1), ('÷', 1, 4, 1),
            ('^', 2, 0, 1), ('7', 2, 1, 1), ('8', 2, 2, 1), ('9', 2, 3, 1), ('×', 2, 4, 1),
            ('C', 3, 0, 1), ('4', 3, 1, 1), ('5', 3, 2, 1), ('6', 3, 3, 1), ('-', 3, 4, 1),
            ('Ans', 4, 0, 1), ('1', 4, 1, 1), ('2', 4, 2, 1), ('3', 4, 3, 1), ('+', 4, 4, 1),
            ('0', 5, 0, 2), ('.', 5, 2, 1), ('⏎', 5, 3, 2)
        ]

        HOLD_BUTTONS = ['0', '1', '2', '3', '4', '5', '6', '7', '8', '9', '↶', '↷', '<']

        for text, row, col, span in self.buttons:
            button = QtWidgets.QPushButton(text)
            button.setSizePolicy(expanding_policy)
            button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
            font = button.font()
            font.setPointSize(14)
            button.setFont(font)

            if text == '⚙️':
                button.clicked.connect(self.open_settings)
            elif text in HOLD_BUTTONS:
                button.pressed.connect(lambda checked=False, val=text: self.handle_button_pressed_hold(val))
                button.released.connect(self.handle_button_released_hold)
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_clicked_hold(val))
            else:
                button.clicked.connect(lambda checked=False, val=text: self.handle_button_press(val))

            button_grid.addWidget(button, row, col, 1, span)
            self.button_objects[text] = button

        self.update_darkmode()

    # --- Button Hold Logic ---
    def handle_button_pressed_hold(self, value):
        self.was_held = False
        self.held_button_value = value
        self.hold_timer.setInterval(self.initial_delay)
        self.hold_timer.start()

    def handle_button_released_hold(self):
        self.hold_timer.stop()
        self.held_button_value = None

    def handle_button_clicked_hold(self, value):
        # A click that ends a hold must not insert the value one more time
        if not self.was_held:
            self.handle_button_press(value)

    def handle_hold_tick(self):
        self.was_held = True
        if self.hold_timer.interval() == self.initial_delay:
            self.hold_timer.setInterval(self.repeat_interval)

        if self.held_button_value:
            self.handle_button_press(self.held_button_value)

    # --- Key Event Handlers ---
    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key.Key_Shift:
            self.shift_is_held = True
            self.update_button_labels()
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.handle_button_press('⏎')
        elif key == Qt.Key.Key_Backspace:
            self.handle_button_press('<')
        elif key == Qt.Key.Key_Escape:
            self.handle_button_press('C')
        elif event.text() and event.text() in TYPEABLE:
            self.handle_button_press(event.text())
        else:
            super().keyPressEvent(event)

    def keyReleaseEvent(self, event):
        if event.key() == Qt.Key.Key_Shift:
            self.shift_is_held = False
            self.update_button_labels()
        super().keyReleaseEvent(event)

    def update_button_labels(self):
        # Shift turns the clipboard button from paste into copy
        clipboard_button = self.button_objects.get('📋')
        if clipboard_button:
            clipboard_button.setText('📑' if self.shift_is_held else '📋')

    # --- Input Handling ---
    def handle_button_press(self, value):
        if value == '<':
            if self.showing_result:
                self.display_text = self.equation or "0"
                self.showing_result = False
            else:
                self.display_text = remove_last_input(self.display_text)

        elif value == 'C':
            self.display_text = "0"
            self.showing_result = False

        elif value == '↶':
            if len(self.undo) > 1:
                self.redo.append(self.undo.pop())
                self.display_text = self.undo[-1]
                self.showing_result = False

        elif value == '↷':
            if self.redo:
                self.undo.append(self.redo.pop())
                self.display_text = self.undo[-1]
                self.showing_result = False

        elif value == '📋':
            self.handle_clipboard()
            return

        elif value == '⏎':
            self.start_calculation()
            return

        else:
            # A new input after a result continues from that result
            if self.showing_result:
                self.display_text = self.calculator_result
                self.showing_result = False
            if self.display_text == "0" and value not in ('.', '^', '+', '-', '*', '/', '×', '÷'):
                self.display_text = ""
            self.display_text += value

        if value not in ('↶', '↷'):
            self.undo.append(self.display_text)
            self.redo.clear()

        self.display.setText(self.display_text)

    def handle_clipboard(self):
        # Shift held: copy the display, otherwise paste into it
        if self.shift_is_held or is_shift_pressed():
            pyperclip.copy(self.display.text())
            return

        clipboard_text = QtWidgets.QApplication.clipboard().text().strip()
        if not clipboard_text:
            return

        if self.display_text == "0" or self.showing_result:
            self.display_text = clipboard_text
        else:
            self.display_text += clipboard_text
        self.showing_result = False

        self.display.setText(self.display_text)
        self.undo.append(self.display_text)
        self.redo.clear()

        if self.setting_value_list["after_paste_enter"] == True:
            self.start_calculation()

    def start_calculation(self):
        if self.thread_active:
            self.show_error(E.CalculationError(E.ERROR_MESSAGES["4002"], code="4002"))
            return
        if self.showing_result:
            return

        problem = self.display_text
        if "Ans" in problem:
            if self.calculator_result == "":
                self.show_error(E.CalculationError("No Value in Ans", code="4003", equation=problem))
                return
            problem = problem.replace("Ans", f"({self.calculator_result})")

        self.thread_active = True
        self.equation = self.display_text
        self.update_return_button()
        self.display.setText("...")
        QtWidgets.QApplication.processEvents()

        # --- Start Worker Thread ---
        # Keep a reference so the worker outlives this method
        self.worker_instance = Worker(problem)
        self.worker_instance.job_finished.connect(self.Calc_result)
        my_thread = threading.Thread(target=self.worker_instance.run_Calc, daemon=True)
        my_thread.start()

    def update_return_button(self):
        return_button = self.button_objects.get('⏎')
        if not return_button:
            return

        # Red "X" while busy, blue "⏎" when idle
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
        else:
            for text, button in self.button_objects.items():
                if text != '⏎':
                    button.setStyleSheet("font-weight: normal;")
            self.setStyleSheet("")
            self.display.setStyleSheet("font-weight: bold;")
        self.update_return_button()

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()

        # Reload so changes like darkmode apply right away
        self.setting_value_list = config_manager.load_setting_value("all")
        self.update_darkmode()

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""

    def show_error(self, error_obj):
        error_box = QtWidgets.QMessageBox(self)
        additional_info = f"Details: {error_obj.message}"
        if error_obj.equation:
            additional_info += f"\nEquation: {error_obj.equation}"
        if error_obj.position:
            additional_info += f"\nPosition: {error_obj.position}"

        error_box.setIcon(QtWidgets.QMessageBox.Critical)
        error_box.setWindowTitle("Calculation error")
        error_box.setText(E.describe(error_obj))
        error_box.setInformativeText(additional_info)
        error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
        error_box.setStyleSheet(self.get_message_box_stylesheet())
        error_box.exec()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.update_return_button()

        if isinstance(result, E.MathError):
            self.show_error(result)
            self.display.setText(self.display_text)
            return

        self.calculator_result = result.strip()

        if self.setting_value_list["show_equation"] == True:
            final_display_text = f"{self.equation} = {self.calculator_result}"
        else:
            final_display_text = f"= {self.calculator_result}"

        self.showing_result = True
        self.display.setText(final_display_text)


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorPrototype()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
