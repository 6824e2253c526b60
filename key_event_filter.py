"""
Window-level key listener
Translates Qt key presses into KeyEvent and feeds the classifier
"""
from typing import Callable, Optional
from PySide6.QtCore import QObject, QEvent, Qt
from PySide6.QtGui import QWindow
from PySide6.QtWidgets import (
    QApplication, QWidget, QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox
)

from models import KeyEvent
from input_classifier import InputClassifier
from utils import now_ms

TEXT_INPUT_TYPES = (QLineEdit, QTextEdit, QPlainTextEdit, QAbstractSpinBox)

NAMED_KEYS = {
    Qt.Key_Return: "Enter",
    Qt.Key_Enter: "Enter",
    Qt.Key_Tab: "Tab",
    Qt.Key_Backtab: "Tab",
    Qt.Key_Shift: "Shift",
    Qt.Key_Control: "Control",
    Qt.Key_Alt: "Alt",
    Qt.Key_AltGr: "Alt",
    Qt.Key_Meta: "Meta",
    Qt.Key_Backspace: "Backspace",
    Qt.Key_Delete: "Delete",
    Qt.Key_Escape: "Escape",
    Qt.Key_Left: "ArrowLeft",
    Qt.Key_Right: "ArrowRight",
    Qt.Key_Up: "ArrowUp",
    Qt.Key_Down: "ArrowDown",
    Qt.Key_Home: "Home",
    Qt.Key_End: "End",
    Qt.Key_CapsLock: "CapsLock",
}


def key_name(qt_key: int, text: str) -> str:
    """Qt key code + produced text -> KeyEvent.key"""
    if qt_key in NAMED_KEYS:
        return NAMED_KEYS[qt_key]
    if len(text) == 1 and text.isprintable():
        return text
    return "Unidentified"


def field_text(widget: Optional[QWidget]) -> str:
    """Current text of a text input widget"""
    if isinstance(widget, QLineEdit):
        return widget.text()
    if isinstance(widget, (QTextEdit, QPlainTextEdit)):
        return widget.toPlainText()
    if isinstance(widget, QAbstractSpinBox):
        return widget.text()
    return ""


class KeyEventFilter(QObject):
    """Application event filter, installed once per POS screen"""

    def __init__(self, classifier: InputClassifier,
                 search_field_getter: Callable[[], Optional[QWidget]],
                 clock: Callable[[], float] = now_ms, parent=None):
        super().__init__(parent)
        self._classifier = classifier
        self._search_field_getter = search_field_getter
        self._clock = clock
        self._installed_on: Optional[QApplication] = None

    def install(self, app: QApplication):
        if self._installed_on is not None:
            return
        app.installEventFilter(self)
        self._installed_on = app

    def uninstall(self):
        if self._installed_on is None:
            return
        self._installed_on.removeEventFilter(self)
        self._installed_on = None

    def build_event(self, qt_key: int, text: str, focus: Optional[QWidget]) -> KeyEvent:
        """Describe a key press together with the widget that has focus"""
        search_field = self._search_field_getter()
        in_search = focus is not None and focus is search_field
        return KeyEvent(
            key=key_name(qt_key, text),
            timestamp=self._clock(),
            in_text_input=isinstance(focus, TEXT_INPUT_TYPES),
            in_search_field=in_search,
            field_value=field_text(focus) if in_search else "",
        )

    def eventFilter(self, obj, event) -> bool:
        # Key events reach the top-level QWindow first, exactly once per press
        if event.type() != QEvent.KeyPress or not isinstance(obj, QWindow):
            return False

        key_event = self.build_event(event.key(), event.text(), QApplication.focusWidget())
        code = self._classifier.on_key_down(key_event)
        # Swallow Enter/Tab that completed a code (no form submit, no focus change)
        return code is not None
