"""
Background scanner capture (HID keyboard wedge)
Hooks the OS keyboard with the keyboard module so scans are still seen while
another window has focus
"""
from PySide6.QtCore import QObject, Signal
import keyboard

from models import KeyEvent
from utils import now_ms

# keyboard module key names -> KeyEvent.key
KEY_NAME_MAP = {
    'enter': "Enter",
    'tab': "Tab",
    'shift': "Shift",
    'right shift': "Shift",
    'left shift': "Shift",
    'ctrl': "Control",
    'right ctrl': "Control",
    'left ctrl': "Control",
    'alt': "Alt",
    'alt gr': "Alt",
    'right alt': "Alt",
    'left alt': "Alt",
    'windows': "Meta",
    'left windows': "Meta",
    'right windows': "Meta",
    'command': "Meta",
    'backspace': "Backspace",
    'delete': "Delete",
    'esc': "Escape",
    'space': " ",
}


def translate_key_name(name: str) -> str:
    """Map a keyboard module key name to a KeyEvent key"""
    if not name:
        return "Unidentified"
    if len(name) == 1:
        return name
    return KEY_NAME_MAP.get(name.lower(), name.title())


class ScannerListener(QObject):
    """Global barcode scanner listener"""

    # Emitted from the hook thread, delivered queued to GUI-thread receivers
    key_captured = Signal(object)
    status_changed = Signal(str)

    def __init__(self):
        super().__init__()
        self._is_running: bool = False
        self._hook = None

    def start(self) -> bool:
        """Start listening"""
        if self._is_running:
            return True

        try:
            self._hook = keyboard.on_press(self._on_key_press)
            self._is_running = True
            self.status_changed.emit("Background scanner capture started")
            return True

        except Exception as e:
            # keyboard raises ImportError/OSError without access to input devices
            self._is_running = False
            self.status_changed.emit(f"Background scanner capture failed: {str(e)}")
            return False

    def stop(self):
        """Stop listening"""
        if not self._is_running:
            return

        try:
            if self._hook is not None:
                keyboard.unhook(self._hook)
            self._hook = None
            self._is_running = False
            self.status_changed.emit("Background scanner capture stopped")

        except (KeyError, ValueError) as e:
            self._is_running = False
            self.status_changed.emit(f"Background scanner stop error: {str(e)}")

    def _on_key_press(self, event):
        """keyboard hook callback (runs on the hook thread)"""
        if not self._is_running:
            return

        key_event = KeyEvent(
            key=translate_key_name(event.name),
            timestamp=now_ms(),
            in_text_input=False,
        )
        self.key_captured.emit(key_event)

    @property
    def is_running(self) -> bool:
        return self._is_running
