"""
Keystroke classifier
Tells human typing apart from keyboard-wedge scanner bursts arriving on the
same key stream
"""
from typing import Callable, Optional
from PySide6.QtCore import QObject, QTimer, Signal

from models import KeyEvent, ScanBurst
from settings import PosSettings
from utils import now_ms


class InputClassifier(QObject):
    """Scanner burst detector fed by the window-level key listener"""

    # A complete code is ready for segmentation
    code_ready = Signal(str)
    # The host must empty the search field (its text was consumed as a code)
    search_field_cleared = Signal()
    log_message = Signal(str)

    def __init__(self, settings: Optional[PosSettings] = None,
                 clock: Callable[[], float] = now_ms, parent=None):
        super().__init__(parent)
        self._settings = settings or PosSettings()
        self._clock = clock

        self._burst = ScanBurst()
        self._last_key_time: float = 0
        self._active = True

        # Where the pending burst came from (checked when the idle timer fires)
        self._burst_in_text_input = False
        self._burst_in_search_field = False

        self._idle_timer = QTimer(self)
        self._idle_timer.setSingleShot(True)
        self._idle_timer.setInterval(self._settings.idle_trigger_ms)
        self._idle_timer.timeout.connect(self._on_idle_timeout)

    @property
    def buffer(self) -> str:
        """Current burst contents"""
        return self._burst.characters

    @property
    def is_active(self) -> bool:
        return self._active

    def on_key_down(self, event: KeyEvent) -> Optional[str]:
        """
        Feed one key press

        Returns:
            The code handed to the segmenter when the key was an execution key
            that completed a code (the caller must suppress the key's default
            action), otherwise None
        """
        if not self._active:
            return None

        # Modifiers never touch the buffer, the timing or the idle timer
        if event.is_modifier:
            return None

        self._idle_timer.stop()

        now = event.timestamp if event.timestamp else self._clock()
        gap = now - self._last_key_time
        self._last_key_time = now

        if event.is_execution:
            return self._on_execution_key(event)

        if event.is_printable:
            if gap < self._settings.scan_threshold_ms or not event.in_text_input:
                self._burst.append(event.key, now)
            else:
                # Slow key in a real input field: possibly a human, start over
                self._burst.reset(event.key, now)

            self._burst_in_text_input = event.in_text_input
            self._burst_in_search_field = event.in_search_field
            self._idle_timer.start(self._settings.idle_trigger_ms)
            return None

        # Any other control key abandons the burst
        self._burst.clear()
        return None

    def _on_execution_key(self, event: KeyEvent) -> Optional[str]:
        """Enter / Tab: decide which text to process"""
        min_length = self._settings.min_execute_length
        code_from_input = event.field_value.strip() if event.in_search_field else ""
        code_from_buffer = self._burst.text

        code = None
        if event.in_search_field and len(code_from_input) >= min_length:
            code = code_from_input
            self.search_field_cleared.emit()
        elif len(code_from_buffer) >= min_length:
            code = code_from_buffer

        self._burst.clear()

        if code:
            self.log_message.emit(f"Scan ({event.key}): {code}")
            self.code_ready.emit(code)
        return code

    def _on_idle_timeout(self):
        """No key for the idle interval: auto-trigger a scanner without Enter suffix"""
        if not self._active:
            return

        code = self._burst.text
        if len(code) < self._settings.min_auto_length:
            return

        looks_scanned = self._settings.code_prefix in code or (
            not self._burst_in_text_input and len(code) >= self._settings.min_unfocused_length
        )
        if not looks_scanned:
            return

        if self._burst_in_search_field:
            self.search_field_cleared.emit()
        self._burst.clear()
        self.log_message.emit(f"Scan (auto): {code}")
        self.code_ready.emit(code)

    def clear_buffer(self):
        """Drop the pending burst (manual entry path)"""
        self._idle_timer.stop()
        self._burst.clear()

    def teardown(self):
        """Stop timers and ignore further keys"""
        self._active = False
        self._idle_timer.stop()
        self._burst.clear()
