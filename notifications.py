"""
Toast notifications
Short non-blocking messages that dismiss themselves
"""
import itertools
from typing import List, Optional
from PySide6.QtCore import QObject, QTimer, Signal, Slot

from models import Toast
from settings import PosSettings
from utils import now_ms

TOAST_KINDS = ("success", "error", "warning", "info")


class ToastCenter(QObject):
    """Keeps the visible toasts, capped and auto-dismissed"""

    toasts_changed = Signal(list)

    def __init__(self, settings: Optional[PosSettings] = None, parent=None):
        super().__init__(parent)
        settings = settings or PosSettings()
        self._duration_ms = settings.toast_duration_ms
        self._max_toasts = settings.max_toasts
        self._toasts: List[Toast] = []
        self._ids = itertools.count(1)

    @property
    def toasts(self) -> List[Toast]:
        return list(self._toasts)

    @Slot(str, str)
    def show(self, message: str, kind: str = "success") -> Toast:
        """Show a toast; the oldest one goes when the cap is reached"""
        if kind not in TOAST_KINDS:
            kind = "info"
        toast = Toast(id=next(self._ids), message=message, kind=kind, created_at=now_ms())
        self._toasts.append(toast)
        while len(self._toasts) > self._max_toasts:
            self._toasts.pop(0)

        QTimer.singleShot(self._duration_ms, lambda: self.dismiss(toast.id))
        self.toasts_changed.emit(self.toasts)
        return toast

    def dismiss(self, toast_id: int):
        remaining = [t for t in self._toasts if t.id != toast_id]
        if len(remaining) != len(self._toasts):
            self._toasts = remaining
            self.toasts_changed.emit(self.toasts)

    def clear(self):
        self._toasts = []
        self.toasts_changed.emit([])
