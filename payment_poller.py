"""
Payment confirmation polling
Watches an order with a pending external payment (QRIS) until it settles
"""
import threading
from typing import Optional
from PySide6.QtCore import QObject, QTimer, Signal, Slot

from models import Order, PollState
from cart_engine import CartEngine
from settings import PosSettings


class PaymentPoller(QObject):
    """Fixed-interval order status poller"""

    # Signals
    settled = Signal(object)  # Order
    status_info = Signal(str)
    check_failed = Signal(str)
    stopped = Signal()
    log_message = Signal(str)

    # Worker thread -> GUI thread: order_id, Order or None, error or None, manual
    _check_finished = Signal(object, object, object, bool)

    def __init__(self, api, cart: CartEngine, settings: Optional[PosSettings] = None, parent=None):
        super().__init__(parent)
        self.api = api
        self.cart = cart
        settings = settings or PosSettings()

        self._state = PollState()
        self._check_in_flight = False

        self._timer = QTimer(self)
        self._timer.setInterval(settings.poll_interval_ms)
        self._timer.timeout.connect(self._on_tick)
        self._check_finished.connect(self._on_check_finished)

    @property
    def is_active(self) -> bool:
        return self._state.is_active

    @property
    def order_id(self):
        return self._state.order_id

    def start(self, order: Order):
        """idle -> polling (a running poll is replaced)"""
        self._timer.stop()
        self._state = PollState(order_id=order.id, is_active=True)
        self._timer.start()
        self.log_message.emit(f"[Payment] waiting for order {order.order_number or order.id}")

    @Slot()
    def _on_tick(self):
        """Automatic check; failures are retried on the next tick"""
        if not self._state.is_active:
            self._timer.stop()
            return
        self._check(manual=False)

    def check_now(self) -> bool:
        """
        Operator-triggered status check

        Returns:
            False when suppressed (not polling or a check is already running)
        """
        if not self._state.is_active or self._check_in_flight:
            return False
        return self._check(manual=True)

    def _check(self, manual: bool) -> bool:
        """Start a status request on a worker thread (one at a time)"""
        if self._check_in_flight:
            return False
        self._check_in_flight = True
        order_id = self._state.order_id

        def _run():
            try:
                order = self.api.check_status(order_id)
            except Exception as e:
                self._check_finished.emit(order_id, None, e, manual)
                return
            self._check_finished.emit(order_id, order, None, manual)

        threading.Thread(target=_run, daemon=True).start()
        return True

    @Slot(object, object, object, bool)
    def _on_check_finished(self, order_id, order: Optional[Order], error, manual: bool):
        """Status result back on the GUI thread"""
        self._check_in_flight = False

        if error is not None:
            self.log_message.emit(f"[Payment] status check failed: {str(error)}")
            if manual and self._state.is_active:
                self.check_failed.emit("Failed to check the status. Please try again.")
            return

        # Cancelled or replaced while the request was running
        if not self._state.is_active or self._state.order_id != order_id:
            return

        if order.is_settled:
            self._settle(order)
        elif manual:
            self.status_info.emit(
                f"Payment status: {order.display_status} - please try again shortly."
            )

    def _settle(self, order: Order):
        """polling -> settled -> idle"""
        self._stop_timer()
        self.cart.clear_cart()
        self.log_message.emit(f"[Payment] order {order.order_number} paid")
        self.settled.emit(order)

    def cancel(self):
        """Operator closed the payment dialog; the cart is kept for a retry"""
        if self._state.is_active:
            self.log_message.emit("[Payment] polling cancelled")
        self._stop_timer()

    def stop(self):
        """Teardown"""
        self._stop_timer()

    def _stop_timer(self):
        self._timer.stop()
        was_active = self._state.is_active
        self._state = PollState()
        if was_active:
            self.stopped.emit()
