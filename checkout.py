"""
Checkout
Turns the cart into a counter order and hands QR payments to the poller
"""
import threading
from typing import Optional
from PySide6.QtCore import QObject, Signal, Slot

from models import CustomerInfo, Order, PaymentMethod, PoPaymentType
from cart_engine import CartEngine
from payment_poller import PaymentPoller
from pos_api import PosApiError
from utils import get_timestamp


class CheckoutController(QObject):
    """Counter checkout"""

    # Signals
    order_completed = Signal(object)  # Order paid on the spot
    payment_pending = Signal(object)  # Order waiting for external payment
    checkout_failed = Signal(str)
    log_message = Signal(str)

    # Worker thread -> GUI thread: Order or None, error message
    _order_finished = Signal(object, str)

    def __init__(self, api, cart: CartEngine, poller: PaymentPoller, parent=None):
        super().__init__(parent)
        self.api = api
        self.cart = cart
        self.poller = poller
        self._is_processing = False
        self._order_finished.connect(self._on_order_finished)

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    def submit(
        self,
        customer: CustomerInfo,
        payment_method: str = PaymentMethod.CASH,
        po_payment_type: str = PoPaymentType.FULL
    ) -> bool:
        """
        Create the order for the current cart on a worker thread

        The outcome arrives as order_completed, payment_pending or
        checkout_failed. Without payment_url the sale is final and the cart is
        cleared; with payment_url polling starts and the cart stays until
        settlement.

        Returns:
            False when nothing was submitted (empty cart or checkout running)
        """
        if self.cart.is_empty or self._is_processing:
            return False

        self._is_processing = True
        request = self.cart.build_order_request(
            customer,
            payment_method,
            po_payment_type,
            notes=f"POS Direct Sale - {get_timestamp()}"
        )

        def _run():
            try:
                order = self.api.create_order(request)
            except PosApiError as e:
                self._order_finished.emit(None, e.message or "System failure")
                return
            except Exception as e:
                self._order_finished.emit(None, f"System failure: {str(e)}")
                return
            self._order_finished.emit(order, "")

        threading.Thread(target=_run, daemon=True).start()
        return True

    @Slot(object, str)
    def _on_order_finished(self, order: Optional[Order], error: str):
        """Order result back on the GUI thread"""
        self._is_processing = False

        if order is None:
            # Cart is preserved for a retry
            self.log_message.emit(f"[Error] checkout failed: {error}")
            self.checkout_failed.emit(error)
            return

        if order.needs_payment_confirmation:
            self.log_message.emit(f"[Checkout] order {order.order_number} awaiting payment")
            self.poller.start(order)
            self.payment_pending.emit(order)
        else:
            self.log_message.emit(f"[Checkout] invoice {order.order_number} issued")
            self.cart.clear_cart()
            self.order_completed.emit(order)
