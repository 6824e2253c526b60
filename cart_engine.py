"""
Counter cart
Owns the cart lines and enforces the stock / pre-order quota ceiling
"""
import threading
from typing import Dict, List, Optional, Any
from PySide6.QtCore import QObject, Signal

from models import CatalogProduct, CartLine, CartOpResult, CustomerInfo, PaymentMethod, PoPaymentType


class CartEngine(QObject):
    """Cart state and quantity ceiling enforcement"""

    # Signals
    cart_changed = Signal()
    limit_rejected = Signal(str, str)  # title, message
    log_message = Signal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        # product_id -> CartLine (insertion order = display order)
        self._lines: Dict[Any, CartLine] = {}
        # The scan worker thread and the GUI thread both mutate the cart
        self._lock = threading.RLock()

    @property
    def lines(self) -> List[CartLine]:
        """Snapshot of the cart lines"""
        with self._lock:
            return [CartLine(**vars(line)) for line in self._lines.values()]

    @property
    def is_empty(self) -> bool:
        with self._lock:
            return not self._lines

    @property
    def item_count(self) -> int:
        """Total units in the cart"""
        with self._lock:
            return sum(line.quantity for line in self._lines.values())

    def get_line(self, product_id) -> Optional[CartLine]:
        with self._lock:
            line = self._lines.get(product_id)
            return CartLine(**vars(line)) if line else None

    def add_to_cart(self, product: CatalogProduct) -> CartOpResult:
        """
        Add one unit of a product

        New lines need headroom (stock - reserved_qty > 0); ready stock and
        pre-order quota use the same fields. Existing lines go through
        update_quantity(+1).
        """
        with self._lock:
            if product.id in self._lines:
                result = self.update_quantity(product.id, 1)
                return CartOpResult.INCREMENTED if result == CartOpResult.UPDATED else result

            if product.available <= 0:
                self.limit_rejected.emit(
                    "Out of stock / quota full",
                    f"{product.name} is sold out or its slot limit is reached."
                )
                self.log_message.emit(f"[Rejected] {product.name}: no stock (available {product.available})")
                return CartOpResult.OUT_OF_STOCK

            self._lines[product.id] = CartLine.from_product(product)

        self.log_message.emit(f"[Cart] + {product.name}")
        self.cart_changed.emit()
        return CartOpResult.ADDED

    def update_quantity(self, product_id, delta: int) -> CartOpResult:
        """
        Change a line quantity by delta

        Going below 1 is ignored (use remove_from_cart); going above the
        available quantity is rejected and the line keeps its quantity.
        """
        with self._lock:
            line = self._lines.get(product_id)
            if line is None:
                return CartOpResult.IGNORED

            new_qty = line.quantity + delta
            if new_qty < 1:
                return CartOpResult.IGNORED

            available = line.available
            if new_qty > available:
                self.limit_rejected.emit(
                    "Stock/quota limit",
                    f"Only {max(available, 0)} unit(s) available"
                )
                self.log_message.emit(f"[Rejected] {line.name}: limit {available}")
                return CartOpResult.LIMIT_REACHED

            line.quantity = new_qty

        self.cart_changed.emit()
        return CartOpResult.UPDATED

    def remove_from_cart(self, product_id) -> CartOpResult:
        """Remove a line unconditionally"""
        with self._lock:
            line = self._lines.pop(product_id, None)
        if line is None:
            return CartOpResult.IGNORED

        self.log_message.emit(f"[Cart] - {line.name}")
        self.cart_changed.emit()
        return CartOpResult.REMOVED

    def calculate_total(self) -> float:
        """Sum of price x quantity"""
        with self._lock:
            return sum(line.price * line.quantity for line in self._lines.values())

    def clear_cart(self):
        """Empty the cart"""
        with self._lock:
            had_lines = bool(self._lines)
            self._lines.clear()
        if had_lines:
            self.cart_changed.emit()

    def build_order_request(
        self,
        customer: CustomerInfo,
        payment_method: str = PaymentMethod.CASH,
        po_payment_type: str = PoPaymentType.FULL,
        notes: str = ""
    ) -> Dict[str, Any]:
        """
        Order creation payload from the current lines (read-only)

        Returns:
            {customer_name, customer_email, items, payment_method, po_payment_type, notes}
        """
        with self._lock:
            items = [
                {"product_id": line.product_id, "quantity": line.quantity}
                for line in self._lines.values()
            ]
        return {
            "customer_name": customer.name,
            "customer_email": customer.email,
            "items": items,
            "payment_method": payment_method,
            "po_payment_type": po_payment_type,
            "notes": notes,
        }
