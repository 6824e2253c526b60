"""
Data model definitions
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any
from enum import Enum


MODIFIER_KEYS = ("Shift", "Control", "Alt", "Meta")
EXECUTION_KEYS = ("Enter", "Tab")


class ProductType(Enum):
    """Catalog product type"""
    READY = "ready"
    PO = "po"


class PaymentMethod:
    """Payment methods offered at the counter"""
    CASH = "CASH"
    QRIS = "QRIS"
    TRANSFER = "TRANSFER"
    DEBIT = "DEBIT"

    ALL = (CASH, QRIS, TRANSFER, DEBIT)


class PoPaymentType:
    """How a pre-order item is paid at the counter"""
    FULL = "full"
    DEPOSIT = "deposit"

    ALL = (FULL, DEPOSIT)


class ScanResult(Enum):
    """Outcome of one scanned code"""
    SUCCESS = "success"
    DUPLICATE = "duplicate"
    NOT_FOUND = "not_found"
    OUT_OF_STOCK = "out_of_stock"
    LIMIT_REACHED = "limit_reached"
    ERROR = "error"


class CartOpResult(Enum):
    """Outcome of a cart mutation"""
    ADDED = "added"
    INCREMENTED = "incremented"
    UPDATED = "updated"
    REMOVED = "removed"
    OUT_OF_STOCK = "out_of_stock"
    LIMIT_REACHED = "limit_reached"
    IGNORED = "ignored"

    @property
    def accepted(self) -> bool:
        return self in (
            CartOpResult.ADDED,
            CartOpResult.INCREMENTED,
            CartOpResult.UPDATED,
            CartOpResult.REMOVED,
        )


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _to_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_str(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class KeyEvent:
    """A single key press seen by the window-level listener"""
    key: str
    timestamp: float
    in_text_input: bool = False
    in_search_field: bool = False
    field_value: str = ""

    @property
    def is_printable(self) -> bool:
        return len(self.key) == 1

    @property
    def is_modifier(self) -> bool:
        return self.key in MODIFIER_KEYS

    @property
    def is_execution(self) -> bool:
        return self.key in EXECUTION_KEYS


@dataclass
class ScanBurst:
    """Characters believed to come from one scanner emission"""
    characters: str = ""
    started_at: float = 0
    last_char_at: float = 0

    def append(self, ch: str, now: float):
        if not self.characters:
            self.started_at = now
        self.characters += ch
        self.last_char_at = now

    def reset(self, ch: str, now: float):
        """Start a fresh burst containing only ``ch``"""
        self.characters = ch
        self.started_at = now
        self.last_char_at = now

    def clear(self):
        self.characters = ""
        self.started_at = 0
        self.last_char_at = 0

    @property
    def text(self) -> str:
        return self.characters.strip()

    def __len__(self) -> int:
        return len(self.characters)


@dataclass
class DedupEntry:
    """Most recently processed code (last write wins)"""
    code: str = ""
    processed_at: float = 0

    def is_duplicate(self, code: str, now: float, window_ms: float) -> bool:
        return bool(self.code) and code == self.code and (now - self.processed_at) < window_ms


@dataclass
class CatalogProduct:
    """Product as returned by the catalog search endpoint"""
    id: int
    name: str
    price: float = 0
    sku: str = ""
    qr_code: str = ""
    product_type: str = ProductType.READY.value
    stock: int = 0
    reserved_qty: int = 0
    image: str = ""

    @property
    def available(self) -> int:
        """Remaining headroom (stock minus reserved quota)"""
        return self.stock - self.reserved_qty

    @property
    def is_ready_stock(self) -> bool:
        return self.product_type == ProductType.READY.value

    def matches_code(self, code: str) -> bool:
        """Case-insensitive exact match on SKU or QR code"""
        normalized = code.lower()
        return (bool(self.sku) and self.sku.lower() == normalized) or \
            (bool(self.qr_code) and self.qr_code.lower() == normalized)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogProduct":
        return cls(
            id=data.get("id"),
            name=_to_str(data.get("name")),
            price=_to_float(data.get("price")),
            sku=_to_str(data.get("sku")),
            qr_code=_to_str(data.get("qr_code")),
            product_type=_to_str(data.get("product_type") or ProductType.READY.value).lower(),
            stock=_to_int(data.get("stock")),
            reserved_qty=_to_int(data.get("reserved_qty")),
            image=_to_str(data.get("image")),
        )


@dataclass
class CartLine:
    """One cart line per distinct product"""
    product_id: int
    name: str
    price: float
    product_type: str
    stock: int
    reserved_qty: int
    quantity: int = 1

    @property
    def available(self) -> int:
        return self.stock - self.reserved_qty

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity

    @classmethod
    def from_product(cls, product: CatalogProduct) -> "CartLine":
        return cls(
            product_id=product.id,
            name=product.name,
            price=product.price,
            product_type=product.product_type,
            stock=product.stock,
            reserved_qty=product.reserved_qty,
            quantity=1,
        )


@dataclass
class CustomerInfo:
    """Counter customer (walk-in guest by default)"""
    name: str = "Guest Customer"
    email: str = ""


@dataclass
class Order:
    """Order as seen by the POS screen"""
    id: Any
    order_number: str = ""
    status: str = ""
    payment_status: str = ""
    payment_url: Optional[str] = None

    @property
    def needs_payment_confirmation(self) -> bool:
        return bool(self.payment_url)

    @property
    def is_settled(self) -> bool:
        status = self.status.lower()
        return status in ("paid", "completed") or self.payment_status.lower() == "paid"

    @property
    def display_status(self) -> str:
        return (self.payment_status or self.status or "unknown").upper()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Order":
        return cls(
            id=data.get("id"),
            order_number=_to_str(data.get("order_number")),
            status=_to_str(data.get("status")),
            payment_status=_to_str(data.get("payment_status")),
            payment_url=data.get("payment_url") or None,
        )


@dataclass
class PollState:
    """Payment confirmation polling state"""
    order_id: Any = None
    is_active: bool = False


@dataclass
class ScanEvent:
    """Log record for one processed code"""
    timestamp: str
    code: str
    result: ScanResult
    message: str
    product_id: Optional[int] = None


@dataclass
class Toast:
    """Transient on-screen notification"""
    id: int
    message: str
    kind: str = "success"
    created_at: float = field(default=0)
