"""
Scan lookup logic
De-duplicates rapid repeat scans, resolves codes against the catalog and
hands the products to the cart
"""
import threading
from typing import Callable, List, Optional
from PySide6.QtCore import QObject, Signal

from models import ScanResult, ScanEvent, DedupEntry, CatalogProduct, CartOpResult
from cart_engine import CartEngine
from code_segmenter import segment_codes
from settings import PosSettings
from utils import get_timestamp, now_ms, sanitize_barcode, truncate_code


def resolve_product(code: str, candidates: List[CatalogProduct]) -> Optional[CatalogProduct]:
    """
    Pick the product a scanned code refers to

    Exact SKU / QR code match (case-insensitive) wins, otherwise the first
    candidate; None when there is nothing to choose from.
    """
    for product in candidates:
        if product.matches_code(code):
            return product
    return candidates[0] if candidates else None


class ScanResolver(QObject):
    """Scan batch processing"""

    # Signals
    notice = Signal(str, str)  # message, kind
    scan_processed = Signal(object)  # ScanEvent
    batch_started = Signal()
    batch_finished = Signal()
    log_message = Signal(str)

    def __init__(
        self,
        api,
        cart: CartEngine,
        settings: Optional[PosSettings] = None,
        clock: Callable[[], float] = now_ms,
        parent=None
    ):
        super().__init__(parent)
        self.api = api
        self.cart = cart
        self._settings = settings or PosSettings()
        self._clock = clock

        # Processing flag (one batch at a time)
        self._is_processing: bool = False
        self._guard = threading.Lock()
        self._last_processed = DedupEntry()
        self._alive = True

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def last_processed(self) -> DedupEntry:
        return self._last_processed

    def _acquire(self) -> bool:
        with self._guard:
            if self._is_processing or not self._alive:
                return False
            self._is_processing = True
            return True

    def _release(self):
        with self._guard:
            self._is_processing = False

    def submit(self, raw: str) -> bool:
        """
        Process a scanned string on a worker thread

        Returns:
            False when a batch is already in flight (the scan is dropped)
        """
        if not self._acquire():
            self.log_message.emit(f"[Ignored] batch in progress: {raw}")
            return False

        def _run():
            try:
                self._process_raw(raw)
            finally:
                self._release()
                if self._alive:
                    self.batch_finished.emit()

        threading.Thread(target=_run, daemon=True).start()
        return True

    def submit_decoded(self, text: str) -> bool:
        """Entry point for a camera QR decoder result"""
        return self.submit(text)

    def process_raw(self, raw: str) -> List[ScanEvent]:
        """Segment and process a scanned string synchronously"""
        if not self._acquire():
            self.log_message.emit(f"[Ignored] batch in progress: {raw}")
            return []
        try:
            return self._process_raw(raw)
        finally:
            self._release()
            if self._alive:
                self.batch_finished.emit()

    def process_codes(self, codes: List[str]) -> List[ScanEvent]:
        """Process already segmented codes synchronously"""
        if not self._acquire():
            self.log_message.emit("[Ignored] batch in progress")
            return []
        try:
            return self._process_codes(codes)
        finally:
            self._release()
            if self._alive:
                self.batch_finished.emit()

    def _process_raw(self, raw: str) -> List[ScanEvent]:
        raw = sanitize_barcode(raw)
        if len(raw) < self._settings.min_execute_length:
            return []

        codes = segment_codes(raw, self._settings.code_prefix)
        if len(codes) > 1:
            self.log_message.emit(f"[Split] {raw} -> {', '.join(codes)}")
        return self._process_codes(codes)

    def _process_codes(self, codes: List[str]) -> List[ScanEvent]:
        """
        Resolve codes one after another

        1) skip a code identical to the previous one inside the dedup window
        2) search the catalog
        3) exact SKU/QR match, otherwise the first result
        4) add to the cart
        """
        self.batch_started.emit()
        events = []

        for code in codes:
            if not self._alive:
                break

            now = self._clock()
            if self._last_processed.is_duplicate(code, now, self._settings.dedup_window_ms):
                self.log_message.emit(f"[Ignored] double scan: {code}")
                self._record(events, self._event(code, ScanResult.DUPLICATE, f"Double scan ignored: {code}"))
                continue
            self._last_processed = DedupEntry(code=code, processed_at=now)

            try:
                candidates = self.api.search_products(code)
            except Exception as e:
                # Lookup failures never stop the rest of the batch
                self.log_message.emit(f"[Error] lookup failed for {code}: {str(e)}")
                self._notify("Failed to search product", "error")
                self._record(events, self._event(code, ScanResult.ERROR, f"Lookup failed: {str(e)}"))
                continue

            if not self._alive:
                break
            self._record(events, self._apply(code, candidates))

        return events

    def _record(self, events: List[ScanEvent], event: ScanEvent):
        """Collect an event and report it right away (log follows scan order)"""
        events.append(event)
        if self._alive:
            self.scan_processed.emit(event)

    def _apply(self, code: str, candidates: List[CatalogProduct]) -> ScanEvent:
        product = resolve_product(code, candidates)

        if product is None:
            message = f'Code "{truncate_code(code)}" is not registered'
            self._notify(message, "error")
            return self._event(code, ScanResult.NOT_FOUND, message)

        if product.is_ready_stock and product.available <= 0:
            message = f"{product.name} is out of stock"
            self._notify(message, "error")
            return self._event(code, ScanResult.OUT_OF_STOCK, message, product.id)

        result = self.cart.add_to_cart(product)
        if result.accepted:
            message = f"{product.name} added"
            self._notify(message, "success")
            return self._event(code, ScanResult.SUCCESS, message, product.id)

        # Rejections are announced by the cart itself (limit_rejected)
        if result == CartOpResult.OUT_OF_STOCK:
            message = f"{product.name} quota is full"
            self.log_message.emit(f"[Rejected] {message}")
            return self._event(code, ScanResult.OUT_OF_STOCK, message, product.id)

        message = f"{product.name}: stock/quota limit reached"
        self.log_message.emit(f"[Rejected] {message}")
        return self._event(code, ScanResult.LIMIT_REACHED, message, product.id)

    def _notify(self, message: str, kind: str):
        if self._alive:
            self.notice.emit(message, kind)

    def _event(self, code: str, result: ScanResult, message: str, product_id=None) -> ScanEvent:
        return ScanEvent(
            timestamp=get_timestamp(),
            code=code,
            result=result,
            message=message,
            product_id=product_id,
        )

    def reset_dedup(self):
        """Forget the last processed code"""
        self._last_processed = DedupEntry()

    def shutdown(self):
        """Stale batch callbacks become no-ops after this"""
        self._alive = False
