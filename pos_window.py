"""
PySide6 POS screen
"""
import sys
import threading
from typing import List, Optional
from PySide6.QtWidgets import (
    QApplication, QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QTableWidget, QTableWidgetItem, QTextEdit, QPushButton,
    QLabel, QLineEdit, QGroupBox, QSplitter, QHeaderView,
    QMessageBox, QDialog, QListWidget, QListWidgetItem, QComboBox, QFormLayout
)
from PySide6.QtCore import Qt, Signal, Slot, QTimer, QUrl
from PySide6.QtGui import QFont, QColor, QDesktopServices

from models import (
    ScanResult, ScanEvent, CatalogProduct, CustomerInfo, Order, PaymentMethod,
    PoPaymentType, ProductType, Toast
)
from settings import PosSettings, load_settings
from pos_api import PosApiClient, PosApiError
from cart_engine import CartEngine
from input_classifier import InputClassifier
from key_event_filter import KeyEventFilter
from scanner_listener import ScannerListener
from scan_resolver import ScanResolver
from payment_poller import PaymentPoller
from checkout import CheckoutController
from notifications import ToastCenter
from utils import get_timestamp, format_price

TOAST_COLORS = {
    "success": "#059669",
    "error": "#E11D48",
    "warning": "#D97706",
    "info": "#2563EB",
}


class PaymentDialog(QDialog):
    """QR payment dialog (closing it cancels polling)"""

    def __init__(self, order: Order, poller: PaymentPoller, parent=None):
        super().__init__(parent)
        self.order = order
        self.poller = poller
        self.setWindowTitle("QRIS Payment")
        self.setMinimumSize(420, 260)
        self._init_ui()

        self.poller.check_failed.connect(self._on_check_done)
        self.poller.status_info.connect(self._on_check_done)

    def _init_ui(self):
        layout = QVBoxLayout(self)

        header = QLabel(f"<h2>Order #{self.order.order_number}</h2>")
        header.setAlignment(Qt.AlignCenter)
        layout.addWidget(header)

        hint = QLabel("Scan now to pay. The status is confirmed automatically within seconds.")
        hint.setWordWrap(True)
        hint.setAlignment(Qt.AlignCenter)
        layout.addWidget(hint)

        url_label = QLabel(f"<a href='{self.order.payment_url}'>{self.order.payment_url}</a>")
        url_label.setOpenExternalLinks(True)
        url_label.setWordWrap(True)
        url_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(url_label)

        btn_layout = QHBoxLayout()

        open_btn = QPushButton("Open payment page")
        open_btn.clicked.connect(lambda: QDesktopServices.openUrl(QUrl(self.order.payment_url)))
        btn_layout.addWidget(open_btn)

        self.check_btn = QPushButton("Check payment status")
        self.check_btn.clicked.connect(self._on_check_now)
        btn_layout.addWidget(self.check_btn)

        close_btn = QPushButton("Close")
        close_btn.clicked.connect(self.reject)
        btn_layout.addWidget(close_btn)

        layout.addLayout(btn_layout)

    @Slot()
    def _on_check_now(self):
        """Manual status check"""
        self.check_btn.setEnabled(False)
        self.check_btn.setText("Checking...")
        if not self.poller.check_now():
            self._on_check_done()

    @Slot()
    def _on_check_done(self, *args):
        self.check_btn.setEnabled(True)
        self.check_btn.setText("Check payment status")


class PosWindow(QMainWindow):
    """Point-of-sale main window"""

    # Backend results from worker threads (delivered queued to the GUI thread)
    search_finished = Signal(int, object, str)  # request number, products or None, error
    initial_products_loaded = Signal(object, str)  # products or None, error
    qr_generated = Signal(object, str, bool)  # result or None, error, requested by operator

    def __init__(self, settings: Optional[PosSettings] = None, api=None):
        super().__init__()

        self.settings = settings or load_settings()
        self._closed = False
        self._search_seq = 0

        # Module setup
        self.api = api or PosApiClient.from_settings(self.settings)
        self.cart = CartEngine(self)
        self.toasts = ToastCenter(self.settings, self)
        self.classifier = InputClassifier(self.settings, parent=self)
        self.resolver = ScanResolver(self.api, self.cart, self.settings, parent=self)
        self.poller = PaymentPoller(self.api, self.cart, self.settings, self)
        self.checkout = CheckoutController(self.api, self.cart, self.poller, self)
        self.scanner = ScannerListener()

        self._initial_products: List[CatalogProduct] = []
        self._payment_dialog: Optional[PaymentDialog] = None

        self._search_timer = QTimer(self)
        self._search_timer.setSingleShot(True)
        self._search_timer.setInterval(self.settings.search_debounce_ms)
        self._search_timer.timeout.connect(self._run_search)

        # UI setup
        self._init_ui()
        self._connect_signals()

        # Window-level key listener, installed once for the screen's lifetime
        self.key_filter = KeyEventFilter(self.classifier, lambda: self.search_edit, parent=self)
        self.key_filter.install(QApplication.instance())

        if self.settings.global_capture:
            self.scanner.start()

        QTimer.singleShot(0, self._initial_load)

    def _init_ui(self):
        """Build the UI"""
        self.setWindowTitle("POS Scan Station")
        self.setMinimumSize(1200, 800)

        central = QWidget()
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        main_layout.setSpacing(10)
        main_layout.setContentsMargins(15, 15, 15, 15)

        # === Top: search / scan ===
        main_layout.addWidget(self._create_search_section())

        # === Middle: products | cart + checkout, log below ===
        splitter = QSplitter(Qt.Vertical)

        body = QWidget()
        body_layout = QHBoxLayout(body)
        body_layout.setSpacing(10)
        body_layout.addWidget(self._create_products_section(), 6)
        body_layout.addWidget(self._create_cart_section(), 4)
        splitter.addWidget(body)

        splitter.addWidget(self._create_log_section())
        splitter.setSizes([600, 150])
        main_layout.addWidget(splitter, 1)

        # Toast strip
        self.toast_container = QWidget()
        self.toast_layout = QVBoxLayout(self.toast_container)
        self.toast_layout.setContentsMargins(0, 0, 0, 0)
        self.toast_layout.setSpacing(4)
        main_layout.addWidget(self.toast_container)

        # === Bottom: status bar ===
        self._create_status_bar()

        self._apply_styles()

    def _create_search_section(self) -> QGroupBox:
        """Search field, QR sync"""
        group = QGroupBox("Scan / Search")
        layout = QHBoxLayout(group)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search product, SKU, or scan a QR code...")
        self.search_edit.setFont(QFont("Segoe UI", 13))
        self.search_edit.textChanged.connect(self._on_search_text_changed)
        layout.addWidget(self.search_edit, 1)

        self.generate_qr_btn = QPushButton("Generate QR")
        self.generate_qr_btn.setToolTip("Generate QR codes for all products")
        self.generate_qr_btn.clicked.connect(self._on_generate_qr)
        layout.addWidget(self.generate_qr_btn)

        return group

    def _create_products_section(self) -> QGroupBox:
        """Search results / product grid"""
        group = QGroupBox("Products")
        layout = QVBoxLayout(group)

        self.product_list = QListWidget()
        self.product_list.setAlternatingRowColors(True)
        self.product_list.itemActivated.connect(self._on_product_activated)
        layout.addWidget(self.product_list)

        return group

    def _create_cart_section(self) -> QGroupBox:
        """Cart table and checkout form"""
        group = QGroupBox("Cart")
        layout = QVBoxLayout(group)

        self.cart_table = QTableWidget()
        self.cart_table.setColumnCount(6)
        self.cart_table.setHorizontalHeaderLabels([
            "Product", "Price", "Qty", "Subtotal", "", ""
        ])
        self.cart_table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.cart_table.setAlternatingRowColors(True)
        layout.addWidget(self.cart_table)

        total_layout = QHBoxLayout()
        total_layout.addWidget(QLabel("Total:"))
        total_layout.addStretch()
        self.total_label = QLabel(format_price(0))
        self.total_label.setFont(QFont("Consolas", 16, QFont.Bold))
        self.total_label.setStyleSheet("color: #2196F3;")
        total_layout.addWidget(self.total_label)
        layout.addLayout(total_layout)

        form = QFormLayout()
        self.customer_name_edit = QLineEdit(CustomerInfo().name)
        form.addRow("Customer:", self.customer_name_edit)
        self.customer_email_edit = QLineEdit()
        self.customer_email_edit.setPlaceholderText("optional")
        form.addRow("Email:", self.customer_email_edit)

        self.payment_combo = QComboBox()
        self.payment_combo.addItems(PaymentMethod.ALL)
        self.payment_combo.currentTextChanged.connect(self._update_checkout_button)
        form.addRow("Payment:", self.payment_combo)

        self.po_type_combo = QComboBox()
        self.po_type_combo.addItem("Full payment (100% of price)", PoPaymentType.FULL)
        self.po_type_combo.addItem("Deposit (down payment)", PoPaymentType.DEPOSIT)
        self.po_type_combo.setEnabled(False)
        form.addRow("Pre-order:", self.po_type_combo)
        layout.addLayout(form)

        btn_layout = QHBoxLayout()
        clear_btn = QPushButton("Clear")
        clear_btn.clicked.connect(self.cart.clear_cart)
        btn_layout.addWidget(clear_btn)

        self.checkout_btn = QPushButton("Process transaction")
        self.checkout_btn.clicked.connect(self._on_checkout)
        self.checkout_btn.setEnabled(False)
        btn_layout.addWidget(self.checkout_btn, 1)
        layout.addLayout(btn_layout)

        return group

    def _create_log_section(self) -> QGroupBox:
        """Log section"""
        group = QGroupBox("Log")
        layout = QVBoxLayout(group)

        self.log_text = QTextEdit()
        self.log_text.setReadOnly(True)
        self.log_text.setFont(QFont("Consolas", 9))
        self.log_text.setFocusPolicy(Qt.NoFocus)
        layout.addWidget(self.log_text)

        return group

    def _create_status_bar(self):
        """Status bar"""
        status = self.statusBar()

        self.status_scanner = QLabel("Scanner: window")
        self.status_cart = QLabel("Cart: 0 item(s)")
        self.status_payment = QLabel("Payment: idle")

        status.addWidget(self.status_scanner)
        status.addWidget(QLabel(" | "))
        status.addWidget(self.status_cart)
        status.addWidget(QLabel(" | "))
        status.addWidget(self.status_payment)

    def _apply_styles(self):
        """Stylesheet"""
        self.setStyleSheet("""
            QMainWindow {
                background-color: #f5f5f5;
            }
            QGroupBox {
                font-weight: bold;
                border: 1px solid #ddd;
                border-radius: 6px;
                margin-top: 10px;
                padding-top: 10px;
                background-color: white;
            }
            QGroupBox::title {
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 5px;
            }
            QTableWidget {
                border: 1px solid #ddd;
                border-radius: 4px;
                gridline-color: #eee;
            }
            QPushButton {
                background-color: #2196F3;
                color: white;
                border: none;
                padding: 8px 16px;
                border-radius: 4px;
                font-weight: bold;
            }
            QPushButton:hover {
                background-color: #1976D2;
            }
            QPushButton:disabled {
                background-color: #BDBDBD;
            }
            QLineEdit {
                border: 1px solid #ddd;
                border-radius: 4px;
                padding: 6px;
            }
            QLineEdit:focus {
                border-color: #2196F3;
            }
            QTextEdit {
                border: 1px solid #ddd;
                border-radius: 4px;
                background-color: #1e1e1e;
                color: #d4d4d4;
            }
        """)

    def _connect_signals(self):
        """Signal wiring"""
        # Classifier
        self.classifier.code_ready.connect(self._on_code_ready)
        self.classifier.search_field_cleared.connect(self._on_search_field_cleared)
        self.classifier.log_message.connect(self._add_log)

        # Background capture
        self.scanner.key_captured.connect(self._on_global_key)
        self.scanner.status_changed.connect(self._add_log)

        # Resolver (emits from its worker thread: bound slots only)
        self.resolver.notice.connect(self.toasts.show)
        self.resolver.scan_processed.connect(self._on_scan_processed)
        self.resolver.batch_finished.connect(self._on_batch_finished)
        self.resolver.log_message.connect(self._add_log)

        # Cart
        self.cart.cart_changed.connect(self._update_cart_table)
        self.cart.limit_rejected.connect(self._on_limit_rejected)
        self.cart.log_message.connect(self._add_log)

        # Checkout / payment
        self.checkout.order_completed.connect(self._on_order_completed)
        self.checkout.payment_pending.connect(self._on_payment_pending)
        self.checkout.checkout_failed.connect(self._on_checkout_failed)
        self.checkout.log_message.connect(self._add_log)
        self.poller.settled.connect(self._on_payment_settled)
        self.poller.status_info.connect(self._on_payment_info)
        self.poller.check_failed.connect(self._on_payment_check_failed)
        self.poller.stopped.connect(self._on_poller_stopped)
        self.poller.log_message.connect(self._add_log)

        # Backend results
        self.search_finished.connect(self._on_search_finished)
        self.initial_products_loaded.connect(self._on_initial_products_loaded)
        self.qr_generated.connect(self._on_qr_generated)

        # Toasts
        self.toasts.toasts_changed.connect(self._render_toasts)

    # === Startup ===

    def _in_background(self, target, *args):
        """Run a backend call on a daemon thread; results come back as signals"""
        threading.Thread(target=target, args=args, daemon=True).start()

    @Slot()
    def _initial_load(self):
        """Sync QR codes once, then load the default product grid"""
        self._in_background(self._sync_and_load)
        self.search_edit.setFocus()

    def _sync_and_load(self):
        """Worker thread"""
        try:
            self.qr_generated.emit(self.api.generate_qr_codes(), "", False)
        except PosApiError as e:
            self.qr_generated.emit(None, e.message, False)
        self._fetch_initial_products()

    def _fetch_initial_products(self):
        """Worker thread"""
        try:
            self.initial_products_loaded.emit(self.api.search_products(""), "")
        except PosApiError as e:
            self.initial_products_loaded.emit(None, e.message)

    @Slot(object, str)
    def _on_initial_products_loaded(self, products, error: str):
        if self._closed:
            return
        if products is None:
            self._add_log(f"[Error] loading products failed: {error}")
            products = []
        self._initial_products = products
        if len(self.search_edit.text().strip()) < 2:
            self._show_products(self._initial_products)

    # === Search ===

    @Slot(str)
    def _on_search_text_changed(self, text: str):
        self._search_timer.start()

    @Slot()
    def _run_search(self):
        """Debounced live search"""
        self._search_seq += 1
        query = self.search_edit.text().strip()
        if len(query) < 2:
            self._show_products(self._initial_products)
            return
        self._in_background(self._fetch_search, self._search_seq, query)

    def _fetch_search(self, seq: int, query: str):
        """Worker thread"""
        try:
            self.search_finished.emit(seq, self.api.search_products(query), "")
        except PosApiError as e:
            self.search_finished.emit(seq, None, e.message)

    @Slot(int, object, str)
    def _on_search_finished(self, seq: int, products, error: str):
        # Only the latest request may repaint the list
        if self._closed or seq != self._search_seq:
            return
        if products is None:
            self._add_log(f"[Error] search failed: {error}")
            return
        self._show_products(products)

    def _show_products(self, products: List[CatalogProduct]):
        self.product_list.clear()
        for product in products:
            label = f"{product.name}  |  {product.sku or '-'}  |  {format_price(product.price)}"
            if product.product_type == ProductType.PO.value:
                label += f"  |  PO quota {max(product.available, 0)}"
            else:
                label += f"  |  stock {max(product.available, 0)}"
            item = QListWidgetItem(label)
            item.setData(Qt.UserRole, product)
            if product.available <= 0:
                item.setForeground(QColor("#9E9E9E"))
            self.product_list.addItem(item)

    @Slot(QListWidgetItem)
    def _on_product_activated(self, item: QListWidgetItem):
        """Manual add from the product list"""
        product = item.data(Qt.UserRole)
        if product is None:
            return
        # Keystrokes that led here are not a scan
        self.classifier.clear_buffer()
        self.cart.add_to_cart(product)
        self._reset_search()

    def _reset_search(self):
        self._search_timer.stop()
        self._search_seq += 1
        self.search_edit.blockSignals(True)
        self.search_edit.clear()
        self.search_edit.blockSignals(False)
        self._show_products(self._initial_products)
        QTimer.singleShot(100, self.search_edit.setFocus)

    @Slot()
    def _on_generate_qr(self):
        """Assign QR codes to products without one"""
        self.generate_qr_btn.setEnabled(False)
        self._in_background(self._generate_qr)

    def _generate_qr(self):
        """Worker thread"""
        try:
            self.qr_generated.emit(self.api.generate_qr_codes(), "", True)
        except PosApiError as e:
            self.qr_generated.emit(None, e.message, True)
            return
        self._fetch_initial_products()

    @Slot(object, str, bool)
    def _on_qr_generated(self, result, error: str, requested: bool):
        if self._closed:
            return
        if not requested:
            # Startup sync only logs
            if result is None:
                self._add_log(f"[Error] QR auto-sync failed: {error}")
            return

        self.generate_qr_btn.setEnabled(True)
        if result is None:
            QMessageBox.critical(self, "Error", f"QR generation failed: {error}")
            return
        message = result.get("message") or f"{result.get('count', 0)} product(s) received a QR code"
        QMessageBox.information(self, "QR Code Generated", message)

    # === Scanning ===

    @Slot(object)
    def _on_global_key(self, key_event):
        """Background capture only matters while another window is active"""
        if self.isActiveWindow():
            return
        self.classifier.on_key_down(key_event)

    @Slot(str)
    def _on_code_ready(self, code: str):
        self.resolver.submit(code)

    @Slot()
    def _on_search_field_cleared(self):
        self._search_timer.stop()
        self.search_edit.blockSignals(True)
        self.search_edit.clear()
        self.search_edit.blockSignals(False)

    @Slot()
    def _on_batch_finished(self):
        self._reset_search()

    @Slot(object)
    def _on_scan_processed(self, event: ScanEvent):
        if event.result == ScanResult.SUCCESS:
            color = "#4CAF50"
        elif event.result in (ScanResult.DUPLICATE, ScanResult.LIMIT_REACHED):
            color = "#FF9800"
        else:
            color = "#F44336"
        self._add_log(f"<span style='color:{color}'>{event.message}</span>")

    # === Cart ===

    @Slot()
    def _update_cart_table(self):
        lines = self.cart.lines
        self.cart_table.setRowCount(len(lines))

        for row, line in enumerate(lines):
            name = line.name
            if line.product_type == ProductType.PO.value:
                name += " (PO)"
            self.cart_table.setItem(row, 0, QTableWidgetItem(name))
            self.cart_table.setItem(row, 1, QTableWidgetItem(format_price(line.price)))
            qty_item = QTableWidgetItem(str(line.quantity))
            qty_item.setTextAlignment(Qt.AlignCenter)
            self.cart_table.setItem(row, 2, qty_item)
            self.cart_table.setItem(row, 3, QTableWidgetItem(format_price(line.subtotal)))

            qty_widget = QWidget()
            qty_layout = QHBoxLayout(qty_widget)
            qty_layout.setContentsMargins(0, 0, 0, 0)
            minus_btn = QPushButton("-")
            minus_btn.setFocusPolicy(Qt.NoFocus)
            minus_btn.clicked.connect(lambda _=False, pid=line.product_id: self.cart.update_quantity(pid, -1))
            plus_btn = QPushButton("+")
            plus_btn.setFocusPolicy(Qt.NoFocus)
            plus_btn.clicked.connect(lambda _=False, pid=line.product_id: self.cart.update_quantity(pid, 1))
            qty_layout.addWidget(minus_btn)
            qty_layout.addWidget(plus_btn)
            self.cart_table.setCellWidget(row, 4, qty_widget)

            remove_btn = QPushButton("x")
            remove_btn.setFocusPolicy(Qt.NoFocus)
            remove_btn.clicked.connect(lambda _=False, pid=line.product_id: self.cart.remove_from_cart(pid))
            self.cart_table.setCellWidget(row, 5, remove_btn)

        self.total_label.setText(format_price(self.cart.calculate_total()))
        self.status_cart.setText(f"Cart: {self.cart.item_count} item(s)")
        self.po_type_combo.setEnabled(any(l.product_type == ProductType.PO.value for l in lines))
        self._update_checkout_button()

    @Slot(str, str)
    def _on_limit_rejected(self, title: str, message: str):
        self.toasts.show(f"{title}: {message}", "warning")

    # === Checkout / payment ===

    @Slot()
    def _update_checkout_button(self, *args):
        if self.payment_combo.currentText() == PaymentMethod.QRIS:
            self.checkout_btn.setText("Issue QRIS")
        else:
            self.checkout_btn.setText("Process transaction")
        self.checkout_btn.setEnabled(
            not self.cart.is_empty and not self.poller.is_active and not self.checkout.is_processing
        )

    @Slot()
    def _on_checkout(self):
        customer = CustomerInfo(
            name=self.customer_name_edit.text().strip() or CustomerInfo().name,
            email=self.customer_email_edit.text().strip(),
        )
        # The outcome arrives through the checkout signals
        self.checkout.submit(
            customer,
            self.payment_combo.currentText(),
            self.po_type_combo.currentData() or PoPaymentType.FULL,
        )
        self._update_checkout_button()

    @Slot(object)
    def _on_order_completed(self, order: Order):
        self._update_checkout_button()
        QMessageBox.information(self, "Success", f"Invoice {order.order_number} has been issued")
        self._reset_form()

    @Slot(object)
    def _on_payment_pending(self, order: Order):
        self._update_checkout_button()
        self.status_payment.setText(f"Payment: waiting #{order.order_number}")
        self._payment_dialog = PaymentDialog(order, self.poller, self)
        self._payment_dialog.rejected.connect(self._on_payment_dialog_closed)
        self._payment_dialog.show()

    @Slot()
    def _on_payment_dialog_closed(self):
        # Closing without settlement keeps the cart for a retry
        self.poller.cancel()
        self._payment_dialog = None

    @Slot(str)
    def _on_checkout_failed(self, message: str):
        self._update_checkout_button()
        QMessageBox.critical(self, "Error", message)

    @Slot(object)
    def _on_payment_settled(self, order: Order):
        if self._payment_dialog is not None:
            dialog = self._payment_dialog
            self._payment_dialog = None
            dialog.rejected.disconnect(self._on_payment_dialog_closed)
            dialog.accept()
        QMessageBox.information(
            self, "Payment Successful",
            f"QRIS transaction confirmed! Order #{order.order_number}"
        )
        self._reset_form()

    @Slot(str)
    def _on_payment_info(self, message: str):
        self.toasts.show(message, "info")

    @Slot(str)
    def _on_payment_check_failed(self, message: str):
        self.toasts.show(message, "error")

    @Slot()
    def _on_poller_stopped(self):
        self.status_payment.setText("Payment: idle")
        self._update_checkout_button()

    def _reset_form(self):
        """Back to a walk-in cash sale"""
        self.customer_name_edit.setText(CustomerInfo().name)
        self.customer_email_edit.clear()
        self.payment_combo.setCurrentText(PaymentMethod.CASH)
        # Next customer may scan the same item right away
        self.resolver.reset_dedup()
        self._reset_search()

    # === Toasts / log ===

    @Slot(list)
    def _render_toasts(self, toasts: List[Toast]):
        while self.toast_layout.count():
            item = self.toast_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()

        for toast in toasts:
            label = QLabel(toast.message)
            label.setStyleSheet(
                f"background-color: {TOAST_COLORS.get(toast.kind, '#2563EB')};"
                "color: white; font-weight: bold; padding: 8px 14px; border-radius: 8px;"
            )
            self.toast_layout.addWidget(label)

    @Slot(str)
    def _add_log(self, message: str):
        """Append a log line"""
        if not hasattr(self, 'log_text') or self.log_text is None:
            return

        self.log_text.append(f"[{get_timestamp()}] {message}")
        self.log_text.verticalScrollBar().setValue(
            self.log_text.verticalScrollBar().maximum()
        )

    def closeEvent(self, event):
        """Tear down listeners and timers"""
        self._closed = True
        self.key_filter.uninstall()
        self.classifier.teardown()
        self.scanner.stop()
        self.resolver.shutdown()
        self.poller.stop()
        self._search_timer.stop()

        if self._payment_dialog is not None:
            self._payment_dialog.close()
        event.accept()


def run_app():
    """Run the application"""
    app = QApplication(sys.argv)
    app.setStyle("Fusion")

    window = PosWindow()
    window.show()

    return app.exec()
