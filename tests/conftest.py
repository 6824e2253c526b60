"""Shared fixtures: fake clock, fake backend, sample products."""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from models import CatalogProduct, Order
from pos_api import PosApiError
from settings import PosSettings


class FakeClock:
    """Millisecond clock moved by hand."""

    def __init__(self, start: float = 10_000):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


class FakeApi:
    """In-memory stand-in for PosApiClient."""

    def __init__(self):
        self.catalog = {}
        self.search_calls = []
        self.search_errors = {}
        self.created = []
        self.order_response = Order(id=1, order_number="POS-0001", status="completed")
        self.order_error = None
        self.status_responses = []
        self.status_calls = []
        self.on_status = None
        self.on_search = None
        self.qr_calls = 0

    def search_products(self, query=""):
        self.search_calls.append(query)
        if self.on_search is not None:
            self.on_search(query)
        if query in self.search_errors:
            raise self.search_errors[query]
        return list(self.catalog.get(query, []))

    def create_order(self, order_request):
        self.created.append(order_request)
        if self.order_error is not None:
            raise self.order_error
        return self.order_response

    def check_status(self, order_id):
        self.status_calls.append(order_id)
        if self.on_status is not None:
            self.on_status()
        response = self.status_responses.pop(0) if self.status_responses else \
            Order(id=order_id, order_number="POS-0001", status="pending", payment_status="unpaid")
        if isinstance(response, Exception):
            raise response
        return response

    def generate_qr_codes(self):
        self.qr_calls += 1
        return {"message": "ok", "count": 0}


def make_product(product_id=1, name="Gojo Figure", sku=None, qr_code=None, price=1000,
                 stock=5, reserved_qty=0, product_type="ready"):
    return CatalogProduct(
        id=product_id,
        name=name,
        price=price,
        sku=sku if sku is not None else f"SKU-{product_id}",
        qr_code=qr_code if qr_code is not None else f"FZ-{product_id:04d}",
        product_type=product_type,
        stock=stock,
        reserved_qty=reserved_qty,
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def api():
    return FakeApi()


@pytest.fixture
def settings():
    return PosSettings()


@pytest.fixture
def api_error():
    return PosApiError("backend down", 500)
