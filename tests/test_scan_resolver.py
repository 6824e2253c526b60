"""Tests for code lookup, double-scan suppression and cart hand-off."""

import pytest

from cart_engine import CartEngine
from conftest import make_product
from models import ScanResult
from pos_api import PosApiError
from scan_resolver import ScanResolver, resolve_product
from settings import PosSettings


@pytest.fixture
def cart(qapp):
    return CartEngine()


@pytest.fixture
def resolver(api, cart, clock):
    return ScanResolver(api, cart, PosSettings(), clock=clock)


@pytest.fixture
def notices(resolver):
    seen = []
    resolver.notice.connect(lambda message, kind: seen.append((kind, message)))
    return seen


class TestResolveProduct:
    def test_exact_sku_match_wins(self):
        first = make_product(1, sku="FZ-10")
        exact = make_product(2, sku="fz-1")
        assert resolve_product("FZ-1", [first, exact]) is exact

    def test_exact_qr_match_wins(self):
        first = make_product(1, qr_code="FZ-0001X")
        exact = make_product(2, qr_code="FZ-0001")
        assert resolve_product("fz-0001", [first, exact]) is exact

    def test_first_candidate_without_exact_match(self):
        first = make_product(1)
        second = make_product(2)
        assert resolve_product("gojo", [first, second]) is first

    def test_nothing_to_resolve(self):
        assert resolve_product("gojo", []) is None


class TestDedupWindow:
    def test_repeat_inside_window_is_skipped(self, resolver, api, cart, clock):
        api.catalog["FZ-0001"] = [make_product(1)]
        resolver.process_codes(["FZ-0001"])
        clock.advance(500)
        events = resolver.process_codes(["FZ-0001"])
        assert api.search_calls == ["FZ-0001"]
        assert events[0].result == ScanResult.DUPLICATE
        assert cart.get_line(1).quantity == 1

    def test_repeat_after_window_is_looked_up_again(self, resolver, api, cart, clock):
        api.catalog["FZ-0001"] = [make_product(1)]
        resolver.process_codes(["FZ-0001"])
        clock.advance(1000)
        resolver.process_codes(["FZ-0001"])
        assert api.search_calls == ["FZ-0001", "FZ-0001"]
        assert cart.get_line(1).quantity == 2

    def test_only_last_code_is_remembered(self, resolver, api, clock):
        api.catalog["FZ-0001"] = [make_product(1)]
        api.catalog["FZ-0002"] = [make_product(2)]
        resolver.process_codes(["FZ-0001"])
        clock.advance(100)
        resolver.process_codes(["FZ-0002"])
        clock.advance(100)
        resolver.process_codes(["FZ-0001"])
        assert api.search_calls == ["FZ-0001", "FZ-0002", "FZ-0001"]
        assert resolver.last_processed.code == "FZ-0001"

    def test_reset_dedup(self, resolver, api):
        api.catalog["FZ-0001"] = [make_product(1)]
        resolver.process_codes(["FZ-0001"])
        resolver.reset_dedup()
        resolver.process_codes(["FZ-0001"])
        assert len(api.search_calls) == 2


class TestBatchProcessing:
    def test_success_adds_and_notifies(self, resolver, api, cart, notices):
        api.catalog["FZ-0001"] = [make_product(1, name="Gojo Figure")]
        events = resolver.process_codes(["FZ-0001"])
        assert events[0].result == ScanResult.SUCCESS
        assert events[0].product_id == 1
        assert notices == [("success", "Gojo Figure added")]
        assert cart.get_line(1).quantity == 1

    def test_unresolved_code_notice_is_truncated(self, resolver, notices):
        events = resolver.process_codes(["FZ-UNKNOWN-CODE-12345"])
        assert events[0].result == ScanResult.NOT_FOUND
        assert notices == [("error", 'Code "FZ-UNKNOWN-CODE..." is not registered')]

    def test_ready_stock_without_headroom_skips_cart(self, resolver, api, cart, notices):
        api.catalog["FZ-0001"] = [make_product(1, name="Nendo", stock=1, reserved_qty=1)]
        events = resolver.process_codes(["FZ-0001"])
        assert events[0].result == ScanResult.OUT_OF_STOCK
        assert cart.is_empty
        assert notices == [("error", "Nendo is out of stock")]

    def test_full_preorder_quota_is_rejected_by_cart(self, resolver, api, cart, notices):
        alerts = []
        cart.limit_rejected.connect(lambda title, message: alerts.append(title))
        api.catalog["FZ-0009"] = [make_product(9, name="PO Statue", product_type="po",
                                               stock=3, reserved_qty=3)]
        events = resolver.process_codes(["FZ-0009"])
        assert events[0].result == ScanResult.OUT_OF_STOCK
        assert cart.is_empty
        assert alerts == ["Out of stock / quota full"]
        assert notices == []

    def test_ceiling_reached_is_reported(self, resolver, api, cart, clock, notices):
        alerts = []
        cart.limit_rejected.connect(lambda title, message: alerts.append(message))
        api.catalog["FZ-0001"] = [make_product(1, name="Gojo Figure", stock=1)]
        resolver.process_codes(["FZ-0001"])
        clock.advance(2000)
        events = resolver.process_codes(["FZ-0001"])
        assert events[0].result == ScanResult.LIMIT_REACHED
        assert cart.get_line(1).quantity == 1
        assert alerts == ["Only 1 unit(s) available"]
        assert notices == [("success", "Gojo Figure added")]

    def test_lookup_error_does_not_abort_batch(self, resolver, api, cart, notices):
        api.search_errors["FZ-A"] = PosApiError("timeout")
        api.catalog["FZ-B"] = [make_product(2, name="B")]
        events = resolver.process_codes(["FZ-A", "FZ-B"])
        assert [e.result for e in events] == [ScanResult.ERROR, ScanResult.SUCCESS]
        assert notices[0] == ("error", "Failed to search product")
        assert cart.get_line(2) is not None

    def test_concatenated_scan_is_looked_up_in_order(self, resolver, api, cart):
        api.catalog["FZ-A"] = [make_product(1, name="A")]
        api.catalog["FZ-B"] = [make_product(2, name="B")]
        resolver.process_raw("FZ-AFZ-B")
        assert api.search_calls == ["FZ-A", "FZ-B"]
        assert [line.product_id for line in cart.lines] == [1, 2]

    def test_each_code_is_reported_before_the_next_lookup(self, resolver, api):
        reported = []
        seen_at_lookup = []
        resolver.scan_processed.connect(lambda event: reported.append(event.code))
        api.on_search = lambda query: seen_at_lookup.append(list(reported))
        resolver.process_codes(["FZ-A", "FZ-B", "FZ-C"])
        assert seen_at_lookup == [[], ["FZ-A"], ["FZ-A", "FZ-B"]]
        assert reported == ["FZ-A", "FZ-B", "FZ-C"]

    def test_too_short_raw_code_is_ignored(self, resolver, api):
        assert resolver.process_raw("x") == []
        assert api.search_calls == []

    def test_batch_finished_emitted(self, resolver, api):
        finished = []
        resolver.batch_finished.connect(lambda: finished.append(True))
        resolver.process_codes(["FZ-0001"])
        assert finished == [True]
        assert not resolver.is_processing


class TestReentrancy:
    def test_nested_batch_is_ignored(self, resolver, api):
        nested = []
        api.catalog["FZ-0001"] = [make_product(1)]
        api.on_search = lambda query: nested.append(resolver.process_raw("FZ-0002"))
        resolver.process_codes(["FZ-0001"])
        assert nested == [[]]
        assert api.search_calls == ["FZ-0001"]

    def test_submit_refused_while_processing(self, resolver, api):
        results = []
        api.on_search = lambda query: results.append(resolver.submit("FZ-0002"))
        resolver.process_codes(["FZ-0001"])
        assert results == [False]

    def test_submit_runs_on_worker_thread(self, qtbot, resolver, api, cart):
        api.catalog["FZ-0001"] = [make_product(1)]
        with qtbot.waitSignal(resolver.batch_finished, timeout=3000):
            assert resolver.submit("FZ-0001")
        qtbot.waitUntil(lambda: not resolver.is_processing, timeout=3000)
        assert cart.get_line(1).quantity == 1

    def test_submit_decoded_uses_same_pipeline(self, qtbot, resolver, api):
        with qtbot.waitSignal(resolver.batch_finished, timeout=3000):
            assert resolver.submit_decoded("FZ-CAM-1")
        assert api.search_calls == ["FZ-CAM-1"]


class TestShutdown:
    def test_stale_batch_is_a_noop(self, resolver, api, cart, notices):
        api.catalog["FZ-A"] = [make_product(1)]
        api.catalog["FZ-B"] = [make_product(2)]
        api.on_search = lambda query: resolver.shutdown()
        resolver.process_codes(["FZ-A", "FZ-B"])
        assert cart.is_empty
        assert notices == []
        assert api.search_calls == ["FZ-A"]

    def test_shutdown_refuses_new_batches(self, resolver, api):
        resolver.shutdown()
        assert resolver.process_raw("FZ-0001") == []
        assert not resolver.submit("FZ-0001")
        assert api.search_calls == []
