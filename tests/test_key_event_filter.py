"""Tests for the window-level key listener."""

import pytest
from PySide6.QtCore import QEvent, Qt
from PySide6.QtGui import QKeyEvent, QWindow
from PySide6.QtWidgets import QLineEdit, QPushButton

from input_classifier import InputClassifier
from key_event_filter import KeyEventFilter, field_text, key_name


@pytest.fixture
def search_field(qtbot):
    field = QLineEdit()
    qtbot.addWidget(field)
    return field


@pytest.fixture
def classifier(qapp, clock):
    c = InputClassifier(clock=clock)
    yield c
    c.teardown()


@pytest.fixture
def key_filter(classifier, search_field, clock):
    return KeyEventFilter(classifier, lambda: search_field, clock=clock)


def press(key, text=""):
    return QKeyEvent(QEvent.KeyPress, key, Qt.NoModifier, text)


class TestKeyName:
    def test_named_keys(self):
        assert key_name(Qt.Key_Return, "\r") == "Enter"
        assert key_name(Qt.Key_Enter, "\r") == "Enter"
        assert key_name(Qt.Key_Tab, "\t") == "Tab"
        assert key_name(Qt.Key_Shift, "") == "Shift"

    def test_printable_text(self):
        assert key_name(Qt.Key_A, "a") == "a"
        assert key_name(Qt.Key_Minus, "-") == "-"

    def test_unknown_key(self):
        assert key_name(Qt.Key_F5, "") == "Unidentified"


class TestBuildEvent:
    def test_focus_in_search_field(self, key_filter, search_field, clock):
        search_field.setText("FZ-12")
        event = key_filter.build_event(Qt.Key_Return, "\r", search_field)
        assert event.key == "Enter"
        assert event.timestamp == clock()
        assert event.in_text_input
        assert event.in_search_field
        assert event.field_value == "FZ-12"

    def test_focus_in_other_input(self, key_filter, qtbot):
        other = QLineEdit("customer")
        qtbot.addWidget(other)
        event = key_filter.build_event(Qt.Key_A, "a", other)
        assert event.in_text_input
        assert not event.in_search_field
        assert event.field_value == ""

    def test_focus_on_button(self, key_filter, qtbot):
        button = QPushButton("Checkout")
        qtbot.addWidget(button)
        event = key_filter.build_event(Qt.Key_A, "a", button)
        assert not event.in_text_input

    def test_no_focus(self, key_filter):
        assert not key_filter.build_event(Qt.Key_A, "a", None).in_text_input

    def test_field_text(self, search_field):
        search_field.setText("abc")
        assert field_text(search_field) == "abc"
        assert field_text(None) == ""


class TestEventFilter:
    def test_scan_burst_is_forwarded(self, key_filter, classifier):
        window = QWindow()
        codes = []
        classifier.code_ready.connect(codes.append)
        for ch in "FZ-1":
            assert key_filter.eventFilter(window, press(Qt.Key_A, ch)) is False
        assert key_filter.eventFilter(window, press(Qt.Key_Return, "\r")) is True
        assert codes == ["FZ-1"]

    def test_enter_without_code_passes_through(self, key_filter):
        assert key_filter.eventFilter(QWindow(), press(Qt.Key_Return, "\r")) is False

    def test_widget_targets_are_ignored(self, key_filter, classifier, search_field):
        key_filter.eventFilter(search_field, press(Qt.Key_A, "a"))
        assert classifier.buffer == ""

    def test_other_event_types_are_ignored(self, key_filter, classifier):
        release = QKeyEvent(QEvent.KeyRelease, Qt.Key_A, Qt.NoModifier, "a")
        assert key_filter.eventFilter(QWindow(), release) is False
        assert classifier.buffer == ""

    def test_install_once(self, key_filter, qapp):
        key_filter.install(qapp)
        key_filter.install(qapp)
        key_filter.uninstall()
        key_filter.uninstall()
