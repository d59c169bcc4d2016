import logging
import threading

from bones.config import get_settings
from bones.domain import PersonalOrder, TableOrder
from bones.exceptions import DataAccessError
from bones.services import KitchenBoardPoller, KitchenRow, kitchen_rows

from tests._factories import LUNCH_ARRIVAL


def _sent_order(menu_items):
    order = TableOrder(table_order_id=7, time_of_arrival=LUNCH_ARRIVAL)
    guest = PersonalOrder(customer_name="Christoffer")
    ribeye = menu_items["Big juicy ribeye"]
    guest.add_main_course_line(
        ribeye, add_on_option=ribeye.get_add_on_options()[1], notes="medium rare"
    )
    guest.add_menu_item_line(menu_items["Soft drink"])
    order.add_personal_order(guest)
    order.send_to_kitchen()
    return order


def test_rows_have_header_customer_and_lines(menu_items):
    rows = kitchen_rows([_sent_order(menu_items)])
    assert rows == [
        KitchenRow("7", "2025-06-08 12:30", "", "", "", ""),
        KitchenRow("", "", "Christoffer", "", "", ""),
        KitchenRow("", "", "", "1", "Big juicy ribeye", "285g steak, medium rare"),
        KitchenRow("", "", "", "1", "Soft drink", ""),
    ]


class FakeController:
    def __init__(self, results):
        self.results = list(results)
        self.calls = 0

    def find_all_visible_to_kitchen_table_orders(self):
        self.calls += 1
        result = self.results.pop(0) if self.results else []
        if isinstance(result, Exception):
            raise result
        return result


def test_refresh_hands_rows_to_callback(menu_items):
    received = []
    poller = KitchenBoardPoller(
        FakeController([[_sent_order(menu_items)]]), received.append, 0, 0
    )
    rows = poller.refresh()
    assert received == [rows]
    assert len(rows) == 4


def test_poller_keeps_going_after_a_failure(caplog):
    done = threading.Event()
    received = []

    def on_rows(rows):
        received.append(rows)
        if len(received) == 2:
            done.set()

    failure = DataAccessError("db down", entity="TableOrder")
    controller = FakeController([failure, [], []])
    poller = KitchenBoardPoller(controller, on_rows, initial_delay=0.01, period=0.01)
    with caplog.at_level(logging.ERROR, logger="bones.services.kitchen_board"):
        poller.start()
        assert done.wait(5)
        poller.stop(timeout=5)
    assert not poller.is_running
    assert controller.calls >= 3
    assert "kitchen board refresh failed" in caplog.messages


def test_poller_uses_configured_timing(monkeypatch):
    monkeypatch.setenv("KITCHEN_POLL_INITIAL_DELAY_SECS", "5")
    monkeypatch.setenv("KITCHEN_POLL_PERIOD_SECS", "30")
    get_settings.cache_clear()
    try:
        poller = KitchenBoardPoller(FakeController([]), lambda rows: None)
        assert poller.initial_delay == 5
        assert poller.period == 30
    finally:
        get_settings.cache_clear()


def test_stop_before_first_tick_skips_refresh():
    controller = FakeController([])
    poller = KitchenBoardPoller(
        controller, lambda rows: None, initial_delay=60, period=60
    )
    poller.start()
    poller.stop(timeout=5)
    assert controller.calls == 0


def test_poller_survives_a_failing_callback(caplog):
    done = threading.Event()
    calls = []

    def on_rows(rows):
        calls.append(rows)
        if len(calls) == 1:
            raise RuntimeError("display unplugged")
        done.set()

    poller = KitchenBoardPoller(
        FakeController([]), on_rows, initial_delay=0.01, period=0.01
    )
    with caplog.at_level(logging.ERROR, logger="bones.services.kitchen_board"):
        poller.start()
        assert done.wait(5)
        poller.stop(timeout=5)
    assert len(calls) >= 2
    assert "kitchen board refresh failed" in caplog.messages
