from __future__ import annotations

import logging
import threading
from typing import Callable, Iterable, List, NamedTuple

from ..config import get_settings
from ..domain.orders import TableOrder
from .controllers import TableOrderController

logger = logging.getLogger(__name__)


class KitchenRow(NamedTuple):
    """One row of the staff overview; unused columns are empty strings."""

    order_number: str
    arrival_time: str
    customer_name: str
    quantity: str
    dish_name: str
    notes: str


def kitchen_rows(table_orders: Iterable[TableOrder]) -> List[KitchenRow]:
    """Flatten orders into a header row per table order, customer and line."""

    rows: List[KitchenRow] = []
    for order in table_orders:
        arrival = (
            order.time_of_arrival.strftime("%Y-%m-%d %H:%M")
            if order.time_of_arrival
            else ""
        )
        rows.append(KitchenRow(str(order.table_order_id), arrival, "", "", "", ""))
        for personal_order in order.get_personal_orders():
            rows.append(KitchenRow("", "", personal_order.customer_name, "", "", ""))
            for line in personal_order.get_personal_order_lines():
                rows.append(
                    KitchenRow(
                        "",
                        "",
                        "",
                        str(line.quantity),
                        line.menu_item.name,
                        line.kitchen_notes(),
                    )
                )
    return rows


class KitchenBoardPoller:
    """Refresh the kitchen overview on a background thread.

    The first refresh happens after ``initial_delay`` seconds and then every
    ``period`` seconds until :meth:`stop` is called. A failed refresh is logged
    and the next tick tries again.
    """

    def __init__(
        self,
        controller: TableOrderController,
        on_rows: Callable[[List[KitchenRow]], None],
        initial_delay: float | None = None,
        period: float | None = None,
    ):
        settings = get_settings()
        self.controller = controller
        self.on_rows = on_rows
        self.initial_delay = (
            settings.kitchen_poll_initial_delay_secs
            if initial_delay is None
            else initial_delay
        )
        self.period = settings.kitchen_poll_period_secs if period is None else period
        self._stopped = threading.Event()
        self._thread: threading.Thread | None = None

    def refresh(self) -> List[KitchenRow]:
        rows = kitchen_rows(self.controller.find_all_visible_to_kitchen_table_orders())
        self.on_rows(rows)
        return rows

    def _run(self) -> None:
        delay = self.initial_delay
        while not self._stopped.wait(delay):
            try:
                self.refresh()
            except Exception:
                logger.exception("kitchen board refresh failed")
            delay = self.period

    def start(self) -> None:
        if self._thread is not None and self._thread.is_alive():
            return
        self._stopped.clear()
        self._thread = threading.Thread(
            target=self._run, name="kitchen-board", daemon=True
        )
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stopped.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
