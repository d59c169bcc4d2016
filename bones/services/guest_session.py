"""Step-by-step ordering for one guest at one table.

A session replaces the process-wide "current order" of a kiosk: every guest
gets their own :class:`GuestOrderSession`, so several tablets can order at the
same time against the same store.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable

from ..db import Database, get_database
from ..domain.menu_card import MenuCard
from ..domain.menu_items import AddOnOption, MainCourse, MenuItem, SelectionOption
from ..domain.orders import Discount, PersonalOrder, TableOrder
from ..domain.restaurant import Table
from ..pricing.meal_period import MealPeriod, meal_period_for
from .controllers import MenuCardController, TableController, TableOrderController

logger = logging.getLogger(__name__)


class GuestOrderSession:
    """Walks a guest from table code to a confirmed kitchen order.

    Finished personal orders are staged on the table order and only stored by
    :meth:`confirm_and_send_to_kitchen`, together with the kitchen flag.
    """

    def __init__(
        self,
        database: Database | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        database = database or get_database()
        self.tables = TableController(database)
        self.menu_cards = MenuCardController(database)
        self.table_orders = TableOrderController(database)
        self.clock = clock
        self.table: Table | None = None
        self.table_order: TableOrder | None = None
        self.personal_order: PersonalOrder | None = None
        self.main_course: MainCourse | None = None
        self.staged: list[PersonalOrder] = []

    def _require_table(self) -> tuple[Table, TableOrder, PersonalOrder]:
        if self.table is None or self.table_order is None or self.personal_order is None:
            raise RuntimeError("enter a table code first")
        return self.table, self.table_order, self.personal_order

    def enter_table_code(self, table_number: int | str, restaurant_code: str) -> Table:
        """Find the table and its current order, opening a new order if needed.

        Raises ``LookupError`` when no such table exists.
        """

        table = self.tables.find_table_by_code(table_number, restaurant_code)
        if table is None:
            raise LookupError(f"no table {table_number}{restaurant_code}")
        table_order = None
        if table.current_table_order_id is not None:
            table_order = self.table_orders.find_table_order_by_id(
                table.current_table_order_id
            )
        if table_order is None or table_order.is_table_order_closed:
            table_order = self.table_orders.open_table_order_for_table(table, self.clock())
            logger.info(
                "opened table order %s",
                table_order.table_order_id,
                extra={"entity": "TableOrder", "key": table.table_code},
            )
        self.table = table
        self.table_order = table_order
        self.personal_order = PersonalOrder()
        self.staged = []
        return table

    def enter_name_and_age(self, customer_name: str, customer_age: int) -> None:
        _, _, personal_order = self._require_table()
        personal_order.customer_name = customer_name
        personal_order.customer_age = customer_age

    def enter_discounts(self, discounts: Iterable[Discount]) -> list[MenuCard]:
        """Attach the guest's discounts and return the restaurant's menu cards."""

        table, _, personal_order = self._require_table()
        personal_order.add_all_discounts(discounts)
        return self.menu_cards.find_menu_cards_by_restaurant_code(table.restaurant_code)

    def enter_main_course(self, main_course: MainCourse) -> None:
        self._require_table()
        self.main_course = main_course

    def enter_main_course_options(
        self,
        potato_dish: MenuItem | None = None,
        add_on_option: AddOnOption | None = None,
        selection_option: SelectionOption | None = None,
        notes: str = "",
    ) -> None:
        """Add the chosen main course, with its options and potato, as lines."""

        _, _, personal_order = self._require_table()
        if self.main_course is None:
            raise RuntimeError("choose a main course first")
        if potato_dish is not None:
            personal_order.add_menu_item_line(potato_dish)
        personal_order.add_main_course_line(
            self.main_course,
            add_on_option=add_on_option,
            selection_option=selection_option,
            notes=notes,
        )
        self.main_course = None

    def enter_side_order(self, menu_item: MenuItem, notes: str = "") -> None:
        _, _, personal_order = self._require_table()
        personal_order.add_menu_item_line(menu_item, notes)

    def clear_menu_item_lines(self) -> None:
        _, _, personal_order = self._require_table()
        personal_order.clear_personal_order_lines()

    def finish_personal_order(self) -> PersonalOrder | None:
        """Stage the guest's order on the table and start one for the next guest.

        An order without lines is dropped and ``None`` returned.
        """

        _, table_order, personal_order = self._require_table()
        self.personal_order = PersonalOrder()
        if not personal_order.get_personal_order_lines():
            return None
        table_order.add_personal_order(personal_order)
        self.staged.append(personal_order)
        return personal_order

    def confirm_and_send_to_kitchen(self) -> TableOrder:
        """Store every staged order and send the table order to the kitchen."""

        _, table_order, _ = self._require_table()
        self.table_orders.confirm_table_order(table_order, self.staged)
        logger.info(
            "table order %s sent to kitchen with %d new personal orders",
            table_order.table_order_id,
            len(self.staged),
            extra={"entity": "TableOrder", "key": table_order.table_order_id},
        )
        self.staged = []
        return table_order

    def request_service(self) -> TableOrder:
        _, table_order, _ = self._require_table()
        table_order.request_service()
        return self.table_orders.update_table_order(table_order)

    def is_lunch_time(self) -> bool:
        """Return ``True`` while lunch prices apply to this table."""

        if self.table_order is not None and self.table_order.time_of_arrival is not None:
            return self.table_order.meal_period is MealPeriod.LUNCH
        return meal_period_for(self.clock()) is MealPeriod.LUNCH
