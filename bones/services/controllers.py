"""Thin facades between callers and the data-access objects.

Each controller owns one DAO built on the shared :class:`~bones.db.Database`.
Passing ``database`` explicitly is how tests and the CLI pick the store.
"""

from __future__ import annotations

from datetime import datetime

from ..db import Database, get_database
from ..domain.menu_card import MenuCard
from ..domain.orders import PersonalOrder, TableOrder
from ..domain.restaurant import Restaurant, Table
from ..repos_sqlalchemy import (
    MenuCardDB,
    PersonalOrderDB,
    RestaurantDB,
    TableDB,
    TableOrderDB,
)


class RestaurantController:
    def __init__(self, database: Database | None = None):
        self.dao = RestaurantDB(database or get_database())

    def find_restaurant_by_code(self, restaurant_code: str) -> Restaurant | None:
        return self.dao.find_restaurant_by_code(restaurant_code)


class TableController:
    def __init__(self, database: Database | None = None):
        self.dao = TableDB(database or get_database())

    def find_table_by_code(
        self, table_number: int | str, restaurant_code: str
    ) -> Table | None:
        return self.dao.find_table_by_code(table_number, restaurant_code)


class MenuCardController:
    def __init__(self, database: Database | None = None):
        self.dao = MenuCardDB(database or get_database())

    def find_menu_cards_by_restaurant_code(self, restaurant_code: str) -> list[MenuCard]:
        return self.dao.find_menu_cards_by_restaurant_code(restaurant_code)


class PersonalOrderController:
    def __init__(self, database: Database | None = None):
        self.dao = PersonalOrderDB(database or get_database())

    def insert_personal_order(
        self, personal_order: PersonalOrder, table_order_id: int
    ) -> PersonalOrder:
        return self.dao.insert_personal_order(personal_order, table_order_id)

    def find_personal_orders_by_table_order_id(
        self, table_order_id: int
    ) -> list[PersonalOrder]:
        return self.dao.find_personal_orders_by_table_order_id(table_order_id)


class TableOrderController:
    """Table order operations used by guests and kitchen staff."""

    def __init__(self, database: Database | None = None):
        self.dao = TableOrderDB(database or get_database())

    def find_table_order_by_id(self, table_order_id: int) -> TableOrder | None:
        return self.dao.find_table_order_by_id(table_order_id)

    def open_table_order_for_table(
        self, table: Table, time_of_arrival: datetime
    ) -> TableOrder:
        return self.dao.open_table_order_for_table(table, time_of_arrival)

    def update_table_order(self, table_order: TableOrder) -> TableOrder:
        return self.dao.update_table_order(table_order)

    def find_all_visible_to_kitchen_table_orders(self) -> list[TableOrder]:
        return self.dao.find_all_visible_to_kitchen_table_orders()

    def send_to_kitchen(self, table_order: TableOrder) -> TableOrder:
        """Mark the order as sent and store the flag."""

        table_order.send_to_kitchen()
        return self.dao.update_table_order(table_order)

    def confirm_table_order(
        self, table_order: TableOrder, personal_orders: list[PersonalOrder]
    ) -> TableOrder:
        return self.dao.confirm_table_order(table_order, personal_orders)
