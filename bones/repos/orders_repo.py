"""Repository interfaces for table orders and personal orders."""

from abc import ABC, abstractmethod


class TableOrderRepo(ABC):
    """Contract for table order persistence."""

    @abstractmethod
    def find_all_table_orders(self):
        """Return every table order without its personal orders."""
        raise NotImplementedError

    @abstractmethod
    def find_table_order_by_id(self, table_order_id):
        """Return one table order with its personal orders, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def find_all_visible_to_kitchen_table_orders(self):
        """Return the sent, not yet closed table orders."""
        raise NotImplementedError

    @abstractmethod
    def insert_table_order(self, table_order):
        """Store a new table order."""
        raise NotImplementedError

    @abstractmethod
    def open_table_order_for_table(self, table, time_of_arrival):
        """Create a table order and assign it to ``table`` in one step."""
        raise NotImplementedError

    @abstractmethod
    def update_table_order(self, table_order):
        """Write the table order's scalar fields back."""
        raise NotImplementedError

    @abstractmethod
    def confirm_table_order(self, table_order, personal_orders):
        """Store staged personal orders and send the order to the kitchen."""
        raise NotImplementedError


class PersonalOrderRepo(ABC):
    """Contract for personal order persistence."""

    @abstractmethod
    def insert_personal_order(self, personal_order, table_order_id):
        """Store a personal order with its lines and discounts."""
        raise NotImplementedError

    @abstractmethod
    def find_personal_order_by_id(self, personal_order_id):
        """Return one personal order, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def find_personal_orders_by_table_order_id(self, table_order_id):
        """Return the personal orders of one table order."""
        raise NotImplementedError
