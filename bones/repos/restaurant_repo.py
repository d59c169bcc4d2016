"""Repository interfaces for restaurants and their tables."""

from abc import ABC, abstractmethod


class RestaurantRepo(ABC):
    """Contract for restaurant persistence."""

    @abstractmethod
    def find_restaurant_by_code(self, restaurant_code):
        """Return the restaurant with its tables and menu cards, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def insert_restaurant(self, restaurant):
        """Store a restaurant."""
        raise NotImplementedError


class TableRepo(ABC):
    """Contract for table lookups and order assignment."""

    @abstractmethod
    def find_table_by_code(self, table_number, restaurant_code):
        """Return the table, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def insert_table(self, table):
        """Store a table."""
        raise NotImplementedError

    @abstractmethod
    def assign_table_order(self, table, table_order_id):
        """Point a table at its current table order."""
        raise NotImplementedError
