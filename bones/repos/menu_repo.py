"""Repository interfaces for menu items and menu cards."""

from abc import ABC, abstractmethod


class MenuItemRepo(ABC):
    """Contract for menu item persistence."""

    @abstractmethod
    def find_menu_item_by_id(self, menu_item_id):
        """Return the fully built menu item variant, or ``None``."""
        raise NotImplementedError

    @abstractmethod
    def insert_menu_item(self, menu_item):
        """Store a menu item with its variant row and options."""
        raise NotImplementedError


class MenuCardRepo(ABC):
    """Contract for menu cards and their availability trackers."""

    @abstractmethod
    def find_menu_cards_by_restaurant_code(self, restaurant_code):
        """Return every menu card of a restaurant with its trackers."""
        raise NotImplementedError

    @abstractmethod
    def find_availability_trackers_by_menu_card_id(self, menu_card_id):
        """Return the trackers of one menu card."""
        raise NotImplementedError

    @abstractmethod
    def insert_menu_card(self, menu_card, restaurant_code):
        """Store a menu card and its trackers."""
        raise NotImplementedError

    @abstractmethod
    def set_availability(self, menu_card_id, menu_item_id, is_available):
        """Show or hide an item on a menu card."""
        raise NotImplementedError
