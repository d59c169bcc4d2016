"""Restaurants and their dining tables."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from .menu_card import MenuCard

RESTAURANT_CODE_RE = re.compile(r"^\d{3}$")


def validate_restaurant_code(code: str) -> str:
    """Return ``code`` if it is exactly three digits, else raise ``ValueError``."""

    if not isinstance(code, str) or not RESTAURANT_CODE_RE.match(code):
        raise ValueError(f"restaurant code must be three digits, got {code!r}")
    return code


@dataclass
class Table:
    """A physical table.

    ``table_code`` is the table number followed by the restaurant code, as
    strings (table 1 at restaurant ``"001"`` is ``"1001"``). The table does
    not own its order; ``current_table_order_id`` is only a lookup key kept
    up to date by the order-management side.
    """

    table_number: int | str
    restaurant_code: str | None = None
    current_table_order_id: int | None = None

    @property
    def table_code(self) -> str | None:
        if self.restaurant_code is None:
            return None
        return f"{self.table_number}{self.restaurant_code}"

    def set_table_code(self, table_number: int | str, restaurant_code: str) -> None:
        self.table_number = table_number
        self.restaurant_code = validate_restaurant_code(restaurant_code)


@dataclass
class Restaurant:
    """A Bone's restaurant, identified by its three-digit code."""

    name: str
    city: str
    street_name: str
    restaurant_code: str | None = None
    tables: list[Table] = field(default_factory=list)
    menu_cards: list[MenuCard] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.restaurant_code is not None:
            validate_restaurant_code(self.restaurant_code)

    def set_restaurant_code(self, restaurant_code: str) -> None:
        self.restaurant_code = validate_restaurant_code(restaurant_code)

    def add_table(self, table: Table) -> None:
        self.tables.append(table)

    def remove_table(self, table: Table) -> None:
        self.tables.remove(table)

    def get_tables(self) -> list[Table]:
        return list(self.tables)

    def add_menu_card(self, menu_card: MenuCard) -> None:
        self.menu_cards.append(menu_card)

    def remove_menu_card(self, menu_card: MenuCard) -> None:
        self.menu_cards.remove(menu_card)

    def get_menu_cards(self) -> list[MenuCard]:
        return list(self.menu_cards)
