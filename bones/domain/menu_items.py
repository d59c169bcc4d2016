"""Priceable menu items.

``MenuItem`` is a closed family of variants. Every variant answers
``lunch_price()`` and ``evening_price()``; ``price()`` picks between the two
for a :class:`~bones.pricing.MealPeriod`. Variants carrying a single fixed
price return it for both periods. ``MENU_ITEM_TYPES`` maps each
:class:`MenuItemKind` to the one class implementing it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Union

from ..pricing.meal_period import MealPeriod

Money = Union[Decimal, int, float, str]


def to_money(value: Money) -> Decimal:
    """Convert ``value`` to :class:`Decimal` without float noise."""

    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


class MenuItemKind(str, Enum):
    """Variant tag stored in the ``itemType`` column."""

    MAIN_COURSE = "MainCourse"
    SIDE_DISH = "SideDish"
    DRINK = "Drink"
    POTATO_DISH = "PotatoDish"
    DIPS_AND_SAUCES = "DipsAndSauces"
    SELF_SERVICE_BAR = "SelfServiceBar"


class BarType(str, Enum):
    """Kinds of self-service bar."""

    SALAD = "SALAD"
    SOFT_ICE = "SOFT_ICE"


@dataclass(kw_only=True)
class AddOnOption:
    """An optional extra for a main course, e.g. extra bacon."""

    name: str
    additional_price: Decimal = Decimal("0")
    add_on_option_id: int | None = None

    def __post_init__(self) -> None:
        self.additional_price = to_money(self.additional_price)


@dataclass(kw_only=True)
class SelectionOption:
    """One answer of a :class:`MultipleChoiceMenu`."""

    name: str
    additional_price: Decimal = Decimal("0")
    selection_option_id: int | None = None

    def __post_init__(self) -> None:
        self.additional_price = to_money(self.additional_price)


@dataclass(kw_only=True)
class MultipleChoiceMenu:
    """A question with related answers, e.g. "which cheese?"."""

    question: str
    options: list[SelectionOption] = field(default_factory=list)
    choice_menu_id: int | None = None

    def add_selection_option(self, option: SelectionOption) -> None:
        self.options.append(option)

    def get_selection_options(self) -> list[SelectionOption]:
        return list(self.options)


@dataclass(kw_only=True)
class MenuItem(ABC):
    """Fields shared by every item sold at a restaurant.

    ``preparation_time`` is in seconds. ``is_made_by_kitchen_staff`` tells
    whether the item is routed to the kitchen at all.
    """

    kind: ClassVar[MenuItemKind]

    name: str
    menu_item_id: int | None = None
    preparation_time: int = 0
    description: str | None = None
    is_made_by_kitchen_staff: bool = False

    @abstractmethod
    def lunch_price(self) -> Decimal:
        """Return the price before 16:00."""
        raise NotImplementedError

    @abstractmethod
    def evening_price(self) -> Decimal:
        """Return the price from 16:00."""
        raise NotImplementedError

    def price(self, period: MealPeriod) -> Decimal:
        """Return the price for ``period``."""

        if period is MealPeriod.EVENING:
            return self.evening_price()
        return self.lunch_price()


@dataclass(kw_only=True)
class _FixedPriceItem(MenuItem):
    fixed_price: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.fixed_price = to_money(self.fixed_price)

    def lunch_price(self) -> Decimal:
        return self.fixed_price

    def evening_price(self) -> Decimal:
        return self.fixed_price


@dataclass(kw_only=True)
class _TwoPriceItem(MenuItem):
    lunch_amount: Decimal = Decimal("0")
    evening_amount: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        self.lunch_amount = to_money(self.lunch_amount)
        self.evening_amount = to_money(self.evening_amount)

    def lunch_price(self) -> Decimal:
        return self.lunch_amount

    def evening_price(self) -> Decimal:
        return self.evening_amount


@dataclass(kw_only=True)
class MainCourse(_TwoPriceItem):
    """A main course with its own options.

    ``introduction_description`` is the longer text shown once a guest picks
    the dish, as opposed to the short ``description`` on the menu.
    """

    kind: ClassVar[MenuItemKind] = MenuItemKind.MAIN_COURSE

    introduction_description: str | None = None
    multiple_choice_menus: list[MultipleChoiceMenu] = field(default_factory=list)
    add_on_options: list[AddOnOption] = field(default_factory=list)

    def add_multiple_choice_menu(self, menu: MultipleChoiceMenu) -> None:
        self.multiple_choice_menus.append(menu)

    def remove_multiple_choice_menu(self, menu: MultipleChoiceMenu) -> None:
        self.multiple_choice_menus.remove(menu)

    def get_multiple_choice_menus(self) -> list[MultipleChoiceMenu]:
        return list(self.multiple_choice_menus)

    def add_add_on_option(self, option: AddOnOption) -> None:
        self.add_on_options.append(option)

    def remove_add_on_option(self, option: AddOnOption) -> None:
        self.add_on_options.remove(option)

    def get_add_on_options(self) -> list[AddOnOption]:
        return list(self.add_on_options)

    def owns_option(self, option: AddOnOption | SelectionOption) -> bool:
        """Return ``True`` if ``option`` was declared on this main course."""

        if isinstance(option, AddOnOption):
            return any(option is own or option == own for own in self.add_on_options)
        return any(
            option is own or option == own
            for menu in self.multiple_choice_menus
            for own in menu.options
        )


@dataclass(kw_only=True)
class SideDish(_FixedPriceItem):
    kind: ClassVar[MenuItemKind] = MenuItemKind.SIDE_DISH

    quantity_per_serving: int = 1


@dataclass(kw_only=True)
class Drink(_FixedPriceItem):
    kind: ClassVar[MenuItemKind] = MenuItemKind.DRINK

    is_alcoholic: bool = False
    is_refill: bool = False


@dataclass(kw_only=True)
class PotatoDish(_FixedPriceItem):
    kind: ClassVar[MenuItemKind] = MenuItemKind.POTATO_DISH

    is_premium: bool = False


@dataclass(kw_only=True)
class DipsAndSauces(_FixedPriceItem):
    """A dip or a sauce; ``is_sauce`` tells which."""

    kind: ClassVar[MenuItemKind] = MenuItemKind.DIPS_AND_SAUCES

    is_sauce: bool = False


@dataclass(kw_only=True)
class SelfServiceBar(_TwoPriceItem):
    kind: ClassVar[MenuItemKind] = MenuItemKind.SELF_SERVICE_BAR

    bar_type: BarType = BarType.SALAD


MENU_ITEM_TYPES: dict[MenuItemKind, type[MenuItem]] = {
    MenuItemKind.MAIN_COURSE: MainCourse,
    MenuItemKind.SIDE_DISH: SideDish,
    MenuItemKind.DRINK: Drink,
    MenuItemKind.POTATO_DISH: PotatoDish,
    MenuItemKind.DIPS_AND_SAUCES: DipsAndSauces,
    MenuItemKind.SELF_SERVICE_BAR: SelfServiceBar,
}


def menu_item_class(kind: MenuItemKind | str) -> type[MenuItem]:
    """Return the variant class for ``kind``.

    Raises ``ValueError`` for a tag outside the known family.
    """

    return MENU_ITEM_TYPES[MenuItemKind(kind)]
