"""Menu, restaurant and order domain objects."""

from .menu_card import AvailabilityTracker, MenuCard
from .menu_items import (
    MENU_ITEM_TYPES,
    AddOnOption,
    BarType,
    DipsAndSauces,
    Drink,
    MainCourse,
    MenuItem,
    MenuItemKind,
    MultipleChoiceMenu,
    PotatoDish,
    SelectionOption,
    SelfServiceBar,
    SideDish,
    menu_item_class,
)
from .order_status import LineStatus, TableOrderState
from .orders import Discount, PaymentType, PersonalOrder, PersonalOrderLine, TableOrder
from .restaurant import Restaurant, Table

__all__ = [
    "MENU_ITEM_TYPES",
    "AddOnOption",
    "AvailabilityTracker",
    "BarType",
    "DipsAndSauces",
    "Discount",
    "Drink",
    "LineStatus",
    "MainCourse",
    "MenuCard",
    "MenuItem",
    "MenuItemKind",
    "MultipleChoiceMenu",
    "PaymentType",
    "PersonalOrder",
    "PersonalOrderLine",
    "PotatoDish",
    "Restaurant",
    "SelectionOption",
    "SelfServiceBar",
    "SideDish",
    "Table",
    "TableOrder",
    "TableOrderState",
    "menu_item_class",
]
