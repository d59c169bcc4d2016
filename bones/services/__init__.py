"""Application services built on top of the data-access objects."""

from .controllers import (
    MenuCardController,
    PersonalOrderController,
    RestaurantController,
    TableController,
    TableOrderController,
)
from .guest_session import GuestOrderSession
from .kitchen_board import KitchenBoardPoller, KitchenRow, kitchen_rows

__all__ = [
    "GuestOrderSession",
    "KitchenBoardPoller",
    "KitchenRow",
    "MenuCardController",
    "PersonalOrderController",
    "RestaurantController",
    "TableController",
    "TableOrderController",
    "kitchen_rows",
]
