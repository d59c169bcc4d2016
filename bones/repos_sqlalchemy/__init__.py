"""SQLAlchemy-backed data-access objects.

Each DAO takes a :class:`~bones.db.Database` and runs every public call in its
own transaction at the isolation level that call needs.
"""

from .menu_card_db import MenuCardDB
from .menu_item_db import MenuItemDB
from .personal_order_db import PersonalOrderDB
from .restaurant_db import RestaurantDB
from .table_db import TableDB
from .table_order_db import TableOrderDB

__all__ = [
    "MenuCardDB",
    "MenuItemDB",
    "PersonalOrderDB",
    "RestaurantDB",
    "TableDB",
    "TableOrderDB",
]
