"""SQLAlchemy implementation of the restaurant repository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from ..db import Database, IsolationLevel
from ..domain.restaurant import Restaurant
from ..models_store import RestaurantRow
from ..repos.restaurant_repo import RestaurantRepo
from .menu_card_db import insert_menu_card_rows, load_menu_cards
from .menu_item_db import OnCommit
from .table_db import insert_table_row, load_tables


def load_restaurant(session: Session, restaurant_code: str) -> Restaurant | None:
    row = session.get(RestaurantRow, restaurant_code)
    if row is None:
        return None
    return Restaurant(
        name=row.name,
        city=row.city,
        street_name=row.street_name,
        restaurant_code=row.restaurant_code,
        tables=load_tables(session, restaurant_code),
        menu_cards=load_menu_cards(session, restaurant_code),
    )


class RestaurantDB(RestaurantRepo):
    """Reads and writes restaurants together with their tables and menu cards."""

    def __init__(self, database: Database):
        self.database = database

    def find_restaurant_by_code(self, restaurant_code: str) -> Restaurant | None:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="Restaurant", key=restaurant_code
        ) as session:
            return load_restaurant(session, restaurant_code)

    def insert_restaurant(self, restaurant: Restaurant) -> Restaurant:
        """Store the restaurant, its tables and its menu cards in one transaction."""

        if restaurant.restaurant_code is None:
            raise ValueError("restaurant needs a code before it can be stored")
        code = restaurant.restaurant_code
        on_commit: OnCommit = []
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="Restaurant", key=code
        ) as session:
            session.add(
                RestaurantRow(
                    restaurant_code=code,
                    name=restaurant.name,
                    city=restaurant.city,
                    street_name=restaurant.street_name,
                )
            )
            session.flush()
            for table in restaurant.get_tables():
                if table.restaurant_code is None:
                    table.set_table_code(table.table_number, code)
                insert_table_row(session, table)
            for menu_card in restaurant.get_menu_cards():
                insert_menu_card_rows(session, menu_card, code, on_commit)
        for apply in on_commit:
            apply()
        return restaurant
