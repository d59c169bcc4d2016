"""SQLAlchemy implementation of the menu card repository."""

from __future__ import annotations

import logging
from functools import partial

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from ..db import Database, IsolationLevel
from ..domain.menu_card import AvailabilityTracker, MenuCard
from ..models_store import AvailabilityTrackerRow, MenuCardRow
from ..repos.menu_repo import MenuCardRepo
from .menu_item_db import MenuItemCache, OnCommit, insert_menu_item_rows, load_menu_item

logger = logging.getLogger(__name__)


def load_trackers(
    session: Session, menu_card_id: int, cache: MenuItemCache | None = None
) -> list[AvailabilityTracker]:
    """Return the trackers of a card, skipping those whose item is gone."""

    trackers = []
    rows = session.scalars(
        select(AvailabilityTrackerRow)
        .where(AvailabilityTrackerRow.menu_card_id == menu_card_id)
        .order_by(AvailabilityTrackerRow.tracker_id)
    ).all()
    for row in rows:
        item = load_menu_item(session, row.menu_item_id, cache)
        if item is None:
            logger.warning(
                "menu item %s missing, tracker skipped on menu card %s",
                row.menu_item_id,
                menu_card_id,
                extra={"entity": "AvailabilityTracker", "key": row.tracker_id},
            )
            continue
        trackers.append(
            AvailabilityTracker(menu_item=item, is_available=bool(row.is_available))
        )
    return trackers


def load_menu_cards(session: Session, restaurant_code: str) -> list[MenuCard]:
    cache: MenuItemCache = {}
    rows = session.scalars(
        select(MenuCardRow)
        .where(MenuCardRow.restaurant_code == restaurant_code)
        .order_by(MenuCardRow.menu_card_id)
    ).all()
    return [
        MenuCard(
            menu_card_id=row.menu_card_id,
            name=row.name,
            availability_trackers=load_trackers(session, row.menu_card_id, cache),
        )
        for row in rows
    ]


def insert_menu_card_rows(
    session: Session, menu_card: MenuCard, restaurant_code: str, on_commit: OnCommit
) -> int:
    """Write a card and its trackers, inserting items that have no id yet."""

    card_row = MenuCardRow(
        menu_card_id=menu_card.menu_card_id,
        name=menu_card.name,
        restaurant_code=restaurant_code,
    )
    session.add(card_row)
    session.flush()
    for tracker in menu_card.get_availability_trackers():
        menu_item_id = tracker.menu_item.menu_item_id
        if menu_item_id is None:
            menu_item_id = insert_menu_item_rows(session, tracker.menu_item, on_commit)
        session.add(
            AvailabilityTrackerRow(
                menu_card_id=card_row.menu_card_id,
                menu_item_id=menu_item_id,
                is_available=tracker.is_available,
            )
        )
    session.flush()
    on_commit.append(partial(setattr, menu_card, "menu_card_id", card_row.menu_card_id))
    return card_row.menu_card_id


class MenuCardDB(MenuCardRepo):
    """Reads and writes menu cards with their availability trackers."""

    def __init__(self, database: Database):
        self.database = database

    def find_menu_cards_by_restaurant_code(self, restaurant_code: str) -> list[MenuCard]:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="MenuCard", key=restaurant_code
        ) as session:
            return load_menu_cards(session, restaurant_code)

    def find_availability_trackers_by_menu_card_id(
        self, menu_card_id: int
    ) -> list[AvailabilityTracker]:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="AvailabilityTracker", key=menu_card_id
        ) as session:
            return load_trackers(session, menu_card_id, {})

    def insert_menu_card(self, menu_card: MenuCard, restaurant_code: str) -> MenuCard:
        on_commit: OnCommit = []
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="MenuCard", key=menu_card.name
        ) as session:
            insert_menu_card_rows(session, menu_card, restaurant_code, on_commit)
        for apply in on_commit:
            apply()
        return menu_card

    def set_availability(
        self, menu_card_id: int, menu_item_id: int, is_available: bool
    ) -> bool:
        """Return ``False`` when the item is not tracked on the card."""

        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="AvailabilityTracker", key=menu_card_id
        ) as session:
            result = session.execute(
                update(AvailabilityTrackerRow)
                .where(AvailabilityTrackerRow.menu_card_id == menu_card_id)
                .where(AvailabilityTrackerRow.menu_item_id == menu_item_id)
                .values({AvailabilityTrackerRow.is_available: is_available})
            )
            return result.rowcount > 0
