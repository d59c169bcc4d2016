"""SQLAlchemy implementation of the personal order repository."""

from __future__ import annotations

from functools import partial

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import Database, IsolationLevel
from ..domain.menu_items import MainCourse
from ..domain.order_status import LineStatus
from ..domain.orders import Discount, PersonalOrder, PersonalOrderLine
from ..exceptions import DataAccessError
from ..models_store import (
    DiscountRow,
    PersonalOrderDiscountRow,
    PersonalOrderLineRow,
    PersonalOrderRow,
)
from ..repos.orders_repo import PersonalOrderRepo
from .menu_item_db import MenuItemCache, OnCommit, load_menu_item


def _line_options(row: PersonalOrderLineRow, item) -> dict:
    if row.add_on_option_id is None and row.selection_option_id is None:
        return {}
    if not isinstance(item, MainCourse):
        raise DataAccessError(
            f"line {row.line_id} has options on a non main course",
            entity="PersonalOrderLine",
            key=row.line_id,
        )
    options = {}
    if row.add_on_option_id is not None:
        options["add_on_option"] = next(
            (
                o
                for o in item.get_add_on_options()
                if o.add_on_option_id == row.add_on_option_id
            ),
            None,
        )
    if row.selection_option_id is not None:
        options["selection_option"] = next(
            (
                o
                for menu in item.get_multiple_choice_menus()
                for o in menu.get_selection_options()
                if o.selection_option_id == row.selection_option_id
            ),
            None,
        )
    if None in options.values():
        raise DataAccessError(
            f"option of line {row.line_id} no longer exists",
            entity="PersonalOrderLine",
            key=row.line_id,
        )
    return options


def _load_lines(
    session: Session, personal_order_id: int, cache: MenuItemCache
) -> list[PersonalOrderLine]:
    lines = []
    rows = session.scalars(
        select(PersonalOrderLineRow)
        .where(PersonalOrderLineRow.personal_order_id == personal_order_id)
        .order_by(PersonalOrderLineRow.line_id)
    ).all()
    for row in rows:
        item = load_menu_item(session, row.menu_item_id, cache)
        if item is None:
            raise DataAccessError(
                f"menu item {row.menu_item_id} of line {row.line_id} is missing",
                entity="PersonalOrderLine",
                key=row.line_id,
            )
        lines.append(
            PersonalOrderLine(
                menu_item=item,
                quantity=row.quantity,
                status=LineStatus(row.status),
                notes=row.notes or "",
                **_line_options(row, item),
            )
        )
    return lines


def _load_discounts(session: Session, personal_order_id: int) -> list[Discount]:
    rows = session.scalars(
        select(DiscountRow)
        .join(
            PersonalOrderDiscountRow,
            PersonalOrderDiscountRow.discount_id == DiscountRow.discount_id,
        )
        .where(PersonalOrderDiscountRow.personal_order_id == personal_order_id)
        .order_by(DiscountRow.discount_id)
    ).all()
    return [
        Discount(
            discount_id=r.discount_id,
            name=r.name,
            percent=r.percent,
            amount=r.amount,
        )
        for r in rows
    ]


def _build_personal_order(
    session: Session, row: PersonalOrderRow, cache: MenuItemCache
) -> PersonalOrder:
    order = PersonalOrder(
        customer_name=row.customer_name,
        customer_age=row.customer_age,
        lines=_load_lines(session, row.personal_order_id, cache),
        discounts=_load_discounts(session, row.personal_order_id),
    )
    order.mark_persisted(row.personal_order_id)
    return order


def load_personal_orders(
    session: Session, table_order_id: int, cache: MenuItemCache | None = None
) -> list[PersonalOrder]:
    cache = {} if cache is None else cache
    rows = session.scalars(
        select(PersonalOrderRow)
        .where(PersonalOrderRow.table_order_id == table_order_id)
        .order_by(PersonalOrderRow.personal_order_id)
    ).all()
    return [_build_personal_order(session, row, cache) for row in rows]


def _discount_id(session: Session, discount: Discount, on_commit: OnCommit) -> int:
    if discount.discount_id is not None and session.get(
        DiscountRow, discount.discount_id
    ):
        return discount.discount_id
    row = DiscountRow(
        discount_id=discount.discount_id,
        name=discount.name,
        percent=discount.percent,
        amount=discount.amount,
    )
    session.add(row)
    session.flush()
    on_commit.append(partial(setattr, discount, "discount_id", row.discount_id))
    return row.discount_id


def insert_personal_order_rows(
    session: Session,
    personal_order: PersonalOrder,
    table_order_id: int,
    on_commit: OnCommit,
) -> int:
    """Write the order, its lines and its discount links.

    The domain object is only marked persisted through ``on_commit``.
    """

    if personal_order.is_persisted:
        raise ValueError(
            f"personal order {personal_order.personal_order_id} is already stored"
        )
    row = PersonalOrderRow(
        table_order_id=table_order_id,
        customer_name=personal_order.customer_name,
        customer_age=personal_order.customer_age,
    )
    session.add(row)
    session.flush()
    for line in personal_order.get_personal_order_lines():
        if line.menu_item.menu_item_id is None:
            raise ValueError(f"menu item {line.menu_item.name!r} is not stored")
        session.add(
            PersonalOrderLineRow(
                personal_order_id=row.personal_order_id,
                menu_item_id=line.menu_item.menu_item_id,
                quantity=line.quantity,
                status=line.status.value,
                notes=line.notes,
                add_on_option_id=(
                    line.add_on_option.add_on_option_id if line.add_on_option else None
                ),
                selection_option_id=(
                    line.selection_option.selection_option_id
                    if line.selection_option
                    else None
                ),
            )
        )
    linked: set[int] = set()
    for discount in personal_order.get_discounts():
        discount_id = _discount_id(session, discount, on_commit)
        if discount_id in linked:
            continue
        linked.add(discount_id)
        session.add(
            PersonalOrderDiscountRow(
                personal_order_id=row.personal_order_id, discount_id=discount_id
            )
        )
    session.flush()
    on_commit.append(partial(personal_order.mark_persisted, row.personal_order_id))
    return row.personal_order_id


class PersonalOrderDB(PersonalOrderRepo):
    """Reads and writes personal orders with their lines and discounts."""

    def __init__(self, database: Database):
        self.database = database

    def insert_personal_order(
        self, personal_order: PersonalOrder, table_order_id: int
    ) -> PersonalOrder:
        on_commit: OnCommit = []
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="PersonalOrder", key=table_order_id
        ) as session:
            insert_personal_order_rows(session, personal_order, table_order_id, on_commit)
        for apply in on_commit:
            apply()
        return personal_order

    def find_personal_order_by_id(self, personal_order_id: int) -> PersonalOrder | None:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="PersonalOrder", key=personal_order_id
        ) as session:
            row = session.get(PersonalOrderRow, personal_order_id)
            if row is None:
                return None
            return _build_personal_order(session, row, {})

    def find_personal_orders_by_table_order_id(
        self, table_order_id: int
    ) -> list[PersonalOrder]:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="PersonalOrder", key=table_order_id
        ) as session:
            return load_personal_orders(session, table_order_id)
