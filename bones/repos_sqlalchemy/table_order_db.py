"""SQLAlchemy implementation of the table order repository."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import Database, IsolationLevel
from ..domain.orders import PersonalOrder, TableOrder
from ..domain.restaurant import Table
from ..exceptions import DataAccessError, OrderClosedError
from ..models_store import TableOrderRow
from ..repos.orders_repo import TableOrderRepo
from .menu_item_db import MenuItemCache, OnCommit
from .personal_order_db import insert_personal_order_rows, load_personal_orders
from .table_db import assign_table_order_row


def _build_table_order(row: TableOrderRow) -> TableOrder:
    return TableOrder(
        table_order_id=row.table_order_id,
        time_of_arrival=row.time_of_arrival,
        is_table_order_closed=bool(row.is_table_order_closed),
        payment_type=row.payment_type,
        total_table_order_price=row.total_table_order_price,
        total_amount_paid=row.total_amount_paid,
        is_sent_to_kitchen=bool(row.is_sent_to_kitchen),
        is_requesting_service=bool(row.is_requesting_service),
        order_preparation_time=row.order_preparation_time or 0,
    )


def _row_values(table_order: TableOrder) -> dict:
    return {
        "time_of_arrival": table_order.time_of_arrival,
        "is_table_order_closed": table_order.is_table_order_closed,
        "payment_type": (
            table_order.payment_type.value if table_order.payment_type else None
        ),
        "total_table_order_price": table_order.total_table_order_price,
        "total_amount_paid": table_order.total_amount_paid,
        "is_sent_to_kitchen": table_order.is_sent_to_kitchen,
        "is_requesting_service": table_order.is_requesting_service,
        "order_preparation_time": table_order.order_preparation_time,
    }


def _insert_table_order_row(session: Session, table_order: TableOrder) -> int:
    if table_order.time_of_arrival is None:
        raise ValueError("table order needs a time of arrival")
    row = TableOrderRow(**_row_values(table_order))
    session.add(row)
    session.flush()
    return row.table_order_id


def _lock_table_order_row(
    session: Session, table_order_id: int | None
) -> TableOrderRow:
    row = None
    if table_order_id is not None:
        row = session.get(TableOrderRow, table_order_id, with_for_update=True)
    if row is None:
        raise DataAccessError(
            f"table order {table_order_id} does not exist",
            entity="TableOrder",
            key=table_order_id,
        )
    return row


def _write_table_order(
    session: Session, row: TableOrderRow, table_order: TableOrder, cache: MenuItemCache
) -> TableOrder:
    """Write ``table_order`` over ``row`` and return what was stored.

    A stored close or kitchen flag is never cleared, and the total and
    preparation time come from the personal orders in the store.
    """

    stored = replace(
        table_order,
        is_table_order_closed=(
            table_order.is_table_order_closed or bool(row.is_table_order_closed)
        ),
        is_sent_to_kitchen=table_order.is_sent_to_kitchen or bool(row.is_sent_to_kitchen),
        personal_orders=load_personal_orders(session, row.table_order_id, cache),
    )
    stored.refresh_total()
    for name, value in _row_values(stored).items():
        setattr(row, name, value)
    return stored


def _adopt(table_order: TableOrder, stored: TableOrder) -> None:
    for name in _row_values(stored):
        setattr(table_order, name, getattr(stored, name))


def _with_personal_orders(
    session: Session, row: TableOrderRow, cache: MenuItemCache
) -> TableOrder:
    table_order = _build_table_order(row)
    table_order.personal_orders = load_personal_orders(
        session, row.table_order_id, cache
    )
    return table_order


class TableOrderDB(TableOrderRepo):
    """Reads and writes table orders.

    Listing every order is a shallow, dirty read used for overviews; the
    kitchen view and single-order reads load personal orders and lines under
    read-committed isolation. Every write runs at repeatable read and locks
    the stored row before changing it.
    """

    def __init__(self, database: Database):
        self.database = database

    def find_all_table_orders(self) -> list[TableOrder]:
        with self.database.transaction(
            IsolationLevel.READ_UNCOMMITTED, entity="TableOrder"
        ) as session:
            rows = session.scalars(
                select(TableOrderRow).order_by(TableOrderRow.table_order_id)
            ).all()
            return [_build_table_order(row) for row in rows]

    def find_table_order_by_id(self, table_order_id: int) -> TableOrder | None:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="TableOrder", key=table_order_id
        ) as session:
            row = session.get(TableOrderRow, table_order_id)
            if row is None:
                return None
            return _with_personal_orders(session, row, {})

    def find_all_visible_to_kitchen_table_orders(self) -> list[TableOrder]:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="TableOrder", key="kitchen"
        ) as session:
            rows = session.scalars(
                select(TableOrderRow)
                .where(TableOrderRow.is_sent_to_kitchen.is_(True))
                .where(TableOrderRow.is_table_order_closed.is_(False))
                .order_by(TableOrderRow.time_of_arrival, TableOrderRow.table_order_id)
            ).all()
            cache: MenuItemCache = {}
            return [_with_personal_orders(session, row, cache) for row in rows]

    def insert_table_order(self, table_order: TableOrder) -> TableOrder:
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="TableOrder"
        ) as session:
            table_order_id = _insert_table_order_row(session, table_order)
        table_order.table_order_id = table_order_id
        return table_order

    def open_table_order_for_table(
        self, table: Table, time_of_arrival: datetime
    ) -> TableOrder:
        """Create a table order and make it the table's current order.

        Both writes share one transaction; a missing table leaves no order.
        """

        table_order = TableOrder(time_of_arrival=time_of_arrival)
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="TableOrder", key=table.table_code
        ) as session:
            table_order_id = _insert_table_order_row(session, table_order)
            assign_table_order_row(session, table, table_order_id)
        table_order.table_order_id = table_order_id
        table.current_table_order_id = table_order_id
        return table_order

    def update_table_order(self, table_order: TableOrder) -> TableOrder:
        """Store the order's flags and payment; stored figures are copied back."""

        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ,
            entity="TableOrder",
            key=table_order.table_order_id,
        ) as session:
            row = _lock_table_order_row(session, table_order.table_order_id)
            stored = _write_table_order(session, row, table_order, {})
        _adopt(table_order, stored)
        return table_order

    def confirm_table_order(
        self, table_order: TableOrder, personal_orders: list[PersonalOrder]
    ) -> TableOrder:
        """Store the staged personal orders and send the table order to the kitchen.

        Everything happens in one transaction against the stored row, so
        orders confirmed from other sessions count towards the total and an
        order closed meanwhile raises :class:`OrderClosedError`. The in-memory
        order is only changed after the commit, so a failure leaves it as it
        was.
        """

        if table_order.is_table_order_closed:
            raise OrderClosedError(f"table order {table_order.table_order_id} is closed")
        if table_order.table_order_id is None:
            raise ValueError("table order must be stored before it is confirmed")
        staged = [po for po in personal_orders if not po.is_persisted]
        known = table_order.get_personal_orders()

        on_commit: OnCommit = []
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ,
            entity="TableOrder",
            key=table_order.table_order_id,
        ) as session:
            row = _lock_table_order_row(session, table_order.table_order_id)
            if row.is_table_order_closed:
                raise OrderClosedError(
                    f"table order {table_order.table_order_id} was closed"
                )
            for personal_order in staged:
                insert_personal_order_rows(
                    session, personal_order, table_order.table_order_id, on_commit
                )
            draft = _build_table_order(row)
            draft.send_to_kitchen()
            stored = _write_table_order(session, row, draft, {})
        for apply in on_commit:
            apply()

        mine = {po.personal_order_id: po for po in known + staged if po.is_persisted}
        table_order.personal_orders = [
            mine.get(po.personal_order_id, po) for po in stored.personal_orders
        ] + [po for po in known if not po.is_persisted]
        _adopt(table_order, stored)
        return table_order
