"""SQLAlchemy implementation of the table repository."""

from __future__ import annotations

from sqlalchemy import Integer, cast, select, update
from sqlalchemy.orm import Session

from ..db import Database, IsolationLevel
from ..domain.restaurant import Table
from ..exceptions import DataAccessError
from ..models_store import TableRow
from ..repos.restaurant_repo import TableRepo


def _build_table(row: TableRow) -> Table:
    return Table(
        table_number=row.table_number,
        restaurant_code=row.restaurant_code,
        current_table_order_id=row.table_order_id,
    )


def load_tables(session: Session, restaurant_code: str) -> list[Table]:
    rows = session.scalars(
        select(TableRow)
        .where(TableRow.restaurant_code == restaurant_code)
        .order_by(cast(TableRow.table_number, Integer), TableRow.table_number)
    ).all()
    return [_build_table(row) for row in rows]


def insert_table_row(session: Session, table: Table) -> None:
    if table.restaurant_code is None:
        raise ValueError("table needs a restaurant code before it can be stored")
    session.add(
        TableRow(
            table_number=str(table.table_number),
            restaurant_code=table.restaurant_code,
            table_order_id=table.current_table_order_id,
        )
    )
    session.flush()


def assign_table_order_row(session: Session, table: Table, table_order_id: int | None) -> None:
    """Point the table row at ``table_order_id``; raises if the row is missing."""

    result = session.execute(
        update(TableRow)
        .where(TableRow.table_number == str(table.table_number))
        .where(TableRow.restaurant_code == table.restaurant_code)
        .values({TableRow.table_order_id: table_order_id})
    )
    if result.rowcount == 0:
        raise DataAccessError(
            f"table {table.table_code} does not exist",
            entity="Table",
            key=table.table_code,
        )


class TableDB(TableRepo):
    """Reads and writes dining tables."""

    def __init__(self, database: Database):
        self.database = database

    def find_table_by_code(
        self, table_number: int | str, restaurant_code: str
    ) -> Table | None:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED,
            entity="Table",
            key=f"{table_number}{restaurant_code}",
        ) as session:
            row = session.get(TableRow, (str(table_number), restaurant_code))
            return _build_table(row) if row is not None else None

    def insert_table(self, table: Table) -> Table:
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="Table", key=table.table_code
        ) as session:
            insert_table_row(session, table)
        return table

    def assign_table_order(self, table: Table, table_order_id: int | None) -> Table:
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="Table", key=table.table_code
        ) as session:
            assign_table_order_row(session, table, table_order_id)
        table.current_table_order_id = table_order_id
        return table
