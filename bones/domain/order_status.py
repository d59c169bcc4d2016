"""Order line and table order states with their allowed transitions."""

from __future__ import annotations

from enum import Enum


class LineStatus(str, Enum):
    """Kitchen progress of a single personal order line."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    DONE = "done"


LINE_TRANSITIONS: dict[LineStatus, list[LineStatus]] = {
    LineStatus.PENDING: [LineStatus.IN_PROGRESS, LineStatus.DONE],
    LineStatus.IN_PROGRESS: [LineStatus.DONE],
    LineStatus.DONE: [],
}


class TableOrderState(str, Enum):
    """Lifecycle of a table order, derived from its kitchen and closed flags."""

    OPEN = "open"
    SENT_TO_KITCHEN = "sent_to_kitchen"
    CLOSED = "closed"


TABLE_ORDER_TRANSITIONS: dict[TableOrderState, list[TableOrderState]] = {
    TableOrderState.OPEN: [TableOrderState.SENT_TO_KITCHEN, TableOrderState.CLOSED],
    TableOrderState.SENT_TO_KITCHEN: [TableOrderState.CLOSED],
    TableOrderState.CLOSED: [],
}


def can_transition(src: LineStatus, dst: LineStatus) -> bool:
    """Return ``True`` if an order line can move from ``src`` to ``dst``."""

    return dst in LINE_TRANSITIONS.get(src, [])


def can_transition_table_order(src: TableOrderState, dst: TableOrderState) -> bool:
    """Return ``True`` if a table order can move from ``src`` to ``dst``."""

    return dst in TABLE_ORDER_TRANSITIONS.get(src, [])
