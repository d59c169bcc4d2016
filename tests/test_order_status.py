from bones.domain.order_status import (
    LineStatus,
    TableOrderState,
    can_transition,
    can_transition_table_order,
)


def test_line_transitions():
    assert can_transition(LineStatus.PENDING, LineStatus.IN_PROGRESS)
    assert can_transition(LineStatus.PENDING, LineStatus.DONE)
    assert can_transition(LineStatus.IN_PROGRESS, LineStatus.DONE)
    assert not can_transition(LineStatus.DONE, LineStatus.PENDING)
    assert not can_transition(LineStatus.IN_PROGRESS, LineStatus.PENDING)


def test_table_order_transitions():
    assert can_transition_table_order(TableOrderState.OPEN, TableOrderState.SENT_TO_KITCHEN)
    assert can_transition_table_order(TableOrderState.OPEN, TableOrderState.CLOSED)
    assert can_transition_table_order(
        TableOrderState.SENT_TO_KITCHEN, TableOrderState.CLOSED
    )
    assert not can_transition_table_order(
        TableOrderState.SENT_TO_KITCHEN, TableOrderState.OPEN
    )
    assert not can_transition_table_order(TableOrderState.CLOSED, TableOrderState.OPEN)
