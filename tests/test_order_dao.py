from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from bones.db import IsolationLevel
from bones.domain import (
    Discount,
    Drink,
    LineStatus,
    PaymentType,
    PersonalOrder,
    Table,
    TableOrder,
    TableOrderState,
)
from bones.exceptions import DataAccessError, OrderClosedError
from bones.models_store import MenuItemRow, PersonalOrderRow, SideDishRow
from bones.repos_sqlalchemy import PersonalOrderDB, TableDB, TableOrderDB

from tests._factories import EVENING_ARRIVAL, LUNCH_ARRIVAL


def _guest_order(menu_items, name="Line"):
    ribeye = menu_items["Big juicy ribeye"]
    order = PersonalOrder(customer_name=name, customer_age=30)
    order.add_menu_item_line(menu_items["Baked potato"])
    order.add_main_course_line(
        ribeye,
        add_on_option=ribeye.get_add_on_options()[0],
        selection_option=ribeye.get_multiple_choice_menus()[0].get_selection_options()[1],
        notes="no salt",
    )
    order.add_menu_item_line(menu_items["Soft drink"])
    return order


def test_open_table_order_for_table(demo, db):
    table = TableDB(db).find_table_by_code(1, "001")
    order = TableOrderDB(db).open_table_order_for_table(table, LUNCH_ARRIVAL)
    assert order.table_order_id is not None
    assert table.current_table_order_id == order.table_order_id
    stored = TableDB(db).find_table_by_code(1, "001")
    assert stored.current_table_order_id == order.table_order_id


def test_open_for_missing_table_leaves_no_order(db):
    table = TableDB(db).find_table_by_code(1, "001")
    assert table is None
    with pytest.raises(DataAccessError):
        TableOrderDB(db).open_table_order_for_table(Table(1, "001"), LUNCH_ARRIVAL)
    assert TableOrderDB(db).find_all_table_orders() == []


def test_insert_table_order_requires_arrival(db):
    with pytest.raises(ValueError):
        TableOrderDB(db).insert_table_order(TableOrder())


def test_personal_order_round_trip(demo, db, menu_items):
    table_order = TableOrderDB(db).insert_table_order(
        TableOrder(time_of_arrival=LUNCH_ARRIVAL)
    )
    guest = _guest_order(menu_items)
    guest.add_discount(Discount(name="Student", percent=Decimal("10")))
    PersonalOrderDB(db).insert_personal_order(guest, table_order.table_order_id)
    assert guest.is_persisted
    assert guest.get_discounts()[0].discount_id is not None

    loaded = PersonalOrderDB(db).find_personal_order_by_id(guest.personal_order_id)
    assert loaded.customer_name == "Line"
    assert loaded.customer_age == 30
    assert loaded.is_persisted
    lines = loaded.get_personal_order_lines()
    assert [line.menu_item.name for line in lines] == [
        "Baked potato",
        "Big juicy ribeye",
        "Soft drink",
    ]
    assert lines[1].kitchen_notes() == "Garlic butter, Medium, no salt"
    assert lines[1].status is LineStatus.PENDING
    assert loaded.get_total_personal_order_lunch_price() == Decimal("140")
    assert [d.name for d in loaded.get_discounts()] == ["Student"]
    assert PersonalOrderDB(db).find_personal_order_by_id(404) is None


def test_personal_order_with_unstored_item_is_rejected(db):
    table_order = TableOrderDB(db).insert_table_order(
        TableOrder(time_of_arrival=LUNCH_ARRIVAL)
    )
    order = PersonalOrder()
    order.add_menu_item_line(Drink(name="Water", fixed_price=0))
    with pytest.raises(ValueError):
        PersonalOrderDB(db).insert_personal_order(order, table_order.table_order_id)
    assert not order.is_persisted
    assert PersonalOrderDB(db).find_personal_orders_by_table_order_id(
        table_order.table_order_id
    ) == []


def test_line_with_missing_menu_item_aborts_read(demo, db, menu_items):
    table_order = TableOrderDB(db).insert_table_order(
        TableOrder(time_of_arrival=LUNCH_ARRIVAL)
    )
    order = PersonalOrder()
    balls = menu_items["Chicken balls"]
    order.add_menu_item_line(balls)
    PersonalOrderDB(db).insert_personal_order(order, table_order.table_order_id)
    with Session(db.engine) as session:
        session.delete(session.get(SideDishRow, balls.menu_item_id))
        session.delete(session.get(MenuItemRow, balls.menu_item_id))
        session.commit()
    with pytest.raises(DataAccessError) as info:
        TableOrderDB(db).find_table_order_by_id(table_order.table_order_id)
    assert info.value.entity == "PersonalOrderLine"


def test_kitchen_view_only_sent_and_open(demo, db, menu_items):
    dao = TableOrderDB(db)
    draft = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    sent = dao.insert_table_order(
        TableOrder(time_of_arrival=LUNCH_ARRIVAL, is_sent_to_kitchen=True)
    )
    done = dao.insert_table_order(
        TableOrder(
            time_of_arrival=LUNCH_ARRIVAL,
            is_sent_to_kitchen=True,
            is_table_order_closed=True,
        )
    )
    PersonalOrderDB(db).insert_personal_order(
        _guest_order(menu_items), sent.table_order_id
    )
    visible = dao.find_all_visible_to_kitchen_table_orders()
    assert [o.table_order_id for o in visible] == [sent.table_order_id]
    assert len(visible[0].get_personal_orders()) == 1
    ids = [o.table_order_id for o in dao.find_all_table_orders()]
    assert ids == [draft.table_order_id, sent.table_order_id, done.table_order_id]


def test_find_all_table_orders_is_shallow(demo, db, menu_items):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    PersonalOrderDB(db).insert_personal_order(
        _guest_order(menu_items), order.table_order_id
    )
    [listed] = dao.find_all_table_orders()
    assert listed.get_personal_orders() == []
    full = dao.find_table_order_by_id(order.table_order_id)
    assert len(full.get_personal_orders()) == 1
    assert dao.find_table_order_by_id(404) is None


def test_update_table_order(db):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=EVENING_ARRIVAL))
    order.request_service()
    order.record_payment(Decimal("99.95"), PaymentType.MOBILE_PAY)
    order.close()
    dao.update_table_order(order)
    loaded = dao.find_table_order_by_id(order.table_order_id)
    assert loaded.is_requesting_service
    assert loaded.payment_type is PaymentType.MOBILE_PAY
    assert loaded.total_amount_paid == Decimal("99.95")
    assert loaded.state is TableOrderState.CLOSED
    assert loaded.time_of_arrival == EVENING_ARRIVAL


def test_update_missing_table_order_fails(db):
    with pytest.raises(DataAccessError):
        TableOrderDB(db).update_table_order(
            TableOrder(table_order_id=404, time_of_arrival=LUNCH_ARRIVAL)
        )


def test_confirm_table_order(demo, db, menu_items):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    guests = [_guest_order(menu_items, "Line"), _guest_order(menu_items, "Anders")]
    dao.confirm_table_order(order, guests)

    assert order.is_sent_to_kitchen
    assert all(g.is_persisted for g in guests)
    assert order.total_table_order_price == Decimal("280")
    assert order.order_preparation_time == 900

    loaded = dao.find_table_order_by_id(order.table_order_id)
    assert loaded.state is TableOrderState.SENT_TO_KITCHEN
    assert loaded.total_table_order_price == Decimal("280")
    assert loaded.order_preparation_time == 900
    assert [p.customer_name for p in loaded.get_personal_orders()] == ["Line", "Anders"]


def test_confirm_is_all_or_nothing(demo, db, menu_items):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    good = _guest_order(menu_items)
    bad = PersonalOrder(customer_name="Ghost")
    bad.add_menu_item_line(Drink(name="Not on the menu", fixed_price=1))

    with pytest.raises(ValueError):
        dao.confirm_table_order(order, [good, bad])

    assert not good.is_persisted
    assert not order.is_sent_to_kitchen
    assert order.get_personal_orders() == []
    with db.transaction(IsolationLevel.READ_COMMITTED) as session:
        assert session.scalars(select(PersonalOrderRow)).all() == []
    assert not dao.find_table_order_by_id(order.table_order_id).is_sent_to_kitchen


def test_confirm_closed_order_is_rejected(db):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(
        TableOrder(time_of_arrival=LUNCH_ARRIVAL, is_table_order_closed=True)
    )
    with pytest.raises(OrderClosedError):
        dao.confirm_table_order(order, [])


def test_confirm_counts_orders_stored_from_another_copy(demo, db, menu_items):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    other = dao.find_table_order_by_id(order.table_order_id)
    dao.confirm_table_order(other, [_guest_order(menu_items, "Line")])

    anders = _guest_order(menu_items, "Anders")
    dao.confirm_table_order(order, [anders])
    assert order.total_table_order_price == Decimal("280")
    assert [p.customer_name for p in order.get_personal_orders()] == ["Line", "Anders"]
    assert order.get_personal_orders()[1] is anders
    loaded = dao.find_table_order_by_id(order.table_order_id)
    assert loaded.total_table_order_price == Decimal("280")


def test_confirm_rejects_order_closed_in_the_store(demo, db, menu_items):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    staff = dao.find_table_order_by_id(order.table_order_id)
    staff.close()
    dao.update_table_order(staff)

    guest = _guest_order(menu_items)
    with pytest.raises(OrderClosedError):
        dao.confirm_table_order(order, [guest])
    assert not guest.is_persisted
    loaded = dao.find_table_order_by_id(order.table_order_id)
    assert loaded.state is TableOrderState.CLOSED
    assert loaded.get_personal_orders() == []


def test_update_never_reopens_a_closed_order(db):
    dao = TableOrderDB(db)
    order = dao.insert_table_order(TableOrder(time_of_arrival=LUNCH_ARRIVAL))
    stale = dao.find_table_order_by_id(order.table_order_id)
    order.close()
    dao.update_table_order(order)

    stale.request_service()
    dao.update_table_order(stale)
    assert stale.is_table_order_closed
    loaded = dao.find_table_order_by_id(order.table_order_id)
    assert loaded.state is TableOrderState.CLOSED
    assert loaded.is_requesting_service
