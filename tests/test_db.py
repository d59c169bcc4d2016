import logging

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from bones.db import IsolationLevel, resolve_isolation
from bones.domain import Restaurant, Table
from bones.exceptions import DataAccessError
from bones.models_store import RestaurantRow, TableRow
from bones.repos_sqlalchemy import RestaurantDB, TableDB


def test_sqlite_isolation_is_raised_to_supported_level():
    assert resolve_isolation("sqlite", IsolationLevel.READ_UNCOMMITTED) is (
        IsolationLevel.READ_UNCOMMITTED
    )
    for level in (
        IsolationLevel.READ_COMMITTED,
        IsolationLevel.REPEATABLE_READ,
        IsolationLevel.SERIALIZABLE,
    ):
        assert resolve_isolation("sqlite", level) is IsolationLevel.SERIALIZABLE


def test_other_dialects_keep_requested_level():
    assert resolve_isolation("postgresql", IsolationLevel.REPEATABLE_READ) is (
        IsolationLevel.REPEATABLE_READ
    )


def test_transaction_applies_isolation(db):
    with db.transaction(IsolationLevel.READ_UNCOMMITTED) as session:
        assert session.connection().get_isolation_level() == "READ UNCOMMITTED"
    with db.transaction(IsolationLevel.READ_COMMITTED) as session:
        assert session.connection().get_isolation_level() == "SERIALIZABLE"


def test_transaction_commits_on_success(db):
    with db.transaction(IsolationLevel.REPEATABLE_READ) as session:
        session.add(
            RestaurantRow(
                restaurant_code="002", name="Bones", city="Aarhus", street_name="Main"
            )
        )
    with db.transaction(IsolationLevel.READ_COMMITTED) as session:
        assert session.get(RestaurantRow, "002").city == "Aarhus"


def test_driver_error_becomes_data_access_error(db, caplog):
    TableDB(db).insert_table(Table(1, "001"))
    with caplog.at_level(logging.WARNING, logger="bones.db"):
        with pytest.raises(DataAccessError) as info:
            TableDB(db).insert_table(Table(1, "001"))
    assert info.value.entity == "Table"
    assert info.value.key == "1001"
    assert isinstance(info.value.__cause__, IntegrityError)
    record = caplog.records[-1]
    assert record.entity == "Table"
    assert record.isolation == "SERIALIZABLE"


def test_failed_call_leaves_no_partial_writes(db):
    restaurant = Restaurant("Bones", "Aalborg", "epicStreet", "001")
    restaurant.add_table(Table(1, "001"))
    restaurant.add_table(Table(1, "001"))
    with pytest.raises(DataAccessError):
        RestaurantDB(db).insert_restaurant(restaurant)
    with db.transaction(IsolationLevel.READ_COMMITTED) as session:
        assert session.scalars(select(RestaurantRow)).all() == []
        assert session.scalars(select(TableRow)).all() == []


def test_other_errors_roll_back_and_propagate(db):
    with pytest.raises(RuntimeError):
        with db.transaction(IsolationLevel.REPEATABLE_READ) as session:
            session.add(
                RestaurantRow(
                    restaurant_code="003", name="Bones", city="Odense", street_name="A"
                )
            )
            session.flush()
            raise RuntimeError("boom")
    assert RestaurantDB(db).find_restaurant_by_code("003") is None
