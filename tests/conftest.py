import pytest

from bones.db import create_test_database
from bones.demo import seed_demo
from bones.domain import (
    AddOnOption,
    MultipleChoiceMenu,
    PersonalOrder,
    SelectionOption,
    TableOrder,
)

from tests._factories import LUNCH_ARRIVAL, main_course


@pytest.fixture
def db():
    database = create_test_database()
    yield database
    database.engine.dispose()


@pytest.fixture
def demo(db):
    return seed_demo(db)


@pytest.fixture
def menu_items(demo):
    """Demo menu items keyed by name."""

    card = demo.get_menu_cards()[0]
    return {item.name: item for item in card.get_available_menu_items()}


@pytest.fixture
def ribeye():
    course = main_course(
        "Ribeye", "100", "125", preparation_time=900, is_made_by_kitchen_staff=True
    )
    doneness = MultipleChoiceMenu(question="How would you like your steak?")
    doneness.add_selection_option(SelectionOption(name="Rare"))
    doneness.add_selection_option(SelectionOption(name="Extra sauce", additional_price=5))
    course.add_multiple_choice_menu(doneness)
    course.add_add_on_option(AddOnOption(name="Garlic butter", additional_price=10))
    return course


@pytest.fixture
def four_course_order():
    """Personal order with lunch prices 50, 75, 100, 150 and evening 75, 100, 150, 205."""

    order = PersonalOrder(customer_name="Line", customer_age=30)
    for name, lunch, evening in [
        ("Soup", "50", "75"),
        ("Burger", "75", "100"),
        ("Ribeye", "100", "150"),
        ("Spareribs", "150", "205"),
    ]:
        order.add_menu_item_line(main_course(name, lunch, evening))
    return order


@pytest.fixture
def lunch_table_order():
    return TableOrder(table_order_id=1, time_of_arrival=LUNCH_ARRIVAL)
