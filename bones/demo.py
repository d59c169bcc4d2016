"""Demo restaurant used by ``python -m bones seed-demo`` and the tests.

Seeds restaurant ``001`` in Aalborg with six tables and one adult menu card.
"""

from __future__ import annotations

from decimal import Decimal

from .db import Database
from .domain.menu_card import AvailabilityTracker, MenuCard
from .domain.menu_items import (
    AddOnOption,
    BarType,
    DipsAndSauces,
    Drink,
    MainCourse,
    MultipleChoiceMenu,
    PotatoDish,
    SelectionOption,
    SelfServiceBar,
    SideDish,
)
from .domain.restaurant import Restaurant, Table
from .repos_sqlalchemy import RestaurantDB

DEMO_RESTAURANT_CODE = "001"
DEMO_TABLE_COUNT = 6


def _ribeye() -> MainCourse:
    ribeye = MainCourse(
        name="Big juicy ribeye",
        description="250g ribeye from the grill",
        introduction_description="Served with grilled tomato and a side of your choice.",
        preparation_time=900,
        is_made_by_kitchen_staff=True,
        lunch_amount=Decimal("100"),
        evening_amount=Decimal("125"),
    )
    doneness = MultipleChoiceMenu(question="How would you like your steak?")
    for name in ("Rare", "Medium", "Well done"):
        doneness.add_selection_option(SelectionOption(name=name))
    ribeye.add_multiple_choice_menu(doneness)
    ribeye.add_add_on_option(AddOnOption(name="Garlic butter", additional_price=10))
    ribeye.add_add_on_option(AddOnOption(name="285g steak", additional_price=45))
    return ribeye


def _spareribs() -> MainCourse:
    spareribs = MainCourse(
        name="Spareribs",
        description="Slow cooked ribs with house glaze",
        preparation_time=1200,
        is_made_by_kitchen_staff=True,
        lunch_amount=Decimal("150"),
        evening_amount=Decimal("205"),
    )
    glaze = MultipleChoiceMenu(question="Which glaze?")
    glaze.add_selection_option(SelectionOption(name="Honey"))
    glaze.add_selection_option(SelectionOption(name="Chili", additional_price=5))
    spareribs.add_multiple_choice_menu(glaze)
    return spareribs


def build_demo_menu_card() -> MenuCard:
    card = MenuCard(name="Adult menu")
    items = [
        _ribeye(),
        _spareribs(),
        PotatoDish(
            name="Baked potato",
            preparation_time=300,
            is_made_by_kitchen_staff=True,
            fixed_price=0,
        ),
        PotatoDish(
            name="Sweet potato fries",
            preparation_time=420,
            is_made_by_kitchen_staff=True,
            is_premium=True,
            fixed_price=15,
        ),
        DipsAndSauces(name="Bearnaise", is_sauce=True, fixed_price=15),
        SideDish(name="Chicken balls", quantity_per_serving=2, fixed_price=25),
        Drink(name="Soft drink", is_refill=True, fixed_price=30),
        SelfServiceBar(
            name="Salad bar", bar_type=BarType.SALAD, lunch_amount=50, evening_amount=65
        ),
        SelfServiceBar(
            name="Soft ice", bar_type=BarType.SOFT_ICE, lunch_amount=25, evening_amount=25
        ),
    ]
    for item in items:
        card.add_availability_tracker(AvailabilityTracker(menu_item=item))
    return card


def build_demo_restaurant() -> Restaurant:
    restaurant = Restaurant(
        name="Bones",
        city="Aalborg",
        street_name="epicStreet",
        restaurant_code=DEMO_RESTAURANT_CODE,
    )
    for number in range(1, DEMO_TABLE_COUNT + 1):
        restaurant.add_table(Table(number, DEMO_RESTAURANT_CODE))
    restaurant.add_menu_card(build_demo_menu_card())
    return restaurant


def seed_demo(database: Database) -> Restaurant:
    """Insert the demo restaurant and return it with ids filled in."""

    return RestaurantDB(database).insert_restaurant(build_demo_restaurant())
