from datetime import datetime
from decimal import Decimal

from bones.domain import AddOnOption, Discount, SelectionOption
from bones.menu import additional_price, option_names
from bones.pricing import MealPeriod, best_discount, discount_value, meal_period_for


def test_meal_period_boundary():
    assert meal_period_for(datetime(2025, 1, 1, 0, 0)) is MealPeriod.LUNCH
    assert meal_period_for(datetime(2025, 1, 1, 15, 59, 59)) is MealPeriod.LUNCH
    assert meal_period_for(datetime(2025, 1, 1, 16, 0)) is MealPeriod.EVENING
    assert meal_period_for(datetime(2025, 1, 1, 23, 59)) is MealPeriod.EVENING


def test_discount_value_is_capped_at_price():
    coupon = Discount(name="Coupon", amount=50)
    assert discount_value(Decimal("40"), coupon) == Decimal("40")
    assert discount_value(Decimal("200"), Discount(name="Half", percent=50)) == Decimal("100")


def test_best_discount_keeps_first_on_tie():
    first = Discount(name="A", amount=10)
    second = Discount(name="B", percent=10)
    assert best_discount([first, second], Decimal("100")) is first
    assert best_discount([], Decimal("100")) is None


def test_option_helpers_skip_empty_slots():
    chosen = [
        AddOnOption(name="Bacon", additional_price="12.5"),
        None,
        SelectionOption(name="Rare"),
    ]
    assert additional_price(chosen) == Decimal("12.5")
    assert option_names(chosen) == ["Bacon", "Rare"]
