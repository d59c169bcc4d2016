"""Meal-period pricing and discount selection."""

from .discounts import best_discount, discount_value
from .meal_period import EVENING_STARTS_AT, MealPeriod, meal_period_for

__all__ = [
    "EVENING_STARTS_AT",
    "MealPeriod",
    "meal_period_for",
    "best_discount",
    "discount_value",
]
