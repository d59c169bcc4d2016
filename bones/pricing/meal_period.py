"""Lunch and evening price selection."""

from __future__ import annotations

from datetime import datetime, time
from enum import Enum


class MealPeriod(str, Enum):
    """The two price points every priceable item supplies."""

    LUNCH = "lunch"
    EVENING = "evening"


EVENING_STARTS_AT = time(16, 0)


def meal_period_for(arrival: datetime) -> MealPeriod:
    """Return the meal period for a table arriving at ``arrival``.

    The evening price applies at or after 16:00 local time of arrival. The
    wall clock at the time of ordering is irrelevant.
    """

    if arrival.time() >= EVENING_STARTS_AT:
        return MealPeriod.EVENING
    return MealPeriod.LUNCH
