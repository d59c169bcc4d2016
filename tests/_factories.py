"""Small builders shared by the tests."""

from datetime import datetime
from decimal import Decimal

from bones.domain import MainCourse

LUNCH_ARRIVAL = datetime(2025, 6, 8, 12, 30)
EVENING_ARRIVAL = datetime(2025, 6, 8, 18, 0)


def main_course(name, lunch, evening, **kwargs):
    return MainCourse(
        name=name, lunch_amount=Decimal(lunch), evening_amount=Decimal(evening), **kwargs
    )
