"""Helpers for choosing the discount applied to a personal order."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover
    from ..domain.orders import Discount


def discount_value(price: Decimal, discount: "Discount") -> Decimal:
    """Return how much ``discount`` takes off ``price``, capped at ``price``."""

    if discount.percent is not None:
        value = price * Decimal(str(discount.percent)) / Decimal("100")
    else:
        value = Decimal(str(discount.amount or 0))
    return min(max(value, Decimal("0")), price)


def best_discount(
    discounts: Sequence["Discount"] | None, price: Decimal
) -> "Discount | None":
    """Return the single discount worth the most on ``price``.

    Discounts never stack; ties keep the first one selected.
    """

    if not discounts:
        return None
    best = None
    best_value = Decimal("0")
    for discount in discounts:
        value = discount_value(price, discount)
        if best is None or value > best_value:
            best = discount
            best_value = value
    return best
