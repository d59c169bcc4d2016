"""Helper functions for option price deltas on ordered main courses."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, List, Protocol


class PricedOption(Protocol):
    """Anything carrying a name and an additional price."""

    name: str
    additional_price: Decimal


def additional_price(chosen: Iterable[PricedOption | None]) -> Decimal:
    """Return the summed price delta of the ``chosen`` options.

    ``None`` entries stand for an option slot the guest left empty.
    """

    extra = Decimal("0")
    for option in chosen:
        if option is None:
            continue
        extra += Decimal(option.additional_price)
    return extra


def option_names(chosen: Iterable[PricedOption | None]) -> List[str]:
    """Return the names of the chosen options, skipping empty slots."""

    return [option.name for option in chosen if option is not None]
