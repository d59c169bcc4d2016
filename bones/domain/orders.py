"""Personal orders, their lines and the table order that groups them.

These objects never touch storage. The data-access layer builds them from
rows and unpacks them again.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable

from ..exceptions import OrderClosedError
from ..menu.modifiers import additional_price, option_names
from ..pricing.discounts import best_discount, discount_value
from ..pricing.meal_period import MealPeriod, meal_period_for
from .menu_items import (
    AddOnOption,
    MainCourse,
    MenuItem,
    Money,
    SelectionOption,
    to_money,
)
from .order_status import LineStatus, TableOrderState, can_transition


class PaymentType(str, Enum):
    """How a table settles its bill."""

    CASH = "cash"
    CARD = "card"
    MOBILE_PAY = "mobile_pay"


@dataclass(kw_only=True)
class Discount:
    """A named reduction, either a percentage or a flat amount."""

    name: str
    percent: Decimal | None = None
    amount: Decimal | None = None
    discount_id: int | None = None

    def __post_init__(self) -> None:
        if (self.percent is None) == (self.amount is None):
            raise ValueError("discount needs exactly one of percent or amount")
        if self.percent is not None:
            self.percent = to_money(self.percent)
        if self.amount is not None:
            self.amount = to_money(self.amount)


@dataclass(kw_only=True, eq=False)
class PersonalOrderLine:
    """One ordered menu item with its notes, status and chosen options."""

    menu_item: MenuItem
    quantity: int = 1
    status: LineStatus = LineStatus.PENDING
    notes: str = ""
    add_on_option: AddOnOption | None = None
    selection_option: SelectionOption | None = None

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError("quantity must be at least 1")
        self.status = LineStatus(self.status)
        for option in (self.add_on_option, self.selection_option):
            if option is not None:
                self._check_option(option)

    def _check_option(self, option: AddOnOption | SelectionOption) -> None:
        if not isinstance(self.menu_item, MainCourse):
            raise ValueError(f"{self.menu_item.name!r} does not take options")
        if not self.menu_item.owns_option(option):
            raise ValueError(
                f"option {option.name!r} does not belong to {self.menu_item.name!r}"
            )

    def add_add_on_option(self, option: AddOnOption) -> None:
        self._check_option(option)
        self.add_on_option = option

    def add_selection_option(self, option: SelectionOption) -> None:
        self._check_option(option)
        self.selection_option = option

    def get_additional_price(self) -> Decimal:
        """Return the price delta of the chosen add-on and selection."""

        return additional_price((self.add_on_option, self.selection_option))

    def price(self, period: MealPeriod) -> Decimal:
        return (self.menu_item.price(period) + self.get_additional_price()) * self.quantity

    def lunch_price(self) -> Decimal:
        return self.price(MealPeriod.LUNCH)

    def evening_price(self) -> Decimal:
        return self.price(MealPeriod.EVENING)

    def kitchen_notes(self) -> str:
        """Return what the kitchen should read: chosen options, then free notes."""

        parts = option_names((self.add_on_option, self.selection_option))
        if self.notes:
            parts.append(self.notes)
        return ", ".join(parts)

    def set_status(self, status: LineStatus) -> None:
        status = LineStatus(status)
        if status is self.status:
            return
        if not can_transition(self.status, status):
            raise ValueError(
                f"cannot move line from {self.status.value!r} to {status.value!r}"
            )
        self.status = status


@dataclass(kw_only=True, eq=False)
class PersonalOrder:
    """One guest's order within a table order.

    Lines are appended without de-duplication. Once the order is persisted it
    no longer accepts lines or discounts.
    """

    customer_name: str = ""
    customer_age: int = 0
    personal_order_id: int | None = None
    lines: list[PersonalOrderLine] = field(default_factory=list)
    discounts: list[Discount] = field(default_factory=list)
    _persisted: bool = field(default=False, init=False, repr=False)

    @property
    def is_persisted(self) -> bool:
        return self._persisted

    def mark_persisted(self, personal_order_id: int) -> None:
        self.personal_order_id = personal_order_id
        self._persisted = True

    def _ensure_open(self) -> None:
        if self._persisted:
            raise OrderClosedError(
                f"personal order {self.personal_order_id} is already placed"
            )

    def add_personal_order_line(self, line: PersonalOrderLine) -> None:
        self._ensure_open()
        self.lines.append(line)

    def add_menu_item_line(self, menu_item: MenuItem, notes: str = "") -> PersonalOrderLine:
        line = PersonalOrderLine(menu_item=menu_item, notes=notes)
        self.add_personal_order_line(line)
        return line

    def add_main_course_line(
        self,
        main_course: MainCourse,
        add_on_option: AddOnOption | None = None,
        selection_option: SelectionOption | None = None,
        notes: str = "",
    ) -> PersonalOrderLine:
        line = PersonalOrderLine(
            menu_item=main_course,
            add_on_option=add_on_option,
            selection_option=selection_option,
            notes=notes,
        )
        self.add_personal_order_line(line)
        return line

    def clear_personal_order_lines(self) -> None:
        self._ensure_open()
        self.lines.clear()

    def get_personal_order_lines(self) -> list[PersonalOrderLine]:
        return list(self.lines)

    def add_discount(self, discount: Discount) -> None:
        self._ensure_open()
        self.discounts.append(discount)

    def add_all_discounts(self, discounts: Iterable[Discount]) -> None:
        for discount in discounts:
            self.add_discount(discount)

    def remove_discount(self, discount: Discount) -> None:
        self._ensure_open()
        self.discounts.remove(discount)

    def clear_discounts(self) -> None:
        self._ensure_open()
        self.discounts.clear()

    def get_discounts(self) -> list[Discount]:
        return list(self.discounts)

    def total_price(self, period: MealPeriod) -> Decimal:
        return sum((line.price(period) for line in self.lines), Decimal("0"))

    def get_total_personal_order_lunch_price(self) -> Decimal:
        return self.total_price(MealPeriod.LUNCH)

    def get_total_personal_order_evening_price(self) -> Decimal:
        return self.total_price(MealPeriod.EVENING)

    def applied_discount(self, period: MealPeriod) -> Discount | None:
        """Return the one discount that applies, the most valuable one."""

        return best_discount(self.discounts, self.total_price(period))

    def effective_price(self, period: MealPeriod) -> Decimal:
        total = self.total_price(period)
        discount = best_discount(self.discounts, total)
        if discount is None:
            return total
        return total - discount_value(total, discount)

    def preparation_time(self) -> int:
        """Return the longest preparation time among kitchen-made items."""

        return max(
            (
                line.menu_item.preparation_time
                for line in self.lines
                if line.menu_item.is_made_by_kitchen_staff
            ),
            default=0,
        )


@dataclass(kw_only=True, eq=False)
class TableOrder:
    """Everything ordered at one table during one visit.

    ``total_table_order_price`` is the stored figure; the live figure comes
    from :meth:`calculate_total_table_order_price` and is copied over by
    :meth:`refresh_total` right before persisting.
    """

    table_order_id: int | None = None
    time_of_arrival: datetime | None = None
    is_table_order_closed: bool = False
    payment_type: PaymentType | None = None
    total_table_order_price: Decimal = Decimal("0")
    total_amount_paid: Decimal = Decimal("0")
    is_sent_to_kitchen: bool = False
    is_requesting_service: bool = False
    order_preparation_time: int = 0
    personal_orders: list[PersonalOrder] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.total_table_order_price = to_money(self.total_table_order_price)
        self.total_amount_paid = to_money(self.total_amount_paid)
        if self.payment_type is not None:
            self.payment_type = PaymentType(self.payment_type)

    @property
    def state(self) -> TableOrderState:
        if self.is_table_order_closed:
            return TableOrderState.CLOSED
        if self.is_sent_to_kitchen:
            return TableOrderState.SENT_TO_KITCHEN
        return TableOrderState.OPEN

    @property
    def is_visible_to_kitchen(self) -> bool:
        return self.is_sent_to_kitchen and not self.is_table_order_closed

    @property
    def meal_period(self) -> MealPeriod:
        if self.time_of_arrival is None:
            raise ValueError(f"table order {self.table_order_id} has no arrival time")
        return meal_period_for(self.time_of_arrival)

    def add_personal_order(self, personal_order: PersonalOrder) -> None:
        if self.is_table_order_closed:
            raise OrderClosedError(f"table order {self.table_order_id} is closed")
        self.personal_orders.append(personal_order)

    def get_personal_orders(self) -> list[PersonalOrder]:
        return list(self.personal_orders)

    def calculate_total_table_order_price(self) -> Decimal:
        """Sum every personal order at the table's lunch or evening price."""

        period = self.meal_period
        return sum(
            (order.total_price(period) for order in self.personal_orders),
            Decimal("0"),
        )

    def calculate_amount_due(self) -> Decimal:
        period = self.meal_period
        return sum(
            (order.effective_price(period) for order in self.personal_orders),
            Decimal("0"),
        )

    def outstanding_balance(self) -> Decimal:
        return self.calculate_amount_due() - self.total_amount_paid

    def calculate_order_preparation_time(self) -> int:
        return max(
            (order.preparation_time() for order in self.personal_orders), default=0
        )

    def refresh_total(self) -> Decimal:
        self.total_table_order_price = self.calculate_total_table_order_price()
        self.order_preparation_time = self.calculate_order_preparation_time()
        return self.total_table_order_price

    def send_to_kitchen(self) -> None:
        if self.is_table_order_closed:
            raise OrderClosedError(f"table order {self.table_order_id} is closed")
        self.is_sent_to_kitchen = True

    def set_sent_to_kitchen(self, is_sent_to_kitchen: bool) -> None:
        if is_sent_to_kitchen:
            self.send_to_kitchen()
        elif self.is_sent_to_kitchen:
            raise ValueError("a table order cannot be recalled from the kitchen")

    def close(self) -> None:
        self.is_table_order_closed = True

    def request_service(self) -> None:
        self.is_requesting_service = True

    def clear_service_request(self) -> None:
        self.is_requesting_service = False

    def record_payment(self, amount: Money, payment_type: PaymentType) -> None:
        """Record a payment; no money is moved here."""

        amount = to_money(amount)
        if amount <= 0:
            raise ValueError("payment amount must be positive")
        self.payment_type = PaymentType(payment_type)
        self.total_amount_paid += amount

    def is_fully_paid(self) -> bool:
        return self.outstanding_balance() <= 0
