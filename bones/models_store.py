"""Relational schema of the ordering store.

Table and column names follow the restaurant's existing database; attribute
names are the Python spelling of each column. The models carry no behaviour;
the ``repos_sqlalchemy`` package maps rows to domain objects.
"""

from __future__ import annotations

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

MONEY = Numeric(10, 2)


class RestaurantRow(Base):
    __tablename__ = "Restaurant"

    restaurant_code = Column("restaurantCode", String(3), primary_key=True)
    name = Column("name", String, nullable=False)
    city = Column("city", String, nullable=False)
    street_name = Column("streetName", String, nullable=False)


class TableRow(Base):
    """A dining table; ``table_order_id`` points at its current order."""

    __tablename__ = "Object_table"

    table_number = Column("tableNumber", String, primary_key=True)
    restaurant_code = Column(
        "restaurantCode",
        String(3),
        ForeignKey("Restaurant.restaurantCode"),
        primary_key=True,
    )
    table_order_id = Column(
        "tableOrderId", Integer, ForeignKey("TableOrder.tableOrderId"), nullable=True
    )


class MenuCardRow(Base):
    __tablename__ = "MenuCard"

    menu_card_id = Column("menuCardId", Integer, primary_key=True)
    name = Column("name", String, nullable=False)
    restaurant_code = Column(
        "restaurantCode", String(3), ForeignKey("Restaurant.restaurantCode")
    )


class AvailabilityTrackerRow(Base):
    __tablename__ = "AvailabilityTracker"

    tracker_id = Column("availabilityTrackerId", Integer, primary_key=True)
    menu_card_id = Column(
        "menuCardId", Integer, ForeignKey("MenuCard.menuCardId"), nullable=False
    )
    # no FK: readers skip trackers whose item row is gone
    menu_item_id = Column("menuItemId", Integer, nullable=False)
    is_available = Column("isAvailable", Boolean, nullable=False, default=True)


class MenuItemRow(Base):
    """Columns shared by every item; ``item_type`` selects the variant table."""

    __tablename__ = "MenuItem"

    menu_item_id = Column("menuItemId", Integer, primary_key=True)
    name = Column("name", String, nullable=False)
    description = Column("description", Text, nullable=True)
    preparation_time = Column("preparationTime", Integer, nullable=False, default=0)
    item_type = Column("itemType", String, nullable=False)
    is_made_by_kitchen_staff = Column(
        "isMadeByKitchenStaff", Boolean, nullable=False, default=False
    )


class MainCourseRow(Base):
    __tablename__ = "MainCourse"

    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), primary_key=True
    )
    introduction_description = Column("introductionDescription", Text, nullable=True)
    lunch_price = Column("lunchPrice", MONEY, nullable=False)
    evening_price = Column("eveningPrice", MONEY, nullable=False)


class SideDishRow(Base):
    __tablename__ = "SideDish"

    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), primary_key=True
    )
    quantity_per_serving = Column("quantityPerServing", Integer, default=1)
    price = Column("price", MONEY, nullable=False)


class DrinkRow(Base):
    __tablename__ = "Drink"

    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), primary_key=True
    )
    is_alcoholic = Column("isAlcoholic", Boolean, default=False)
    is_refill = Column("isRefill", Boolean, default=False)
    price = Column("price", MONEY, nullable=False)


class PotatoDishRow(Base):
    __tablename__ = "PotatoDish"

    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), primary_key=True
    )
    is_premium = Column("isPremium", Boolean, default=False)
    price = Column("price", MONEY, nullable=False)


class DipAndSaucesRow(Base):
    __tablename__ = "DipAndSauces"

    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), primary_key=True
    )
    is_sauce = Column("isSauce", Boolean, default=False)
    price = Column("price", MONEY, nullable=False)


class SelfServiceBarRow(Base):
    __tablename__ = "SelfServiceBar"

    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), primary_key=True
    )
    bar_type = Column("barType", String, nullable=False)
    lunch_price = Column("lunchPrice", MONEY, nullable=False)
    evening_price = Column("eveningPrice", MONEY, nullable=False)


class MultipleChoiceMenuRow(Base):
    __tablename__ = "MultipleChoiceMenu"

    choice_menu_id = Column("choiceMenuId", Integer, primary_key=True)
    menu_item_id = Column(
        "menuItemId", Integer, ForeignKey("MenuItem.menuItemId"), nullable=False
    )
    question = Column("question", String, nullable=False)


class SelectionOptionRow(Base):
    __tablename__ = "SelectionOption"

    selection_option_id = Column("selectionOptionId", Integer, primary_key=True)
    choice_menu_id = Column(
        "ChoiceMenuItemID",
        Integer,
        ForeignKey("MultipleChoiceMenu.choiceMenuId"),
        nullable=False,
    )
    name = Column("name", String, nullable=False)
    additional_price = Column("additionalPrice", MONEY, nullable=False, default=0)


class AddOnOptionRow(Base):
    __tablename__ = "AddOnOption"

    add_on_option_id = Column("addOnOptionId", Integer, primary_key=True)
    menu_item_id = Column(
        "MenuItemId", Integer, ForeignKey("MenuItem.menuItemId"), nullable=False
    )
    name = Column("name", String, nullable=False)
    additional_price = Column("additionalPrice", MONEY, nullable=False, default=0)


class TableOrderRow(Base):
    __tablename__ = "TableOrder"

    table_order_id = Column("tableOrderId", Integer, primary_key=True)
    time_of_arrival = Column("timeOfArrival", DateTime, nullable=False)
    is_table_order_closed = Column(
        "isTableOrderClosed", Boolean, nullable=False, default=False
    )
    payment_type = Column("paymentType", String, nullable=True)
    total_table_order_price = Column(
        "totalTableOrderPrice", MONEY, nullable=False, default=0
    )
    total_amount_paid = Column("totalAmountPaid", MONEY, nullable=False, default=0)
    is_sent_to_kitchen = Column("isSentToKitchen", Boolean, nullable=False, default=False)
    is_requesting_service = Column(
        "isRequestingService", Boolean, nullable=False, default=False
    )
    order_preparation_time = Column(
        "orderPreparationTime", Integer, nullable=False, default=0
    )


class PersonalOrderRow(Base):
    __tablename__ = "PersonalOrder"

    personal_order_id = Column("personalOrderId", Integer, primary_key=True)
    table_order_id = Column(
        "tableOrderId", Integer, ForeignKey("TableOrder.tableOrderId"), nullable=False
    )
    customer_name = Column("customerName", String, nullable=False, default="")
    customer_age = Column("customerAge", Integer, nullable=False, default=0)


class PersonalOrderLineRow(Base):
    __tablename__ = "PersonalOrderLine"

    line_id = Column("personalOrderLineId", Integer, primary_key=True)
    personal_order_id = Column(
        "personalOrderId",
        Integer,
        ForeignKey("PersonalOrder.personalOrderId"),
        nullable=False,
    )
    # dangling ids are reported by the reader rather than rejected on write
    menu_item_id = Column("menuItemId", Integer, nullable=False)
    quantity = Column("quantity", Integer, nullable=False, default=1)
    status = Column("status", String, nullable=False, default="pending")
    notes = Column("notes", Text, nullable=False, default="")
    add_on_option_id = Column("addOnOptionId", Integer, nullable=True)
    selection_option_id = Column("selectionOptionId", Integer, nullable=True)


class DiscountRow(Base):
    __tablename__ = "Discount"

    discount_id = Column("discountId", Integer, primary_key=True)
    name = Column("name", String, nullable=False)
    percent = Column("percent", Numeric(5, 2), nullable=True)
    amount = Column("amount", MONEY, nullable=True)


class PersonalOrderDiscountRow(Base):
    __tablename__ = "PersonalOrderDiscount"

    personal_order_id = Column(
        "personalOrderId",
        Integer,
        ForeignKey("PersonalOrder.personalOrderId"),
        primary_key=True,
    )
    discount_id = Column(
        "discountId", Integer, ForeignKey("Discount.discountId"), primary_key=True
    )
