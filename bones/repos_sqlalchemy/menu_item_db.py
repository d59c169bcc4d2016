"""SQLAlchemy implementation of the menu item repository."""

from __future__ import annotations

from functools import partial
from typing import Callable

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..db import Database, IsolationLevel
from ..domain.menu_items import (
    AddOnOption,
    BarType,
    DipsAndSauces,
    Drink,
    MainCourse,
    MenuItem,
    MenuItemKind,
    MultipleChoiceMenu,
    PotatoDish,
    SelectionOption,
    SelfServiceBar,
    SideDish,
)
from ..exceptions import DataAccessError
from ..models_store import (
    AddOnOptionRow,
    DipAndSaucesRow,
    DrinkRow,
    MainCourseRow,
    MenuItemRow,
    MultipleChoiceMenuRow,
    PotatoDishRow,
    SelectionOptionRow,
    SelfServiceBarRow,
    SideDishRow,
)
from ..repos.menu_repo import MenuItemRepo

VARIANT_ROWS = {
    MenuItemKind.MAIN_COURSE: MainCourseRow,
    MenuItemKind.SIDE_DISH: SideDishRow,
    MenuItemKind.DRINK: DrinkRow,
    MenuItemKind.POTATO_DISH: PotatoDishRow,
    MenuItemKind.DIPS_AND_SAUCES: DipAndSaucesRow,
    MenuItemKind.SELF_SERVICE_BAR: SelfServiceBarRow,
}

MenuItemCache = dict[int, MenuItem | None]
OnCommit = list[Callable[[], None]]


def _common_fields(row: MenuItemRow) -> dict:
    return {
        "menu_item_id": row.menu_item_id,
        "name": row.name,
        "description": row.description,
        "preparation_time": row.preparation_time or 0,
        "is_made_by_kitchen_staff": bool(row.is_made_by_kitchen_staff),
    }


def _load_choice_menus(session: Session, menu_item_id: int) -> list[MultipleChoiceMenu]:
    menus = []
    menu_rows = session.scalars(
        select(MultipleChoiceMenuRow)
        .where(MultipleChoiceMenuRow.menu_item_id == menu_item_id)
        .order_by(MultipleChoiceMenuRow.choice_menu_id)
    ).all()
    for menu_row in menu_rows:
        option_rows = session.scalars(
            select(SelectionOptionRow)
            .where(SelectionOptionRow.choice_menu_id == menu_row.choice_menu_id)
            .order_by(SelectionOptionRow.selection_option_id)
        ).all()
        menus.append(
            MultipleChoiceMenu(
                choice_menu_id=menu_row.choice_menu_id,
                question=menu_row.question,
                options=[
                    SelectionOption(
                        selection_option_id=o.selection_option_id,
                        name=o.name,
                        additional_price=o.additional_price,
                    )
                    for o in option_rows
                ],
            )
        )
    return menus


def _load_add_on_options(session: Session, menu_item_id: int) -> list[AddOnOption]:
    rows = session.scalars(
        select(AddOnOptionRow)
        .where(AddOnOptionRow.menu_item_id == menu_item_id)
        .order_by(AddOnOptionRow.add_on_option_id)
    ).all()
    return [
        AddOnOption(
            add_on_option_id=r.add_on_option_id,
            name=r.name,
            additional_price=r.additional_price,
        )
        for r in rows
    ]


def _build_menu_item(session: Session, row: MenuItemRow) -> MenuItem:
    try:
        kind = MenuItemKind(row.item_type)
    except ValueError:
        raise DataAccessError(
            f"unknown item type {row.item_type!r}",
            entity="MenuItem",
            key=row.menu_item_id,
        ) from None
    variant = session.get(VARIANT_ROWS[kind], row.menu_item_id)
    if variant is None:
        raise DataAccessError(
            f"{kind.value} row missing for menu item {row.menu_item_id}",
            entity="MenuItem",
            key=row.menu_item_id,
        )
    fields = _common_fields(row)
    if kind is MenuItemKind.MAIN_COURSE:
        return MainCourse(
            **fields,
            introduction_description=variant.introduction_description,
            lunch_amount=variant.lunch_price,
            evening_amount=variant.evening_price,
            multiple_choice_menus=_load_choice_menus(session, row.menu_item_id),
            add_on_options=_load_add_on_options(session, row.menu_item_id),
        )
    if kind is MenuItemKind.SIDE_DISH:
        return SideDish(
            **fields,
            quantity_per_serving=variant.quantity_per_serving or 1,
            fixed_price=variant.price,
        )
    if kind is MenuItemKind.DRINK:
        return Drink(
            **fields,
            is_alcoholic=bool(variant.is_alcoholic),
            is_refill=bool(variant.is_refill),
            fixed_price=variant.price,
        )
    if kind is MenuItemKind.POTATO_DISH:
        return PotatoDish(
            **fields, is_premium=bool(variant.is_premium), fixed_price=variant.price
        )
    if kind is MenuItemKind.DIPS_AND_SAUCES:
        return DipsAndSauces(
            **fields, is_sauce=bool(variant.is_sauce), fixed_price=variant.price
        )
    return SelfServiceBar(
        **fields,
        bar_type=BarType(variant.bar_type),
        lunch_amount=variant.lunch_price,
        evening_amount=variant.evening_price,
    )


def load_menu_item(
    session: Session, menu_item_id: int, cache: MenuItemCache | None = None
) -> MenuItem | None:
    """Build the menu item ``menu_item_id`` inside an open transaction.

    Returns ``None`` when the base row does not exist. ``cache`` lets one read
    share a single object per item across many lines or trackers.
    """

    if cache is not None and menu_item_id in cache:
        return cache[menu_item_id]
    row = session.get(MenuItemRow, menu_item_id)
    item = _build_menu_item(session, row) if row is not None else None
    if cache is not None:
        cache[menu_item_id] = item
    return item


def _variant_row(item: MenuItem, menu_item_id: int):
    if isinstance(item, MainCourse):
        return MainCourseRow(
            menu_item_id=menu_item_id,
            introduction_description=item.introduction_description,
            lunch_price=item.lunch_price(),
            evening_price=item.evening_price(),
        )
    if isinstance(item, SideDish):
        return SideDishRow(
            menu_item_id=menu_item_id,
            quantity_per_serving=item.quantity_per_serving,
            price=item.fixed_price,
        )
    if isinstance(item, Drink):
        return DrinkRow(
            menu_item_id=menu_item_id,
            is_alcoholic=item.is_alcoholic,
            is_refill=item.is_refill,
            price=item.fixed_price,
        )
    if isinstance(item, PotatoDish):
        return PotatoDishRow(
            menu_item_id=menu_item_id, is_premium=item.is_premium, price=item.fixed_price
        )
    if isinstance(item, DipsAndSauces):
        return DipAndSaucesRow(
            menu_item_id=menu_item_id, is_sauce=item.is_sauce, price=item.fixed_price
        )
    if isinstance(item, SelfServiceBar):
        return SelfServiceBarRow(
            menu_item_id=menu_item_id,
            bar_type=item.bar_type.value,
            lunch_price=item.lunch_price(),
            evening_price=item.evening_price(),
        )
    raise TypeError(f"unsupported menu item type {type(item).__name__}")


def _insert_options(
    session: Session, item: MainCourse, menu_item_id: int, on_commit: OnCommit
) -> None:
    for menu in item.get_multiple_choice_menus():
        menu_row = MultipleChoiceMenuRow(menu_item_id=menu_item_id, question=menu.question)
        session.add(menu_row)
        session.flush()
        on_commit.append(partial(setattr, menu, "choice_menu_id", menu_row.choice_menu_id))
        for option in menu.get_selection_options():
            option_row = SelectionOptionRow(
                choice_menu_id=menu_row.choice_menu_id,
                name=option.name,
                additional_price=option.additional_price,
            )
            session.add(option_row)
            session.flush()
            on_commit.append(
                partial(
                    setattr, option, "selection_option_id", option_row.selection_option_id
                )
            )
    for add_on in item.get_add_on_options():
        add_on_row = AddOnOptionRow(
            menu_item_id=menu_item_id,
            name=add_on.name,
            additional_price=add_on.additional_price,
        )
        session.add(add_on_row)
        session.flush()
        on_commit.append(
            partial(setattr, add_on, "add_on_option_id", add_on_row.add_on_option_id)
        )


def insert_menu_item_rows(session: Session, item: MenuItem, on_commit: OnCommit) -> int:
    """Write ``item`` and its options; ids are handed out via ``on_commit``."""

    base = MenuItemRow(
        menu_item_id=item.menu_item_id,
        name=item.name,
        description=item.description,
        preparation_time=item.preparation_time,
        item_type=item.kind.value,
        is_made_by_kitchen_staff=item.is_made_by_kitchen_staff,
    )
    session.add(base)
    session.flush()
    menu_item_id = base.menu_item_id
    session.add(_variant_row(item, menu_item_id))
    if isinstance(item, MainCourse):
        _insert_options(session, item, menu_item_id, on_commit)
    session.flush()
    on_commit.append(partial(setattr, item, "menu_item_id", menu_item_id))
    return menu_item_id


class MenuItemDB(MenuItemRepo):
    """Reads and writes menu items and their variant rows."""

    def __init__(self, database: Database):
        self.database = database

    def find_menu_item_by_id(self, menu_item_id: int) -> MenuItem | None:
        with self.database.transaction(
            IsolationLevel.READ_COMMITTED, entity="MenuItem", key=menu_item_id
        ) as session:
            return load_menu_item(session, menu_item_id)

    def insert_menu_item(self, menu_item: MenuItem) -> MenuItem:
        on_commit: OnCommit = []
        with self.database.transaction(
            IsolationLevel.REPEATABLE_READ, entity="MenuItem", key=menu_item.name
        ) as session:
            insert_menu_item_rows(session, menu_item, on_commit)
        for apply in on_commit:
            apply()
        return menu_item
