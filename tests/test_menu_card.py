from bones.domain import AvailabilityTracker, Drink, MenuCard, MenuItemKind, SideDish

from tests._factories import main_course


def _card():
    card = MenuCard(name="Lunch")
    items = [
        main_course("Ribeye", "100", "125"),
        Drink(name="Cola", fixed_price=30),
        SideDish(name="Fries", fixed_price=25),
    ]
    for item in items:
        card.add_availability_tracker(AvailabilityTracker(menu_item=item))
    return card, items


def test_available_items_keep_insertion_order():
    card, items = _card()
    assert card.get_available_menu_items() == items


def test_hidden_item_is_left_out_and_comes_back():
    card, items = _card()
    card.get_availability_trackers()[1].set_available(False)
    assert card.get_available_menu_items() == [items[0], items[2]]
    card.get_availability_trackers()[1].set_available(True)
    assert card.get_available_menu_items() == items


def test_available_items_returns_new_list():
    card, _ = _card()
    first = card.get_available_menu_items()
    first.clear()
    assert len(card.get_available_menu_items()) == 3


def test_untracked_item_is_not_orderable():
    card, items = _card()
    stranger = Drink(name="Water", fixed_price=0)
    assert card.is_orderable(items[1])
    assert not card.is_orderable(stranger)
    card.get_availability_trackers()[1].set_available(False)
    assert not card.is_orderable(items[1])


def test_available_items_of_kind():
    card, items = _card()
    assert card.available_items_of(MenuItemKind.DRINK) == [items[1]]
    assert card.available_items_of(MenuItemKind.POTATO_DISH) == []


def test_find_tracker_by_item_id():
    card, items = _card()
    items[2].menu_item_id = 7
    assert card.find_tracker(7).menu_item is items[2]
    assert card.find_tracker(99) is None
