"""Menu cards and the availability trackers that make items visible."""

from __future__ import annotations

from dataclasses import dataclass, field

from .menu_items import MenuItem, MenuItemKind


@dataclass(kw_only=True)
class AvailabilityTracker:
    """Shows or hides one menu item on one menu card without deleting it."""

    menu_item: MenuItem
    is_available: bool = True

    def set_available(self, is_available: bool) -> None:
        self.is_available = is_available


@dataclass(kw_only=True)
class MenuCard:
    """A named menu (e.g. lunch or kids) owning its availability trackers.

    An item without a tracker on this card is never orderable from it.
    """

    name: str
    menu_card_id: int | None = None
    availability_trackers: list[AvailabilityTracker] = field(default_factory=list)

    def add_availability_tracker(self, tracker: AvailabilityTracker) -> None:
        self.availability_trackers.append(tracker)

    def get_availability_trackers(self) -> list[AvailabilityTracker]:
        return list(self.availability_trackers)

    def get_available_menu_items(self) -> list[MenuItem]:
        """Return the items whose tracker is available, in insertion order.

        The list is a new object on every call; changing a tracker is visible
        on the next call.
        """

        return [
            tracker.menu_item
            for tracker in self.availability_trackers
            if tracker.is_available
        ]

    def available_items_of(self, kind: MenuItemKind) -> list[MenuItem]:
        """Return available items of one variant ``kind``."""

        return [item for item in self.get_available_menu_items() if item.kind is kind]

    def find_tracker(self, menu_item_id: int) -> AvailabilityTracker | None:
        for tracker in self.availability_trackers:
            if tracker.menu_item.menu_item_id == menu_item_id:
                return tracker
        return None

    def is_orderable(self, menu_item: MenuItem) -> bool:
        """Return ``True`` if ``menu_item`` is tracked here and available."""

        return any(
            tracker.is_available
            and (
                tracker.menu_item is menu_item
                or (
                    menu_item.menu_item_id is not None
                    and tracker.menu_item.menu_item_id == menu_item.menu_item_id
                )
            )
            for tracker in self.availability_trackers
        )
