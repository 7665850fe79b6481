"""
Filtering menu model: an ordered, owned list of MenuItems.
"""

from collections.abc import Callable

from PySide6.QtGui import QFont

from menufilter.menu.item import Candidate, MenuItem


class Menu:
    """Owns its items and the font they are displayed with"""

    def __init__(self, title: str = "", display_font: QFont | None = None) -> None:
        self.title = title
        self.display_font = display_font
        self.action_handler: Callable[[MenuItem], None] | None = None
        self._items: list[MenuItem] = []

    @property
    def items(self) -> list[MenuItem]:
        return list(self._items)

    def add_item(self, item: MenuItem) -> MenuItem:
        """Append item (and its alternates) to this menu"""
        item.menu = self
        for alternate in item.alternates.values():
            alternate.menu = self
        self._items.append(item)
        return item

    def add_separator(self) -> MenuItem:
        return self.add_item(MenuItem.separator())

    def remove_item(self, item: MenuItem) -> None:
        self._items.remove(item)
        item.menu = None

    def snapshot(self) -> tuple[Candidate, ...]:
        """Immutable view of every item, safe to hand to a filter worker"""
        return tuple(item.snapshot() for item in self._items)
