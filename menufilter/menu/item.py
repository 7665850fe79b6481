"""
Menu items and their immutable snapshots.

A MenuItem is the mutable authoring object. Filtering never reads MenuItems
directly: it works on Candidate snapshots so a filter pass can run on a
worker thread while the menu is being edited.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QFont, QGuiApplication

from menufilter.constants import ALLOWED_MODIFIERS
from menufilter.filtering.styled_text import StyledText

if TYPE_CHECKING:
    from menufilter.menu.menu import Menu


class InvalidAlternateItemError(ValueError):
    """Raised when an item cannot be attached as an alternate."""


def modifier_key(modifiers: Qt.KeyboardModifier) -> str:
    """Dictionary key for a modifier mask (the decimal flag value)"""
    return str(int(getattr(modifiers, "value", modifiers)))


def _allowed(modifiers: Qt.KeyboardModifier) -> Qt.KeyboardModifier:
    return modifiers & ALLOWED_MODIFIERS


@dataclass(frozen=True)
class Candidate:
    """Read-only view of a menu item, as seen by the filter engine."""

    title: str | None
    attributed_title: StyledText | None
    is_separator: bool
    font: QFont
    alternates: Mapping[str, "Candidate"] = field(default_factory=lambda: MappingProxyType({}))
    source: "MenuItem | None" = field(default=None, compare=False, repr=False)


class MenuItem:
    """An entry in a filtering menu"""

    def __init__(self, title: str | None = None, *, separator: bool = False) -> None:
        self.title = title
        self.attributed_title: StyledText | None = None
        self.modifiers = Qt.KeyboardModifier.NoModifier
        self.enabled = True
        self.represented_object: Any = None
        self.action_handler: Callable[["MenuItem"], None] | None = None

        # Set by the owning menu; the menu owns its items, not the other way around
        self.menu: "Menu | None" = None

        self._is_separator = separator
        self._is_alternate = False
        self._alternates: dict[str, MenuItem] = {}

    @classmethod
    def separator(cls) -> "MenuItem":
        return cls("<separator>", separator=True)

    def __repr__(self) -> str:
        return f"MenuItem({self.title or ''!r})"

    @property
    def is_separator(self) -> bool:
        return self._is_separator

    @property
    def is_alternate(self) -> bool:
        return self._is_alternate

    @property
    def alternates(self) -> Mapping[str, "MenuItem"]:
        return MappingProxyType(self._alternates)

    @property
    def font(self) -> QFont:
        """Font the title is drawn with: the menu's display font, else the application font"""
        if self.menu is not None and self.menu.display_font is not None:
            return QFont(self.menu.display_font)
        return QFont(QGuiApplication.font())

    def add_alternate(self, item: "MenuItem") -> None:
        """
        Attach item as the alternate shown while its modifiers are held.

        An alternate already registered for the same modifiers is detached and replaced.
        """
        if self._is_alternate:
            raise InvalidAlternateItemError(
                "Alternate item cannot be added to an item that is itself an alternate"
            )
        if self._is_separator:
            raise InvalidAlternateItemError("A separator cannot be given alternates")
        if item.is_separator:
            raise InvalidAlternateItemError("A separator cannot be added as an alternate")

        alternate_modifiers = _allowed(item.modifiers)
        if alternate_modifiers == _allowed(self.modifiers):
            raise InvalidAlternateItemError(
                "Alternate modifiers must be different than the modifiers of the item it is added to"
            )

        key = modifier_key(alternate_modifiers)

        replaced = self._alternates.get(key)
        if replaced is not None:
            replaced.menu = None
            replaced._is_alternate = False

        item.menu = self.menu
        item._is_alternate = True
        self._alternates[key] = item

    def visible_item_for_modifiers(self, modifiers: Qt.KeyboardModifier) -> "MenuItem | None":
        """Item to show in this slot while modifiers are held (None hides the slot)"""
        modifiers = _allowed(modifiers)

        if modifiers == _allowed(self.modifiers):
            return self

        if self._is_alternate:
            return None

        if not self._alternates and _allowed(self.modifiers) != Qt.KeyboardModifier.NoModifier:
            return None

        return self._alternates.get(modifier_key(modifiers), self)

    def perform_action(self) -> None:
        """Run the item's handler, falling back to the menu's"""
        if self.action_handler is not None:
            self.action_handler(self)
        elif self.menu is not None and self.menu.action_handler is not None:
            self.menu.action_handler(self)

    def snapshot(self) -> Candidate:
        """Freeze the filter-relevant state of this item and its alternates"""
        alternates = {key: item.snapshot() for key, item in self._alternates.items()}
        return Candidate(
            title=self.title,
            attributed_title=self.attributed_title,
            is_separator=self._is_separator,
            font=self.font,
            alternates=MappingProxyType(alternates),
            source=self,
        )
