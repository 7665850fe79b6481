"""
Filtering menu popup.

A filter field above the menu's items. Typing re-scores every item; items
that score 0 are hidden and the rest are ordered best first, with matched
characters highlighted. Holding a modifier shows each item's alternate.
"""

from PySide6.QtCore import QEvent, QObject, QSize, Qt, Signal
from PySide6.QtGui import QHideEvent, QKeyEvent, QShowEvent
from PySide6.QtWidgets import (
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from menufilter.config.settings import Settings
from menufilter.filtering.status import FilterStatus, filter_candidates, ranked
from menufilter.menu.item import MenuItem
from menufilter.menu.menu import Menu
from menufilter.ui.filter_worker import FilterRunner

SEPARATOR_ROLE = int(Qt.ItemDataRole.UserRole) + 1


class FilteringMenuWidget(QWidget):
    """
    Popup listing a Menu's items with a filter field.

    With threaded=True filter passes run on a FilterRunner; otherwise they run
    inline on every keystroke.
    """

    item_activated = Signal(object)  # Emits the MenuItem the user picked
    cancelled = Signal()  # Emitted on Escape

    def __init__(
        self,
        menu: Menu,
        settings: Settings | None = None,
        threaded: bool = True,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowFlags(Qt.WindowType.Popup | Qt.WindowType.FramelessWindowHint)

        self.menu = menu
        self.settings = settings if settings is not None else Settings()
        if self.menu.display_font is None:
            self.menu.display_font = self.settings.display_font()

        self._highlight_format = self.settings.highlight_format()
        self._statuses: list[FilterStatus] = []
        self._filter_string = ""
        self._modifiers = Qt.KeyboardModifier.NoModifier

        self._runner: FilterRunner | None = None
        if threaded:
            self._runner = FilterRunner(self._highlight_format, self)
            self._runner.results_ready.connect(self._on_results_ready)
            self._runner.error.connect(self._on_filter_error)

        self._setup_ui()
        self.reload()

    def _setup_ui(self) -> None:
        """Setup the UI"""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)
        layout.setSpacing(4)

        self.filter_input = QLineEdit()
        self.filter_input.setPlaceholderText("Filter (g/regex/ for a pattern)...")
        self.filter_input.textChanged.connect(self._on_text_changed)
        layout.addWidget(self.filter_input)

        self.item_list = QListWidget()
        self.item_list.itemActivated.connect(self._on_item_activated)
        self.item_list.itemDoubleClicked.connect(self._on_item_activated)
        layout.addWidget(self.item_list)

        # Install event filter for keyboard navigation
        self.filter_input.installEventFilter(self)

    def reload(self) -> None:
        """Re-read the menu and re-run the current filter"""
        if self._runner is not None:
            self._runner.set_candidates(self.menu.snapshot())
        self._apply_filter(self.filter_input.text())

    @property
    def statuses(self) -> list[FilterStatus]:
        """Statuses of the last completed pass, in menu order"""
        return list(self._statuses)

    def _on_text_changed(self, text: str) -> None:
        """Handle filter text change"""
        self._apply_filter(text)

    def _apply_filter(self, filter_string: str) -> None:
        if self._runner is not None:
            self._runner.request(filter_string)
            return

        statuses = filter_candidates(self.menu.snapshot(), filter_string, self._highlight_format)
        self._on_results_ready(filter_string, statuses)

    def _on_results_ready(self, filter_string: str, statuses: list[FilterStatus]) -> None:
        """Show a completed pass, unless the user has typed since it started"""
        if filter_string != self.filter_input.text():
            return

        self._filter_string = filter_string
        self._statuses = statuses
        self._update_list()

    def _on_filter_error(self, message: str) -> None:
        """A failed pass shows nothing rather than the previous results"""
        print(f"[Filter] Filter pass failed: {message}")
        self._statuses = []
        self.item_list.clear()

    def _visible_status(self, status: FilterStatus) -> tuple[MenuItem, FilterStatus] | None:
        """The item (and its status) shown in this slot for the held modifiers"""
        item = status.candidate.source
        if item is None:
            return None

        visible = item.visible_item_for_modifiers(self._modifiers)
        if visible is None:
            return None
        if visible is item:
            return item, status

        key = next(key for key, alternate in item.alternates.items() if alternate is visible)
        alternate_status = (status.alternate_statuses or {}).get(key)
        if alternate_status is None:
            return None
        return visible, alternate_status

    def _update_list(self) -> None:
        """Rebuild the list from the current statuses"""
        self.item_list.clear()

        if self._filter_string:
            candidates = ranked(
                shown[1] for shown in map(self._visible_status, self._statuses) if shown is not None
            )
            slots = [(status.candidate.source, status) for status in candidates]
        else:
            slots = []
            for status in self._statuses:
                if status.candidate.is_separator:
                    slots.append((status.candidate.source, status))
                    continue
                shown = self._visible_status(status)
                if shown is not None:
                    slots.append(shown)

        for item, status in slots:
            self._add_row(item, status)

        # Select first selectable row
        for row in range(self.item_list.count()):
            if not self.item_list.item(row).data(SEPARATOR_ROLE):
                self.item_list.setCurrentRow(row)
                break

    def _add_row(self, item: MenuItem | None, status: FilterStatus) -> None:
        row = QListWidgetItem(self.item_list)
        row.setData(Qt.ItemDataRole.UserRole, item)

        if status.candidate.is_separator:
            row.setData(SEPARATOR_ROLE, True)
            row.setFlags(Qt.ItemFlag.NoItemFlags)
            row.setSizeHint(QSize(0, 7))
            return

        label = QLabel(status.highlighted_title.to_html())
        label.setTextFormat(Qt.TextFormat.RichText)
        label.setContentsMargins(8, 2, 8, 2)
        label.setEnabled(item is None or item.enabled)
        row.setSizeHint(label.sizeHint())
        self.item_list.setItemWidget(row, label)

    def _on_item_activated(self, row: QListWidgetItem) -> None:
        """Handle item activation (Enter or double-click)"""
        item = row.data(Qt.ItemDataRole.UserRole)
        if not isinstance(item, MenuItem) or not item.enabled:
            return
        self.item_activated.emit(item)
        item.perform_action()
        self.hide()

    def set_modifiers(self, modifiers: Qt.KeyboardModifier) -> None:
        """Show the alternates for modifiers"""
        if modifiers == self._modifiers:
            return
        self._modifiers = modifiers
        self._update_list()

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # noqa: N802
        """Handle keyboard events for navigation and modifier changes"""
        if obj == self.filter_input and isinstance(event, QKeyEvent):
            self.set_modifiers(event.modifiers())

            if event.type() != QEvent.Type.KeyPress:
                return super().eventFilter(obj, event)

            key = event.key()

            if key == Qt.Key.Key_Escape:
                self.cancelled.emit()
                self.hide()
                return True

            elif key == Qt.Key.Key_Return or key == Qt.Key.Key_Enter:
                current = self.item_list.currentItem()
                if current:
                    self._on_item_activated(current)
                return True

            elif key in (Qt.Key.Key_Down, Qt.Key.Key_Up):
                step = 1 if key == Qt.Key.Key_Down else -1
                row = self.item_list.currentRow() + step
                # Skip separators
                while 0 <= row < self.item_list.count() and self.item_list.item(row).data(SEPARATOR_ROLE):
                    row += step
                if 0 <= row < self.item_list.count():
                    self.item_list.setCurrentRow(row)
                return True

        return super().eventFilter(obj, event)

    def showEvent(self, event: QShowEvent) -> None:  # noqa: N802
        """Focus the filter input when shown"""
        super().showEvent(event)
        self.filter_input.setFocus()
        self.filter_input.selectAll()

    def hideEvent(self, event: QHideEvent) -> None:  # noqa: N802
        """Stop running passes once the popup is dismissed"""
        if self._runner is not None:
            self._runner.shutdown()
        super().hideEvent(event)

    def closeEvent(self, event: QEvent) -> None:  # noqa: N802
        if self._runner is not None:
            self._runner.shutdown()
        super().closeEvent(event)  # type: ignore[arg-type]
