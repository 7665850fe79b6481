#!/usr/bin/env python3
"""
menufilter - filter menu titles with fuzzy or g/regex/ filters
"""

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

from PySide6.QtWidgets import QApplication

from menufilter.config.settings import Settings
from menufilter.filtering.status import filter_candidates
from menufilter.menu.item import MenuItem
from menufilter.menu.menu import Menu


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog="menufilter",
        description="menufilter - filter menu titles with fuzzy or g/regex/ filters",
    )
    parser.add_argument(
        "titles",
        nargs="+",
        help="Menu item titles ('-' adds a separator)",
    )
    parser.add_argument(
        "--filter",
        dest="filter_string",
        default=None,
        help="Print the score of every title for this filter instead of showing the menu",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings file (default: ~/.config/menufilter/settings.json)",
    )
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Store a setting, e.g. highlight.background=\"#8000ff00\" (repeatable)",
    )
    return parser.parse_args(argv)


def parse_override(override: str) -> tuple[str, Any]:
    """Split KEY=VALUE; VALUE is read as JSON when it parses, else kept as a string"""
    key, sep, raw = override.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Expected KEY=VALUE, got {override!r}")
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        value = raw
    return key, value


def apply_overrides(settings: Settings, overrides: list[str]) -> None:
    """Store every --set override and save the settings file"""
    if not overrides:
        return
    for override in overrides:
        key, value = parse_override(override)
        settings.set(key, value)
    settings.save()


def build_menu(titles: list[str], settings: Settings) -> Menu:
    """Build a menu from command line titles"""
    menu = Menu(display_font=settings.display_font())
    for title in titles:
        if title == "-":
            menu.add_separator()
        else:
            menu.add_item(MenuItem(title))
    return menu


def print_scores(menu: Menu, filter_string: str, settings: Settings) -> None:
    """Print score<TAB>title for every item, in menu order"""
    statuses = filter_candidates(menu.snapshot(), filter_string, settings.highlight_format())
    for status in statuses:
        print(f"{status.score}\t{status.candidate.title or ''}")


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.filter_string is not None:
        # No window is shown when only printing scores
        os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("menufilter")

    settings = Settings(args.config)
    try:
        apply_overrides(settings, args.overrides)
    except argparse.ArgumentTypeError as e:
        print(f"menufilter: {e}", file=sys.stderr)
        sys.exit(2)
    menu = build_menu(args.titles, settings)

    if args.filter_string is not None:
        print_scores(menu, args.filter_string, settings)
        return

    from menufilter.ui.filtering_menu import FilteringMenuWidget

    widget = FilteringMenuWidget(menu, settings)
    widget.item_activated.connect(lambda item: print(item.title))
    widget.item_activated.connect(lambda _item: app.quit())
    widget.cancelled.connect(app.quit)
    widget.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()
