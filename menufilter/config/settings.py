"""
Settings management for menufilter
"""

import copy
import json
from pathlib import Path
from typing import Any

from PySide6.QtGui import QColor, QFont, QGuiApplication, QTextCharFormat

from menufilter.constants import (
    DEFAULT_HIGHLIGHT_BACKGROUND,
    DEFAULT_HIGHLIGHT_UNDERLINE_COLOR,
    SETTINGS_FILE,
)


class Settings:
    """Manages filtering menu settings (highlight theme, display font)"""

    DEFAULT_SETTINGS = {
        "highlight": {
            "background": DEFAULT_HIGHLIGHT_BACKGROUND,
            "underline": True,
            "underline_color": DEFAULT_HIGHLIGHT_UNDERLINE_COLOR,
        },
        "menu": {
            "font_family": "",  # Empty means the application font
            "font_size": 0,  # 0 means the application font size
        },
    }

    def __init__(self, config_path: Path | None = None) -> None:
        """Initialize settings"""
        if config_path is None:
            config_path = Path(SETTINGS_FILE).expanduser()

        self.config_path = config_path
        self.settings = copy.deepcopy(self.DEFAULT_SETTINGS)
        self.load()

    def load(self) -> None:
        """Load settings from file"""
        if self.config_path.exists():
            with open(self.config_path) as f:
                loaded = json.load(f)
                # Merge with defaults to handle new settings
                self._merge_settings(self.settings, loaded)

    def save(self) -> None:
        """Save settings to file"""
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, "w") as f:
            json.dump(self.settings, f, indent=2)

    def _merge_settings(self, base: dict[str, Any], updates: dict[str, Any]) -> None:
        """Recursively merge settings dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                base_dict: dict[str, Any] = base[key]
                value_dict: dict[str, Any] = value
                self._merge_settings(base_dict, value_dict)
            else:
                base[key] = value

    def get(self, path: str, default: Any = None) -> Any:
        """Get a setting by dot-separated path (e.g., 'highlight.background')"""
        parts = path.split(".")
        value: Any = self.settings

        for part in parts:
            if isinstance(value, dict):
                value_dict: dict[str, Any] = value
                if part in value_dict:
                    value = value_dict[part]
                else:
                    return default
            else:
                return default

        return value

    def set(self, path: str, value: Any) -> None:
        """Set a setting by dot-separated path"""
        parts = path.split(".")
        target: Any = self.settings

        for part in parts[:-1]:
            if part not in target:
                target[part] = {}
            target = target[part]

        target[parts[-1]] = value

    def highlight_format(self) -> QTextCharFormat:
        """Build the character format overlaid on matched characters.

        Colors are '#AARRGGBB' strings; an invalid color falls back to the default.
        """
        fmt = QTextCharFormat()

        background = QColor(str(self.get("highlight.background", DEFAULT_HIGHLIGHT_BACKGROUND)))
        if not background.isValid():
            background = QColor(DEFAULT_HIGHLIGHT_BACKGROUND)
        fmt.setBackground(background)

        if self.get("highlight.underline", True):
            fmt.setFontUnderline(True)
            underline_color = QColor(
                str(self.get("highlight.underline_color", DEFAULT_HIGHLIGHT_UNDERLINE_COLOR))
            )
            if not underline_color.isValid():
                underline_color = QColor(DEFAULT_HIGHLIGHT_UNDERLINE_COLOR)
            fmt.setUnderlineColor(underline_color)

        return fmt

    def display_font(self) -> QFont:
        """Get the font menu titles are drawn with"""
        font = QFont(QGuiApplication.font())

        family: str = str(self.get("menu.font_family", ""))
        if family:
            font.setFamily(family)

        size = int(self.get("menu.font_size", 0))
        if size > 0:
            font.setPointSize(size)

        return font
