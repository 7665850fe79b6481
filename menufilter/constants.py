"""
Centralized constants for menufilter.

Hardcoded strings and magic numbers used across the filtering engine and
the menu model.
"""

from PySide6.QtCore import Qt

# Regex filter wrapper: g/pattern/
REGEX_FILTER_PREFIX = "g/"
REGEX_FILTER_DELIMITER = "/"
ESCAPED_DELIMITER = "\\/"

# Match scores
BEST_SCORE = 3
WORST_SCORE = 0

# Highlight style defaults (#AARRGGBB)
DEFAULT_HIGHLIGHT_BACKGROUND = "#80ffff00"
DEFAULT_HIGHLIGHT_UNDERLINE_COLOR = "#bfa68000"

# Modifier flags an alternate item may be keyed by
ALLOWED_MODIFIERS = (
    Qt.KeyboardModifier.ShiftModifier
    | Qt.KeyboardModifier.ControlModifier
    | Qt.KeyboardModifier.AltModifier
    | Qt.KeyboardModifier.MetaModifier
)

# Settings file
SETTINGS_FILE = "~/.config/menufilter/settings.json"
