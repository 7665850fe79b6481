"""Tests for settings persistence and derived styles."""

import json

from PySide6.QtGui import QColor

from menufilter.config.settings import Settings
from menufilter.constants import DEFAULT_HIGHLIGHT_BACKGROUND, DEFAULT_HIGHLIGHT_UNDERLINE_COLOR


class TestSettings:
    """Test loading, merging and saving."""

    def test_defaults_without_file(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        assert settings.get("highlight.background") == DEFAULT_HIGHLIGHT_BACKGROUND
        assert settings.get("menu.font_size") == 0

    def test_defaults_are_not_shared(self, tmp_path):
        first = Settings(tmp_path / "a.json")
        first.set("highlight.underline", False)
        second = Settings(tmp_path / "b.json")
        assert second.get("highlight.underline") is True

    def test_file_is_merged_with_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"highlight": {"underline": False}}))

        settings = Settings(path)
        assert settings.get("highlight.underline") is False
        assert settings.get("highlight.background") == DEFAULT_HIGHLIGHT_BACKGROUND

    def test_save_round_trip(self, tmp_path):
        path = tmp_path / "nested" / "settings.json"
        settings = Settings(path)
        settings.set("menu.font_size", 18)
        settings.save()

        assert Settings(path).get("menu.font_size") == 18

    def test_get_missing_path(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        assert settings.get("highlight.nope", "fallback") == "fallback"
        assert settings.get("highlight.background.deeper") is None


class TestDerivedStyles:
    """Test the highlight format and display font."""

    def test_default_highlight_format(self, tmp_path):
        fmt = Settings(tmp_path / "settings.json").highlight_format()

        assert fmt.background().color() == QColor(DEFAULT_HIGHLIGHT_BACKGROUND)
        assert fmt.background().color().alpha() == 0x80
        assert fmt.fontUnderline()
        assert fmt.underlineColor() == QColor(DEFAULT_HIGHLIGHT_UNDERLINE_COLOR)

    def test_underline_disabled(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        settings.set("highlight.underline", False)
        assert not settings.highlight_format().fontUnderline()

    def test_invalid_color_falls_back(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        settings.set("highlight.background", "not a color")
        assert settings.highlight_format().background().color() == QColor(DEFAULT_HIGHLIGHT_BACKGROUND)

    def test_display_font_size(self, tmp_path):
        settings = Settings(tmp_path / "settings.json")
        settings.set("menu.font_size", 21)
        assert settings.display_font().pointSize() == 21
