#!/usr/bin/env python3
"""Unit tests for tui_themes module."""

from prompt_toolkit.styles import Style

from interface.tui_themes import (
    DEFAULT_THEME,
    THEMES,
    build_style,
    get_palette,
    style_rules,
    theme_index,
    theme_names,
)


class TestThemes:
    """Tests for THEMES constant."""

    def test_ten_themes_in_order(self):
        assert theme_names() == [
            "Catppuccin",
            "Nord",
            "Gruvbox",
            "Dracula",
            "Tokyo Night",
            "Rose Pine",
            "Everforest",
            "One Dark",
            "Solarized",
            "Kanagawa",
        ]
        assert DEFAULT_THEME == "Catppuccin"

    def test_colors_are_hex(self):
        for palette in THEMES:
            for color in (palette.bg, palette.fg, palette.dim, palette.accent, palette.secondary, palette.success, palette.warning):
                assert color.startswith("#") and len(color) == 7, palette.name


class TestLookup:
    def test_theme_index_is_lenient(self):
        assert theme_index("nord") == 1
        assert theme_index("tokyo-night") == 4
        assert theme_index("  One Dark ") == 7
        assert theme_index("unknown") is None
        assert theme_index("") is None

    def test_get_palette_out_of_range(self):
        assert get_palette(3).name == "Dracula"
        assert get_palette(99) is THEMES[0]
        assert get_palette(-1) is THEMES[0]


class TestBuildStyle:
    def test_style_rules_cover_renderer_classes(self):
        rules = style_rules(THEMES[0])
        for key in ("", "header", "number", "selected", "selected.bar", "check.done", "check.open", "input", "due", "overdue", "help"):
            assert key in rules

    def test_build_style_returns_style(self):
        assert isinstance(build_style(THEMES[2]), Style)

    def test_rules_use_palette_colors(self):
        palette = THEMES[1]
        rules = style_rules(palette)
        assert palette.success in rules["check.done"]
        assert palette.warning in rules["overdue"]
        assert palette.bg in rules[""]
