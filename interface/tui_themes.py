#!/usr/bin/env python3
"""TUI themes and styling."""

from typing import Dict, List, Optional

from prompt_toolkit.styles import Style

from core import Palette


THEMES: List[Palette] = [
    Palette("Catppuccin", "#000000", "#cdd6f4", "#6c7086", "#cba6f7", "#f5c2e7", "#a6e3a1", "#f38ba8"),
    Palette("Nord", "#2e3440", "#eceff4", "#4c566a", "#88c0d0", "#81a1c1", "#a3be8c", "#bf616a"),
    Palette("Gruvbox", "#282828", "#ebdbb2", "#928374", "#fabd2f", "#fe8019", "#b8bb26", "#fb4934"),
    Palette("Dracula", "#282a36", "#f8f8f2", "#6272a4", "#bd93f9", "#ff79c6", "#50fa7b", "#ff5555"),
    Palette("Tokyo Night", "#1a1b26", "#c0caf5", "#565f89", "#7aa2f7", "#bb9af7", "#9ece6a", "#f7768e"),
    Palette("Rose Pine", "#191724", "#e0def4", "#6e6a86", "#ebbcba", "#c4a7e7", "#31748f", "#eb6f92"),
    Palette("Everforest", "#272e33", "#d3c6aa", "#859289", "#a7c080", "#7fbbb3", "#a7c080", "#e67e80"),
    Palette("One Dark", "#282c34", "#abb2bf", "#5c6370", "#61afef", "#c678dd", "#98c379", "#e06c75"),
    Palette("Solarized", "#002b36", "#839496", "#586e75", "#268bd2", "#2aa198", "#859900", "#dc322f"),
    Palette("Kanagawa", "#1f1f28", "#dcd7ba", "#727169", "#7e9cd8", "#957fb8", "#76946a", "#c34043"),
]

DEFAULT_THEME = THEMES[0].name


def theme_names() -> List[str]:
    return [p.name for p in THEMES]


def theme_index(name: str) -> Optional[int]:
    """Case-insensitive lookup; spaces and dashes are interchangeable."""
    wanted = (name or "").strip().lower().replace("-", " ")
    for idx, palette in enumerate(THEMES):
        if palette.name.lower() == wanted:
            return idx
    return None


def get_palette(index: int) -> Palette:
    """Get palette by index, falling back to the first theme when out of range."""
    if 0 <= index < len(THEMES):
        return THEMES[index]
    return THEMES[0]


def style_rules(palette: Palette) -> Dict[str, str]:
    p = palette
    return {
        "": f"bg:{p.bg} {p.fg}",
        "header": f"bg:{p.accent} {p.bg} bold",
        "border": p.accent,
        "number": p.dim,
        "item": p.fg,
        "selected": f"{p.accent} bold",
        "selected.bar": f"{p.accent} bold",
        "check.done": p.success,
        "check.open": p.accent,
        "input": f"{p.accent} bold",
        "input.label": f"{p.secondary} bold",
        "due": f"{p.secondary} italic",
        "overdue": f"{p.warning} bold blink",
        "help": p.dim,
        "text.dim": p.dim,
    }


def build_style(palette: Palette) -> Style:
    """Build Style object from a palette."""
    return Style.from_dict(style_rules(palette))
