"""
Visual themes for rendered presentations.

Both output media share the same named themes and colors; font faces and
absolute sizes differ per medium.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict

DEFAULT_THEME = "default"


class ThemeMedium(str, Enum):
    """Output medium a theme table is tuned for."""
    DOCUMENT = "document"
    DECK = "deck"


@dataclass(frozen=True)
class Theme:
    """Colors are 6-digit hex strings without '#'; sizes are points."""
    name: str
    background_color: str
    title_color: str
    text_color: str
    accent_color: str
    font: str
    title_size: int
    subtitle_size: int
    header_size: int
    body_size: int


_DECK_THEMES: Dict[str, Theme] = {
    "default": Theme(
        name="default",
        background_color="FFFFFF",
        title_color="333333",
        text_color="666666",
        accent_color="4472C4",
        font="Arial",
        title_size=44,
        subtitle_size=32,
        header_size=28,
        body_size=18,
    ),
    "dark": Theme(
        name="dark",
        background_color="2F3437",
        title_color="FFFFFF",
        text_color="E1E1E1",
        accent_color="3498DB",
        font="Calibri",
        title_size=44,
        subtitle_size=32,
        header_size=28,
        body_size=18,
    ),
    "creative": Theme(
        name="creative",
        background_color="F5F5F5",
        title_color="1E88E5",
        text_color="424242",
        accent_color="FF5722",
        font="Verdana",
        title_size=44,
        subtitle_size=32,
        header_size=28,
        body_size=18,
    ),
}

_DOCUMENT_THEMES: Dict[str, Theme] = {
    "default": Theme(
        name="default",
        background_color="FFFFFF",
        title_color="333333",
        text_color="666666",
        accent_color="4472C4",
        font="Helvetica",
        title_size=36,
        subtitle_size=24,
        header_size=28,
        body_size=16,
    ),
    "dark": Theme(
        name="dark",
        background_color="2F3437",
        title_color="FFFFFF",
        text_color="E1E1E1",
        accent_color="3498DB",
        font="Helvetica",
        title_size=36,
        subtitle_size=24,
        header_size=28,
        body_size=16,
    ),
    "creative": Theme(
        name="creative",
        background_color="F5F5F5",
        title_color="1E88E5",
        text_color="424242",
        accent_color="FF5722",
        font="Helvetica",
        title_size=36,
        subtitle_size=24,
        header_size=28,
        body_size=16,
    ),
}

_THEME_TABLES = {
    ThemeMedium.DOCUMENT: _DOCUMENT_THEMES,
    ThemeMedium.DECK: _DECK_THEMES,
}


def resolve_theme(style: str, medium: ThemeMedium = ThemeMedium.DECK) -> Theme:
    """Look up a theme by style name; unknown names get the default theme."""
    table = _THEME_TABLES[ThemeMedium(medium)]
    key = (style or "").strip().lower()
    return table.get(key, table[DEFAULT_THEME])


def available_themes() -> list[str]:
    return list(_DECK_THEMES)
