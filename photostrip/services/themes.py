from typing import NamedTuple

from photostrip.exceptions import InvalidArgumentError
from photostrip.models.layout import BackgroundSpec, Theme


class ThemePreset(NamedTuple):
    background: BackgroundSpec
    border_color: str
    text_color: str
    border: bool = False


THEME_PRESETS = {
    Theme.retro: ThemePreset(BackgroundSpec.gradient("#fef7cd", "#fbbf24"), "#92400e", "#92400e", border=True),
    Theme.minimalistic: ThemePreset(BackgroundSpec.solid("#ffffff"), "#cbd5e1", "#000000"),
    Theme.modern: ThemePreset(BackgroundSpec.solid("#ffffff"), "#1e293b", "#000000"),
    Theme.vintage: ThemePreset(BackgroundSpec.solid("#ffffff"), "#78350f", "#000000"),
    Theme.neon: ThemePreset(BackgroundSpec.solid("#ffffff"), "#a21caf", "#000000"),
    Theme.classic: ThemePreset(BackgroundSpec.solid("#ffffff"), "#000000", "#000000"),
}


def theme_preset(theme) -> ThemePreset:
    try:
        return THEME_PRESETS[Theme(theme)]
    except ValueError:
        raise InvalidArgumentError(f"Unknown theme: {theme}", field="theme")
