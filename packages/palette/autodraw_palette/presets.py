"""Built-in palettes for offline planning and previews."""

from __future__ import annotations

from .color import Color
from .palette import Palette

DEFAULT_PRESET_NAME = "classic"

# Swatch order matches the game's toolbar: top row, then bottom row.
PRESETS: dict[str, tuple[str, ...]] = {
    "classic": (
        "#FFFFFF", "#C1C1C1", "#EF130B", "#FF7100", "#FFE400", "#00CC00",
        "#00B2FF", "#231FD3", "#A300BA", "#D37CAA", "#A0522D",
        "#000000", "#4C4C4C", "#740B07", "#C23800", "#E8A200", "#005510",
        "#00569E", "#0E0865", "#550069", "#A75574", "#63300D",
    ),
    "mono": ("#FFFFFF", "#000000"),
    "primaries": ("#FFFFFF", "#000000", "#FF0000", "#00FF00", "#0000FF"),
}


def list_presets() -> list[str]:
    return sorted(PRESETS.keys())


def preset_colors(name: str | None) -> list[Color]:
    hex_values = PRESETS.get(name or DEFAULT_PRESET_NAME)
    if hex_values is None:
        raise KeyError(f"Unknown palette preset: {name}")
    return [Color.from_hex(v) for v in hex_values]


def get_preset(name: str | None) -> Palette:
    return Palette(preset_colors(name))
