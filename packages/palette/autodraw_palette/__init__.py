"""Color model and palette index for limited-palette drawing surfaces."""

from .color import TRANSPARENT, Color, distance, equals
from .palette import CacheInfo, Palette, PaletteError
from .presets import DEFAULT_PRESET_NAME, get_preset, list_presets, preset_colors

__all__ = [
    "CacheInfo",
    "Color",
    "DEFAULT_PRESET_NAME",
    "Palette",
    "PaletteError",
    "TRANSPARENT",
    "distance",
    "equals",
    "get_preset",
    "list_presets",
    "preset_colors",
]
