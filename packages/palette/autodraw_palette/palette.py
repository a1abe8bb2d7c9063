"""Palette of surface-supported colors with memoized nearest-color lookup."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

from .color import TRANSPARENT, Color, distance


class PaletteError(ValueError):
    pass


@dataclass(frozen=True)
class CacheInfo:
    hits: int
    misses: int
    size: int


class Palette:
    """Ordered, duplicate-free set of colors the drawing surface can select.

    Each color maps to the native token the surface needs to select it (a UI
    element handle, an index, ...). The nearest-color cache belongs to the
    instance, so rebuilding the palette for a new turn starts from empty.
    """

    def __init__(self, colors: Iterable[Color], tokens: Sequence[Any] | None = None) -> None:
        colors = list(colors)
        if tokens is not None and len(tokens) != len(colors):
            raise PaletteError("Palette tokens must match colors one to one")

        self._colors: list[Color] = []
        self._tokens: dict[tuple[int, int, int, int], Any] = {}
        for idx, color in enumerate(colors):
            if color.key in self._tokens:
                continue
            self._colors.append(color)
            self._tokens[color.key] = color if tokens is None else tokens[idx]

        if not self._colors:
            raise PaletteError("Palette must contain at least one color")

        self._nearest: dict[Color, Color] = {}
        self._hits = 0
        self._misses = 0

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[Color, Any]]) -> Palette:
        pairs = list(entries)
        return cls([c for c, _ in pairs], tokens=[t for _, t in pairs])

    @property
    def colors(self) -> list[Color]:
        return list(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, color: object) -> bool:
        return isinstance(color, Color) and color.key in self._tokens

    def token_for(self, color: Color) -> Any:
        try:
            return self._tokens[color.key]
        except KeyError:
            raise KeyError(f"Color {color.to_hex()} is not in the palette") from None

    def resolve_nearest(self, color: Color) -> Color:
        if color.is_transparent:
            return TRANSPARENT

        cached = self._nearest.get(color)
        if cached is not None:
            self._hits += 1
            return cached

        self._misses += 1
        best = self._colors[0]
        best_distance = distance(color, best)
        for candidate in self._colors[1:]:
            d = distance(color, candidate)
            if d < best_distance:
                best = candidate
                best_distance = d

        self._nearest[color] = best
        return best

    def cache_info(self) -> CacheInfo:
        return CacheInfo(hits=self._hits, misses=self._misses, size=len(self._nearest))
