"""RGBA color value type and the red-mean perceptual distance."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass


_CSS_RGB_RE = re.compile(r"^rgba?\(\s*([^)]*)\)$", re.IGNORECASE)


def _channel(value: int) -> int:
    value = int(value)
    if not 0 <= value <= 255:
        raise ValueError(f"Channel out of range: {value}")
    return value


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            object.__setattr__(self, name, _channel(getattr(self, name)))

    @property
    def key(self) -> tuple[int, int, int, int]:
        return (self.r, self.g, self.b, self.a)

    @property
    def is_transparent(self) -> bool:
        return self.a == 0

    def canonical(self) -> Color:
        return TRANSPARENT if self.is_transparent else self

    def to_hex(self) -> str:
        if self.a == 255:
            return f"#{self.r:02X}{self.g:02X}{self.b:02X}"
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}{self.a:02X}"

    @classmethod
    def from_hex(cls, value: str) -> Color:
        text = value.strip().lstrip("#")
        if len(text) not in (6, 8):
            raise ValueError(f"Invalid hex color: {value!r}")
        try:
            parts = [int(text[i : i + 2], 16) for i in range(0, len(text), 2)]
        except ValueError as exc:
            raise ValueError(f"Invalid hex color: {value!r}") from exc
        return cls(*parts)

    @classmethod
    def from_css(cls, value: str) -> Color:
        """Parse ``rgb(r, g, b)``, ``rgba(r, g, b, a)`` or a hex string.

        CSS alpha is a 0..1 float and is scaled to 0..255.
        """
        text = value.strip()
        if text.startswith("#"):
            return cls.from_hex(text)
        match = _CSS_RGB_RE.match(text)
        if not match:
            raise ValueError(f"Invalid CSS color: {value!r}")
        parts = [p.strip() for p in match.group(1).split(",")]
        if len(parts) not in (3, 4):
            raise ValueError(f"Invalid CSS color: {value!r}")
        r, g, b = (int(float(p)) for p in parts[:3])
        a = 255 if len(parts) == 3 else round(float(parts[3]) * 255)
        return cls(r, g, b, a)


TRANSPARENT = Color(0, 0, 0, 0)


def equals(a: Color, b: Color) -> bool:
    return a.key == b.key


def distance(a: Color, b: Color) -> float:
    """Red-mean weighted RGB distance; alpha does not participate."""
    r_mean = (a.r + b.r) / 2
    dr = a.r - b.r
    dg = a.g - b.g
    db = a.b - b.b
    return math.sqrt(
        (2 + r_mean / 256) * dr * dr
        + 4 * dg * dg
        + (2 + (255 - r_mean) / 256) * db * db
    )
