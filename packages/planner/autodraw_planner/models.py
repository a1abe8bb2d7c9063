"""Typed planner models: brushes, draw modes and stroke primitives."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from autodraw_palette import Color


class BrushConfigError(ValueError):
    pass


class DrawMode(str, Enum):
    DOTS = "Dots"
    LINES = "Lines"

    @classmethod
    def parse(cls, value: str | DrawMode) -> DrawMode:
        if isinstance(value, DrawMode):
            return value
        for mode in cls:
            if mode.value.lower() == str(value).strip().lower():
                return mode
        raise BrushConfigError(f"Unknown draw mode: {value!r}")


class FitMode(str, Enum):
    SCALE_TO_FIT = "scaleToFit"
    SCALE_TO_FILL = "scaleToFill"


@dataclass(frozen=True)
class BrushSize:
    index: int
    dot_diameter: int
    line_diameter: float

    def diameter_for(self, mode: DrawMode) -> float:
        return self.dot_diameter if mode == DrawMode.DOTS else self.line_diameter


DEFAULT_BRUSH_SIZES: tuple[BrushSize, ...] = (
    BrushSize(0, 4, 2.7),
    BrushSize(1, 9, 6),
    BrushSize(2, 20, 17),
    BrushSize(3, 40, 37),
)


def select_brush(brushes: tuple[BrushSize, ...] | list[BrushSize], index: int) -> BrushSize:
    if isinstance(index, bool) or not isinstance(index, int):
        raise BrushConfigError(f"Brush index must be an integer, got {index!r}")
    if not 0 <= index < len(brushes):
        raise BrushConfigError(f"Brush index {index} outside 0..{len(brushes) - 1}")
    return brushes[index]


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class Dot:
    position: Point
    color: Color
    brush_diameter: float


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    color: Color
    brush_diameter: float
    length: float


Primitive = Union[Dot, Line]


@dataclass(frozen=True)
class CanvasSpec:
    width: int = 800
    height: int = 600
    background: Color = field(default_factory=lambda: Color(255, 255, 255))


@dataclass
class StrokePlan:
    mode: DrawMode
    brush: BrushSize
    primitives: list[Primitive] = field(default_factory=list)
    axis: str | None = None
    sample_width: int = 0
    sample_height: int = 0

    def color_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for p in self.primitives:
            key = p.color.to_hex()
            counts[key] = counts.get(key, 0) + 1
        return counts
