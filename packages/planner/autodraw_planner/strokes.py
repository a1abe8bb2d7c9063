"""Dot-grid and run-length line strategies reducing an image to primitives."""

from __future__ import annotations

from typing import Iterator, Sequence

from PIL import Image

from autodraw_palette import TRANSPARENT, Color, Palette

from .models import (
    DEFAULT_BRUSH_SIZES,
    BrushSize,
    CanvasSpec,
    Dot,
    DrawMode,
    FitMode,
    Line,
    Point,
    StrokePlan,
    select_brush,
)
from .sampler import average_color, scale


def _is_blank(color: Color, background: Color) -> bool:
    return color == TRANSPARENT or color == background


def _runs(colors: Sequence[Color]) -> Iterator[tuple[int, int, Color]]:
    """Yield ``(start, end, color)`` for each run of equal colors, ends inclusive."""
    if not colors:
        return
    start = 0
    current = colors[0]
    for i in range(1, len(colors)):
        if colors[i] != current:
            yield start, i - 1, current
            start = i
            current = colors[i]
    yield start, len(colors) - 1, current


def plan_dots(
    image: Image.Image,
    palette: Palette,
    canvas: CanvasSpec,
    brush: BrushSize,
    resample: Image.Resampling = Image.Resampling.BOX,
) -> StrokePlan:
    diameter = int(brush.dot_diameter)
    sampled = scale(image, canvas.width, canvas.height, FitMode.SCALE_TO_FIT, resample)
    x_offset, y_offset = sampled.offset_in(canvas.width, canvas.height)

    dots: list[Dot] = []
    for y in range(0, sampled.height, diameter):
        for x in range(0, sampled.width, diameter):
            color = palette.resolve_nearest(average_color(sampled, x, y, diameter, diameter))
            if _is_blank(color, canvas.background):
                continue
            center = Point(
                x=(x + (x + diameter - 1)) / 2 + x_offset,
                y=(y + (y + diameter - 1)) / 2 + y_offset,
            )
            dots.append(Dot(position=center, color=color, brush_diameter=diameter))

    # Left-to-right sweep.
    dots.sort(key=lambda dot: dot.position.x)
    return StrokePlan(
        mode=DrawMode.DOTS,
        brush=brush,
        primitives=list(dots),
        sample_width=sampled.width,
        sample_height=sampled.height,
    )


def _line(start: Point, end: Point, color: Color, diameter: float) -> Line:
    length = (end.x - start.x) + (end.y - start.y)
    return Line(start=start, end=end, color=color, brush_diameter=diameter, length=length)


def plan_lines(
    image: Image.Image,
    palette: Palette,
    canvas: CanvasSpec,
    brush: BrushSize,
    resample: Image.Resampling = Image.Resampling.BOX,
) -> StrokePlan:
    diameter = brush.line_diameter
    sampled = scale(image, canvas.width / diameter, canvas.height / diameter, FitMode.SCALE_TO_FIT, resample)
    x_offset, y_offset = sampled.offset_in(canvas.width, canvas.height, unit=diameter)
    grid = [[palette.resolve_nearest(c) for c in row] for row in sampled.rows()]

    horizontal_lines: list[Line] = []
    for y, row in enumerate(grid):
        line_y = y * diameter + y_offset
        for start, end, color in _runs(row):
            if _is_blank(color, canvas.background):
                continue
            horizontal_lines.append(
                _line(
                    Point(start * diameter + x_offset, line_y),
                    Point(end * diameter + x_offset, line_y),
                    color,
                    diameter,
                )
            )

    vertical_lines: list[Line] = []
    for x in range(sampled.width):
        column = [row[x] for row in grid]
        line_x = x * diameter + x_offset
        for start, end, color in _runs(column):
            if _is_blank(color, canvas.background):
                continue
            vertical_lines.append(
                _line(
                    Point(line_x, start * diameter + y_offset),
                    Point(line_x, end * diameter + y_offset),
                    color,
                    diameter,
                )
            )

    if len(horizontal_lines) <= len(vertical_lines):
        lines, axis = horizontal_lines, "horizontal"
    else:
        lines, axis = vertical_lines, "vertical"

    # Longest strokes first; sort is stable so equal lengths keep scan order.
    lines.sort(key=lambda line: line.length, reverse=True)
    return StrokePlan(
        mode=DrawMode.LINES,
        brush=brush,
        primitives=list(lines),
        axis=axis,
        sample_width=sampled.width,
        sample_height=sampled.height,
    )


def plan_strokes(
    image: Image.Image,
    palette: Palette,
    mode: DrawMode | str,
    brush_index: int,
    canvas: CanvasSpec | None = None,
    brushes: Sequence[BrushSize] = DEFAULT_BRUSH_SIZES,
    resample: Image.Resampling = Image.Resampling.BOX,
) -> StrokePlan:
    draw_mode = DrawMode.parse(mode)
    brush = select_brush(tuple(brushes), brush_index)
    canvas = canvas or CanvasSpec()
    if draw_mode == DrawMode.DOTS:
        return plan_dots(image, palette, canvas, brush, resample)
    return plan_lines(image, palette, canvas, brush, resample)
