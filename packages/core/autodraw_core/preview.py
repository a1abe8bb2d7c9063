"""Offline drawing surface that paints onto a Pillow image."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any, Sequence

from PIL import Image, ImageDraw

from autodraw_palette import Color, preset_colors
from autodraw_planner import DEFAULT_BRUSH_SIZES, BrushSize


class PreviewSurface:
    """Implements the drawing surface protocol for previews and tests.

    Swatch tokens are palette indexes. Every call is appended to ``actions``.
    With ``deactivate_after`` set, the surface reports itself inactive once
    that many strokes have been completed, which simulates the turn ending.
    """

    def __init__(
        self,
        width: int = 800,
        height: int = 600,
        colors: Sequence[Color] | None = None,
        brushes: Sequence[BrushSize] = DEFAULT_BRUSH_SIZES,
        background: Color = Color(255, 255, 255),
        deactivate_after: int | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.colors = list(colors) if colors is not None else preset_colors(None)
        self.brushes = tuple(brushes)
        self.background = background
        self.deactivate_after = deactivate_after

        self.image = Image.new("RGB", (width, height), background.key[:3])
        self._draw = ImageDraw.Draw(self.image)
        self.actions: list[tuple[Any, ...]] = []
        self.strokes = 0
        self.active = True

        self._tool = "brush"
        self._brush = self.brushes[0]
        self._color = self.colors[0] if self.colors else background
        self._pen: tuple[float, float] | None = None

    def palette_entries(self) -> list[tuple[Color, int]]:
        return [(color, idx) for idx, color in enumerate(self.colors)]

    def brush_sizes(self) -> tuple[BrushSize, ...]:
        return self.brushes

    def is_active(self) -> bool:
        return self.active

    def set_active(self, active: bool) -> None:
        self.active = bool(active)

    def select_tool(self, name: str) -> None:
        self.actions.append(("tool", name))
        self._tool = name

    def select_brush(self, index: int) -> None:
        self.actions.append(("brush", index))
        self._brush = self.brushes[index]

    def select_color(self, token: int) -> None:
        self.actions.append(("color", token))
        self._color = self.colors[token]

    def clear(self) -> None:
        self.actions.append(("clear",))
        self._draw.rectangle((0, 0, self.width, self.height), fill=self.background.key[:3])

    def _paint_color(self) -> tuple[int, int, int]:
        if self._tool == "eraser":
            return self.background.key[:3]
        return self._color.key[:3]

    def _stamp(self, x: float, y: float) -> None:
        radius = self._brush.dot_diameter / 2
        self._draw.ellipse((x - radius, y - radius, x + radius, y + radius), fill=self._paint_color())

    def pointer_down(self, x: float, y: float) -> None:
        self.actions.append(("down", x, y))
        self._pen = (x, y)
        self._stamp(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self.actions.append(("move", x, y))
        if self._pen is None:
            return
        width = max(1, round(self._brush.dot_diameter))
        self._draw.line((self._pen, (x, y)), fill=self._paint_color(), width=width)
        self._stamp(x, y)
        self._pen = (x, y)

    def pointer_up(self, x: float, y: float) -> None:
        self.actions.append(("up", x, y))
        self._pen = None
        self.strokes += 1
        if self.deactivate_after is not None and self.strokes >= self.deactivate_after:
            self.active = False

    def save(self, path: Path) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        self.image.save(path, format="PNG")
        return path

    def png_bytes(self) -> bytes:
        buf = BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()
