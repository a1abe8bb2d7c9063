"""Interface the drawing core expects from the controlled drawing surface."""

from __future__ import annotations

from typing import Any, Protocol, Sequence, runtime_checkable

from autodraw_palette import Color
from autodraw_planner import BrushSize


@runtime_checkable
class DrawingSurface(Protocol):
    """Capabilities of a palette-constrained canvas, e.g. a game page toolbar.

    ``palette_entries`` reports ``(color, token)`` pairs in toolbar order; the
    token is whatever ``select_color`` needs to pick that swatch. Coordinates
    are in canvas space, not screen space.
    """

    def palette_entries(self) -> Sequence[tuple[Color, Any]]: ...

    def brush_sizes(self) -> Sequence[BrushSize]: ...

    def select_tool(self, name: str) -> None: ...

    def select_brush(self, index: int) -> None: ...

    def select_color(self, token: Any) -> None: ...

    def pointer_down(self, x: float, y: float) -> None: ...

    def pointer_move(self, x: float, y: float) -> None: ...

    def pointer_up(self, x: float, y: float) -> None: ...

    def clear(self) -> None: ...

    def is_active(self) -> bool: ...
