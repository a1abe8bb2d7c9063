"""Binds stroke primitives to deferred surface actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from PIL import Image

from autodraw_palette import Palette
from autodraw_planner import BrushSize, CanvasSpec, Dot, DrawMode, Line, Primitive, StrokePlan, plan_strokes

from .surface import DrawingSurface


BRUSH_TOOL = "brush"


@dataclass(frozen=True)
class Command:
    """A zero-argument surface action; ``primitive`` is None for the canvas clear."""

    action: Callable[[], None]
    primitive: Primitive | None = None

    @property
    def kind(self) -> str:
        if self.primitive is None:
            return "clear"
        return "dot" if isinstance(self.primitive, Dot) else "line"

    def __call__(self) -> None:
        self.action()


class Artist:
    def __init__(
        self,
        surface: DrawingSurface,
        palette: Palette,
        brushes: Sequence[BrushSize],
        canvas: CanvasSpec,
    ) -> None:
        self.surface = surface
        self.palette = palette
        self.brushes = tuple(brushes)
        self.canvas = canvas

    def plan(
        self,
        image: Image.Image,
        mode: DrawMode | str,
        brush_index: int,
        resample: Image.Resampling = Image.Resampling.BOX,
    ) -> StrokePlan:
        return plan_strokes(
            image,
            self.palette,
            mode,
            brush_index,
            canvas=self.canvas,
            brushes=self.brushes,
            resample=resample,
        )

    def commands_for(self, plan: StrokePlan) -> list[Command]:
        commands = [Command(action=self.surface.clear)]
        for primitive in plan.primitives:
            commands.append(self._bind(primitive, plan.brush.index))
        return commands

    def compose(
        self,
        image: Image.Image,
        mode: DrawMode | str,
        brush_index: int,
        resample: Image.Resampling = Image.Resampling.BOX,
    ) -> list[Command]:
        return self.commands_for(self.plan(image, mode, brush_index, resample))

    def _bind(self, primitive: Primitive, brush_index: int) -> Command:
        surface = self.surface
        token = self.palette.token_for(primitive.color)

        if isinstance(primitive, Line):
            line = primitive

            def draw_line() -> None:
                surface.select_tool(BRUSH_TOOL)
                surface.select_brush(brush_index)
                surface.select_color(token)
                surface.pointer_down(line.start.x, line.start.y)
                surface.pointer_move(line.end.x, line.end.y)
                surface.pointer_up(line.end.x, line.end.y)

            return Command(action=draw_line, primitive=line)

        dot = primitive

        def draw_dot() -> None:
            surface.select_tool(BRUSH_TOOL)
            surface.select_brush(brush_index)
            surface.select_color(token)
            surface.pointer_down(dot.position.x, dot.position.y)
            surface.pointer_up(dot.position.x, dot.position.y)

        return Command(action=draw_dot, primitive=dot)
