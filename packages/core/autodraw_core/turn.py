"""Per-turn drawing context: palette, plan, and scheduled execution."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from PIL import Image

from autodraw_palette import CacheInfo, Palette
from autodraw_planner import RESAMPLE_FILTERS, ImageLoadError, StrokePlan, load_image, select_brush

from .artist import Artist, Command
from .config import DrawConfig
from .logging_setup import turn_logger
from .scheduler import CommandScheduler, SchedulerReport
from .surface import DrawingSurface


@dataclass(frozen=True)
class TurnResult:
    turn_id: str
    mode: str
    brush_index: int
    axis: str | None
    primitives: int
    commands: int
    report: SchedulerReport
    cache: CacheInfo


class DrawingTurn:
    """Everything needed to draw one image during one turn.

    The palette (and with it the nearest-color cache) is rebuilt from the
    surface on construction, so nothing carries over between turns. Draw mode
    and brush index are validated here, before any image work starts.
    """

    def __init__(
        self,
        surface: DrawingSurface,
        config: DrawConfig | None = None,
        scheduler: CommandScheduler | None = None,
    ) -> None:
        self.surface = surface
        self.config = config or DrawConfig()
        self.turn_id = uuid.uuid4().hex[:12]
        self.log = turn_logger(self.turn_id)

        self.palette = Palette.from_entries(surface.palette_entries())
        self.brushes = tuple(surface.brush_sizes())
        self.mode = self.config.draw_mode
        self.brush = select_brush(self.brushes, self.config.draw.brush_index)
        self.artist = Artist(surface, self.palette, self.brushes, self.config.canvas_spec())
        self.scheduler = scheduler or CommandScheduler()
        self.plan: StrokePlan | None = None

    def prepare(self, source: str | Path | bytes | Image.Image) -> list[Command]:
        try:
            image = load_image(source, timeout_s=self.config.image.fetch_timeout_s)
        except ImageLoadError as exc:
            self.log.event("image_load_failed", "image load failed: %s", exc, level=logging.WARNING)
            raise

        resample = RESAMPLE_FILTERS[self.config.image.resample]
        self.plan = self.artist.plan(image, self.mode, self.brush.index, resample)
        commands = self.artist.commands_for(self.plan)
        self.log.event(
            "turn_planned",
            "planned %d %s primitives with brush %d",
            len(self.plan.primitives),
            self.mode.value,
            self.brush.index,
            primitives=len(self.plan.primitives),
            axis=self.plan.axis,
        )
        return commands

    def draw(self, source: str | Path | bytes | Image.Image) -> TurnResult:
        commands = self.prepare(source)

        self.scheduler.submit(commands)
        report = self.scheduler.start(self.config.scheduler.delay_ms, self.surface.is_active)

        cache = self.palette.cache_info()
        self.log.event(
            "turn_finished",
            "turn finished executed=%d abandoned=%d cancelled=%s",
            report.executed,
            report.abandoned,
            report.cancelled,
            cache_hits=cache.hits,
            cache_misses=cache.misses,
        )
        return TurnResult(
            turn_id=self.turn_id,
            mode=self.mode.value,
            brush_index=self.brush.index,
            axis=self.plan.axis,
            primitives=len(self.plan.primitives),
            commands=len(commands),
            report=report,
            cache=cache,
        )
