"""Drawing core: command binding, scheduling, turn context, settings and logging."""

from .artist import Artist, Command
from .config import DrawConfig, load_config, save_config
from .preview import PreviewSurface
from .scheduler import CommandScheduler, SchedulerReport, SchedulerState
from .surface import DrawingSurface
from .turn import DrawingTurn, TurnResult

__all__ = [
    "Artist",
    "Command",
    "CommandScheduler",
    "DrawConfig",
    "DrawingSurface",
    "DrawingTurn",
    "PreviewSurface",
    "SchedulerReport",
    "SchedulerState",
    "TurnResult",
    "load_config",
    "save_config",
]
