"""Image sampling and stroke planning for palette-constrained canvases."""

from .loader import ImageLoadError, load_image
from .models import (
    DEFAULT_BRUSH_SIZES,
    BrushConfigError,
    BrushSize,
    CanvasSpec,
    Dot,
    DrawMode,
    FitMode,
    Line,
    Point,
    Primitive,
    StrokePlan,
    select_brush,
)
from .sampler import RESAMPLE_FILTERS, SampledImage, average_color, scale
from .strokes import plan_dots, plan_lines, plan_strokes

__all__ = [
    "BrushConfigError",
    "BrushSize",
    "CanvasSpec",
    "DEFAULT_BRUSH_SIZES",
    "Dot",
    "DrawMode",
    "FitMode",
    "ImageLoadError",
    "Line",
    "Point",
    "Primitive",
    "RESAMPLE_FILTERS",
    "SampledImage",
    "StrokePlan",
    "average_color",
    "load_image",
    "plan_dots",
    "plan_lines",
    "plan_strokes",
    "scale",
    "select_brush",
]
