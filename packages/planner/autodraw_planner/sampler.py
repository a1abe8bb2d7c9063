"""Scaling source images into canvas space and sampling their colors."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from PIL import Image

from autodraw_palette import TRANSPARENT, Color

from .models import FitMode


RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "box": Image.Resampling.BOX,
    "nearest": Image.Resampling.NEAREST,
    "bilinear": Image.Resampling.BILINEAR,
}


def _whole(value: float) -> int:
    # Canvas dimensions truncate; the epsilon keeps 599.9999 from becoming 599.
    return max(1, int(value + 1e-6))


@dataclass(frozen=True, eq=False)
class SampledImage:
    pixels: np.ndarray
    ratio: float
    fit_mode: FitMode

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def pixel(self, x: int, y: int) -> Color:
        r, g, b, a = self.pixels[y, x].tolist()
        return Color(r, g, b, a)

    def rows(self) -> list[list[Color]]:
        return [[Color(*px) for px in row] for row in self.pixels.tolist()]

    def offset_in(self, canvas_width: float, canvas_height: float, unit: float = 1.0) -> tuple[float, float]:
        """Inset that centers this image, drawn ``unit`` pixels per sample, on the canvas."""
        return (
            (canvas_width - self.width * unit) / 2,
            (canvas_height - self.height * unit) / 2,
        )


def scale(
    image: Image.Image,
    target_width: float,
    target_height: float,
    fit_mode: FitMode = FitMode.SCALE_TO_FIT,
    resample: Image.Resampling = Image.Resampling.BOX,
) -> SampledImage:
    if target_width <= 0 or target_height <= 0:
        raise ValueError("Target size must be positive")
    if image.mode != "RGBA":
        image = image.convert("RGBA")

    width, height = image.size
    w_ratio = target_width / width
    h_ratio = target_height / height

    if fit_mode == FitMode.SCALE_TO_FIT:
        ratio = min(w_ratio, h_ratio)
        out_w = min(_whole(width * ratio), _whole(target_width))
        out_h = min(_whole(height * ratio), _whole(target_height))
        scaled = image.resize((out_w, out_h), resample)
    else:
        ratio = max(w_ratio, h_ratio)
        canvas_w = _whole(target_width)
        canvas_h = _whole(target_height)
        scaled_w = max(canvas_w, _whole(width * ratio))
        scaled_h = max(canvas_h, _whole(height * ratio))
        scaled = image.resize((scaled_w, scaled_h), resample)
        left = (scaled_w - canvas_w) // 2
        top = (scaled_h - canvas_h) // 2
        scaled = scaled.crop((left, top, left + canvas_w, top + canvas_h))

    pixels = np.asarray(scaled, dtype=np.uint8)
    pixels.setflags(write=False)
    return SampledImage(pixels=pixels, ratio=ratio, fit_mode=fit_mode)


def average_color(sampled: SampledImage, x: int, y: int, width: int, height: int) -> Color:
    """Alpha-weighted mean color of a region, clipped to the image bounds.

    Fully transparent pixels contribute nothing to RGB; the output alpha is the
    mean weight, so a region with any visible pixel never reads as transparent.
    """
    region = sampled.pixels[max(y, 0) : y + height, max(x, 0) : x + width].astype(np.float64)
    if region.size == 0:
        return TRANSPARENT

    weights = region[..., 3] / 255.0
    total = float(weights.sum())
    if total <= 0:
        return TRANSPARENT

    count = weights.size
    r = int(float((region[..., 0] * weights).sum()) / total)
    g = int(float((region[..., 1] * weights).sum()) / total)
    b = int(float((region[..., 2] * weights).sum()) / total)
    a = max(1, min(255, round(total / count * 255)))
    return Color(min(r, 255), min(g, 255), min(b, 255), a)
