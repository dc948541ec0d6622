"""
CropRectangle, CanvasPlan, GeometryPlanner
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from inknote.const import (
    CANVAS_MARGIN,
    DEFAULT_STROKE_WIDTH,
    MIN_CANVAS_HEIGHT,
    MIN_CANVAS_WIDTH,
)

from .note import Curve


@dataclass(frozen=True)
class CropRectangle:
    """Margins cut from each side of the canvas."""

    left: float = 0.0
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Bounds:
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def is_finite(self) -> bool:
        return all(
            math.isfinite(v) for v in (self.min_x, self.min_y, self.max_x, self.max_y)
        )


@dataclass(frozen=True)
class CanvasPlan:
    """Canvas size before cropping, and the crop applied to it."""

    width: float
    height: float
    crop: CropRectangle

    @property
    def cropped_width(self) -> float:
        return max(1, self.width - self.crop.left - self.crop.right)

    @property
    def cropped_height(self) -> float:
        return max(1, self.height - self.crop.top - self.crop.bottom)

    @property
    def origin(self) -> Tuple[float, float]:
        """Translation to apply before drawing the curves."""
        return -self.crop.left, -self.crop.top


class GeometryPlanner:
    """Computes canvas size, content bounds and crop rectangle of a list of curves."""

    @staticmethod
    def canvas_size(curves: Iterable[Curve]) -> Tuple[float, float]:
        """
        Canvas grown to fit the raw points plus a margin.

        Never smaller than MIN_CANVAS_WIDTH x MIN_CANVAS_HEIGHT.
        """
        max_x = max_y = 0.0
        for curve in curves:
            for point in curve.points:
                max_x = max(max_x, point.x)
                max_y = max(max_y, point.y)

        return (
            max(math.ceil(max_x) + CANVAS_MARGIN, MIN_CANVAS_WIDTH),
            max(math.ceil(max_y) + CANVAS_MARGIN, MIN_CANVAS_HEIGHT),
        )

    @staticmethod
    def content_bounds(curves: Iterable[Curve]) -> Bounds:
        """Bounding box of the points, each grown by half its stroke width."""
        min_x = min_y = math.inf
        max_x = max_y = -math.inf

        for curve in curves:
            half_width = (curve.width or DEFAULT_STROKE_WIDTH) / 2
            for point in curve.points:
                min_x = min(min_x, point.x - half_width)
                min_y = min(min_y, point.y - half_width)
                max_x = max(max_x, point.x + half_width)
                max_y = max(max_y, point.y + half_width)

        return Bounds(min_x, min_y, max_x, max_y)

    @classmethod
    def crop_rectangle(
        cls,
        curves: Iterable[Curve],
        width: float,
        height: float,
        crop_enabled: bool,
    ) -> CropRectangle:
        if not crop_enabled:
            return CropRectangle()

        bounds = cls.content_bounds(curves)
        if not bounds.is_finite():
            return CropRectangle()

        return CropRectangle(
            left=max(0.0, bounds.min_x),
            top=max(0.0, bounds.min_y),
            right=max(0.0, width - bounds.max_x),
            bottom=max(0.0, height - bounds.max_y),
        )

    @classmethod
    def plan(
        cls,
        curves: Iterable[Curve],
        crop_enabled: bool,
        size: Optional[Tuple[float, float]] = None,
    ) -> CanvasPlan:
        """
        Plan the canvas for `curves`.

        `size` is the document's canvas size when already known.
        """
        curves = list(curves)
        width, height = size if size is not None else cls.canvas_size(curves)
        crop = cls.crop_rectangle(curves, width, height, crop_enabled)
        return CanvasPlan(width=width, height=height, crop=crop)
