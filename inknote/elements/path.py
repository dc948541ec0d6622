"""
MoveTo, LineTo, QuadraticTo, StrokeStyle, StrokePathBuilder
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence, Union

import inkex

from inknote.const import DEFAULT_STROKE_WIDTH, MIN_STROKE_WIDTH

from .note import Curve, CurvePoint, RGBA


@dataclass(frozen=True)
class MoveTo:
    point: CurvePoint


@dataclass(frozen=True)
class LineTo:
    point: CurvePoint


@dataclass(frozen=True)
class QuadraticTo:
    control: CurvePoint
    end: CurvePoint


PathSegment = Union[MoveTo, LineTo, QuadraticTo]


@dataclass(frozen=True)
class StrokeStyle:
    """How a stroke path should be painted."""

    width: float
    color: RGBA
    cap: str = "round"
    join: str = "round"

    @classmethod
    def for_curve(cls, curve: Curve) -> StrokeStyle:
        return cls(
            width=max(curve.width or DEFAULT_STROKE_WIDTH, MIN_STROKE_WIDTH),
            color=curve.color,
        )


def _midpoint(a: CurvePoint, b: CurvePoint) -> CurvePoint:
    return CurvePoint((a.x + b.x) / 2, (a.y + b.y) / 2)


class StrokePathBuilder:
    """
    Smooths a polyline into quadratic segments.

    Every inner point becomes a control point and the path passes through
    the midpoints between them. The last segment ends on the last point.
    """

    @staticmethod
    def build(curve: Curve) -> List[PathSegment]:
        return StrokePathBuilder.build_points(curve.points)

    @staticmethod
    def build_points(points: Sequence[CurvePoint]) -> List[PathSegment]:
        pts = [
            CurvePoint(*p)
            for p in points
            if math.isfinite(p[0]) and math.isfinite(p[1])
        ]

        if len(pts) < 2:
            return []

        if len(pts) == 2:
            return [MoveTo(pts[0]), LineTo(pts[1])]

        segments: List[PathSegment] = [MoveTo(pts[0])]
        for i in range(1, len(pts) - 1):
            segments.append(QuadraticTo(pts[i], _midpoint(pts[i], pts[i + 1])))
        segments.append(QuadraticTo(pts[-2], pts[-1]))
        return segments


def to_inkex_path(segments: Sequence[PathSegment]) -> inkex.Path:
    """Converts path segments to inkex path."""
    path = inkex.Path()
    for segment in segments:
        if isinstance(segment, MoveTo):
            path.append(inkex.paths.Move(*segment.point))
        elif isinstance(segment, LineTo):
            path.append(inkex.paths.Line(*segment.point))
        elif isinstance(segment, QuadraticTo):
            path.append(inkex.paths.Quadratic(*segment.control, *segment.end))
    return path
