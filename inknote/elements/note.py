"""
CurvePoint, RGBA, Curve, NoteDocument
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple, Tuple


class CurvePoint(NamedTuple):
    x: float
    y: float


@dataclass(frozen=True)
class RGBA:
    """Stroke color, 0-255 channels and 0-1 alpha."""

    r: int
    g: int
    b: int
    a: float

    @property
    def hex(self) -> str:
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    @property
    def alpha(self) -> float:
        return self.a


BLACK = RGBA(0, 0, 0, 1.0)


@dataclass(frozen=True)
class Curve:
    """One pen stroke. Always holds at least two points."""

    points: Tuple[CurvePoint, ...]
    width: float
    color: RGBA


@dataclass(frozen=True)
class NoteDocument:
    """
    Curves of a .note file.

    width / height are derived from the content, not the page size Notability stored.
    """

    curves: Tuple[Curve, ...]
    width: float
    height: float
