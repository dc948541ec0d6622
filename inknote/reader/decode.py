"""
inknote decoder

converts the decoded Session.plist into curves.
"""

import logging
import math
from typing import Any, Dict, List, Sequence

from inknote.const import DEFAULT_STROKE_WIDTH, NOTE_FIELDS
from inknote.errors import NoCurveDataError

from ..elements.geometry import GeometryPlanner
from ..elements.note import Curve, CurvePoint, NoteDocument
from .datatypes import ArrayKind, decode_array, decode_color
from .locate import describe_structure, field_bytes, find_curve_record, get_field

logger = logging.getLogger(__name__)


class CurveAssembler:
    """
    Splits the flat point array into curves.

    `counts[i]` points belong to curve i. Widths and colors are indexed by
    curve, including curves that end up discarded.
    """

    def __init__(
        self,
        points: Sequence[float],
        counts: Sequence[float],
        widths: Sequence[float],
        colors: Sequence[float],
    ) -> None:
        self.points = points
        self.counts = counts
        self.widths = widths
        self.colors = colors

    def _point(self, index: int):
        """Return the point at pair `index`, or None if missing or not finite."""
        if 2 * index + 1 >= len(self.points):
            return None
        x, y = self.points[2 * index], self.points[2 * index + 1]
        if not (math.isfinite(x) and math.isfinite(y)):
            return None
        return CurvePoint(x, y)

    def _width(self, index: int) -> float:
        # a zero width means "not set"
        if index < len(self.widths):
            width = self.widths[index]
            if math.isfinite(width) and width != 0:
                return width
        return DEFAULT_STROKE_WIDTH

    def _color(self, index: int) -> int:
        if index < len(self.colors):
            return int(self.colors[index])
        return 0

    def assemble(self) -> List[Curve]:
        if not self.points or not self.counts:
            raise NoCurveDataError("No valid curve data decoded.")

        curves: List[Curve] = []
        cursor = 0

        for i, count in enumerate(self.counts):
            # non-positive counts don't move the cursor
            if count <= 0:
                logger.debug(f"Curve {i} has {count} points, skipped.")
                continue

            # pairs past the end are missing anyway
            start = cursor
            cursor = start + int(count)
            stop = min(cursor, len(self.points) // 2)

            points: List[CurvePoint] = []
            for index in range(start, stop):
                point = self._point(index)
                if point is None:
                    logger.debug(f"Curve {i}: point {index} is not finite, dropped.")
                    continue
                points.append(point)

            if len(points) < 2:
                logger.debug(f"Curve {i} has fewer than 2 valid points, discarded.")
                continue

            curves.append(
                Curve(
                    points=tuple(points),
                    width=self._width(i),
                    color=decode_color(self._color(i)),
                )
            )

        if not curves:
            raise NoCurveDataError("No valid curves created from data.")

        return curves


def assemble(
    points: Sequence[float],
    counts: Sequence[float],
    widths: Sequence[float],
    colors: Sequence[float],
) -> List[Curve]:
    return CurveAssembler(points, counts, widths, colors).assemble()


class NoteDecoder:
    """
    inknote NoteDecoder

    Finds the curve record in a decoded Session.plist and builds a NoteDocument.
    """

    def __init__(self, plist: Any) -> None:
        self.plist = plist
        self.record: Dict = self.find_record()
        self.document: NoteDocument = self.read_document()

    def find_record(self) -> Dict:
        record = find_curve_record(self.plist)
        if record is None:
            sample = describe_structure(self.plist)
            logger.error(f"No curve data found. Plist structure sample:\n{sample}")
            raise NoCurveDataError("No curve data found in plist.", detail=sample)
        return record

    def read_array(self, field_name: str, kind: ArrayKind) -> List[float]:
        """Decode one of the packed arrays of the curve record."""
        value = get_field(self.record, NOTE_FIELDS[field_name])
        return decode_array(field_bytes(value), kind)

    def read_document(self) -> NoteDocument:
        curves = assemble(
            points=self.read_array("points", ArrayKind.FLOAT32),
            counts=self.read_array("numPoints", ArrayKind.INT32),
            widths=self.read_array("width", ArrayKind.FLOAT32),
            colors=self.read_array("colors", ArrayKind.INT32),
        )
        width, height = GeometryPlanner.canvas_size(curves)
        return NoteDocument(curves=tuple(curves), width=width, height=height)
