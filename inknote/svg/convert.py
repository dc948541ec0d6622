"""
inknote Converter

Convert the intermediate data to Inkscape read by read.py
"""

import inkex
import lxml.etree
from inkex.base import SvgOutputMixin

from ..elements.geometry import CanvasPlan, GeometryPlanner
from ..elements.note import Curve, NoteDocument
from ..elements.path import StrokePathBuilder, StrokeStyle, to_inkex_path


class NoteConverter:
    """
    inknote NoteConverter

    Convert the intermediate data to Inkscape.
    """

    def __init__(self) -> None:
        self.plan: CanvasPlan
        self.doc: lxml.etree._ElementTree
        self.document: inkex.SvgDocumentElement

    def convert(self, note: NoteDocument, crop_to_content: bool = True) -> None:
        self.plan = GeometryPlanner.plan(
            note.curves, crop_to_content, size=(note.width, note.height)
        )

        self.doc = SvgOutputMixin.get_template(
            width=self.plan.cropped_width,
            height=self.plan.cropped_height,
            unit="px",
        )
        self.document = self.doc.getroot()

        # Adding comments
        comment = lxml.etree.Comment(" Converted by extension-notability ")
        self.document.addprevious(comment)

        # paper is white, Notability doesn't store it
        background = inkex.Rectangle.new(
            0, 0, self.plan.cropped_width, self.plan.cropped_height
        )
        background.label = "background"
        background.style["fill"] = "#ffffff"
        background.style["fill-opacity"] = 1
        background.style["stroke"] = "none"
        self.document.add(background)

        layer = self.document.add(inkex.Layer.new(label="Strokes"))
        dx, dy = self.plan.origin
        if dx != 0 or dy != 0:
            tr = inkex.transforms.Transform()
            tr.add_translate(dx, dy)
            layer.transform = tr

        for curve in note.curves:
            path = self.convert_curve(curve)
            if path is not None:
                layer.add(path)

    def convert_curve(self, curve: Curve):
        """Converts a Curve to an SVG path (inkex.PathElement)."""
        segments = StrokePathBuilder.build(curve)
        if not segments:
            return None

        path = inkex.PathElement()
        path.path = to_inkex_path(segments)
        self.set_stroke_styles(path, StrokeStyle.for_curve(curve))
        return path

    def set_stroke_styles(self, elem: inkex.BaseElement, stroke: StrokeStyle) -> None:
        """Apply StrokeStyle to inkex.BaseElement."""
        elem.style["fill"] = "none"
        elem.style["stroke"] = stroke.color.hex
        elem.style["stroke-opacity"] = stroke.color.alpha
        elem.style["stroke-linecap"] = stroke.cap
        elem.style["stroke-linejoin"] = stroke.join
        elem.style["stroke-width"] = stroke.width
