"""
NOTABILITY SESSION MAPPING
"""

from dataclasses import dataclass
from typing import Dict, Tuple

"""
Notability has written the curve arrays with several key casings over the years.
The spellings are tried in order, and the first one present wins.
They are never merged.
"""


@dataclass(frozen=True)
class NoteField:
    """
    Single logical field of the curve record.

    `keys` lists the spellings in lookup order.
    """

    name: str
    keys: Tuple[str, ...]


NOTE_FIELDS: Dict[str, NoteField] = {
    "points": NoteField(
        name="points", keys=("curvespoints", "curvesPoints", "CurvesPoints")
    ),
    "numPoints": NoteField(
        name="numPoints",
        keys=("curvesnumpoints", "curvesNumPoints", "CurvesNumPoints"),
    ),
    "width": NoteField(
        name="width", keys=("curveswidth", "curvesWidth", "CurvesWidth")
    ),
    "colors": NoteField(
        name="colors", keys=("curvescolors", "curvesColors", "CurvesColors")
    ),
}

SESSION_PLIST = "session.plist"

# search limit for the curve record
MAX_SEARCH_DEPTH = 15

DEFAULT_STROKE_WIDTH = 2.0
MIN_STROKE_WIDTH = 0.5

# canvas is grown from the content, never below a portrait page
CANVAS_MARGIN = 50
MIN_CANVAS_WIDTH = 800
MIN_CANVAS_HEIGHT = 1000

# deepest object nesting accepted while decoding a plist
MAX_NESTING = 128
