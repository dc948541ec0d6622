"""
Packed arrays and colors stored in the curve record.
"""

import enum
import struct
from typing import List

from inknote.elements.note import RGBA


class ArrayKind(enum.Enum):
    """Element type of a packed little-endian array (struct format)."""

    FLOAT32 = "f"
    INT32 = "i"


def decode_array(blob: bytes, kind: ArrayKind) -> List[float]:
    """
    Reinterpret `blob` as little-endian 4 byte elements.

    Trailing bytes that don't make a whole element are ignored.
    """
    if not blob:
        return []
    count = len(blob) // 4
    return [float(v) for v in struct.unpack_from(f"<{count}{kind.value}", blob)]


def decode_color(rgba: int) -> RGBA:
    """
    Decode a packed color: byte 0 is red, byte 3 is alpha.

    Notability sometimes writes the bytes the other way round.
    When alpha comes out as 0 but the color isn't black, the word is read
    back to front (byte 3 red, byte 0 alpha).
    """
    word = int(rgba) & 0xFFFFFFFF
    if word == 0:
        return RGBA(0, 0, 0, 1.0)

    r = word & 0xFF
    g = (word >> 8) & 0xFF
    b = (word >> 16) & 0xFF
    a = (word >> 24) & 0xFF

    if a == 0 and (r or g or b):
        return RGBA(
            r=(word >> 24) & 0xFF,
            g=(word >> 16) & 0xFF,
            b=(word >> 8) & 0xFF,
            a=(word & 0xFF) / 255,
        )

    return RGBA(r, g, b, a / 255)
