"""
inknote binary plist decoder

Decodes Apple binary property lists (bplist00) into plain Python values,
the same value types plistlib produces.

Format reference: CoreFoundation CFBinaryPList.c
"""

import datetime
import logging
import plistlib
import struct
from typing import Any, Dict, List, Set

from inknote.const import MAX_NESTING
from inknote.errors import BadMagicError, TruncatedError, UnsupportedTagError
from inknote.utils import unarchive

logger = logging.getLogger(__name__)

BPLIST_MAGIC = b"bplist00"
TRAILER_SIZE = 32

# dates are seconds since 2001-01-01 00:00:00 UTC
APPLE_EPOCH = datetime.datetime(2001, 1, 1)


class BplistDecoder:
    """
    inknote BplistDecoder

    Reads the trailer and offset table, then decodes the root object.
    Object references are resolved recursively. An object that refers back to
    one of the objects currently being decoded becomes None.
    """

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.offset_size: int = 0
        self.ref_size: int = 0
        self.offsets: List[int] = []
        # decoded objects by index, so shared references give the same object
        self._objects: Dict[int, Any] = {}
        self._in_progress: Set[int] = set()

    def decode(self) -> Any:
        """Decode the whole plist and resolve UIDs."""
        if not self.data.startswith(BPLIST_MAGIC):
            raise BadMagicError("Not a binary plist (missing 'bplist00' header).")

        root_index = self._read_trailer()
        root = self._decode_ref(root_index, 0)
        return unarchive(root)

    def _read(self, offset: int, size: int) -> bytes:
        if offset < 0 or size < 0 or offset + size > len(self.data):
            raise TruncatedError(
                f"Read of {size} bytes at offset {offset} runs past the end of the plist ({len(self.data)} bytes)."
            )
        return self.data[offset : offset + size]

    def _read_uint(self, offset: int, size: int) -> int:
        return int.from_bytes(self._read(offset, size), "big")

    def _read_trailer(self) -> int:
        if len(self.data) < len(BPLIST_MAGIC) + TRAILER_SIZE:
            raise TruncatedError("Binary plist is too short to hold a trailer.")

        (
            self.offset_size,
            self.ref_size,
            num_objects,
            top_object,
            offset_table_offset,
        ) = struct.unpack(">6xBBQQQ", self.data[-TRAILER_SIZE:])

        if not 1 <= self.offset_size <= 8 or not 1 <= self.ref_size <= 8:
            raise UnsupportedTagError(
                f"Unsupported integer sizes in trailer: offset {self.offset_size}, ref {self.ref_size}."
            )

        table_end = offset_table_offset + num_objects * self.offset_size
        if table_end > len(self.data) - TRAILER_SIZE:
            raise TruncatedError("Offset table runs into the trailer.")

        self.offsets = [
            self._read_uint(offset_table_offset + i * self.offset_size, self.offset_size)
            for i in range(num_objects)
        ]

        if top_object >= num_objects:
            raise TruncatedError(
                f"Root object {top_object} is out of range ({num_objects} objects)."
            )
        return top_object

    def _read_refs(self, offset: int, count: int) -> List[int]:
        raw = self._read(offset, count * self.ref_size)
        return [
            int.from_bytes(raw[i : i + self.ref_size], "big")
            for i in range(0, len(raw), self.ref_size)
        ]

    def _read_length(self, offset: int, size_nibble: int):
        """Returns (length, offset of the payload)."""
        if size_nibble != 0xF:
            return size_nibble, offset + 1

        marker = self._read(offset + 1, 1)[0]
        if marker >> 4 != 0x1:
            raise UnsupportedTagError(
                f"Extended length at offset {offset} is not an integer (marker {marker:#04x})."
            )
        int_size = 1 << (marker & 0xF)
        length = self._read_uint(offset + 2, int_size)
        return length, offset + 2 + int_size

    def _decode_ref(self, index: int, depth: int) -> Any:
        if index >= len(self.offsets):
            raise TruncatedError(
                f"Object reference {index} is out of range ({len(self.offsets)} objects)."
            )
        if index in self._objects:
            return self._objects[index]
        if index in self._in_progress:
            logger.debug(f"Object {index} refers to itself, replaced by None.")
            return None
        if depth > MAX_NESTING:
            raise UnsupportedTagError(
                f"Objects nested deeper than {MAX_NESTING} levels."
            )

        self._in_progress.add(index)
        try:
            result = self._decode_object(self.offsets[index], depth)
        finally:
            self._in_progress.discard(index)

        self._objects[index] = result
        return result

    def _decode_object(self, offset: int, depth: int) -> Any:
        marker = self._read(offset, 1)[0]
        tag, info = marker >> 4, marker & 0xF

        # null / bool / fill
        if tag == 0x0:
            if info in (0x0, 0xF):
                return None
            if info == 0x8:
                return False
            if info == 0x9:
                return True

        # integer, only 8 and 16 byte integers are signed
        elif tag == 0x1:
            if info > 4:
                raise UnsupportedTagError(f"Integer of 2^{info} bytes at offset {offset}.")
            return int.from_bytes(
                self._read(offset + 1, 1 << info), "big", signed=info >= 3
            )

        # real
        elif tag == 0x2:
            if info == 2:
                return struct.unpack(">f", self._read(offset + 1, 4))[0]
            if info == 3:
                return struct.unpack(">d", self._read(offset + 1, 8))[0]
            raise UnsupportedTagError(f"Real of 2^{info} bytes at offset {offset}.")

        # date
        elif tag == 0x3 and info == 0x3:
            seconds = struct.unpack(">d", self._read(offset + 1, 8))[0]
            try:
                return APPLE_EPOCH + datetime.timedelta(seconds=seconds)
            except (OverflowError, ValueError):
                logger.debug(f"Date {seconds} at offset {offset} is out of range, replaced by None.")
                return None

        # data
        elif tag == 0x4:
            length, start = self._read_length(offset, info)
            return self._read(start, length)

        # ascii string
        elif tag == 0x5:
            length, start = self._read_length(offset, info)
            return self._read(start, length).decode("ascii", errors="replace")

        # utf-16 string, length in characters
        elif tag == 0x6:
            length, start = self._read_length(offset, info)
            return self._read(start, length * 2).decode("utf-16be", errors="replace")

        # uid
        elif tag == 0x8:
            if info > 7:
                raise UnsupportedTagError(f"UID of {info + 1} bytes at offset {offset}.")
            return plistlib.UID(self._read_uint(offset + 1, info + 1))

        # array / set
        elif tag in (0xA, 0xC):
            length, start = self._read_length(offset, info)
            refs = self._read_refs(start, length)
            return [self._decode_ref(ref, depth + 1) for ref in refs]

        # dict
        elif tag == 0xD:
            length, start = self._read_length(offset, info)
            key_refs = self._read_refs(start, length)
            value_refs = self._read_refs(start + length * self.ref_size, length)
            result: Dict[Any, Any] = {}
            for key_ref, value_ref in zip(key_refs, value_refs):
                key = self._decode_ref(key_ref, depth + 1)
                if not isinstance(key, str):
                    key = str(key)
                result[key] = self._decode_ref(value_ref, depth + 1)
            return result

        raise UnsupportedTagError(f"Unsupported marker {marker:#04x} at offset {offset}.")


def decode_bplist(data: bytes) -> Any:
    """Decode binary plist bytes into a plain value tree."""
    return BplistDecoder(data).decode()
