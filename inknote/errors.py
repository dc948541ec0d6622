"""
inknote errors

Every failure that stops a note from being read is a NoteReadError.
`kind` tells the host which class of problem it was.
"""

import enum
from typing import List


class ErrorKind(enum.Enum):
    BAD_MAGIC = "BadMagic"
    TRUNCATED = "Truncated"
    UNSUPPORTED_TAG = "UnsupportedTag"
    MISSING_ENTRY = "MissingEntry"
    NO_CURVE_DATA = "NoCurveData"


class NoteReadError(Exception):
    """Base class of all errors raised while reading a .note file."""

    kind: ErrorKind


class PlistFormatError(NoteReadError):
    """The binary plist is malformed."""


class BadMagicError(PlistFormatError):
    kind = ErrorKind.BAD_MAGIC


class TruncatedError(PlistFormatError):
    kind = ErrorKind.TRUNCATED


class UnsupportedTagError(PlistFormatError):
    kind = ErrorKind.UNSUPPORTED_TAG


class MissingEntryError(NoteReadError, FileNotFoundError):
    """No Session.plist inside the archive."""

    kind = ErrorKind.MISSING_ENTRY

    def __init__(self, entries: List[str]):
        self.entries = entries
        super().__init__(
            f"Session.plist not found in .note file. Available files: {', '.join(entries)}"
        )


class NoCurveDataError(NoteReadError):
    kind = ErrorKind.NO_CURVE_DATA

    def __init__(self, message: str, detail: str = ""):
        # plist structure sample, only filled in when the locator gave up
        self.detail = detail
        super().__init__(message)
