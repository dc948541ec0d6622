"""
inknote Reader

Reads Notability .note files and convert them into intermediate data.
"""

import logging
import zipfile

import inknote.reader.extract as ext
from inknote.reader.bplist import decode_bplist
from inknote.reader.decode import NoteDecoder

from ..elements.note import NoteDocument

logger = logging.getLogger(__name__)


class NoteReader:
    """
    inknote NoteReader

    A Notability .note reader to convert the handwriting into dataclasses.
    """

    def __init__(self, stream, is_debug: bool = False):
        self.is_debug: bool = is_debug
        self.archive = zipfile.ZipFile(stream, "r")
        self.entry_name: str
        self.document: NoteDocument

        self.read()

    def read(self):
        if self.is_debug:
            logging.basicConfig(level=logging.INFO)

        self.entry_name, data = ext.read_session_plist(self.archive)
        plist = decode_bplist(data)
        self.document = NoteDecoder(plist).document

        logger.info(
            f"Session: {self.entry_name}, Curves: {len(self.document.curves)}, "
            f"Canvas: {self.document.width}x{self.document.height}, File name: {self.archive.filename}"
        )
