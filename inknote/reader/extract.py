"""
inknote extractors

reads Session.plist from Notability .note files.
"""

import logging
import zipfile
from typing import Tuple

from inknote.const import SESSION_PLIST
from inknote.errors import MissingEntryError

logger = logging.getLogger(__name__)


def find_session_entry(archive: zipfile.ZipFile) -> str:
    """
    Return the name of the first entry that is Session.plist, handling nested folders.

    Notability puts it inside a folder named after the note, and the casing varies.
    """
    names = archive.namelist()
    for name in names:
        lower_name = name.lower()
        if lower_name == SESSION_PLIST or lower_name.endswith("/" + SESSION_PLIST):
            return name

    logger.error(f"'{SESSION_PLIST}' not found in the zip archive: {names}")
    raise MissingEntryError(names)


def read_session_plist(archive: zipfile.ZipFile) -> Tuple[str, bytes]:
    """Returns (entry name, raw bytes) of Session.plist."""
    name = find_session_entry(archive)
    with archive.open(name) as f:
        return name, f.read()
