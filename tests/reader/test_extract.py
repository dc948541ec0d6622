import io
import zipfile

import pytest

from inknote.errors import ErrorKind, MissingEntryError
from inknote.reader.extract import find_session_entry, read_session_plist


def zip_with(*names):
    zip_buffer = io.BytesIO()
    with zipfile.ZipFile(zip_buffer, "w") as zip_file:
        for name in names:
            zip_file.writestr(name, name.encode())
    zip_buffer.seek(0)
    return zip_buffer


def test_session_at_top_level():
    with zipfile.ZipFile(zip_with("Session.plist"), "r") as archive:
        assert read_session_plist(archive) == ("Session.plist", b"Session.plist")


def test_session_in_nested_folder():
    """Notability stores it inside a folder named after the note."""
    buffer = zip_with("Lecture 1/metadata.plist", "Lecture 1/Session.plist")
    with zipfile.ZipFile(buffer, "r") as archive:
        assert find_session_entry(archive) == "Lecture 1/Session.plist"


def test_session_name_is_case_insensitive():
    with zipfile.ZipFile(zip_with("note/SESSION.PLIST"), "r") as archive:
        assert find_session_entry(archive) == "note/SESSION.PLIST"


def test_first_match_wins():
    buffer = zip_with("a/Session.plist", "b/session.plist")
    with zipfile.ZipFile(buffer, "r") as archive:
        assert find_session_entry(archive) == "a/Session.plist"


def test_missing_session_lists_entries():
    buffer = zip_with("note/metadata.plist", "note/OldSession.plist.bak")
    with zipfile.ZipFile(buffer, "r") as archive:
        with pytest.raises(MissingEntryError) as e:
            find_session_entry(archive)

    assert e.value.kind == ErrorKind.MISSING_ENTRY
    assert e.value.entries == ["note/metadata.plist", "note/OldSession.plist.bak"]
    assert "note/metadata.plist" in str(e.value)
    assert isinstance(e.value, FileNotFoundError)
