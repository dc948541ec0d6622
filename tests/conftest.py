import io
import plistlib
import struct
import zipfile

import pytest


def pack(fmt, values):
    return struct.pack(f"<{len(values)}{fmt}", *values)


def keyed_archive(record: dict) -> bytes:
    """NSKeyedArchiver-like Session.plist with `record` as the curve dict."""
    objects = ["$null"]

    def add(obj):
        objects.append(obj)
        return plistlib.UID(len(objects) - 1)

    curves_class = {"$classname": "NBNoteTakingSessionCurves", "$classes": ["NSObject"]}
    data_class = {"$classname": "NSMutableData", "$classes": ["NSMutableData", "NSData", "NSObject"]}

    curves = {}
    curves_uid = add(curves)
    curves_class_uid = add(curves_class)
    data_class_uid = add(data_class)
    for key, value in record.items():
        if isinstance(value, bytes):
            # wrapped like NSMutableData, every other field plain
            if key.lower().endswith("colors"):
                value = add({"NS.data": value, "$class": data_class_uid})
            else:
                value = add(value)
        curves[key] = value
    curves["$class"] = curves_class_uid

    session = {"curves": curves_uid, "$class": add({"$classname": "Session", "$classes": ["NSObject"]})}
    session_uid = add(session)
    # back reference to the session from the curve record
    curves["session"] = session_uid

    archive = {
        "$archiver": "NSKeyedArchiver",
        "$version": 100000,
        "$top": {"root": session_uid},
        "$objects": objects,
    }
    return plistlib.dumps(archive, fmt=plistlib.FMT_BINARY)


def note_zip(plist_bytes: bytes, entry: str = "My Note/Session.plist") -> io.BytesIO:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zip_file:
        zip_file.writestr(entry, plist_bytes)
        zip_file.writestr("My Note/metadata.plist", b"")
    buffer.seek(0)
    return buffer


@pytest.fixture
def two_point_record():
    """One curve from (10, 10) to (20, 20), width 1, color 0."""
    return {
        "curvespoints": pack("f", [10.0, 10.0, 20.0, 20.0]),
        "curvesnumpoints": pack("i", [2]),
        "curveswidth": pack("f", [1.0]),
        "curvescolors": pack("i", [0]),
    }


@pytest.fixture
def two_point_note(two_point_record):
    return note_zip(keyed_archive(two_point_record))


@pytest.fixture
def packed():
    """pack(fmt, values) -> little-endian bytes."""
    return pack


@pytest.fixture
def make_archive():
    return keyed_archive


@pytest.fixture
def make_note():
    return note_zip
