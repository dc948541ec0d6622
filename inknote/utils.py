# This file contains codes from:
# https://github.com/avibrazil/NSKeyedUnArchiver (LGPL3)
# https://gitlab.com/inkscape/extras/extension-afdesign (GPL2+)

import datetime
import logging
import plistlib
from typing import Any, Dict, List, Set

from lxml import etree

from inknote.const import MAX_NESTING

logger = logging.getLogger(__name__)

APPLE_EPOCH = datetime.datetime(2001, 1, 1)

ARRAY_CLASSES = ("NSArray", "NSMutableArray", "NSSet", "NSMutableSet", "NSOrderedSet")
DICT_CLASSES = ("NSDictionary", "NSMutableDictionary")
STRING_CLASSES = ("NSString", "NSMutableString")
DATA_CLASSES = ("NSData", "NSMutableData")


# from extension-afdesign
def to_pretty_xml(xml_string: bytes) -> bytes:
    """Return a pretty xml string with newlines and indentation."""
    parser = etree.XMLParser(remove_blank_text=True)
    root = etree.fromstring(xml_string, parser)
    return etree.tostring(root.getroottree(), pretty_print=True)


def is_keyed_archive(plist: Any) -> bool:
    """True for NSKeyedArchiver output ($top / $objects)."""
    return (
        isinstance(plist, dict)
        and isinstance(plist.get("$objects"), list)
        and "$top" in plist
    )


# from NSKeyedUnarchiver
class KeyedUnarchiver:
    """
    Replaces UIDs with the `$objects` entries they point to.

    Entries are resolved once and shared afterwards.
    A UID pointing at an entry that is still being resolved becomes None,
    so the result never contains a cycle.
    """

    def __init__(self, objects: List[Any]) -> None:
        self.objects = objects
        self._resolved: Dict[int, Any] = {}
        self._in_progress: Set[int] = set()

    def resolve_uid(self, uid: plistlib.UID) -> Any:
        index = uid.data
        if index >= len(self.objects):
            logger.debug(
                f"UID {index} is out of range ({len(self.objects)} archived objects), replaced by None."
            )
            return None
        if index in self._resolved:
            return self._resolved[index]
        if index in self._in_progress:
            logger.debug(f"Archived object {index} refers back to itself, replaced by None.")
            return None
        if len(self._in_progress) > MAX_NESTING:
            # not memoised, a shallower path may still resolve it
            logger.debug(f"Archived object {index} nested deeper than {MAX_NESTING} levels, replaced by None.")
            return None

        target = self.objects[index]
        # $null gets replaced by None
        if target == "$null":
            result = None
        else:
            self._in_progress.add(index)
            try:
                result = self.resolve(target)
            finally:
                self._in_progress.discard(index)

        self._resolved[index] = result
        return result

    def resolve(self, value: Any) -> Any:
        if isinstance(value, plistlib.UID):
            return self.resolve_uid(value)
        if isinstance(value, list):
            return [self.resolve(v) for v in value]
        if isinstance(value, dict):
            return _collapse_class(
                {k: self.resolve(v) for k, v in value.items()}
            )
        return value


def _collapse_class(obj: Dict[str, Any]) -> Any:
    """Turn archived Foundation containers back into plain values."""
    class_info = obj.get("$class")
    if not isinstance(class_info, dict):
        return obj

    classes = class_info.get("$classes") or []

    # Specialized handler for common class types
    if any(c in classes for c in ARRAY_CLASSES) and "NS.objects" in obj:
        return obj["NS.objects"]

    if any(c in classes for c in DICT_CLASSES) and "NS.keys" in obj:
        keys = [k if isinstance(k, str) else str(k) for k in obj["NS.keys"] or []]
        return dict(zip(keys, obj.get("NS.objects") or []))

    if any(c in classes for c in STRING_CLASSES) and "NS.string" in obj:
        return obj["NS.string"]

    if any(c in classes for c in DATA_CLASSES) and "NS.data" in obj:
        return obj["NS.data"]

    if "NSDate" in classes and isinstance(obj.get("NS.time"), (int, float)):
        try:
            return APPLE_EPOCH + datetime.timedelta(seconds=obj["NS.time"])
        except (OverflowError, ValueError):
            return None

    # Remove visual polution
    return {k: v for k, v in obj.items() if k != "$class"}


def _uids_to_ints(value: Any, seen: Set[int]) -> Any:
    """Outside keyed archives a UID is just a number."""
    if isinstance(value, plistlib.UID):
        return value.data
    if id(value) in seen:
        return value

    if isinstance(value, list):
        seen.add(id(value))
        for i, v in enumerate(value):
            value[i] = _uids_to_ints(v, seen)
    elif isinstance(value, dict):
        seen.add(id(value))
        for k, v in value.items():
            value[k] = _uids_to_ints(v, seen)
    return value


def unarchive(plist: Any) -> Any:
    """
    Resolve every UID in a decoded plist.

    plist can be:
    • a keyed archive  ⟹ UIDs replaced by the objects they reference
    • anything else    ⟹ UIDs replaced by their integer value
    """
    if not is_keyed_archive(plist):
        return _uids_to_ints(plist, set())

    objects = plist["$objects"]
    unarchiver = KeyedUnarchiver(objects)
    # $top first, so the tree below the root is the complete one
    top = unarchiver.resolve(plist["$top"])
    resolved_objects = [
        unarchiver.resolve_uid(plistlib.UID(i)) for i in range(len(objects))
    ]

    result = {}
    for key, value in plist.items():
        if key == "$objects":
            result[key] = resolved_objects
        elif key == "$top":
            result[key] = top
        else:
            result[key] = value
    return result
