"""
inknote locator

finds the dictionary holding the curve arrays inside a decoded Session.plist.
"""

import base64
import binascii
import json
import logging
from typing import Any, Dict, List, Optional, Set, Tuple

from inknote.const import MAX_SEARCH_DEPTH, NOTE_FIELDS, NoteField

logger = logging.getLogger(__name__)


def has_curve_points(obj: Dict) -> bool:
    return any(key in obj for key in NOTE_FIELDS["points"].keys)


def find_curve_record(tree: Any, max_depth: int = MAX_SEARCH_DEPTH) -> Optional[Dict]:
    """
    Depth-first search for the first dict containing a points key.

    Containers are visited once (by identity) and never below `max_depth`.
    """
    visited: Set[int] = set()
    stack: List[Tuple[Any, int]] = [(tree, 0)]

    while stack:
        obj, depth = stack.pop()
        if depth > max_depth:
            continue
        if not isinstance(obj, (dict, list)):
            continue
        if id(obj) in visited:
            continue
        visited.add(id(obj))

        if isinstance(obj, dict):
            if has_curve_points(obj):
                return obj
            children = list(obj.values())
        else:
            children = obj

        # reversed, so the first child is searched first
        for child in reversed(children):
            if isinstance(child, (dict, list)):
                stack.append((child, depth + 1))

    return None


def get_field(record: Dict, field: NoteField) -> Any:
    """Return the value stored under the first spelling of `field` that exists."""
    for key in field.keys:
        if key in record:
            return record[key]
    return None


def field_bytes(value: Any) -> bytes:
    """
    Unwrap a located field into raw bytes.

    The arrays can come as data, base64 text, or a dict wrapping the data.
    Anything else is treated as empty.
    """
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)

    if isinstance(value, str):
        try:
            return base64.b64decode(value, validate=True)
        except (binascii.Error, ValueError):
            logger.debug("Field is text but not base64, ignored.")
            return b""

    if isinstance(value, dict):
        for key in ("NS.data", "data"):
            if key in value:
                return field_bytes(value[key])

    return b""


def describe_structure(tree: Any, limit: int = 2000) -> str:
    """Short JSON-ish sample of the plist, used when no curve data was found."""

    def _summarize(obj: Any, depth: int) -> Any:
        if depth > 6:
            return "..."
        if isinstance(obj, dict):
            keys = list(obj.keys())
            if len(keys) > 10:
                return f"[Object with {len(keys)} keys: {', '.join(keys[:5])}...]"
            return {k: _summarize(v, depth + 1) for k, v in obj.items()}
        if isinstance(obj, list):
            return [_summarize(v, depth + 1) for v in obj[:20]]
        if isinstance(obj, (bytes, bytearray)):
            return f"<{len(obj)} bytes>"
        if obj is None or isinstance(obj, (bool, int, float, str)):
            return obj
        return str(obj)

    return json.dumps(_summarize(tree, 0), indent=2)[:limit]
