import base64

from inknote.const import NOTE_FIELDS
from inknote.reader.locate import (
    describe_structure,
    field_bytes,
    find_curve_record,
    get_field,
)


def test_finds_nested_record():
    record = {"curvespoints": b"\x00" * 8}
    tree = {"$top": {"root": {"pages": [{"other": 1}, {"drawing": record}]}}}

    assert find_curve_record(tree) is record


def test_accepts_key_casings():
    for key in ("curvespoints", "curvesPoints", "CurvesPoints"):
        record = {key: b""}
        assert find_curve_record([1, "x", record]) is record


def test_returns_first_match_in_order():
    first = {"curvesPoints": b"1"}
    second = {"curvespoints": b"2"}

    assert find_curve_record({"a": {"b": first}, "c": second}) is first


def test_no_record():
    assert find_curve_record({"curvesnumpoints": b"", "list": [1, 2, {"x": None}]}) is None
    assert find_curve_record("not a container") is None


def test_depth_limit():
    record = {"curvespoints": b""}
    tree = record
    for _ in range(16):
        tree = {"child": tree}
    assert find_curve_record(tree) is None

    tree = record
    for _ in range(15):
        tree = {"child": tree}
    assert find_curve_record(tree) is record


def test_shared_subtree_visited_once():
    shared = {"leaf": [1, 2, 3]}
    record = {"CurvesPoints": b""}
    tree = {"a": shared, "b": shared, "c": [shared, record]}

    assert find_curve_record(tree) is record


def test_get_field_first_spelling_wins():
    record = {"curvesWidth": b"upper", "curveswidth": b"lower"}

    assert get_field(record, NOTE_FIELDS["width"]) == b"lower"
    assert get_field({}, NOTE_FIELDS["colors"]) is None
    assert get_field({"CurvesColors": b"c"}, NOTE_FIELDS["colors"]) == b"c"


def test_field_bytes_unwraps():
    payload = b"\x01\x02\x03\x04"

    assert field_bytes(payload) == payload
    assert field_bytes(bytearray(payload)) == payload
    assert field_bytes(base64.b64encode(payload).decode()) == payload
    assert field_bytes({"NS.data": payload}) == payload
    assert field_bytes({"data": payload}) == payload
    assert field_bytes(None) == b""
    assert field_bytes(42) == b""
    assert field_bytes("not base64!") == b""


def test_describe_structure_summarizes_big_dicts():
    tree = {"$objects": [{f"key{i}": i for i in range(12)}, b"\x00" * 10]}
    sample = describe_structure(tree)

    assert "[Object with 12 keys: key0, key1, key2, key3, key4...]" in sample
    assert "<10 bytes>" in sample
    assert len(describe_structure({"x": "y" * 5000})) == 2000
