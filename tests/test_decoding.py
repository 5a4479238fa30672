import json
import logging

import pytest

from lagrange_secret import DecodingError, load_document, parse_document, reconstruct
from lagrange_secret.decoding import decode_value, loads, parse_base

SAMPLE = {
    "keys": {"n": 4, "k": 3},
    "1": {"base": "10", "value": "4"},
    "2": {"base": "2", "value": "111"},
    "3": {"base": "10", "value": "12"},
    "6": {"base": "4", "value": "213"},
}


@pytest.mark.parametrize(
    "value, base, expected",
    [
        ("111", 2, 7),
        ("111", "2", 7),
        ("ff", 16, 255),
        ("FF", "16", 255),
        ("z", 36, 35),
        (" 42 ", 10, 42),
        ("213", 4, 39),
    ],
)
def test_decode_value(value, base, expected):
    assert decode_value(value, base) == expected


@pytest.mark.parametrize("value", ["12", "", "   ", "-1", "+1", "0b1", "1_0", "1 0", "\u212a", "\u0661"])
def test_decode_value_rejects_invalid_digits(value):
    with pytest.raises(DecodingError):
        decode_value(value, 2)


def test_decode_value_rejects_prefix():
    with pytest.raises(DecodingError):
        decode_value("0x1f", 16)


def test_decode_value_requires_string():
    with pytest.raises(DecodingError):
        decode_value(111, 2)


@pytest.mark.parametrize("base", [0, 1, 37, "ten", "", True, 2.0])
def test_parse_base_rejects(base):
    with pytest.raises(DecodingError) as excinfo:
        parse_base(base)
    assert excinfo.value.field == "base"


def test_parse_document_sample():
    document = parse_document(SAMPLE)
    assert document.threshold == 3
    assert document.declared_count == 4
    assert document.points == ((1, 4), (2, 7), (3, 12), (6, 39))
    share = document.shares[1]
    assert (share.x, share.base, share.encoded, share.y) == (2, 2, "111", 7)

    secret = reconstruct(document.points, document.threshold)
    assert secret.integer == 3


def test_parse_document_keeps_document_order():
    document = parse_document(
        {
            "k": 2,
            "3": {"base": "10", "value": "9"},
            "1": {"base": "10", "value": "5"},
            "note": "ignored",
        }
    )
    assert [p.x for p in document.points] == [3, 1]
    assert document.declared_count is None
    assert reconstruct(document.points, document.threshold).integer == 3


def test_parse_document_threshold_as_string():
    document = parse_document({"keys": {"k": "1"}, "5": {"base": 10, "value": "8"}})
    assert document.threshold == 1


@pytest.mark.parametrize(
    "document, field",
    [
        ({"1": {"base": "10", "value": "4"}}, "keys.k"),
        ({"keys": {"k": "three"}}, "keys.k"),
        ({"keys": {"k": 2, "n": -1}}, "keys.n"),
        ({"keys": {"k": 1}, "1": "4"}, "1"),
        ({"keys": {"k": 1}, "1": {"value": "4"}}, "1.base"),
        ({"keys": {"k": 1}, "1": {"base": "10"}}, "1.value"),
        ({"keys": {"k": 1}, "1": {"base": "40", "value": "4"}}, "1.base"),
        ({"keys": {"k": 1}, "1": {"base": "8", "value": "9"}}, "1.value"),
        ({"keys": [3]}, "keys"),
    ],
)
def test_parse_document_errors(document, field):
    with pytest.raises(DecodingError) as excinfo:
        parse_document(document)
    assert excinfo.value.field == field


def test_parse_document_requires_object():
    with pytest.raises(DecodingError):
        parse_document([1, 2, 3])


def test_declared_count_mismatch_is_logged(caplog):
    document = dict(SAMPLE)
    document["keys"] = {"n": 6, "k": 3}
    with caplog.at_level(logging.WARNING, logger="lagrange_secret.decoding"):
        parsed = parse_document(document)
    assert len(parsed.shares) == 4
    assert "n=6" in caplog.text


def test_load_json_document(tmp_path):
    path = tmp_path / "input.json"
    path.write_text(json.dumps(SAMPLE), encoding="utf-8")
    document = load_document(path)
    assert document.points[3] == (6, 39)


def test_load_yaml_document(tmp_path):
    path = tmp_path / "shares.yaml"
    path.write_text(
        "keys:\n"
        "  n: 2\n"
        "  k: 2\n"
        "1:\n"
        "  base: 10\n"
        "  value: '5'\n"
        "'2':\n"
        "  base: '2'\n"
        "  value: '101'\n",
        encoding="utf-8",
    )
    document = load_document(path)
    assert document.points == ((1, 5), (2, 5))
    assert reconstruct(document.points, document.threshold).integer == 5


def test_load_missing_file(tmp_path):
    with pytest.raises(DecodingError):
        load_document(tmp_path / "missing.json")


def test_load_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text('{"keys": {"k": 2},}', encoding="utf-8")
    with pytest.raises(DecodingError):
        load_document(path)


def test_loads_invalid_yaml():
    with pytest.raises(DecodingError):
        loads("keys: [unclosed", fmt="yaml")


def test_decode_value_rejects_non_ascii_digits():
    # KELVIN SIGN lowercases to an ASCII "k"
    with pytest.raises(DecodingError) as excinfo:
        decode_value("\u212a", 36)
    assert excinfo.value.field == "value"


def test_decode_value_asks_for_quoted_yaml_values():
    with pytest.raises(DecodingError) as excinfo:
        loads("k: 1\n1: {base: '2', value: 111}\n", fmt="yaml")
    assert excinfo.value.field == "1.value"
    assert "quote" in str(excinfo.value)


def test_json_duplicate_share_key_is_rejected():
    text = (
        '{"keys": {"k": 2},'
        ' "1": {"base": "10", "value": "4"},'
        ' "1": {"base": "10", "value": "9"},'
        ' "2": {"base": "10", "value": "5"}}'
    )
    with pytest.raises(DecodingError) as excinfo:
        loads(text)
    assert excinfo.value.field == "1"


def test_json_duplicate_nested_key_is_rejected():
    with pytest.raises(DecodingError) as excinfo:
        loads('{"keys": {"k": 1, "k": 2}, "1": {"base": "10", "value": "4"}}')
    assert excinfo.value.field == "k"


def test_yaml_duplicate_share_key_is_rejected(tmp_path):
    path = tmp_path / "shares.yml"
    path.write_text(
        "keys: {k: 2}\n"
        "'1': {base: '10', value: '4'}\n"
        "'1': {base: '10', value: '9'}\n"
        "'2': {base: '10', value: '5'}\n",
        encoding="utf-8",
    )
    with pytest.raises(DecodingError) as excinfo:
        load_document(path)
    assert excinfo.value.field == "1"
