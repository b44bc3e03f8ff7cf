import json

import pytest

from okxkit.fields import (
    StringEnum,
    drop_none,
    dump_str,
    dump_str_opt,
    parse_float,
    parse_opt_str,
)


class Bar(StringEnum):
    BAZ = "baz"


def _compact(obj):
    return json.dumps(obj, separators=(",", ":"))


def _bar(text, convert):
    return parse_opt_str(json.loads(text).get("bar"), convert)


def test_deser_empty_str():
    assert _bar('{"bar": ""}', str) is None
    assert _bar("{}", str) is None


def test_deser_empty_decimal():
    assert _bar('{"bar": ""}', float) is None
    assert _bar("{}", float) is None
    assert _bar('{"bar": "100"}', float) == 100.0
    assert _bar('{"bar": null}', float) is None


def test_deser_maybe_float():
    assert _bar('{"bar": "1.23"}', float) == 1.23
    assert _bar('{"bar": ""}', float) is None
    assert _bar('{"bar": null}', float) is None
    assert _bar("{ }", float) is None


def test_ser_maybe_float():
    assert _compact({"bar": dump_str_opt(1.23)}) == '{"bar":"1.23"}'
    assert _compact({"bar": dump_str_opt(None)}) == '{"bar":null}'


def test_deser_maybe_u64():
    assert _bar('{"bar": "123"}', int) == 123
    assert _bar('{"bar": ""}', int) is None
    assert _bar('{"bar": null}', int) is None
    assert _bar("{ }", int) is None


def test_deser_maybe_enum():
    def read(text):
        value = json.loads(text).get("bar")
        return None if value is None else Bar.parse_lenient(value)

    baz = read('{"bar": "baz"}')
    assert baz is Bar.BAZ
    assert dump_str(baz) == "baz"
    other = read('{"bar": ""}')
    assert other == "" and not isinstance(other, Bar)
    assert dump_str(other) == ""
    assert read('{"bar": null}') is None
    assert read("{ }") is None


def test_ser_fields_as_str():
    assert _compact(drop_none({"bar": dump_str_opt(1.23)})) == '{"bar":"1.23"}'
    assert _compact(drop_none({"bar": dump_str_opt(None)})) == "{}"


def test_deser_fields_from_str():
    assert _bar('{"bar": "1.23"}', float) == 1.23
    assert _bar('{"bar": ""}', float) is None
    assert _bar('{"bar": null}', float) is None
    assert _bar("{ }", float) is None


@pytest.mark.parametrize("value", [1.5, 7, True, False])
def test_non_string_values_are_absent(value):
    assert parse_opt_str(value, float) is None


def test_parse_opt_str_bad_text_raises():
    with pytest.raises(ValueError):
        parse_opt_str("abc", float)


def test_parse_opt_str_rejects_containers():
    with pytest.raises(TypeError):
        parse_opt_str(["1"], float)


def test_parse_opt_str_with_enum():
    assert parse_opt_str("baz", Bar.parse) is Bar.BAZ
    with pytest.raises(ValueError):
        parse_opt_str("qux", Bar.parse)


def test_parse_float():
    assert parse_float("1.23") == 1.23
    assert parse_float(100) == 100.0
    assert parse_float(2.5) == 2.5


def test_parse_float_null():
    with pytest.raises(ValueError, match="null is not a valid number"):
        parse_float(None)


def test_parse_float_bad_string():
    with pytest.raises(ValueError):
        parse_float("abc")


def test_enum_strict_parse():
    parsed = Bar.parse("baz")
    assert parsed is Bar.BAZ
    assert dump_str(parsed) == "baz"
    with pytest.raises(ValueError, match="unknown variant qux"):
        Bar.parse("qux")


def test_enum_round_trip():
    for member in Bar:
        assert Bar.parse(dump_str(member)) is member
    assert str(Bar.BAZ) == "baz"


def test_dump_str_values():
    assert dump_str(1.23) == "1.23"
    assert dump_str(100.0) == "100"
    assert dump_str(True) == "true"
    assert dump_str(123) == "123"
    assert dump_str("abc") == "abc"


def test_dump_str_float_round_trip():
    for value in (0.1, 1.23, 123456.789, 1e-7, 5e20):
        assert float(dump_str(value)) == value
        assert "e" not in dump_str(value)


def test_drop_none_keeps_falsy_values():
    assert drop_none({"a": None, "b": 0, "c": "", "d": False}) == {"b": 0, "c": "", "d": False}