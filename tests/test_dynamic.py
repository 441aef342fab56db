import pytest

from milvus_entity.columns import ColumnJSONBytes
from milvus_entity.dynamic import ColumnDynamic


def _dynamic(text):
    return ColumnDynamic(ColumnJSONBytes("", [text.encode()]), "field")


@pytest.mark.parametrize(
    "text, expected",
    [
        ('{"field": 1000000000000000001}', 1000000000000000001),
        ('{"field": 4418489049307132905}', 4418489049307132905),
    ],
)
def test_get_int(text, expected):
    assert _dynamic(text).get_as_int64(0) == expected


def test_get_int_missing():
    with pytest.raises(KeyError):
        _dynamic('{"other_field": 4418489049307132905}').get_as_int64(0)


def test_get_int_wrong_type():
    with pytest.raises(TypeError):
        _dynamic('{"field": "string"}').get_as_int64(0)


@pytest.mark.parametrize(
    "text, expected", [('{"field": "abc"}', "abc"), ('{"field": "test"}', "test")]
)
def test_get_string(text, expected):
    assert _dynamic(text).get_as_string(0) == expected


def test_get_string_errors():
    with pytest.raises(KeyError):
        _dynamic('{"other_field": "string"}').get_as_string(0)
    with pytest.raises(TypeError):
        _dynamic('{"field": 123}').get_as_string(0)


@pytest.mark.parametrize("text, expected", [('{"field": true}', True), ('{"field": false}', False)])
def test_get_bool(text, expected):
    assert _dynamic(text).get_as_bool(0) is expected


def test_get_bool_errors():
    with pytest.raises(KeyError):
        _dynamic('{"other_field": true}').get_as_bool(0)
    with pytest.raises(TypeError):
        _dynamic('{"field": "test"}').get_as_bool(0)


@pytest.mark.parametrize(
    "text, expected", [('{"field": 1}', 1.0), ('{"field": 6231.123}', 6231.123)]
)
def test_get_double(text, expected):
    assert abs(_dynamic(text).get_as_double(0) - expected) < 1e-10


def test_get_double_errors():
    with pytest.raises(KeyError):
        _dynamic('{"other_field": 1.0}').get_as_double(0)
    with pytest.raises(TypeError):
        _dynamic('{"field": "string"}').get_as_double(0)


def test_index_out_of_range():
    column = ColumnDynamic(ColumnJSONBytes("", []), "field")
    assert column.name() == "field"
    with pytest.raises(IndexError):
        column.get_as_int64(0)
    with pytest.raises(IndexError):
        column.get_as_string(0)
    with pytest.raises(IndexError):
        column.get_as_bool(0)
    with pytest.raises(IndexError):
        column.get_as_double(0)


def test_get_returns_json_text():
    column = _dynamic('{"field": [1, 2], "x": 0}')
    assert column.get(0) == "[1, 2]"
    with pytest.raises(KeyError):
        _dynamic('{"x": 0}').get(0)


def test_nested_path():
    column = ColumnDynamic(ColumnJSONBytes("", [b'{"a": {"b": 7}}']), "a.b")
    assert column.get_as_int64(0) == 7


def test_shares_values_and_dynamic_flag():
    base = ColumnJSONBytes("$meta", [b'{"field": 1}']).with_is_dynamic(True)
    column = ColumnDynamic(base, "field")
    assert column.is_dynamic() is True
    assert column.field_data().field_name == "$meta"
    base.append_value(b'{"field": 2}')
    assert column.get_as_int64(1) == 2