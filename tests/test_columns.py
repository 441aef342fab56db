import pytest

from milvus_entity.columns import (
    ColumnBinaryVector,
    ColumnBool,
    ColumnDouble,
    ColumnFloat,
    ColumnFloatVector,
    ColumnInt8,
    ColumnInt16,
    ColumnInt32,
    ColumnInt64,
    ColumnJSONBytes,
    ColumnString,
    ColumnVarChar,
    ScalarKind,
)
from milvus_entity.schema import FieldType

COLUMN_LEN = 12

SCALAR_CASES = [
    (ColumnBool, FieldType.BOOL, "Bool", "bool", ("Bool", "bool"), False, ScalarKind.BOOL),
    (ColumnInt8, FieldType.INT8, "Int8", "int8", ("Int", "int32"), 0, ScalarKind.INT),
    (ColumnInt16, FieldType.INT16, "Int16", "int16", ("Int", "int32"), 0, ScalarKind.INT),
    (ColumnInt32, FieldType.INT32, "Int32", "int32", ("Int", "int32"), 0, ScalarKind.INT),
    (ColumnInt64, FieldType.INT64, "Int64", "int64", ("Long", "int64"), 0, ScalarKind.LONG),
    (ColumnFloat, FieldType.FLOAT, "Float", "float32", ("Float", "float32"), 0.0, ScalarKind.FLOAT),
    (ColumnDouble, FieldType.DOUBLE, "Double", "float64", ("Double", "float64"), 0.0, ScalarKind.DOUBLE),
    (ColumnString, FieldType.STRING, "String", "string", ("String", "string"), "", ScalarKind.STRING),
    (ColumnVarChar, FieldType.VARCHAR, "VarChar", "string", ("VarChar", "string"), "", ScalarKind.STRING),
]


@pytest.mark.parametrize("cls, ft, name, typedef, pb, zero, kind", SCALAR_CASES)
def test_scalar_meta(cls, ft, name, typedef, pb, zero, kind):
    field_type = FieldType(ft)
    assert field_type.type_name() == name
    assert str(field_type) == typedef
    assert field_type.pb_field_type() == pb


@pytest.mark.parametrize("cls, ft, name, typedef, pb, zero, kind", SCALAR_CASES)
def test_scalar_attributes(cls, ft, name, typedef, pb, zero, kind):
    values = [zero] * COLUMN_LEN
    column = cls(f"column_{name}", values)
    assert column.name() == f"column_{name}"
    assert column.field_type() == FieldType(ft)
    assert len(column) == COLUMN_LEN
    assert column.data() == values


@pytest.mark.parametrize("cls, ft, name, typedef, pb, zero, kind", SCALAR_CASES)
def test_scalar_field_data(cls, ft, name, typedef, pb, zero, kind):
    values = [zero] * COLUMN_LEN
    column = cls(f"column_{name}", values)
    fd = column.field_data()
    assert fd.field_name == f"column_{name}"
    assert fd.type == FieldType(ft)
    assert fd.scalars.kind == ScalarKind(kind)
    assert fd.scalars.data == values


@pytest.mark.parametrize("cls, ft, name, typedef, pb, zero, kind", SCALAR_CASES)
def test_scalar_value_by_idx(cls, ft, name, typedef, pb, zero, kind):
    column = cls("c", [zero] * COLUMN_LEN)
    assert column.field_type() == FieldType(ft)
    with pytest.raises(IndexError):
        column.value_by_idx(-1)
    with pytest.raises(IndexError):
        column.value_by_idx(COLUMN_LEN)
    with pytest.raises(IndexError):
        column.get(COLUMN_LEN)
    for i in range(COLUMN_LEN):
        assert column.value_by_idx(i) == column.data()[i]
        assert column.get(i) == zero


@pytest.mark.parametrize("cls, ft, name, typedef, pb, zero, kind", SCALAR_CASES)
def test_scalar_append(cls, ft, name, typedef, pb, zero, kind):
    column = cls("c", [zero] * COLUMN_LEN)
    assert column.field_type() == FieldType(ft)
    column.append_value(zero)
    assert len(column) == COLUMN_LEN + 1
    assert column.value_by_idx(COLUMN_LEN) == zero
    with pytest.raises(TypeError):
        column.append_value(object())
    assert len(column) == COLUMN_LEN + 1


@pytest.mark.parametrize("cls", [ColumnInt8, ColumnInt16, ColumnInt32, ColumnInt64])
def test_integer_conversion(cls):
    column = cls("c", [1, -2, 3])
    assert column.get_as_int64(1) == -2
    with pytest.raises(IndexError):
        column.get_as_int64(3)


def test_integer_range_and_bool_rejected():
    column = ColumnInt8("c", [])
    with pytest.raises(ValueError):
        column.append_value(128)
    with pytest.raises(TypeError):
        column.append_value(True)
    column.append_value(-128)
    assert column.data() == [-128]


def test_other_conversions():
    assert ColumnFloat("f", [1.5]).get_as_double(0) == 1.5
    assert ColumnDouble("d", [2.25]).get_as_double(0) == 2.25
    assert ColumnBool("b", [True]).get_as_bool(0) is True
    assert ColumnString("s", ["abc"]).get_as_string(0) == "abc"
    assert ColumnVarChar("v", ["xyz"]).get_as_string(0) == "xyz"


@pytest.mark.parametrize(
    "column, method, stored",
    [
        (ColumnBool("b", [True]), "get_as_int64", True),
        (ColumnInt64("i", [1]), "get_as_string", 1),
        (ColumnString("s", ["a"]), "get_as_double", "a"),
        (ColumnDouble("d", [1.0]), "get_as_bool", 1.0),
        (ColumnVarChar("v", ["a"]), "get_as_int64", "a"),
    ],
)
def test_fixed_type_conversion_fails(column, method, stored):
    with pytest.raises(TypeError):
        getattr(column, method)(0)
    assert column.value_by_idx(0) == stored
    assert len(column) == 1


def test_json_meta():
    ft = FieldType.JSON
    assert ft.type_name() == "JSON"
    assert str(ft) == "JSON"
    assert ft.pb_field_type() == ("JSON", "JSON")


def test_json_column_attributes_and_field_data():
    values = [b""] * COLUMN_LEN
    column = ColumnJSONBytes("column_jsonbs", values).with_is_dynamic(True)
    assert column.name() == "column_jsonbs"
    assert column.field_type() == FieldType.JSON
    assert len(column) == COLUMN_LEN
    assert column.data() == values
    assert column.is_dynamic() is True
    fd = column.field_data()
    assert fd.field_name == "column_jsonbs"
    assert fd.is_dynamic is True
    assert fd.scalars.kind == ScalarKind.JSON


def test_json_value_by_idx_and_append():
    column = ColumnJSONBytes("j", [b""] * COLUMN_LEN)
    with pytest.raises(IndexError):
        column.value_by_idx(-1)
    with pytest.raises(IndexError):
        column.value_by_idx(COLUMN_LEN)
    for i in range(COLUMN_LEN):
        assert column.value_by_idx(i) == b""
    item = bytes(10)
    column.append_value(item)
    assert len(column) == COLUMN_LEN + 1
    assert column.value_by_idx(COLUMN_LEN) == item
    with pytest.raises(TypeError):
        column.append_value(1)
    assert len(column) == COLUMN_LEN + 1


def test_json_get_as_string():
    column = ColumnJSONBytes("j", [b'{"a": 1}'])
    assert column.get_as_string(0) == '{"a": 1}'
    assert column.is_dynamic() is False


def test_binary_vector_column():
    dim = 128
    values = [bytes(dim // 8) for _ in range(COLUMN_LEN)]
    column = ColumnBinaryVector("column_BinaryVector", dim, values)
    ft = FieldType.BINARY_VECTOR
    assert ft.type_name() == "BinaryVector"
    assert str(ft) == "[]byte"
    assert ft.pb_field_type() == ("[]byte", "")
    assert column.name() == "column_BinaryVector"
    assert column.field_type() == ft
    assert len(column) == COLUMN_LEN
    assert column.dim() == dim
    assert column.data() == values

    fd = column.field_data()
    assert fd.field_name == "column_BinaryVector"
    assert fd.vectors.dim == dim
    assert len(fd.vectors.binary_vector) == COLUMN_LEN * dim // 8

    column.append_value(b"")
    assert len(column) == COLUMN_LEN + 1
    with pytest.raises(TypeError):
        column.append_value(object())
    assert len(column) == COLUMN_LEN + 1


def test_float_vector_column():
    dim = 64
    values = [[0.0] * dim for _ in range(COLUMN_LEN)]
    column = ColumnFloatVector("column_FloatVector", dim, values)
    ft = FieldType.FLOAT_VECTOR
    assert ft.type_name() == "FloatVector"
    assert str(ft) == "[]float32"
    assert ft.pb_field_type() == ("[]float32", "")
    assert column.name() == "column_FloatVector"
    assert column.field_type() == ft
    assert len(column) == COLUMN_LEN
    assert column.dim() == dim
    assert column.data() == values

    fd = column.field_data()
    assert fd.field_name == "column_FloatVector"
    assert fd.vectors.dim == dim
    assert len(fd.vectors.float_vector) == COLUMN_LEN * dim

    column.append_value([])
    assert len(column) == COLUMN_LEN + 1
    with pytest.raises(TypeError):
        column.append_value(object())
    assert len(column) == COLUMN_LEN + 1


def test_vector_get_out_of_range():
    column = ColumnFloatVector("v", 2, [[1.0, 2.0]])
    assert column.get(0) == [1.0, 2.0]
    with pytest.raises(IndexError):
        column.get(1)