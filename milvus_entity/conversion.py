"""Vectors for search requests and conversion of wire data into columns."""

from __future__ import annotations

import re
import struct
from dataclasses import dataclass

from milvus_entity.columns import (
    Column,
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
    FieldData,
    ScalarKind,
)
from milvus_entity.schema import FieldType

_VECTOR_TYPES = (FieldType.FLOAT_VECTOR, FieldType.BINARY_VECTOR)


class FieldDataTypeError(TypeError):
    """The payload of a FieldData does not match its declared type."""

    def __init__(self, message: str = "FieldData type not matched") -> None:
        super().__init__(message)


class FloatVector(list):
    """A float32 vector used as a search target."""

    def dim(self) -> int:
        """Return the vector dimension."""
        return len(self)

    def field_type(self) -> FieldType:
        """Return the matching field type."""
        return FieldType.FLOAT_VECTOR

    def serialize(self) -> bytes:
        """Return the vector as little-endian float32 bytes."""
        return struct.pack(f"<{len(self)}f", *self)


class BinaryVector(bytes):
    """A binary vector used as a search target; the dimension counts bits."""

    def dim(self) -> int:
        """Return the vector dimension in bits."""
        return 8 * len(self)

    def field_type(self) -> FieldType:
        """Return the matching field type."""
        return FieldType.BINARY_VECTOR

    def serialize(self) -> bytes:
        """Return the raw bytes of the vector."""
        return bytes(self)


@dataclass
class IDs:
    """Primary keys returned by the server: either integers or strings."""

    int_id: list[int] | None = None
    str_id: list[str] | None = None


def _slice(values: list, begin: int, end: int) -> list:
    """Return ``values[begin:end]``, or ``values[begin:]`` when ``end`` is negative."""
    stop = len(values) if end < 0 else end
    if not 0 <= begin <= stop <= len(values):
        raise IndexError(f"slice [{begin}:{end}] out of range for length {len(values)}")
    return values[begin:stop]


def id_columns(ids: IDs | None, begin: int, end: int) -> Column:
    """Convert returned primary keys into a column, sliced by ``begin`` and ``end``."""
    if ids is None:
        raise ValueError("nil Ids from response")
    if ids.int_id is not None:
        return ColumnInt64("", _slice(list(ids.int_id), begin, end))
    if ids.str_id is not None:
        return ColumnVarChar("", _slice(list(ids.str_id), begin, end))
    raise ValueError(f"unsupported id type {ids!r}")


def get_int_data(fd: FieldData) -> list[int]:
    """Return the int32 payload of ``fd``.

    An empty long array is accepted as an empty int array for compatibility
    with servers that report small integers that way.
    """
    scalars = fd.scalars
    if scalars is None:
        raise FieldDataTypeError()
    if scalars.kind is ScalarKind.INT:
        return list(scalars.data)
    if scalars.kind is ScalarKind.LONG and not scalars.data:
        return []
    raise FieldDataTypeError()


def _wrap(value: int, bits: int) -> int:
    half = 1 << (bits - 1)
    return ((value + half) % (1 << bits)) - half


def _scalar_data(fd: FieldData, kind: ScalarKind) -> list:
    scalars = fd.scalars
    if scalars is None or scalars.kind is not kind:
        raise FieldDataTypeError()
    return list(scalars.data)


def _chunks(data, size: int, begin: int, end: int) -> list:
    if size <= 0:
        raise ValueError(f"invalid vector dimension for {size} elements per row")
    stop = len(data) // size if end < 0 else end
    if not 0 <= begin <= stop or stop * size > len(data):
        raise IndexError(f"rows [{begin}:{end}] out of range")
    return [data[i * size:(i + 1) * size] for i in range(begin, stop)]


def field_data_column(fd: FieldData, begin: int, end: int) -> Column:
    """Convert wire field data into a column holding rows ``begin`` to ``end``.

    A negative ``end`` means up to the last row.
    """
    name = fd.field_name
    ft = fd.type
    if ft is FieldType.BOOL:
        return ColumnBool(name, _slice(_scalar_data(fd, ScalarKind.BOOL), begin, end))
    if ft is FieldType.INT8:
        values = [_wrap(v, 8) for v in get_int_data(fd)]
        return ColumnInt8(name, _slice(values, begin, end))
    if ft is FieldType.INT16:
        values = [_wrap(v, 16) for v in get_int_data(fd)]
        return ColumnInt16(name, _slice(values, begin, end))
    if ft is FieldType.INT32:
        return ColumnInt32(name, _slice(get_int_data(fd), begin, end))
    if ft is FieldType.INT64:
        return ColumnInt64(name, _slice(_scalar_data(fd, ScalarKind.LONG), begin, end))
    if ft is FieldType.FLOAT:
        return ColumnFloat(name, _slice(_scalar_data(fd, ScalarKind.FLOAT), begin, end))
    if ft is FieldType.DOUBLE:
        return ColumnDouble(name, _slice(_scalar_data(fd, ScalarKind.DOUBLE), begin, end))
    if ft is FieldType.STRING:
        return ColumnString(name, _slice(_scalar_data(fd, ScalarKind.STRING), begin, end))
    if ft is FieldType.VARCHAR:
        return ColumnVarChar(name, _slice(_scalar_data(fd, ScalarKind.STRING), begin, end))
    if ft is FieldType.JSON:
        values = _slice(_scalar_data(fd, ScalarKind.JSON), begin, end)
        return ColumnJSONBytes(name, values).with_is_dynamic(fd.is_dynamic)
    if ft is FieldType.FLOAT_VECTOR:
        vectors = fd.vectors
        if vectors is None or vectors.float_vector is None:
            raise FieldDataTypeError()
        dim = int(vectors.dim)
        rows = [list(row) for row in _chunks(list(vectors.float_vector), dim, begin, end)]
        return ColumnFloatVector(name, dim, rows)
    if ft is FieldType.BINARY_VECTOR:
        vectors = fd.vectors
        if vectors is None or vectors.binary_vector is None:
            raise FieldDataTypeError()
        dim = int(vectors.dim)
        rows = [bytes(row) for row in _chunks(bytes(vectors.binary_vector), dim // 8, begin, end)]
        return ColumnBinaryVector(name, dim, rows)
    raise ValueError(f"unsupported data type {ft}")


def field_data_vector(fd: FieldData) -> Column:
    """Convert wire vector field data into a vector column with all rows."""
    if fd.type not in _VECTOR_TYPES:
        raise ValueError("unsupported data type")
    return field_data_column(fd, 0, -1)


_INT_RE = re.compile(r"[+-]?[0-9]+")