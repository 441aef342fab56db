"""Column-based data containers and their wire representation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from milvus_entity.schema import FieldType

_NOT_CONVERTIBLE = "conversion between fixed-type column not support"


class ScalarKind(Enum):
    """Kind of array held by a scalar field on the wire."""

    BOOL = "Bool"
    INT = "Int"
    LONG = "Long"
    FLOAT = "Float"
    DOUBLE = "Double"
    STRING = "String"
    JSON = "JSON"


@dataclass
class ScalarField:
    """Wire form of scalar column data."""

    kind: ScalarKind
    data: list = field(default_factory=list)


@dataclass
class VectorField:
    """Wire form of vector column data, flattened."""

    dim: int = 0
    float_vector: list[float] | None = None
    binary_vector: bytes | None = None


@dataclass
class FieldData:
    """Wire form of one column."""

    type: FieldType = FieldType.NONE
    field_name: str = ""
    scalars: ScalarField | None = None
    vectors: VectorField | None = None
    is_dynamic: bool = False


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class Column(ABC):
    """A named, typed column of values."""

    _field_type: ClassVar[FieldType] = FieldType.NONE
    _scalar_kind: ClassVar[ScalarKind | None] = None

    def __init__(self, name: str, values) -> None:
        self._name = name
        self._values = values if isinstance(values, list) else list(values or ())

    def __len__(self) -> int:
        return len(self._values)

    def name(self) -> str:
        """Return the column name."""
        return self._name

    def field_type(self) -> FieldType:
        """Return the field type of the column."""
        return self._field_type

    def data(self) -> list:
        """Return the list holding the column values."""
        return self._values

    def value_by_idx(self, idx: int):
        """Return the value at ``idx``; raise IndexError when out of range."""
        if not 0 <= idx < len(self._values):
            raise IndexError(f"index {idx} out of range")
        return self._values[idx]

    def get(self, idx: int):
        """Return the value at ``idx``."""
        return self.value_by_idx(idx)

    def append_value(self, value) -> None:
        """Append a value; raise TypeError when it has the wrong type."""
        self._values.append(self._coerce(value))

    @abstractmethod
    def _coerce(self, value):
        """Check a value for this column and return its stored form."""

    def field_data(self) -> FieldData:
        """Return the wire form of the column."""
        return FieldData(
            type=self._field_type,
            field_name=self._name,
            scalars=ScalarField(self._scalar_kind, list(self._values)),
        )

    def get_as_int64(self, idx: int) -> int:
        raise TypeError(_NOT_CONVERTIBLE)

    def get_as_string(self, idx: int) -> str:
        raise TypeError(_NOT_CONVERTIBLE)

    def get_as_double(self, idx: int) -> float:
        raise TypeError(_NOT_CONVERTIBLE)

    def get_as_bool(self, idx: int) -> bool:
        raise TypeError(_NOT_CONVERTIBLE)


class ColumnBool(Column):
    """Column of booleans."""

    _field_type = FieldType.BOOL
    _scalar_kind = ScalarKind.BOOL

    def _coerce(self, value):
        if not isinstance(value, bool):
            raise TypeError(f"invalid type, expected bool, got {type(value).__name__}")
        return value

    def get_as_bool(self, idx: int) -> bool:
        return self.value_by_idx(idx)


class _IntegerColumn(Column):
    _bits: ClassVar[int] = 64
    _scalar_kind = ScalarKind.INT

    def _coerce(self, value):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(
                f"invalid type, expected {self._field_type}, got {type(value).__name__}"
            )
        limit = 1 << (self._bits - 1)
        if not -limit <= value < limit:
            raise ValueError(f"value {value} out of range for {self._field_type}")
        return value

    def get_as_int64(self, idx: int) -> int:
        return int(self.value_by_idx(idx))


class ColumnInt8(_IntegerColumn):
    """Column of 8-bit integers."""

    _field_type = FieldType.INT8
    _bits = 8


class ColumnInt16(_IntegerColumn):
    """Column of 16-bit integers."""

    _field_type = FieldType.INT16
    _bits = 16


class ColumnInt32(_IntegerColumn):
    """Column of 32-bit integers."""

    _field_type = FieldType.INT32
    _bits = 32


class ColumnInt64(_IntegerColumn):
    """Column of 64-bit integers."""

    _field_type = FieldType.INT64
    _scalar_kind = ScalarKind.LONG
    _bits = 64


class _FloatingColumn(Column):
    def _coerce(self, value):
        if not _is_number(value):
            raise TypeError(
                f"invalid type, expected {self._field_type}, got {type(value).__name__}"
            )
        return float(value)

    def get_as_double(self, idx: int) -> float:
        return float(self.value_by_idx(idx))


class ColumnFloat(_FloatingColumn):
    """Column of single-precision floats."""

    _field_type = FieldType.FLOAT
    _scalar_kind = ScalarKind.FLOAT


class ColumnDouble(_FloatingColumn):
    """Column of double-precision floats."""

    _field_type = FieldType.DOUBLE
    _scalar_kind = ScalarKind.DOUBLE


class _TextColumn(Column):
    _scalar_kind = ScalarKind.STRING

    def _coerce(self, value):
        if not isinstance(value, str):
            raise TypeError(f"invalid type, expected string, got {type(value).__name__}")
        return value

    def get_as_string(self, idx: int) -> str:
        return self.value_by_idx(idx)


class ColumnString(_TextColumn):
    """Column of strings."""

    _field_type = FieldType.STRING


class ColumnVarChar(_TextColumn):
    """Column of variable-length strings."""

    _field_type = FieldType.VARCHAR


class ColumnJSONBytes(Column):
    """Column of marshalled JSON documents."""

    _field_type = FieldType.JSON
    _scalar_kind = ScalarKind.JSON

    def __init__(self, name: str, values) -> None:
        super().__init__(name, values)
        self._is_dynamic = False

    def _coerce(self, value):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"invalid type, expected bytes, got {type(value).__name__}")
        return bytes(value)

    def with_is_dynamic(self, is_dynamic: bool) -> ColumnJSONBytes:
        """Mark the column as the dynamic field column and return it."""
        self._is_dynamic = is_dynamic
        return self

    def is_dynamic(self) -> bool:
        """Return whether the column holds the dynamic field."""
        return self._is_dynamic

    def get_as_string(self, idx: int) -> str:
        return bytes(self.value_by_idx(idx)).decode("utf-8")

    def field_data(self) -> FieldData:
        fd = super().field_data()
        fd.is_dynamic = self._is_dynamic
        return fd


class VectorColumn(Column):
    """Column of fixed-dimension vectors."""

    def __init__(self, name: str, dim: int, values) -> None:
        super().__init__(name, values)
        self._dim = dim

    def dim(self) -> int:
        """Return the vector dimension."""
        return self._dim


class ColumnBinaryVector(VectorColumn):
    """Column of binary vectors; the dimension counts bits."""

    _field_type = FieldType.BINARY_VECTOR

    def _coerce(self, value):
        if not isinstance(value, (bytes, bytearray)):
            raise TypeError(f"invalid type, expected []byte, got {type(value).__name__}")
        return bytes(value)

    def field_data(self) -> FieldData:
        return FieldData(
            type=self._field_type,
            field_name=self._name,
            vectors=VectorField(dim=self._dim, binary_vector=b"".join(self._values)),
        )


class ColumnFloatVector(VectorColumn):
    """Column of float vectors."""

    _field_type = FieldType.FLOAT_VECTOR

    def _coerce(self, value):
        if isinstance(value, (str, bytes, bytearray)):
            raise TypeError(f"invalid type, expected []float32, got {type(value).__name__}")
        try:
            items = list(value)
        except TypeError:
            raise TypeError(
                f"invalid type, expected []float32, got {type(value).__name__}"
            ) from None
        if not all(_is_number(item) for item in items):
            raise TypeError("invalid type, expected []float32 with numeric elements")
        return [float(item) for item in items]

    def field_data(self) -> FieldData:
        flat = [x for vector in self._values for x in vector]
        return FieldData(
            type=self._field_type,
            field_name=self._name,
            vectors=VectorField(dim=self._dim, float_vector=flat),
        )