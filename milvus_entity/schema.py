"""Collection schema model: field types, fields, schemas and their wire messages."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Mapping

TYPE_PARAM_DIM = "dim"
TYPE_PARAM_MAX_LENGTH = "max_length"


class FieldType(IntEnum):
    """Data type of a collection field."""

    NONE = 0
    BOOL = 1
    INT8 = 2
    INT16 = 3
    INT32 = 4
    INT64 = 5
    FLOAT = 10
    DOUBLE = 11
    STRING = 20
    VARCHAR = 21
    JSON = 23
    BINARY_VECTOR = 100
    FLOAT_VECTOR = 101

    def type_name(self) -> str:
        """Return the display name of the type, e.g. ``"Int64"``."""
        return _TYPE_NAMES.get(self, "undefined")

    def __str__(self) -> str:
        return _TYPE_DEFS.get(self, "undefined")

    def pb_field_type(self) -> tuple[str, str]:
        """Return the (array name, element type) pair used on the wire."""
        return _PB_TYPES.get(self, ("undefined", ""))


_TYPE_NAMES = {
    FieldType.BOOL: "Bool",
    FieldType.INT8: "Int8",
    FieldType.INT16: "Int16",
    FieldType.INT32: "Int32",
    FieldType.INT64: "Int64",
    FieldType.FLOAT: "Float",
    FieldType.DOUBLE: "Double",
    FieldType.STRING: "String",
    FieldType.VARCHAR: "VarChar",
    FieldType.JSON: "JSON",
    FieldType.BINARY_VECTOR: "BinaryVector",
    FieldType.FLOAT_VECTOR: "FloatVector",
}

_TYPE_DEFS = {
    FieldType.BOOL: "bool",
    FieldType.INT8: "int8",
    FieldType.INT16: "int16",
    FieldType.INT32: "int32",
    FieldType.INT64: "int64",
    FieldType.FLOAT: "float32",
    FieldType.DOUBLE: "float64",
    FieldType.STRING: "string",
    FieldType.VARCHAR: "string",
    FieldType.JSON: "JSON",
    FieldType.BINARY_VECTOR: "[]byte",
    FieldType.FLOAT_VECTOR: "[]float32",
}

_PB_TYPES = {
    FieldType.BOOL: ("Bool", "bool"),
    FieldType.INT8: ("Int", "int32"),
    FieldType.INT16: ("Int", "int32"),
    FieldType.INT32: ("Int", "int32"),
    FieldType.INT64: ("Long", "int64"),
    FieldType.FLOAT: ("Float", "float32"),
    FieldType.DOUBLE: ("Double", "float64"),
    FieldType.STRING: ("String", "string"),
    FieldType.VARCHAR: ("VarChar", "string"),
    FieldType.JSON: ("JSON", "JSON"),
    FieldType.BINARY_VECTOR: ("[]byte", ""),
    FieldType.FLOAT_VECTOR: ("[]float32", ""),
}


class ConsistencyLevel(IntEnum):
    """Consistency level of a collection."""

    STRONG = 0
    SESSION = 1
    BOUNDED = 2
    EVENTUALLY = 3
    CUSTOMIZED = 4


@dataclass
class KeyValuePair:
    """A single key/value parameter."""

    key: str
    value: str


@dataclass
class FieldSchema:
    """Wire form of a field definition."""

    field_id: int = 0
    name: str = ""
    description: str = ""
    is_primary_key: bool = False
    auto_id: bool = False
    data_type: int = 0
    type_params: list[KeyValuePair] = field(default_factory=list)
    index_params: list[KeyValuePair] = field(default_factory=list)
    is_dynamic: bool = False
    is_partition_key: bool = False


@dataclass
class CollectionSchema:
    """Wire form of a collection schema."""

    name: str = ""
    description: str = ""
    auto_id: bool = False
    fields: list[FieldSchema] = field(default_factory=list)
    enable_dynamic_field: bool = False


def map_kv_pairs(mapping: Mapping[str, str] | None) -> list[KeyValuePair]:
    """Convert a mapping into a list of key/value pairs."""
    return [KeyValuePair(k, v) for k, v in (mapping or {}).items()]


def kv_pairs_map(pairs: Iterable[KeyValuePair] | None) -> dict[str, str]:
    """Convert key/value pairs into a dict; later keys win."""
    return {pair.key: pair.value for pair in pairs or ()}


@dataclass
class Field:
    """Field definition of a collection schema."""

    id: int = 0
    name: str = ""
    primary_key: bool = False
    auto_id: bool = False
    description: str = ""
    data_type: FieldType = FieldType.NONE
    type_params: dict[str, str] = field(default_factory=dict)
    index_params: dict[str, str] = field(default_factory=dict)
    is_dynamic: bool = False
    is_partition_key: bool = False

    def with_name(self, name: str) -> Field:
        self.name = name
        return self

    def with_description(self, desc: str) -> Field:
        self.description = desc
        return self

    def with_data_type(self, data_type: FieldType) -> Field:
        self.data_type = FieldType(data_type)
        return self

    def with_is_primary_key(self, is_primary_key: bool) -> Field:
        self.primary_key = is_primary_key
        return self

    def with_is_auto_id(self, is_auto_id: bool) -> Field:
        self.auto_id = is_auto_id
        return self

    def with_is_dynamic(self, is_dynamic: bool) -> Field:
        self.is_dynamic = is_dynamic
        return self

    def with_is_partition_key(self, is_partition_key: bool) -> Field:
        self.is_partition_key = is_partition_key
        return self

    def with_type_params(self, key: str, value: str) -> Field:
        self.type_params[key] = value
        return self

    def with_dim(self, dim: int) -> Field:
        self.type_params[TYPE_PARAM_DIM] = str(int(dim))
        return self

    def with_max_length(self, max_len: int) -> Field:
        self.type_params[TYPE_PARAM_MAX_LENGTH] = str(int(max_len))
        return self

    def proto_message(self) -> FieldSchema:
        """Build the wire form of this field."""
        return FieldSchema(
            field_id=self.id,
            name=self.name,
            description=self.description,
            is_primary_key=self.primary_key,
            auto_id=self.auto_id,
            data_type=int(self.data_type),
            type_params=map_kv_pairs(self.type_params),
            index_params=map_kv_pairs(self.index_params),
            is_dynamic=self.is_dynamic,
            is_partition_key=self.is_partition_key,
        )

    def read_proto(self, proto: FieldSchema) -> Field:
        """Fill this field from its wire form and return it."""
        self.id = proto.field_id
        self.name = proto.name
        self.primary_key = proto.is_primary_key
        self.auto_id = proto.auto_id
        self.description = proto.description
        self.data_type = FieldType(proto.data_type)
        self.type_params = kv_pairs_map(proto.type_params)
        self.index_params = kv_pairs_map(proto.index_params)
        self.is_dynamic = proto.is_dynamic
        self.is_partition_key = proto.is_partition_key
        return self


@dataclass
class Schema:
    """Schema of a collection."""

    collection_name: str = ""
    description: str = ""
    auto_id: bool = False
    fields: list[Field] = field(default_factory=list)
    enable_dynamic_field: bool = False

    def with_name(self, name: str) -> Schema:
        self.collection_name = name
        return self

    def with_description(self, desc: str) -> Schema:
        self.description = desc
        return self

    def with_auto_id(self, auto_id: bool) -> Schema:
        self.auto_id = auto_id
        return self

    def with_dynamic_field_enabled(self, enabled: bool) -> Schema:
        self.enable_dynamic_field = enabled
        return self

    def with_field(self, field: Field) -> Schema:
        self.fields.append(field)
        return self

    def proto_message(self) -> CollectionSchema:
        """Build the wire form of this schema."""
        return CollectionSchema(
            name=self.collection_name,
            description=self.description,
            auto_id=self.auto_id,
            fields=[f.proto_message() for f in self.fields],
            enable_dynamic_field=self.enable_dynamic_field,
        )

    def read_proto(self, proto: CollectionSchema) -> Schema:
        """Fill this schema from its wire form and return it."""
        self.auto_id = proto.auto_id
        self.description = proto.description
        self.collection_name = proto.name
        self.fields = [Field().read_proto(fp) for fp in proto.fields]
        self.enable_dynamic_field = proto.enable_dynamic_field
        return self

    def pk_field_name(self) -> str:
        """Return the name of the primary key field, or an empty string."""
        return next((f.name for f in self.fields if f.primary_key), "")