"""Row-based data: schema inference from dataclass rows and row-to-column conversion."""

import base64
import dataclasses
import json
import re
import types
import typing
from abc import ABC, abstractmethod
from dataclasses import MISSING, dataclass
from typing import Annotated, Any, List, Mapping, Optional, Sequence, Union

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
)
from milvus_entity.schema import TYPE_PARAM_DIM, Field, FieldType, Schema

MILVUS_TAG = "milvus"
MILVUS_SKIP_TAG_VALUE = "-"
MILVUS_TAG_SEP = ";"
MILVUS_TAG_NAME = "NAME"
VECTOR_DIM_TAG = "DIM"
MILVUS_PRIMARY_KEY = "PRIMARY_KEY"
MILVUS_AUTO_ID = "AUTO_ID"
DIM_MAX = 65535

_INT_RE = re.compile(r"[+-]?[0-9]+")

_SCALAR_COLUMNS: dict = {
    FieldType.BOOL: ColumnBool,
    FieldType.INT8: ColumnInt8,
    FieldType.INT16: ColumnInt16,
    FieldType.INT32: ColumnInt32,
    FieldType.INT64: ColumnInt64,
    FieldType.FLOAT: ColumnFloat,
    FieldType.DOUBLE: ColumnDouble,
    FieldType.STRING: ColumnString,
    FieldType.VARCHAR: ColumnVarChar,
    FieldType.JSON: ColumnJSONBytes,
}

_PLAIN_TYPES: dict = {
    bool: FieldType.BOOL,
    int: FieldType.INT64,
    float: FieldType.DOUBLE,
    str: FieldType.STRING,
}

# Annotations written as text (postponed evaluation) that can be resolved without evaluation.
_TEXT_HINTS: dict = {
    "bool": bool,
    "int": int,
    "float": float,
    "str": str,
    "bytes": bytes,
    "bytearray": bytearray,
    "list": list,
    "list[float]": list[float],
    "List[float]": List[float],
    "list[str]": list[str],
    "List[str]": List[str],
}
for _name in ("bool", "int", "float", "str", "bytes"):
    _TEXT_HINTS[f"Optional[{_name}]"] = Optional[_TEXT_HINTS[_name]]
    _TEXT_HINTS[f"{_name} | None"] = Optional[_TEXT_HINTS[_name]]
    _TEXT_HINTS[f"typing.Optional[{_name}]"] = Optional[_TEXT_HINTS[_name]]


class Row(ABC):
    """A row of data destined for a collection."""

    @abstractmethod
    def collection(self) -> str:
        """Return the collection name; empty means the row type name."""

    @abstractmethod
    def partition(self) -> str:
        """Return the partition name; empty means the default partition."""

    @abstractmethod
    def description(self) -> str:
        """Return the collection description."""


@dataclass
class RowBase(Row):
    """Base for dataclass rows, using default collection and partition names."""

    def collection(self) -> str:
        return ""

    def partition(self) -> str:
        return ""

    def description(self) -> str:
        return ""


class MapRow(dict, Row):
    """A row given as a mapping of field name to value."""

    def collection(self) -> str:
        return ""

    def partition(self) -> str:
        return ""

    def description(self) -> str:
        return ""


@dataclass(frozen=True)
class _FixedArray:
    length: int
    field_type: FieldType

    @property
    def dim(self) -> int:
        if self.field_type is FieldType.BINARY_VECTOR:
            return self.length * 8
        return self.length


def float_array(length: int):
    """Annotation for a float vector field of fixed length."""
    return Annotated[list[float], _FixedArray(int(length), FieldType.FLOAT_VECTOR)]


def byte_array(length: int):
    """Annotation for a binary vector field of ``length`` bytes."""
    return Annotated[bytes, _FixedArray(int(length), FieldType.BINARY_VECTOR)]


def tagged(tag: str, default: Any = MISSING):
    """Declare a dataclass field carrying a milvus tag, e.g. ``"primary_key;dim:8"``."""
    metadata = {MILVUS_TAG: tag}
    if isinstance(default, (list, dict, set, bytearray)):
        template = default
        return dataclasses.field(default_factory=lambda: type(template)(template), metadata=metadata)
    return dataclasses.field(default=default, metadata=metadata)


def parse_tag_setting(text: str, sep: str) -> dict:
    """Parse a tag into settings; keys are upper-cased, ``\\`` escapes the separator."""
    settings: dict = {}
    parts = iter(text.split(sep))
    for part in parts:
        while part.endswith("\\"):
            following = next(parts, None)
            if following is None:
                raise ValueError(f"dangling escape at end of tag {text!r}")
            part = part[:-1] + sep + following
        key, *rest = part.split(":")
        key = key.strip().upper()
        if rest:
            settings[key] = ":".join(rest)
        elif key:
            settings[key] = key
    return settings


def _resolve_hint(name: str, hint: Any) -> Any:
    if isinstance(hint, str):
        resolved = _TEXT_HINTS.get(hint.strip())
        if resolved is None:
            raise TypeError(f"field {name} has annotation {hint!r} that cannot be resolved")
        return resolved
    return hint


def _unwrap_optional(hint: Any) -> Any:
    if typing.get_origin(hint) in (Union, types.UnionType):
        args = [a for a in typing.get_args(hint) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _parse_dim(name: str, settings: Mapping) -> str:
    dim_str = settings.get(VECTOR_DIM_TAG)
    if dim_str is None:
        raise ValueError(f"field {name} is slice but dim not provided")
    if not _INT_RE.fullmatch(dim_str):
        raise ValueError(f"dim value {dim_str} is not valid")
    dim = int(dim_str)
    if dim < 1 or dim > DIM_MAX:
        raise ValueError(f"dim value {dim} is out of range")
    return dim_str


def _describe_field(name: str, hint: Any, settings: Mapping, field: Field) -> None:
    hint = _unwrap_optional(_resolve_hint(name, hint))
    if typing.get_origin(hint) is Annotated:
        for marker in hint.__metadata__:
            if isinstance(marker, _FixedArray):
                field.data_type = marker.field_type
                field.type_params = {TYPE_PARAM_DIM: str(marker.dim)}
                return
            if isinstance(marker, FieldType):
                field.data_type = marker
                return
        hint = typing.get_args(hint)[0]

    if hint in _PLAIN_TYPES:
        field.data_type = _PLAIN_TYPES[hint]
        return

    if hint in (bytes, bytearray) or hint is list or typing.get_origin(hint) is list:
        dim_str = _parse_dim(name, settings)
        field.type_params = {TYPE_PARAM_DIM: dim_str}
        if hint in (bytes, bytearray):
            field.data_type = FieldType.BINARY_VECTOR
            return
        elem = typing.get_args(hint)
        if elem == (float,):
            field.data_type = FieldType.FLOAT_VECTOR
            return
        raise TypeError(f"field {name} is slice of {elem[0] if elem else 'unknown'}, which is not supported")

    raise TypeError(f"field {field.name} is {hint}, which is not supported")


def parse_schema(row: Row) -> Schema:
    """Infer a collection schema from a dataclass row."""
    schema = Schema(collection_name=row.collection(), description=row.description())
    row_type = type(row)
    if not dataclasses.is_dataclass(row_type):
        raise TypeError(f"unsupported data type: {row!r}")
    if not schema.collection_name:
        schema.collection_name = row_type.__name__
        if not schema.collection_name:
            raise ValueError("collection name not provided")

    for dc_field in dataclasses.fields(row_type):
        if dc_field.name.startswith("_"):
            continue
        tag = dc_field.metadata.get(MILVUS_TAG, "")
        if tag == MILVUS_SKIP_TAG_VALUE:
            continue
        settings = parse_tag_setting(tag, MILVUS_TAG_SEP)
        field = Field(name=dc_field.name)
        field.primary_key = MILVUS_PRIMARY_KEY in settings
        field.auto_id = MILVUS_AUTO_ID in settings
        if MILVUS_TAG_NAME in settings:
            field.name = settings[MILVUS_TAG_NAME]
        _describe_field(dc_field.name, dc_field.type, settings, field)
        schema.fields.append(field)
    return schema


def _candidates(row: Any) -> dict:
    """Return the row's values keyed by column name."""
    if isinstance(row, Mapping):
        return {str(key): value for key, value in row.items()}
    if dataclasses.is_dataclass(row) and not isinstance(row, type):
        result: dict = {}
        for dc_field in dataclasses.fields(row):
            name = dc_field.name
            tag = dc_field.metadata.get(MILVUS_TAG)
            if tag is not None:
                if tag == MILVUS_SKIP_TAG_VALUE:
                    continue
                name = parse_tag_setting(tag, MILVUS_TAG_SEP).get(MILVUS_TAG_NAME, name)
            if name in result:
                raise ValueError(
                    f"column has duplicated name: {name} when parsing field: {dc_field.name}"
                )
            result[name] = getattr(row, dc_field.name)
        return result
    raise TypeError(f"unsupport row type: {type(row).__name__}")


def _vector_dim(field: Field) -> int:
    dim_str = field.type_params.get(TYPE_PARAM_DIM)
    if dim_str is None:
        raise ValueError("vector field with no dim")
    if not _INT_RE.fullmatch(dim_str):
        raise ValueError(f"vector field with bad format dim: {dim_str!r}")
    return int(dim_str)


def _new_column(field: Field) -> Optional[Column]:
    if field.data_type in _SCALAR_COLUMNS:
        return _SCALAR_COLUMNS[field.data_type](field.name, [])
    if field.data_type is FieldType.FLOAT_VECTOR:
        return ColumnFloatVector(field.name, _vector_dim(field), [])
    if field.data_type is FieldType.BINARY_VECTOR:
        return ColumnBinaryVector(field.name, _vector_dim(field), [])
    return None


def _json_default(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(bytes(value)).decode("ascii")
    raise TypeError(f"value of type {type(value).__name__} is not JSON serializable")


def rows_to_columns(rows: Sequence[Row], *args: Schema) -> list:
    """Convert rows into columns; the first schema given, if any, is used."""
    if not rows:
        raise ValueError("0 length column")
    schema = args[0] if args else parse_schema(rows[0])
    is_dynamic = schema.enable_dynamic_field

    columns: dict = {}
    for field in schema.fields:
        if field.primary_key and field.auto_id:
            continue
        column = _new_column(field)
        if column is not None:
            columns[field.name] = column

    dynamic_column = ColumnJSONBytes("", []).with_is_dynamic(True) if is_dynamic else None

    for row in rows:
        candidates = _candidates(row)
        for field in schema.fields:
            if is_dynamic and field.is_dynamic:
                continue
            if field.primary_key and field.auto_id:
                candidates.pop(field.name, None)
                continue
            column = columns.get(field.name)
            if column is None:
                raise TypeError(f"field {field.name} has unsupported type {field.data_type!r}")
            if field.name not in candidates:
                raise ValueError(f"row does not has field {field.name}")
            column.append_value(candidates.pop(field.name))

        if dynamic_column is not None:
            try:
                encoded = json.dumps(
                    candidates, sort_keys=True, separators=(",", ":"), default=_json_default
                )
            except (TypeError, ValueError) as exc:
                raise ValueError(f"failed to marshal dynamic field {exc}") from exc
            dynamic_column.append_value(encoded.encode("utf-8"))

    result = list(columns.values())
    if dynamic_column is not None:
        result.append(dynamic_column)
    return result