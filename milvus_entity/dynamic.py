"""View of one output field inside the dynamic JSON column."""

from __future__ import annotations

import json
from typing import Any

from milvus_entity.columns import ColumnJSONBytes

_MISSING = object()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON constant {name}")


def _lookup(document: Any, path: str) -> Any:
    current = document
    for part in path.split("."):
        if isinstance(current, dict) and part in current:
            current = current[part]
        elif isinstance(current, list) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return _MISSING
    return current


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class ColumnDynamic(ColumnJSONBytes):
    """A dynamic JSON column read through one output field path."""

    def __init__(self, column: ColumnJSONBytes, output_field: str) -> None:
        super().__init__(column.name(), column.data())
        self._is_dynamic = column.is_dynamic()
        self._output_field = output_field

    def name(self) -> str:
        return self._output_field

    def _field_value(self, idx: int) -> Any:
        raw = self.value_by_idx(idx)
        document = json.loads(raw, parse_constant=_reject_constant)
        value = _lookup(document, self._output_field)
        if value is _MISSING:
            raise KeyError(f"column not has value: {self._output_field}")
        return value

    def get(self, idx: int) -> str:
        """Return the JSON text of the output field at ``idx``."""
        return json.dumps(self._field_value(idx))

    def get_as_int64(self, idx: int) -> int:
        value = self._field_value(idx)
        if not _is_number(value):
            raise TypeError("column not int")
        return int(value)

    def get_as_string(self, idx: int) -> str:
        value = self._field_value(idx)
        if not isinstance(value, str):
            raise TypeError("column not string")
        return value

    def get_as_bool(self, idx: int) -> bool:
        value = self._field_value(idx)
        if not isinstance(value, bool):
            raise TypeError("column not bool")
        return value

    def get_as_double(self, idx: int) -> float:
        value = self._field_value(idx)
        if not _is_number(value):
            raise TypeError("column not number")
        return float(value)