"""Collection attributes that can be altered after creation."""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

TTL_KEY = "collection.ttl.seconds"
AUTO_COMPACTION_KEY = "collection.autocompaction.enabled"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_TRUE_WORDS = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE_WORDS = {"0", "f", "F", "FALSE", "false", "False"}


@dataclass(frozen=True)
class CollectionAttribute(ABC):
    """A key/value collection attribute."""

    key: ClassVar[str]
    value: str

    def key_value(self) -> tuple[str, str]:
        """Return the attribute as a (key, value) pair."""
        return self.key, self.value

    @abstractmethod
    def validate(self):
        """Check the value, returning it parsed; raise ValueError if invalid."""


@dataclass(frozen=True)
class TTLCollectionAttribute(CollectionAttribute):
    """Time-to-live of a collection, in seconds."""

    key: ClassVar[str] = TTL_KEY

    def validate(self) -> int:
        if not _INT_RE.fullmatch(self.value):
            raise ValueError(f"ttl is not a valid positive integer: {self.value!r}")
        val = int(self.value)
        if not _INT64_MIN <= val <= _INT64_MAX:
            raise ValueError(f"ttl is not a valid positive integer: {self.value!r} out of range")
        if val < 0:
            raise ValueError("ttl needs to be a positive integer")
        return val


@dataclass(frozen=True)
class AutoCompactionCollectionAttribute(CollectionAttribute):
    """Whether automatic compaction is enabled for a collection."""

    key: ClassVar[str] = AUTO_COMPACTION_KEY

    def validate(self) -> bool:
        if self.value in _TRUE_WORDS:
            return True
        if self.value in _FALSE_WORDS:
            return False
        raise ValueError(f"auto compaction setting is not valid boolean: {self.value!r}")


def collection_ttl(ttl: int) -> TTLCollectionAttribute:
    """Return the attribute that sets the collection TTL in seconds."""
    return TTLCollectionAttribute(str(int(ttl)))


def collection_auto_compaction_enabled(enabled: bool) -> AutoCompactionCollectionAttribute:
    """Return the attribute that enables or disables auto compaction."""
    return AutoCompactionCollectionAttribute("true" if enabled else "false")