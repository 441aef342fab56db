"""Load, compaction and access-control enumerations and records."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class LoadState(IntEnum):
    """Load state of a collection or partition."""

    NOT_EXIST = 0
    NOT_LOAD = 1
    LOADING = 2
    LOADED = 3


class PrivilegeObjectType(IntEnum):
    """Object type used in access-control requests."""

    COLLECTION = 0
    GLOBAL = 1
    USER = 2


@dataclass(frozen=True)
class User:
    """An access-control user."""

    name: str


@dataclass(frozen=True)
class Role:
    """An access-control role."""

    name: str


class CompactionState(IntEnum):
    """Execution state of a compaction."""

    UNDEFINED = 0
    EXECUTING = 1
    COMPLETED = 2


class CompactionPlanType(IntEnum):
    """Kind of compaction plan."""

    UNDEFINED = 0
    APPLY_DELETE = 1
    MERGE_SEGMENTS = 2


@dataclass
class CompactionPlan:
    """A compaction plan: source segments merged into a target segment."""

    source: list[int] = field(default_factory=list)
    target: int = 0
    plan_type: CompactionPlanType = CompactionPlanType.UNDEFINED