"""Metadata records for collections, partitions, replicas, imports and segments."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum

from milvus_entity.schema import ConsistencyLevel, Schema

DEFAULT_SHARD_NUMBER = 0
IMPORT_PROGRESS = "progress_percent"

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


@dataclass
class Collection:
    """Metadata of a collection."""

    id: int = 0
    name: str = ""
    schema: Schema | None = None
    physical_channels: list[str] = field(default_factory=list)
    virtual_channels: list[str] = field(default_factory=list)
    loaded: bool = False
    consistency_level: ConsistencyLevel = ConsistencyLevel.STRONG
    shard_num: int = DEFAULT_SHARD_NUMBER


@dataclass
class Partition:
    """Metadata of a partition."""

    id: int = 0
    name: str = ""
    loaded: bool = False


@dataclass
class ShardReplica:
    """A shard within a replica group."""

    leader_id: int = 0
    node_ids: list[int] = field(default_factory=list)
    dm_channel_name: str = ""


@dataclass
class ReplicaGroup:
    """A replica group and the shards it serves."""

    replica_id: int = 0
    node_ids: list[int] = field(default_factory=list)
    shard_replicas: list[ShardReplica] = field(default_factory=list)


class BulkInsertState(IntEnum):
    """State of a bulk insert task."""

    PENDING = 0
    FAILED = 1
    STARTED = 2
    PERSISTED = 5
    COMPLETED = 6
    FAILED_AND_CLEANED = 7


@dataclass
class BulkInsertTaskState:
    """Status of a bulk insert task."""

    id: int = 0
    state: BulkInsertState = BulkInsertState.PENDING
    row_count: int = 0
    id_list: list[int] = field(default_factory=list)
    infos: dict[str, str] = field(default_factory=dict)
    collection_id: int = 0
    segment_ids: list[int] = field(default_factory=list)
    create_ts: int = 0

    def progress(self) -> int:
        """Return the progress percentage, or 0 when unknown or malformed."""
        raw = self.infos.get(IMPORT_PROGRESS)
        if raw is None or not _INT_RE.fullmatch(raw):
            return 0
        value = int(raw)
        if not _INT_MIN <= value <= _INT_MAX:
            return 0
        return value


@dataclass
class ResourceGroup:
    """Information about a resource group."""

    name: str = ""
    capacity: int = 0
    available_nodes_number: int = 0
    loaded_replica: dict[str, int] = field(default_factory=dict)
    outgoing_node_num: dict[str, int] = field(default_factory=dict)
    incoming_node_num: dict[str, int] = field(default_factory=dict)


class SegmentState(IntEnum):
    """Lifecycle state of a segment."""

    NONE = 0
    NOT_EXIST = 1
    GROWING = 2
    SEALED = 3
    FLUSHED = 4
    FLUSHING = 5
    DROPPED = 6
    IMPORTING = 7


@dataclass
class Segment:
    """Metadata of a segment."""

    id: int = 0
    collection_id: int = 0
    partition_id: int = 0
    index_id: int = 0
    num_rows: int = 0
    state: SegmentState = SegmentState.NONE

    def flushed(self) -> bool:
        """Return whether the segment has been flushed."""
        return self.state is SegmentState.FLUSHED