"""Index definitions and index search parameters."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from enum import Enum, IntEnum
from typing import Any, ClassVar, Mapping

INDEX_TYPE_KEY = "index_type"
METRIC_TYPE_KEY = "metric_type"
PARAMS_KEY = "params"


class IndexType(str, Enum):
    """Type of a vector index."""

    FLAT = "FLAT"
    BIN_FLAT = "BIN_FLAT"
    IVF_FLAT = "IVF_FLAT"
    BIN_IVF_FLAT = "BIN_IVF_FLAT"
    IVF_PQ = "IVF_PQ"
    IVF_SQ8 = "IVF_SQ8"
    HNSW = "HNSW"
    IVF_HNSW = "IVF_HNSW"
    AUTOINDEX = "AUTOINDEX"
    DISKANN = "DISKANN"

    def __str__(self) -> str:
        return self.value


class MetricType(str, Enum):
    """Distance metric used by an index."""

    L2 = "L2"
    IP = "IP"
    COSINE = "COSINE"
    HAMMING = "HAMMING"
    JACCARD = "JACCARD"
    TANIMOTO = "TANIMOTO"
    SUBSTRUCTURE = "SUBSTRUCTURE"
    SUPERSTRUCTURE = "SUPERSTRUCTURE"

    def __str__(self) -> str:
        return self.value


class IndexState(IntEnum):
    """Build state of an index."""

    NONE = 0
    UNISSUED = 1
    IN_PROGRESS = 2
    FINISHED = 3
    FAILED = 4
    RETRY = 5


def _text(value: Any) -> str:
    return value.value if isinstance(value, Enum) else str(value)


_Rules = Mapping[str, "tuple[int, int] | None"]


def _validated(rules: _Rules, values: Mapping[str, Any]) -> dict[str, int]:
    """Check each value against its inclusive range, in rule order."""
    checked: dict[str, int] = {}
    for name, bounds in rules.items():
        value = values[name]
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
        if bounds is not None:
            low, high = bounds
            if value < low or value > high:
                raise ValueError(f"{name} not valid")
        checked[name] = value
    return checked


class Index(ABC):
    """An index definition sent when an index is created."""

    @abstractmethod
    def name(self) -> str:
        """Return the index name."""

    @abstractmethod
    def index_type(self) -> IndexType | str:
        """Return the index type."""

    @abstractmethod
    def params(self) -> dict[str, str]:
        """Return the index construction parameters."""


class GenericIndex(Index):
    """An index with free-form parameters; nothing is validated."""

    def __init__(self, name: str, index_type: IndexType | str, params: Mapping[str, str] | None) -> None:
        self._name = name
        self._index_type = index_type
        self._params = dict(params or {})

    def name(self) -> str:
        return self._name

    def index_type(self) -> IndexType | str:
        return self._index_type

    def params(self) -> dict[str, str]:
        result = {INDEX_TYPE_KEY: _text(self._index_type)}
        result.update(self._params)
        return result


class BuiltinIndex(Index):
    """An index of a known type whose construction parameters are validated."""

    _display_name: ClassVar[str] = ""
    _type: ClassVar[IndexType] = IndexType.FLAT
    _binary: ClassVar[bool] = False
    _rules: ClassVar[dict[str, tuple[int, int] | None]] = {}

    def __init__(self, metric_type: MetricType | str, **construct_params: int) -> None:
        self._construct = _validated(self._rules, construct_params)
        self._metric_type = metric_type

    def name(self) -> str:
        return self._display_name

    def index_type(self) -> IndexType:
        return self._type

    def support_binary(self) -> bool:
        """Return whether the index supports binary vectors."""
        return self._binary

    def metric_type(self) -> MetricType | str:
        """Return the metric type of the index."""
        return self._metric_type

    def params(self) -> dict[str, str]:
        encoded = json.dumps(
            {key: str(value) for key, value in self._construct.items()},
            sort_keys=True,
            separators=(",", ":"),
        )
        return {
            PARAMS_KEY: encoded,
            INDEX_TYPE_KEY: self._type.value,
            METRIC_TYPE_KEY: _text(self._metric_type),
        }


_NLIST = (1, 65536)
_NPROBE = (1, 65536)
_HNSW_M = (4, 64)
_EF_CONSTRUCTION = (8, 512)
_EF = (1, 32768)


class IndexFlat(BuiltinIndex):
    """FLAT index."""

    _display_name = "Flat"
    _type = IndexType.FLAT

    def __init__(self, metric_type: MetricType | str) -> None:
        super().__init__(metric_type)


class IndexBinFlat(BuiltinIndex):
    """BIN_FLAT index."""

    _display_name = "BinFlat"
    _type = IndexType.BIN_FLAT
    _binary = True
    _rules = {"nlist": _NLIST}

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        super().__init__(metric_type, nlist=nlist)


class IndexIvfFlat(BuiltinIndex):
    """IVF_FLAT index."""

    _display_name = "IvfFlat"
    _type = IndexType.IVF_FLAT
    _rules = {"nlist": _NLIST}

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        super().__init__(metric_type, nlist=nlist)


class IndexBinIvfFlat(BuiltinIndex):
    """BIN_IVF_FLAT index."""

    _display_name = "BinIvfFlat"
    _type = IndexType.BIN_IVF_FLAT
    _binary = True
    _rules = {"nlist": _NLIST}

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        super().__init__(metric_type, nlist=nlist)


class IndexIvfSQ8(BuiltinIndex):
    """IVF_SQ8 index."""

    _display_name = "IvfSQ8"
    _type = IndexType.IVF_SQ8
    _rules = {"nlist": _NLIST}

    def __init__(self, metric_type: MetricType | str, nlist: int) -> None:
        super().__init__(metric_type, nlist=nlist)


class IndexIvfPQ(BuiltinIndex):
    """IVF_PQ index."""

    _display_name = "IvfPQ"
    _type = IndexType.IVF_PQ
    _rules = {"nlist": _NLIST, "m": None, "nbits": (1, 16)}

    def __init__(self, metric_type: MetricType | str, nlist: int, m: int, nbits: int) -> None:
        super().__init__(metric_type, nlist=nlist, m=m, nbits=nbits)


class IndexHNSW(BuiltinIndex):
    """HNSW index."""

    _display_name = "HNSW"
    _type = IndexType.HNSW
    _rules = {"M": _HNSW_M, "efConstruction": _EF_CONSTRUCTION}

    def __init__(self, metric_type: MetricType | str, M: int, efConstruction: int) -> None:  # noqa: N803
        super().__init__(metric_type, M=M, efConstruction=efConstruction)


class IndexIvfHNSW(BuiltinIndex):
    """IVF_HNSW index."""

    _display_name = "IvfHNSW"
    _type = IndexType.IVF_HNSW
    _rules = {"nlist": _NLIST, "M": _HNSW_M, "efConstruction": _EF_CONSTRUCTION}

    def __init__(
        self, metric_type: MetricType | str, nlist: int, M: int, efConstruction: int  # noqa: N803
    ) -> None:
        super().__init__(metric_type, nlist=nlist, M=M, efConstruction=efConstruction)


class IndexDISKANN(BuiltinIndex):
    """DISKANN index."""

    _display_name = "DISKANN"
    _type = IndexType.DISKANN

    def __init__(self, metric_type: MetricType | str) -> None:
        super().__init__(metric_type)


class IndexAUTOINDEX(BuiltinIndex):
    """AUTOINDEX index."""

    _display_name = "AUTOINDEX"
    _type = IndexType.AUTOINDEX

    def __init__(self, metric_type: MetricType | str) -> None:
        super().__init__(metric_type)


class SearchParam:
    """Index-specific parameters of a search request."""

    _rules: ClassVar[dict[str, tuple[int, int] | None]] = {}

    def __init__(self, **values: int) -> None:
        self._values = _validated(self._rules, values)

    def params(self) -> dict[str, Any]:
        """Return the search parameters."""
        return dict(self._values)


class IndexFlatSearchParam(SearchParam):
    """Search parameters for FLAT."""

    def __init__(self) -> None:
        super().__init__()


class IndexBinFlatSearchParam(SearchParam):
    """Search parameters for BIN_FLAT."""

    _rules = {"nprobe": _NPROBE}

    def __init__(self, nprobe: int) -> None:
        super().__init__(nprobe=nprobe)


class IndexIvfFlatSearchParam(SearchParam):
    """Search parameters for IVF_FLAT."""

    _rules = {"nprobe": _NPROBE}

    def __init__(self, nprobe: int) -> None:
        super().__init__(nprobe=nprobe)


class IndexBinIvfFlatSearchParam(SearchParam):
    """Search parameters for BIN_IVF_FLAT."""

    _rules = {"nprobe": _NPROBE}

    def __init__(self, nprobe: int) -> None:
        super().__init__(nprobe=nprobe)


class IndexIvfSQ8SearchParam(SearchParam):
    """Search parameters for IVF_SQ8."""

    _rules = {"nprobe": _NPROBE}

    def __init__(self, nprobe: int) -> None:
        super().__init__(nprobe=nprobe)


class IndexIvfPQSearchParam(SearchParam):
    """Search parameters for IVF_PQ."""

    _rules = {"nprobe": _NPROBE}

    def __init__(self, nprobe: int) -> None:
        super().__init__(nprobe=nprobe)


class IndexHNSWSearchParam(SearchParam):
    """Search parameters for HNSW."""

    _rules = {"ef": _EF}

    def __init__(self, ef: int) -> None:
        super().__init__(ef=ef)


class IndexIvfHNSWSearchParam(SearchParam):
    """Search parameters for IVF_HNSW."""

    _rules = {"nprobe": _NPROBE, "ef": _EF}

    def __init__(self, nprobe: int, ef: int) -> None:
        super().__init__(nprobe=nprobe, ef=ef)


class IndexDISKANNSearchParam(SearchParam):
    """Search parameters for DISKANN."""

    _rules = {"search_list": (1, 65535)}

    def __init__(self, search_list: int) -> None:
        super().__init__(search_list=search_list)


class IndexAUTOINDEXSearchParam(SearchParam):
    """Search parameters for AUTOINDEX."""

    _rules = {"level": (1, 3)}

    def __init__(self, level: int) -> None:
        super().__init__(level=level)