# milvus-entity

Plain-Python entity models for working with a vector database. The package
has collection schemas and fields, typed columns, vector wrappers, index
definitions with validated build and search parameters, metadata records, and
conversion of row objects into columns. It has no dependencies outside the
standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Schemas (`milvus_entity.schema`)

```python
from milvus_entity.schema import Schema, Field, FieldType

schema = (
    Schema()
    .with_name("books")
    .with_description("book embeddings")
    .with_field(Field().with_name("ID").with_data_type(FieldType.INT64).with_is_primary_key(True))
    .with_field(Field().with_name("vector").with_data_type(FieldType.FLOAT_VECTOR).with_dim(128))
)

assert schema.pk_field_name() == "ID"
message = schema.proto_message()      # a CollectionSchema dataclass
restored = Schema().read_proto(message)
```

`FieldType.type_name()` gives the display name of a type (`"Int64"`),
`str(FieldType.INT64)` the value type name (`"int64"`) and
`FieldType.pb_field_type()` the pair of wire names (`("Long", "int64")`).
`ConsistencyLevel` lists the consistency levels. `map_kv_pairs` and
`kv_pairs_map` convert between dicts and lists of `KeyValuePair`.

## Columns (`milvus_entity.columns`)

```python
from milvus_entity.columns import ColumnInt64, ColumnFloatVector

ids = ColumnInt64("ID", [1, 2, 3])
vectors = ColumnFloatVector("vector", 2, [[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]])

ids.append_value(4)
assert len(ids) == 4
fd = vectors.field_data()             # a FieldData dataclass
```

The column classes are `ColumnBool`, `ColumnInt8`, `ColumnInt16`,
`ColumnInt32`, `ColumnInt64`, `ColumnFloat`, `ColumnDouble`, `ColumnString`,
`ColumnVarChar`, `ColumnJSONBytes`, `ColumnBinaryVector` and
`ColumnFloatVector`. Each offers `name()`, `field_type()`, `len()`, `data()`,
`get()`, `value_by_idx()`, `append_value()` and `field_data()`, and the
`get_as_int64`, `get_as_string`, `get_as_double` and `get_as_bool`
conversions where its type allows them. An index out of range raises
`IndexError`; a value of the wrong type, or a conversion a column does not
support, raises `TypeError`; an integer outside the range of its column
raises `ValueError`. Vector columns also have `dim()`, and `ColumnJSONBytes`
has `with_is_dynamic()` and `is_dynamic()`.

`milvus_entity.dynamic.ColumnDynamic(column, output_field)` reads one key
(a dot-separated path) out of each JSON document of a `ColumnJSONBytes`:
`get()` returns that value as JSON text, and the `get_as_*` methods return it
typed, raising `KeyError` when the key is absent and `TypeError` when the
value has another type.

## Converting wire data (`milvus_entity.conversion`)

`field_data_column(fd, begin, end)` turns a `FieldData` into a column holding
rows `begin` to `end` (a negative `end` means up to the last row);
`field_data_vector(fd)` does the same for all rows of a vector field;
`id_columns(ids, begin, end)` turns an `IDs` record of integer or string keys
into a column. A payload that does not match its declared type raises
`FieldDataTypeError`. `get_int_data(fd)` returns the int32 payload of a field.

`FloatVector` and `BinaryVector` wrap search vectors: `dim()`, `field_type()`
and `serialize()` (little-endian float32 bytes, or the raw bytes).

## Indexes and search parameters (`milvus_entity.index`)

```python
from milvus_entity.index import IndexHNSW, IndexHNSWSearchParam, MetricType

index = IndexHNSW(MetricType.L2, 16, 40)
print(index.params())   # {"params": ..., "index_type": "HNSW", "metric_type": "L2"}
search = IndexHNSWSearchParam(64)
print(search.params())  # {"ef": 64}
```

Index classes: `IndexFlat`, `IndexBinFlat`, `IndexIvfFlat`,
`IndexBinIvfFlat`, `IndexIvfSQ8`, `IndexIvfPQ`, `IndexHNSW`, `IndexIvfHNSW`,
`IndexDISKANN` and `IndexAUTOINDEX`, each with a matching `...SearchParam`
class. Parameters outside their allowed ranges raise `ValueError`, and
non-integer parameters raise `TypeError`. `GenericIndex(name, index_type,
params)` takes free-form parameters without validation.

## Collection attributes (`milvus_entity.collection_attr`)

```python
from milvus_entity.collection_attr import collection_ttl, collection_auto_compaction_enabled

attr = collection_ttl(3600)
assert attr.validate() == 3600
key, value = attr.key_value()   # ("collection.ttl.seconds", "3600")

collection_auto_compaction_enabled(True).key_value()
```

`validate()` raises `ValueError` for a negative or malformed TTL or a value
that is not a boolean word.

## Rows (`milvus_entity.rows`)

Rows are dataclasses derived from `RowBase`; fields carry settings through
`tagged(...)` (`primary_key`, `auto_id`, `name:...`, `dim:...`, or `-` to
skip a field), and fixed-length vectors can be annotated with
`float_array(n)` or `byte_array(n)`.

```python
from dataclasses import dataclass
from milvus_entity.rows import RowBase, tagged, float_array, parse_schema, rows_to_columns

@dataclass
class Book(RowBase):
    id: int = tagged("primary_key")
    vector: float_array(4) = tagged("name:embedding")

schema = parse_schema(Book(1, [0.0, 0.1, 0.2, 0.3]))   # collection "Book"
columns = rows_to_columns([Book(1, [0.0, 0.1, 0.2, 0.3]), Book(2, [1.0, 1.1, 1.2, 1.3])])
```

`rows_to_columns(rows, schema)` uses the given schema instead of inferring
one, and accepts `MapRow` mappings as well as dataclass rows. When the schema
has the dynamic field enabled, values without a matching field are gathered
into a JSON column marked dynamic. `parse_tag_setting(text, sep)` parses a
tag string into its settings.

## Metadata and states

`milvus_entity.meta` holds `Collection`, `Partition`, `ReplicaGroup`,
`ShardReplica`, `ResourceGroup`, `Segment` (with `flushed()`) and
`BulkInsertTaskState` (with `progress()`), and the `BulkInsertState` and
`SegmentState` enums. `milvus_entity.states` holds `LoadState`,
`PrivilegeObjectType`, `User`, `Role`, `CompactionState`,
`CompactionPlanType` and `CompactionPlan`.

## What this package does not do

It contains no client: it does not connect to a server, send requests, or
encode messages in any network format. The wire forms (`FieldSchema`,
`CollectionSchema`, `FieldData`, `IDs` and the like) are plain dataclasses for
another layer to translate.