"""Entity models for a vector database client: schemas, columns, indexes and rows."""

__version__ = "0.1.0"

__all__ = [
    "schema",
    "collection_attr",
    "states",
    "columns",
    "dynamic",
    "conversion",
    "meta",
    "index",
    "rows",
]