"""Infer a collection's column types by sampling one live record."""

from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, List

# For enabling Logs in your connector code
from fivetran_connector_sdk import Logging as log

from .catalog import CollectionDescriptor
from .client import BloomerangClient
from .common import ID_COLUMN


class ColumnType(Enum):
    """Column types understood by the downstream pipeline."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    TIMESTAMP = "timestamp"
    TIMESTAMP_TZ = "timestamp-tz"


# Arrays and objects both land in JSON columns
__FIVETRAN_TYPES = {
    ColumnType.STRING: "STRING",
    ColumnType.INTEGER: "LONG",
    ColumnType.FLOAT: "DOUBLE",
    ColumnType.BOOLEAN: "BOOLEAN",
    ColumnType.ARRAY: "JSON",
    ColumnType.OBJECT: "JSON",
    ColumnType.TIMESTAMP: "NAIVE_DATETIME",
    ColumnType.TIMESTAMP_TZ: "UTC_DATETIME",
}

ColumnSchema = Dict[str, ColumnType]


def infer_column_type(value: Any) -> ColumnType:
    """
    Map the runtime type of a decoded JSON value to a column type.
    None maps to STRING, so a column whose sample is null stays a string column for the whole run.
    Unrecognized types also default to STRING.
    """
    # bool is a subclass of int and must be checked first
    if isinstance(value, bool):
        return ColumnType.BOOLEAN
    if isinstance(value, int):
        return ColumnType.INTEGER
    if isinstance(value, float):
        return ColumnType.FLOAT
    if isinstance(value, (list, tuple)):
        return ColumnType.ARRAY
    if isinstance(value, Mapping):
        return ColumnType.OBJECT
    return ColumnType.STRING


def schema_from_sample(sample: Any) -> ColumnSchema:
    """Build a column schema from one sample record, keeping the record's field order."""
    if not isinstance(sample, Mapping):
        return {}
    return {column: infer_column_type(value) for column, value in sample.items()}


def infer_schema(client: BloomerangClient, collection: CollectionDescriptor) -> ColumnSchema:
    """
    Request a single record of the collection and derive its schema.
    The sample request is not retried. An empty collection yields an empty schema.
    Args:
        client: the Bloomerang API client.
        collection: the collection to sample.
    Returns:
        An ordered mapping of column name to ColumnType.
    """
    page = client.fetch_page(collection, skip=0, take=1, retry=False)
    if not page.results:
        log.info(f"No sample record available for {collection.name}; inferred an empty schema")
        return {}

    columns = schema_from_sample(page.results[0])
    log.fine(f"Inferred {len(columns)} column(s) for {collection.name}")
    return columns


def unique_keys(columns: ColumnSchema) -> List[str]:
    """Return ["Id"] when the schema has an Id column, otherwise no keys."""
    return [ID_COLUMN] if ID_COLUMN in columns else []


def to_fivetran_columns(columns: ColumnSchema) -> Dict[str, str]:
    """Translate a column schema into Fivetran column type names for the schema() definition."""
    return {column: __FIVETRAN_TYPES[column_type] for column, column_type in columns.items()}
