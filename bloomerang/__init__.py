"""Helper module exports for easy importing."""

from .catalog import CATALOG, COLLECTIONS, CollectionCatalog, CollectionDescriptor
from .client import BloomerangClient, PageResult, RequestOutcome
from .common import BloomerangRequestError, InvalidCredentialsError
from .config import BloomerangConfig, parse_configuration, validate_configuration
from .normalizer import normalize_record
from .schema_inference import (
    ColumnType,
    infer_column_type,
    infer_schema,
    to_fivetran_columns,
    unique_keys,
)
from .sink import FivetranSink, SyncSink
from .sync import BloomerangSync, SyncRun

__all__ = [
    "CATALOG",
    "COLLECTIONS",
    "BloomerangClient",
    "BloomerangConfig",
    "BloomerangRequestError",
    "BloomerangSync",
    "CollectionCatalog",
    "CollectionDescriptor",
    "ColumnType",
    "FivetranSink",
    "InvalidCredentialsError",
    "PageResult",
    "RequestOutcome",
    "SyncRun",
    "SyncSink",
    "infer_column_type",
    "infer_schema",
    "normalize_record",
    "parse_configuration",
    "to_fivetran_columns",
    "unique_keys",
    "validate_configuration",
]
