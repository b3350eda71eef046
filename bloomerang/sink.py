"""Emission interface used by the sync orchestrator, and its Fivetran implementation."""

# For rendering metric and metadata messages
import json
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

# For enabling Logs in your connector code
from fivetran_connector_sdk import Logging as log

# For supporting Data operations like upsert(), delete() and checkpoint()
from fivetran_connector_sdk import Operations as op

from .schema_inference import ColumnSchema


class SyncSink(ABC):
    """
    Downstream destination for schemas, records, deletes, metrics, metadata and state.
    Logging is not part of this interface: every module logs through the SDK Logging object directly.
    """

    def __init__(self, configuration: Optional[Dict[str, Any]] = None):
        self.configuration = configuration or {}

    @abstractmethod
    def emit_schema(self, collection: str, columns: ColumnSchema, unique_keys: List[str]) -> None:
        pass

    @abstractmethod
    def emit_record(self, collection: str, record: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def emit_delete(self, collection: str, keys: Dict[str, Any], soft_delete: bool = True) -> None:
        pass

    @abstractmethod
    def emit_metric(self, kind: str, name: str, value: Any, tags: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def emit_meta(self, metadata: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def emit_state(self, state: Dict[str, Any]) -> None:
        pass


class FivetranSink(SyncSink):
    """
    Sink backed by the Fivetran Connector SDK.
    Table definitions are delivered by the connector's schema() function, so schemas,
    metrics and metadata are only logged here.
    """

    def emit_schema(self, collection: str, columns: ColumnSchema, unique_keys: List[str]) -> None:
        described = {column: column_type.value for column, column_type in columns.items()}
        log.fine(f"Schema for {collection}: columns={described} unique_keys={unique_keys}")

    def emit_record(self, collection: str, record: Dict[str, Any]) -> None:
        # The 'upsert' operation is used to insert or update data in the destination table.
        op.upsert(table=collection, data=record)

    def emit_delete(self, collection: str, keys: Dict[str, Any], soft_delete: bool = True) -> None:
        # Fivetran deletes are soft: the row is kept and marked with _fivetran_deleted = true
        if not soft_delete:
            raise ValueError("Fivetran only supports soft deletes")
        op.delete(table=collection, keys=keys)

    def emit_metric(self, kind: str, name: str, value: Any, tags: Dict[str, Any]) -> None:
        log.info(f"METRIC {json.dumps({'kind': kind, 'name': name, 'value': value, 'tags': tags})}")

    def emit_meta(self, metadata: Dict[str, Any]) -> None:
        log.fine(f"META {json.dumps(metadata)}")

    def emit_state(self, state: Dict[str, Any]) -> None:
        # Save the progress by checkpointing the state. You should checkpoint even if you are not
        # using incremental sync, as it tells Fivetran it is safe to write to destination.
        op.checkpoint(state=state)
