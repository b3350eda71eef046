"""Drive the full replace sync of Bloomerang collections into a sink."""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

# For enabling Logs in your connector code
from fivetran_connector_sdk import Logging as log

from .catalog import CATALOG, CollectionCatalog, CollectionDescriptor
from .client import BloomerangClient
from .common import ID_COLUMN, TEST_COLLECTION
from .normalizer import normalize_record
from .schema_inference import ColumnSchema, infer_schema, to_fivetran_columns, unique_keys
from .sink import SyncSink


@dataclass
class SyncRun:
    """Summary of one collection's sync, used for the record_count metric."""

    collection: str
    total_records_processed: int = 0


class BloomerangSync:
    """
    Orchestrates schema inference, paged fetching, normalization and emission.
    Collections are processed one at a time and a failure in any of them aborts the run.
    """

    def __init__(self, client: BloomerangClient, sink: SyncSink, catalog: CollectionCatalog = CATALOG):
        self.client = client
        self.sink = sink
        self.catalog = catalog

    def test_connection(self) -> bool:
        """
        Probe the addresses collection once, without retries.
        Returns:
            True if the request succeeded. False on any failure, including invalid credentials
            and errors raised before the request is sent, such as an API key that cannot be encoded.
        """
        collection = self.catalog.get(TEST_COLLECTION)
        try:
            self.client.request(collection.api_path)
            result = True
        except Exception as e:
            log.warning(f"Bloomerang connection test failed: {e}")
            result = False
        self.sink.emit_meta({"test_result": result})
        return result

    def list_tables(self) -> List[str]:
        """Emit and return every collection name in catalog order."""
        tables = self.catalog.names()
        self.sink.emit_meta({"tables": tables})
        return tables

    def _emit_schema(self, collection: CollectionDescriptor, columns: ColumnSchema) -> List[str]:
        keys = unique_keys(columns)
        if keys:
            self.sink.emit_meta({"unique_keys": keys})
        log.fine(f"Writing schema for {collection.name}")
        self.sink.emit_schema(collection.name, columns, keys)
        return keys

    def discover(self, names: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """
        Infer and emit the schema of each selected collection.
        Returns:
            Fivetran table definitions, with an Id primary key where the collection has one.
        """
        log.info("Starting discover for Bloomerang")
        tables = []
        for collection in self.catalog.select(names):
            columns = infer_schema(self.client, collection)
            keys = self._emit_schema(collection, columns)

            table = {"table": collection.name, "columns": to_fivetran_columns(columns)}
            if keys:
                table["primary_key"] = keys
            tables.append(table)
        return tables

    def _emit_page(self, collection: CollectionDescriptor, records: List[Dict[str, Any]], has_id: bool) -> None:
        # Deletes for the whole page go out before its inserts so every Id is replaced, not duplicated
        if has_id:
            for record in records:
                self.sink.emit_delete(collection.name, {ID_COLUMN: record[ID_COLUMN]}, soft_delete=True)

        for record in records:
            self.sink.emit_record(collection.name, record)

    def sync_collection(self, collection: CollectionDescriptor) -> SyncRun:
        """
        Replace one collection downstream.
        The schema is emitted once before any record, then every page is normalized and emitted
        as soft deletes followed by inserts. A record_count metric closes the collection.
        Raises:
            BloomerangRequestError: when a page request still fails after all retries.
        """
        columns = infer_schema(self.client, collection)
        has_id = bool(self._emit_schema(collection, columns))

        log.info(f"Starting sync for {collection.name}")
        run = SyncRun(collection=collection.name)
        for page in self.client.fetch_all(collection):
            records = [normalize_record(raw, columns) for raw in page.results]
            self._emit_page(collection, records, has_id)
            run.total_records_processed += len(records)

        self.sink.emit_metric(
            "counter", "record_count", run.total_records_processed, {"table": collection.name}
        )
        log.info(f"Finished sync for {collection.name}: {run.total_records_processed} record(s)")
        return run

    def sync(self, names: Optional[Iterable[str]] = None, state: Optional[Dict[str, Any]] = None) -> List[SyncRun]:
        """
        Sync the selected collections in catalog order, checkpointing after each one.
        Every run is a full re-pull, so the state is passed through unchanged.
        """
        state = state if state is not None else {}
        runs = []
        for collection in self.catalog.select(names):
            runs.append(self.sync_collection(collection))
            self.sink.emit_state(state)
        return runs
