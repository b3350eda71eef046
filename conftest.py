"""Shared fixtures for the Bloomerang connector tests. No test touches the network."""

from typing import Any, Dict, List
from unittest.mock import Mock

import pytest
import requests

# For enabling Logs in your connector code
from fivetran_connector_sdk import Logging as log

from bloomerang import BloomerangClient, SyncSink


class RecordingSink(SyncSink):
    """Sink that records every emission in order as (kind, payload) tuples."""

    def __init__(self, configuration=None):
        super().__init__(configuration)
        self.events: List[tuple] = []

    def emit_schema(self, collection, columns, unique_keys):
        self.events.append(("schema", {"collection": collection, "columns": dict(columns), "unique_keys": unique_keys}))

    def emit_record(self, collection, record):
        self.events.append(("record", {"collection": collection, "record": record}))

    def emit_delete(self, collection, keys, soft_delete=True):
        self.events.append(("delete", {"collection": collection, "keys": keys, "soft_delete": soft_delete}))

    def emit_metric(self, kind, name, value, tags):
        self.events.append(("metric", {"kind": kind, "name": name, "value": value, "tags": tags}))

    def emit_meta(self, metadata):
        self.events.append(("meta", metadata))

    def emit_state(self, state):
        self.events.append(("state", state))

    def of_kind(self, kind: str) -> List[Any]:
        return [payload for event_kind, payload in self.events if event_kind == kind]

    def kinds(self) -> List[str]:
        return [event_kind for event_kind, _ in self.events]


def make_response(body: Any = None, status_code: int = 200) -> Mock:
    """Build a stand-in for requests.Response."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.json.return_value = body
    return response


def make_session(*responses) -> Mock:
    """Build a session whose get() returns or raises the given items in order."""
    session = Mock(spec=requests.Session)
    session.headers = {}
    session.get.side_effect = list(responses)
    return session


def paged_body(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"Total": 0, "Start": 0, "ResultCount": len(records), "Results": records}


@pytest.fixture(autouse=True)
def log_level():
    """The SDK leaves the log level unset outside the Fivetran runtime, and logging then fails."""
    previous = log.LOG_LEVEL
    log.LOG_LEVEL = log.Level.FINE
    yield
    log.LOG_LEVEL = previous


@pytest.fixture
def recording_sink():
    return RecordingSink({"private_key": "test-key"})


@pytest.fixture
def sleep():
    return Mock()


@pytest.fixture
def make_client(sleep):
    def _make_client(*responses) -> BloomerangClient:
        return BloomerangClient(private_key="test-key", session=make_session(*responses), sleep=sleep)

    return _make_client
