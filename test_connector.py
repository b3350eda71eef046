"""Tests for the Fivetran entry points and the SDK-backed sink."""

from unittest.mock import call, patch

import pytest

import connector
from bloomerang import ColumnType, FivetranSink
from conftest import make_response, make_session, paged_body

CONFIGURATION = {"private_key": "test-key", "tables": "funds"}


class TestFivetranSink:
    def test_records_and_deletes_use_sdk_operations(self):
        sink = FivetranSink(CONFIGURATION)

        with patch("bloomerang.sink.op") as op:
            sink.emit_delete("funds", {"Id": 3})
            sink.emit_record("funds", {"Id": 3, "Name": "General"})
            sink.emit_state({})

        assert op.mock_calls == [
            call.delete(table="funds", keys={"Id": 3}),
            call.upsert(table="funds", data={"Id": 3, "Name": "General"}),
            call.checkpoint(state={}),
        ]

    def test_hard_deletes_are_not_supported(self):
        with pytest.raises(ValueError):
            FivetranSink().emit_delete("funds", {"Id": 3}, soft_delete=False)

    def test_metrics_and_schemas_are_logged(self):
        sink = FivetranSink()

        with patch("bloomerang.sink.log") as log:
            sink.emit_metric("counter", "record_count", 4, {"table": "funds"})
            sink.emit_schema("funds", {"Id": ColumnType.INTEGER}, ["Id"])

        assert '"record_count"' in log.info.call_args[0][0]
        assert "'Id': 'integer'" in log.fine.call_args[0][0]


class TestConnector:
    def test_schema_infers_table_definitions(self):
        session = make_session(make_response(paged_body([{"Id": 1, "Name": "General", "IsActive": True}])))

        with patch("bloomerang.client.requests.Session", return_value=session):
            tables = connector.schema(CONFIGURATION)

        assert tables == [
            {
                "table": "funds",
                "primary_key": ["Id"],
                "columns": {"Id": "LONG", "Name": "STRING", "IsActive": "BOOLEAN"},
            }
        ]
        assert session.headers["X-API-KEY"] == "test-key"

    def test_update_replaces_selected_tables_and_checkpoints(self):
        session = make_session(
            make_response(paged_body([{"Id": 1, "Name": "General"}])),
            make_response(paged_body([{"Id": 1, "Name": "General"}, {"Id": 2, "Extra": "x"}])),
        )

        with patch("bloomerang.client.requests.Session", return_value=session), patch("bloomerang.sink.op") as op:
            connector.update(CONFIGURATION, {})

        assert op.mock_calls == [
            call.delete(table="funds", keys={"Id": 1}),
            call.delete(table="funds", keys={"Id": 2}),
            call.upsert(table="funds", data={"Id": 1, "Name": "General"}),
            call.upsert(table="funds", data={"Id": 2, "Name": None}),
            call.checkpoint(state={}),
        ]

    def test_update_wraps_failures(self):
        session = make_session(make_response(status_code=404))

        with patch("bloomerang.client.requests.Session", return_value=session), patch("bloomerang.sink.op"):
            with pytest.raises(RuntimeError, match="Failed to sync data"):
                connector.update(CONFIGURATION, {})

    def test_update_rejects_missing_private_key(self):
        with pytest.raises(ValueError, match="private_key"):
            connector.update({}, {})

    def test_check_connection(self):
        with patch("bloomerang.client.requests.Session", return_value=make_session(make_response(status_code=401))):
            assert connector.check_connection(CONFIGURATION) is False

        with patch("bloomerang.client.requests.Session", return_value=make_session(make_response(paged_body([])))):
            assert connector.check_connection(CONFIGURATION) is True
