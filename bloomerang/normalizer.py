"""Reshape raw API records to an inferred column set."""

from collections.abc import Mapping
from typing import Any, Dict


def normalize_record(raw: Any, columns: Mapping) -> Dict[str, Any]:
    """
    Restrict a raw record to exactly the schema's columns, in schema order.
    Fields missing from the record are set to None and fields outside the schema are dropped.
    A raw element that is not a mapping normalizes to all None values.
    """
    if not isinstance(raw, Mapping):
        raw = {}
    return {column: raw.get(column) for column in columns}
