"""JSON formatting utilities for decoded records."""

import json
import math
from typing import Any

import numpy as np

from navdecode.nmea import GPSMode, MessageSchema, ParseResult, Record

__all__ = ["format_parse_result", "format_record", "format_schema"]


def _to_json_value(value: Any) -> Any:
    """Convert numpy columns to nested lists; NaN becomes null, modes their name."""
    if isinstance(value, np.ndarray):
        if value.dtype == np.float32:
            # str() of a float32 scalar is its shortest round-trip form
            shortest = [float(str(item)) for item in value.ravel()]
            value = np.array(shortest, dtype=np.float64).reshape(value.shape)
        if value.dtype.kind == "f":
            value = np.where(np.isnan(value), None, value)
        return _to_json_value(value.tolist())
    if isinstance(value, (list, tuple)):
        return [_to_json_value(item) for item in value]
    if isinstance(value, GPSMode):
        return value.name
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def format_record(record: Record) -> dict[str, Any]:
    """Convert a record to a JSON-compatible mapping of column lists."""
    return {column: _to_json_value(record[column]) for column in record.columns}


def format_parse_result(result: ParseResult) -> str:
    """Serialize a parse result into a JSON string."""
    return json.dumps({
        "messages": {name: format_record(record) for name, record in result.items()},
        "errors": {name: error.detail for name, error in result.errors.items()},
    })


def format_schema(schema: MessageSchema) -> dict[str, Any]:
    """Describe a schema for the catalog listing."""
    return {
        "name": schema.name,
        "message_id": schema.message_id,
        "talker_id_pattern": schema.talker_id_pattern,
        "fields": [
            {"name": spec.name, "tokens": [str(token) for token in spec.tokens]}
            for spec in schema.fields
            if spec.produces_value
        ],
    }
