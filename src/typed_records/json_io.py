"""JSON interchange for records.

A record is stored as::

    {
        "type": "Axle",
        "attributes": [["diameter", "n", null], ["length", "n", 30]],
        "values": {"diameter": 10}
    }

Only explicitly stored values are written. Records nested inside values or
defaults are wrapped as ``{"$record": {...}}``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from typed_records.errors import NotARecord
from typed_records.record import Record, as_record, construct
from typed_records.schema import build_schema

RECORD_KEY = "$record"


def _encode_value(value: Any) -> Any:
    if isinstance(value, Record):
        return {RECORD_KEY: record_to_json(value)}
    if isinstance(value, (list, tuple)):
        return [_encode_value(v) for v in value]
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict) and RECORD_KEY in value:
        return record_from_json(value[RECORD_KEY])
    if isinstance(value, list):
        return [_decode_value(v) for v in value]
    return value


def record_to_json(record: Any) -> dict[str, Any]:
    """Convert a record to a JSON-compatible dict."""
    record = as_record(record)
    return {
        "type": record.type_name,
        "attributes": [
            [a.name, a.type.code if a.type is not None else None, _encode_value(a.default)]
            for a in record.schema.attributes
        ],
        "values": {
            a.name: _encode_value(v)
            for a, v in zip(record.schema.attributes, record.values)
            if v is not None
        },
    }


def record_from_json(data: Any) -> Record:
    """Create a record from the dict produced by record_to_json.

    Raises:
        NotARecord: If data does not have the record layout.
    """
    if not isinstance(data, dict) or "type" not in data or "attributes" not in data:
        raise NotARecord(f"Not a JSON record: {data!r}")
    if not isinstance(data["attributes"], list):
        raise NotARecord(f"JSON record attributes must be a list: {data['attributes']!r}")
    stored = data.get("values", {})
    if not isinstance(stored, dict):
        raise NotARecord(f"JSON record values must be an object: {stored!r}")

    specs = []
    for entry in data["attributes"]:
        if not isinstance(entry, list) or not 1 <= len(entry) <= 3:
            raise NotARecord(f"Invalid attribute entry in JSON record: {entry!r}")
        name, type_code, default = (entry + [None, None])[:3]
        specs.append((name, type_code, _decode_value(default)))

    schema = build_schema(data["type"], specs)
    values = {name: _decode_value(v) for name, v in stored.items()}
    return construct(data["type"], values=values, base=Record(schema))


def loads_records(text: str) -> list[Record]:
    """Parse a JSON document holding one record or a list of records."""
    data = json.loads(text)
    if isinstance(data, list):
        return [record_from_json(item) for item in data]
    return [record_from_json(data)]


def load_records(path: Path | str) -> list[Record]:
    """Load records from a JSON file."""
    with open(path) as f:
        return loads_records(f.read())


def dumps_records(records: Iterable[Any], indent: int | None = 2) -> str:
    """Serialize records to a JSON list."""
    return json.dumps([record_to_json(r) for r in records], indent=indent)


def dump_records(records: Iterable[Any], path: Path | str, indent: int | None = 2) -> None:
    """Write records to a JSON file."""
    with open(path, "w") as f:
        f.write(dumps_records(records, indent=indent))
        f.write("\n")
