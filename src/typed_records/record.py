"""Immutable records and the record constructor."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Iterable

from typed_records.errors import NotARecord
from typed_records.schema import Schema, build_schema, is_well_formed_record
from typed_records.types import is_sequence

logger = logging.getLogger(__name__)


class Record(Sequence):
    """An immutable instance of a schema.

    A record is a fixed-length sequence: position 0 holds its schema and
    positions 1..N hold one value per attribute, in schema order. Records
    are never modified in place; updates return new records that share the
    schema and all untouched values with the original.
    """

    __slots__ = ("_schema", "_values")

    def __init__(self, schema: Schema, values: Iterable[Any] | None = None) -> None:
        """Initialize a record.

        Args:
            schema: Schema the record is an instance of.
            values: Values in schema order; missing trailing values are
                absent. Extra values are an error.
        """
        slots = list(values) if values is not None else []
        count = len(schema.attributes)
        if len(slots) > count:
            raise ValueError(
                f"Type '{schema.type_name}' has {count} attributes, got {len(slots)} values"
            )
        slots.extend([None] * (count - len(slots)))
        self._schema = schema
        self._values = tuple(slots)

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def type_name(self) -> str:
        return self._schema.type_name

    @property
    def values(self) -> tuple[Any, ...]:
        """Return the stored values in schema order (defaults not applied)."""
        return self._values

    def __len__(self) -> int:
        return len(self._values) + 1

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, int):
            if index == 0 or index == -len(self):
                return self._schema
            return self._values[index - 1 if index > 0 else index]
        return (self._schema, *self._values)[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self._schema == other._schema and self._values == other._values

    def __hash__(self) -> int:
        return hash((self._schema.type_name, len(self._values)))

    def __repr__(self) -> str:
        fields = ", ".join(
            f"{a.name}={v!r}" for a, v in zip(self._schema.attributes, self._values)
        )
        return f"Record({self.type_name!r}, {fields})"

    def replace_slot(self, position: int, value: Any) -> Record:
        """Return a copy of this record with one value slot (1-based) replaced."""
        slots = list(self._values)
        slots[position - 1] = value
        return Record(self._schema, slots)

    def to_sequence(self) -> list[Any]:
        """Return the positional form ``[toc, value1, ..., valueN]``.

        Nested records are converted recursively.
        """
        return [self._schema.to_sequence()] + [
            v.to_sequence() if isinstance(v, Record) else v for v in self._values
        ]

    @classmethod
    def from_sequence(cls, seq: Sequence[Any]) -> Record:
        """Create a record from its positional form.

        Raises:
            NotARecord: If seq is not a well-formed record.
        """
        if isinstance(seq, Record):
            return seq
        if not is_well_formed_record(seq):
            raise NotARecord(f"Not a well-formed record: {seq!r}")
        return cls(Schema.from_sequence(seq[0]), seq[1:])


def as_record(value: Any) -> Record:
    """Coerce a Record or a positional record sequence to a Record.

    Raises:
        NotARecord: If value is not a well-formed record.
    """
    if isinstance(value, Record):
        return value
    return Record.from_sequence(value)


def normalize_vlist(values: Any) -> list[tuple[str, Any]]:
    """Normalize a vlist into a list of (name, value) pairs.

    Accepts a sequence of (name, value) pairs (used as-is), a flat
    alternating ``name, value, name, value, ...`` sequence (absent values
    discarded), or a mapping.
    """
    if values is None:
        return []
    if isinstance(values, Mapping):
        return list(values.items())

    items = list(values)
    if all(is_sequence(item) and len(item) == 2 for item in items):
        return [(item[0], item[1]) for item in items]

    pairs = []
    for i in range(0, len(items) - 1, 2):
        if items[i + 1] is not None:
            pairs.append((items[i], items[i + 1]))
    return pairs


def construct(
    type_name: str,
    attr_specs: Iterable[Any] | str | None = None,
    values: Any = None,
    base: Any = None,
) -> Record:
    """Construct a record.

    Args:
        type_name: Name of the record type.
        attr_specs: Attribute specs for build_schema. Ignored when base is
            a well-formed record.
        values: Initial values as a vlist (pairs, flat alternating, or mapping).
        base: A record to clone. Its schema and values are the starting
            point for the new record.

    Returns:
        The new record. Names the schema does not declare are ignored.
    """
    schema = build_schema(type_name, attr_specs, base)

    if base is not None and is_well_formed_record(base):
        record = as_record(base)
    else:
        record = Record(schema)

    slots = list(record.values)
    for name, value in normalize_vlist(values):
        position = schema.index_of(name)
        if position is None:
            logger.debug("Ignoring unknown attribute '%s' for type '%s'", name, type_name)
            continue
        slots[position - 1] = value

    return Record(schema, slots)
