"""Selection, sorting and grouping over collections of records.

Collections are plain iterables of records; the records need not share a
schema. Every function here reads records only through the accessor
protocol and returns a new list.
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import reduce
from typing import Any, Iterable, Sequence

from typed_records import accessor
from typed_records.errors import RecordError
from typed_records.record import Record, as_record
from typed_records.schema import is_well_formed_record


def values_equal(left: Any, right: Any) -> bool:
    """Exact value equality; booleans never equal numbers.

    A record equals its positional form when both have the same schema and
    equal values.
    """
    if isinstance(left, Record) or isinstance(right, Record):
        if not (is_well_formed_record(left) and is_well_formed_record(right)):
            return False
        try:
            left, right = as_record(left), as_record(right)
        except (RecordError, TypeError):
            return False
        return left.schema == right.schema and values_equal(left.values, right.values)
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(
            values_equal(a, b) for a, b in zip(left, right)
        )
    return left == right


def select_by_index(records: Sequence[Any], idxs: Iterable[int]) -> list[Any]:
    """Gather records by position. Out-of-range indexes raise IndexError."""
    return [records[i] for i in idxs]


def select_by_attr_defined(records: Iterable[Any], attr: str) -> list[Any]:
    """Keep records that declare attr and hold an explicit value for it."""
    return [r for r in records if accessor.defined(r, attr)]


def select_by_attr_value(records: Iterable[Any], attr: str, value: Any) -> list[Any]:
    """Keep records whose explicit value of attr equals value."""
    return [
        r
        for r in select_by_attr_defined(records, attr)
        if values_equal(accessor.get(r, attr, use_schema_default=False), value)
    ]


def select_by_attrs_values(
    records: Iterable[Any],
    pairs: Mapping[str, Any] | Iterable[tuple[str, Any]],
) -> list[Any]:
    """Keep records matching every (attr, value) pair.

    Each pair filters the output of the previous one, so the result does not
    depend on the order of the pairs.
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    return reduce(
        lambda selected, pair: select_by_attr_value(selected, pair[0], pair[1]),
        items,
        list(records),
    )


def values_for_attr(records: Iterable[Any], attr: str, default: Any = None) -> list[Any]:
    """Project the resolved value of attr across records.

    Records that do not declare attr yield default.
    """
    return [
        accessor.get(r, attr, default) if accessor.has_attr(r, attr) else default
        for r in records
    ]


def sort_by_attr(records: Iterable[Any], attr: str, reverse: bool = False) -> list[Any]:
    """Stable sort of records by the resolved value of attr.

    Records whose value is absent keep their relative order after all
    records with a defined value. Inputs with fewer than two records, or no
    defined value at all, come back unchanged.
    """
    records = list(records)
    values = values_for_attr(records, attr)
    if len(records) <= 1 or all(v is None for v in values):
        return records

    present = [(v, r) for v, r in zip(values, records) if v is not None]
    absent = [r for v, r in zip(values, records) if v is None]
    present.sort(key=lambda item: item[0], reverse=reverse)
    return [r for _, r in present] + absent


def group_keys(records: Iterable[Any], attr: str) -> list[Any]:
    """Return the distinct defined values of attr in first-appearance order."""
    keys: list[Any] = []
    for value in values_for_attr(records, attr):
        if value is not None and not any(values_equal(value, k) for k in keys):
            keys.append(value)
    return keys


def group_by_attr(records: Iterable[Any], attr: str) -> list[list[Record]]:
    """Partition records into one group per distinct defined value of attr.

    Records where attr is absent (or undeclared) are dropped. Groups appear
    in the order their value is first seen; members keep input order.
    """
    records = list(records)
    values = values_for_attr(records, attr)
    keys: list[Any] = []
    groups: list[list[Record]] = []
    for value, record in zip(values, records):
        if value is None:
            continue
        for i, key in enumerate(keys):
            if values_equal(value, key):
                groups[i].append(record)
                break
        else:
            keys.append(value)
            groups.append([record])
    return groups
