"""Copy-on-write accessors: get, set and unset attribute values by name."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable

from typed_records.errors import CannotModifySchema, RecordError, TypeMismatch, UnknownAttribute
from typed_records.record import Record, as_record
from typed_records.schema import Schema
from typed_records.types import (
    SCHEMA_SLOT,
    UNCHANGED,
    TypeTag,
    value_matches_type,
)


def resolve_value(
    stored: Any,
    call_site_default: Any,
    schema_default: Any,
    attr_type: TypeTag | None,
) -> Any:
    """Resolve an attribute's value from its four possible sources.

    The first defined (non-None) of the stored value, the call-site default
    and the schema default wins. Sequence attributes resolve to an empty
    list rather than absent.
    """
    for candidate in (stored, call_site_default, schema_default):
        if candidate is not None:
            return candidate
    if attr_type is TypeTag.SEQUENCE:
        return []
    return None


def _position(record: Record, name: str) -> int:
    position = record.schema.index_of(name)
    if position is None:
        raise UnknownAttribute(name, record.type_name)
    return position


def has_attr(record: Any, name: str) -> bool:
    """Check if a record's schema declares an attribute. Never raises."""
    try:
        return as_record(record).schema.has_attribute(name)
    except (RecordError, TypeError):
        return False


def get(
    record: Any,
    name: str,
    default: Any = None,
    use_schema_default: bool = True,
) -> Any:
    """Get the resolved value of an attribute.

    Args:
        record: The record to read.
        name: Attribute name. The reserved name ``_toc_`` returns the schema.
        default: Call-site default, used when no value is stored.
        use_schema_default: Whether the schema's declared default may be used.

    Returns:
        The resolved value, or None if nothing is defined.

    Raises:
        UnknownAttribute: If the schema does not declare name.
    """
    record = as_record(record)
    if name == SCHEMA_SLOT:
        return record.schema

    position = _position(record, name)
    descriptor = record.schema.attributes[position - 1]
    schema_default = descriptor.default if use_schema_default else None
    return resolve_value(record[position], default, schema_default, descriptor.type)


def defined(record: Any, name: str, use_schema_default: bool = False) -> bool:
    """Check if a record declares an attribute and it resolves to a value.

    Only explicit values count unless use_schema_default is set. Never
    raises for undeclared names.
    """
    if not has_attr(record, name):
        return False
    return get(record, name, use_schema_default=use_schema_default) is not None


def set(record: Any, name: str, value: Any) -> Record:
    """Return a new record with one attribute set.

    Raises:
        CannotModifySchema: If name is the reserved schema slot.
        UnknownAttribute: If the schema does not declare name.
        TypeMismatch: If the attribute is typed and value does not match.
    """
    record = as_record(record)
    if name == SCHEMA_SLOT:
        raise CannotModifySchema(f"Cannot set the schema slot of type '{record.type_name}'")

    position = _position(record, name)
    descriptor = record.schema.attributes[position - 1]
    if descriptor.type is not None and not value_matches_type(descriptor.type, value):
        raise TypeMismatch(
            f"Attribute '{name}' of type '{record.type_name}' expects "
            f"{descriptor.type.name.lower()}, got {type(value).__name__}: {value!r}"
        )
    return record.replace_slot(position, value)


def unset(record: Any, name: str) -> Record:
    """Return a new record with one attribute's stored value cleared.

    Raises:
        CannotModifySchema: If name is the reserved schema slot.
        UnknownAttribute: If the schema does not declare name.
    """
    record = as_record(record)
    if name == SCHEMA_SLOT:
        raise CannotModifySchema(f"Cannot unset the schema slot of type '{record.type_name}'")
    return record.replace_slot(_position(record, name), None)


def attr(
    record: Any,
    name: str,
    value: Any = UNCHANGED,
    default: Any = None,
    use_schema_default: bool = True,
) -> Any:
    """Unified accessor: get when value is omitted, otherwise update.

    An explicit None unsets the attribute; any other value sets it.
    """
    if value is UNCHANGED:
        return get(record, name, default, use_schema_default)
    if value is None:
        return unset(record, name)
    return set(record, name, value)


def update(record: Any, values: Mapping[str, Any] | Iterable[tuple[str, Any]]) -> Record:
    """Return a new record with several attributes set, each validated as by set()."""
    record = as_record(record)
    items = values.items() if isinstance(values, Mapping) else values
    for name, value in items:
        record = set(record, name, value)
    return record


def to_dict(record: Any, resolve: bool = True) -> dict[str, Any]:
    """Return a record's attributes as a dict in schema order.

    Args:
        record: The record to convert.
        resolve: If True, values are resolved with schema defaults. If False,
            stored values are returned as-is.
    """
    record = as_record(record)
    schema: Schema = record.schema
    if not resolve:
        return dict(zip(schema.names, record.values))
    return {name: get(record, name) for name in schema.names}
