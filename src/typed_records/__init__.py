"""Typed Records - schema-described, immutable records with typed attributes."""

from typed_records.accessor import attr, defined, get, has_attr, resolve_value, set, to_dict, unset, update
from typed_records.errors import (
    CannotModifySchema,
    DuplicateAttribute,
    InvalidAttributeSpec,
    InvalidType,
    MissingSpecification,
    NotARecord,
    RecordError,
    TypeMismatch,
    UnknownAttribute,
)
from typed_records.query import (
    group_by_attr,
    group_keys,
    select_by_attr_defined,
    select_by_attr_value,
    select_by_attrs_values,
    select_by_index,
    sort_by_attr,
    values_for_attr,
)
from typed_records.record import Record, as_record, construct, normalize_vlist
from typed_records.schema import Schema, build_schema, is_well_formed_record, parse_attr_spec
from typed_records.types import (
    SCHEMA_SLOT,
    UNCHANGED,
    AttributeDescriptor,
    TypeTag,
    type_tag_is_valid,
    value_matches_type,
)

__all__ = [
    # Main API
    "Schema",
    "Record",
    "build_schema",
    "construct",
    # Accessors
    "get",
    "set",
    "unset",
    "attr",
    "update",
    "defined",
    "has_attr",
    "resolve_value",
    "to_dict",
    # Queries
    "select_by_index",
    "select_by_attr_defined",
    "select_by_attr_value",
    "select_by_attrs_values",
    "values_for_attr",
    "sort_by_attr",
    "group_by_attr",
    "group_keys",
    # Schema and record helpers
    "AttributeDescriptor",
    "TypeTag",
    "SCHEMA_SLOT",
    "UNCHANGED",
    "as_record",
    "is_well_formed_record",
    "normalize_vlist",
    "parse_attr_spec",
    "type_tag_is_valid",
    "value_matches_type",
    # Errors
    "RecordError",
    "MissingSpecification",
    "UnknownAttribute",
    "TypeMismatch",
    "CannotModifySchema",
    "InvalidType",
    "DuplicateAttribute",
    "InvalidAttributeSpec",
    "NotARecord",
]

__version__ = "0.1.0"
