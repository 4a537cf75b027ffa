"""Type tags and value validation for the typed_records library."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, NamedTuple

from typed_records.errors import InvalidType


class TypeTag(Enum):
    """The closed set of attribute types a schema may declare."""

    STRING = "s"
    NUMBER = "n"
    BOOLEAN = "b"
    SEQUENCE = "l"
    ABSENT = "u"
    RECORD = "r"

    @property
    def code(self) -> str:
        """Return the single-character code used in compact attribute specs."""
        return self.value


# Mapping from codes and long names to TypeTag values
TYPE_TAG_NAMES: dict[str, TypeTag] = {tag.value: tag for tag in TypeTag}
TYPE_TAG_NAMES.update({
    "string": TypeTag.STRING,
    "str": TypeTag.STRING,
    "number": TypeTag.NUMBER,
    "num": TypeTag.NUMBER,
    "boolean": TypeTag.BOOLEAN,
    "bool": TypeTag.BOOLEAN,
    "list": TypeTag.SEQUENCE,
    "sequence": TypeTag.SEQUENCE,
    "undef": TypeTag.ABSENT,
    "absent": TypeTag.ABSENT,
    "none": TypeTag.ABSENT,
    "record": TypeTag.RECORD,
})


# Name of the reserved position-0 slot holding a record's schema
SCHEMA_SLOT = "_toc_"


class _Unchanged:
    """Sentinel type for "no new value supplied" in the unified accessor."""

    _instance: _Unchanged | None = None

    def __new__(cls) -> _Unchanged:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNCHANGED"

    def __bool__(self) -> bool:
        return False


UNCHANGED = _Unchanged()


class AttributeDescriptor(NamedTuple):
    """One attribute of a schema: its name, declared type and default value."""

    name: str
    type: TypeTag | None = None
    default: Any = None


def is_sequence(value: Any) -> bool:
    """Check if a value is a sequence in the record sense (strings are not)."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def is_number(value: Any) -> bool:
    """Check if a value is an integer or float (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def type_tag_is_valid(tag: Any) -> bool:
    """Return whether tag is a TypeTag or one of its codes/names."""
    if isinstance(tag, TypeTag):
        return True
    return isinstance(tag, str) and tag.lower() in TYPE_TAG_NAMES


def lookup_type_tag(tag: Any) -> TypeTag | None:
    """Normalize tag to a TypeTag, returning None for anything unrecognized."""
    if isinstance(tag, TypeTag):
        return tag
    if isinstance(tag, str):
        return TYPE_TAG_NAMES.get(tag.lower())
    return None


def resolve_type_tag(tag: Any) -> TypeTag:
    """Normalize tag to a TypeTag.

    Raises:
        InvalidType: If tag is not one of the six known type tags.
    """
    resolved = lookup_type_tag(tag)
    if resolved is None:
        raise InvalidType(f"Unknown type tag: {tag!r}")
    return resolved


def value_matches_type(tag: Any, value: Any) -> bool:
    """Check whether value is of the kind described by tag.

    Args:
        tag: A TypeTag or one of its codes/names.
        value: The value to check.

    Returns:
        True if the value matches. A RECORD tag requires a well-formed
        record, SEQUENCE any non-string sequence, ABSENT exactly None.

    Raises:
        InvalidType: If tag is not a known type tag.
    """
    resolved = resolve_type_tag(tag)

    if resolved is TypeTag.STRING:
        return isinstance(value, str)
    elif resolved is TypeTag.NUMBER:
        return is_number(value)
    elif resolved is TypeTag.BOOLEAN:
        return isinstance(value, bool)
    elif resolved is TypeTag.SEQUENCE:
        return is_sequence(value)
    elif resolved is TypeTag.ABSENT:
        return value is None
    else:
        from typed_records.schema import is_well_formed_record

        return is_well_formed_record(value)
