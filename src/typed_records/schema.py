"""Schema ("table of contents") model and builder."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Iterable

from typed_records.errors import (
    CannotModifySchema,
    DefaultSyntaxError,
    DuplicateAttribute,
    InvalidAttributeSpec,
    MissingSpecification,
)
from typed_records.parsing import parse_default_literal
from typed_records.types import (
    SCHEMA_SLOT,
    AttributeDescriptor,
    TypeTag,
    is_sequence,
    lookup_type_tag,
    value_matches_type,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Schema(Sequence):
    """A named, ordered list of attribute descriptors.

    A schema is also a read-only sequence laid out like the first slot of a
    record: position 0 holds the type name and positions 1..N hold the
    attribute descriptors, so ``len(schema) == len(schema.attributes) + 1``.
    """

    type_name: str
    attributes: tuple[AttributeDescriptor, ...] = ()
    _slots: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        attributes = tuple(AttributeDescriptor(*a) for a in self.attributes)
        object.__setattr__(self, "attributes", attributes)

        slots: dict[str, int] = {}
        for position, descriptor in enumerate(attributes, start=1):
            if descriptor.name == SCHEMA_SLOT:
                raise CannotModifySchema(
                    f"Attribute name '{SCHEMA_SLOT}' is reserved for the schema slot"
                )
            if descriptor.name in slots:
                raise DuplicateAttribute(
                    f"Attribute '{descriptor.name}' is declared twice in type '{self.type_name}'"
                )
            slots[descriptor.name] = position
        object.__setattr__(self, "_slots", slots)

    def __len__(self) -> int:
        return len(self.attributes) + 1

    def __getitem__(self, index: Any) -> Any:
        if isinstance(index, int):
            if index == 0 or index == -len(self):
                return self.type_name
            return self.attributes[index - 1 if index > 0 else index]
        return (self.type_name, *self.attributes)[index]

    @property
    def names(self) -> list[str]:
        """Return the attribute names in schema order."""
        return [a.name for a in self.attributes]

    def has_attribute(self, name: str) -> bool:
        """Check if the schema declares an attribute."""
        return name in self._slots

    def index_of(self, name: str) -> int | None:
        """Return the record position (1-based) of an attribute, or None."""
        return self._slots.get(name)

    def descriptor(self, name: str) -> AttributeDescriptor | None:
        """Get an attribute descriptor by name."""
        position = self._slots.get(name)
        if position is None:
            return None
        return self.attributes[position - 1]

    def to_sequence(self) -> list[Any]:
        """Return the positional form ``[type_name, [name, code, default], ...]``."""
        return [self.type_name] + [
            [a.name, a.type.code if a.type is not None else None, a.default]
            for a in self.attributes
        ]

    @classmethod
    def from_sequence(cls, seq: Sequence[Any]) -> Schema:
        """Create a schema from its positional form.

        Type entries may be TypeTag values, codes or long names; anything
        else is stored as absent.
        """
        if isinstance(seq, Schema):
            return seq
        attributes = [
            AttributeDescriptor(name, lookup_type_tag(type_tag), default)
            for name, type_tag, default in seq[1:]
        ]
        return cls(type_name=seq[0], attributes=tuple(attributes))


def is_well_formed_record(x: Any) -> bool:
    """Check whether x has the shape of a record.

    A record is a sequence whose first element is a schema sequence of the
    same length, every entry of which past the type-name slot is a
    3-element (name, type, default) sequence. Never raises.
    """
    if not is_sequence(x) or len(x) == 0:
        return False
    toc = x[0]
    if not is_sequence(toc) or len(toc) != len(x):
        return False
    return all(is_sequence(entry) and len(entry) == 3 for entry in toc[1:])


def schema_of(record: Sequence[Any]) -> Schema:
    """Return the schema of a well-formed record (Record or positional form)."""
    return Schema.from_sequence(record[0])


def build_schema(
    type_name: str,
    attr_specs: Iterable[Any] | str | None = None,
    base: Any = None,
) -> Schema:
    """Build a schema from attribute specs, or inherit one from a record.

    Args:
        type_name: Name of the record type.
        attr_specs: Attribute specs, each a compact string
            ``name[=type[=default]]`` or a ``(name, type, default)`` tuple.
        base: An existing record. When well-formed, its schema is returned
            as-is and attr_specs is ignored.

    Returns:
        The new (or inherited) schema.

    Raises:
        MissingSpecification: If neither attr_specs nor a well-formed base
            is given.
    """
    if base is not None and is_well_formed_record(base):
        return schema_of(base)

    if attr_specs is None:
        raise MissingSpecification(
            f"Type '{type_name}' needs attribute specs or a base record"
        )

    if isinstance(attr_specs, str):
        attr_specs = [attr_specs]

    attributes = tuple(parse_attr_spec(spec) for spec in attr_specs)
    return Schema(type_name=type_name, attributes=attributes)


def parse_attr_spec(spec: Any) -> AttributeDescriptor:
    """Normalize one attribute spec into an AttributeDescriptor.

    Compact strings have their default parsed according to the type;
    tuple specs pass the default through unparsed. In both forms an
    unrecognized type is dropped to absent.

    Raises:
        InvalidAttributeSpec: If spec is neither a string nor a 1-3 element
            sequence with a non-empty string name.
    """
    if isinstance(spec, str):
        parts = spec.split("=", 2)
        name = parts[0].strip()
        type_text = parts[1].strip() if len(parts) > 1 else ""
        attr_type = _lenient_type_tag(type_text or None, name)
        default_text = parts[2] if len(parts) > 2 else None
        default = _parse_compact_default(attr_type, default_text, name)
    elif is_sequence(spec) and 1 <= len(spec) <= 3:
        name = spec[0]
        attr_type = _lenient_type_tag(spec[1] if len(spec) > 1 else None, name)
        default = spec[2] if len(spec) > 2 else None
    else:
        raise InvalidAttributeSpec(f"Invalid attribute spec: {spec!r}")

    if not isinstance(name, str) or not name:
        raise InvalidAttributeSpec(f"Attribute spec has no name: {spec!r}")

    return AttributeDescriptor(name, attr_type, _normalize_default(attr_type, default, name))


def _lenient_type_tag(type_tag: Any, name: str) -> TypeTag | None:
    """Resolve a declared type, dropping unknown tags to absent."""
    if type_tag is None:
        return None
    resolved = lookup_type_tag(type_tag)
    if resolved is None:
        logger.debug("Dropping unknown type %r of attribute '%s'", type_tag, name)
    return resolved


def _parse_compact_default(attr_type: TypeTag | None, text: str | None, name: str) -> Any:
    """Parse the default of a compact spec into a value of the declared type."""
    if text is None:
        return None
    if attr_type is None or attr_type is TypeTag.STRING:
        return text
    if attr_type is TypeTag.BOOLEAN:
        return {"true": True, "false": False}.get(text.strip())
    if attr_type in (TypeTag.ABSENT, TypeTag.RECORD):
        # Not expressible as a compact literal
        return None

    try:
        return parse_default_literal(text)
    except DefaultSyntaxError as e:
        logger.debug("Ignoring default %r of attribute '%s': %s", text, name, e)
        return None


def _normalize_default(attr_type: TypeTag | None, default: Any, name: str) -> Any:
    """Force a default to agree with its declared type.

    Sequence and record attributes fall back to an empty list; any other
    ill-typed default becomes absent.
    """
    if attr_type is None:
        return default
    if attr_type is TypeTag.SEQUENCE:
        return default if is_sequence(default) else []
    if attr_type is TypeTag.RECORD:
        return default if is_well_formed_record(default) else []
    if default is not None and not value_matches_type(attr_type, default):
        logger.debug(
            "Default %r of attribute '%s' is not a %s; using absent",
            default, name, attr_type.name.lower(),
        )
        return None
    return default
