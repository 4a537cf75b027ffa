"""Exceptions raised by the typed_records library."""

from __future__ import annotations


class RecordError(Exception):
    """Base class for all typed_records errors."""


class MissingSpecification(RecordError, ValueError):
    """A schema was requested with neither attribute specs nor a base record."""


class UnknownAttribute(RecordError, KeyError):
    """An accessor was given a name that the record's schema does not declare."""

    def __init__(self, name: str, type_name: str) -> None:
        super().__init__(f"Attribute '{name}' not found in type '{type_name}'")
        self.name = name
        self.type_name = type_name

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0])


class TypeMismatch(RecordError, TypeError):
    """A value does not satisfy the declared type of the attribute it is written to."""


class CannotModifySchema(RecordError, ValueError):
    """An attempt was made to write the reserved schema slot."""


class InvalidType(RecordError, ValueError):
    """A type tag outside the six known tags was used where validation is required."""


class DuplicateAttribute(RecordError, ValueError):
    """A schema declares the same attribute name more than once."""


class NotARecord(RecordError, TypeError):
    """A value passed where a record is required is not a well-formed record."""


class DefaultSyntaxError(RecordError, SyntaxError):
    """A default-value literal could not be parsed."""


class InvalidAttributeSpec(RecordError, ValueError):
    """An attribute spec is neither a compact string nor a (name, type, default) tuple."""
