"""Parsing module for default-value literals."""

from typed_records.parsing.default_lexer import DefaultLexer
from typed_records.parsing.default_parser import DefaultParser, parse_default_literal

__all__ = [
    "DefaultLexer",
    "DefaultParser",
    "parse_default_literal",
]
