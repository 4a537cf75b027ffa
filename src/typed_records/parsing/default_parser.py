"""Parser for default-value literals in compact attribute specs.

Grammar::

    literal : FLOAT | INTEGER | STRING | IDENTIFIER | TRUE | FALSE | UNDEF | list
    list    : '[' ']' | '[' items ']' | '[' items ',' ']'
    items   : literal | items ',' literal
"""

from __future__ import annotations

from typing import Any

import ply.yacc as yacc

from typed_records.errors import DefaultSyntaxError
from typed_records.parsing.default_lexer import DefaultLexer


class DefaultParser:
    """Parser turning a default-value literal into a Python value."""

    tokens = DefaultLexer.tokens
    start = "literal"

    def __init__(self) -> None:
        self.lexer = DefaultLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_literal_number(self, p: yacc.YaccProduction) -> None:
        """literal : FLOAT
                   | INTEGER"""
        p[0] = p[1]

    def p_literal_string(self, p: yacc.YaccProduction) -> None:
        """literal : STRING
                   | IDENTIFIER"""
        p[0] = p[1]

    def p_literal_true(self, p: yacc.YaccProduction) -> None:
        """literal : TRUE"""
        p[0] = True

    def p_literal_false(self, p: yacc.YaccProduction) -> None:
        """literal : FALSE"""
        p[0] = False

    def p_literal_undef(self, p: yacc.YaccProduction) -> None:
        """literal : UNDEF"""
        p[0] = None

    def p_literal_list(self, p: yacc.YaccProduction) -> None:
        """literal : list"""
        p[0] = p[1]

    def p_list_empty(self, p: yacc.YaccProduction) -> None:
        """list : LBRACKET RBRACKET"""
        p[0] = []

    def p_list_items(self, p: yacc.YaccProduction) -> None:
        """list : LBRACKET items RBRACKET
                | LBRACKET items COMMA RBRACKET"""
        p[0] = p[2]

    def p_items_single(self, p: yacc.YaccProduction) -> None:
        """items : literal"""
        p[0] = [p[1]]

    def p_items_multiple(self, p: yacc.YaccProduction) -> None:
        """items : items COMMA literal"""
        p[0] = p[1] + [p[3]]

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise DefaultSyntaxError(f"Syntax error at '{p.value}' (position {p.lexpos})")
        else:
            raise DefaultSyntaxError("Syntax error at end of input")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, **kwargs)

    def parse(self, data: str) -> Any:
        """Parse a literal and return its Python value."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        if not data.strip():
            raise DefaultSyntaxError("Empty default literal")

        return self.parser.parse(data, lexer=self.lexer.lexer)


_default_parser: DefaultParser | None = None


def parse_default_literal(text: str) -> Any:
    """Parse text with a shared DefaultParser.

    Raises:
        DefaultSyntaxError: If text is not a valid literal.
    """
    global _default_parser
    if _default_parser is None:
        _default_parser = DefaultParser()
    return _default_parser.parse(text)
