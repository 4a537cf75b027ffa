"""Lexer for default-value literals in compact attribute specs."""

import codecs

import ply.lex as lex

from typed_records.errors import DefaultSyntaxError


class DefaultLexer:
    """Lexer for tokenizing default-value literals such as ``[1, "a", true]``."""

    # Reserved keywords
    reserved = {
        "true": "TRUE",
        "false": "FALSE",
        "undef": "UNDEF",
    }

    # Token list
    tokens = [
        "FLOAT",
        "INTEGER",
        "STRING",
        "IDENTIFIER",
        "LBRACKET",
        "RBRACKET",
        "COMMA",
    ] + list(reserved.values())

    # Simple tokens
    t_LBRACKET = r"\["
    t_RBRACKET = r"\]"
    t_COMMA = r","

    # Ignored characters
    t_ignore = " \t\n"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    def t_FLOAT(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+]?(\d+\.\d*|\.\d+|\d+(?=[eE]))([eE][-+]?\d+)?"
        t.value = float(t.value)
        return t

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"[-+]?\d+"
        t.value = int(t.value)
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"|\'([^\'\\]|\\.)*\''
        # Remove quotes and handle escapes
        t.value = codecs.decode(t.value[1:-1].encode("latin-1", "backslashreplace"), "unicode_escape")
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*"
        t.type = self.reserved.get(t.value, "IDENTIFIER")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise DefaultSyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
