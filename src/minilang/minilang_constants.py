"""
Token kinds and grammar constants for the MINILANG language.

Exports:
    TokenKind: Closed enumeration of terminal categories.
    DEFAULT_SPELLINGS: Kind → set of literal spellings, used to build the lexer's table.
    END_MARKERS: Spellings that explicitly terminate a program.
    IMPLICIT_EOF_LEXEME: Lexeme carried by the EOF token when the source simply runs out.
    STMT_FIRST: Token kinds that can begin a statement.
"""

from enum import Enum


class TokenKind(Enum):
    """Terminal categories recognized by the MINILANG grammar."""

    # Keywords
    READ = "READ"
    WRITE = "WRITE"
    WHILE = "WHILE"
    DO = "DO"
    OD = "OD"
    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"
    FI = "FI"
    UNTIL = "UNTIL"

    # Operators
    ASSIGN_OP = "ASSIGN_OP"
    ADD_OP = "ADD_OP"
    MULT_OP = "MULT_OP"
    LEFT_PAREN = "LEFT_PAREN"
    RIGHT_PAREN = "RIGHT_PAREN"
    REL_OP = "REL_OP"

    # Identifiers and numbers
    ID = "ID"
    NUMBER = "NUMBER"

    EOF = "EOF"
    UNKNOWN = "UNKNOWN"

    def __str__(self) -> str:
        return self.name


END_MARKERS: frozenset[str] = frozenset({".", "$$"})

IMPLICIT_EOF_LEXEME = "$$"

DEFAULT_SPELLINGS: dict[TokenKind, frozenset[str]] = {
    TokenKind.READ: frozenset({"read"}),
    TokenKind.WRITE: frozenset({"write"}),
    TokenKind.WHILE: frozenset({"while"}),
    TokenKind.DO: frozenset({"do"}),
    TokenKind.OD: frozenset({"od"}),
    TokenKind.IF: frozenset({"if"}),
    TokenKind.THEN: frozenset({"then"}),
    TokenKind.ELSE: frozenset({"else"}),
    TokenKind.FI: frozenset({"fi"}),
    TokenKind.UNTIL: frozenset({"until"}),
    TokenKind.ASSIGN_OP: frozenset({":="}),
    TokenKind.ADD_OP: frozenset({"+", "-"}),
    TokenKind.MULT_OP: frozenset({"*", "/"}),
    TokenKind.LEFT_PAREN: frozenset({"("}),
    TokenKind.RIGHT_PAREN: frozenset({")"}),
    TokenKind.REL_OP: frozenset({"<", ">", "<=", ">=", "=", "!="}),
    TokenKind.EOF: END_MARKERS,
}

STMT_FIRST: frozenset[TokenKind] = frozenset(
    {
        TokenKind.ID,
        TokenKind.READ,
        TokenKind.WRITE,
        TokenKind.IF,
        TokenKind.WHILE,
        TokenKind.DO,
    }
)

__all__ = [
    "DEFAULT_SPELLINGS",
    "END_MARKERS",
    "IMPLICIT_EOF_LEXEME",
    "STMT_FIRST",
    "TokenKind",
]
