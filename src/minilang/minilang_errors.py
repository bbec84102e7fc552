"""
Parse outcome types for the MINILANG parser.

A parse never raises: every grammar rule returns either ``None`` (success) or the
`SyntaxMismatch` that stopped it, and the entry point wraps the final result in a
`Parsed` or `Failed` outcome. Callers that prefer exceptions can call `unwrap()`.

Classes:
    SyntaxMismatch: The grammar error kind (expected kind vs. found token).
    NestingTooDeep: Input nested deeper than the interpreter stack allows.
    Parsed: Successful outcome holding the finished tree.
    Failed: Failed outcome holding the error and the partial tree.
"""

from typing import Union

from minilang.minilang_constants import TokenKind
from minilang.minilang_tree import ParseTree

MESSAGE_TEMPLATE = "SYNTAX ERROR: '{expected}' was expected but '{found}' was found."
NESTING_TEMPLATE = "SYNTAX ERROR: nesting too deep at '{found}' (line {line}, col {col})."


class SyntaxMismatch(SyntaxError):
    """
    Raised (or returned) when the lookahead token does not match the grammar.

    Attributes:
        expected (TokenKind): The token kind the grammar required.
        found_kind (TokenKind): Kind of the token actually present.
        found_lexeme (str): Literal text of the token actually present.
        node (int | None): Tree handle at which the mismatch was detected.
        line (int): Source line of the offending token (0 if unknown).
        col (int): Source column of the offending token (0 if unknown).
    """

    def __init__(
        self,
        expected: TokenKind,
        found_kind: TokenKind,
        found_lexeme: str,
        node: int | None = None,
        line: int = 0,
        col: int = 0,
    ) -> None:
        super().__init__(
            MESSAGE_TEMPLATE.format(expected=expected.name, found=found_lexeme)
        )
        self.expected = expected
        self.found_kind = found_kind
        self.found_lexeme = found_lexeme
        self.node = node
        self.line = line
        self.col = col

    @property
    def message(self) -> str:
        return str(self.msg)

    def __setattr__(self, name: str, value: object) -> None:
        if name in self.__dict__:
            raise AttributeError(f"SyntaxMismatch.{name} is read-only")
        super().__setattr__(name, value)

    def __repr__(self) -> str:
        return (
            f"SyntaxMismatch(expected={self.expected.name}, "
            f"found={self.found_kind.name}:{self.found_lexeme!r}, node={self.node})"
        )


class NestingTooDeep(SyntaxError):
    """
    Reported when blocks or parentheses nest deeper than the call stack allows.

    Attributes:
        found_lexeme (str): Lexeme of the lookahead token when the stack ran out.
        node (int | None): Tree handle the error is anchored at.
        line (int): Source line of that token.
        col (int): Source column of that token.
    """

    def __init__(
        self, found_lexeme: str, node: int | None = None, line: int = 0, col: int = 0
    ) -> None:
        super().__init__(NESTING_TEMPLATE.format(found=found_lexeme, line=line, col=col))
        self.found_lexeme = found_lexeme
        self.node = node
        self.line = line
        self.col = col

    @property
    def message(self) -> str:
        return str(self.msg)


ParseError = Union[SyntaxMismatch, NestingTooDeep]


class Parsed:
    """Successful parse outcome."""

    ok = True

    def __init__(self, tree: ParseTree) -> None:
        self.tree = tree
        self.error: ParseError | None = None

    def unwrap(self) -> ParseTree:
        return self.tree

    def __repr__(self) -> str:
        return f"Parsed({self.tree!r})"


class Failed:
    """Failed parse outcome; `tree` is the partial tree up to the mismatch."""

    ok = False

    def __init__(self, error: ParseError, tree: ParseTree) -> None:
        self.error = error
        self.tree = tree

    def unwrap(self) -> ParseTree:
        raise self.error

    def __repr__(self) -> str:
        return f"Failed({self.error!r})"


ParseOutcome = Union[Parsed, Failed]

__all__ = [
    "Failed",
    "NestingTooDeep",
    "ParseError",
    "ParseOutcome",
    "Parsed",
    "SyntaxMismatch",
]
