"""
Lexical analyzer and token source for the MINILANG language.

This module converts raw source text into the token stream consumed by the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with kind, lexeme, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    TokenStream: Cursor over a token list exposing the lookahead to the parser.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Classifies words and symbols through a `SpellingTable` (longest match for symbols)
    - Recognizes integer and decimal numbers
    - Stops at an explicit end marker (`.` or `$$`), or at end of text
    - Emits `UNKNOWN` tokens for characters the table does not know

Example:
    >>> stream = TokenStream.from_source("x := 5 .")
    >>> stream.current_kind()
    <TokenKind.ID: 'ID'>
"""

import logging
from typing import Any

from minilang.minilang_constants import IMPLICIT_EOF_LEXEME, TokenKind
from minilang.minilang_spellings import SpellingTable

logger = logging.getLogger(__name__)


class CharacterStream:
    """
    Reads characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def startswith(self, text: str) -> bool:
        return self.source.startswith(text, self.position)

    def remainder(self) -> str:
        return self.source[self.position :]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """A single lexical token.

    Attributes:
        kind (TokenKind): The token's terminal category.
        lexeme (str): The literal text realizing the token.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, kind: TokenKind, lexeme: str, line: int = 0, col: int = 0):
        self.kind = kind
        self.lexeme = lexeme
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.lexeme})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.kind == other.kind
            and self.lexeme == other.lexeme
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.lexeme, self.line, self.col))


class Lexer:
    """Lexical analyzer for MINILANG.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
        spellings (SpellingTable): Spelling → kind classification table.
        finished (bool): True once the EOF token has been produced.
    """

    def __init__(
        self, stream: CharacterStream, spellings: SpellingTable | None = None
    ) -> None:
        self.stream = stream
        self.spellings = spellings or SpellingTable.from_defaults()
        self.finished = False
        self._symbols = self.spellings.symbols()

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek().isspace():
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def match_symbol(self) -> Token | None:
        """Attempts to match the longest known symbol at the current position."""
        line, col = self.stream.line, self.stream.column
        for symbol in self._symbols:
            if self.stream.startswith(symbol):
                for _ in range(len(symbol)):
                    self.advance()
                kind = self.spellings.lookup(symbol)
                assert kind is not None  # for mypy
                return Token(kind, symbol, line, col)
        return None

    def _end_of_input(self) -> Token:
        self.finished = True
        return Token(
            TokenKind.EOF, IMPLICIT_EOF_LEXEME, self.stream.line, self.stream.column
        )

    def next_token(self) -> Token:
        """Consumes and returns the next Token; EOF forever once input is exhausted."""
        if self.finished:
            return Token(
                TokenKind.EOF, IMPLICIT_EOF_LEXEME, self.stream.line, self.stream.column
            )

        self.skip_whitespace()

        if self.stream.end_of_file():
            return self._end_of_input()

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Word: keyword or identifier
        if ch.isalpha() or ch == "_":
            word = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                word += self.advance()
            kind = self.spellings.lookup(word)
            return Token(kind or TokenKind.ID, word, line, col)

        # 2. Number, with optional fraction
        if ch.isdigit():
            num = ""
            while self.peek().isdigit():
                num += self.advance()
            if self.peek() == "." and self.stream.peek(1).isdigit():
                num += self.advance()
                while self.peek().isdigit():
                    num += self.advance()
            return Token(TokenKind.NUMBER, num, line, col)

        # 3. Operator, punctuation or explicit end marker
        token = self.match_symbol()
        if token:
            if token.kind is TokenKind.EOF:
                self.finished = True
                trailing = self.stream.remainder().strip()
                if trailing:
                    logger.warning(
                        "Ignoring text after end marker %r at line %d, col %d: %r",
                        token.lexeme,
                        line,
                        col,
                        trailing,
                    )
            return token

        # 4. Unknown character
        return Token(TokenKind.UNKNOWN, self.advance(), line, col)

    def tokenize(self) -> list[Token]:
        """Returns every token up to and including the EOF token."""
        tokens: list[Token] = []
        while True:
            tok = self.next_token()
            tokens.append(tok)
            if tok.kind is TokenKind.EOF:
                return tokens


class TokenStream:
    """Cursor over a token list; the parser's only view of the input.

    Advancing past the final EOF token keeps yielding EOF.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens: list[Token] = list(tokens)
        if not self.tokens or self.tokens[-1].kind is not TokenKind.EOF:
            last = self.tokens[-1] if self.tokens else None
            self.tokens.append(
                Token(
                    TokenKind.EOF,
                    IMPLICIT_EOF_LEXEME,
                    last.line if last else 0,
                    last.col if last else 0,
                )
            )
        self.position: int = 0

    @classmethod
    def from_source(
        cls, source: str, spellings: SpellingTable | None = None
    ) -> "TokenStream":
        return cls(Lexer(CharacterStream(source), spellings).tokenize())

    def current(self) -> Token:
        return self.tokens[min(self.position, len(self.tokens) - 1)]

    def current_kind(self) -> TokenKind:
        return self.current().kind

    def current_lexeme(self) -> str:
        return self.current().lexeme

    def advance(self) -> None:
        """Moves to the next token; stays on EOF once it is reached."""
        if self.current().kind is not TokenKind.EOF:
            self.position += 1

    def at_end(self) -> bool:
        return self.current_kind() is TokenKind.EOF


__all__ = ["CharacterStream", "Lexer", "Token", "TokenStream"]
