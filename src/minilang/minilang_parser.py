"""
MINILANG Parser

Recognizes MINILANG programs with LL(1) predictive parsing and records the
derivation as a parse tree through a tree sink.

Grammar
-------
    Program     ::= StmtList EOF
    StmtList    ::= <stmt> StmtList | <<EMPTY>>
    <stmt>      ::= ID ASSIGN_OP Expr
                  | READ ID
                  | WRITE Expr
                  | <if_stmt> | <while_stmt> | <do_until_stmt>
    <if_stmt>   ::= IF <condition> THEN StmtList [<else_part>] FI
    <else_part> ::= ELSE StmtList
    <while_stmt>    ::= WHILE <condition> DO StmtList OD
    <do_until_stmt> ::= DO StmtList UNTIL <condition>
    <condition> ::= Expr REL_OP Expr
    Expr        ::= Expo
    Expo        ::= Term TermTail
    TermTail    ::= ADD_OP Term TermTail | <<EMPTY>>
    Term        ::= Factor FactorTail
    FactorTail  ::= MULT_OP Factor FactorTail | <<EMPTY>>
    Factor      ::= LEFT_PAREN Expr RIGHT_PAREN | ID | NUMBER

Parser Behavior
---------------
- Every rule creates its own node before consuming anything; terminals are
  attached as `<KIND>` nodes holding their lexeme, epsilon choices as `<<EMPTY>>`.
- Alternatives are chosen from the current token kind only; spellings are never
  inspected here.
- Rules return ``None`` on success or the `SyntaxMismatch` that stopped them.
  The first mismatch is returned unchanged up to `analyze()`, which reports it.
- `StmtList`, `TermTail` and `FactorTail` repeat in a loop, nesting each new tail
  node under the previous one, so statement count does not grow the call stack.

Entry Points
------------
- `analyze()`: Run the start rule against the configured sink, returning a
  `Parsed` or `Failed` outcome. Never raises on malformed input; nesting that
  exhausts the interpreter stack is reported as `NestingTooDeep`.
- `parse()`: Same, against a fresh in-memory `TreeBuilder`; the configured sink
  is left untouched.
"""

from __future__ import annotations

import logging

from minilang.minilang_constants import STMT_FIRST, TokenKind
from minilang.minilang_errors import (
    Failed,
    NestingTooDeep,
    ParseError,
    ParseOutcome,
    Parsed,
    SyntaxMismatch,
)
from minilang.minilang_lexer import TokenStream
from minilang.minilang_tree import ParseTree
from minilang.sinks.tree_builder import TreeBuilder, TreeSink

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "PARSE TREE"


class Parser:
    """
    MINILANG Parser Class

    Attributes
    ----------
    tokens : TokenStream
        Source of the lookahead token.
    sink : TreeSink
        Receives node-creation and error events.
    """

    def __init__(self, tokens: TokenStream, sink: TreeSink | None = None) -> None:
        self.tokens: TokenStream = tokens
        self.sink: TreeSink = sink if sink is not None else TreeBuilder()

    # Entry points

    def parse(self, title: str = DEFAULT_TITLE) -> ParseOutcome:
        """
        Parse the whole token stream into a fresh in-memory tree.

        The sink given to the constructor receives no events and is restored
        afterwards.

        Args:
            title (str): Title of the run root.

        Returns:
            ParseOutcome: `Parsed` with the tree, or `Failed` with the first error.
        """
        configured, self.sink = self.sink, TreeBuilder()
        try:
            return self.analyze(title)
        finally:
            self.sink = configured

    def analyze(self, title: str = DEFAULT_TITLE) -> ParseOutcome:
        """
        Open a run, derive the start symbol, report any error, close the run.

        This is the only place errors are reported to the sink.

        Args:
            title (str): Title of the run root.

        Returns:
            ParseOutcome: `Parsed` with the sink's tree, or `Failed` with the
            first error and the partial tree.
        """
        root = self.sink.open_run(title)
        logger.debug("Parsing %r", title)
        error: ParseError | None
        try:
            error = self.begin_parsing(root)
        except RecursionError:
            tok = self.tokens.current()
            error = NestingTooDeep(tok.lexeme, node=root, line=tok.line, col=tok.col)
        if error is not None:
            anchor = error.node if error.node is not None else root
            self.sink.report_syntax_error(error.message, anchor)
            logger.error("%s", error.message)
        self.sink.close_run()

        tree = getattr(self.sink, "tree", None)
        if not isinstance(tree, ParseTree):
            tree = ParseTree(title)
        if error is not None:
            return Failed(error, tree)
        logger.debug("Parsed %r: %d nodes", title, len(tree))
        return Parsed(tree)

    def begin_parsing(self, parent: int) -> SyntaxMismatch | None:
        """Derive `Program` under the run root; returns the first mismatch, if any."""
        return self.parse_program(parent)

    # Plumbing

    def match(self, parent: int, expected: TokenKind) -> SyntaxMismatch | None:
        """Consume the lookahead as a `<KIND>` terminal if it is `expected`."""
        if self.tokens.current_kind() is not expected:
            return self.mismatch(expected, parent)
        node = self.sink.add_nonterminal(parent, f"<{expected.name}>")
        self.sink.add_terminal(node, self.tokens.current_lexeme())
        self.tokens.advance()
        return None

    def mismatch(self, expected: TokenKind, parent: int) -> SyntaxMismatch:
        """Build the error for the current lookahead, anchored at `parent`."""
        tok = self.tokens.current()
        return SyntaxMismatch(
            expected, tok.kind, tok.lexeme, node=parent, line=tok.line, col=tok.col
        )

    def empty(self, parent: int) -> None:
        """Record an epsilon choice under `parent`."""
        self.sink.add_empty(parent)

    # Statements

    def parse_program(self, parent: int) -> SyntaxMismatch | None:
        """Parse `Program ::= StmtList EOF`."""
        node = self.sink.add_nonterminal(parent, "Program")
        return self.parse_stmt_list(node) or self.match(node, TokenKind.EOF)

    def parse_stmt_list(self, parent: int) -> SyntaxMismatch | None:
        """Parse a possibly empty run of statements, stopping outside FIRST(stmt)."""
        node = self.sink.add_nonterminal(parent, "StmtList")
        while self.tokens.current_kind() in STMT_FIRST:
            error = self.parse_stmt(node)
            if error:
                return error
            node = self.sink.add_nonterminal(node, "StmtList")
        self.empty(node)
        return None

    def parse_stmt(self, parent: int) -> SyntaxMismatch | None:
        """Parse one statement, choosing the alternative from the lookahead kind."""
        node = self.sink.add_nonterminal(parent, "<stmt>")
        kind = self.tokens.current_kind()

        if kind is TokenKind.ID:
            return (
                self.match(node, TokenKind.ID)
                or self.match(node, TokenKind.ASSIGN_OP)
                or self.parse_expr(node)
            )
        if kind is TokenKind.READ:
            return self.match(node, TokenKind.READ) or self.match(node, TokenKind.ID)
        if kind is TokenKind.WRITE:
            return self.match(node, TokenKind.WRITE) or self.parse_expr(node)
        if kind is TokenKind.IF:
            return self.parse_if(node)
        if kind is TokenKind.WHILE:
            return self.parse_while(node)
        if kind is TokenKind.DO:
            return self.parse_do_until(node)

        self.empty(node)
        return None

    def parse_if(self, parent: int) -> SyntaxMismatch | None:
        """Parse an IF statement with an optional ELSE part."""
        node = self.sink.add_nonterminal(parent, "<if_stmt>")
        error = (
            self.match(node, TokenKind.IF)
            or self.parse_condition(node)
            or self.match(node, TokenKind.THEN)
            or self.parse_stmt_list(node)
        )
        if error:
            return error
        if self.tokens.current_kind() is TokenKind.ELSE:
            error = self.parse_else_part(node)
            if error:
                return error
        return self.match(node, TokenKind.FI)

    def parse_else_part(self, parent: int) -> SyntaxMismatch | None:
        """Parse the ELSE branch of an IF statement."""
        node = self.sink.add_nonterminal(parent, "<else_part>")
        return self.match(node, TokenKind.ELSE) or self.parse_stmt_list(node)

    def parse_while(self, parent: int) -> SyntaxMismatch | None:
        """Parse a WHILE loop with condition and body."""
        node = self.sink.add_nonterminal(parent, "<while_stmt>")
        return (
            self.match(node, TokenKind.WHILE)
            or self.parse_condition(node)
            or self.match(node, TokenKind.DO)
            or self.parse_stmt_list(node)
            or self.match(node, TokenKind.OD)
        )

    def parse_do_until(self, parent: int) -> SyntaxMismatch | None:
        """Parse a DO ... UNTIL loop; the body precedes the condition."""
        node = self.sink.add_nonterminal(parent, "<do_until_stmt>")
        return (
            self.match(node, TokenKind.DO)
            or self.parse_stmt_list(node)
            or self.match(node, TokenKind.UNTIL)
            or self.parse_condition(node)
        )

    def parse_condition(self, parent: int) -> SyntaxMismatch | None:
        """Parse a relational condition `Expr REL_OP Expr`."""
        node = self.sink.add_nonterminal(parent, "<condition>")
        return (
            self.parse_expr(node)
            or self.match(node, TokenKind.REL_OP)
            or self.parse_expr(node)
        )

    # Expressions

    def parse_expr(self, parent: int) -> SyntaxMismatch | None:
        node = self.sink.add_nonterminal(parent, "Expr")
        return self.parse_expo(node)

    def parse_expo(self, parent: int) -> SyntaxMismatch | None:
        node = self.sink.add_nonterminal(parent, "Expo")
        return self.parse_term(node) or self.parse_term_tail(node)

    def parse_term_tail(self, parent: int) -> SyntaxMismatch | None:
        """Parse zero or more `ADD_OP Term` pairs."""
        node = self.sink.add_nonterminal(parent, "TermTail")
        while self.tokens.current_kind() is TokenKind.ADD_OP:
            error = self.match(node, TokenKind.ADD_OP) or self.parse_term(node)
            if error:
                return error
            node = self.sink.add_nonterminal(node, "TermTail")
        self.empty(node)
        return None

    def parse_term(self, parent: int) -> SyntaxMismatch | None:
        node = self.sink.add_nonterminal(parent, "Term")
        return self.parse_factor(node) or self.parse_factor_tail(node)

    def parse_factor_tail(self, parent: int) -> SyntaxMismatch | None:
        """Parse zero or more `MULT_OP Factor` pairs."""
        node = self.sink.add_nonterminal(parent, "FactorTail")
        while self.tokens.current_kind() is TokenKind.MULT_OP:
            error = self.match(node, TokenKind.MULT_OP) or self.parse_factor(node)
            if error:
                return error
            node = self.sink.add_nonterminal(node, "FactorTail")
        self.empty(node)
        return None

    def parse_factor(self, parent: int) -> SyntaxMismatch | None:
        """Parse a parenthesized expression, an identifier or a number."""
        node = self.sink.add_nonterminal(parent, "Factor")
        kind = self.tokens.current_kind()

        if kind is TokenKind.LEFT_PAREN:
            return (
                self.match(node, TokenKind.LEFT_PAREN)
                or self.parse_expr(node)
                or self.match(node, TokenKind.RIGHT_PAREN)
            )
        if kind is TokenKind.ID:
            return self.match(node, TokenKind.ID)
        if kind is TokenKind.NUMBER:
            return self.match(node, TokenKind.NUMBER)
        return self.mismatch(TokenKind.LEFT_PAREN, node)


def parse_source(source: str, title: str = DEFAULT_TITLE) -> ParseOutcome:
    """Lex and parse `source` with the default spellings."""
    return Parser(TokenStream.from_source(source)).parse(title)


__all__ = ["DEFAULT_TITLE", "Parser", "parse_source"]
