"""
The tree sink interface driven by the MINILANG parser, and its in-memory implementation.

Classes:
    TreeSink (Protocol): Operations the parser calls while deriving a program.
    TreeBuilder: Records every event into an arena `ParseTree`; other sinks extend it
        and only change how the finished tree is rendered by `get_output()`.
"""

import json
from typing import Protocol

from minilang.minilang_tree import EMPTY, EMPTY_LABEL, NONTERMINAL, ParseTree


class TreeSink(Protocol):  # pragma: no cover
    """Protocol for everything the parser can emit parse events into."""

    def open_run(self, title: str) -> int: ...

    def add_nonterminal(self, parent: int, label: str) -> int: ...

    def add_terminal(self, node: int, lexeme: str) -> None: ...

    def add_empty(self, parent: int) -> None: ...

    def report_syntax_error(self, message: str, node: int) -> None: ...

    def close_run(self) -> None: ...

    def get_output(self) -> str: ...


class TreeBuilder:
    """Accumulates parse events into a `ParseTree`.

    Attributes:
        tree (ParseTree | None): The tree of the current (or last) run.
        closed (bool): True once `close_run()` has been called for the current run.
    """

    def __init__(self) -> None:
        self.tree: ParseTree | None = None
        self.closed = False

    def _require_tree(self) -> ParseTree:
        if self.tree is None:
            raise RuntimeError("open_run() must be called before adding nodes")
        if self.closed:
            raise RuntimeError("Run already closed")
        return self.tree

    def open_run(self, title: str) -> int:
        self.tree = ParseTree(title)
        self.closed = False
        return self.tree.root

    def add_nonterminal(self, parent: int, label: str) -> int:
        return self._require_tree().add_node(parent, NONTERMINAL, label)

    def add_terminal(self, node: int, lexeme: str) -> None:
        self._require_tree().attach_lexeme(node, lexeme)

    def add_empty(self, parent: int) -> None:
        self._require_tree().add_node(parent, EMPTY, EMPTY_LABEL)

    def report_syntax_error(self, message: str, node: int) -> None:
        self._require_tree().mark_error(message, node)

    def close_run(self) -> None:
        self._require_tree()
        self.closed = True

    def get_output(self) -> str:
        """Returns the flat node list as indented JSON, with the error when present."""
        if self.tree is None:
            return ""
        payload: dict[str, object] = dict(self.tree.to_dict())
        if self.tree.error is not None:
            payload["error"] = {"message": self.tree.error, "node": self.tree.error_node}
        return json.dumps(payload, indent=2, ensure_ascii=False)
