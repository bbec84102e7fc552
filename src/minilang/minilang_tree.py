"""
Defines the parse tree structure produced by the MINILANG parser.

Classes:
    ParseNode:
        One labeled node of the derivation: the run root, a nonterminal, a terminal
        (token kind label plus its lexeme) or an empty (epsilon) marker.

    ParseTree:
        Arena holding every ParseNode of one run. Node handles are integer indices
        into the arena, children are stored as index lists, and index 0 is the run
        root. Walks and serialization are iterative so that long statement lists do
        not grow the Python call stack.

    NodeDict:
        TypedDict representation of one serialized node, suitable for JSON output.

    TreeDict:
        TypedDict of a whole serialized tree: the title plus the flat node list.

Example:
    tree = ParseTree("PARSE TREE")
    program = tree.add_node(tree.root, NONTERMINAL, "Program")
"""

from collections.abc import Iterator
from typing import Any, TypedDict

ROOT = "root"
NONTERMINAL = "nonterminal"
TERMINAL = "terminal"
EMPTY = "empty"

EMPTY_LABEL = "<<EMPTY>>"

NODE_KINDS = frozenset({ROOT, NONTERMINAL, TERMINAL, EMPTY})


class NodeDict(TypedDict):
    """
    Serialized form of a ParseNode.

    Fields:
        index (int): Handle of the node.
        kind (str): One of "root", "nonterminal", "terminal", "empty".
        label (str): Grammar symbol name, `<KIND>` for terminals, `<<EMPTY>>` for epsilon.
        lexeme (str | None): Literal text for terminals, None otherwise.
        parent (int | None): Handle of the parent, None for the root.
        children (list[int]): Handles of the children, in production order.
    """

    index: int
    kind: str
    label: str
    lexeme: str | None
    parent: int | None
    children: list[int]


class TreeDict(TypedDict):
    title: str
    root: int
    nodes: list[NodeDict]


class ParseNode:
    """
    A node in the parse tree arena.

    Attributes:
        index (int): Handle of this node inside its tree.
        kind (str): Node category (root, nonterminal, terminal, empty).
        label (str): Display label.
        parent (int | None): Handle of the parent, None for the root.
        children (list[int]): Handles of the children, in production order.
        lexeme (str | None): Attached literal text, terminals only.
    """

    def __init__(
        self, index: int, kind: str, label: str, parent: int | None = None
    ) -> None:
        self.index = index
        self.kind = kind
        self.label = label
        self.parent = parent
        self.children: list[int] = []
        self.lexeme: str | None = None

    def __repr__(self) -> str:
        parts = [f"{self.index}", self.kind, repr(self.label)]
        if self.lexeme is not None:
            parts.append(f"lexeme={self.lexeme!r}")
        if self.children:
            parts.append(f"children={self.children}")
        return f"ParseNode({', '.join(parts)})"

    @property
    def is_leaf(self) -> bool:
        return self.kind in (TERMINAL, EMPTY)


class ParseTree:
    """Arena-backed parse tree for a single run.

    Attributes:
        title (str): Title passed when the run was opened.
        nodes (list[ParseNode]): All nodes, in creation (pre-order) order.
        error (str | None): Syntax error message, if the run failed.
        error_node (int | None): Handle the error is anchored at.
    """

    def __init__(self, title: str) -> None:
        self.title = title
        self.nodes: list[ParseNode] = [ParseNode(0, ROOT, title)]
        self.error: str | None = None
        self.error_node: int | None = None

    @property
    def root(self) -> int:
        return 0

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, handle: int) -> ParseNode:
        return self.nodes[handle]

    def add_node(self, parent: int, kind: str, label: str) -> int:
        """Creates a node and appends it to `parent`'s children; returns its handle."""
        if kind not in NODE_KINDS or kind == ROOT:
            raise ValueError(f"Cannot add node of kind {kind!r}")
        owner = self.nodes[parent]
        if owner.is_leaf:
            raise ValueError(f"Cannot attach children to {owner.kind} node {parent}")
        handle = len(self.nodes)
        self.nodes.append(ParseNode(handle, kind, label, parent))
        owner.children.append(handle)
        return handle

    def attach_lexeme(self, handle: int, lexeme: str) -> None:
        """Turns a freshly created token node into a terminal carrying `lexeme`."""
        node = self.nodes[handle]
        if node.children or node.lexeme is not None or node.kind == ROOT:
            raise ValueError(f"Node {handle} cannot take a lexeme")
        node.kind = TERMINAL
        node.lexeme = lexeme

    def mark_error(self, message: str, handle: int) -> None:
        self.error = message
        self.error_node = handle

    def children(self, handle: int) -> list[ParseNode]:
        return [self.nodes[c] for c in self.nodes[handle].children]

    def walk(self, start: int = 0) -> Iterator[tuple[int, ParseNode]]:
        """Yields `(depth, node)` pairs in pre-order, without recursion."""
        stack: list[tuple[int, int]] = [(0, start)]
        while stack:
            depth, handle = stack.pop()
            node = self.nodes[handle]
            yield depth, node
            for child in reversed(node.children):
                stack.append((depth + 1, child))

    def leaves(self) -> list[str]:
        """Returns the lexemes of all terminal leaves, left to right."""
        return [
            node.lexeme
            for _, node in self.walk()
            if node.kind == TERMINAL and node.lexeme is not None
        ]

    def find(self, label: str) -> list[ParseNode]:
        return [node for _, node in self.walk() if node.label == label]

    def program(self) -> ParseNode | None:
        """Returns the start symbol's node, if the parse got as far as creating it."""
        root = self.nodes[0]
        return self.nodes[root.children[0]] if root.children else None

    def shape(self) -> list[tuple[int, str, str, str | None]]:
        return [(d, n.kind, n.label, n.lexeme) for d, n in self.walk()]

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ParseTree):
            return False
        return (
            self.title == other.title
            and self.error == other.error
            and self.shape() == other.shape()
        )

    def __repr__(self) -> str:
        return f"ParseTree({self.title!r}, nodes={len(self.nodes)}, error={self.error!r})"

    def to_dict(self) -> TreeDict:
        """
        Serializes the arena as a flat node list.

        Children are referenced by handle, so the nesting depth of the result is
        fixed regardless of program length.
        """
        return {
            "title": self.title,
            "root": self.root,
            "nodes": [
                {
                    "index": node.index,
                    "kind": node.kind,
                    "label": node.label,
                    "lexeme": node.lexeme,
                    "parent": node.parent,
                    "children": list(node.children),
                }
                for node in self.nodes
            ],
        }

    def to_text(self, indent: str = "  ") -> str:
        lines: list[str] = []
        for depth, node in self.walk():
            if node.kind == TERMINAL:
                lines.append(f"{indent * depth}{node.label} {node.lexeme!r}")
            else:
                lines.append(f"{indent * depth}{node.label}")
        return "\n".join(lines)


__all__ = [
    "EMPTY",
    "EMPTY_LABEL",
    "NONTERMINAL",
    "NodeDict",
    "ParseNode",
    "ParseTree",
    "ROOT",
    "TERMINAL",
    "TreeDict",
]
