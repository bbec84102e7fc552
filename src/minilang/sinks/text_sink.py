"""
Renders a MINILANG parse tree as an indented text outline.

Output layout::

    === PARSE TREE ===
    Program
      StmtList
        <stmt>
          <ID> 'x'
    ...
    === END ===

When the run failed, the syntax error is appended after the outline together with
the label of the node it was detected at.
"""

from minilang.minilang_tree import TERMINAL
from minilang.sinks.tree_builder import TreeBuilder


class TextSink(TreeBuilder):
    """Tree sink producing a human-readable indented outline.

    Attributes:
        indent (str): Text repeated once per nesting level.
    """

    def __init__(self, indent: str = "  ") -> None:
        super().__init__()
        self.indent = indent

    def get_output(self) -> str:
        if self.tree is None:
            return ""
        tree = self.tree
        lines = [f"=== {tree.title} ==="]
        for depth, node in tree.walk():
            if node.index == tree.root:
                continue
            pad = self.indent * (depth - 1)
            if node.kind == TERMINAL:
                lines.append(f"{pad}{node.label} {node.lexeme!r}")
            else:
                lines.append(f"{pad}{node.label}")
        if tree.error is not None:
            anchor = tree[tree.error_node].label if tree.error_node is not None else "?"
            lines.append(f"!!! {tree.error} (at {anchor})")
        lines.append("=== END ===")
        return "\n".join(lines)
