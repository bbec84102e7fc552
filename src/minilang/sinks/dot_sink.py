"""
Renders a MINILANG parse tree as a GraphViz `digraph`.

The output can be pasted into WebGraphViz or piped to `dot -Tpng`. Nonterminals are
ellipses, terminals are boxes labeled with their token kind and lexeme, epsilon
markers are plaintext `ε` nodes, and a syntax error becomes a red note attached to
the node it was detected at.
"""

from minilang.minilang_tree import EMPTY, ROOT, TERMINAL, ParseNode
from minilang.sinks.tree_builder import TreeBuilder


def _quote(text: str) -> str:
    return '"' + text.replace("\\", "\\\\").replace('"', '\\"') + '"'


class DotSink(TreeBuilder):
    """Tree sink producing GraphViz DOT text."""

    def node_attrs(self, node: ParseNode) -> str:
        if node.kind == TERMINAL:
            label = _quote(f"{node.label}\n{node.lexeme}").replace("\n", "\\n")
            return f"shape=box, label={label}"
        if node.kind == EMPTY:
            return 'shape=plaintext, label="ε"'
        if node.kind == ROOT:
            return f"shape=doubleoctagon, label={_quote(node.label)}"
        return f"shape=ellipse, label={_quote(node.label)}"

    def get_output(self) -> str:
        if self.tree is None:
            return ""
        tree = self.tree
        lines = ["digraph ParseTree {", "  ordering=out;"]
        for _, node in tree.walk():
            lines.append(f"  n{node.index} [{self.node_attrs(node)}];")
        for _, node in tree.walk():
            for child in node.children:
                lines.append(f"  n{node.index} -> n{child};")
        if tree.error is not None:
            lines.append(
                f"  error [shape=note, color=red, fontcolor=red, label={_quote(tree.error)}];"
            )
            if tree.error_node is not None:
                lines.append(f"  n{tree.error_node} -> error [color=red, style=dashed];")
        lines.append("}")
        return "\n".join(lines)
