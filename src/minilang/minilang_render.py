"""
Provides the `Renderer` class that runs the MINILANG parser against a chosen tree sink.

Targets:
    - "text": indented outline (`TextSink`)
    - "dot" / "graphviz": GraphViz digraph (`DotSink`)
    - "json" / "tree": serialized arena tree (`TreeBuilder`)

Example:
    >>> renderer = Renderer("dot")
    >>> outcome, output = renderer.render(TokenStream.from_source("x := 1 ."))

Raises:
    ValueError: If the target is not supported.
"""

from minilang.minilang_errors import ParseOutcome
from minilang.minilang_lexer import TokenStream
from minilang.minilang_parser import DEFAULT_TITLE, Parser
from minilang.sinks.dot_sink import DotSink
from minilang.sinks.text_sink import TextSink
from minilang.sinks.tree_builder import TreeBuilder, TreeSink

SinkType = type[TreeBuilder]
"""Alias for a concrete sink class."""

SINKS: dict[str, SinkType] = {
    "text": TextSink,
    "dot": DotSink,
    "graphviz": DotSink,
    "json": TreeBuilder,
    "tree": TreeBuilder,
}


class Renderer:
    """Selects a tree sink by target name and drives the parser into it.

    Attributes:
        target (str): Normalized target name.
        sink (TreeSink): The sink instance used for the next render.
    """

    def __init__(self, target: str) -> None:
        target = target.lower()
        if target not in SINKS:
            raise ValueError(f"Unknown render target: {target!r}")
        self.target = target
        self.sink: TreeSink = SINKS[target]()

    def render(
        self, tokens: TokenStream, title: str = DEFAULT_TITLE
    ) -> tuple[ParseOutcome, str]:
        """Parses `tokens` into the sink and returns the outcome and rendered text."""
        outcome = Parser(tokens, self.sink).analyze(title)
        return outcome, self.sink.get_output()


__all__ = ["Renderer", "SINKS"]
