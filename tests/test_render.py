import json

import pytest
from hypothesis import given
from hypothesis import strategies as st

from minilang.minilang_lexer import TokenStream
from minilang.minilang_render import SINKS, Renderer
from minilang.sinks.dot_sink import DotSink
from minilang.sinks.text_sink import TextSink
from minilang.sinks.tree_builder import TreeBuilder


@pytest.mark.parametrize(
    "target,sink_type",
    [
        ("text", TextSink),
        ("TEXT", TextSink),
        ("dot", DotSink),
        ("graphviz", DotSink),
        ("json", TreeBuilder),
        ("tree", TreeBuilder),
    ],
)
def test_target_selects_sink(target: str, sink_type: type) -> None:
    renderer = Renderer(target)
    assert type(renderer.sink) is sink_type
    assert renderer.target == target.lower()


@given(st.text(min_size=1).filter(lambda t: t.lower() not in SINKS))  # type: ignore[misc]
def test_unknown_target_raises(target: str) -> None:
    with pytest.raises(ValueError, match="Unknown render target"):
        Renderer(target)


def test_render_accepts() -> None:
    outcome, output = Renderer("json").render(TokenStream.from_source("write 1 ."))
    assert outcome.ok
    assert json.loads(output)["nodes"][1]["label"] == "Program"


def test_render_rejects_and_still_renders() -> None:
    outcome, output = Renderer("text").render(
        TokenStream.from_source("while x do od"), title="loop"
    )
    assert not outcome.ok
    assert output.startswith("=== loop ===")
    assert "'REL_OP' was expected but 'do' was found" in output
    assert output.endswith("=== END ===")


@pytest.mark.parametrize("source", ["read x " * 3000, "x := 1 " * 3000])
def test_json_target_handles_long_statement_lists(source: str) -> None:
    outcome, output = Renderer("json").render(TokenStream.from_source(source))
    assert outcome.ok
    nodes = json.loads(output)["nodes"]
    assert len(nodes) == len(outcome.tree)
    assert sum(1 for n in nodes if n["label"] == "StmtList") == 3001
