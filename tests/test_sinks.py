import json

import pytest

from minilang.minilang_lexer import TokenStream
from minilang.minilang_parser import Parser
from minilang.sinks.dot_sink import DotSink
from minilang.sinks.text_sink import TextSink
from minilang.sinks.tree_builder import TreeBuilder


def run(sink: TreeBuilder, source: str, title: str = "PARSE TREE") -> str:
    Parser(TokenStream.from_source(source), sink).analyze(title)
    return sink.get_output()


def test_builder_requires_open_run() -> None:
    builder = TreeBuilder()
    assert builder.get_output() == ""
    with pytest.raises(RuntimeError):
        builder.add_nonterminal(0, "Program")


def test_builder_rejects_events_after_close() -> None:
    builder = TreeBuilder()
    root = builder.open_run("T")
    builder.close_run()
    with pytest.raises(RuntimeError):
        builder.add_empty(root)


def test_builder_reopen_starts_new_tree() -> None:
    builder = TreeBuilder()
    builder.open_run("first")
    builder.add_nonterminal(0, "Program")
    builder.close_run()
    builder.open_run("second")
    assert builder.tree is not None
    assert builder.tree.title == "second"
    assert len(builder.tree) == 1


def test_builder_json_output() -> None:
    payload = json.loads(run(TreeBuilder(), "read n"))
    nodes = payload["nodes"]
    assert payload["title"] == "PARSE TREE"
    assert nodes[0]["label"] == "PARSE TREE"
    program = nodes[nodes[0]["children"][0]]
    assert program["label"] == "Program"
    assert program["parent"] == 0
    assert [nodes[c]["label"] for c in program["children"]] == ["StmtList", "<EOF>"]
    assert "error" not in payload


def test_builder_json_error() -> None:
    payload = json.loads(run(TreeBuilder(), "read"))
    assert payload["error"]["message"] == (
        "SYNTAX ERROR: 'ID' was expected but '$$' was found."
    )
    assert isinstance(payload["error"]["node"], int)


def test_text_output() -> None:
    out = run(TextSink(), "x := 5 .")
    lines = out.splitlines()
    assert lines[0] == "=== PARSE TREE ==="
    assert lines[1] == "Program"
    assert lines[2] == "  StmtList"
    assert "      <ID> 'x'" in lines
    assert lines[-2] == "  <EOF> '.'"
    assert lines[-1] == "=== END ==="


def test_text_output_error() -> None:
    out = TextSink(indent="\t")
    text = run(out, "if n < 10 then write n", title="demo")
    assert text.splitlines()[0] == "=== demo ==="
    assert "!!! SYNTAX ERROR: 'FI' was expected but '$$' was found. (at <if_stmt>)" in text
    assert "\t\t\t<if_stmt>" in text


def test_dot_output() -> None:
    out = run(DotSink(), "x := 5 .")
    assert out.startswith("digraph ParseTree {")
    assert out.endswith("}")
    assert 'n0 [shape=doubleoctagon, label="PARSE TREE"];' in out
    assert 'n1 [shape=ellipse, label="Program"];' in out
    assert "n0 -> n1;" in out
    assert 'label="<ID>\\nx"' in out
    assert 'label="ε"' in out
    assert "error" not in out


def test_dot_output_error_and_escaping() -> None:
    out = run(DotSink(), 'x := "')
    assert "error [shape=note, color=red" in out
    assert "'\\\"' was found" in out
    assert "-> error [color=red, style=dashed];" in out
