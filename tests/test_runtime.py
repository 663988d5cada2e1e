# tests/test_runtime.py
import json

import pytest

import ebnfkit
from ebnfkit.engine.node import TERMINAL, ParseNode
from ebnfkit.engine.runtime import GrammarProgram, GrammarRunner
from ebnfkit.errors import IncompleteParse


def test_package_level_compile_and_match():
    g = ebnfkit.compile('greeting ::= "hello" | "hi"')
    assert ebnfkit.match(g, None, "hi").children[0].value == "hi"
    assert isinstance(g, ebnfkit.Grammar)


def test_program_is_compiled_once_and_reused(arith_src):
    prog = GrammarProgram.from_source(arith_src)
    runner = GrammarRunner(prog)
    assert runner.run("3+4").end == 3
    assert runner.run("42", rule_name="term").type == "term"
    with pytest.raises(IncompleteParse):
        runner.run("3+4 ")
    # matching leaves the grammar untouched
    assert prog.grammar.rule_names == ("expression", "term", "digit")


def test_runner_forwards_trace(arith_src):
    runner = GrammarRunner(GrammarProgram.from_source(arith_src), trace=True)
    with pytest.raises(IncompleteParse) as ei:
        runner.run("1*2")
    assert ei.value.furthest == 1


def test_node_to_dict_is_json_ready():
    g = ebnfkit.compile('pair ::= "a" "b"')
    d = ebnfkit.match(g, None, "ab").to_dict()
    assert json.loads(json.dumps(d)) == {
        "type": "pair", "value": "ab", "start": 0, "end": 2,
        "children": [
            {"type": TERMINAL, "value": "a", "start": 0, "end": 1, "children": []},
            {"type": TERMINAL, "value": "b", "start": 1, "end": 2, "children": []},
        ],
    }


def test_node_pretty_outline():
    g = ebnfkit.compile('a ::= "abc"')
    assert ebnfkit.match(g, None, "abc").pretty() == "a 'abc' [0-3]\n  terminal 'abc' [0-3]"


def test_node_walk_is_preorder(arith):
    root = ebnfkit.match(arith, None, "1+2")
    types = [n.type for n in root.walk()]
    assert types == ["expression", "term", "digit", "character",
                     TERMINAL, "term", "digit", "character"]


def test_node_is_immutable():
    node = ParseNode("x", "", 0, 0)
    assert node.is_leaf
    with pytest.raises(AttributeError):
        node.end = 1
