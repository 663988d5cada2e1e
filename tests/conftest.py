# tests/conftest.py
import pytest

from ebnfkit.grammar.parser import compile_grammar

ARITH = """\
(* arithmetic over single-digit-run numbers *)
expression ::= term (("+" | "-") term)*
term ::= digit+
digit ::= [0-9]   // one decimal digit
"""


@pytest.fixture
def arith_src() -> str:
    return ARITH


@pytest.fixture
def arith(arith_src):
    return compile_grammar(arith_src)


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, text: str) -> str:
        p = tmp_path / name
        p.write_text(text, encoding="utf-8")
        return str(p)
    return _write
