# ebnfkit/grammar/__init__.py
"""Grammar compiler: EBNF-like rule text -> immutable Grammar of Expressions."""

from .ast import (
    Alternation, Concatenation, Repetition, Opt, Terminal, CharacterRange,
    NonTerminal, Empty, Expression, Grammar, UNBOUNDED,
)
from .parser import compile_grammar, strip_comments
