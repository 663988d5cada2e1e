# ebnfkit/__init__.py
"""ebnfkit: compile EBNF-like rule sets and match text against them.

This package provides:
- a grammar compiler producing an immutable Grammar of Expression nodes
- a recursive-descent matcher producing a positioned concrete syntax tree
- the `ebnfc` command line front end

    >>> g = compile('greeting ::= "hello" | "hi"')
    >>> match(g, None, "hi").children[0].value
    'hi'
"""

from .errors import (
    CompileError, NoRulesFound, UnrecognizedElementSyntax, InvalidRepetitionBounds,
    MatchError, UnknownRule, ParseFailedAtStart, IncompleteParse, RecursionLimitExceeded,
)
from .grammar import (
    Alternation, Concatenation, Repetition, Opt, Terminal, CharacterRange,
    NonTerminal, Empty, Expression, Grammar, UNBOUNDED, compile_grammar,
)
from .engine import ParseNode, Matcher, GrammarProgram, GrammarRunner, match

compile = compile_grammar

__version__ = "0.1.0"
