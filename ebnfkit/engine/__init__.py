# ebnfkit/engine/__init__.py
"""Recursive-descent match engine over compiled grammars."""

from .node import ParseNode, TERMINAL, CHARACTER
from .matcher import Matcher, DEFAULT_MAX_DEPTH
from .runtime import match, GrammarProgram, GrammarRunner
