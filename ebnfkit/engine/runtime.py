# ebnfkit/engine/runtime.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from ..errors import IncompleteParse, ParseFailedAtStart
from ..grammar.ast import Grammar
from ..grammar.parser import compile_grammar
from .matcher import DEFAULT_MAX_DEPTH, Matcher
from .node import ParseNode

logger = logging.getLogger(__name__)


def match(grammar: Grammar, rule_name: Optional[str] = None, text: str = "", *,
          max_depth: int = DEFAULT_MAX_DEPTH, trace: bool = False) -> ParseNode:
    """Parse the whole of `text` as `rule_name` (default: the start rule).

    Raises UnknownRule, ParseFailedAtStart, IncompleteParse or
    RecursionLimitExceeded. With `trace=True` the failure errors also carry
    the furthest position reached and what was expected there.
    """
    name = rule_name if rule_name is not None else grammar.start
    m = Matcher(grammar, max_depth=max_depth, trace=trace)
    logger.debug("match rule=%s len=%d", name, len(text))
    node = m.match_rule(name, text, 0)
    if node is None:
        logger.debug("match rule=%s failed at start", name)
        raise ParseFailedAtStart(name, *m.diagnostics())
    if node.end < len(text):
        logger.debug("match rule=%s stopped at %d of %d", name, node.end, len(text))
        raise IncompleteParse(name, text[node.end:], node.end, *m.diagnostics())
    return node


@dataclass
class GrammarProgram:
    """Compiled grammar, reusable across any number of matches."""
    grammar: Grammar

    @classmethod
    def from_source(cls, src: str, *, strict: bool = False) -> "GrammarProgram":
        return cls(compile_grammar(src, strict=strict))


class GrammarRunner:
    """Match input text against a program's grammar."""
    def __init__(self, program: GrammarProgram, *,
                 max_depth: int = DEFAULT_MAX_DEPTH, trace: bool = False):
        self.program = program
        self.max_depth = max_depth
        self.trace = trace

    def run(self, text: str, rule_name: Optional[str] = None) -> ParseNode:
        return match(self.program.grammar, rule_name, text,
                     max_depth=self.max_depth, trace=self.trace)
