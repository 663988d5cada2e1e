# ebnfkit/engine/matcher.py
from __future__ import annotations
from typing import List, Optional, Set, Tuple

from ..errors import RecursionLimitExceeded
from ..grammar.ast import (
    Alternation, CharacterRange, Concatenation, Empty, Expression, Grammar,
    NonTerminal, Opt, Repetition, Terminal, UNBOUNDED,
)
from .node import CHARACTER, TERMINAL, ParseNode

# Recursive-descent engine:
# - Ordered choice: the first alternative that matches wins.
# - Greedy quantifiers, no backtracking into them when a later element fails.
# - Nothing is memoized; every rule application is evaluated afresh.
# - Left recursion is not supported; it runs into the depth ceiling and
#   fails with RecursionLimitExceeded.

DEFAULT_MAX_DEPTH = 400

# (position after the match, nodes contributed to the enclosing rule)
Result = Optional[Tuple[int, List[ParseNode]]]


class Matcher:
    def __init__(self, g: Grammar, *, max_depth: int = DEFAULT_MAX_DEPTH, trace: bool = False):
        self.g = g
        self.max_depth = max_depth
        self.trace = trace
        self._depth = 0
        self._rules: List[str] = []
        self._pos = 0
        # furthest failing leaf position and what was expected there
        self.furthest = -1
        self.expected: Set[str] = set()

    # ---- Public entrypoint for one rule ----
    def match_rule(self, rule_name: str, text: str, pos: int = 0) -> Optional[ParseNode]:
        self._depth = 0
        self._rules = []
        self.furthest = -1
        self.expected = set()
        try:
            return self._apply_rule(rule_name, text, pos)
        except RecursionError:
            # interpreter stack ran out before our own ceiling did
            rule = self._rules[-1] if self._rules else rule_name
            raise RecursionLimitExceeded(rule, self._pos, self.max_depth) from None

    def diagnostics(self) -> Tuple[Optional[int], Tuple[str, ...]]:
        if self.furthest < 0:
            return None, ()
        return self.furthest, tuple(sorted(self.expected))

    # ---- Rule application ----
    def _apply_rule(self, name: str, text: str, pos: int) -> Optional[ParseNode]:
        expr = self.g.require_rule(name)
        self._rules.append(name)
        try:
            res = self._eval(expr, text, pos)
        finally:
            self._rules.pop()
        if res is None:
            return None
        end, kids = res
        return ParseNode(name, text[pos:end], pos, end, tuple(kids))

    def _note_failure(self, pos: int, what: Expression) -> None:
        if pos > self.furthest:
            self.furthest = pos
            self.expected = {str(what)}
        elif pos == self.furthest:
            self.expected.add(str(what))

    # ---- Evaluator for expressions ----
    def _eval(self, node: Expression, text: str, pos: int) -> Result:
        self._depth += 1
        self._pos = pos
        if self._depth > self.max_depth:
            rule = self._rules[-1] if self._rules else "?"
            raise RecursionLimitExceeded(rule, pos, self.max_depth)
        try:
            if isinstance(node, Terminal):
                if text.startswith(node.literal, pos):
                    end = pos + len(node.literal)
                    return end, [ParseNode(TERMINAL, text[pos:end], pos, end)]
                if self.trace:
                    self._note_failure(pos, node)
                return None

            if isinstance(node, CharacterRange):
                if pos < len(text) and node.contains(text[pos]):
                    return pos + 1, [ParseNode(CHARACTER, text[pos], pos, pos + 1)]
                if self.trace:
                    self._note_failure(pos, node)
                return None

            if isinstance(node, NonTerminal):
                child = self._apply_rule(node.name, text, pos)
                if child is None:
                    return None
                return child.end, [child]

            if isinstance(node, Empty):
                return pos, []

            if isinstance(node, Opt):
                res = self._eval(node.element, text, pos)
                return res if res is not None else (pos, [])

            if isinstance(node, Repetition):
                cur = pos
                kids: List[ParseNode] = []
                count = 0
                while node.max is UNBOUNDED or count < node.max:
                    res = self._eval(node.element, text, cur)
                    if res is None:
                        break
                    end, sub = res
                    if node.max is UNBOUNDED and end == cur and count >= node.min:
                        # a zero-length iteration would repeat forever
                        break
                    kids.extend(sub)
                    cur = end
                    count += 1
                if count < node.min:
                    return None
                return cur, kids

            if isinstance(node, Concatenation):
                cur = pos
                kids = []
                for it in node.elements:
                    res = self._eval(it, text, cur)
                    if res is None:
                        return None
                    cur, sub = res
                    kids.extend(sub)
                return cur, kids

            if isinstance(node, Alternation):
                for alt in node.alternatives:
                    res = self._eval(alt, text, pos)
                    if res is not None:
                        return res
                return None

            raise AssertionError(f"unknown expression: {node!r}")
        finally:
            self._depth -= 1
