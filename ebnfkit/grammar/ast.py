# ebnfkit/grammar/ast.py
from __future__ import annotations
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..errors import UnknownRule, UnrecognizedElementSyntax

# ---- Expression node definitions ----
# Rules reference each other only by name (NonTerminal), so the graph never
# holds object cycles; references are resolved against Grammar.rules when
# matching.

UNBOUNDED = None  # Repetition.max for "no upper bound"


def _quote(text: str) -> str:
    return "'" + text + "'" if '"' in text else '"' + text + '"'


def _literal(text: str) -> str:
    """Quoted form of a literal that compiles back to text matching it.

    Literals holding both quote kinds have no single quoted form (no escapes),
    so they render as a group of adjacent quoted pieces.
    """
    pieces: List[str] = []
    cur = ""
    for ch in text:
        if (ch == '"' and "'" in cur) or (ch == "'" and '"' in cur):
            pieces.append(cur)
            cur = ""
        cur += ch
    pieces.append(cur)
    if len(pieces) == 1:
        return _quote(text)
    return "( " + " ".join(_quote(p) for p in pieces) + " )"


@dataclass(frozen=True)
class Terminal:
    literal: str

    def __str__(self) -> str:
        return _literal(self.literal)


@dataclass(frozen=True)
class CharacterRange:
    # inclusive, compared by code point
    low: str
    high: str

    def contains(self, ch: str) -> bool:
        return ord(self.low) <= ord(ch) <= ord(self.high)

    def __str__(self) -> str:
        return f"{self.low}-{self.high}"


@dataclass(frozen=True)
class NonTerminal:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Empty:
    def __str__(self) -> str:
        return "ε"


@dataclass(frozen=True)
class Opt:
    element: "Expression"

    def __str__(self) -> str:
        return f"[ {self.element} ]"


@dataclass(frozen=True)
class Repetition:
    min: int
    max: Optional[int]  # UNBOUNDED (None) or a count >= min
    element: "Expression"

    @property
    def unbounded(self) -> bool:
        return self.max is UNBOUNDED

    def __str__(self) -> str:
        inner = _wrap(self.element)
        if self.min == 0 and self.unbounded:
            return inner + "*"
        if self.min == 1 and self.unbounded:
            return inner + "+"
        if self.unbounded:
            return f"{inner}{{{self.min},}}"
        if self.min == self.max:
            return f"{inner}{{{self.min}}}"
        return f"{inner}{{{self.min},{self.max}}}"


@dataclass(frozen=True)
class Concatenation:
    elements: Tuple["Expression", ...]

    def __str__(self) -> str:
        return " ".join(_wrap(e) if isinstance(e, Alternation) else str(e)
                        for e in self.elements)


@dataclass(frozen=True)
class Alternation:
    alternatives: Tuple["Expression", ...]

    def __str__(self) -> str:
        return " | ".join(str(a) for a in self.alternatives)


Expression = Union[Alternation, Concatenation, Repetition, Opt,
                   Terminal, CharacterRange, NonTerminal, Empty]

def _wrap(e: "Expression") -> str:
    if isinstance(e, (Alternation, Concatenation)):
        return f"( {e} )"
    return str(e)


@dataclass(frozen=True)
class Grammar:
    """Compiled, immutable rule set.

    - rules      : rule name -> root Expression (read-only view)
    - start      : first declared rule name (default entry point)
    - rule_names : every rule name in declaration order
    - redefined / skipped_lines / warnings : compile diagnostics
    """
    rules: Mapping[str, "Expression"]
    start: str
    rule_names: Tuple[str, ...]
    redefined: Tuple[str, ...] = ()
    skipped_lines: Tuple[Tuple[int, str], ...] = ()
    warnings: Tuple[UnrecognizedElementSyntax, ...] = ()

    @classmethod
    def build(cls, rules: Dict[str, "Expression"], start: str, *,
              redefined: Sequence[str] = (),
              skipped_lines: Sequence[Tuple[int, str]] = (),
              warnings: Sequence[UnrecognizedElementSyntax] = ()) -> "Grammar":
        frozen = MappingProxyType(dict(rules))
        return cls(frozen, start, tuple(frozen), tuple(redefined),
                   tuple(skipped_lines), tuple(warnings))

    def require_rule(self, name: str) -> "Expression":
        try:
            return self.rules[name]
        except KeyError:
            raise UnknownRule(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self.rules

    def __len__(self) -> int:
        return len(self.rules)

    def describe(self) -> List[str]:
        """One `name ::= definition` line per rule, declaration order."""
        return [f"{n} ::= {self.rules[n]}" for n in self.rule_names]
