# ebnfkit/grammar/parser.py
"""EBNF rule-set compiler.

Accepted text (one rule per line):

    rule     := IDENT assign definition
    assign   := "::=" | ":=" | "=" | "→"
    definition: alternatives separated by "|" at depth 0
    element  := primary suffix*
    suffix   := "*" | "+" | "?" | "{" n "}" | "{" n ",}" | "{" n "," m "}" | "{," m "}"
    primary  := "(" definition ")"      group
              | "[" definition "]"      optional
              | "{" definition "}"      zero or more
              | '"' text '"' | "'" text "'"
              | c "-" c                 single character range
              | "empty" | "epsilon" | "ε"
              | IDENT                   rule reference

Comments: (* ... *), // ... and # ... (quote-aware, stripped before parsing).

Anything that fits none of the primaries is compiled leniently as a terminal
over its raw text, unless `strict=True` is passed.
"""

from __future__ import annotations
import logging
import regex as re
from typing import Dict, List, Optional, Tuple

from ..errors import (
    InvalidRepetitionBounds, NoRulesFound, UnrecognizedElementSyntax,
)
from .ast import (
    Alternation, CharacterRange, Concatenation, Empty, Expression, Grammar,
    NonTerminal, Opt, Repetition, Terminal, UNBOUNDED,
)

logger = logging.getLogger(__name__)

_RULE_RE = re.compile(r"^([A-Za-z_][A-Za-z0-9_]*)\s*(::=|:=|=|→)\s*(.+)$")
_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
# trailing bounded repetition; the digit check happens after matching
_BOUNDED_RE = re.compile(r"(.+)\{(\d*)(,?)(\d*)\}", re.S)
# a bound suffix glued right after a group or literal
_BOUND_SUFFIX_RE = re.compile(r"\{(?:\d+,?\d*|,\d+)\}")

_EPSILON = frozenset({"empty", "epsilon", "ε"})
_OPENERS = "([{"
_CLOSERS = ")]}"
_QUOTES = "\"'"
_POSTFIX = "*+?"


# ---------- comment stripping ----------

def strip_comments(src: str) -> str:
    """Remove (* *), // and # comments that are not inside a quoted literal.

    Newlines inside a block comment are kept so line numbers stay stable.
    """
    out: List[str] = []
    i, n = 0, len(src)
    quote: Optional[str] = None
    while i < n:
        ch = src[i]
        if quote is not None:
            out.append(ch)
            if ch == quote or ch == "\n":
                quote = None
            i += 1
            continue
        if ch in _QUOTES:
            quote = ch
            out.append(ch)
            i += 1
            continue
        if src.startswith("(*", i):
            j = src.find("*)", i + 2)
            body = src[i:] if j == -1 else src[i:j + 2]
            out.append(" " + "\n" * body.count("\n"))
            i = n if j == -1 else j + 2
            continue
        if ch == "#" or src.startswith("//", i):
            j = src.find("\n", i)
            i = n if j == -1 else j
            continue
        out.append(ch)
        i += 1
    return "".join(out)


# ---------- depth/quote aware splitting ----------

def split_alternatives(text: str) -> List[str]:
    """Split on "|" at nesting depth 0, outside quotes."""
    parts: List[str] = []
    cur: List[str] = []
    depth = 0
    quote: Optional[str] = None
    for ch in text:
        if quote is not None:
            if ch == quote:
                quote = None
            cur.append(ch)
        elif ch in _QUOTES:
            quote = ch
            cur.append(ch)
        elif ch in _OPENERS:
            depth += 1
            cur.append(ch)
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
            cur.append(ch)
        elif ch == "|" and depth == 0:
            parts.append("".join(cur).strip())
            cur = []
        else:
            cur.append(ch)
    last = "".join(cur).strip()
    if last:
        # a trailing "|" adds no alternative
        parts.append(last)
    return parts


def _take_suffixes(text: str, i: int) -> int:
    """End index of the run of quantifiers starting at i."""
    while i < len(text):
        if text[i] in _POSTFIX:
            i += 1
            continue
        m = _BOUND_SUFFIX_RE.match(text, i)
        if m is None:
            break
        i = m.end()
    return i


def split_elements(text: str) -> List[str]:
    """Whitespace-separated elements; groups and literals stay whole.

    Quantifiers written directly after a closing bracket or quote belong to
    that element: `("+" | "-")*` is one element.
    """
    toks: List[str] = []
    cur: List[str] = []
    depth = 0
    quote: Optional[str] = None
    i, n = 0, len(text)

    def flush() -> None:
        tok = "".join(cur).strip()
        if tok:
            toks.append(tok)
        cur.clear()

    while i < n:
        ch = text[i]
        if quote is not None:
            cur.append(ch)
            i += 1
            if ch == quote:
                quote = None
                if depth == 0:
                    end = _take_suffixes(text, i)
                    cur.append(text[i:end])
                    i = end
                    flush()
            continue
        if ch in _QUOTES:
            if depth == 0:
                flush()
            quote = ch
            cur.append(ch)
            i += 1
            continue
        if ch == "{" and depth == 0 and cur:
            m = _BOUND_SUFFIX_RE.match(text, i)
            if m is not None:
                cur.append(m.group(0))
                i = m.end()
                continue
        if ch in _OPENERS:
            if depth == 0:
                flush()
            depth += 1
            cur.append(ch)
            i += 1
            continue
        if ch in _CLOSERS and depth > 0:
            depth -= 1
            cur.append(ch)
            i += 1
            if depth == 0:
                end = _take_suffixes(text, i)
                cur.append(text[i:end])
                i = end
                flush()
            continue
        if depth == 0 and ch.isspace():
            flush()
            i += 1
            continue
        cur.append(ch)
        i += 1
    flush()
    return toks


# ---------- compiler ----------

class _Compiler:
    def __init__(self, strict: bool):
        self.strict = strict
        self.rule = ""
        self.warnings: List[UnrecognizedElementSyntax] = []

    def definition(self, text: str) -> Expression:
        alts = [self.sequence(a) for a in split_alternatives(text)]
        if len(alts) == 1:
            return alts[0]
        return Alternation(tuple(alts))

    def sequence(self, text: str) -> Expression:
        items = [self.element(e) for e in split_elements(text)]
        if not items:
            return Empty()
        if len(items) == 1:
            return items[0]
        return Concatenation(tuple(items))

    def element(self, text: str) -> Expression:
        text = text.strip()
        if not text:
            return Empty()

        # quantifiers, outermost (rightmost) first
        if len(text) > 1 and text[-1] in _POSTFIX:
            inner = self.element(text[:-1])
            if text[-1] == "*":
                return Repetition(0, UNBOUNDED, inner)
            if text[-1] == "+":
                return Repetition(1, UNBOUNDED, inner)
            return Opt(inner)

        m = _BOUNDED_RE.fullmatch(text)
        if m is not None and (m.group(2) or m.group(4)):
            return self._bounded(text, m)

        head, tail = text[0], text[-1]
        if len(text) >= 2 and _OPENERS.find(head) == _CLOSERS.find(tail) != -1:
            interior = self.definition(text[1:-1])
            if head == "(":
                return interior
            if head == "[":
                return Opt(interior)
            return Repetition(0, UNBOUNDED, interior)

        if self._is_quoted(text):
            return Terminal(text[1:-1])

        if len(text) == 3 and text[1] == "-":
            return CharacterRange(text[0], text[2])

        if text in _EPSILON:
            return Empty()

        if _IDENT_RE.fullmatch(text):
            return NonTerminal(text)

        err = UnrecognizedElementSyntax(self.rule, text)
        if self.strict:
            raise err
        logger.warning("%s; compiled as a literal terminal", err)
        self.warnings.append(err)
        return Terminal(text)

    def _bounded(self, text: str, m) -> Repetition:
        lo_s, comma, hi_s = m.group(2), m.group(3), m.group(4)
        lo = int(lo_s) if lo_s else 0
        if hi_s:
            hi: Optional[int] = int(hi_s)
        elif comma:
            hi = UNBOUNDED
        else:
            hi = lo  # {n} means exactly n
        if hi is not UNBOUNDED and lo > hi:
            raise InvalidRepetitionBounds(self.rule, text, lo, hi)
        return Repetition(lo, hi, self.element(m.group(1)))

    @staticmethod
    def _is_quoted(text: str) -> bool:
        return len(text) >= 2 and text[0] in _QUOTES and text[-1] == text[0]


def compile_grammar(src: str, *, strict: bool = False) -> Grammar:
    """Compile rule-definition text into a fresh Grammar.

    The first rule declared is the start rule. Redefining a rule replaces
    its definition (last write wins) and is reported in `Grammar.redefined`.
    Raises NoRulesFound when the text holds no rule definitions.
    """
    comp = _Compiler(strict)
    rules: Dict[str, Expression] = {}
    start: Optional[str] = None
    redefined: List[str] = []
    skipped: List[Tuple[int, str]] = []

    for lineno, raw in enumerate(strip_comments(src).split("\n"), start=1):
        line = raw.strip()
        if not line:
            continue
        m = _RULE_RE.match(line)
        if m is None:
            logger.warning("line %d is not a rule definition, skipped: %r", lineno, line)
            skipped.append((lineno, line))
            continue
        name, _assign, definition = m.groups()
        comp.rule = name
        expr = comp.definition(definition)
        if name in rules:
            logger.warning("rule '%s' redefined at line %d; last definition wins", name, lineno)
            redefined.append(name)
        if start is None:
            start = name
        rules[name] = expr
        logger.debug("rule %s ::= %s", name, expr)

    if start is None:
        raise NoRulesFound()
    return Grammar.build(rules, start, redefined=redefined,
                         skipped_lines=skipped, warnings=comp.warnings)
