# ebnfkit/errors.py
"""Error taxonomy shared by the grammar compiler and the match engine.

Compile-time problems derive from ``SyntaxError`` (as every grammar error in
this package does), match-time problems from ``MatchError``.
"""

from __future__ import annotations
from typing import Optional, Tuple


# ---- compile errors ----

class CompileError(SyntaxError):
    """Grammar text could not be turned into a usable Grammar."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class NoRulesFound(CompileError):
    def __init__(self, message: str = "No valid grammar rules found"):
        super().__init__(message)


class UnrecognizedElementSyntax(CompileError):
    """An element that is not a group, literal, range, epsilon or identifier.

    Lenient compilation keeps these as terminals over the raw text and only
    records the instance; strict compilation raises it.
    """

    def __init__(self, rule: str, text: str):
        super().__init__(f"Unrecognized element syntax {text!r} in rule '{rule}'")
        self.rule = rule
        self.text = text


class InvalidRepetitionBounds(CompileError):
    def __init__(self, rule: str, text: str, lo: int, hi: int):
        super().__init__(
            f"Invalid repetition bounds in rule '{rule}': {text!r} (min {lo} > max {hi})"
        )
        self.rule = rule
        self.text = text


# ---- match errors ----

class MatchError(Exception):
    """Base class of every failure reported by the match engine."""


class UnknownRule(MatchError, KeyError):
    def __init__(self, name: str):
        MatchError.__init__(self, f"Unknown rule: {name}")
        self.name = name

    def __str__(self) -> str:
        return f"Unknown rule: {self.name}"


def _expectation_suffix(furthest: Optional[int], expected: Tuple[str, ...]) -> str:
    if furthest is None:
        return ""
    if not expected:
        return f" (furthest failure at position {furthest})"
    return f" (furthest failure at position {furthest}, expected {', '.join(expected)})"


class ParseFailedAtStart(MatchError):
    def __init__(self, rule: str,
                 furthest: Optional[int] = None,
                 expected: Tuple[str, ...] = ()):
        self.rule = rule
        self.furthest = furthest
        self.expected = tuple(expected)
        super().__init__(
            "Parse failed at beginning of input" + _expectation_suffix(furthest, self.expected)
        )


class IncompleteParse(MatchError):
    """A prefix matched but input remains; never a partial success."""

    def __init__(self, rule: str, remaining: str, offset: int,
                 furthest: Optional[int] = None,
                 expected: Tuple[str, ...] = ()):
        self.rule = rule
        self.remaining = remaining
        self.offset = offset
        self.furthest = furthest
        self.expected = tuple(expected)
        super().__init__(
            f'Parse incomplete. Remaining: "{remaining}" at position {offset}'
            + _expectation_suffix(furthest, self.expected)
        )


class RecursionLimitExceeded(MatchError):
    def __init__(self, rule: str, offset: int, limit: int):
        self.rule = rule
        self.offset = offset
        self.limit = limit
        super().__init__(
            f"Recursion limit {limit} exceeded in rule '{rule}' at position {offset}"
            " (left-recursive or too deeply nested grammar?)"
        )
