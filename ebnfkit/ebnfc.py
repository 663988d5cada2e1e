# ebnfkit/ebnfc.py
"""ebnfc – ebnfkit CLI

Usage:
    $ python -m ebnfkit.ebnfc check grammars/arith.ebnf -D
    $ python -m ebnfkit.ebnfc rules grammars/arith.ebnf
    $ python -m ebnfkit.ebnfc parse grammars/arith.ebnf --text "3+4" --rule expression
    $ python -m ebnfkit.ebnfc parse grammars/arith.ebnf --input expr.txt --json

Commands
--------
- check : compile the grammar and report rule count, start rule and warnings
- rules : list the rules in declaration order with their compiled definition
- parse : match input text against a rule and print the parse tree

Debug mode (-D/--debug) prints pipeline progress and turns on DEBUG logging
for the `ebnfkit` logger.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Optional

from .errors import CompileError, MatchError

# ------------------------------
# helpers
# ------------------------------

def _eprint(*args, **kw) -> None:
    print(*args, file=sys.stderr, **kw)


def _setup_logging(debug: bool) -> None:
    if debug:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
        logging.getLogger("ebnfkit").setLevel(logging.DEBUG)


def _load_grammar(path: str, debug: bool, strict: bool):
    from .grammar.loader import load_grammar_text
    from .grammar.parser import compile_grammar

    src = load_grammar_text(path)
    if debug: _eprint(f"[DEBUG] grammar text loaded | chars={len(src)}")
    g = compile_grammar(src, strict=strict)
    if debug: _eprint(f"[DEBUG] grammar compiled | rules={len(g)} start={g.start}")
    return g


def _print_warnings(g) -> None:
    for lineno, text in g.skipped_lines:
        _eprint(f"[WARN] line {lineno} skipped (not a rule): {text}")
    for name in g.redefined:
        _eprint(f"[WARN] rule '{name}' redefined; last definition wins")
    for w in g.warnings:
        _eprint(f"[WARN] {w}; compiled as a literal terminal")

# ------------------------------
# commands
# ------------------------------

def cmd_check(args) -> int:
    try:
        g = _load_grammar(args.file, debug=args.debug, strict=args.strict)
    except CompileError as e:
        _eprint("[GRAMMAR ERROR]")
        _eprint(str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    _print_warnings(g)
    print(f"[CHECK OK] rules={len(g)} start={g.start}")
    return 0


def cmd_rules(args) -> int:
    try:
        g = _load_grammar(args.file, debug=args.debug, strict=False)
    except CompileError as e:
        _eprint("[GRAMMAR ERROR]")
        _eprint(str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    width = max(len(n) for n in g.rule_names)
    for name in g.rule_names:
        mark = "*" if name == g.start else " "
        print(f"{mark} {name:<{width}} ::= {g.rules[name]}")
    return 0


def cmd_parse(args) -> int:
    from .grammar.loader import read_input_text
    from .engine.runtime import match

    try:
        g = _load_grammar(args.file, debug=args.debug, strict=args.strict)
    except CompileError as e:
        _eprint("[GRAMMAR ERROR]")
        _eprint(str(e))
        return 2
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    if args.debug:
        _print_warnings(g)

    try:
        text = args.text if args.text is not None else read_input_text(args.input)
    except OSError as e:
        _eprint("[ERROR]", type(e).__name__, str(e))
        return 2

    try:
        tree = match(g, args.rule, text, max_depth=args.max_depth, trace=args.trace)
    except MatchError as e:
        _eprint(f"[PARSE ERROR] {type(e).__name__}")
        _eprint(str(e))
        return 1

    if args.debug:
        _eprint(f"[DEBUG] parsed | rule={tree.type} nodes={sum(1 for _ in tree.walk())}")
    if args.json:
        print(json.dumps(tree.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(tree.pretty())
    return 0

# ------------------------------
# entrypoint
# ------------------------------

def main(argv: Optional[list] = None) -> int:
    from .engine.matcher import DEFAULT_MAX_DEPTH

    ap = argparse.ArgumentParser(prog="ebnfc", description="ebnfkit grammar compiler and matcher CLI")
    sub = ap.add_subparsers(dest="cmd", required=True)

    p_check = sub.add_parser("check", help="compile the grammar and report problems")
    p_check.add_argument("file", help="grammar file")
    p_check.add_argument("--strict", action="store_true", help="reject unrecognized element syntax")
    p_check.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_check.set_defaults(func=cmd_check)

    p_rules = sub.add_parser("rules", help="list rules in declaration order")
    p_rules.add_argument("file", help="grammar file")
    p_rules.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_rules.set_defaults(func=cmd_rules)

    p_parse = sub.add_parser("parse", help="match input text and print the parse tree")
    p_parse.add_argument("file", help="grammar file")
    src_group = p_parse.add_mutually_exclusive_group(required=True)
    src_group.add_argument("--text", help="input text given directly")
    src_group.add_argument("--input", help="path of a file holding the input text")
    p_parse.add_argument("-r", "--rule", help="rule to parse as (default: first declared rule)")
    p_parse.add_argument("--json", action="store_true", help="print the tree as JSON")
    p_parse.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                         help="recursion ceiling of the matcher")
    p_parse.add_argument("--trace", action="store_true",
                         help="report the furthest failure position on errors")
    p_parse.add_argument("--strict", action="store_true", help="reject unrecognized element syntax")
    p_parse.add_argument("-D", "--debug", action="store_true", help="print debug information")
    p_parse.set_defaults(func=cmd_parse)

    args = ap.parse_args(argv)
    _setup_logging(args.debug)
    return int(args.func(args))

if __name__ == "__main__":
    sys.exit(main())
