# ebnfkit/grammar/loader.py
"""Grammar text loader for the command line front end."""

from __future__ import annotations
from pathlib    import Path
from typing     import Union


def load_grammar_text(path: Union[str, Path]) -> str:
    """
    Read a grammar file as UTF-8 with line endings normalized to "\\n".
    """
    text = Path(path).read_text(encoding="utf-8")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def read_input_text(path: Union[str, Path]) -> str:
    """Input to be matched is read verbatim; offsets refer to this exact text."""
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()
