# ebnfkit/engine/node.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

# type tags of leaf nodes; every other node is tagged with its rule name
TERMINAL = "terminal"
CHARACTER = "character"


@dataclass(frozen=True)
class ParseNode:
    """One node of the concrete syntax tree.

    `value` is always `text[start:end]` of the matched input; spans are
    half-open code-point offsets.
    """
    type: str
    value: str
    start: int
    end: int
    children: Tuple["ParseNode", ...] = ()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def walk(self) -> Iterator["ParseNode"]:
        """Pre-order traversal, self first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find_all(self, type_: str) -> List["ParseNode"]:
        return [n for n in self.walk() if n.type == type_]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "value": self.value,
            "start": self.start,
            "end": self.end,
            "children": [c.to_dict() for c in self.children],
        }

    def pretty(self, indent: str = "  ") -> str:
        lines: List[str] = []

        def _rec(node: "ParseNode", depth: int) -> None:
            label = node.type
            if node.value:
                label += f" {node.value!r}"
            lines.append(f"{indent * depth}{label} [{node.start}-{node.end}]")
            for c in node.children:
                _rec(c, depth + 1)

        _rec(self, 0)
        return "\n".join(lines)
