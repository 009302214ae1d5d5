"""
Syntax Tree Traversal
=====================

Type-blind pre-order traversal of tree-sitter nodes, shared by the
tokenizer and the dependency walker.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from tree_sitter import Node


def iter_nodes(tree: Any) -> Iterator[Node]:
    """
    Yield every node reachable from ``tree`` in pre-order.

    Lists and tuples are expanded element by element, nodes are yielded
    before their children, anything else is a leaf value and ends the branch.
    Uses an explicit stack so deeply nested sources do not hit the
    interpreter's recursion limit.
    """
    stack: list[Any] = [tree]
    while stack:
        current = stack.pop()
        if isinstance(current, (list, tuple)):
            stack.extend(reversed(current))
        elif isinstance(current, Node):
            yield current
            stack.extend(reversed(current.children))
