"""Data models for graph rendering."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass(eq=False, repr=False)
class TreeNode:
    """A node in a rendered dependency tree.

    Traversal, comparison and conversion use explicit stacks, so trees of
    any depth are safe to walk.
    """

    label: str
    depth: int = 0
    children: list[TreeNode] = field(default_factory=list)

    def __iter__(self) -> Iterator[TreeNode]:
        """Pre-order traversal."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        """Total nodes in subtree."""
        return sum(1 for _ in self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        # Pre-order labels, depths and child counts determine the shape.
        return _shape(self) == _shape(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TreeNode(label={self.label!r}, depth={self.depth}, children={len(self.children)})"

    def to_dict(self) -> dict[str, object]:
        result: dict[str, object] = {"name": self.label, "depth": self.depth, "children": []}
        stack: list[tuple[TreeNode, dict[str, object]]] = [(self, result)]
        while stack:
            node, out = stack.pop()
            children: list[dict[str, object]] = out["children"]  # type: ignore[assignment]
            for child in node.children:
                child_out: dict[str, object] = {
                    "name": child.label,
                    "depth": child.depth,
                    "children": [],
                }
                children.append(child_out)
                stack.append((child, child_out))
        return result


def _shape(root: TreeNode) -> list[tuple[str, int, int]]:
    return [(node.label, node.depth, len(node.children)) for node in root]
