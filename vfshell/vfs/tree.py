"""
Node arena for the virtual filesystem.

Nodes live in a flat list and are addressed by their index. Directories
map child names to child indices; there are no parent references, so
upward navigation always re-walks from the root.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

ROOT_ID = 0


@dataclass
class Node:
    """
    A file or directory in the virtual filesystem.

    Attributes:
        id: Stable index of the node in its Tree
        name: Name, unique among siblings
        is_dir: True for directories, False for files
        content: Encoded payload (files only)
        children: Child name -> child id (directories only)
    """

    id: int
    name: str
    is_dir: bool
    content: str = ""
    children: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'type': 'dir' if self.is_dir else 'file',
            'children': len(self.children),
        }


class Tree:
    """Arena owning every node of one virtual filesystem."""

    def __init__(self, root_name: str = "/"):
        self._nodes: List[Node] = [Node(id=ROOT_ID, name=root_name, is_dir=True)]

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def root(self) -> Node:
        return self._nodes[ROOT_ID]

    def child(self, parent: Node, name: str) -> Optional[Node]:
        """Return the child of ``parent`` called ``name``, or None."""
        child_id = parent.children.get(name)
        if child_id is None:
            return None
        return self._nodes[child_id]

    def children(self, parent: Node) -> Iterator[Node]:
        """Yield the children of ``parent`` in insertion order."""
        for child_id in parent.children.values():
            yield self._nodes[child_id]

    def add_child(self, parent: Node, name: str, is_dir: bool, content: str = "") -> Node:
        """
        Create a node and attach it under ``parent``.

        Args:
            parent: Directory receiving the new node
            name: Name of the new node
            is_dir: Whether the new node is a directory
            content: Encoded payload for files

        Returns:
            The new node

        Raises:
            ValueError: If ``parent`` is a file or already has ``name``
        """
        if not parent.is_dir:
            raise ValueError(f"{parent.name} is not a directory")
        if name in parent.children:
            raise ValueError(f"{name} already exists in {parent.name}")

        node = Node(
            id=len(self._nodes),
            name=name,
            is_dir=is_dir,
            content="" if is_dir else content,
        )
        self._nodes.append(node)
        parent.children[name] = node.id
        return node

    def walk(self, node: Optional[Node] = None, path: str = "/") -> Iterator[tuple]:
        """Yield ``(absolute_path, node)`` pairs depth-first, parents first."""
        if node is None:
            node = self.root
        yield path, node
        for child in self.children(node):
            child_path = path.rstrip("/") + "/" + child.name
            yield from self.walk(child, child_path)
