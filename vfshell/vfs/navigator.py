"""
Path resolution and navigation over a virtual filesystem.

A VirtualFS handle owns the tree plus a current-directory cursor
(``cwd`` node and ``cwd_path`` string) that are always updated together.

Note on '..': resolution never ascends to a real parent. Any '..' segment
resets the walk to the root, so '/a/b/..' is '/' and '../x' is '/x'.
"""

import logging
import posixpath
from pathlib import Path
from typing import List, Optional, Tuple, Union

from ..exit_codes import (
    IsDirectoryError,
    NoSuchFileError,
    NotDirectoryError,
    ResolutionError,
    UninitializedError,
)
from .builder import load_tree, split_path
from .codec import decode_content
from .tree import Node, Tree

logger = logging.getLogger("vfshell")

ROOT_PATH = "/"


class VirtualFS:
    """In-memory filesystem with a current working directory."""

    def __init__(self, tree: Optional[Tree] = None):
        self.tree: Optional[Tree] = None
        self.cwd: Optional[Node] = None
        self.cwd_path = ROOT_PATH
        self.source_path: Optional[str] = None
        if tree is not None:
            self._attach(tree)

    @classmethod
    def from_source(cls, source_path: Union[str, Path]) -> 'VirtualFS':
        vfs = cls()
        vfs.init(source_path)
        return vfs

    def init(self, source_path: Union[str, Path]) -> None:
        """Build the tree from a source file and move the cursor to the root.

        On failure the handle keeps whatever state it had before.

        Raises:
            ConstructionError: If the source cannot be loaded
        """
        tree = load_tree(source_path)
        self._attach(tree)
        self.source_path = str(source_path)

    def _attach(self, tree: Tree) -> None:
        self.tree = tree
        self.cwd = tree.root
        self.cwd_path = ROOT_PATH

    @property
    def initialized(self) -> bool:
        return self.tree is not None

    def _require_tree(self) -> Tree:
        if self.tree is None:
            raise UninitializedError()
        return self.tree

    @property
    def root(self) -> Node:
        return self._require_tree().root

    def resolve(self, path: str) -> Tuple[Node, str]:
        """Resolve an absolute or relative path.

        Relative paths are appended to ``cwd_path`` and walked from the
        root. Empty and '.' segments are skipped; '..' resets to the root.

        Returns:
            The node reached and its normalized absolute path

        Raises:
            NoSuchFileError: If a segment does not exist
        """
        tree = self._require_tree()

        if path.startswith('/'):
            parts = split_path(path)
        else:
            parts = split_path(self.cwd_path) + split_path(path)

        current = tree.root
        full_path = ROOT_PATH
        for part in parts:
            if part == '.':
                continue
            if part == '..':
                current = tree.root
                full_path = ROOT_PATH
                continue

            child = tree.child(current, part) if current.is_dir else None
            if child is None:
                raise NoSuchFileError(part)
            current = child
            full_path = posixpath.join(full_path, part)

        return current, full_path

    def pwd(self) -> str:
        self._require_tree()
        return self.cwd_path

    def cd(self, path: str) -> str:
        """Change the current directory.

        Returns:
            The new current path

        Raises:
            NoSuchFileError: If the path does not resolve
            NotDirectoryError: If the path names a file
        """
        node, full_path = self.resolve(path)
        if not node.is_dir:
            raise NotDirectoryError(f"cd: not a directory: {path}")

        self.cwd, self.cwd_path = node, full_path
        logger.debug(f"cwd is now {full_path}")
        return full_path

    def ls(self, path: str = '.') -> List[str]:
        """List a directory, or return a file's own name.

        Directory names carry a trailing '/'. Listings of any directory
        other than the root start with '.' and '..'.
        """
        node, full_path = self.resolve(path)
        if not node.is_dir:
            return [node.name]

        names = []
        if full_path != ROOT_PATH:
            names.extend(['.', '..'])
        for child in self._require_tree().children(node):
            names.append(child.name + '/' if child.is_dir else child.name)
        return names

    def touch(self, path: str) -> Node:
        """Create an empty file, or do nothing if the file already exists.

        Returns:
            The existing or new file node

        Raises:
            ResolutionError: If the parent is missing or is not a directory
            IsDirectoryError: If the path names a directory
        """
        tree = self._require_tree()
        dir_path, name = posixpath.split(path)
        if not dir_path:
            dir_path = '.'

        try:
            parent, _ = self.resolve(dir_path)
        except NoSuchFileError as e:
            raise ResolutionError(f"cannot access parent directory: {e}") from e
        if not parent.is_dir:
            raise NotDirectoryError(f"parent is not a directory: {dir_path}")

        if name in ('', '.', '..'):
            raise IsDirectoryError(f"cannot touch '{path}': is a directory")

        existing = tree.child(parent, name)
        if existing is not None:
            if existing.is_dir:
                raise IsDirectoryError(f"cannot touch '{path}': is a directory")
            return existing

        node = tree.add_child(parent, name, False)
        logger.debug(f"created {path}")
        return node

    def decode_file(self, node: Node) -> str:
        """Return the decoded text of a file node.

        Raises:
            IsDirectoryError: If ``node`` is a directory
        """
        if node.is_dir:
            raise IsDirectoryError(f"{node.name} is a directory")
        return decode_content(node.content)

    def read_file(self, path: str) -> str:
        node, _ = self.resolve(path)
        if node.is_dir:
            raise IsDirectoryError(f"{path}: is a directory")
        return self.decode_file(node)
