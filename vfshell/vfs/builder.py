"""
Tree builder for the virtual filesystem.

Turns a serialized description into a Tree. Two shapes are accepted:

- CSV records with the header ``path,type,content`` where every path is
  absolute and ``type`` is ``dir`` or ``file`` (the canonical format)
- a nested JSON or YAML document ``{name, is_dir, content, children}``

Building is all-or-nothing: any structural problem raises a
ConstructionError and no tree is returned.
"""

import csv
import io
import json
import logging
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, Union

import yaml

from ..exit_codes import (
    AncestorConflictError,
    DuplicatePathError,
    InvalidHeaderError,
    InvalidNodeError,
    InvalidRootError,
    RelativePathError,
    SourceError,
    UnknownTypeError,
)
from .tree import Tree

logger = logging.getLogger("vfshell")

NESTED_SUFFIXES = ('.json', '.yaml', '.yml')

TYPE_TAGS = {'dir': True, 'file': False}


@dataclass
class Record:
    """One row of a tabular VFS source."""

    path: str
    is_dir: bool
    content: str = ""

    @property
    def depth(self) -> int:
        return len(split_path(self.path))


def split_path(path: str) -> List[str]:
    """Split a path into its non-empty segments."""
    return [part for part in path.split('/') if part]


def normalize_path(path: str) -> str:
    """Lexically clean an absolute path ('.', '..' and duplicate slashes)."""
    cleaned = posixpath.normpath(path)
    # normpath keeps a leading '//' as POSIX allows it
    return '/' + cleaned.lstrip('/')


def load_tree(source_path: Union[str, Path]) -> Tree:
    """Read a VFS source file and build its tree.

    ``.json``, ``.yaml`` and ``.yml`` files are nested documents; anything
    else is parsed as CSV.

    Raises:
        ConstructionError: If the file cannot be read or built
    """
    if not source_path:
        raise SourceError("no source file provided")

    path = Path(source_path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(str(e)) from e

    if path.suffix.lower() in NESTED_SUFFIXES:
        tree = build_from_document(parse_document(text, path.suffix.lower()))
    else:
        tree = build_from_csv(text)

    logger.debug(f"Built VFS with {len(tree)} nodes from {path}")
    return tree


# Tabular shape

def build_from_csv(text: str) -> Tree:
    """Build a tree from CSV text with a ``path,type[,content]`` header."""
    try:
        rows = list(csv.reader(io.StringIO(text)))
    except csv.Error as e:
        raise SourceError(f"invalid CSV: {e}") from e

    if not rows:
        raise SourceError("empty CSV")

    header = [column.strip() for column in rows[0]]
    if header[:2] != ['path', 'type'] or header[2:] not in ([], ['content']):
        raise InvalidHeaderError("invalid CSV header (expected: path,type,content)")

    return build_from_records(parse_records(rows[1:]))


def parse_records(rows: Iterable[Sequence[str]], first_line: int = 2) -> List[Record]:
    """Validate raw CSV rows and turn them into normalized records.

    Args:
        rows: Data rows (header excluded)
        first_line: Line number of the first row, for error messages
    """
    records = []
    for line, row in enumerate(rows, start=first_line):
        if not row:
            continue
        if len(row) < 2:
            raise SourceError(f"record at line {line} has less than 2 fields")

        raw_path = row[0].strip()
        type_tag = row[1].strip()
        content = row[2] if len(row) > 2 else ""

        if not raw_path:
            continue
        if not raw_path.startswith('/'):
            raise RelativePathError(raw_path, line)
        if type_tag not in TYPE_TAGS:
            raise UnknownTypeError(type_tag, line)

        records.append(Record(
            path=normalize_path(raw_path),
            is_dir=TYPE_TAGS[type_tag],
            content=content,
        ))
    return records


def sort_records(records: Iterable[Record]) -> List[Record]:
    """Order records so every parent comes before its children."""
    return sorted(records, key=lambda r: (r.path != '/', r.depth))


def build_from_records(records: Iterable[Record]) -> Tree:
    """Build a tree from records in any order."""
    tree = Tree()
    for record in sort_records(records):
        _add_record(tree, record)
    return tree


def _add_record(tree: Tree, record: Record) -> None:
    if record.path == '/':
        if not record.is_dir:
            raise InvalidRootError()
        return

    parts = split_path(record.path)
    current = tree.root
    for i, part in enumerate(parts):
        is_last = i == len(parts) - 1
        child = tree.child(current, part)

        if child is not None:
            if is_last:
                raise DuplicatePathError(record.path)
            if not child.is_dir:
                raise AncestorConflictError(record.path)
            current = child
        elif is_last:
            tree.add_child(current, part, record.is_dir, record.content)
        else:
            current = tree.add_child(current, part, True)


# Nested shape

def parse_document(text: str, suffix: str = '.json') -> Any:
    """Parse a nested JSON or YAML document."""
    try:
        if suffix in ('.yaml', '.yml'):
            return yaml.safe_load(text)
        return json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SourceError(f"invalid document: {e}") from e


def build_from_document(document: Any) -> Tree:
    """Build a tree from a nested ``{name, is_dir, content, children}`` object.

    The top-level object must be a directory. Every nested node is checked
    while it is copied into the arena.
    """
    if not isinstance(document, dict):
        raise InvalidRootError("missing root object")
    if document.get('is_dir') is not True:
        raise InvalidRootError()

    tree = Tree(root_name=str(document.get('name') or '/'))
    _copy_children(tree, tree.root, document, '/')
    return tree


def _copy_children(tree: Tree, parent, document: Dict[str, Any], path: str) -> None:
    children = document.get('children') or {}
    if not isinstance(children, dict):
        raise InvalidNodeError(path, "children must be a mapping")

    for name, child_doc in children.items():
        child_path = posixpath.join(path, str(name))
        _check_node(child_doc, str(name), child_path)

        if child_doc['is_dir']:
            child = tree.add_child(parent, str(name), True)
            _copy_children(tree, child, child_doc, child_path)
        else:
            tree.add_child(parent, str(name), False, child_doc.get('content') or "")


def _check_node(document: Any, name: str, path: str) -> None:
    if not isinstance(document, dict):
        raise InvalidNodeError(path, "node must be an object")
    if not name or '/' in name or name in ('.', '..'):
        raise InvalidNodeError(path, f"invalid name {name!r}")
    if 'name' in document and document['name'] != name:
        raise InvalidNodeError(path, f"name {document['name']!r} does not match key")

    is_dir = document.get('is_dir')
    if not isinstance(is_dir, bool):
        raise InvalidNodeError(path, "is_dir must be a boolean")

    content = document.get('content')
    if content is not None and not isinstance(content, str):
        raise InvalidNodeError(path, "content must be a string")
    if not is_dir and document.get('children'):
        raise InvalidNodeError(path, "a file cannot have children")
