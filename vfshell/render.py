"""
Rendering functions for vfshell output.

Core VFS functions return data, this module makes it human-readable.
"""

from rich.console import Console
from rich.table import Table
from rich.tree import Tree as RichTree
from rich import box
from rich.markup import escape

from .vfs import VirtualFS
from .vfs.codec import decode_content
from .vfs.tree import Node

console = Console()


def _label(node: Node, name: str) -> str:
    name = escape(name)
    if node.is_dir:
        suffix = "" if name.endswith("/") else "/"
        return f"📂 [bold blue]{name}{suffix}[/bold blue]"
    return f"📄 {name}"


def build_tree(vfs: VirtualFS, path: str = "/") -> RichTree:
    """
    Build a rich Tree for the subtree at ``path``.

    Args:
        vfs: Initialized VFS handle
        path: Path of the subtree root

    Returns:
        rich Tree ready for printing
    """
    node, full_path = vfs.resolve(path)
    name = full_path if full_path == "/" else node.name
    rich_tree = RichTree(_label(node, name))
    _add_branches(vfs, node, rich_tree)
    return rich_tree


def _add_branches(vfs: VirtualFS, node: Node, branch: RichTree) -> None:
    for child in vfs.tree.children(node):
        sub = branch.add(_label(child, child.name))
        if child.is_dir:
            _add_branches(vfs, child, sub)


def render_tree(vfs: VirtualFS, path: str = "/") -> None:
    console.print(build_tree(vfs, path))


def build_listing_table(vfs: VirtualFS, path: str = ".") -> Table:
    """
    Build a table describing the entries of a directory.

    Columns are name, type and decoded size in bytes (files only).
    """
    node, full_path = vfs.resolve(path)
    table = Table(
        title=full_path,
        box=box.ROUNDED,
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Name", style="green")
    table.add_column("Type", style="yellow")
    table.add_column("Size", justify="right", style="dim")

    entries = vfs.tree.children(node) if node.is_dir else [node]
    for entry in entries:
        if entry.is_dir:
            table.add_row(f"📂 {escape(entry.name)}/", "dir", "")
        else:
            size = len(decode_content(entry.content).encode("utf-8"))
            table.add_row(f"📄 {escape(entry.name)}", "file", f"{size}B")

    return table


def render_listing(vfs: VirtualFS, path: str = ".") -> None:
    console.print(build_listing_table(vfs, path))
