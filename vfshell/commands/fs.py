"""
Virtual filesystem commands for vfshell.

Provides stateless VFS operations using absolute paths.
These commands complement the shell's interactive navigation
but work without maintaining a current directory.
"""

import click
import json
from functools import wraps

from ..config import load_config
from ..exit_codes import CommandError, INTERRUPTED, exit_with_code
from ..render import render_listing, render_tree
from ..vfs import VirtualFS


def vfs_option(func):
    """Add a --vfs option (defaulting to the configured source) and open it."""
    @click.option('--vfs', 'vfs_path', default=None, type=click.Path(),
                  help='VFS source (defaults to shell.vfs_path from config)')
    @wraps(func)
    def wrapper(*args, vfs_path=None, **kwargs):
        if not vfs_path:
            vfs_path = load_config().get('shell', {}).get('vfs_path', '')
        try:
            vfs = VirtualFS.from_source(vfs_path)
            return func(vfs, *args, **kwargs)
        except CommandError as e:
            exit_with_code(e.exit_code, f"Error: {e}")
        except KeyboardInterrupt:
            exit_with_code(INTERRUPTED)
    return wrapper


@click.group(name='fs')
def fs_cmd():
    """Virtual filesystem operations.

    Inspect a VFS source without starting the shell. Paths are
    resolved from the root.

    Examples:

    \b
        vfshell fs ls --vfs fs.csv /home
        vfshell fs tree --vfs fs.csv
        vfshell fs cat --vfs fs.csv /home/a.txt
        vfshell fs stat --vfs fs.csv /home
    """
    pass


@fs_cmd.command('ls')
@click.argument('path', default='/')
@click.option('--json', 'json_output', is_flag=True, help='Output as JSONL')
@vfs_option
def fs_ls(vfs, path, json_output):
    """List the contents of PATH."""
    if not json_output:
        render_listing(vfs, path)
        return

    node, _ = vfs.resolve(path)
    entries = vfs.tree.children(node) if node.is_dir else [node]
    for entry in entries:
        print(json.dumps({
            "name": entry.name,
            "type": "dir" if entry.is_dir else "file",
        }))


@fs_cmd.command('tree')
@click.argument('path', default='/')
@click.option('--json', 'json_output', is_flag=True, help='Output every node as JSONL')
@vfs_option
def fs_tree(vfs, path, json_output):
    """Show the tree under PATH."""
    if not json_output:
        render_tree(vfs, path)
        return

    node, full_path = vfs.resolve(path)
    for node_path, entry in vfs.tree.walk(node, full_path):
        print(json.dumps({
            "path": node_path,
            "type": "dir" if entry.is_dir else "file",
        }))


@fs_cmd.command('cat')
@click.argument('path')
@vfs_option
def fs_cat(vfs, path):
    """Print the decoded contents of the file at PATH."""
    text = vfs.read_file(path)
    click.echo(text, nl=not text.endswith('\n'))


@fs_cmd.command('stat')
@click.argument('path', default='/')
@vfs_option
def fs_stat(vfs, path):
    """Show node details for PATH as JSON."""
    node, full_path = vfs.resolve(path)
    info = node.to_dict()
    info['path'] = full_path
    if not node.is_dir:
        info["size"] = len(vfs.decode_file(node).encode("utf-8"))
    print(json.dumps(info))
