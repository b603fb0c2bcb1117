"""
vfshell - A command shell over an in-memory virtual filesystem.

The virtual filesystem is built once from a CSV table or a nested
JSON/YAML document and supports shell-style navigation. Commands the
VFS does not handle are run on the host.

Quick Start:
    import vfshell

    vfs = vfshell.VirtualFS.from_source("fs.csv")
    vfs.cd("/home")
    print(vfs.pwd())          # /home
    print(vfs.ls("."))        # ['.', '..', 'a.txt']

    node, path = vfs.resolve("a.txt")
    print(vfs.decode_file(node))

CSV format:
    path,type,content
    /,dir,
    /home,dir,
    /home/a.txt,file,aGVsbG8=

Note that '..' never ascends to a real parent: it resets resolution
to the root.
"""

__version__ = "0.1.0"

from .vfs import VirtualFS, Node, Tree, load_tree, decode_content

from .exit_codes import (
    CommandError,
    VFSError,
    ConstructionError,
    ResolutionError,
    UninitializedError,
    NoSuchFileError,
    NotDirectoryError,
    IsDirectoryError,
)

from .config import load_config

__all__ = [
    "__version__",
    "VirtualFS",
    "Node",
    "Tree",
    "load_tree",
    "decode_content",
    "CommandError",
    "VFSError",
    "ConstructionError",
    "ResolutionError",
    "UninitializedError",
    "NoSuchFileError",
    "NotDirectoryError",
    "IsDirectoryError",
    "load_config",
]
