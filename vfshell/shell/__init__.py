"""
vfshell shell - Interactive command shell over the virtual filesystem.

VFS-aware commands are handled in-process; everything else runs on the host.
"""

from .shell import VFShell, run_shell, split_args

__all__ = ['VFShell', 'run_shell', 'split_args']
