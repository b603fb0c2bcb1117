"""
Main shell implementation for vfshell.

Provides an interactive shell whose navigation commands (pwd, cd, ls,
touch, cat, wc, tree) work on the virtual filesystem. Any other command
runs on the host.
"""

import cmd
import sys
import json
import shlex
from pathlib import Path
from typing import Optional, List, Dict, Any

from ..config import load_config
from ..exit_codes import CommandError, GENERAL_ERROR, USAGE_ERROR
from ..render import render_tree
from ..vfs import VirtualFS
from .host import get_user_and_host, run_host_command


def split_args(arg: str) -> List[str]:
    """Split an argument string honoring quotes and backslash escapes.

    Raises:
        CommandError: On an unmatched quote
    """
    try:
        return shlex.split(arg)
    except ValueError as e:
        if 'quotation' in str(e):
            raise CommandError("unmatched quote", USAGE_ERROR) from e
        raise CommandError(str(e).lower(), USAGE_ERROR) from e


class VFShell(cmd.Cmd):
    """Interactive shell over a virtual filesystem."""

    intro = """
vfshell - virtual filesystem shell
  VFS: pwd, cd, ls, touch, cat, wc, tree
  Anything else runs on the host (also: !<command>)
  Type 'help' for available commands, 'exit' or Ctrl+D to quit
"""

    def __init__(self, vfs: VirtualFS, config: Optional[Dict[str, Any]] = None):
        """Initialize the shell.

        Args:
            vfs: Initialized VFS handle
            config: Configuration (loaded from disk when omitted)
        """
        super().__init__()
        self.vfs = vfs
        self.config = config if config is not None else load_config()
        self.user, self.host = get_user_and_host()
        self.update_prompt()

    def update_prompt(self):
        """Update the shell prompt based on current directory."""
        template = self.config.get('shell', {}).get('prompt', "{user}@{host}:{cwd}$ ")
        self.prompt = template.format(user=self.user, host=self.host, cwd=self.vfs.pwd())

    def report_error(self, error: Exception):
        print(error, file=sys.stderr)

    def parseline(self, line):
        """Split off the command name, matching only a whole first word.

        A first word such as 'tree-sitter' or 'exit-status.sh' is not a VFS
        command and goes to the host.
        """
        cmd_name, arg, line = super().parseline(line)
        if cmd_name and len(line) > len(cmd_name) and not line[len(cmd_name)].isspace():
            return None, None, line
        return cmd_name, arg, line

    def run_line(self, line: str):
        """Execute one command line, letting CommandError propagate."""
        return super().onecmd(line)

    def onecmd(self, line):
        try:
            return self.run_line(line)
        except CommandError as e:
            self.report_error(e)
            return False

    def run_script(self, script_path: str) -> bool:
        """Run a startup script, echoing each line after the prompt.

        Stops at the first failing line.

        Returns:
            True if the script asked the shell to exit

        Raises:
            CommandError: If the script cannot be read or a line fails
        """
        try:
            lines = Path(script_path).read_text(encoding='utf-8').splitlines()
        except OSError as e:
            raise CommandError(f"script: {e}") from e

        for line_no, line in enumerate(lines, start=1):
            if not line.strip():
                continue

            print(f"{self.prompt}{line}")
            try:
                stop = self.run_line(line)
            except CommandError as e:
                raise CommandError(f"error on line {line_no}: {e}", GENERAL_ERROR) from e
            if stop:
                return True
        return False

    def do_pwd(self, arg):
        """Print current working directory."""
        print(self.vfs.pwd())

    def do_cd(self, arg):
        """Change directory.

        Usage: cd <path>
        """
        args = split_args(arg)
        if not args:
            raise CommandError("cd: path required", USAGE_ERROR)

        self.vfs.cd(args[0])
        self.update_prompt()

    def do_ls(self, arg):
        """List directory contents.

        Usage: ls [path...] [--json]

        Directories are shown with a trailing '/'. Use --json for JSONL output.
        """
        paths = []
        json_output = False
        for a in split_args(arg):
            if a == '--json':
                json_output = True
            else:
                paths.append(a)
        if not paths:
            paths = ['.']

        for i, path in enumerate(paths):
            names = self.vfs.ls(path)
            if json_output:
                for name in names:
                    is_dir = name.endswith('/') or name in ('.', '..')
                    print(json.dumps({"name": name.rstrip("/"),
                                      "type": "dir" if is_dir else "file"}))
                continue

            if len(paths) > 1:
                if i:
                    print()
                print(f"{path}:")
            if names:
                print("  ".join(names))

    def do_touch(self, arg):
        """Create empty files (existing files are left untouched).

        Usage: touch <file>...
        """
        args = split_args(arg)
        if not args:
            raise CommandError("touch: missing file operand", USAGE_ERROR)
        for path in args:
            self.vfs.touch(path)

    def do_cat(self, arg):
        """Display decoded file contents.

        Usage: cat <file>...
        """
        args = split_args(arg)
        if not args:
            raise CommandError("cat: missing file operand", USAGE_ERROR)
        for path in args:
            text = self.vfs.read_file(path)
            print(text, end='' if text.endswith('\n') else '\n')

    def do_wc(self, arg):
        """Count lines, words and bytes of decoded file contents.

        Usage: wc <file>...
        """
        args = split_args(arg)
        if not args:
            raise CommandError("wc: missing file operand", USAGE_ERROR)

        totals = [0, 0, 0]
        for path in args:
            text = self.vfs.read_file(path)
            counts = [text.count('\n'), len(text.split()), len(text.encode('utf-8'))]
            totals = [t + c for t, c in zip(totals, counts)]
            print(_format_counts(counts, path))
        if len(args) > 1:
            print(_format_counts(totals, "total"))

    def do_tree(self, arg):
        """Show the directory tree.

        Usage: tree [path]
        """
        args = split_args(arg)
        render_tree(self.vfs, args[0] if args else '.')

    def do_shell(self, arg):
        """Run a command on the host.

        Usage: !<command>
        """
        if not arg.strip():
            raise CommandError("Usage: !<command>", USAGE_ERROR)
        self.default(arg)

    def default(self, line):
        """Run anything that is not a VFS command on the host."""
        args = split_args(line)
        if not args:
            return
        try:
            run_host_command(args)
        except KeyboardInterrupt:
            print("\n^C")

    def do_exit(self, arg):
        """Exit the shell."""
        return True

    def do_quit(self, arg):
        """Exit the shell."""
        return self.do_exit(arg)

    def do_EOF(self, arg):
        """Handle Ctrl+D to exit."""
        print()  # New line
        return self.do_exit(arg)

    def emptyline(self):
        """Do nothing on empty line."""
        pass


def _format_counts(counts: List[int], label: str) -> str:
    return " ".join(f"{c:>7}" for c in counts) + f" {label}"


def run_shell(shell: VFShell, script: Optional[str] = None) -> None:
    """Run an optional startup script, then the interactive loop.

    Raises:
        CommandError: If the startup script fails
    """
    if script and shell.run_script(script):
        return

    try:
        shell.cmdloop()
    except KeyboardInterrupt:
        print("\n\nInterrupted. Goodbye!")
