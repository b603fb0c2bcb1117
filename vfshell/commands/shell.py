"""
Shell command for vfshell.
"""

import click
import sys

from ..config import configure_logging, load_config, logger
from ..exit_codes import CommandError, INTERRUPTED, SUCCESS, exit_with_code


@click.command()
@click.option('--vfs', 'vfs_path', default=None, type=click.Path(),
              help='VFS source (CSV, or nested JSON/YAML)')
@click.option('--script', 'script_path', default=None, type=click.Path(),
              help='Startup script to run before the interactive prompt')
@click.option('-v', '--verbose', is_flag=True, help='Enable debug logging')
def shell_handler(vfs_path, script_path, verbose):
    """Launch the interactive shell over a virtual filesystem.

    VFS commands work on the in-memory tree loaded from --vfs:

    \b
      pwd                  - Print working directory
      cd <path>            - Change directory
      ls [path] [--json]   - List directory contents
      touch <file>         - Create an empty file
      cat <file>           - Show decoded file contents
      wc <file>            - Count lines, words and bytes
      tree [path]          - Show the directory tree
      exit                 - Exit shell (or Ctrl+D)

    Anything else is executed on the host.

    Examples:

    \b
        vfshell shell --vfs fs.csv
        vfshell shell --vfs fs.json --script setup.txt
    """
    from ..shell import VFShell, run_shell
    from ..vfs import VirtualFS

    config = load_config()
    configure_logging(config, verbose)

    shell_config = config.get('shell', {})
    vfs_path = vfs_path or shell_config.get('vfs_path', '')
    script_path = script_path or shell_config.get('script', '')

    click.echo(f"conf: vfs_path={vfs_path!r}, start_script={script_path!r}")

    try:
        vfs = VirtualFS.from_source(vfs_path)
    except CommandError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    logger.debug(f"Loaded VFS from {vfs_path}")

    try:
        run_shell(VFShell(vfs, config), script_path or None)
    except CommandError as e:
        exit_with_code(e.exit_code, str(e))
    except KeyboardInterrupt:
        exit_with_code(INTERRUPTED, "\nInterrupted")

    sys.exit(SUCCESS)
