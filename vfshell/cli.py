#!/usr/bin/env python3

import click

from vfshell.commands.shell import shell_handler
from vfshell.commands.fs import fs_cmd
from vfshell.commands.config import config_cmd


@click.group()
@click.version_option(package_name='vfshell')
def cli():
    """vfshell - Command shell over an in-memory virtual filesystem.

    Navigation commands (pwd, cd, ls, touch, cat, wc) work on a tree
    loaded from a CSV or JSON/YAML description; everything else runs
    on the host.
    """
    pass


cli.add_command(shell_handler, name='shell')
cli.add_command(fs_cmd)
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
