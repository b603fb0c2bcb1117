"""
Host command execution for commands the VFS does not handle.
"""

import getpass
import logging
import socket
import subprocess
from typing import List, Tuple

from ..exit_codes import CommandError

logger = logging.getLogger("vfshell")


def run_host_command(args: List[str]) -> None:
    """Run a command on the host, inheriting stdin/stdout/stderr.

    Raises:
        CommandError: If the executable is missing or exits non-zero
    """
    name = args[0]
    try:
        result = subprocess.run(args)
    except FileNotFoundError as e:
        logger.debug(f"host lookup failed for {name}: {e}")
        raise CommandError(f"unknown command: {name}") from e
    except PermissionError as e:
        logger.debug(f"host execution failed for {name}: {e}")
        raise CommandError(f"{name}: permission denied") from e

    if result.returncode != 0:
        raise CommandError(f"{name}: exited with status {result.returncode}")


def get_user_and_host() -> Tuple[str, str]:
    """Return (username, hostname) for the prompt; empty strings on failure."""
    try:
        user = getpass.getuser()
    except (OSError, KeyError) as e:
        logger.warning(f"user error: {e}")
        user = ""

    host = socket.gethostname()
    if host.endswith(".local"):
        host = host[:-len(".local")]
    return user, host
