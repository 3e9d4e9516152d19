"""
External program execution for espkit.

Installer scripts, rustup and cargo are run in the foreground: their output
goes straight to the user's terminal and the call blocks until they exit.
"""

import logging
import shlex
import subprocess
from typing import List

from espkit.core.exceptions import CommandError

logger = logging.getLogger(__name__)

SHELL = "/bin/bash"


def run_command(program: str, *args: str) -> None:
    """
    Run an external program and wait for it to finish.

    Args:
        program: Program name or path
        *args: Program arguments

    Raises:
        CommandError: If the program cannot be started or exits non-zero

    Example:
        >>> run_command("rustup", "target", "add", "riscv32imac-unknown-none-elf")
    """
    cmd: List[str] = [program, *args]
    display = shlex.join(cmd)
    logger.debug(f"Running: {display}")

    try:
        result = subprocess.run(cmd)
    except OSError as e:
        raise CommandError(display, reason=str(e)) from e

    if result.returncode != 0:
        raise CommandError(display, result.returncode)


def run_shell(command: str) -> None:
    """
    Run a composed command line through the shell.

    Args:
        command: Command line passed to `bash -c`

    Raises:
        CommandError: If the shell cannot be started or the command exits non-zero
    """
    run_command(SHELL, "-c", command)
