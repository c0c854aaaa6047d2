"""Helpers for invoking external command-line tools."""

import subprocess
from typing import List, Optional

from .exceptions import CommandError
from ..utils.logger import get_logger
from config.settings import settings

logger = get_logger(__name__)


def run_command(args: List[str], timeout: Optional[float] = None) -> str:
    """Run a command to completion and return its stdout.

    Raises:
        CommandError: if the command cannot be started, times out or exits non-zero.
    """
    if timeout is None:
        timeout = settings.get('network_manager.command_timeout', 5)

    try:
        # Undecodable bytes (e.g. Latin-1 SSIDs) become U+FFFD
        result = subprocess.run(args, capture_output=True, encoding="utf-8", errors="replace", timeout=timeout)
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {args[0]}", command=args) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"Command timed out after {timeout}s: {' '.join(args)}", command=args) from e
    except OSError as e:
        raise CommandError(f"Failed to run {args[0]}: {e}", command=args) from e

    if result.returncode != 0:
        raise CommandError(
            f"{args[0]} exited with status {result.returncode}",
            command=args,
            returncode=result.returncode,
            stderr=result.stderr.strip(),
        )

    return result.stdout


def spawn_detached(args: List[str], stdin_text: Optional[str] = None) -> bool:
    """Start a command without waiting for it.

    The optional ``stdin_text`` is written to the child's stdin, which is then
    closed. Output is discarded. Returns False if the command could not be started.
    """
    try:
        process = subprocess.Popen(
            args,
            stdin=subprocess.PIPE if stdin_text is not None else subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError as e:
        logger.warning(f"Failed to start {args[0]}: {e}")
        return False

    if stdin_text is not None:
        try:
            process.stdin.write(f"{stdin_text}\n".encode())
            process.stdin.close()
        except OSError as e:
            # Child exited before reading its input
            logger.warning(f"Could not write to {args[0]} stdin: {e}")

    logger.debug(f"Spawned {args[0]} (pid {process.pid})")
    return True


def split_terse(line: str) -> List[str]:
    """Split an ``nmcli -t`` line on unescaped ':' characters.

    nmcli escapes literal colons and backslashes inside values as ``\\:`` and ``\\\\``.
    """
    fields: List[str] = []
    current: List[str] = []
    i = 0
    while i < len(line):
        char = line[i]
        if char == "\\" and i + 1 < len(line) and line[i + 1] in (":", "\\"):
            current.append(line[i + 1])
            i += 2
        elif char == ":":
            fields.append("".join(current))
            current = []
            i += 1
        else:
            current.append(char)
            i += 1
    fields.append("".join(current))
    return fields
