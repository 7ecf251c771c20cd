"""Subprocess adapter for running external commands."""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from tsinit.domain.models import CommandResult

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """Base exception for command execution errors."""

    pass


class CommandNotFoundError(CommandError):
    """Raised when the executable is not found in PATH."""

    pass


class SubprocessRunner:
    """Runs commands with subprocess, capturing stdout and stderr."""

    def __init__(self, timeout: Optional[float] = None):
        """Initialize with an optional timeout in seconds."""
        self.timeout = timeout

    def run(self, argv: Sequence[str], cwd: Path) -> CommandResult:
        """
        Run a command and capture its output.

        A non-zero exit status is reported through the result, not raised.

        Args:
            argv: Executable followed by its arguments
            cwd: Working directory

        Returns:
            CommandResult with both streams and the exit status

        Raises:
            CommandNotFoundError: If the executable cannot be found
            CommandError: If the command times out or cannot be started
        """
        if not argv:
            raise CommandError("No command given")

        executable = shutil.which(argv[0])
        if not executable:
            raise CommandNotFoundError(f"{argv[0]} not found in PATH")

        args = [executable, *argv[1:]]
        logger.info("Running %s in %s", " ".join(argv), cwd)

        try:
            completed = subprocess.run(
                args,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except subprocess.TimeoutExpired:
            raise CommandError(
                f"Command '{' '.join(argv)}' timed out after {self.timeout} seconds"
            )
        except FileNotFoundError:
            raise CommandNotFoundError(f"{argv[0]} not found in PATH")
        except OSError as e:
            raise CommandError(f"Unable to run '{' '.join(argv)}': {e}")

        logger.debug("%s exited with %s", argv[0], completed.returncode)
        return CommandResult(
            argv=list(argv),
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )
