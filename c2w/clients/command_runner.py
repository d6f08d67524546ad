"""CommandRunner.

Runs the local package-manager executables and captures their output.
This is the foundation of the client layer:
1. CommandRunner - Base component for process execution
2. ChocolateyClient - Uses CommandRunner for the source manager
3. WingetClient - Uses CommandRunner for the target catalog
"""

import shutil
import subprocess
from dataclasses import dataclass

from c2w.clients.exceptions import (
    CommandExecutionError,
    CommandNotFoundError,
    CommandTimeoutError,
)
from c2w.config import logger


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured result of one finished command."""

    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def lines(self) -> list[str]:
        return self.stdout.splitlines()


class CommandRunner:
    """Runs commands as blocking child processes.

    This client implements exception-based error handling:
    - Raises CommandNotFoundError when the executable does not exist
    - Raises CommandTimeoutError when a configured timeout expires
    - Raises CommandExecutionError for other operating-system failures
    A non-zero exit status is not an error here; callers decide what it means.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the runner.

        Args:
            timeout: Seconds to wait for a command, None to wait until it exits

        """
        self.timeout = timeout

    def is_available(self, executable: str) -> bool:
        """Return True if the executable can be found on PATH."""
        return shutil.which(executable) is not None

    def run(self, args: list[str]) -> CommandResult:
        """Run a command and return its captured output.

        Args:
            args: Executable followed by its arguments

        Returns:
            CommandResult with stdout, stderr and the exit status

        Raises:
            CommandNotFoundError: If the executable cannot be found
            CommandTimeoutError: If the command exceeds the timeout
            CommandExecutionError: If the process cannot be started

        """
        logger.debug("Executing command: %s", " ".join(args))

        try:
            completed = subprocess.run(
                args,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(args[0]) from e
        except subprocess.TimeoutExpired as e:
            logger.warning("Command timed out after %s seconds: %s", self.timeout, args[0])
            raise CommandTimeoutError(args, self.timeout or 0) from e
        except OSError as e:
            msg = f"Failed to run {args[0]}: {e}"
            raise CommandExecutionError(args, msg) from e

        logger.debug("Command exited with status %d: %s", completed.returncode, args[0])
        return CommandResult(
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            returncode=completed.returncode,
        )
