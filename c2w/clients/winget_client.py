"""WingetClient.

Wraps the commands of the target package manager (winget): catalog search
and install.
"""

from c2w.clients.command_runner import CommandRunner
from c2w.clients.exceptions import CommandExecutionError
from c2w.config import logger

NO_MATCH_MARKER = "no package found"

AGREEMENT_FLAGS = ["--accept-source-agreements"]
INSTALL_FLAGS = ["--silent", "--accept-package-agreements", "--accept-source-agreements"]


class WingetClient:
    """Client for the local winget command-line tool."""

    def __init__(
        self,
        runner: CommandRunner,
        executable: str = "winget",
        source: str | None = None,
    ) -> None:
        """Initialize the winget client.

        Args:
            runner: CommandRunner used to execute winget
            executable: Name or path of the winget executable
            source: Restrict search and install to one winget source

        """
        self.runner = runner
        self.executable = executable
        self.source = source

    def is_available(self) -> bool:
        return self.runner.is_available(self.executable)

    def _source_args(self) -> list[str]:
        return ["--source", self.source] if self.source else []

    def search(self, name: str) -> list[str]:
        """Search the catalog and return the raw output lines.

        winget exits non-zero when nothing matches; that case returns an
        empty list.

        Raises:
            CommandExecutionError: If winget fails for any other reason
            CommandNotFoundError: If winget cannot be found

        """
        command = [self.executable, "search", name, *self._source_args(), *AGREEMENT_FLAGS]
        result = self.runner.run(command)
        if result.ok:
            return result.lines

        if NO_MATCH_MARKER in result.stdout.lower():
            logger.debug("winget search found nothing for %s", name)
            return []

        msg = f"winget search failed with exit code {result.returncode}"
        raise CommandExecutionError(
            command,
            msg,
            returncode=result.returncode,
            output=result.stderr or result.stdout,
        )

    def install(self, target: str, exact: bool = True) -> bool:
        """Install a package by catalog id (exact) or by name."""
        if exact:
            command = [self.executable, "install", "--id", target, "--exact"]
        else:
            command = [self.executable, "install", target]
        command += [*self._source_args(), *INSTALL_FLAGS]

        result = self.runner.run(command)
        if not result.ok:
            logger.debug("winget install %s output: %s", target, result.stdout.strip())
        return result.ok
