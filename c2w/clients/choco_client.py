"""ChocolateyClient.

Wraps the commands of the source package manager (Chocolatey) that the
migration needs: listing installed packages, uninstalling, and reinstalling
for rollback.
"""

from c2w.clients.command_runner import CommandRunner
from c2w.clients.exceptions import CommandExecutionError
from c2w.config import logger


class ChocolateyClient:
    """Client for the local Chocolatey command-line tool."""

    def __init__(
        self,
        runner: CommandRunner,
        executable: str = "choco",
        list_args: list[str] | None = None,
    ) -> None:
        """Initialize the Chocolatey client.

        Args:
            runner: CommandRunner used to execute choco
            executable: Name or path of the choco executable
            list_args: Arguments that list locally installed packages

        Raises:
            TypeError: If list_args is a single string

        """
        if isinstance(list_args, str):
            msg = f"list_args must be a list of arguments, not a string: {list_args!r}"
            raise TypeError(msg)

        self.runner = runner
        self.executable = executable
        self.list_args = list(list_args) if list_args else ["list"]

    def is_available(self) -> bool:
        return self.runner.is_available(self.executable)

    def list_installed(self) -> list[str]:
        """Return the raw lines of the installed-package listing.

        Raises:
            CommandExecutionError: If choco exits with a non-zero status
            CommandNotFoundError: If choco cannot be found

        """
        command = [self.executable, *self.list_args]
        result = self.runner.run(command)
        if not result.ok:
            msg = f"choco list failed with exit code {result.returncode}"
            raise CommandExecutionError(
                command,
                msg,
                returncode=result.returncode,
                output=result.stderr or result.stdout,
            )
        return result.lines

    def uninstall(self, name: str) -> bool:
        """Uninstall a package; True when choco reports success."""
        result = self.runner.run([self.executable, "uninstall", name, "-y"])
        if not result.ok:
            logger.debug("choco uninstall %s output: %s", name, result.stdout.strip())
        return result.ok

    def install(self, name: str, version: str | None = None) -> bool:
        """Install a package, pinned to a version when one is given."""
        command = [self.executable, "install", name, "-y"]
        if version:
            command += ["--version", version]
        result = self.runner.run(command)
        if not result.ok:
            logger.debug("choco install %s output: %s", name, result.stdout.strip())
        return result.ok
