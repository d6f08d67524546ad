"""Common exceptions for all client modules."""


class ClientError(Exception):
    """Base exception for all client errors."""


class CommandNotFoundError(ClientError):
    """Error when the executable of a command cannot be found."""

    def __init__(self, executable: str) -> None:
        super().__init__(f"Executable not found: {executable}")
        self.executable = executable


class CommandExecutionError(ClientError):
    """Error when a command cannot be run or reports an unusable result."""

    def __init__(
        self,
        command: list[str],
        message: str,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.output = output


class CommandTimeoutError(ClientError):
    """Error when a command does not finish within the configured timeout."""

    def __init__(self, command: list[str], timeout: float) -> None:
        super().__init__(f"Command timed out after {timeout} seconds: {' '.join(command)}")
        self.command = command
        self.timeout = timeout
