"""Defines exceptions for the migration process."""


class MigrationError(Exception):
    """Base exception for migration errors.

    Raised when the run as a whole cannot continue, as opposed to a single
    package failing, which is recorded as an outcome.
    """

    def __init__(self, message: str, *args: object) -> None:
        super().__init__(message, *args)
        self.message = message


class PrerequisiteError(MigrationError):
    """Raised before any package is processed when the host is not ready.

    Covers a missing Chocolatey or winget executable and a missing elevated
    privilege context.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__("Missing prerequisites: " + "; ".join(self.missing))
