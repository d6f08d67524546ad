"""Checks that the host can run a migration before any package is touched."""

import ctypes
import os

from c2w.clients.command_runner import CommandRunner
from c2w.config import logger
from c2w.models import PrerequisiteError


def is_elevated() -> bool:
    """Return True when running with administrator (or root) privileges."""
    if os.name == "nt":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())  # type: ignore[attr-defined]
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0


def check_prerequisites(
    runner: CommandRunner,
    choco_executable: str = "choco",
    winget_executable: str = "winget",
    require_admin: bool = True,
) -> None:
    """Verify both package managers are present and the process is elevated.

    Raises:
        PrerequisiteError: Naming every missing prerequisite

    """
    missing = []

    if not runner.is_available(choco_executable):
        missing.append(f"Chocolatey executable '{choco_executable}' not found on PATH")
    if not runner.is_available(winget_executable):
        missing.append(f"winget executable '{winget_executable}' not found on PATH")
    if require_admin and not is_elevated():
        missing.append("administrator privileges are required")

    if missing:
        raise PrerequisiteError(missing)

    logger.debug("Prerequisites satisfied")
