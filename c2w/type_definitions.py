"""Type definitions for the Chocolatey to winget migration.

This module contains the configuration shapes and type aliases used
throughout the migration process.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, NotRequired, TypedDict

type ConfigValue = str | int | bool | list[str] | dict[str, Any] | None


class ChocoConfig(TypedDict, total=False):
    """Configuration for the Chocolatey command-line tool."""

    executable: str
    list_args: list[str]


class WingetConfig(TypedDict, total=False):
    """Configuration for the winget command-line tool."""

    executable: str
    source: NotRequired[str]


type LogLevel = Literal[
    "DEBUG",
    "INFO",
    "NOTICE",
    "WARNING",
    "ERROR",
    "CRITICAL",
    "SUCCESS",
]


class MigrationConfig(TypedDict):
    """Configuration for the migration run."""

    log_level: LogLevel
    auto_accept: bool
    dry_run: bool
    require_admin: bool
    skip_packages: list[str]
    report_path: str | None
    command_timeout: int | None


class Config(TypedDict):
    """Configuration for the config loader."""

    choco: ChocoConfig
    winget: WingetConfig
    migration: MigrationConfig


type SectionName = Literal["choco", "winget", "migration"]

type DirType = Literal[
    "logs",
    "results",
    "root",
    "run",
]


@dataclass(slots=True)
class InstalledPackage:
    """A package as reported by the source manager's listing."""

    name: str
    version: str | None = None
    raw: str = field(default="", repr=False)
