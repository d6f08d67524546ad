"""Clients for the external package-manager command-line tools."""

from c2w.clients.choco_client import ChocolateyClient
from c2w.clients.command_runner import CommandResult, CommandRunner
from c2w.clients.winget_client import WingetClient

__all__ = ["ChocolateyClient", "CommandResult", "CommandRunner", "WingetClient"]
