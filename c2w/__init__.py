"""Chocolatey to winget package migration tool."""

__version__ = "0.1.0"
