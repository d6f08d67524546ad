"""Turns the source manager's installed-package listing into package names."""

import re
from collections.abc import Iterable

from c2w.type_definitions import InstalledPackage

# One or more whitespace characters, then a token that starts with a digit
# (optionally prefixed by "v") and continues with digits, dots, hyphens or letters.
VERSION_SUFFIX_RE = re.compile(r"\s+(v?\d[\d.\-A-Za-z]*)$")

BANNER_RE = re.compile(r"^Chocolatey v\d[\w.\-]*\s*$", re.IGNORECASE)
SUMMARY_RE = re.compile(r"^\d+\s+packages?\s+installed\.?\s*$", re.IGNORECASE)
INFO_PREFIXES = ("did you know", "validation warnings:", "enjoy using chocolatey")


def normalize_package_name(entry: str) -> str:
    """Strip a trailing version token and surrounding whitespace.

    An empty return value means the entry is not a package record and must
    be skipped.
    """
    return _split_entry(entry)[0]


def _split_entry(entry: str) -> tuple[str, str | None]:
    # Leading whitespace is kept so that "   19.00" reads as a bare version token
    name = entry.rstrip()
    version = None
    # Repeat so that "name 1.0 2.0" cannot leave a version token behind
    while (match := VERSION_SUFFIX_RE.search(name)) is not None:
        if version is None:
            version = match.group(1)
        name = name[: match.start()].rstrip()
    return name.strip(), version


def is_listing_noise(line: str) -> bool:
    """Return True for banner, summary and informational lines of ``choco list``."""
    stripped = line.strip()
    if not stripped:
        return True
    if BANNER_RE.match(stripped) or SUMMARY_RE.match(stripped):
        return True
    # Warning bullets under "Validation Warnings:" are indented with " - "
    if stripped.startswith("- "):
        return True
    return stripped.lower().startswith(INFO_PREFIXES)


def filter_listing(lines: Iterable[str]) -> list[str]:
    """Drop every line of a listing that is not a package entry."""
    return [line for line in lines if not is_listing_noise(line)]


def parse_listing_entry(entry: str) -> InstalledPackage | None:
    """Parse one listing entry, keeping the version that was stripped off."""
    name, version = _split_entry(entry)
    if not name:
        return None
    return InstalledPackage(name=name, version=version, raw=entry)


def parse_installed_packages(lines: Iterable[str]) -> list[InstalledPackage]:
    """Filter a raw listing and parse every entry, preserving listing order."""
    packages = []
    for line in filter_listing(lines):
        package = parse_listing_entry(line)
        if package is not None:
            packages.append(package)
    return packages
