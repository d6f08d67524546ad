"""Finds a package in the winget catalog by scanning ``winget search`` output."""

import re
from typing import Protocol

from c2w.config import logger
from c2w.models import CatalogMatch

COLUMN_SPLIT_RE = re.compile(r"\s{2,}")
HEADER_RE = re.compile(r"^\s*Name\s+Id(\s|$)", re.IGNORECASE)
# Rule lines are made of dashes (winget also draws U+2500), possibly with spaces
RULE_RE = re.compile(r"^[\s\-─]+$")
# Progress spinner frames winget writes before the table
SPINNER_RE = re.compile(r"^[\s\-\\|/]+$")


class CatalogSearch(Protocol):
    """Anything that can search the target catalog, e.g. WingetClient."""

    def search(self, name: str) -> list[str]: ...


def is_structural_line(line: str) -> bool:
    """Return True for header, separator/rule and blank lines of the result table."""
    if not line.strip():
        return True
    return bool(HEADER_RE.match(line) or RULE_RE.match(line) or SPINNER_RE.match(line))


def parse_search_output(name: str, lines: list[str]) -> CatalogMatch:
    """Pick the first result line that mentions ``name`` and split it into columns.

    The first acceptable line wins; results are not ranked. A line needs at
    least two columns (name and id) to be accepted.
    """
    needle = name.lower()
    for line in lines:
        if is_structural_line(line):
            continue
        if needle not in line.lower():
            continue

        columns = COLUMN_SPLIT_RE.split(line.strip())
        if len(columns) < 2:
            logger.debug("Ignoring search line with too few columns: %s", line.strip())
            continue

        return CatalogMatch(
            found=True,
            display_name=columns[0],
            id=columns[1],
            version=columns[2] if len(columns) > 2 else None,
        )

    return CatalogMatch.not_found()


class CatalogMatcher:
    """Looks up installed package names in the target catalog."""

    def __init__(self, catalog: CatalogSearch) -> None:
        self.catalog = catalog

    def find(self, name: str) -> CatalogMatch:
        """Search the catalog for ``name``.

        A failing search is reported as not found and logged as a warning so
        that one broken lookup never aborts the run.
        """
        try:
            lines = self.catalog.search(name)
        except Exception as e:  # noqa: BLE001
            logger.warning("Catalog search failed for %s: %s", name, e)
            return CatalogMatch.not_found()

        match = parse_search_output(name, lines)
        if match.found:
            logger.debug("Catalog match for %s: %s (%s)", name, match.id, match.display_name)
        else:
            logger.debug("No catalog match for %s", name)
        return match
