"""
Centralized display utilities for console output and progress tracking.
Provides standardized progress bars, prompts and logging displays using rich.
"""

import logging
import os
from collections import deque
from typing import TYPE_CHECKING, Any, Protocol, cast

from rich.console import Console
from rich.live import Live
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import BarColumn, Progress, TextColumn
from rich.prompt import Prompt
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

if TYPE_CHECKING:
    from c2w.engine import Confirmation
    from c2w.models import CatalogMatch, MigrationReport

# Define Protocol for extended Logger with success and notice methods
class ExtendedLogger(Protocol):
    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def success(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def notice(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None: ...

# Create a custom theme for logging
LOGGING_THEME = Theme(
    {
        "logging.level.debug": "dim",
        "logging.level.info": "blue",
        "logging.level.notice": "cyan",
        "logging.level.warning": "bold yellow",
        "logging.level.error": "bold red",
        "logging.level.critical": "bold red on white",
        "logging.level.success": "bold green",
        "success": "bold green",
    }
)

# Status colours used by the summary table
STATUS_STYLES = {
    "Migrated": "bold green",
    "WouldMigrate": "cyan",
    "Skipped": "yellow",
    "NotFound": "dim",
    "Failed": "bold red",
}

# Global console instance with theme
console = Console(theme=LOGGING_THEME)

# Set up a rich handler for logging
rich_handler = RichHandler(
    console=console,
    rich_tracebacks=True,
    tracebacks_show_locals=False,
    markup=True,
    show_time=True,
    show_level=True,
    enable_link_path=True,
    log_time_format="[%X]",
)


def configure_logging(
    level: str = "INFO", log_file: str | os.PathLike[str] | None = None
) -> ExtendedLogger:
    """
    Configure logging with rich formatting.

    Args:
        level: Logging level (DEBUG, INFO, NOTICE, SUCCESS, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file

    Returns:
        Configured logger instance
    """
    # Create a special success level (between INFO and WARNING)
    logging.addLevelName(25, "SUCCESS")

    # Create a NOTICE level (between INFO and DEBUG)
    logging.addLevelName(21, "NOTICE")

    if level.upper() == "NOTICE":
        numeric_level = 21
    elif level.upper() == "SUCCESS":
        numeric_level = 25
    else:
        numeric_level = getattr(logging, level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [rich_handler]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir, exist_ok=True)

        # Plain format for the log file, markup is only meaningful on the console
        file_format = logging.Formatter(
            "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
        )
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(file_format)
        file_handler.setLevel(numeric_level)
        handlers.append(file_handler)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )

    logger = logging.getLogger("c2w")

    def success(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(25):
            kwargs["extra"] = kwargs.get("extra", {})
            kwargs["extra"]["markup"] = True
            self._log(25, f"[success]{message}[/]", args, stacklevel=2, **kwargs)

    def notice(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(21):
            kwargs["extra"] = kwargs.get("extra", {})
            kwargs["extra"]["markup"] = True
            self._log(21, message, args, stacklevel=2, **kwargs)

    setattr(logging.Logger, "success", success)
    setattr(logging.Logger, "notice", notice)

    logger.debug("Rich logging configured")
    if log_file:
        logger.debug("Log file: %s", log_file)

    return cast(ExtendedLogger, logger)


class ProgressTracker:
    """
    Centralized progress tracker that provides standardized rich progress bars
    with a rolling log of recent items below the progress bar.
    """

    def __init__(
        self,
        description: str,
        total: int,
        log_title: str = "Recent Packages",
        max_log_items: int = 5,
    ):
        self.description = description
        self.total = total
        self.log_title = log_title
        self.progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(),
            TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
            TextColumn("({task.completed}/{task.total})"),
            console=console,
        )
        self.task_id = self.progress.add_task(description, total=total)
        self.recent_items: deque[str] = deque(maxlen=max_log_items)
        self.processed_count = 0
        self.live: Live | None = None

    def __enter__(self) -> "ProgressTracker":
        """Start the live display when entering context."""
        self.live = Live(
            console=console,
            refresh_per_second=4,
            auto_refresh=True,
            vertical_overflow="ellipsis",
        )
        self.live.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Close the live display when exiting context."""
        if self.live:
            self.live.__exit__(exc_type, exc_val, exc_tb)

    def add_log_item(self, item: str) -> None:
        """Add an item to the rolling log."""
        self.recent_items.append(item)
        self._update_display()

    def increment(self, advance: int = 1, description: str | None = None) -> None:
        """
        Increment the progress bar.

        Args:
            advance: Number of steps to advance
            description: New description (optional)
        """
        self.processed_count += advance
        if description:
            self.progress.update(
                self.task_id, completed=self.processed_count, description=description
            )
        else:
            self.progress.update(self.task_id, completed=self.processed_count)
        self._update_display()

    def _update_display(self) -> None:
        if not self.live:
            return

        log_table = Table.grid(padding=(0, 1))
        log_table.add_column()
        log_table.add_row(Text(f"{self.log_title}:", style="bold yellow"))
        for item in self.recent_items:
            log_table.add_row(f"  - {item}")

        if self.recent_items:
            combined = Table.grid(padding=1)
            combined.add_column()
            combined.add_row(self.progress)
            combined.add_row(log_table)
            self.live.update(
                Panel.fit(combined, title=self.description, border_style="blue")
            )
        else:
            self.live.update(self.progress)


def prompt_confirmation(package: str, catalog_match: "CatalogMatch") -> "Confirmation":
    """Ask the operator whether a found package should be migrated.

    Returns:
        The operator's answer as a Confirmation
    """
    from c2w.engine import Confirmation  # noqa: PLC0415

    target = catalog_match.install_target(package)
    details = f" {catalog_match.version}" if catalog_match.version else ""
    console.print(
        f"\n[bold]{package}[/bold] -> [cyan]{catalog_match.display_name or target}[/cyan]"
        f" ([dim]{target}{details}[/dim])"
    )
    answer = Prompt.ask(
        "Migrate this package? [y]es / [n]o / [q]uit",
        choices=["y", "n", "q"],
        console=console,
        show_choices=False,
    )
    match answer:
        case "y":
            return Confirmation.YES
        case "q":
            return Confirmation.QUIT
        case _:
            return Confirmation.NO


def print_summary(report: "MigrationReport") -> None:
    """Render the run report as a table followed by the statistics line."""
    title = "Migration preview" if report.dry_run else "Migration results"
    table = Table(title=title, show_lines=False)
    table.add_column("Package", style="bold")
    table.add_column("winget id")
    table.add_column("Status")
    table.add_column("Reason", overflow="fold")

    for outcome in report.outcomes:
        status = outcome.status.value
        table.add_row(
            outcome.package,
            outcome.target_id or "-",
            Text(status, style=STATUS_STYLES.get(status, "")),
            outcome.reason,
        )

    console.print(table)
    stats = report.statistics
    console.rule(
        f"Total: {stats.total}  Migrated: {stats.migrated}  Skipped: {stats.skipped}"
        f"  Not found: {stats.not_found}  Failed: {stats.failed}"
    )
