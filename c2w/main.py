"""Main entry point for the Chocolatey to winget migration tool.

This script provides the command-line interface: it applies CLI flags to the
configuration, checks the host, runs the migration and writes the report.
"""

import argparse
import atexit
import os
import sys
from pathlib import Path

import psutil

from c2w import config
from c2w.config import logger, update_from_cli_args


def _pid_is_running(pid: int) -> bool:
    """Return True if a process with PID exists.

    Uses psutil instead of os.kill(pid, 0), which terminates the process on Windows.
    """
    if pid <= 0:
        return False
    return psutil.pid_exists(pid)


def _read_lock_pid(lock_file: Path) -> int:
    try:
        return int(lock_file.read_text(encoding="utf-8").strip() or "0")
    except (OSError, ValueError):
        return 0


def _ensure_singleton_lock(lock_file: Path) -> None:
    """Ensure only one migration runs at a time using a PID lock file.

    If a lock exists and the PID is alive, exit. If the PID is stale, remove it.
    The lock is removed automatically on process exit.
    """
    if os.environ.get("C2W_DISABLE_LOCK") in {"1", "true", "True"}:
        logger.warning("Singleton lock disabled via C2W_DISABLE_LOCK=1")
        return

    lock_file.parent.mkdir(parents=True, exist_ok=True)
    current_pid = os.getpid()

    if lock_file.exists():
        existing = _read_lock_pid(lock_file)
        if existing and _pid_is_running(existing):
            logger.error(
                "Another migration instance is running (pid=%s). Lock: %s",
                existing,
                str(lock_file),
            )
            sys.exit(1)
        lock_file.unlink(missing_ok=True)

    try:
        # 'x' fails if the file appeared between exists() and here
        with lock_file.open("x", encoding="utf-8") as f:
            f.write(str(current_pid))
    except FileExistsError:
        logger.error(
            "Concurrent migration detected (pid=%s). Lock: %s",
            _read_lock_pid(lock_file),
            str(lock_file),
        )
        sys.exit(1)

    def _cleanup_lock() -> None:
        # Only remove the file if it still holds our PID
        if _read_lock_pid(lock_file) == current_pid:
            lock_file.unlink(missing_ok=True)

    atexit.register(_cleanup_lock)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="c2w",
        description="Migrate installed Chocolatey packages to winget",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    migrate_parser = subparsers.add_parser(
        "migrate",
        help="Replace Chocolatey packages with their winget equivalents",
    )
    migrate_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Migrate every package found in winget without asking",
    )
    migrate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only report what would be migrated; overrides --yes",
    )
    migrate_parser.add_argument(
        "--skip",
        nargs="+",
        metavar="NAME",
        help="Package names to leave on Chocolatey (added to the configured skip list)",
    )
    migrate_parser.add_argument(
        "--report",
        metavar="PATH",
        help="Where to write the JSON report (default: var/results/migration_report_<timestamp>.json)",
    )
    migrate_parser.add_argument(
        "--no-admin-check",
        action="store_true",
        help="Do not require administrator privileges",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and execute the appropriate command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "migrate":
        parser.print_help()
        sys.exit(1)

    update_from_cli_args(args)

    # Imported late so CLI flags are applied to config first
    from c2w.clients import CommandRunner  # noqa: PLC0415
    from c2w.display import print_summary  # noqa: PLC0415
    from c2w.migration import build_clients, resolve_mode, run_migration, save_report  # noqa: PLC0415
    from c2w.models import MigrationError, PrerequisiteError  # noqa: PLC0415
    from c2w.prerequisites import check_prerequisites  # noqa: PLC0415

    migration_config = config.migration_config

    _ensure_singleton_lock(config.get_path("run") / "c2w_migrate.pid")

    runner = CommandRunner(timeout=migration_config.get("command_timeout"))
    choco, winget = build_clients(runner)

    try:
        check_prerequisites(
            runner,
            choco_executable=choco.executable,
            winget_executable=winget.executable,
            require_admin=migration_config.get("require_admin", True),
        )
    except PrerequisiteError as e:
        for problem in e.missing:
            logger.error("Prerequisite check failed: %s", problem)
        sys.exit(1)

    mode = resolve_mode(
        auto_accept=migration_config.get("auto_accept", False),
        dry_run=migration_config.get("dry_run", False),
    )
    logger.info("Starting migration in %s mode", mode.value)

    try:
        report = run_migration(
            choco,
            winget,
            mode,
            skip_packages=migration_config.get("skip_packages", []),
        )
    except MigrationError as e:
        logger.error("Migration aborted: %s", e)
        sys.exit(1)

    print_summary(report)
    save_report(report, migration_config.get("report_path"))
    sys.exit(0)


def run() -> None:
    """Console entry point; turns interrupts and unexpected errors into exit code 1."""
    try:
        main()
    except KeyboardInterrupt:
        logger.info("Migration interrupted by user")
        sys.exit(1)
    except (FileNotFoundError, PermissionError) as e:
        logger.error("File system error: %s", e)
        sys.exit(1)
    except Exception as e:  # noqa: BLE001
        logger.exception("Unexpected error occurred during migration: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    run()
