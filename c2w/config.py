"""Configuration module for the Chocolatey to winget migration.
Provides a centralized configuration interface using ConfigLoader.
"""

import os
from pathlib import Path
from typing import Any

from c2w.config_loader import ConfigLoader
from c2w.display import configure_logging
from c2w.type_definitions import Config, DirType, LogLevel, SectionName

# Create a singleton instance of ConfigLoader
_config_loader = ConfigLoader()

# Extract configuration sections for easy access
choco_config = _config_loader.get_choco_config()
winget_config = _config_loader.get_winget_config()
migration_config = _config_loader.get_migration_config()

# Set up the var directory structure
root_dir = Path(__file__).parent.parent
var_dir = Path(os.environ.get("C2W_VAR_DIR", str(root_dir / "var")))

var_dirs: dict[DirType, Path] = {
    "root": var_dir,
    "logs": var_dir / "logs",
    "results": var_dir / "results",
    "run": var_dir / "run",
}

created_dirs = []
for dir_path in var_dirs.values():
    if not dir_path.exists():
        dir_path.mkdir(parents=True, exist_ok=True)
        created_dirs.append(f"Created directory: {dir_path}")

# Set up logging with rich
LOG_LEVEL: LogLevel = migration_config.get("log_level", "INFO")
log_file = var_dirs["logs"] / "migration.log"
logger = configure_logging(LOG_LEVEL, log_file)

for message in created_dirs:
    logger.debug(message)


def get_config() -> Config:
    """Get the complete configuration object."""
    return _config_loader.get_config()


def get_value(section: SectionName, key: str, default: Any = None) -> Any:
    """Get a specific configuration value."""
    return _config_loader.get_value(section, key, default)


def get_path(path_type: DirType) -> Path:
    """Get a specific path from var_dirs."""
    if path_type not in var_dirs:
        msg = f"Invalid path type: {path_type}"
        raise ValueError(msg)

    return var_dirs[path_type]


def update_from_cli_args(args: Any) -> None:
    """Update migration configuration from CLI arguments.

    Args:
        args: An object containing CLI arguments (typically from argparse)

    """
    if getattr(args, "yes", False):
        migration_config["auto_accept"] = True
        logger.debug("Setting auto_accept=True from CLI arguments")

    if getattr(args, "dry_run", False):
        migration_config["dry_run"] = True
        logger.debug("Setting dry_run=True from CLI arguments")

    if getattr(args, "no_admin_check", False):
        migration_config["require_admin"] = False
        logger.debug("Setting require_admin=False from CLI arguments")

    skip = getattr(args, "skip", None)
    if skip:
        # CLI names extend the configured list rather than replacing it
        merged = list(migration_config.get("skip_packages", []))
        for name in skip:
            if name not in merged:
                merged.append(name)
        migration_config["skip_packages"] = merged
        logger.debug("Skip list from CLI arguments: %s", ", ".join(skip))

    report = getattr(args, "report", None)
    if report:
        migration_config["report_path"] = str(report)
        logger.debug("Setting report_path=%s from CLI arguments", report)
