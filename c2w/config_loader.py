"""Configuration module for the Chocolatey to winget migration.

Handles loading and accessing configuration settings.
"""

import copy
import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

from c2w.type_definitions import (
    ChocoConfig,
    Config,
    ConfigValue,
    MigrationConfig,
    SectionName,
    WingetConfig,
)

# Set up basic logging for configuration loading phase
config_logger = logging.getLogger("c2w.config_loader")

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent / "config" / "config.yaml"

DEFAULT_CONFIG: Config = {
    "choco": {
        "executable": "choco",
        "list_args": ["list"],
    },
    "winget": {
        "executable": "winget",
    },
    "migration": {
        "log_level": "INFO",
        "auto_accept": False,
        "dry_run": False,
        "require_admin": True,
        "skip_packages": [
            "chocolatey",
            "chocolatey-core.extension",
            "chocolatey-compatibility.extension",
            "chocolatey-windowsupdate.extension",
        ],
        "report_path": None,
        "command_timeout": None,
    },
}

LOG_LEVELS = ("DEBUG", "INFO", "NOTICE", "WARNING", "ERROR", "CRITICAL", "SUCCESS")

# Keys whose values are argument lists; env values are split on commas or whitespace
LIST_KEYS = frozenset({"list_args"})


def is_test_environment() -> bool:
    """Detect if code is running in a test environment.

    Returns:
        bool: True if running under pytest or with C2W_TEST_MODE set

    """
    if "PYTEST_CURRENT_TEST" in os.environ:
        return True

    return os.environ.get("C2W_TEST_MODE", "").lower() in ("true", "1", "yes")


class ConfigLoader:
    """Loads configuration from defaults, a YAML file and environment variables."""

    def __init__(self, config_file_path: Path | None = None) -> None:
        """Initialize the configuration loader.

        Args:
            config_file_path: Path to the YAML configuration file. Defaults to
                C2W_CONFIG_FILE or config/config.yaml next to the package.

        """
        self._load_environment_configuration()

        if config_file_path is None:
            config_file_path = Path(
                os.environ.get("C2W_CONFIG_FILE", str(DEFAULT_CONFIG_FILE)),
            )

        self.config: Config = copy.deepcopy(DEFAULT_CONFIG)
        self._merge(self._load_yaml_config(config_file_path))

        self._apply_environment_overrides()

    def _load_environment_configuration(self) -> None:
        """Load environment variables from .env files based on execution context.

        Later files override values from earlier files:
        .env, .env.local, then .env.test and .env.test.local in test mode.
        """
        load_dotenv(".env")

        candidates = [".env.local"]
        if is_test_environment():
            config_logger.debug("Running in test environment")
            candidates += [".env.test", ".env.test.local"]

        for env_file in candidates:
            if Path(env_file).exists():
                load_dotenv(env_file, override=True)
                config_logger.debug("Loaded environment overrides from %s", env_file)

    def _load_yaml_config(self, config_file_path: Path) -> dict[str, Any]:
        """Load configuration from YAML file.

        A missing file is not an error; the built-in defaults apply.
        """
        try:
            with config_file_path.open("r", encoding="utf-8") as config_file:
                loaded = yaml.safe_load(config_file) or {}
        except FileNotFoundError:
            config_logger.debug("Config file not found, using defaults: %s", config_file_path)
            return {}

        if not isinstance(loaded, dict):
            msg = f"Config file must contain a mapping: {config_file_path}"
            raise ValueError(msg)
        return loaded

    def _merge(self, overrides: dict[str, Any]) -> None:
        for section, values in overrides.items():
            if section not in self.config:
                config_logger.warning("Ignoring unknown config section: %s", section)
                continue
            if not isinstance(values, dict):
                msg = f"Config section '{section}' must be a mapping"
                raise ValueError(msg)
            for key, value in values.items():
                if key in LIST_KEYS and isinstance(value, str):
                    value = self._convert_env_value(key, value)
                self.config[section][key] = value  # type: ignore[literal-required]

    def _apply_environment_overrides(self) -> None:
        """Override configuration settings with C2W_* environment variables."""
        migration = self.config["migration"]

        for env_var, env_value in os.environ.items():
            if not env_var.startswith("C2W_"):
                continue

            match env_var.split("_"):
                case ["C2W", "LOG", "LEVEL"]:
                    log_level = env_value.upper()
                    if log_level in LOG_LEVELS:
                        migration["log_level"] = log_level  # type: ignore[typeddict-item]
                    config_logger.debug("Applied log level: %s", log_level)

                case ["C2W", "CHOCO", *rest] if rest:
                    key = "_".join(rest).lower()
                    self.config["choco"][key] = self._convert_env_value(key, env_value)  # type: ignore[literal-required]
                    config_logger.debug("Applied Chocolatey config: %s=%s", key, env_value)

                case ["C2W", "WINGET", *rest] if rest:
                    key = "_".join(rest).lower()
                    self.config["winget"][key] = self._convert_env_value(key, env_value)  # type: ignore[literal-required]
                    config_logger.debug("Applied winget config: %s=%s", key, env_value)

                case ["C2W", "SKIP", "PACKAGES"]:
                    migration["skip_packages"] = [
                        name.strip() for name in env_value.split(",") if name.strip()
                    ]
                    config_logger.debug("Applied skip packages: %s", env_value)

                case ["C2W", "AUTO", "ACCEPT"]:
                    migration["auto_accept"] = self._convert_bool(env_value)

                case ["C2W", "DRY", "RUN"]:
                    migration["dry_run"] = self._convert_bool(env_value)

                case ["C2W", "REQUIRE", "ADMIN"]:
                    migration["require_admin"] = self._convert_bool(env_value)

                case ["C2W", "COMMAND", "TIMEOUT"]:
                    migration["command_timeout"] = int(env_value) if env_value else None

                case ["C2W", "REPORT", "PATH"]:
                    migration["report_path"] = env_value or None

    def _convert_bool(self, value: str) -> bool:
        return value.strip().lower() not in ("false", "0", "no", "n", "f", "")

    def _convert_env_value(self, key: str, value: str) -> ConfigValue:
        if key in LIST_KEYS:
            return [part for part in re.split(r"[,\s]+", value) if part]
        return self._convert_value(value)

    def _convert_value(self, value: str) -> ConfigValue:
        """Convert string value to appropriate type."""
        if value.isdigit():
            return int(value)

        match value.lower():
            case "true" | "yes" | "y":
                return True
            case "false" | "no" | "n":
                return False
            case _:
                return value

    def get_config(self) -> Config:
        return self.config

    def get_choco_config(self) -> ChocoConfig:
        return self.config["choco"]

    def get_winget_config(self) -> WingetConfig:
        return self.config["winget"]

    def get_migration_config(self) -> MigrationConfig:
        return self.config["migration"]

    def get_value(self, section: SectionName, key: str, default: Any = None) -> Any:
        """Get a specific configuration value.

        Args:
            section: Configuration section (choco, winget, migration)
            key: Configuration key
            default: Default value if not found

        """
        return self.config[section].get(key, default)
