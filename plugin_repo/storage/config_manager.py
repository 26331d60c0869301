"""
Manages loading, validation, and migration of the INI configuration file.
"""

import configparser
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from plugin_repo.exceptions import ConfigurationError
from plugin_repo.models.config import RepositoryConfig

log = logging.getLogger(__name__)


class ConfigManager:
    """Handles all operations related to the application's INI config file."""

    def __init__(self, config_file_path: Path):
        self.config_file_path = config_file_path
        self._parser = configparser.ConfigParser(interpolation=None)

    def load_config(
        self, cli_options: dict[str, Any] | None = None
    ) -> RepositoryConfig:
        """
        Loads configuration from the INI file, applies CLI overrides, and validates it.

        A missing file is not an error: the defaults are used.

        Args:
            cli_options: A dictionary of options provided via the command line.
                Entries whose value is None are ignored.

        Raises:
            ConfigurationError: If the file cannot be parsed or validation fails.
        """
        config_from_file: dict[str, Any] = {}
        if self.config_file_path.is_file():
            try:
                self._parser.read(self.config_file_path, encoding="utf-8")
            except configparser.Error as e:
                raise ConfigurationError(
                    f"Error parsing configuration file: {e}"
                ) from e

            if self._migrate_if_needed():
                log.info(
                    "[yellow]Configuration file was updated with new default values."
                    "[/yellow]"
                )
            config_from_file = self._get_config_as_dict()
        else:
            log.debug(
                f"No configuration file at '{self.config_file_path}', using defaults."
            )

        if cli_options:
            config_from_file.update(
                {k: v for k, v in cli_options.items() if v is not None}
            )

        try:
            return RepositoryConfig(**config_from_file)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

    def save_new_config(self, settings: dict[str, Any]) -> RepositoryConfig:
        """
        Validates `settings` and writes them, with defaults for the rest, to disk.
        """
        try:
            validated = RepositoryConfig(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed:\n{e}") from e

        config = configparser.ConfigParser(interpolation=None)
        config["DEFAULT"] = {
            key: self._to_ini_value(getattr(validated, key))
            for key in sorted(RepositoryConfig.get_ini_keys())
        }

        try:
            self.config_file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_file_path, "w", encoding="utf-8") as configfile:
                config.write(configfile)
        except OSError as e:
            raise ConfigurationError(f"Failed to save configuration file: {e}") from e
        return validated

    def _get_config_as_dict(self) -> dict[str, Any]:
        """Reads the 'DEFAULT' section of the INI file into a dictionary."""
        section = self._parser["DEFAULT"]
        defaults = RepositoryConfig()
        try:
            return {
                "repo_url": section.get("repo_url", defaults.repo_url),
                "api_root": section.get("api_root", defaults.api_root),
                "skip_tls_verify": section.getboolean(
                    "skip_tls_verify", defaults.skip_tls_verify
                ),
                "request_timeout": section.getfloat(
                    "request_timeout", defaults.request_timeout
                ),
                "max_attempts": section.getint("max_attempts", defaults.max_attempts),
                "base_delay": section.getfloat("base_delay", defaults.base_delay),
            }
        except ValueError as e:
            raise ConfigurationError(f"Invalid value in configuration file: {e}") from e

    @staticmethod
    def _to_ini_value(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def _migrate_if_needed(self) -> bool:
        """Adds missing default values to an existing config file."""
        defaults = RepositoryConfig()
        needs_saving = False

        config_section = self._parser["DEFAULT"]

        for key in sorted(RepositoryConfig.get_ini_keys()):
            if key not in config_section:
                config_section[key] = self._to_ini_value(getattr(defaults, key))
                needs_saving = True
                log.debug(
                    f"Migrating config: added missing key '{key}' with "
                    f"value '{config_section[key]}'."
                )

        if needs_saving:
            try:
                with open(self.config_file_path, "w", encoding="utf-8") as f:
                    self._parser.write(f)
            except OSError as e:
                log.error(f"Could not save migrated configuration file: {e}")
                return False

        return needs_saving
