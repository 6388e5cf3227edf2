"""
Configuration System

YAML configuration for the LibreClaw prompt engine. Features:
- Single-file YAML loading with environment resolution
- Optional .env loading from the working directory
- Dot-path access to nested settings
- Per-path caching plus a default singleton (CONFIG_FILE or cwd/config.yml)

The prompt engine itself never requires a config file; callers that do not
ship one simply pass customization values directly.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

# Use standard logging (not get_logger) to avoid circular imports with logger.py
# The short name 'CONFIG' enables easy filtering in the CLI
logger = logging.getLogger("CONFIG")


class ConfigBuilder:
    """
    Configuration builder for LibreClaw.

    Features:
    - Single-file YAML loading with validation and error handling
    - Environment variable resolution
    - Explicit failure when no config file can be located
    """

    def __init__(self, config_path: str | None = None):
        """
        Initialize configuration builder.

        Args:
            config_path: Path to the config.yml file. If None, looks in current directory.

        Raises:
            FileNotFoundError: If config.yml is not found and no path is provided.
        """
        # Load .env file from current working directory so ${VAR} references resolve
        dotenv_path = Path.cwd() / ".env"
        if dotenv_path.exists():
            load_dotenv(dotenv_path, override=False)  # Don't override existing env vars
            logger.debug(f"Loaded .env file from {dotenv_path}")
        else:
            logger.debug(f"No .env file found at {dotenv_path}")

        if config_path is None:
            cwd_config = Path.cwd() / "config.yml"
            if cwd_config.exists():
                config_path = cwd_config
            else:
                raise FileNotFoundError(
                    f"No config.yml found in current directory: {Path.cwd()}\n\n"
                    f"Please run this command from a directory containing config.yml,\n"
                    f"or set CONFIG_FILE environment variable to point to your config file.\n\n"
                    f"Example: export CONFIG_FILE=/path/to/your/config.yml"
                )

        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        self.raw_config = self._load_config()

    def _load_yaml_file(self, file_path: Path) -> dict[str, Any]:
        """Load and validate a YAML configuration file."""
        try:
            with open(file_path) as f:
                config = yaml.safe_load(f)

            if config is None:
                logger.warning(f"Configuration file is empty: {file_path}")
                return {}

            if not isinstance(config, dict):
                error_msg = f"Configuration file must contain a dictionary/mapping: {file_path}"
                logger.error(error_msg)
                raise ValueError(error_msg)

            logger.debug(f"Loaded configuration from {file_path}")
            return config
        except yaml.YAMLError as e:
            error_msg = f"Error parsing YAML configuration: {e}"
            logger.error(error_msg)
            raise yaml.YAMLError(error_msg) from e

    def _resolve_env_vars(self, data: Any) -> Any:
        """Recursively resolve environment variables in configuration data.

        Supports both simple and bash-style default value syntax:
        - ${VAR_NAME} - simple substitution
        - ${VAR_NAME:-default_value} - with default value
        - $VAR_NAME - simple substitution without braces
        """
        if isinstance(data, dict):
            return {key: self._resolve_env_vars(value) for key, value in data.items()}
        elif isinstance(data, list):
            return [self._resolve_env_vars(item) for item in data]
        elif isinstance(data, str):

            def replace_env_var(match):
                if match.group(1):  # ${VAR_NAME:-default} or ${VAR_NAME}
                    var_name = match.group(1)
                    default_value = match.group(2) if match.group(2) is not None else None
                else:  # $VAR_NAME
                    var_name = match.group(3)
                    default_value = None

                env_value = os.environ.get(var_name)
                if env_value is None:
                    if default_value is not None:
                        return default_value
                    if not os.environ.get("LIBRECLAW_QUIET"):
                        logger.info(
                            f"Environment variable '{var_name}' not found, keeping original value"
                        )
                    return match.group(0)
                return env_value

            pattern = r"\$\{([^}:]+)(?::-(.*?))?\}|\$([A-Za-z_][A-Za-z0-9_]*)"
            return re.sub(pattern, replace_env_var, data)
        else:
            return data

    def _load_config(self) -> dict[str, Any]:
        """Load the config file and resolve environment variable placeholders."""
        config = self._resolve_env_vars(self._load_yaml_file(self.config_path))
        logger.info(f"Loaded configuration from {self.config_path}")
        return config

    def get(self, path: str, default: Any = None) -> Any:
        """Get configuration value using dot notation path."""
        keys = path.split(".")
        value = self.raw_config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default


# =============================================================================
# GLOBAL CONFIGURATION
# =============================================================================

_default_config: ConfigBuilder | None = None

# Per-path config cache for explicit config paths
_config_cache: dict[str, ConfigBuilder] = {}


def _get_config(config_path: str | None = None, set_as_default: bool = False) -> ConfigBuilder:
    """Get configuration instance (singleton pattern with optional explicit path).

    Args:
        config_path: Optional explicit path to configuration file. If provided,
                    this path is used instead of the default singleton behavior.
        set_as_default: If True and config_path is provided, also set this config as the
                       default singleton so future calls without config_path use it.

    Returns:
        ConfigBuilder instance for the specified or default configuration
    """
    global _default_config

    if config_path is None:
        if _default_config is None:
            config_file = os.environ.get("CONFIG_FILE")
            if config_file:
                _default_config = ConfigBuilder(config_file)
            else:
                _default_config = ConfigBuilder()
            logger.info("Initialized default configuration system")

        return _default_config

    resolved_path = str(Path(config_path).expanduser().resolve())

    if resolved_path not in _config_cache:
        logger.info(f"Loading configuration from explicit path: {resolved_path}")
        _config_cache[resolved_path] = ConfigBuilder(resolved_path)

    if set_as_default:
        _default_config = _config_cache[resolved_path]
        logger.debug(f"Set explicit config as default: {resolved_path}")

    return _config_cache[resolved_path]


def reset_config_cache() -> None:
    """Forget the default configuration and every cached explicit path.

    Used by long-running processes after the config file changed on disk,
    and by tests that point CONFIG_FILE at temporary files.
    """
    global _default_config
    _default_config = None
    _config_cache.clear()


# =============================================================================
# PUBLIC CONFIGURATION ACCESS
# =============================================================================


def get_config_builder(
    config_path: str | None = None, set_as_default: bool = False
) -> ConfigBuilder:
    """Get configuration builder instance for full config access.

    Args:
        config_path: Optional explicit path to configuration file. If None, uses the
                    default singleton (CONFIG_FILE env var or cwd/config.yml).
        set_as_default: If True and config_path is provided, also set this config
                       as the default singleton for future calls without config_path.

    Returns:
        ConfigBuilder instance with access to:
        - .raw_config: The raw YAML configuration dictionary
        - .get(path, default): Dot-notation access to config values

    Examples:
        >>> config = get_config_builder("/path/to/config.yml")
        >>> prompt_cfg = config.get("agents.defaults.systemPrompt", {})
    """
    return _get_config(config_path, set_as_default)


def get_config_value(path: str, default: Any = None, config_path: str | None = None) -> Any:
    """
    Get a specific configuration value by dot-separated path.

    Args:
        path: Dot-separated configuration path (e.g., "agents.defaults.workspace")
        default: Default value to return if path is not found
        config_path: Optional explicit path to configuration file

    Returns:
        The configuration value at the specified path, or default if not found

    Raises:
        ValueError: If path is empty or None
        FileNotFoundError: If no configuration file can be located

    Examples:
        >>> mode = get_config_value("agents.defaults.systemPrompt.mode", "default")
        >>> show_all = get_config_value("development.prompts.show_all", False)
    """
    if not path:
        raise ValueError("Configuration path cannot be empty or None")

    return _get_config(config_path).get(path, default)


def get_agent_dir(sub_dir: str, config_path: str | None = None) -> str:
    """
    Get the absolute path of a data subdirectory.

    The subdirectory is looked up under ``development`` first (e.g.
    ``development.prompts_dir``), then ``file_paths``; if neither is set the
    name itself is used relative to ``file_paths.agent_data_dir``.

    Args:
        sub_dir: Subdirectory key (e.g., 'prompts_dir')
        config_path: Optional explicit path to configuration file

    Returns:
        Absolute path to the target directory
    """
    config = _get_config(config_path)

    project_root = config.get("project_root")
    file_paths = config.get("file_paths", {}) or {}
    agent_data_dir = file_paths.get("agent_data_dir", "_agent_data")

    sub_dir_path = config.get(f"development.{sub_dir}") or file_paths.get(sub_dir)
    if sub_dir_path is None:
        sub_dir_path = str(Path(agent_data_dir) / sub_dir)
        logger.debug(f"Using fallback path for {sub_dir}: {sub_dir_path}")

    path = Path(sub_dir_path).expanduser()
    if not path.is_absolute():
        if project_root:
            path = Path(project_root).expanduser() / path
        else:
            logger.debug("No project root configured, resolving against current directory")
            path = path.resolve()

    return str(path)

