"""Configuration system for file-inventory application.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. Every section is optional; an
empty file yields the built-in defaults.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from file_inventory.core.data.filesystem.exclusions import DEFAULT_EXCLUSION_RULES, ExclusionRules

# Matches ${VARIABLE_NAME} references
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")


class ScanConfig(BaseModel):
    """Configuration for tree scanning behavior."""

    max_depth: Annotated[
        int,
        Field(
            ge=1,
            description="Depth limit below the scan root, root children are at depth 1",
        ),
    ] = 1
    follow_symlinks: Annotated[
        bool,
        Field(
            description="Follow symbolic links while scanning (no loop detection)",
        ),
    ] = False
    max_workers: Annotated[
        int,
        Field(
            ge=1,
            description="Worker threads for folder size aggregation",
        ),
    ] = 1


class ExclusionsConfig(BaseModel):
    """Additions to the built-in exclusion tables.

    Entries are added to the defaults; the built-in tables cannot be
    shrunk from configuration.
    """

    names: Annotated[
        list[str],
        Field(description="Exact file or directory names to exclude"),
    ] = []
    extensions: Annotated[
        list[str],
        Field(description="File extensions to exclude, with or without leading dot"),
    ] = []
    visible_dotfiles: Annotated[
        list[str],
        Field(description="Hidden names that stay visible"),
    ] = []

    @field_validator("names", "extensions", mode="after")
    @classmethod
    def validate_not_blank(cls, v: list[str]) -> list[str]:
        """Reject empty or whitespace-only entries.

        Args:
            v: Configured names or extensions

        Returns:
            Validated entries

        Raises:
            ValueError: If an entry is blank
        """
        for item in v:
            if not item.strip():
                msg = "Exclusion entries must not be blank"
                raise ValueError(msg)
        return v

    @field_validator("visible_dotfiles", mode="after")
    @classmethod
    def validate_dotfile_names(cls, v: list[str]) -> list[str]:
        """Validate that allow-listed names are hidden names.

        Raises:
            ValueError: If a name does not start with a dot
        """
        for name in v:
            if not name.startswith(".") or name.startswith("._"):
                msg = f"Visible dotfile must start with a single '.', got: {name!r}"
                raise ValueError(msg)
        return v


class ApplicationConfig(BaseModel):
    """Configuration for application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "INFO"
    syslog_enabled: Annotated[
        bool,
        Field(
            description="Enable syslog integration",
        ),
    ] = False


class MainConfig(BaseModel):
    """Main application configuration schema.

    Top-level configuration container aggregating all configuration sections:
    - scan: Depth limit and traversal settings
    - exclusions: Additions to the built-in exclusion tables
    - application: Application-level settings
    """

    scan: Annotated[
        ScanConfig,
        Field(description="Tree scanning configuration"),
    ] = ScanConfig()
    exclusions: Annotated[
        ExclusionsConfig,
        Field(description="Exclusion table additions"),
    ] = ExclusionsConfig()
    application: Annotated[
        ApplicationConfig,
        Field(description="Application-level configuration"),
    ] = ApplicationConfig()

    def exclusion_rules(self) -> ExclusionRules:
        """Build the immutable exclusion rules for this configuration.

        Returns:
            The built-in rules, extended with the configured additions
        """
        return DEFAULT_EXCLUSION_RULES.extended(
            names=self.exclusions.names,
            extensions=self.exclusions.extensions,
            visible_dotfiles=self.exclusions.visible_dotfiles,
        )


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails."""


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails.

    Carries detailed, actionable error messages for missing files, YAML
    parsing errors and validation failures.
    """


def resolve_env_var(value: str) -> str:
    """Resolve ${VARIABLE_NAME} references in a string value.

    Args:
        value: String potentially containing environment variable references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing

    Examples:
        >>> os.environ["SCAN_ROOT"] = "/data"
        >>> resolve_env_var("${SCAN_ROOT}/projects")
        '/data/projects'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable before starting the application."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Recursively resolve environment variables in a dictionary.

    Traverses nested dictionaries and lists, resolving environment variable
    references in string values. Non-string values are preserved as-is.

    Args:
        data: Dictionary potentially containing environment variable references

    Returns:
        New dictionary with environment variables resolved

    Raises:
        EnvironmentVariableError: If a required environment variable is missing
    """
    result: dict[str, object] = {}

    for key, value in data.items():
        if isinstance(value, str):
            result[key] = resolve_env_var(value)
        elif isinstance(value, dict):
            # YAML data is untyped at load time; validated by Pydantic after resolution
            result[key] = resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
        elif isinstance(value, list):
            resolved_list: list[object] = []
            for item in value:  # pyright: ignore[reportUnknownVariableType]  # YAML list items
                if isinstance(item, str):
                    resolved_list.append(resolve_env_var(item))
                elif isinstance(item, dict):
                    resolved_list.append(resolve_env_vars_in_dict(item))  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
                else:
                    resolved_list.append(item)  # pyright: ignore[reportUnknownArgumentType]  # YAML primitives
            result[key] = resolved_list
        else:
            result[key] = value

    return result


def load_main_config(config_path: Path) -> MainConfig:
    """Load and validate application configuration from a YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated MainConfig instance; an empty file yields the defaults

    Raises:
        ConfigurationError: If configuration file cannot be loaded or is invalid

    Examples:
        >>> config = load_main_config(Path("file-inventory.yaml"))
        >>> config.scan.max_depth
        2
    """
    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Please create a configuration file at this location or omit --config."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    if raw_data is None:
        raw_data = {}

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = (
            f"Environment variable resolution failed in: {config_path}\n"
            f"{e}\n"
            f"Set the required environment variable before starting the application."
        )
        raise ConfigurationError(msg) from e

    try:
        config = MainConfig.model_validate(resolved_data)
    except ValidationError as e:
        error_lines = ["Configuration validation failed:", ""]
        for error in e.errors():
            field_path = " → ".join(str(loc) for loc in error["loc"])
            error_lines.append(f"  Field: {field_path}")
            error_lines.append(f"  Error: {error['msg']}")
            error_lines.append(f"  Type: {error['type']}")
            error_lines.append("")

        error_lines.append(f"Configuration file: {config_path}")
        error_lines.append("Please fix the above errors and try again.")

        raise ConfigurationError("\n".join(error_lines)) from e

    return config
