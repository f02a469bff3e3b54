"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class NixorgConfig:
    """Configuration for converting a note archive to Org files.

    Attributes:
        extension: File extension of the generated note files.
        startup: Value of the ``#+STARTUP:`` directive in every header.
        date_format: ``strftime`` format used for the ``#+DATE:`` line.
        evernote_url: Whether to add the ``#+EVERNOTE_URL:`` deep link.
        max_file_size: Maximum archive size in bytes that will be processed.

    Examples:
        NixorgConfig(extension=".txt", evernote_url=False)
    """

    # Output
    extension: str = ".org"

    # Header
    startup: str = "showall"
    date_format: str = "%Y-%m-%d %H:%M:%S %z %Z"
    evernote_url: bool = True

    # Limits
    max_file_size: int = 2 * 1024 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`extension` must start with a dot")
    """


def load_config(search_path: Path) -> NixorgConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.nixorg]`` table from `pyproject.toml` and the ``[nixorg]`` or
    ``[tool.nixorg]`` table from `.nixorg.toml` when present. Returns default
    values when no configuration is found. TOML files that cannot be read or
    decoded are skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        NixorgConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("exports"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "nixorg")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".nixorg.toml",
            table_paths=[("nixorg",), ("tool", "nixorg")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return NixorgConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> NixorgConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> NixorgConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return NixorgConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return NixorgConfig()

    try:
        return NixorgConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: NixorgConfig) -> None:
    """Validate a `NixorgConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If the extension is malformed, the startup directive or
            date format is empty, flags are not booleans, or the size limit is
            not a positive integer.

    Examples:
        validate_config(NixorgConfig(extension=".org"))
    """
    if not isinstance(config.extension, str) or not config.extension.startswith("."):
        raise ConfigError("`extension` must start with a dot")
    if len(config.extension) < 2 or any(char in config.extension for char in "/\\ "):
        raise ConfigError("`extension` must be a plain file suffix such as `.org`")

    if not isinstance(config.startup, str) or not config.startup.strip():
        raise ConfigError("`startup` must not be empty")
    if not isinstance(config.date_format, str) or not config.date_format:
        raise ConfigError("`date_format` must not be empty")
    if not isinstance(config.evernote_url, bool):
        raise ConfigError("`evernote_url` must be a boolean")

    _ensure_integers({"max_file_size": config.max_file_size})
    _ensure_positive({"max_file_size": config.max_file_size})


def apply_overrides(config: NixorgConfig, **overrides: object) -> NixorgConfig:
    """Apply override values to a `NixorgConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        NixorgConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `NixorgConfig`.

    Examples:
        updated = apply_overrides(config, extension=".txt", startup=None)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> NixorgConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        NixorgConfig: Validated configuration ready for conversion.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), evernote_url=False)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
