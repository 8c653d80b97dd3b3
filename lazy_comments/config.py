"""Configuration loading and management."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from pathlib import Path
import tomllib


@dataclass
class DocConfig:
    """Configuration for scanning comments and rendering them.

    Attributes:
        key_pattern: Regular expression alternation of accepted attribute keys.
        default_scope: Scope name used for declarations that omit one
            (``::key value``). None keeps them under the empty scope name.
        wrap_cols: Column width used when wrapping rendered comments.
        tabsize: Number of spaces each tab expands to when wrapping.
        max_file_size: Maximum file size in bytes that will be read.

    Examples:
        DocConfig(key_pattern="key|alt", wrap_cols=60)
    """

    # Scanning
    key_pattern: str = "[a-z_]+"
    default_scope: str | None = None

    # Rendering
    wrap_cols: int = 80
    tabsize: int = 2

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`wrap_cols` must be a positive integer")
    """


def load_config(search_path: Path) -> DocConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.lazy-comments]`` table from `pyproject.toml` and the
    ``[lazy-comments]`` or ``[tool.lazy-comments]`` table from
    `.lazy-comments.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        DocConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but is not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("src"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "lazy-comments")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".lazy-comments.toml",
            table_paths=[("lazy-comments",), ("tool", "lazy-comments")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return DocConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> DocConfig | None:
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
) -> DocConfig:
    table_display = ".".join(table_path)

    if raw_config is None:
        return DocConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    if not raw_config:
        return DocConfig()

    try:
        return DocConfig(**raw_config)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def normalize_config(config: DocConfig) -> DocConfig:
    """Return `config` with an empty default scope collapsed to None."""
    default_scope = config.default_scope
    if isinstance(default_scope, str) and not default_scope.strip():
        default_scope = None
    return replace(config, default_scope=default_scope)


def validate_config(config: DocConfig) -> None:
    """Validate a `DocConfig` instance.

    Args:
        config: Configuration to validate.

    Returns:
        None.

    Raises:
        ConfigError: If the key pattern is empty or does not compile, the default
            scope is not a string, or numeric values are not positive integers.

    Examples:
        validate_config(DocConfig(key_pattern="key|alt"))
    """
    config = normalize_config(config)

    _ensure_integers(
        {
            "wrap_cols": config.wrap_cols,
            "tabsize": config.tabsize,
            "max_file_size": config.max_file_size,
        }
    )
    _ensure_positive(
        {
            "wrap_cols": config.wrap_cols,
            "tabsize": config.tabsize,
            "max_file_size": config.max_file_size,
        }
    )

    if not isinstance(config.key_pattern, str) or not config.key_pattern:
        raise ConfigError("`key_pattern` must be a non-empty string")
    try:
        re.compile(config.key_pattern)
    except re.error as error:
        raise ConfigError(f"`key_pattern` is not a valid regular expression: {error}") from error

    if config.default_scope is not None and not isinstance(config.default_scope, str):
        raise ConfigError("`default_scope` must be a string")


def apply_overrides(config: DocConfig, **overrides: object) -> DocConfig:
    """Apply override values to a `DocConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        DocConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `DocConfig`.
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> DocConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        DocConfig: Validated configuration ready for scanning.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), key_pattern="key|alt", wrap_cols=60)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    config = normalize_config(config)
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
