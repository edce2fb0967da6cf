"""Configuration loading and management."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
import tomllib

# Characters that would break the begin/end literal grammar.
_FORBIDDEN_NAME_CHARS = frozenset("{}[]\\")


@dataclass
class EnvBlocksConfig:
    """Configuration for scanning environment blocks.

    Attributes:
        named_env: Environment name of the named block (``\\begin{<name>}[title]``).
        list_env: Environment name of the ordered-list block.
        item_marker: Literal that marks one item inside an ordered list.
        default_format: Numbering format applied to list blocks that carry no
            bracket argument (for example ``"a)"``). Empty means decimal.
        max_file_size: Maximum file size in bytes that will be processed.

    Examples:
        EnvBlocksConfig(named_env="theorem", default_format="(i)")
    """

    # Environments
    named_env: str = "questionenv"
    list_env: str = "enumerate"
    item_marker: str = "\\item"

    # Numbering
    default_format: str = ""

    # Limits
    max_file_size: int = 10 * 1024 * 1024


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`named_env` must not be empty")
    """


# Config files looked up in each directory, with the tables read from them.
_CONFIG_SOURCES = (
    ("pyproject.toml", (("tool", "env-blocks"),)),
    (".env-blocks.toml", (("env-blocks",), ("tool", "env-blocks"))),
)


def load_config(search_path: Path) -> EnvBlocksConfig:
    """Load configuration from the nearest config file.

    Walks from `search_path` up to the filesystem root. In each directory the
    ``[tool.env-blocks]`` table of `pyproject.toml` wins over the
    ``[env-blocks]`` (or ``[tool.env-blocks]``) table of `.env-blocks.toml`.
    The first table found is used as-is, even when empty; unreadable TOML is
    skipped.

    Raises:
        ConfigError: If the table is not a mapping or has unknown keys.

    Examples:
        load_config(Path("notes"))
    """
    directory = search_path.resolve()
    for candidate in (directory, *directory.parents):
        for filename, table_paths in _CONFIG_SOURCES:
            config_file = candidate / filename
            table = _read_table(config_file, table_paths)
            if table is None:
                continue
            if not isinstance(table, dict):
                raise ConfigError(f"Invalid env-blocks settings in {config_file}")
            try:
                return EnvBlocksConfig(**table)
            except TypeError as error:
                raise ConfigError(f"Invalid env-blocks settings in {config_file}") from error

    return EnvBlocksConfig()


def _read_table(config_file: Path, table_paths: tuple[tuple[str, ...], ...]) -> object | None:
    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        table: object = data
        for key in table_path:
            if not isinstance(table, dict) or key not in table:
                break
            table = table[key]
        else:
            return table
    return None


def validate_config(config: EnvBlocksConfig) -> None:
    """Validate an `EnvBlocksConfig` instance.

    Raises:
        ConfigError: If environment names are empty, contain delimiter
            characters or collide, the item marker is empty, the default
            format is not recognized, or the size limit is not a positive
            integer.

    Examples:
        validate_config(EnvBlocksConfig(list_env="itemize"))
    """
    # formats -> constants -> config
    from .formats import is_recognized_format

    for key in ("named_env", "list_env", "item_marker", "default_format"):
        if not isinstance(getattr(config, key), str):
            raise ConfigError(f"`{key}` must be a string")

    for key in ("named_env", "list_env"):
        value = getattr(config, key)
        if not value.strip():
            raise ConfigError(f"`{key}` must not be empty")
        if value != value.strip() or _FORBIDDEN_NAME_CHARS.intersection(value):
            raise ConfigError(f"`{key}` must not contain whitespace padding or any of: {{ }} [ ] \\")

    if config.named_env == config.list_env:
        raise ConfigError("`named_env` and `list_env` must differ")

    if not config.item_marker:
        raise ConfigError("`item_marker` must not be empty")

    if config.default_format.strip() and not is_recognized_format(config.default_format):
        raise ConfigError(f"`default_format` is not a recognized format: {config.default_format!r}")

    size = config.max_file_size
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ConfigError("`max_file_size` must be a positive integer")


def build_config(search_path: Path, **overrides: object) -> EnvBlocksConfig:
    """Load configuration, apply non-None overrides, and validate.

    Raises:
        ConfigError: If loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), list_env="steps", named_env=None)
    """
    config = load_config(search_path)
    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        config = replace(config, **changes)
    validate_config(config)
    return config
